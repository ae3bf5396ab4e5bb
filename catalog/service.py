import math
import unicodedata
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .core import ListQuery, parse_category_params, parse_id_params, parse_list_query
from .database import ProductStore
from .errors import NotFound
from .logger import get_logger
from .models import ProductDetail, ProductListItem, ProductListResult, ProductRecord

# This file contains the catalog listing pipeline and the lookup logic
# behind every product endpoint.

logger = get_logger("service")

NEW_PRODUCT_DAYS = 30


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------
# Response shaping
# ---------------------------
def is_new_product(date_created: datetime, now: datetime, days: int = NEW_PRODUCT_DAYS) -> bool:
    return now - date_created <= timedelta(days=days)


def to_list_item(record: ProductRecord, now: datetime, days: int = NEW_PRODUCT_DAYS) -> ProductListItem:
    return ProductListItem(
        id=record.id,
        name=record.name,
        code=record.code,
        category=record.category,
        primary_image=record.primary_image,
        featured=record.featured,
        is_new=is_new_product(record.date_created, now, days),
        on_promotion=record.on_promotion,
    )


def to_detail(record: ProductRecord, now: datetime, days: int = NEW_PRODUCT_DAYS) -> ProductDetail:
    item = to_list_item(record, now, days)
    return ProductDetail(
        **item.model_dump(),
        discontinued=record.discontinued,
        date_created=record.date_created,
    )


# ---------------------------
# Sorting
# ---------------------------
def collation_key(text: str) -> Tuple[str, str, str]:
    """Sort key that orders text roughly the way a locale collator does.

    Accents and case are ignored first, then accents break ties, then
    case (lowercase before uppercase).
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), decomposed.casefold(), text.swapcase()


def _sort_partition(records: List[ProductRecord], sort: str) -> List[ProductRecord]:
    if sort == "name_asc":
        return sorted(records, key=lambda p: collation_key(p.name))
    if sort == "name_desc":
        return sorted(records, key=lambda p: collation_key(p.name), reverse=True)
    if sort == "category":
        return sorted(records, key=lambda p: (collation_key(p.category), collation_key(p.name)))
    if sort == "date_created":
        return sorted(records, key=lambda p: p.date_created, reverse=True)
    # popularity: no signal is tracked yet, keep the incoming order
    return list(records)


def sort_products(records: List[ProductRecord], sort: str) -> List[ProductRecord]:
    """Featured products first, each group ordered by ``sort``."""
    featured = [p for p in records if p.featured]
    regular = [p for p in records if not p.featured]
    return _sort_partition(featured, sort) + _sort_partition(regular, sort)


# ---------------------------
# Pagination
# ---------------------------
def paginate(records: List[ProductRecord], page: int, page_size: int) -> List[ProductRecord]:
    start = (page - 1) * page_size
    return records[start:start + page_size]


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


# ---------------------------
# Pipeline
# ---------------------------
def run_listing(
    records: List[ProductRecord],
    query: ListQuery,
    now: datetime,
    new_product_days: int = NEW_PRODUCT_DAYS,
) -> ProductListResult:
    # discontinued products never reach the catalog, whatever the filters
    products = [p for p in records if not p.discontinued]

    if query.category:
        products = [p for p in products if p.category == query.category]

    products = sort_products(products, query.sort)

    total = len(products)
    page_slice = paginate(products, query.page, query.page_size)

    return ProductListResult(
        items=[to_list_item(p, now, new_product_days) for p in page_slice],
        total=total,
        page=query.page,
        page_size=query.page_size,
        total_pages=total_pages(total, query.page_size),
    )


# ---------------------------
# Endpoint logic
# ---------------------------
def list_products_logic(
    store: ProductStore,
    raw_query: Optional[Mapping[str, Any]] = None,
    new_product_days: int = NEW_PRODUCT_DAYS,
    clock: Callable[[], datetime] = _utcnow,
) -> ProductListResult:
    query = parse_list_query(raw_query)
    result = run_listing(store.get_all(), query, clock(), new_product_days)
    logger.debug(
        "list category=%r sort=%s page=%d pageSize=%d -> %d of %d",
        query.category, query.sort, query.page, query.page_size, len(result.items), result.total,
    )
    return result


def get_product_logic(
    store: ProductStore,
    raw_params: Mapping[str, Any],
    new_product_days: int = NEW_PRODUCT_DAYS,
    clock: Callable[[], datetime] = _utcnow,
) -> ProductDetail:
    params = parse_id_params(raw_params)
    # direct lookups see discontinued products too
    record = store.get_by_id(params.id)
    if record is None:
        logger.info("product %d not found", params.id)
        raise NotFound("Product not found")
    return to_detail(record, clock(), new_product_days)


def list_by_category_logic(
    store: ProductStore,
    raw_params: Mapping[str, Any],
    raw_query: Optional[Mapping[str, Any]] = None,
    new_product_days: int = NEW_PRODUCT_DAYS,
    clock: Callable[[], datetime] = _utcnow,
) -> ProductListResult:
    params = parse_category_params(raw_params)
    category = params.category

    records = store.get_all()
    # TODO: decide whether categories should match case-insensitively or by slug
    if not any(p.category == category and not p.discontinued for p in records):
        logger.info("no products in category %r", category)
        raise NotFound("No products found in this category")

    query: Dict[str, Any] = dict(raw_query or {})
    query["category"] = category
    parsed = parse_list_query(query)
    return run_listing(records, parsed, clock(), new_product_days)
