import random
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from .errors import CapacityExceeded
from .logger import get_logger
from .models import ProductRecord

# This file holds the in-memory product store and its demo seed data.

logger = get_logger("database")

DEFAULT_MAX_RECORDS = 10000

# Fields the store manages itself; update() refuses them.
_IMMUTABLE_FIELDS = {"id", "date_created", "date_modified"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductStore:
    """Process-memory product records keyed by id.

    Every public method runs under one lock, so capacity checks, id
    assignment and iteration never interleave with a mutation.
    """

    def __init__(self, max_records: int = DEFAULT_MAX_RECORDS, clock: Callable[[], datetime] = _utcnow):
        self.max_records = max_records
        self._clock = clock
        self._records: Dict[int, ProductRecord] = {}
        self._current_id = 0
        self._lock = threading.Lock()

    def _next_id(self) -> int:
        self._current_id += 1
        return self._current_id

    def _insert(self, record: ProductRecord) -> ProductRecord:
        if len(self._records) >= self.max_records:
            raise CapacityExceeded(f"maximum records limit reached ({self.max_records})")
        self._records[record.id] = record
        # keep the counter ahead of ids that were assigned by the caller
        if record.id > self._current_id:
            self._current_id = record.id
        return record

    def next_id(self) -> int:
        with self._lock:
            return self._next_id()

    def add(self, record: ProductRecord) -> ProductRecord:
        with self._lock:
            return self._insert(record)

    def create(self, **fields) -> ProductRecord:
        """Assign an id, stamp dates and insert in a single step."""
        with self._lock:
            if len(self._records) >= self.max_records:
                raise CapacityExceeded(f"maximum records limit reached ({self.max_records})")
            now = self._clock()
            fields.setdefault("date_created", now)
            fields.setdefault("date_modified", fields["date_created"])
            record = ProductRecord(id=self._next_id(), **fields)
            return self._insert(record)

    def get_all(self) -> List[ProductRecord]:
        with self._lock:
            return list(self._records.values())

    def get_by_id(self, product_id: int) -> Optional[ProductRecord]:
        with self._lock:
            return self._records.get(product_id)

    def update(self, product_id: int, **fields) -> Optional[ProductRecord]:
        unknown = set(fields) - set(ProductRecord.model_fields)
        if unknown:
            raise ValueError(f"unknown product fields: {sorted(unknown)}")
        fixed = set(fields) & _IMMUTABLE_FIELDS
        if fixed:
            raise ValueError(f"fields cannot be updated: {sorted(fixed)}")

        with self._lock:
            existing = self._records.get(product_id)
            if existing is None:
                return None
            merged = {**existing.model_dump(), **fields, "date_modified": self._clock()}
            updated = ProductRecord.model_validate(merged)
            self._records[product_id] = updated
            return updated

    def delete(self, product_id: int) -> bool:
        with self._lock:
            return self._records.pop(product_id, None) is not None

    def exists(self, product_id: int) -> bool:
        with self._lock:
            return product_id in self._records

    def count(self) -> int:
        with self._lock:
            return len(self._records)


# ---------------------------
# Seed data
# ---------------------------
SEED_PRODUCTS = [
    {"name": "Premium 3-Seat Sofa", "category": "Living Room", "featured": True},
    {"name": "Extendable Dining Table", "category": "Kitchen", "featured": False},
    {"name": "Queen Size Box Bed", "category": "Bedroom", "featured": True},
    {"name": "Executive Desk", "category": "Office", "featured": False},
    {"name": "Reclining Armchair", "category": "Living Room", "featured": False},
    {"name": "6-Door Wardrobe", "category": "Bedroom", "featured": False},
    {"name": "Ergonomic Office Chair", "category": "Office", "featured": True},
    {"name": "Garden Furniture Set", "category": "Outdoor", "featured": False},
    {"name": "65\" TV Stand", "category": "Living Room", "featured": False},
    {"name": "Modern Sideboard", "category": "Kitchen", "featured": False},
    {"name": "Nightstand with Drawers", "category": "Bedroom", "featured": False},
    {"name": "Bookcase", "category": "Office", "featured": False},
]


def seed_products(
    store: ProductStore,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    new_product_days: int = 30,
) -> List[ProductRecord]:
    rng = rng or random.Random()
    now = now or _utcnow()
    created = []
    for index, product in enumerate(SEED_PRODUCTS, start=1):
        days_ago = rng.randrange(60)
        date_created = now - timedelta(days=days_ago)
        record = store.create(
            name=product["name"],
            code=f"FUR-{index:04d}",
            category=product["category"],
            primary_image=f"/images/products/product-{index}.jpg",
            featured=product["featured"],
            is_new=days_ago <= new_product_days,
            on_promotion=rng.random() > 0.7,
            discontinued=False,
            date_created=date_created,
            date_modified=date_created,
        )
        created.append(record)
    logger.info("Seeded %d products", len(created))
    return created
