from typing import Any, Literal, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .models import CATEGORY_MAX_LENGTH

# Request schemas and the functions that turn raw query/path values into them.

SORT_OPTIONS = ("name_asc", "name_desc", "category", "date_created", "popularity")
VIEW_MODES = ("grid", "list", "compact")
PAGE_SIZES = (12, 24, 36, 48)

DEFAULT_SORT = "date_created"
DEFAULT_VIEW = "grid"
DEFAULT_PAGE_SIZE = 12

SortOption = Literal["name_asc", "name_desc", "category", "date_created", "popularity"]
ViewMode = Literal["grid", "list", "compact"]


class ListQuery(BaseModel):
    model_config = ConfigDict(extra="ignore")

    category: Optional[str] = None
    sort: SortOption = DEFAULT_SORT
    page: int = Field(default=1, gt=0)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, alias="pageSize")
    view: ViewMode = DEFAULT_VIEW

    @field_validator("page_size")
    @classmethod
    def _allowed_page_size(cls, value: int) -> int:
        if value not in PAGE_SIZES:
            raise ValueError("Page size must be 12, 24, 36, or 48")
        return value


class IdParams(BaseModel):
    id: int = Field(gt=0)


class CategoryParams(BaseModel):
    category: str = Field(min_length=1, max_length=CATEGORY_MAX_LENGTH)


M = TypeVar("M", bound=BaseModel)


def _issues(exc: PydanticValidationError) -> list:
    return [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]


def _validate(model: Type[M], raw: Mapping[str, Any], message: str) -> M:
    try:
        return model.model_validate(dict(raw))
    except PydanticValidationError as exc:
        raise ValidationError(message, details=_issues(exc))


def parse_list_query(raw: Optional[Mapping[str, Any]]) -> ListQuery:
    """Validate listing options; absent keys take their defaults."""
    return _validate(ListQuery, raw or {}, "Invalid query parameters")


def parse_id_params(raw: Mapping[str, Any]) -> IdParams:
    return _validate(IdParams, raw, "Invalid ID")


def parse_category_params(raw: Mapping[str, Any]) -> CategoryParams:
    return _validate(CategoryParams, raw, "Invalid category")

