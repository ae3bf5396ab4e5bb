# catalog/models.py
from datetime import datetime
from typing import List

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NAME_MAX_LENGTH = 50
CODE_MAX_LENGTH = 50
CATEGORY_MAX_LENGTH = 100


class CamelModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductRecord(CamelModel):
    """A product as the store keeps it.

    Records are immutable; ``ProductStore.update`` swaps in a new instance.
    ``is_new`` is only what the record was created with and is never
    served as-is.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int = Field(gt=0)
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    code: str = Field(default="", max_length=CODE_MAX_LENGTH)
    category: str = Field(max_length=CATEGORY_MAX_LENGTH)
    primary_image: str = ""
    featured: bool = False
    is_new: bool = False
    on_promotion: bool = False
    discontinued: bool = False
    date_created: AwareDatetime
    date_modified: AwareDatetime


class ProductListItem(CamelModel):
    id: int
    name: str
    code: str
    category: str
    primary_image: str
    featured: bool
    is_new: bool
    on_promotion: bool


class ProductDetail(ProductListItem):
    discontinued: bool
    date_created: datetime


class ProductListResult(CamelModel):
    items: List[ProductListItem]
    total: int
    page: int
    page_size: int
    total_pages: int
