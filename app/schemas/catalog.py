"""Schemas for the product lookup tables (categories, companies, car models, subcategories)."""
from typing import List, Optional

from pydantic import BaseModel

from app.schemas.base import BaseCreateSchema, PaginationMeta


class LookupWrite(BaseCreateSchema):
    """
    Body for creating or renaming a lookup row.

    Each table posts its own column name (``category_name``, ``company_name``,
    ``model_name``, ``subcategory_name``); ``name`` is accepted for all of them.
    """
    name: Optional[str] = None
    category_name: Optional[str] = None
    company_name: Optional[str] = None
    model_name: Optional[str] = None
    subcategory_name: Optional[str] = None

    def resolved_name(self, column: str) -> Optional[str]:
        value = getattr(self, column, None) or self.name
        if value is None:
            return None
        value = value.strip()
        return value or None


class LookupItem(BaseModel):
    """Lookup row with its 1-based position in the current listing."""
    id: int
    name: str
    index: Optional[int] = None


class LookupListResponse(BaseModel):
    items: List[LookupItem]
    pagination: PaginationMeta


class FilterOption(BaseModel):
    id: int
    name: str


class ProductFilterOptions(BaseModel):
    categories: List[FilterOption]
    subcategories: List[FilterOption]
    companies: List[FilterOption]
