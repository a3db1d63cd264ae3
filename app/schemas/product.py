"""Pydantic schemas for the product catalog."""
from datetime import datetime
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.schemas.base import (
    BaseResponseSchema, BaseCreateSchema, LooseStr, OptionalMoney, PaginationMeta
)


# Accepted on create but with no column of their own; folded into notes
EXTRA_PRODUCT_FIELDS = [
    ("gst_rate", "GST Rate"),
    ("warehouse", "Warehouse"),
    ("rack_number", "Rack"),
    ("descriptions", "Desc"),
    ("mrp", "MRP"),
    ("discount", "Discount"),
    ("margin", "Margin"),
]


class ProductCreate(BaseCreateSchema):
    """Schema for creating a product."""
    product_name: Optional[str] = None
    display_name: Optional[str] = None
    part_no: LooseStr = None
    product_category_id: Optional[int] = None
    product_subcategory_id: Optional[int] = None
    car_model_ids: Optional[Union[str, List[int]]] = None
    company_id: Optional[int] = Field(None, validation_alias=AliasChoices("company_id", "company"))
    stock: Optional[int] = None
    min_stock: Optional[int] = None
    rate: OptionalMoney = None
    hsn: LooseStr = None
    notes: Optional[str] = None

    # Extra data
    gst_rate: LooseStr = None
    warehouse: LooseStr = None
    rack_number: LooseStr = None
    descriptions: LooseStr = None
    mrp: LooseStr = None
    discount: LooseStr = None
    margin: LooseStr = None

    @field_validator("car_model_ids", mode="after")
    @classmethod
    def join_car_model_ids(cls, v):
        if isinstance(v, list):
            return ",".join(str(i) for i in v) or None
        return v or None


class ProductResponse(BaseResponseSchema):
    """Response schema for a product row."""
    id: int
    product_name: str
    display_name: Optional[str] = None
    part_no: Optional[str] = None
    product_category_id: Optional[int] = None
    product_subcategory_id: Optional[int] = None
    car_model_ids: Optional[str] = None
    company_id: Optional[int] = None
    stock: int
    min_stock: Optional[int] = None
    rate: OptionalMoney = None
    hsn: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProductDetail(ProductResponse):
    """Product with its lookup names resolved."""
    category_name: str = ""
    subcategory_name: str = ""
    company_name: str = ""
    car_model_names: List[str] = []
    car_models_display: str = ""


class ProductEnriched(ProductDetail):
    """Row of the optimized listing."""
    latest_purchase_rate: OptionalMoney = None
    low_stock: bool = False


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    pagination: PaginationMeta


class OptimizedProductListResponse(BaseModel):
    products: List[ProductEnriched]
    pagination: PaginationMeta
