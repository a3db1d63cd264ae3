"""Pydantic schemas for Vendor/Supplier module."""
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.base import BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema, LooseStr


class VendorCreate(BaseCreateSchema):
    """Schema for creating Vendor."""
    vendor_name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    address_2: Optional[str] = None
    state_id: Optional[int] = Field(None, validation_alias=AliasChoices("state_id", "state"))
    state_code: Optional[int] = None
    contact_no: LooseStr = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)
    tax_id: LooseStr = Field(None, max_length=20, description="GSTIN")


class VendorUpdate(BaseUpdateSchema):
    """Schema for updating Vendor."""
    vendor_name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = None
    address_2: Optional[str] = None
    state_id: Optional[int] = Field(None, validation_alias=AliasChoices("state_id", "state"))
    state_code: Optional[int] = None
    contact_no: LooseStr = None
    email: Optional[str] = None
    tax_id: LooseStr = None


class VendorSummary(BaseModel):
    """Brief vendor info for list and dropdowns."""
    id: int
    name: str
    gstin: str = ""
    contact: str = ""
    email: str = ""


class VendorListResponse(BaseModel):
    vendors: List[VendorSummary]


class VendorResponse(BaseResponseSchema):
    """Response schema for Vendor."""
    id: int
    vendor_name: str
    address: Optional[str] = None
    address_2: Optional[str] = None
    state_id: Optional[int] = None
    state_name: Optional[str] = None
    state_code: Optional[int] = None
    contact_no: Optional[str] = None
    email: Optional[str] = None
    tax_id: Optional[str] = None


class VendorMutationResponse(BaseModel):
    message: str
    vendor: VendorResponse
