"""Pydantic schemas for the customer master."""
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.base import BaseResponseSchema, BaseCreateSchema, BaseUpdateSchema, LooseStr


class CustomerBase(BaseCreateSchema):
    # Billing party
    billing_name: str = Field(..., min_length=1, max_length=255)
    billing_address: Optional[str] = None
    billing_state_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("billing_state_id", "billing_state")
    )
    billing_state_code: Optional[int] = None
    billing_gstin: LooseStr = Field(None, max_length=20)

    # Contact
    contact_no: LooseStr = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)

    # Shipping party
    shipping_name: Optional[str] = None
    shipping_address: Optional[str] = None
    shipping_state_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("shipping_state_id", "shipping_state")
    )
    shipping_state_code: Optional[int] = None
    shipping_gstin: LooseStr = Field(None, max_length=20)


class CustomerCreate(CustomerBase):
    """Schema for creating a customer."""
    pass


class CustomerUpdate(BaseUpdateSchema):
    """Schema for updating a customer. Only supplied keys are written."""
    billing_name: Optional[str] = Field(None, min_length=1, max_length=255)
    billing_address: Optional[str] = None
    billing_state_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("billing_state_id", "billing_state")
    )
    billing_state_code: Optional[int] = None
    billing_gstin: LooseStr = None
    contact_no: LooseStr = None
    email: Optional[str] = None
    shipping_name: Optional[str] = None
    shipping_address: Optional[str] = None
    shipping_state_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("shipping_state_id", "shipping_state")
    )
    shipping_state_code: Optional[int] = None
    shipping_gstin: LooseStr = None


class CustomerSummary(BaseModel):
    """Row of the customer picker list."""
    id: int
    name: str
    gstin: str = ""
    contact: str = ""
    email: str = ""


class CustomerListResponse(BaseModel):
    customers: List[CustomerSummary]


class CustomerResponse(BaseResponseSchema):
    """Full customer record with both state names resolved."""
    id: int
    billing_name: str
    billing_address: Optional[str] = None
    billing_state_id: Optional[int] = None
    billing_state_name: Optional[str] = None
    billing_state_code: Optional[int] = None
    billing_gstin: Optional[str] = None
    contact_no: Optional[str] = None
    email: Optional[str] = None
    shipping_name: Optional[str] = None
    shipping_address: Optional[str] = None
    shipping_state_id: Optional[int] = None
    shipping_state_name: Optional[str] = None
    shipping_state_code: Optional[int] = None
    shipping_gstin: Optional[str] = None


class CustomerMutationResponse(BaseModel):
    message: str
    customer: CustomerResponse
