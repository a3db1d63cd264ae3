"""Schemas for purchase invoice entry, listing and maintenance."""
from datetime import datetime
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.base import BaseResponseSchema, BaseUpdateSchema, Money, PaginationMeta
from app.schemas.invoice import DocumentItemIn, DocumentTotalsIn, DocumentTotalsResponse


class PurchaseCreate(DocumentTotalsIn):
    """Purchase entry payload; same header rules as a sales invoice."""
    invoice_no: Optional[int] = None
    invoice_date: Optional[Union[int, str]] = None
    vendor_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("vendor_id", "select_vendor")
    )
    bill_reference: Optional[str] = None
    staff_details: Optional[str] = None
    descriptions: Optional[str] = None
    transport: Optional[str] = None
    notes: Optional[str] = None
    fy: Optional[int] = None

    items: List[DocumentItemIn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("purchaseItems", "invoiceItems", "items"),
    )


class PurchaseUpdate(BaseUpdateSchema):
    """Editable purchase header fields."""
    bill_reference: Optional[str] = None
    staff_details: Optional[str] = None
    notes: Optional[str] = None
    descriptions: Optional[str] = None
    status: Optional[int] = None
    payment_mode: Optional[int] = None
    transport: Optional[str] = None


class PurchaseItemResponse(BaseResponseSchema):
    id: int
    purchase_id: int
    product_id: int
    qty: int
    rate: Money
    subtotal: Money
    hsn: Optional[str] = None
    part: Optional[str] = None
    category_id: Optional[int] = None
    model_id: Optional[int] = None
    company_id: Optional[int] = None
    invoice_date: int
    fy: Optional[int] = None


class PurchaseResponse(DocumentTotalsResponse):
    id: int
    invoice_no: int
    invoice_date: int
    vendor_id: Optional[int] = None
    bill_reference: Optional[str] = None
    staff_details: Optional[str] = None
    descriptions: Optional[str] = None
    transport: Optional[str] = None
    notes: Optional[str] = None
    fy: Optional[int] = None
    status: Optional[int] = None
    payment_mode: Optional[int] = None
    type: str
    updated_at: datetime


class PurchaseDetail(PurchaseResponse):
    """Purchase header with vendor contact details and its items."""
    vendor_name: str
    vendor_address: Optional[str] = None
    vendor_gstin: Optional[str] = None
    contact_number: Optional[str] = None
    email_id: Optional[str] = None
    formatted_date: str
    items: List[PurchaseItemResponse] = []


class PurchaseListItem(DocumentTotalsResponse):
    id: int
    invoice_no: int
    invoice_date: int
    vendor_id: Optional[int] = None
    vendor_name: str = "N/A"
    vendor_gstin: str = ""
    notes: str = ""
    fy: Optional[int] = None
    status: int = 0
    payment_mode: int = 0
    transport: str = ""
    type: str = "purchase"
    item_count: int = 0
    formatted_date: str
    formatted_total: str


class PurchaseListResponse(BaseModel):
    purchases: List[PurchaseListItem]
    pagination: PaginationMeta


class LastInvoiceResponse(BaseModel):
    last_invoice_number: int
