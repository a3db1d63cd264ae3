"""
Schemas for sales invoice entry and listing.

The entry form posts camelCase block names (``invoiceItems``,
``billingDetails``...) and may send the product reference of a line as
``name_of_product``; both spellings are accepted.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.base import (
    BaseResponseSchema, BaseCreateSchema, LooseStr, Money, OptionalMoney, PaginationMeta
)


# ==================== Entry ====================

class DocumentItemIn(BaseCreateSchema):
    """One line of a sales or purchase document."""
    product_id: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("product_id", "name_of_product", "product"),
    )
    qty: Optional[int] = None
    rate: Money = Decimal("0")
    subtotal: Money = Decimal("0")
    hsn: LooseStr = None
    part: LooseStr = None
    category_id: Optional[int] = None
    model_id: Optional[int] = None
    company_id: Optional[int] = None


class PartyDetailsIn(BaseCreateSchema):
    """Billing or shipping party block."""
    user_name: Optional[str] = None
    address: Optional[str] = None
    gstin: LooseStr = None
    state: LooseStr = None
    state_code: LooseStr = None
    contact_no: LooseStr = None
    email: Optional[str] = None


class TransportDetailsIn(BaseCreateSchema):
    transporter_name: Optional[str] = None
    transporter_gstin: LooseStr = None
    transport_mode: LooseStr = None
    vehicle_number: LooseStr = None
    transport_doc_number: LooseStr = None
    transport_doc_date: LooseStr = None
    place_of_supply: LooseStr = None
    eway_bill_number: LooseStr = Field(
        None, validation_alias=AliasChoices("eway_bill_number", "e_way_bill_number")
    )


class DocumentTotalsIn(BaseCreateSchema):
    """Header amounts. Taxable value and grand total have no default."""
    items_total: Money = Decimal("0")
    freight: Money = Decimal("0")
    total_taxable_value: OptionalMoney = None
    taxrate: Money = Decimal("0")
    total_cgst: Money = Decimal("0")
    total_sgst: Money = Decimal("0")
    total_igst: Money = Decimal("0")
    total_tax: Money = Decimal("0")
    total: OptionalMoney = None


class InvoiceCreate(DocumentTotalsIn):
    """
    Sales invoice entry payload.

    Required fields are Optional here on purpose so the workflow can report
    every missing one at once instead of failing on the first.
    """
    invoice_no: LooseStr = None
    invoice_date: Optional[Union[int, str]] = None
    select_customer: Optional[int] = None
    notes: Optional[str] = None
    fy: Optional[int] = None

    invoice_items: List[DocumentItemIn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("invoiceItems", "invoice_items", "items"),
    )
    billing_details: Optional[PartyDetailsIn] = Field(
        None, validation_alias=AliasChoices("billingDetails", "billing_details")
    )
    shipping_details: Optional[PartyDetailsIn] = Field(
        None, validation_alias=AliasChoices("shippingDetails", "shipping_details")
    )
    transport_details: Optional[TransportDetailsIn] = Field(
        None, validation_alias=AliasChoices("transportDetails", "transport_details")
    )


# ==================== Responses ====================

class DocumentTotalsResponse(BaseResponseSchema):
    items_total: Money
    freight: Money
    total_taxable_value: Money
    taxrate: Money
    total_cgst: Money
    total_sgst: Money
    total_igst: Money
    total_tax: Money
    total: Money


class InvoiceResponse(DocumentTotalsResponse):
    """Persisted invoice header (line items are not echoed back)."""
    id: int
    invoice_no: str
    invoice_date: int
    select_customer: Optional[int] = None
    notes: Optional[str] = None
    fy: Optional[int] = None
    status: int
    payment_mode: int
    type: str
    updated_at: datetime


class InvoiceListItem(DocumentTotalsResponse):
    """Invoice row with display helpers."""
    id: int
    invoice_no: str
    invoice_date: int
    select_customer: Optional[int] = None
    customer_name: str = "N/A"
    customer_gstin: str = ""
    notes: str = ""
    fy: Optional[int] = None
    status: int = 0
    payment_mode: int = 0
    type: str = "sale"
    item_count: int = 0
    formatted_date: str
    formatted_total: str


class InvoiceListResponse(BaseModel):
    invoices: List[InvoiceListItem]
    pagination: PaginationMeta
