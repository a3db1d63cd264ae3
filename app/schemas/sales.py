from typing import List, Optional

from pydantic import BaseModel

from app.schemas.base import Money, PaginationMeta
from app.schemas.invoice import InvoiceListItem


class SalesListResponse(BaseModel):
    sales: List[InvoiceListItem]
    pagination: PaginationMeta


class SalexListResponse(BaseModel):
    salex: List[InvoiceListItem]
    pagination: PaginationMeta


class SalesSummary(BaseModel):
    total_invoices: int
    total_sales: Money
    total_taxable_value: Money
    total_tax: Money
    average_invoice_value: Money


class GstBreakdown(BaseModel):
    cgst: Money
    sgst: Money
    igst: Money


class SalesTrendPoint(BaseModel):
    sale_date: str
    total_sales: Money
    invoice_count: int


class SalesAnalyticsResponse(BaseModel):
    period: str
    start_date: Optional[int] = None
    end_date: Optional[int] = None
    summary: SalesSummary
    gst_breakdown: GstBreakdown
    sales_trends: List[SalesTrendPoint]
