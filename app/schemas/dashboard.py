from typing import Optional

from pydantic import BaseModel

from app.schemas.base import Money


class LastDocument(BaseModel):
    amount: Money
    date: int
    invoice_no: str


class DashboardStats(BaseModel):
    total_products: int
    low_stock_products: int
    total_invoices: int
    total_purchases: int
    todays_sales: Money
    todays_purchases: Money
    last_sale: Optional[LastDocument] = None
    last_purchase: Optional[LastDocument] = None


class DailyStats(BaseModel):
    date: str
    sales: Money
    purchases: Money
