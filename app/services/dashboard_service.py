from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.formatting import day_window
from app.models.billing import Invoice
from app.models.product import Product
from app.models.purchase import Purchase


class DashboardService:
    """Counters and day totals for the landing page."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_stats(self, today: Optional[date] = None) -> dict:
        """
        Catalog and document counters, today's sales / purchase totals and
        the most recent sale and purchase.

        "Today" is the current UTC day, matching how document dates are stored.
        """
        today = today or datetime.now(timezone.utc).date()
        start, end = day_window(today)

        total_products = await self._scalar(select(func.count(Product.id)))
        low_stock = await self._scalar(
            select(func.count(Product.id)).where(
                and_(Product.min_stock.is_not(None), Product.stock < Product.min_stock)
            )
        )
        total_invoices = await self._scalar(select(func.count(Invoice.id)))
        total_purchases = await self._scalar(select(func.count(Purchase.id)))

        todays_sales = await self._day_total(Invoice, start, end)
        todays_purchases = await self._day_total(Purchase, start, end)

        return {
            "total_products": total_products or 0,
            "low_stock_products": low_stock or 0,
            "total_invoices": total_invoices or 0,
            "total_purchases": total_purchases or 0,
            "todays_sales": todays_sales,
            "todays_purchases": todays_purchases,
            "last_sale": await self._latest(Invoice),
            "last_purchase": await self._latest(Purchase),
        }

    async def get_daily_stats(self, day: date) -> dict:
        start, end = day_window(day)
        return {
            "date": day.isoformat(),
            "sales": await self._day_total(Invoice, start, end),
            "purchases": await self._day_total(Purchase, start, end),
        }

    async def _scalar(self, query):
        return (await self.db.execute(query)).scalar()

    async def _day_total(self, model, start: int, end: int) -> Decimal:
        value = await self._scalar(
            select(func.sum(model.total)).where(model.invoice_date.between(start, end))
        )
        return Decimal(str(value)) if value is not None else Decimal("0")

    async def _latest(self, model) -> Optional[dict]:
        result = await self.db.execute(
            select(model.total, model.invoice_date, model.invoice_no)
            .order_by(model.invoice_date.desc(), model.id.desc())
            .limit(1)
        )
        row = result.first()
        if row is None:
            return None
        return {"amount": row.total, "date": row.invoice_date, "invoice_no": str(row.invoice_no)}
