"""
Sales book queries: invoice listings, the secondary (salex) book and
period analytics. Read-only.
"""
import logging
from collections import OrderedDict
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select, func, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.formatting import format_date_in, format_inr, from_epoch_seconds, month_window, year_window
from app.models.billing import (
    Invoice, InvoiceBillingDetail, InvoiceItem, InvoiceStatus,
    SalexInvoice, SalexBillingDetail, SalexItem,
)
from app.services.document_entry import document_totals


logger = logging.getLogger(__name__)

ANALYTICS_PERIODS = ("month", "year", "custom")
TREND_SOURCE_INVOICES = 30
TREND_DAYS = 15


class SalesService:
    """Listing and reporting over the sales books."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ==================== LISTINGS ====================

    async def list_invoices(
        self,
        page: int = 1,
        limit: int = 50,
        search: Optional[str] = None,
        fy: Optional[int] = None,
        start_date: Optional[int] = None,
        end_date: Optional[int] = None,
    ) -> Tuple[List[dict], int]:
        """Sales invoices, newest first, with customer and item count per row."""
        filters = _common_filters(Invoice, search, fy, start_date, end_date)
        invoices, total = await self._page(Invoice, filters, Invoice.id.desc(), page, limit)

        ids = [invoice.id for invoice in invoices]
        billing = await self._billing_by_invoice(InvoiceBillingDetail, ids)
        counts = await self._item_counts(InvoiceItem, ids)
        return [_row(invoice, billing.get(invoice.id), counts.get(invoice.id, 0)) for invoice in invoices], total

    async def list_salex(
        self,
        page: int = 1,
        limit: int = 50,
        search: Optional[str] = None,
        fy: Optional[int] = None,
        start_date: Optional[int] = None,
        end_date: Optional[int] = None,
        status: Optional[str] = None,
        amount_min: Optional[Decimal] = None,
        amount_max: Optional[Decimal] = None,
    ) -> Tuple[List[dict], int]:
        """
        Secondary sales book, ordered by invoice date (newest first).

        ``status`` is ``"0"``, ``"1"`` or ``"unknown"`` (any code outside the
        known statuses).
        """
        filters = _common_filters(SalexInvoice, search, fy, start_date, end_date)
        if status == "unknown":
            filters.append(SalexInvoice.status.not_in([s.value for s in InvoiceStatus]))
        elif status:
            filters.append(SalexInvoice.status == int(status))
        if amount_min is not None:
            filters.append(SalexInvoice.total >= amount_min)
        if amount_max is not None:
            filters.append(SalexInvoice.total <= amount_max)

        order = (SalexInvoice.invoice_date.desc(), SalexInvoice.id.desc())
        invoices, total = await self._page(SalexInvoice, filters, order, page, limit)

        ids = [invoice.id for invoice in invoices]
        billing = await self._billing_by_invoice(SalexBillingDetail, ids)
        counts = await self._item_counts(SalexItem, ids)
        return [_row(invoice, billing.get(invoice.id), counts.get(invoice.id, 0)) for invoice in invoices], total

    # ==================== ANALYTICS ====================

    async def analytics(
        self,
        period: str = "month",
        start_date: Optional[int] = None,
        end_date: Optional[int] = None,
        fy: Optional[int] = None,
        today: Optional[date] = None,
    ) -> dict:
        """
        Totals, GST split and a daily trend for the chosen period.

        ``month`` and ``year`` are the current calendar month / year (UTC).
        ``custom`` uses ``start_date`` / ``end_date`` when both are given and
        is unbounded otherwise.
        """
        today = today or datetime.now(timezone.utc).date()
        window = None
        if period == "month":
            window = month_window(today)
        elif period == "year":
            window = year_window(today)
        elif start_date is not None and end_date is not None:
            window = (start_date, end_date)

        filters = []
        if window is not None:
            filters.append(Invoice.invoice_date.between(*window))
        if fy is not None:
            filters.append(Invoice.fy == fy)
        where = and_(*filters) if filters else None

        summary_query = select(
            func.count(Invoice.id),
            func.sum(Invoice.total),
            func.sum(Invoice.total_taxable_value),
            func.sum(Invoice.total_tax),
            func.sum(Invoice.total_cgst),
            func.sum(Invoice.total_sgst),
            func.sum(Invoice.total_igst),
        )
        recent_query = (
            select(Invoice.invoice_date, Invoice.total)
            .order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
            .limit(TREND_SOURCE_INVOICES)
        )
        if where is not None:
            summary_query = summary_query.where(where)
            recent_query = recent_query.where(where)

        count, total, taxable, tax, cgst, sgst, igst = (await self.db.execute(summary_query)).one()
        recent = (await self.db.execute(recent_query)).all()

        count = count or 0
        total = _money(total)
        average = (total / count).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP) if count else Decimal("0")

        daily: "OrderedDict[str, dict]" = OrderedDict()
        for invoice_date, invoice_total in recent:
            day = _trend_day(invoice_date)
            if day is None:
                continue
            point = daily.setdefault(day, {"sale_date": day, "total_sales": Decimal("0"), "invoice_count": 0})
            point["total_sales"] += _money(invoice_total)
            point["invoice_count"] += 1

        return {
            "period": period,
            "start_date": window[0] if window else None,
            "end_date": window[1] if window else None,
            "summary": {
                "total_invoices": count,
                "total_sales": total,
                "total_taxable_value": _money(taxable),
                "total_tax": _money(tax),
                "average_invoice_value": average,
            },
            "gst_breakdown": {
                "cgst": _money(cgst),
                "sgst": _money(sgst),
                "igst": _money(igst),
            },
            "sales_trends": list(daily.values())[:TREND_DAYS],
        }

    # ==================== HELPERS ====================

    async def _page(self, model, filters, order, page: int, limit: int):
        count_query = select(func.count(model.id))
        query = select(model)
        if filters:
            count_query = count_query.where(and_(*filters))
            query = query.where(and_(*filters))

        total = (await self.db.execute(count_query)).scalar() or 0

        if not isinstance(order, tuple):
            order = (order,)
        query = query.order_by(*order).offset((page - 1) * limit).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def _billing_by_invoice(self, detail_model, invoice_ids: List[int]) -> Dict[int, object]:
        if not invoice_ids:
            return {}
        result = await self.db.execute(
            select(detail_model).where(detail_model.invoice_id.in_(invoice_ids))
        )
        return {detail.invoice_id: detail for detail in result.scalars().all()}

    async def _item_counts(self, item_model, invoice_ids: List[int]) -> Dict[int, int]:
        if not invoice_ids:
            return {}
        result = await self.db.execute(
            select(item_model.invoice_id, func.count(item_model.id))
            .where(item_model.invoice_id.in_(invoice_ids))
            .group_by(item_model.invoice_id)
        )
        return {invoice_id: count for invoice_id, count in result.all()}


def _common_filters(model, search, fy, start_date, end_date) -> list:
    filters = []
    if search:
        filters.append(or_(
            model.invoice_no.ilike(f"%{search}%"),
            model.notes.ilike(f"%{search}%"),
        ))
    if fy is not None:
        filters.append(model.fy == fy)
    if start_date is not None and end_date is not None:
        filters.append(model.invoice_date.between(start_date, end_date))
    return filters


def _money(value) -> Decimal:
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def _trend_day(invoice_date: Optional[int]) -> Optional[str]:
    # Rows with a date outside the calendar range stay out of the trend
    if invoice_date is None:
        return None
    try:
        return from_epoch_seconds(invoice_date).date().isoformat()
    except (OverflowError, OSError, ValueError):
        return None


def _row(invoice, billing, item_count: int) -> dict:
    return {
        **document_totals(invoice),
        "id": invoice.id,
        "invoice_no": invoice.invoice_no,
        "invoice_date": invoice.invoice_date,
        "select_customer": invoice.select_customer,
        "customer_name": (billing.user_name if billing else None) or "N/A",
        "customer_gstin": (billing.gstin if billing else None) or "",
        "notes": invoice.notes or "",
        "fy": invoice.fy,
        "status": invoice.status or 0,
        "payment_mode": invoice.payment_mode or 0,
        "type": invoice.type,
        "item_count": item_count,
        "formatted_date": format_date_in(invoice.invoice_date),
        "formatted_total": format_inr(invoice.total),
    }
