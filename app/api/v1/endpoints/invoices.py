"""API endpoints for sales invoice entry and the invoice register."""
from typing import Optional
import logging

from fastapi import APIRouter, Query, status

from app.api.deps import DB
from app.api.v1.endpoints.filters import DateRange
from app.config import settings
from app.schemas.base import PaginationMeta
from app.schemas.invoice import InvoiceCreate, InvoiceResponse, InvoiceListItem, InvoiceListResponse
from app.services.invoice_service import InvoiceService
from app.services.sales_service import SalesService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    db: DB,
    dates: DateRange,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = None,
    fy: Optional[int] = None,
):
    """Invoice register, newest first."""
    service = SalesService(db)
    rows, total = await service.list_invoices(
        page=page,
        limit=limit,
        search=search,
        fy=fy,
        start_date=dates.start,
        end_date=dates.end,
    )
    return InvoiceListResponse(
        invoices=[InvoiceListItem(**row) for row in rows],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(data: InvoiceCreate, db: DB):
    """
    Enter a sales invoice.

    Header, optional billing / shipping / transport blocks and line items are
    written together with the stock decrement of every line, or not at all.
    Domain errors are rendered by the application error handler.
    """
    service = InvoiceService(db)
    invoice = await service.create_invoice(data)
    return InvoiceResponse.model_validate(invoice)
