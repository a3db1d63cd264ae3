"""API endpoints for the secondary sales book."""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Query

from app.api.deps import DB
from app.api.v1.endpoints.filters import DateRange
from app.config import settings
from app.schemas.base import PaginationMeta
from app.schemas.invoice import InvoiceListItem
from app.schemas.sales import SalexListResponse
from app.services.sales_service import SalesService


router = APIRouter()


@router.get("", response_model=SalexListResponse)
async def list_salex(
    db: DB,
    dates: DateRange,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = None,
    fy: Optional[int] = None,
    status: Optional[str] = Query(None, pattern="^(0|1|unknown)$"),
    amount_min: Optional[Decimal] = None,
    amount_max: Optional[Decimal] = None,
):
    """Secondary sales book, newest invoice date first."""
    service = SalesService(db)
    rows, total = await service.list_salex(
        page=page,
        limit=limit,
        search=search,
        fy=fy,
        start_date=dates.start,
        end_date=dates.end,
        status=status,
        amount_min=amount_min,
        amount_max=amount_max,
    )
    return SalexListResponse(
        salex=[InvoiceListItem(**row) for row in rows],
        pagination=PaginationMeta.build(page, limit, total),
    )
