"""API endpoints for the sales register and sales analytics."""
from typing import Optional

from fastapi import APIRouter, Query

from app.api.deps import DB
from app.api.v1.endpoints.filters import DateRange
from app.config import settings
from app.schemas.base import PaginationMeta
from app.schemas.invoice import InvoiceListItem
from app.schemas.sales import SalesListResponse, SalesAnalyticsResponse
from app.services.sales_service import SalesService


router = APIRouter()


@router.get("", response_model=SalesListResponse)
async def list_sales(
    db: DB,
    dates: DateRange,
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = None,
    fy: Optional[int] = None,
):
    service = SalesService(db)
    rows, total = await service.list_invoices(
        page=page,
        limit=limit,
        search=search,
        fy=fy,
        start_date=dates.start,
        end_date=dates.end,
    )
    return SalesListResponse(
        sales=[InvoiceListItem(**row) for row in rows],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.get("/analytics", response_model=SalesAnalyticsResponse)
async def get_sales_analytics(
    db: DB,
    dates: DateRange,
    period: str = Query("month", pattern="^(month|year|custom)$"),
    fy: Optional[int] = None,
):
    """Sales summary, GST breakdown and daily trend for a period."""
    service = SalesService(db)
    analytics = await service.analytics(
        period=period,
        start_date=dates.start,
        end_date=dates.end,
        fy=fy,
    )
    return SalesAnalyticsResponse(**analytics)
