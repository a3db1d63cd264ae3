"""API endpoints for purchase invoices."""
from typing import Optional
import logging

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import DB
from app.api.v1.endpoints.filters import DateRange
from app.config import settings
from app.models.purchase import Purchase
from app.schemas.base import PaginationMeta
from app.schemas.purchase import (
    PurchaseCreate,
    PurchaseUpdate,
    PurchaseResponse,
    PurchaseDetail,
    PurchaseListItem,
    PurchaseListResponse,
    LastInvoiceResponse,
)
from app.services.purchase_service import PurchaseService


logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_purchase_or_404(service: PurchaseService, purchase_id: int) -> Purchase:
    purchase = await service.get_purchase(purchase_id)
    if not purchase:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Purchase not found"
        )
    return purchase


@router.get("", response_model=PurchaseListResponse)
async def list_purchases(
    db: DB,
    dates: DateRange,
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = None,
    fy: Optional[int] = None,
):
    """Purchase register, newest first."""
    service = PurchaseService(db)
    rows, total = await service.list_purchases(
        page=page,
        limit=limit,
        search=search,
        fy=fy,
        start_date=dates.start,
        end_date=dates.end,
    )
    return PurchaseListResponse(
        purchases=[PurchaseListItem(**row) for row in rows],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
async def create_purchase(data: PurchaseCreate, db: DB):
    """Enter a purchase invoice; every line adds its quantity to stock."""
    service = PurchaseService(db)
    purchase = await service.create_purchase(data)
    return PurchaseResponse.model_validate(purchase)


@router.get("/last-invoice", response_model=LastInvoiceResponse)
async def get_last_invoice_number(db: DB):
    """Highest purchase invoice number so far (0 when there is none)."""
    service = PurchaseService(db)
    return LastInvoiceResponse(last_invoice_number=await service.last_invoice_number())


@router.get("/{purchase_id}", response_model=PurchaseDetail)
async def get_purchase(purchase_id: int, db: DB):
    service = PurchaseService(db)
    purchase = await _get_purchase_or_404(service, purchase_id)
    return PurchaseDetail(**await service.build_detail(purchase))


@router.put("/{purchase_id}", response_model=PurchaseDetail)
async def update_purchase(purchase_id: int, data: PurchaseUpdate, db: DB):
    """Edit reference, staff, notes, descriptions, status, payment mode or transport."""
    service = PurchaseService(db)
    purchase = await _get_purchase_or_404(service, purchase_id)
    purchase = await service.update_purchase(purchase, data)
    return PurchaseDetail(**await service.build_detail(purchase))


@router.delete("/{purchase_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_purchase(purchase_id: int, db: DB):
    service = PurchaseService(db)
    purchase = await _get_purchase_or_404(service, purchase_id)
    await service.delete_purchase(purchase)
