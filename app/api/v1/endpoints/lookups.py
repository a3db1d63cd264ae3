"""
Router factory for the single-column product lookup tables.

Every table gets a paged, searchable listing and a create route; the
editable ones also get rename and delete.
"""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import DB
from app.config import settings
from app.schemas.base import PaginationMeta
from app.schemas.catalog import LookupWrite, LookupItem, LookupListResponse
from app.services.catalog_service import LookupService


logger = logging.getLogger(__name__)


def build_lookup_router(model, name_attr: str, label: str, editable: bool = True) -> APIRouter:
    router = APIRouter()

    def _require_name(data: LookupWrite) -> str:
        name = data.resolved_name(name_attr)
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{label} name is required"
            )
        return name

    @router.get("", response_model=LookupListResponse)
    async def list_rows(
        db: DB,
        page: int = Query(1, ge=1),
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
        search: Optional[str] = None,
    ):
        service = LookupService(db, model, name_attr)
        rows, total = await service.list(search=search, skip=(page - 1) * limit, limit=limit)
        return LookupListResponse(
            items=[LookupItem(**row) for row in rows],
            pagination=PaginationMeta.build(page, limit, total),
        )

    @router.post("", response_model=LookupItem, status_code=status.HTTP_201_CREATED)
    async def create_row(data: LookupWrite, db: DB):
        service = LookupService(db, model, name_attr)
        row = await service.create(_require_name(data))
        return LookupItem(**service.to_item(row))

    if not editable:
        return router

    async def _get_or_404(service: LookupService, row_id: int):
        row = await service.get(row_id)
        if row is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{label} not found"
            )
        return row

    @router.put("/{row_id}", response_model=LookupItem)
    async def update_row(row_id: int, data: LookupWrite, db: DB):
        service = LookupService(db, model, name_attr)
        name = _require_name(data)
        row = await _get_or_404(service, row_id)
        await service.rename(row, name)
        return LookupItem(**service.to_item(row))

    @router.delete("/{row_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_row(row_id: int, db: DB):
        service = LookupService(db, model, name_attr)
        row = await _get_or_404(service, row_id)
        await service.delete(row)

    return router
