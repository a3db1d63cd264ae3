"""API endpoints for Vendor/Supplier management."""
import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select

from app.api.deps import DB
from app.models.state import State
from app.models.vendor import Vendor
from app.schemas.base import MessageResponse
from app.schemas.vendor import (
    VendorCreate,
    VendorUpdate,
    VendorSummary,
    VendorListResponse,
    VendorResponse,
    VendorMutationResponse,
)


logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_vendor_or_404(db: DB, vendor_id: int) -> Vendor:
    vendor = await db.get(Vendor, vendor_id)
    if not vendor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vendor not found"
        )
    return vendor


async def _to_response(db: DB, vendor: Vendor) -> VendorResponse:
    response = VendorResponse.model_validate(vendor)
    if vendor.state_id:
        state = await db.get(State, vendor.state_id)
        response.state_name = state.state_name if state else None
    return response


@router.get("", response_model=VendorListResponse)
async def list_vendors(db: DB):
    """Vendor picker list ordered by name."""
    result = await db.execute(
        select(Vendor.id, Vendor.vendor_name, Vendor.tax_id, Vendor.contact_no, Vendor.email)
        .order_by(Vendor.vendor_name)
    )
    return VendorListResponse(vendors=[
        VendorSummary(
            id=row.id,
            name=row.vendor_name,
            gstin=row.tax_id or "",
            contact=row.contact_no or "",
            email=row.email or "",
        )
        for row in result.all()
    ])


@router.get("/{vendor_id}", response_model=VendorResponse)
async def get_vendor(vendor_id: int, db: DB):
    """Get vendor by ID."""
    vendor = await _get_vendor_or_404(db, vendor_id)
    return await _to_response(db, vendor)


@router.post("", response_model=VendorMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_vendor(data: VendorCreate, db: DB):
    vendor = Vendor(**data.model_dump())
    db.add(vendor)
    await db.flush()
    logger.info(f"Created vendor {vendor.id} ({vendor.vendor_name})")

    return VendorMutationResponse(
        message="Vendor created successfully",
        vendor=await _to_response(db, vendor),
    )


@router.put("/{vendor_id}", response_model=VendorMutationResponse)
async def update_vendor(vendor_id: int, data: VendorUpdate, db: DB):
    """Update vendor details."""
    vendor = await _get_vendor_or_404(db, vendor_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(vendor, field, value)
    await db.flush()

    return VendorMutationResponse(
        message="Vendor updated successfully",
        vendor=await _to_response(db, vendor),
    )


@router.delete("/{vendor_id}", response_model=MessageResponse)
async def delete_vendor(vendor_id: int, db: DB):
    vendor = await _get_vendor_or_404(db, vendor_id)
    await db.delete(vendor)
    await db.flush()
    logger.info(f"Deleted vendor {vendor_id}")
    return MessageResponse(message="Vendor deleted successfully")
