"""API endpoints for the states lookup."""
from typing import Optional
import logging

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import select, func, or_

from app.api.deps import DB
from app.models.customer import Customer
from app.models.state import State
from app.models.vendor import Vendor
from app.schemas.base import MessageResponse, PaginationMeta
from app.schemas.state import (
    StateCreate, StateResponse, StateListResponse, StateMutationResponse
)
from app.config import settings


logger = logging.getLogger(__name__)

router = APIRouter()


def _require_name(data: StateCreate) -> str:
    name = (data.state_name or "").strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="State name is required and must be a non-empty string"
        )
    return name


async def _get_state_or_404(db: DB, state_id: int) -> State:
    state = await db.get(State, state_id)
    if not state:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="State not found"
        )
    return state


async def _name_taken(db: DB, name: str, exclude_id: Optional[int] = None) -> bool:
    query = select(State.id).where(func.lower(State.state_name) == name.lower())
    if exclude_id is not None:
        query = query.where(State.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none() is not None


@router.get("", response_model=StateListResponse)
async def list_states(
    db: DB,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = None,
):
    """List states ordered by name."""
    query = select(State)
    count_query = select(func.count(State.id))
    if search:
        query = query.where(State.state_name.ilike(f"%{search}%"))
        count_query = count_query.where(State.state_name.ilike(f"%{search}%"))

    total = (await db.execute(count_query)).scalar() or 0
    result = await db.execute(
        query.order_by(State.state_name).offset((page - 1) * limit).limit(limit)
    )

    return StateListResponse(
        states=[StateResponse.model_validate(s) for s in result.scalars().all()],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.post("", response_model=StateMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_state(data: StateCreate, db: DB):
    """Create a state. Names are unique regardless of case."""
    name = _require_name(data)
    if await _name_taken(db, name):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="State with this name already exists"
        )

    state = State(state_name=name, code=data.code or 0)
    db.add(state)
    await db.flush()
    logger.info(f"Created state {state.id} ({name})")

    return StateMutationResponse(
        message="State created successfully",
        state=StateResponse.model_validate(state),
    )


@router.put("/{state_id}", response_model=StateMutationResponse)
async def update_state(state_id: int, data: StateCreate, db: DB):
    """Rename a state (and optionally change its code)."""
    name = _require_name(data)
    state = await _get_state_or_404(db, state_id)

    if await _name_taken(db, name, exclude_id=state_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another state with this name already exists"
        )

    state.state_name = name
    if data.code is not None:
        state.code = data.code
    await db.flush()

    return StateMutationResponse(
        message="State updated successfully",
        state=StateResponse.model_validate(state),
    )


@router.delete("/{state_id}", response_model=MessageResponse)
async def delete_state(state_id: int, db: DB):
    """Delete a state that no customer or vendor refers to."""
    state = await _get_state_or_404(db, state_id)

    customer_ref = await db.execute(
        select(Customer.id).where(
            or_(Customer.billing_state_id == state_id, Customer.shipping_state_id == state_id)
        ).limit(1)
    )
    vendor_ref = await db.execute(select(Vendor.id).where(Vendor.state_id == state_id).limit(1))
    if customer_ref.scalar_one_or_none() is not None or vendor_ref.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete state as it is being used by customers or vendors"
        )

    await db.delete(state)
    await db.flush()
    logger.info(f"Deleted state {state_id}")
    return MessageResponse(message="State deleted successfully")
