"""API endpoints for the customer master."""
import logging
from typing import Dict

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select

from app.api.deps import DB
from app.models.customer import Customer
from app.models.state import State
from app.schemas.base import MessageResponse
from app.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerSummary,
    CustomerListResponse,
    CustomerResponse,
    CustomerMutationResponse,
)


logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_customer_or_404(db: DB, customer_id: int) -> Customer:
    customer = await db.get(Customer, customer_id)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )
    return customer


async def _state_names(db: DB, *state_ids) -> Dict[int, str]:
    ids = {state_id for state_id in state_ids if state_id}
    if not ids:
        return {}
    result = await db.execute(select(State.id, State.state_name).where(State.id.in_(ids)))
    return {state_id: name for state_id, name in result.all()}


async def _to_response(db: DB, customer: Customer) -> CustomerResponse:
    names = await _state_names(db, customer.billing_state_id, customer.shipping_state_id)
    response = CustomerResponse.model_validate(customer)
    response.billing_state_name = names.get(customer.billing_state_id)
    response.shipping_state_name = names.get(customer.shipping_state_id)
    return response


@router.get("", response_model=CustomerListResponse)
async def list_customers(db: DB):
    """Customer picker list ordered by billing name."""
    result = await db.execute(
        select(
            Customer.id,
            Customer.billing_name,
            Customer.billing_gstin,
            Customer.contact_no,
            Customer.email,
        ).order_by(Customer.billing_name)
    )
    return CustomerListResponse(customers=[
        CustomerSummary(
            id=row.id,
            name=row.billing_name,
            gstin=row.billing_gstin or "",
            contact=row.contact_no or "",
            email=row.email or "",
        )
        for row in result.all()
    ])


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: int, db: DB):
    """Get a customer with both state names resolved."""
    customer = await _get_customer_or_404(db, customer_id)
    return await _to_response(db, customer)


@router.post("", response_model=CustomerMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(data: CustomerCreate, db: DB):
    customer = Customer(**data.model_dump())
    db.add(customer)
    await db.flush()
    logger.info(f"Created customer {customer.id} ({customer.billing_name})")

    return CustomerMutationResponse(
        message="Customer created successfully",
        customer=await _to_response(db, customer),
    )


@router.put("/{customer_id}", response_model=CustomerMutationResponse)
async def update_customer(customer_id: int, data: CustomerUpdate, db: DB):
    """Update customer details. Only supplied fields change."""
    customer = await _get_customer_or_404(db, customer_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(customer, field, value)
    await db.flush()

    return CustomerMutationResponse(
        message="Customer updated successfully",
        customer=await _to_response(db, customer),
    )


@router.delete("/{customer_id}", response_model=MessageResponse)
async def delete_customer(customer_id: int, db: DB):
    customer = await _get_customer_or_404(db, customer_id)
    await db.delete(customer)
    await db.flush()
    logger.info(f"Deleted customer {customer_id}")
    return MessageResponse(message="Customer deleted successfully")
