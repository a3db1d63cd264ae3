from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.base import BaseResponseSchema, BaseCreateSchema, PaginationMeta


class StateCreate(BaseCreateSchema):
    """Create or rename a state. Blank names are rejected by the endpoint."""
    state_name: Optional[str] = None
    code: Optional[int] = Field(None, ge=0, description="GST state code")


class StateResponse(BaseResponseSchema):
    id: int
    state_name: str
    code: int


class StateListResponse(BaseModel):
    states: List[StateResponse]
    pagination: PaginationMeta


class StateMutationResponse(BaseModel):
    message: str
    state: StateResponse
