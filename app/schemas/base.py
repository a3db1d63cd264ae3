"""
Base Schema Classes for Pydantic Models

RULE: All response schemas that use `from_attributes=True` MUST inherit from BaseResponseSchema.
"""

from decimal import Decimal
from math import ceil
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer


def _loose_str(value: Any) -> Any:
    # Legacy forms post codes such as hsn or invoice_no as bare numbers
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


# Amounts are Decimal in the database and plain JSON numbers on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
OptionalMoney = Optional[Money]
LooseStr = Annotated[Optional[str], BeforeValidator(_loose_str)]


class BaseResponseSchema(BaseModel):
    """
    Base class for all response schemas that read from ORM models.

    Usage:
        class ProductResponse(BaseResponseSchema):
            id: int
            product_name: str
    """
    model_config = ConfigDict(
        from_attributes=True,
        # Allow population by field name or alias
        populate_by_name=True,
    )


class BaseCreateSchema(BaseModel):
    """
    Base class for create/input schemas.

    Unknown keys sent by older clients are ignored.
    """
    model_config = ConfigDict(
        extra='ignore',
        populate_by_name=True,
    )


class BaseUpdateSchema(BaseModel):
    """
    Base class for update/patch schemas.

    All fields are optional by default for partial updates.
    """
    model_config = ConfigDict(
        extra='ignore',
    )


class PaginationMeta(BaseModel):
    """Pagination block returned next to every paged listing."""
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        total_pages = ceil(total / limit) if limit > 0 else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_more=page < total_pages,
        )


class MessageResponse(BaseModel):
    message: str
