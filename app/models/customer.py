from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Integer, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.state import State


class Customer(Base):
    """
    Customer master record with separate billing and shipping parties.
    Either party's state points at the ``states`` lookup.
    """
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Billing party
    billing_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    billing_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    billing_state_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("states.id", ondelete="RESTRICT"),
        nullable=True
    )
    billing_state_code: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    billing_gstin: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Contact
    contact_no: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Shipping party
    shipping_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    shipping_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    shipping_state_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("states.id", ondelete="RESTRICT"),
        nullable=True
    )
    shipping_state_code: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    shipping_gstin: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Relationships
    billing_state: Mapped[Optional["State"]] = relationship(
        "State", foreign_keys=[billing_state_id], lazy="joined"
    )
    shipping_state: Mapped[Optional["State"]] = relationship(
        "State", foreign_keys=[shipping_state_id], lazy="joined"
    )

    def __repr__(self) -> str:
        return f"<Customer(billing_name='{self.billing_name}')>"
