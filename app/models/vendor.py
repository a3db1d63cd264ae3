from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Integer, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.state import State


class Vendor(Base):
    """Supplier master record referenced by purchase invoices."""
    __tablename__ = "vendors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vendor_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    address_2: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    state_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("states.id", ondelete="RESTRICT"),
        nullable=True
    )
    state_code: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    contact_no: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tax_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, comment="GSTIN")

    state: Mapped[Optional["State"]] = relationship("State", lazy="joined")

    def __repr__(self) -> str:
        return f"<Vendor(vendor_name='{self.vendor_name}')>"
