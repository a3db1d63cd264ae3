from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, List

from sqlalchemy import String, Integer, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.billing import DocumentTotalsMixin, InvoiceStatus, PaymentMode

if TYPE_CHECKING:
    from app.models.vendor import Vendor
    from app.models.product import Product


class Purchase(DocumentTotalsMixin, Base):
    """
    Purchase invoice received from a vendor.

    Purchase numbers are sequential integers handed out from
    ``GET /purchases/last-invoice``; the date is stored as epoch seconds
    like the sales book.
    """
    __tablename__ = "purchases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_no: Mapped[int] = mapped_column(Integer, unique=True, nullable=False, index=True)
    invoice_date: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    vendor_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("vendors.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    bill_reference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    staff_details: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    descriptions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    transport: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fy: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)

    status: Mapped[Optional[int]] = mapped_column(Integer, default=InvoiceStatus.OPEN, nullable=True)
    payment_mode: Mapped[Optional[int]] = mapped_column(Integer, default=PaymentMode.DEFAULT, nullable=True)
    type: Mapped[str] = mapped_column(String(20), default="purchase", nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # Relationships
    vendor: Mapped[Optional["Vendor"]] = relationship("Vendor")
    items: Mapped[List["PurchaseItem"]] = relationship(
        "PurchaseItem",
        back_populates="purchase",
        cascade="all, delete-orphan",
        order_by="PurchaseItem.id"
    )

    def __repr__(self) -> str:
        return f"<Purchase(invoice_no={self.invoice_no}, total={self.total})>"


class PurchaseItem(Base):
    __tablename__ = "purchase_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    purchase_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("purchases.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    qty: Mapped[int] = mapped_column(Integer, nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    hsn: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    part: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    category_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    model_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    company_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    invoice_date: Mapped[int] = mapped_column(Integer, nullable=False)
    fy: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    purchase: Mapped["Purchase"] = relationship("Purchase", back_populates="items")
    product: Mapped["Product"] = relationship("Product")
