from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, List

from sqlalchemy import String, Integer, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.category import ProductCategory, ProductSubcategory
    from app.models.company import ProductCompany


class Product(Base):
    """
    Inventory item with an on-hand ``stock`` counter.

    Sales invoices decrement ``stock`` and purchase invoices increment it,
    always through a relative UPDATE so concurrent documents never lose
    each other's changes.
    """
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    product_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    part_no: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)

    # Classification
    product_category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("product_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    product_subcategory_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("product_subcategories.id", ondelete="SET NULL"),
        nullable=True
    )
    car_model_ids: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Comma-separated car_models ids"
    )
    company_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("product_companies.id", ondelete="SET NULL"),
        nullable=True
    )

    # Stock & pricing
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    min_stock: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)
    hsn: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

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
    category: Mapped[Optional["ProductCategory"]] = relationship("ProductCategory")
    subcategory: Mapped[Optional["ProductSubcategory"]] = relationship("ProductSubcategory")
    company: Mapped[Optional["ProductCompany"]] = relationship("ProductCompany")

    @property
    def car_model_id_list(self) -> List[int]:
        """Parse ``car_model_ids``, silently skipping blanks and junk."""
        if not self.car_model_ids:
            return []
        ids = []
        for raw in self.car_model_ids.split(","):
            raw = raw.strip()
            if raw.isdigit():
                ids.append(int(raw))
        return ids

    @property
    def is_low_stock(self) -> bool:
        return self.min_stock is not None and self.stock < self.min_stock

    def __repr__(self) -> str:
        return f"<Product(product_name='{self.product_name}', stock={self.stock})>"
