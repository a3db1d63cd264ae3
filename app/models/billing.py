"""
Sales documents.

``invoices`` is the GST sales book written by the invoice-entry workflow.
Billing, shipping and transport details are optional one-to-one rows keyed
by ``invoice_id``. ``salex_*`` tables hold the secondary sales book, which is
read-only from this application.
"""
from datetime import datetime, timezone
from decimal import Decimal
from enum import IntEnum
from typing import TYPE_CHECKING, Optional, List

from sqlalchemy import String, Integer, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.customer import Customer
    from app.models.product import Product


class InvoiceStatus(IntEnum):
    """Document status codes."""
    CLOSED = 0
    OPEN = 1
    CANCELLED = 2


class PaymentMode(IntEnum):
    """Payment mode codes. New documents always start on DEFAULT."""
    UNSET = 0
    DEFAULT = 1


class DocumentTotalsMixin:
    """Header amount columns shared by sales and purchase documents."""

    items_total: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    freight: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    total_taxable_value: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    taxrate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=0, nullable=False)
    total_cgst: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    total_sgst: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    total_igst: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    total_tax: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)


class Invoice(DocumentTotalsMixin, Base):
    """Sales invoice header."""
    __tablename__ = "invoices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_no: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    invoice_date: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Epoch seconds"
    )
    select_customer: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("customers.id", ondelete="SET NULL"),
        nullable=True
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fy: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    status: Mapped[int] = mapped_column(Integer, default=InvoiceStatus.OPEN, nullable=False)
    payment_mode: Mapped[int] = mapped_column(Integer, default=PaymentMode.DEFAULT, nullable=False)
    mode: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    type: Mapped[str] = mapped_column(String(20), default="sale", nullable=False)

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
    customer: Mapped[Optional["Customer"]] = relationship("Customer")
    billing_detail: Mapped[Optional["InvoiceBillingDetail"]] = relationship(
        "InvoiceBillingDetail",
        back_populates="invoice",
        uselist=False,
        cascade="all, delete-orphan"
    )
    shipping_detail: Mapped[Optional["InvoiceShippingDetail"]] = relationship(
        "InvoiceShippingDetail",
        back_populates="invoice",
        uselist=False,
        cascade="all, delete-orphan"
    )
    transport_detail: Mapped[Optional["InvoiceTransportDetail"]] = relationship(
        "InvoiceTransportDetail",
        back_populates="invoice",
        uselist=False,
        cascade="all, delete-orphan"
    )
    items: Mapped[List["InvoiceItem"]] = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.id"
    )

    def __repr__(self) -> str:
        return f"<Invoice(invoice_no='{self.invoice_no}', total={self.total})>"


class InvoiceBillingDetail(Base):
    """Bill-to party captured on the invoice."""
    __tablename__ = "invoice_billing_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("invoices.id", ondelete="CASCADE"),
        unique=True,
        nullable=False
    )
    user_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gstin: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state_code: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    contact_no: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    invoice: Mapped["Invoice"] = relationship("Invoice", back_populates="billing_detail")


class InvoiceShippingDetail(Base):
    """Ship-to party captured on the invoice."""
    __tablename__ = "invoice_shipping_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("invoices.id", ondelete="CASCADE"),
        unique=True,
        nullable=False
    )
    user_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gstin: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state_code: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    contact_no: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    invoice: Mapped["Invoice"] = relationship("Invoice", back_populates="shipping_detail")


class InvoiceTransportDetail(Base):
    """Consignment / e-way bill data for goods moved against the invoice."""
    __tablename__ = "invoice_transport_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("invoices.id", ondelete="CASCADE"),
        unique=True,
        nullable=False
    )
    transporter_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    transporter_gstin: Mapped[Optional[str]] = mapped_column(String(15), nullable=True)
    transport_mode: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    vehicle_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    transport_doc_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    transport_doc_date: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    place_of_supply: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    eway_bill_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    invoice: Mapped["Invoice"] = relationship("Invoice", back_populates="transport_detail")


class InvoiceItem(Base):
    """
    Invoice line. ``invoice_date`` and ``fy`` are copied from the header so
    item-level reports need no join.
    """
    __tablename__ = "invoice_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("invoices.id", ondelete="CASCADE"),
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

    invoice: Mapped["Invoice"] = relationship("Invoice", back_populates="items")
    product: Mapped["Product"] = relationship("Product")


# ==================== SECONDARY SALES BOOK ====================

class SalexInvoice(DocumentTotalsMixin, Base):
    """Header of the secondary sales book."""
    __tablename__ = "salex_invoices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_no: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    invoice_date: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    select_customer: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("customers.id", ondelete="SET NULL"),
        nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fy: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    status: Mapped[int] = mapped_column(Integer, default=InvoiceStatus.OPEN, nullable=False)
    payment_mode: Mapped[int] = mapped_column(Integer, default=PaymentMode.DEFAULT, nullable=False)
    mode: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    type: Mapped[str] = mapped_column(String(20), default="salex", nullable=False)

    billing_detail: Mapped[Optional["SalexBillingDetail"]] = relationship(
        "SalexBillingDetail",
        uselist=False,
        cascade="all, delete-orphan"
    )
    items: Mapped[List["SalexItem"]] = relationship(
        "SalexItem",
        cascade="all, delete-orphan",
        order_by="SalexItem.id"
    )


class SalexBillingDetail(Base):
    __tablename__ = "salex_billing_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("salex_invoices.id", ondelete="CASCADE"),
        unique=True,
        nullable=False
    )
    user_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gstin: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    contact_no: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)


class SalexItem(Base):
    __tablename__ = "salex_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("salex_invoices.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    product_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True
    )
    qty: Mapped[int] = mapped_column(Integer, nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=0, nullable=False)
    hsn: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
