"""Invoice Service for sales invoice entry.

Creates the invoice header, whichever of the billing / shipping / transport
blocks were supplied, and the line items, decrementing product stock for
each line. The whole invoice commits or nothing does.
"""
import logging
from datetime import datetime, timezone

from app.core.exceptions import DocumentError, DocumentPersistenceError
from app.models.billing import (
    Invoice,
    InvoiceBillingDetail,
    InvoiceShippingDetail,
    InvoiceTransportDetail,
    InvoiceItem,
    InvoiceStatus,
    PaymentMode,
)
from app.schemas.invoice import InvoiceCreate
from app.services.document_entry import DocumentEntryService


logger = logging.getLogger(__name__)


class InvoiceService(DocumentEntryService):
    """Sales invoice entry."""

    async def create_invoice(self, data: InvoiceCreate) -> Invoice:
        """
        Enter a sales invoice.

        Args:
            data: Entry payload as posted by the invoice form

        Returns:
            The persisted invoice header

        Raises:
            DocumentValidationError: a required field is missing or malformed
            DocumentReferenceError: a line references an unknown product
            DocumentPersistenceError: the store rejected the write (e.g. a
                duplicate invoice number); nothing was kept
        """
        invoice_date = self.validate_header(data)
        self.validate_items(data.invoice_items)

        try:
            await self.resolve_products(self.distinct_product_ids(data.invoice_items))
            invoice = await self._write_invoice(data, invoice_date)
            await self.db.commit()
        except DocumentError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create invoice {data.invoice_no}: {e}", exc_info=True)
            raise DocumentPersistenceError("Failed to create invoice", error=str(e)) from e

        logger.info(
            f"Created invoice {invoice.invoice_no} with {len(data.invoice_items)} items, "
            f"total {invoice.total}"
        )
        return invoice

    async def _write_invoice(self, data: InvoiceCreate, invoice_date: int) -> Invoice:
        invoice = Invoice(
            invoice_no=str(data.invoice_no),
            invoice_date=invoice_date,
            select_customer=data.select_customer,
            items_total=data.items_total,
            freight=data.freight,
            total_taxable_value=data.total_taxable_value,
            taxrate=data.taxrate,
            total_cgst=data.total_cgst,
            total_sgst=data.total_sgst,
            total_igst=data.total_igst,
            total_tax=data.total_tax,
            total=data.total,
            notes=data.notes,
            fy=data.fy,
            status=InvoiceStatus.OPEN,
            payment_mode=PaymentMode.DEFAULT,
            mode=0,
            type="sale",
            updated_at=datetime.now(timezone.utc),
        )
        self.db.add(invoice)
        await self.db.flush()

        # Detail blocks, only those supplied
        if data.billing_details is not None:
            self.db.add(InvoiceBillingDetail(
                invoice_id=invoice.id,
                **data.billing_details.model_dump(),
            ))
        if data.shipping_details is not None:
            self.db.add(InvoiceShippingDetail(
                invoice_id=invoice.id,
                **data.shipping_details.model_dump(),
            ))
        if data.transport_details is not None:
            self.db.add(InvoiceTransportDetail(
                invoice_id=invoice.id,
                **data.transport_details.model_dump(),
            ))

        # Line items in input order, each followed by its stock movement
        for item in data.invoice_items:
            self.db.add(InvoiceItem(
                invoice_id=invoice.id,
                product_id=item.product_id,
                qty=item.qty,
                rate=item.rate,
                subtotal=item.subtotal,
                hsn=item.hsn,
                part=item.part,
                category_id=item.category_id,
                model_id=item.model_id,
                company_id=item.company_id,
                invoice_date=invoice_date,
                fy=data.fy,
            ))
            await self.db.flush()
            await self.adjust_stock(item.product_id, -item.qty)

        await self.db.flush()
        return invoice
