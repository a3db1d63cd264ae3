"""Purchase invoice entry, listing and maintenance."""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select, func, or_, and_, delete, cast, String
from sqlalchemy.orm import selectinload

from app.core.exceptions import DocumentError, DocumentPersistenceError
from app.core.formatting import format_date_in, format_inr
from app.models.billing import InvoiceStatus, PaymentMode
from app.models.purchase import Purchase, PurchaseItem
from app.models.vendor import Vendor
from app.schemas.purchase import PurchaseCreate, PurchaseUpdate, PurchaseItemResponse
from app.services.document_entry import DocumentEntryService, TOTAL_COLUMNS, document_totals


logger = logging.getLogger(__name__)


class PurchaseService(DocumentEntryService):
    """Purchase entry increments stock; everything else is bookkeeping."""

    items_field = "purchaseItems"

    # ==================== ENTRY ====================

    async def create_purchase(self, data: PurchaseCreate) -> Purchase:
        """
        Enter a purchase invoice and add each line's quantity to stock.

        Same validation and failure semantics as sales invoice entry.
        """
        invoice_date = self.validate_header(data)
        self.validate_items(data.items)

        try:
            await self.resolve_products(self.distinct_product_ids(data.items))
            purchase = Purchase(
                invoice_no=data.invoice_no,
                invoice_date=invoice_date,
                vendor_id=data.vendor_id,
                bill_reference=data.bill_reference,
                staff_details=data.staff_details,
                descriptions=data.descriptions,
                transport=data.transport,
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
                type="purchase",
                updated_at=datetime.now(timezone.utc),
            )
            self.db.add(purchase)
            await self.db.flush()

            for item in data.items:
                self.db.add(PurchaseItem(
                    purchase_id=purchase.id,
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
                await self.adjust_stock(item.product_id, item.qty)

            await self.db.commit()
        except DocumentError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create purchase {data.invoice_no}: {e}", exc_info=True)
            raise DocumentPersistenceError("Failed to create purchase", error=str(e)) from e

        logger.info(f"Created purchase {purchase.invoice_no} with {len(data.items)} items")
        return purchase

    # ==================== QUERIES ====================

    async def list_purchases(
        self,
        page: int = 1,
        limit: int = 25,
        search: Optional[str] = None,
        fy: Optional[int] = None,
        start_date: Optional[int] = None,
        end_date: Optional[int] = None,
    ) -> Tuple[List[dict], int]:
        """Paged purchase rows with vendor name / GSTIN and item counts."""
        filters = []
        if search:
            filters.append(or_(
                cast(Purchase.invoice_no, String).ilike(f"%{search}%"),
                Purchase.notes.ilike(f"%{search}%"),
            ))
        if fy is not None:
            filters.append(Purchase.fy == fy)
        if start_date is not None and end_date is not None:
            filters.append(Purchase.invoice_date.between(start_date, end_date))

        count_query = select(func.count(Purchase.id))
        query = select(Purchase)
        if filters:
            count_query = count_query.where(and_(*filters))
            query = query.where(and_(*filters))

        total = (await self.db.execute(count_query)).scalar() or 0

        query = query.order_by(Purchase.id.desc()).offset((page - 1) * limit).limit(limit)
        purchases = list((await self.db.execute(query)).scalars().all())

        vendors = await self._vendors_by_id({p.vendor_id for p in purchases if p.vendor_id})
        item_counts = await self._item_counts([p.id for p in purchases])

        rows = []
        for purchase in purchases:
            vendor = vendors.get(purchase.vendor_id)
            rows.append({
                **document_totals(purchase),
                "id": purchase.id,
                "invoice_no": purchase.invoice_no,
                "invoice_date": purchase.invoice_date,
                "vendor_id": purchase.vendor_id,
                "vendor_name": vendor.vendor_name if vendor else "N/A",
                "vendor_gstin": (vendor.tax_id if vendor else None) or "",
                "notes": purchase.notes or "",
                "fy": purchase.fy,
                "status": purchase.status or 0,
                "payment_mode": purchase.payment_mode or 0,
                "transport": purchase.transport or "",
                "type": "purchase",
                "item_count": item_counts.get(purchase.id, 0),
                "formatted_date": format_date_in(purchase.invoice_date),
                "formatted_total": format_inr(purchase.total),
            })
        return rows, total

    async def get_purchase(self, purchase_id: int) -> Optional[Purchase]:
        result = await self.db.execute(
            select(Purchase)
            .options(selectinload(Purchase.items))
            .where(Purchase.id == purchase_id)
        )
        return result.scalar_one_or_none()

    async def build_detail(self, purchase: Purchase) -> dict:
        """Purchase header plus vendor contact fields and its items."""
        vendor = None
        if purchase.vendor_id:
            vendor = await self.db.get(Vendor, purchase.vendor_id)

        return {
            **{column: getattr(purchase, column) for column in _HEADER_COLUMNS},
            "vendor_name": (vendor.vendor_name if vendor else None)
            or purchase.bill_reference
            or "Unknown Vendor",
            "vendor_address": vendor.address if vendor else None,
            "vendor_gstin": vendor.tax_id if vendor else None,
            "contact_number": vendor.contact_no if vendor else None,
            "email_id": vendor.email if vendor else None,
            "formatted_date": format_date_in(purchase.invoice_date),
            "items": [PurchaseItemResponse.model_validate(item) for item in purchase.items],
        }

    async def last_invoice_number(self) -> int:
        result = await self.db.execute(select(func.max(Purchase.invoice_no)))
        return result.scalar() or 0

    # ==================== MAINTENANCE ====================

    async def update_purchase(self, purchase: Purchase, data: PurchaseUpdate) -> Purchase:
        """Apply the supplied header edits. Amounts, items and stock are untouched."""
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(purchase, field, value)
        purchase.updated_at = datetime.now(timezone.utc)
        await self.db.flush()
        logger.info(f"Updated purchase {purchase.invoice_no}")
        return purchase

    async def delete_purchase(self, purchase: Purchase) -> None:
        """Delete items then header. Stock already received is not reversed."""
        await self.db.execute(delete(PurchaseItem).where(PurchaseItem.purchase_id == purchase.id))
        await self.db.execute(delete(Purchase).where(Purchase.id == purchase.id))
        logger.info(f"Deleted purchase {purchase.invoice_no}")

    # ==================== HELPERS ====================

    async def _vendors_by_id(self, vendor_ids: set) -> Dict[int, Vendor]:
        if not vendor_ids:
            return {}
        result = await self.db.execute(select(Vendor).where(Vendor.id.in_(vendor_ids)))
        return {vendor.id: vendor for vendor in result.scalars().all()}

    async def _item_counts(self, purchase_ids: List[int]) -> Dict[int, int]:
        if not purchase_ids:
            return {}
        result = await self.db.execute(
            select(PurchaseItem.purchase_id, func.count(PurchaseItem.id))
            .where(PurchaseItem.purchase_id.in_(purchase_ids))
            .group_by(PurchaseItem.purchase_id)
        )
        return {purchase_id: count for purchase_id, count in result.all()}


_HEADER_COLUMNS = TOTAL_COLUMNS + (
    "id", "invoice_no", "invoice_date", "vendor_id", "bill_reference",
    "staff_details", "descriptions", "transport", "notes", "fy",
    "status", "payment_mode", "type", "updated_at",
)
