"""
Shared steps of sales and purchase document entry.

A document is entered as one unit of work:

1. header validation (falsy required fields, parseable date)
2. product resolution, before anything is written
3. header, optional detail blocks and line items
4. one relative stock UPDATE per line
5. commit, or roll back everything on the first failure

Subclasses supply the models and the direction of the stock movement.
"""
import logging
from typing import Any, Iterable, List, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DocumentValidationError, DocumentReferenceError
from app.core.formatting import document_date_to_epoch
from app.models.product import Product
from app.schemas.invoice import DocumentItemIn


logger = logging.getLogger(__name__)

# Fields every document header must carry with a truthy value
REQUIRED_HEADER_FIELDS = ("invoice_no", "total_taxable_value", "total", "invoice_date")


class DocumentEntryService:
    """Base class for services that enter stock-moving documents."""

    items_field = "invoiceItems"

    def __init__(self, db: AsyncSession):
        self.db = db

    # ==================== VALIDATION ====================

    def validate_header(self, payload: Any) -> int:
        """
        Check required header fields and return the document date as epoch seconds.

        Absent, null, empty and zero values all count as missing.

        Raises:
            DocumentValidationError: listing every missing or malformed field
        """
        missing = [name for name in REQUIRED_HEADER_FIELDS if not getattr(payload, name, None)]
        if missing:
            raise DocumentValidationError(missing=missing)

        try:
            return document_date_to_epoch(payload.invoice_date)
        except ValueError:
            raise DocumentValidationError(malformed=["invoice_date"])

    def validate_items(self, items: Sequence[DocumentItemIn]) -> None:
        malformed = []
        for position, item in enumerate(items):
            if item.product_id is None:
                malformed.append(f"{self.items_field}[{position}].product_id")
            if item.qty is None:
                malformed.append(f"{self.items_field}[{position}].qty")
        if malformed:
            raise DocumentValidationError(malformed=malformed)

    # ==================== PRODUCTS ====================

    async def resolve_products(self, product_ids: Iterable[int]) -> None:
        """
        Make sure every referenced product exists.

        Raises:
            DocumentReferenceError: with the ids that did not resolve
        """
        wanted = set(product_ids)
        if not wanted:
            return

        result = await self.db.execute(select(Product.id).where(Product.id.in_(wanted)))
        found = set(result.scalars().all())
        unknown = wanted - found
        if unknown:
            logger.warning(f"Document references unknown products: {sorted(unknown)}")
            raise DocumentReferenceError(unknown)

    async def adjust_stock(self, product_id: int, delta: int) -> None:
        """
        Move ``products.stock`` by ``delta`` with a single relative UPDATE.

        Stock is never read first, so concurrent documents cannot overwrite
        each other's movement.
        """
        result = await self.db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock + delta)
        )
        if result.rowcount == 0:
            # Deleted between resolution and update
            raise DocumentReferenceError([product_id])

    @staticmethod
    def distinct_product_ids(items: Sequence[DocumentItemIn]) -> List[int]:
        return sorted({item.product_id for item in items if item.product_id is not None})


TOTAL_COLUMNS = (
    "items_total", "freight", "total_taxable_value", "taxrate",
    "total_cgst", "total_sgst", "total_igst", "total_tax", "total",
)


def document_totals(document: Any) -> dict:
    """Header amounts of a sales or purchase document as a dict."""
    return {column: getattr(document, column) for column in TOTAL_COLUMNS}
