import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import select, func, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.formatting import normalize_search_text
from app.models.category import ProductCategory, ProductSubcategory, CarModel
from app.models.company import ProductCompany
from app.models.product import Product
from app.models.purchase import PurchaseItem
from app.schemas.product import ProductCreate, EXTRA_PRODUCT_FIELDS


logger = logging.getLogger(__name__)


class ProductService:
    """Service for managing products and their lookup names."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ==================== PRODUCT METHODS ====================

    def _search_filter(self, search: str):
        """
        Match the raw term and its normalized form against name, display
        name and part number.
        """
        columns = (Product.product_name, Product.display_name, Product.part_no)
        clauses = [column.ilike(f"%{search}%") for column in columns]
        normalized = normalize_search_text(search)
        if normalized and normalized != search:
            clauses.extend(column.ilike(f"%{normalized}%") for column in columns)
        return or_(*clauses)

    async def get_products(
        self,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Product], int]:
        """Get products, newest first."""
        filters = []
        if search:
            filters.append(self._search_filter(search))
        if category_id is not None:
            filters.append(Product.product_category_id == category_id)

        stmt = select(Product).order_by(Product.id.desc())
        count_stmt = select(func.count(Product.id))
        if filters:
            stmt = stmt.where(and_(*filters))
            count_stmt = count_stmt.where(and_(*filters))

        total = (await self.db.execute(count_stmt)).scalar() or 0
        result = await self.db.execute(stmt.offset(skip).limit(limit))
        return list(result.scalars().all()), total

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return await self.db.get(Product, product_id)

    async def company_exists(self, company_id: int) -> bool:
        return await self.db.get(ProductCompany, company_id) is not None

    async def create_product(self, data: ProductCreate) -> Product:
        """Create a product. Caller has already checked name and company."""
        product_name = data.product_name.strip()
        product = Product(
            product_name=product_name,
            display_name=data.display_name or product_name,
            part_no=data.part_no,
            product_category_id=data.product_category_id,
            product_subcategory_id=data.product_subcategory_id,
            car_model_ids=data.car_model_ids,
            company_id=data.company_id,
            stock=data.stock or 0,
            min_stock=data.min_stock,
            rate=data.rate,
            hsn=data.hsn,
            notes=build_product_notes(data),
        )
        self.db.add(product)
        await self.db.flush()
        await self.db.refresh(product)
        logger.info(f"Created product {product.id} ({product.product_name})")
        return product

    # ==================== ENRICHMENT ====================

    async def enrich(self, products: List[Product], with_purchase_rate: bool = False) -> List[dict]:
        """Attach category, subcategory, company and car-model names to products."""
        if not products:
            return []

        categories = await self._names(
            ProductCategory, ProductCategory.category_name,
            {p.product_category_id for p in products if p.product_category_id},
        )
        subcategories = await self._names(
            ProductSubcategory, ProductSubcategory.subcategory_name,
            {p.product_subcategory_id for p in products if p.product_subcategory_id},
        )
        companies = await self._names(
            ProductCompany, ProductCompany.company_name,
            {p.company_id for p in products if p.company_id},
        )
        car_models = await self._names(
            CarModel, CarModel.model_name,
            {model_id for p in products for model_id in p.car_model_id_list},
        )
        rates = await self.latest_purchase_rates([p.id for p in products]) if with_purchase_rate else {}

        enriched = []
        for product in products:
            model_names = [car_models[i] for i in product.car_model_id_list if i in car_models]
            row = {
                column.key: getattr(product, column.key)
                for column in Product.__table__.columns
            }
            row.update(
                category_name=categories.get(product.product_category_id, ""),
                subcategory_name=subcategories.get(product.product_subcategory_id, ""),
                company_name=companies.get(product.company_id, ""),
                car_model_names=model_names,
                car_models_display=", ".join(model_names),
            )
            if with_purchase_rate:
                row["latest_purchase_rate"] = rates.get(product.id, product.rate)
                row["low_stock"] = is_low_stock(product)
            enriched.append(row)
        return enriched

    async def latest_purchase_rates(self, product_ids: List[int]) -> Dict[int, object]:
        """Rate of the most recent purchase line for each product that has one."""
        if not product_ids:
            return {}

        latest = (
            select(
                PurchaseItem.product_id.label("product_id"),
                func.max(PurchaseItem.invoice_date).label("max_date"),
            )
            .where(PurchaseItem.product_id.in_(product_ids))
            .group_by(PurchaseItem.product_id)
            .subquery()
        )
        result = await self.db.execute(
            select(PurchaseItem.product_id, PurchaseItem.rate)
            .join(
                latest,
                and_(
                    PurchaseItem.product_id == latest.c.product_id,
                    PurchaseItem.invoice_date == latest.c.max_date,
                ),
            )
            .order_by(PurchaseItem.id)
        )
        # Several lines on the same latest date: the last entered wins
        return {product_id: rate for product_id, rate in result.all()}

    async def _names(self, model, name_column, ids: Iterable[int]) -> Dict[int, str]:
        ids = set(ids)
        if not ids:
            return {}
        result = await self.db.execute(select(model.id, name_column).where(model.id.in_(ids)))
        return {row_id: name for row_id, name in result.all()}

    # ==================== OPTIMIZED LISTING ====================

    async def _id_by_name(self, model, name_column, name: str) -> Optional[int]:
        result = await self.db.execute(select(model.id).where(name_column == name).limit(1))
        return result.scalar_one_or_none()

    async def get_products_optimized(
        self,
        page: int = 1,
        limit: int = 50,
        search: Optional[str] = None,
        category: Optional[str] = None,
        company: Optional[str] = None,
        subcategory: Optional[str] = None,
        model: Optional[str] = None,
        low_stock: bool = False,
    ) -> Tuple[List[dict], int]:
        """
        Product listing for the catalog screen.

        ``category`` and ``company`` are names resolved to ids. ``subcategory``
        is a car-model name and ``model`` a comma-separated list of car-model
        ids; both match against the product's car-model list. A name that does
        not resolve matches nothing.
        """
        filters = []
        if search:
            filters.append(self._search_filter(search))
        if category:
            category_id = await self._id_by_name(ProductCategory, ProductCategory.category_name, category)
            if category_id is None:
                return [], 0
            filters.append(Product.product_category_id == category_id)
        if company:
            company_id = await self._id_by_name(ProductCompany, ProductCompany.company_name, company)
            if company_id is None:
                return [], 0
            filters.append(Product.company_id == company_id)
        if low_stock:
            filters.append(or_(
                Product.stock < func.coalesce(Product.min_stock, 0),
                Product.stock < settings.LOW_STOCK_FLOOR,
            ))

        wanted_models = set()
        if subcategory:
            car_model_id = await self._id_by_name(CarModel, CarModel.model_name, subcategory)
            if car_model_id is None:
                return [], 0
            wanted_models.add(car_model_id)
        selected = set()
        if model:
            selected = {int(raw) for raw in model.split(",") if raw.strip().isdigit()}

        stmt = select(Product).order_by(Product.id.desc())
        count_stmt = select(func.count(Product.id))
        if filters:
            stmt = stmt.where(and_(*filters))
            count_stmt = count_stmt.where(and_(*filters))

        skip = (page - 1) * limit
        if wanted_models or selected:
            # Car models live in a comma-separated column; filter in Python, then page
            products = list((await self.db.execute(stmt)).scalars().all())
            if wanted_models:
                products = [p for p in products if wanted_models & set(p.car_model_id_list)]
            if selected:
                products = [p for p in products if selected & set(p.car_model_id_list)]
            total = len(products)
            products = products[skip:skip + limit]
        else:
            total = (await self.db.execute(count_stmt)).scalar() or 0
            products = list((await self.db.execute(stmt.offset(skip).limit(limit))).scalars().all())

        return await self.enrich(products, with_purchase_rate=True), total

    async def get_filter_options(self) -> dict:
        """Sorted option lists for the catalog filter bar."""
        options = {}
        for key, model, column in (
            ("categories", ProductCategory, ProductCategory.category_name),
            ("subcategories", ProductSubcategory, ProductSubcategory.subcategory_name),
            ("companies", ProductCompany, ProductCompany.company_name),
        ):
            result = await self.db.execute(select(model.id, column).order_by(column))
            options[key] = [{"id": row_id, "name": name} for row_id, name in result.all()]
        return options


def is_low_stock(product: Product) -> bool:
    stock = product.stock or 0
    return stock < (product.min_stock or 0) or stock < settings.LOW_STOCK_FLOOR


def build_product_notes(data: ProductCreate) -> Optional[str]:
    """Fold the extra create fields into notes under an "Additional Data:" block."""
    extra_lines = [
        f"{label}: {getattr(data, field)}"
        for field, label in EXTRA_PRODUCT_FIELDS
        if getattr(data, field)
    ]
    if not extra_lines:
        return data.notes
    block = "Additional Data:\n" + "\n".join(extra_lines)
    return f"{data.notes}\n{block}" if data.notes else block
