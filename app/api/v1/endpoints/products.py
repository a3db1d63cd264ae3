"""API endpoints for the product catalog."""
from typing import Optional
import logging

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import DB
from app.config import settings
from app.schemas.base import PaginationMeta
from app.schemas.catalog import ProductFilterOptions
from app.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductDetail,
    ProductEnriched,
    ProductListResponse,
    OptimizedProductListResponse,
)
from app.services.product_service import ProductService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ProductListResponse)
async def list_products(
    db: DB,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = None,
    category: Optional[int] = Query(None, description="Category id"),
):
    """List products, newest first."""
    service = ProductService(db)
    products, total = await service.get_products(
        search=search,
        category_id=category,
        skip=(page - 1) * limit,
        limit=limit,
    )
    return ProductListResponse(
        products=[ProductResponse.model_validate(p) for p in products],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.get("/optimized", response_model=OptimizedProductListResponse)
async def list_products_optimized(
    db: DB,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = None,
    category: Optional[str] = Query(None, description="Category name"),
    company: Optional[str] = Query(None, description="Company name"),
    subcategory: Optional[str] = Query(None, description="Car model name"),
    model: Optional[str] = Query(None, description="Comma-separated car model ids"),
    low_stock: bool = False,
):
    """Catalog listing with lookup names, latest purchase rate and low-stock flag."""
    service = ProductService(db)
    rows, total = await service.get_products_optimized(
        page=page,
        limit=limit,
        search=search,
        category=category,
        company=company,
        subcategory=subcategory,
        model=model,
        low_stock=low_stock,
    )
    return OptimizedProductListResponse(
        products=[ProductEnriched(**row) for row in rows],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.get("/filters", response_model=ProductFilterOptions)
async def get_filter_options(db: DB):
    """Option lists for the catalog filters."""
    service = ProductService(db)
    return ProductFilterOptions(**await service.get_filter_options())


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(data: ProductCreate, db: DB):
    """Create a product."""
    if not data.product_name or not data.product_name.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product name is required"
        )

    service = ProductService(db)
    if data.company_id is not None and not await service.company_exists(data.company_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid company selected"
        )

    product = await service.create_product(data)
    return ProductResponse.model_validate(product)


@router.get("/{product_id}", response_model=ProductDetail)
async def get_product(product_id: int, db: DB):
    """Get a product with its lookup names."""
    service = ProductService(db)
    product = await service.get_product_by_id(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    enriched = await service.enrich([product])
    return ProductDetail(**enriched[0])
