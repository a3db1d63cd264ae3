from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.api.v1.endpoints import (
    # Access Control
    auth,
    # Master Data
    states,
    customers,
    vendors,
    # Product Catalog
    categories,
    companies,
    car_models,
    subcategories,
    products,
    # Sales
    invoices,
    sales,
    salex,
    # Procurement
    purchases,
    # Dashboard
    dashboard,
)


# Create main API router
api_router = APIRouter(prefix="/api/v1")

# Every route except login requires a signed-in user
protected = [Depends(get_current_user)]

# ==================== Access Control ====================
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"]
)

# ==================== Master Data ====================
api_router.include_router(
    states.router,
    prefix="/states",
    tags=["States"],
    dependencies=protected,
)
api_router.include_router(
    customers.router,
    prefix="/customers",
    tags=["Customers"],
    dependencies=protected,
)
api_router.include_router(
    vendors.router,
    prefix="/vendors",
    tags=["Vendors"],
    dependencies=protected,
)

# ==================== Product Catalog ====================
api_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["Categories"],
    dependencies=protected,
)
api_router.include_router(
    companies.router,
    prefix="/companies",
    tags=["Companies"],
    dependencies=protected,
)
api_router.include_router(
    car_models.router,
    prefix="/car-models",
    tags=["Car Models"],
    dependencies=protected,
)
api_router.include_router(
    subcategories.router,
    prefix="/subcategories",
    tags=["Subcategories"],
    dependencies=protected,
)
api_router.include_router(
    products.router,
    prefix="/products",
    tags=["Products"],
    dependencies=protected,
)

# ==================== Sales ====================
api_router.include_router(
    invoices.router,
    prefix="/invoices",
    tags=["Invoices"],
    dependencies=protected,
)
api_router.include_router(
    sales.router,
    prefix="/sales",
    tags=["Sales"],
    dependencies=protected,
)
api_router.include_router(
    salex.router,
    prefix="/salex",
    tags=["Salex"],
    dependencies=protected,
)

# ==================== Procurement ====================
api_router.include_router(
    purchases.router,
    prefix="/purchases",
    tags=["Purchases"],
    dependencies=protected,
)

# ==================== Dashboard ====================
api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=protected,
)
