from app.api.v1.endpoints.lookups import build_lookup_router
from app.models.category import ProductCategory


router = build_lookup_router(ProductCategory, "category_name", "Category")
