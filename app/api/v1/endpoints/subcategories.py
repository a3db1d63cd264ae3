from app.api.v1.endpoints.lookups import build_lookup_router
from app.models.category import ProductSubcategory


# Subcategories are only listed and added from the catalog screens
router = build_lookup_router(ProductSubcategory, "subcategory_name", "Subcategory", editable=False)
