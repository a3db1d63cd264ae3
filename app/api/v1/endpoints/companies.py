from app.api.v1.endpoints.lookups import build_lookup_router
from app.models.company import ProductCompany


router = build_lookup_router(ProductCompany, "company_name", "Company")
