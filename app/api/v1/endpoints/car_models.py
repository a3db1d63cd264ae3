from app.api.v1.endpoints.lookups import build_lookup_router
from app.models.category import CarModel


router = build_lookup_router(CarModel, "model_name", "Car model")
