# Services module
from app.services.auth_service import AuthService
from app.services.user_service import UserService
from app.services.invoice_service import InvoiceService
from app.services.purchase_service import PurchaseService
from app.services.sales_service import SalesService
from app.services.product_service import ProductService
from app.services.catalog_service import LookupService
from app.services.dashboard_service import DashboardService

__all__ = [
    "AuthService",
    "UserService",
    "InvoiceService",
    "PurchaseService",
    "SalesService",
    "ProductService",
    "LookupService",
    "DashboardService",
]
