from app.models.user import User, UserStatus
from app.models.state import State
from app.models.customer import Customer
from app.models.vendor import Vendor
from app.models.category import ProductCategory, ProductSubcategory, CarModel
from app.models.company import ProductCompany
from app.models.product import Product
from app.models.billing import (
    InvoiceStatus,
    PaymentMode,
    Invoice,
    InvoiceBillingDetail,
    InvoiceShippingDetail,
    InvoiceTransportDetail,
    InvoiceItem,
    SalexInvoice,
    SalexBillingDetail,
    SalexItem,
)
from app.models.purchase import Purchase, PurchaseItem

__all__ = [
    "User",
    "UserStatus",
    "State",
    "Customer",
    "Vendor",
    "ProductCategory",
    "ProductSubcategory",
    "CarModel",
    "ProductCompany",
    "Product",
    "InvoiceStatus",
    "PaymentMode",
    "Invoice",
    "InvoiceBillingDetail",
    "InvoiceShippingDetail",
    "InvoiceTransportDetail",
    "InvoiceItem",
    "SalexInvoice",
    "SalexBillingDetail",
    "SalexItem",
    "Purchase",
    "PurchaseItem",
]
