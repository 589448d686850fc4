from .audit_client import AuditClient
from .customers_client import CustomersClient
from .products_client import ProductsClient

__all__ = [
    "AuditClient",
    "CustomersClient",
    "ProductsClient",
]
