from __future__ import annotations

from dataclasses import dataclass

from .clients.audit_client import AuditClient
from .clients.customers_client import CustomersClient
from .clients.products_client import ProductsClient
from .config import ClientConfig
from .entities import AUDIT, CUSTOMERS, PRODUCTS
from .http_client import HttpClient
from .store import CollectionStore
from .sync import SyncCoordinator


@dataclass
class ApiSession:
    config: ClientConfig
    http: HttpClient | None = None

    def __post_init__(self) -> None:
        self.http = self.http or HttpClient(config=self.config)

    def products_client(self) -> ProductsClient:
        return ProductsClient(http=self.http)

    def customers_client(self) -> CustomersClient:
        return CustomersClient(http=self.http)

    def audit_client(self) -> AuditClient:
        return AuditClient(http=self.http)

    def products_sync(self) -> SyncCoordinator:
        return SyncCoordinator(CollectionStore(PRODUCTS), self.products_client().list_products)

    def customers_sync(self) -> SyncCoordinator:
        return SyncCoordinator(CollectionStore(CUSTOMERS), self.customers_client().list_customers)

    def audit_sync(self) -> SyncCoordinator:
        return SyncCoordinator(CollectionStore(AUDIT), self.audit_client().list_audit)
