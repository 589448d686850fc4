from .audit_trail import compare_changes, group_options
from .config import ClientConfig, ConfigError, load_config
from .entities import AUDIT, CUSTOMERS, PRODUCTS, EntityProfile, aggregate, get_profile
from .exceptions import (
    ApiError,
    ConflictError,
    InvalidResponseError,
    NotFoundError,
    RequestTimeoutError,
    ServerError,
    TransportError,
    ValidationError,
)
from .filters import FilterState, apply_filters
from .http_client import HttpClient
from .json_decoding import safe_json_decode
from .models import AuditRecord, Customer, CustomerPayload, Product, ProductPayload
from .normalizers import normalize_audit_record, normalize_customer, normalize_product, normalize_rows
from .session import ApiSession
from .statistics import CollectionStats
from .store import CollectionStore
from .sync import LoadState, SyncCoordinator, SyncSnapshot, ViewState
from .validation import ClientValidationError, ValidationIssue, customer_issues, product_issues

__all__ = [
    "AUDIT",
    "ApiError",
    "ApiSession",
    "AuditRecord",
    "CUSTOMERS",
    "ClientConfig",
    "ClientValidationError",
    "CollectionStats",
    "CollectionStore",
    "ConfigError",
    "ConflictError",
    "Customer",
    "CustomerPayload",
    "EntityProfile",
    "FilterState",
    "HttpClient",
    "InvalidResponseError",
    "LoadState",
    "NotFoundError",
    "PRODUCTS",
    "Product",
    "ProductPayload",
    "RequestTimeoutError",
    "ServerError",
    "SyncCoordinator",
    "SyncSnapshot",
    "TransportError",
    "ValidationError",
    "ValidationIssue",
    "ViewState",
    "aggregate",
    "apply_filters",
    "compare_changes",
    "customer_issues",
    "get_profile",
    "group_options",
    "load_config",
    "normalize_audit_record",
    "normalize_customer",
    "normalize_product",
    "normalize_rows",
    "product_issues",
    "safe_json_decode",
]
