from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .catalogs import CITIES, PRODUCT_CATEGORIES
from .filters import field_value
from .models import CustomerPayload, ProductPayload

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\d{10}$")
_DOCUMENT_RE = re.compile(r"^\d{6,10}$")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


class ClientValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        return "; ".join(f"{issue.field}: {issue.reason}" for issue in self.issues)


def is_valid_email(value: str | None) -> bool:
    return bool(value) and bool(_EMAIL_RE.match(value))


def is_valid_phone(value: str | None) -> bool:
    return bool(value) and bool(_PHONE_RE.match(value))


def is_valid_document(value: str | None) -> bool:
    return bool(value) and bool(_DOCUMENT_RE.match(value))


def product_issues(record: Any) -> list[ValidationIssue]:
    """Constraint violations of a product, canonical or payload.

    Normalized records are never rejected, so a listing can show this next to
    a row that the backend stored with bad data.
    """
    issues: list[ValidationIssue] = []
    nombre = field_value(record, "nombre")
    if not isinstance(nombre, str) or not nombre.strip():
        issues.append(ValidationIssue("nombre", "El nombre es obligatorio"))
    precio = field_value(record, "precio")
    if not isinstance(precio, (Decimal, int, float)) or isinstance(precio, bool) or precio <= 0:
        issues.append(ValidationIssue("precio", "El precio debe ser mayor a 0"))
    stock = field_value(record, "stock")
    if not isinstance(stock, int) or isinstance(stock, bool) or stock < 0:
        issues.append(ValidationIssue("stock", "El stock no puede ser negativo"))
    if field_value(record, "categoria") not in PRODUCT_CATEGORIES:
        issues.append(ValidationIssue("categoria", "Debes seleccionar una categoría válida"))
    return issues


def customer_issues(record: Any) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    nombre = field_value(record, "nombre")
    if not isinstance(nombre, str) or not nombre.strip():
        issues.append(ValidationIssue("nombre", "El nombre es obligatorio"))
    if not is_valid_email(field_value(record, "email")):
        issues.append(ValidationIssue("email", "Email inválido (ejemplo: juan@gmail.com)"))
    if not is_valid_phone(field_value(record, "telefono")):
        issues.append(ValidationIssue("telefono", "Teléfono inválido (debe tener 10 dígitos)"))
    if not is_valid_document(field_value(record, "documento")):
        issues.append(ValidationIssue("documento", "Documento inválido (6 a 10 dígitos)"))
    if field_value(record, "ciudad") not in CITIES:
        issues.append(ValidationIssue("ciudad", "Debes seleccionar una ciudad válida"))
    return issues


def validate_product_payload(payload: ProductPayload | Mapping[str, Any]) -> ProductPayload:
    data = coerce_payload(payload, ProductPayload)
    issues = product_issues(data)
    if issues:
        raise ClientValidationError(issues)
    return data


def validate_customer_payload(payload: CustomerPayload | Mapping[str, Any]) -> CustomerPayload:
    data = coerce_payload(payload, CustomerPayload)
    issues = customer_issues(data)
    if issues:
        raise ClientValidationError(issues)
    return data


def coerce_payload(payload: M | Mapping[str, Any], model_type: type[M]) -> M:
    if isinstance(payload, model_type):
        return payload
    try:
        return model_type.model_validate(payload)
    except PydanticValidationError as exc:
        issues = [
            ValidationIssue(
                field=".".join(str(part) for part in error.get("loc", ("payload",))),
                reason=error.get("msg", "Invalid value"),
            )
            for error in exc.errors()
        ]
        raise ClientValidationError(issues) from exc
