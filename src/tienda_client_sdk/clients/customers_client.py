from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import CustomerPatch, CustomerPayload
from ..validation import coerce_payload, validate_customer_payload
from .base import BaseClient, path_segment


@dataclass
class CustomersClient(BaseClient):
    entity: str = "clientes"

    def list_customers(self) -> list[Any]:
        return self._list("/clientes/", operation="list")

    def get_customer(self, customer_id: int) -> dict[str, Any]:
        return self._request("GET", f"/clientes/{path_segment(customer_id)}", operation="get")

    def search_customers(self, term: str) -> list[Any]:
        return self._list("/clientes/buscar/nombre", operation="search", params={"query": term})

    def find_by_email(self, email: str) -> dict[str, Any]:
        return self._request("GET", f"/clientes/buscar/email/{path_segment(email)}", operation="get_by_email")

    def filter_by_city(self, ciudad: str) -> list[Any]:
        return self._list("/clientes/", operation="filter", params={"ciudad": ciudad})

    def create_customer(
        self,
        customer: CustomerPayload | Mapping[str, Any],
        *,
        validate: bool = True,
    ) -> dict[str, Any] | None:
        payload = self._prepare(customer, validate=validate)
        return self._request(
            "POST",
            "/clientes/",
            operation="create",
            json_body=payload.model_dump(mode="json", exclude_none=True),
        )

    def replace_customer(
        self,
        customer_id: int,
        customer: CustomerPayload | Mapping[str, Any],
        *,
        validate: bool = True,
    ) -> dict[str, Any] | None:
        payload = self._prepare(customer, validate=validate)
        return self._request(
            "PUT",
            f"/clientes/{path_segment(customer_id)}",
            operation="replace",
            json_body=payload.model_dump(mode="json", exclude_none=True),
        )

    def patch_customer(self, customer_id: int, fields: CustomerPatch | Mapping[str, Any]) -> dict[str, Any] | None:
        patch = coerce_payload(fields, CustomerPatch)
        return self._request(
            "PATCH",
            f"/clientes/{path_segment(customer_id)}",
            operation="patch",
            json_body=patch.model_dump(mode="json", exclude_unset=True),
        )

    def delete_customer(self, customer_id: int) -> dict[str, Any] | None:
        return self._request("DELETE", f"/clientes/{path_segment(customer_id)}", operation="delete")

    def _prepare(self, customer: CustomerPayload | Mapping[str, Any], *, validate: bool) -> CustomerPayload:
        if validate:
            return validate_customer_payload(customer)
        return coerce_payload(customer, CustomerPayload)
