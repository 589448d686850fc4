from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import ProductPatch, ProductPayload
from ..validation import coerce_payload, validate_product_payload
from .base import BaseClient, path_segment

MAX_DESCRIPTION_LENGTH = 250


@dataclass
class ProductsClient(BaseClient):
    entity: str = "productos"
    group: str | None = None

    def list_products(self) -> list[Any]:
        return self._list("/productos/", operation="list")

    def get_product(self, product_id: int) -> dict[str, Any]:
        return self._request("GET", f"/productos/{path_segment(product_id)}", operation="get")

    def search_products(self, nombre: str) -> list[Any]:
        return self._list("/productos/buscar/nombre", operation="search", params={"query": nombre})

    def filter_by_category(self, categoria: str) -> list[Any]:
        return self._list("/productos/", operation="filter", params={"categoria": categoria})

    def create_product(
        self,
        product: ProductPayload | Mapping[str, Any],
        *,
        sign: bool = True,
        validate: bool = True,
    ) -> dict[str, Any] | None:
        payload = self._prepare(product, validate=validate)
        if sign:
            payload = self._signed(payload, "Creado")
        return self._request(
            "POST",
            "/productos/",
            operation="create",
            json_body=payload.model_dump(mode="json", exclude_none=True),
        )

    def replace_product(
        self,
        product_id: int,
        product: ProductPayload | Mapping[str, Any],
        *,
        sign: bool = True,
        validate: bool = True,
    ) -> dict[str, Any] | None:
        payload = self._prepare(product, validate=validate)
        if sign:
            payload = self._signed(payload, "Editado")
        return self._request(
            "PUT",
            f"/productos/{path_segment(product_id)}",
            operation="replace",
            json_body=payload.model_dump(mode="json", exclude_none=True),
        )

    def patch_product(self, product_id: int, fields: ProductPatch | Mapping[str, Any]) -> dict[str, Any] | None:
        patch = coerce_payload(fields, ProductPatch)
        return self._request(
            "PATCH",
            f"/productos/{path_segment(product_id)}",
            operation="patch",
            json_body=patch.model_dump(mode="json", exclude_unset=True),
        )

    def delete_product(self, product_id: int) -> dict[str, Any] | None:
        return self._request("DELETE", f"/productos/{path_segment(product_id)}", operation="delete")

    def _prepare(self, product: ProductPayload | Mapping[str, Any], *, validate: bool) -> ProductPayload:
        if validate:
            return validate_product_payload(product)
        return coerce_payload(product, ProductPayload)

    def _signed(self, payload: ProductPayload, verb: str) -> ProductPayload:
        group = self.group or self.http.config.group
        return payload.model_copy(update={"descripcion": sign_description(payload.descripcion, verb, group)})


def sign_description(descripcion: str | None, verb: str, group: str) -> str:
    """Append ``[<verb> por <group>]`` so other groups can see who wrote the row."""
    signed = f"{descripcion or ''} [{verb} por {group}]".strip()
    return signed[:MAX_DESCRIPTION_LENGTH]
