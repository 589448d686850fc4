from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from ..exceptions import InvalidResponseError
from ..http_client import HttpClient
from ..normalizers import normalize_rows


@dataclass
class BaseClient:
    http: HttpClient
    entity: str = "unknown"

    def _request(self, method: str, path: str, *, operation: str, **kwargs):
        return self.http.request(method, path, entity=self.entity, operation=operation, **kwargs)

    def _list(self, path: str, *, operation: str, params: dict[str, Any] | None = None) -> list[Any]:
        payload = self._request("GET", path, operation=operation, params=params)
        try:
            return normalize_rows(payload, strict=True)
        except ValueError as exc:
            raise invalid_listing(payload) from exc


def invalid_listing(payload: Any) -> InvalidResponseError:
    return InvalidResponseError(
        code="INVALID_RESPONSE",
        message="Expected a list of records",
        details={"payload_type": type(payload).__name__},
        status_code=0,
        raw_payload=payload,
    )


def path_segment(value: Any) -> str:
    return quote(str(value), safe="")
