from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import InvalidResponseError, RequestTimeoutError, TransportError

logger = logging.getLogger(__name__)

ResponseHook = Callable[[requests.Response], None]
RequestHook = Callable[[str, str, dict[str, Any]], None]


@dataclass
class LastOperation:
    entity: str
    operation: str
    duration_ms: int
    result: str


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    before_request: RequestHook | None = None
    after_response: ResponseHook | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        entity: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        request_context = {
            "headers": request_headers,
            "json_body": json_body,
            "params": params,
        }
        if self.before_request:
            self.before_request(normalized_method, url, request_context)

        # Writes are never replayed: the backend has no idempotency keys.
        can_retry = normalized_method in {"GET", "HEAD"}
        attempts = self.config.retries + 1 if can_retry else 1

        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=params,
                    timeout=self.config.request_timeout,
                    verify=self.config.verify_ssl,
                )
            except requests.Timeout as exc:
                # One maximum wait per call: a timed-out read is not replayed.
                self._record_operation(entity, operation, started, "timeout")
                raise RequestTimeoutError(
                    code="TIMEOUT",
                    message=f"No response within {self.config.timeout_seconds:g}s",
                    details={"type": type(exc).__name__, "url": url},
                    status_code=0,
                    raw_payload=None,
                ) from exc
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(entity, operation, started, "network_error")
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__, "url": url},
                        status_code=0,
                        raw_payload=None,
                    ) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            logger.info(
                "http_retry",
                extra={"entity": entity, "operation": operation, "attempt": attempt + 1},
            )
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request failed without response")

        if self.after_response:
            self.after_response(response)
        if response.ok:
            if not response.content:
                self._record_operation(entity, operation, started, "success")
                return None
            try:
                payload = response.json()
            except ValueError as exc:
                self._record_operation(entity, operation, started, "invalid_response")
                raise InvalidResponseError(
                    code="INVALID_RESPONSE",
                    message=f"Response {response.status_code} is not valid JSON",
                    details={"content_type": response.headers.get("Content-Type"), "url": url},
                    status_code=response.status_code,
                    raw_payload=response.text[:200],
                ) from exc
            self._record_operation(entity, operation, started, "success")
            return payload

        self._record_operation(entity, operation, started, "error")
        try:
            payload = response.json()
        except json.JSONDecodeError:
            payload = None
        if not isinstance(payload, dict):
            raise map_error(
                response.status_code,
                {"message": f"Error {response.status_code}: {response.reason}"},
                fallback_message=self.config.generic_error_message,
            )
        raise map_error(
            response.status_code,
            payload,
            fallback_message=self.config.generic_error_message,
        )

    def _record_operation(self, entity: str, operation: str, started: float, result: str) -> None:
        self.last_operation = LastOperation(
            entity=entity,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
        )
