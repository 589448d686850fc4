from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    """400/422 rejections of a write payload."""


class ConflictError(ApiError):
    """409 or conflict-style errors, e.g. a duplicated customer email."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class RequestTimeoutError(TransportError):
    """The backend did not answer within the configured maximum wait."""


class InvalidResponseError(TransportError):
    """A 2xx answer whose body is not the JSON shape the operation expects."""
