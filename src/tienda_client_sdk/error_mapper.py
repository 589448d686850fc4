from __future__ import annotations

from typing import Mapping

from .exceptions import ApiError, ConflictError, NotFoundError, ServerError, ValidationError


def map_error(
    status_code: int,
    payload: Mapping[str, object] | None,
    *,
    fallback_message: str,
) -> ApiError:
    """Build the exception for a non-2xx response.

    The backend reports errors as ``{"detail": ...}`` (FastAPI) or
    ``{"message": ...}``; when neither is present the caller's generic
    message is used.
    """
    payload = payload or {}
    code = str(payload.get("code") or _code_from_status(status_code))
    message = _message_from_payload(payload) or fallback_message
    details = payload.get("details")
    if details is None and not isinstance(payload.get("detail"), str):
        details = payload.get("detail")
    mapped: type[ApiError]
    if status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        details=details,
        status_code=status_code,
        raw_payload=dict(payload),
    )


def _message_from_payload(payload: Mapping[str, object]) -> str | None:
    for key in ("detail", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _code_from_status(status_code: int) -> str:
    if status_code == 404:
        return "NOT_FOUND"
    if status_code in {400, 422}:
        return "VALIDATION_ERROR"
    if status_code == 409:
        return "CONFLICT"
    if status_code >= 500:
        return "SERVER_ERROR"
    return "HTTP_ERROR"
