from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://localhost:8000/api/v1"
DEFAULT_GROUP = "GRUPO_1"
DEFAULT_GENERIC_ERROR_MESSAGE = "Ocurrió un error inesperado. Por favor, intenta nuevamente."


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    timeout_seconds: float = 10.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    verify_ssl: bool = True
    group: str = DEFAULT_GROUP
    generic_error_message: str = DEFAULT_GENERIC_ERROR_MESSAGE

    @property
    def request_timeout(self) -> tuple[float, float]:
        return (self.connect_timeout_seconds, self.timeout_seconds)


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("TIENDA_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"TIENDA_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("TIENDA_API_BASE_URL") or "").strip()
        or DEFAULT_BASE_URL
    )

    timeout_seconds = _read_float("TIENDA_TIMEOUT_SECONDS", "10")
    _validate(
        timeout_seconds > 0,
        f"Invalid TIENDA_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    connect_timeout_seconds = _read_float(
        "TIENDA_CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0))
    )
    _validate(
        connect_timeout_seconds > 0,
        (
            "Invalid TIENDA_CONNECT_TIMEOUT_SECONDS: "
            f"expected > 0, got {connect_timeout_seconds}"
        ),
    )

    retries = _read_int("TIENDA_RETRIES", "2")
    _validate(retries >= 0, f"Invalid TIENDA_RETRIES: expected >= 0, got {retries}")

    retry_backoff_seconds = _read_float("TIENDA_RETRY_BACKOFF_SECONDS", "0.3")
    _validate(
        retry_backoff_seconds >= 0,
        (
            "Invalid TIENDA_RETRY_BACKOFF_SECONDS: "
            f"expected >= 0, got {retry_backoff_seconds}"
        ),
    )

    max_connections = _read_int("TIENDA_MAX_CONNECTIONS", "10")
    _validate(
        max_connections >= 1,
        f"Invalid TIENDA_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    verify_ssl = _coerce_bool(os.getenv("TIENDA_VERIFY_SSL"), True)
    group = (os.getenv("TIENDA_GROUP") or DEFAULT_GROUP).strip()
    generic_error_message = (
        os.getenv("TIENDA_GENERIC_ERROR_MESSAGE") or DEFAULT_GENERIC_ERROR_MESSAGE
    ).strip()

    _validate(bool(group), "Invalid TIENDA_GROUP: expected a non-blank group label")

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout_seconds,
        timeout_seconds=timeout_seconds,
        retries=retries,
        retry_backoff_seconds=retry_backoff_seconds,
        max_connections=max_connections,
        verify_ssl=verify_ssl,
        group=group,
        generic_error_message=generic_error_message,
    )
