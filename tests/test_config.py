from __future__ import annotations

import pytest

from tienda_client_sdk.config import DEFAULT_BASE_URL, ConfigError, load_config

_KEYS = [
    "TIENDA_ENV",
    "TIENDA_API_BASE_URL",
    "TIENDA_API_BASE_URL_DEV",
    "TIENDA_TIMEOUT_SECONDS",
    "TIENDA_CONNECT_TIMEOUT_SECONDS",
    "TIENDA_RETRIES",
    "TIENDA_RETRY_BACKOFF_SECONDS",
    "TIENDA_MAX_CONNECTIONS",
    "TIENDA_VERIFY_SSL",
    "TIENDA_GROUP",
    "TIENDA_GENERIC_ERROR_MESSAGE",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)


def test_config_defaults(tmp_path) -> None:
    config = load_config(str(tmp_path / ".missing-env"))

    assert config.api_base_url == DEFAULT_BASE_URL
    assert config.timeout_seconds == 10.0
    assert config.connect_timeout_seconds == 5.0
    assert config.request_timeout == (5.0, 10.0)
    assert config.retries == 2
    assert config.group == "GRUPO_1"
    assert config.verify_ssl is True


def test_env_specific_base_url_wins(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TIENDA_ENV", "dev")
    monkeypatch.setenv("TIENDA_API_BASE_URL", "https://generic.example.com/api/v1")
    monkeypatch.setenv("TIENDA_API_BASE_URL_DEV", "https://dev.example.com/api/v1/")

    config = load_config(str(tmp_path / ".missing-env"))

    assert config.api_base_url == "https://dev.example.com/api/v1"


def test_dotenv_file_is_loaded(monkeypatch, tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("TIENDA_GROUP=GRUPO_9\nTIENDA_TIMEOUT_SECONDS=3\n", encoding="utf-8")

    config = load_config(str(env_file))

    assert config.group == "GRUPO_9"
    assert config.timeout_seconds == 3.0
    assert config.connect_timeout_seconds == 3.0
    monkeypatch.delenv("TIENDA_GROUP", raising=False)
    monkeypatch.delenv("TIENDA_TIMEOUT_SECONDS", raising=False)


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("TIENDA_TIMEOUT_SECONDS", "0"),
        ("TIENDA_TIMEOUT_SECONDS", "ten"),
        ("TIENDA_RETRIES", "-1"),
        ("TIENDA_RETRY_BACKOFF_SECONDS", "-0.1"),
        ("TIENDA_MAX_CONNECTIONS", "0"),
        ("TIENDA_GROUP", "   "),
    ],
)
def test_invalid_values_raise_config_error(monkeypatch, tmp_path, key, value) -> None:
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError):
        load_config(str(tmp_path / ".missing-env"))
