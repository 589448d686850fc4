from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SDK_SRC = BASE_DIR / "src"

sys.path.insert(0, str(SDK_SRC))

from tienda_client_sdk.config import ClientConfig  # noqa: E402
from tienda_client_sdk.http_client import HttpClient  # noqa: E402

BASE_URL = "https://api.example.com/api/v1"


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        env_name="test",
        api_base_url=BASE_URL,
        timeout_seconds=2.0,
        retries=1,
        retry_backoff_seconds=0.0,
        group="GRUPO_7",
    )


@pytest.fixture
def http(config: ClientConfig) -> HttpClient:
    return HttpClient(config)
