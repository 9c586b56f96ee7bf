from typing import AsyncGenerator

import pytest

from apiservice import ApiService, Config, InMemoryTokenStore


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("APISERVICE_URL", raising=False)
    monkeypatch.delenv("APISERVICE_CACHE_API", raising=False)
    monkeypatch.delenv("APISERVICE_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("APISERVICE_DISABLE_SSL_VERIFY", raising=False)
    monkeypatch.delenv("APISERVICE_HTTP_TIMEOUT", raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com/v1"


@pytest.fixture
def token() -> str:
    return "token-1"


@pytest.fixture
def config(base_url: str) -> Config:
    return Config(api=base_url)


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
async def service(
    config: Config, token_store: InMemoryTokenStore
) -> AsyncGenerator[ApiService, None]:
    service = ApiService(config, token_store)
    yield service
    await service.aclose()
