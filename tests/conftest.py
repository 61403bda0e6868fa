"""Pytest fixtures and shared test configuration.

Provides a scripted stand-in for the LangGraph client so the session
protocol can be exercised without a server.

Fixtures:
    - fake_client: Installed as the process-wide LangGraph client
    - async_client: HTTPX client for API testing
    - thread_id: Fresh thread id for tests
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

import langgraph_chat.service.client as client_module
import langgraph_chat.service.relay as relay_module
from langgraph_chat.api import app
from tests.fakes import FakeLangGraphClient


@pytest.fixture(autouse=True)
def reset_caches(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test with empty client and assistant caches."""
    monkeypatch.delenv("LANGGRAPH_ASSISTANT_ID", raising=False)
    monkeypatch.setattr(client_module, "_client", None)
    monkeypatch.setattr(client_module, "_http_client", None)
    monkeypatch.setattr(relay_module, "_assistant_id", None)


@pytest.fixture
def fake_client(monkeypatch: pytest.MonkeyPatch) -> FakeLangGraphClient:
    """Install a fake as the process-wide LangGraph client."""
    fake = FakeLangGraphClient()
    monkeypatch.setattr(client_module, "_client", fake)
    return fake


@pytest.fixture
def thread_id() -> str:
    return "7f1c2a4e-3b1d-4a8e-9c55-0d6e2f1b9a10"


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
