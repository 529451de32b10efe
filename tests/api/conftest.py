"""API test fixtures: the real app wired to the in-memory context."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from prostock.api.dependencies import get_assistant, get_context, get_llm
from prostock.api.main import create_app
from prostock.core.interfaces import HealthStatus, ILLMProvider, LLMResponse
from prostock.core.services import InventoryAssistant


@pytest.fixture
def llm() -> AsyncMock:
    provider = AsyncMock(spec=ILLMProvider)
    provider.chat.return_value = LLMResponse(text="Paper is well stocked.", model="test")
    provider.generate.return_value = LLMResponse(text="1. Reorder cement.", model="test")
    provider.check_health.return_value = HealthStatus(available=True, provider="test", model="test")
    return provider


@pytest.fixture
def app(ctx, llm):
    app = create_app()
    app.dependency_overrides[get_context] = lambda: ctx
    app.dependency_overrides[get_assistant] = lambda: InventoryAssistant(llm)
    app.dependency_overrides[get_llm] = lambda: llm
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def staff_client(client, staff_ctx):
    """Client whose context is signed in as STAFF."""
    return client


@pytest.fixture
async def admin_client(client, admin_ctx):
    """Client whose context is signed in as ADMIN."""
    return client
