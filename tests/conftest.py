"""Pytest configuration and fixtures."""

from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest

from prostock.application import AppContext, reset_services
from prostock.config import Settings, reset_settings
from prostock.core.entities import DashboardStats, InventoryItem, Supplier, User, UserRole
from prostock.core.interfaces import IClientStateStore, IInventoryBackend

BACKEND_URL = "https://backend.test/macros/exec"


class MemoryStateStore(IClientStateStore):
    """Dict-backed client state store."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch) -> Generator[None, None, None]:
    """Fresh settings and singletons per test, with files under tmp_path."""
    from prostock.infrastructure.backend import reset_backend_gateway
    from prostock.infrastructure.llm.ollama import reset_ollama_provider
    from prostock.infrastructure.storage.sqlite import reset_client_state_store

    monkeypatch.setenv("BACKEND_URL", BACKEND_URL)
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("EXPORT_OUTPUT_DIR", str(tmp_path / "exports"))
    reset_settings()
    yield
    reset_settings()
    reset_services()
    reset_backend_gateway()
    reset_ollama_provider()
    reset_client_state_store()


@pytest.fixture
def paper() -> InventoryItem:
    """100 Pcs on hand; also sold by the Box of 12 and the Pack of 6."""
    return InventoryItem.model_validate(
        {
            "id": 1,
            "sku": "BRG-001",
            "name": "Copy Paper A4",
            "category": "Office",
            "stock": 100,
            "minStock": 10,
            "price": 5000,
            "defaultUnit": "Pcs",
            "altUnit1": "Box",
            "conv1": 12,
            "altUnit2": "Pack",
            "conv2": "6",
            "altUnit3": "",
            "conv3": "",
            "status": "ACTIVE",
        }
    )


@pytest.fixture
def cement() -> InventoryItem:
    return InventoryItem(id="2", sku="BRG-002", name="Cement 50kg", stock=50, min_stock=5, default_unit="Sak")


@pytest.fixture
def suppliers() -> list[Supplier]:
    return [Supplier(id="S1", name="PT Sinar Jaya", contact_person="Andi", phone="0812")]


@pytest.fixture
def staff_user() -> User:
    return User(id="2", username="budi", name="Budi", role=UserRole.STAFF)


@pytest.fixture
def admin_user() -> User:
    return User(id="7", username="admin", name="Administrator", role=UserRole.ADMIN)


@pytest.fixture
def fake_backend(paper, cement, suppliers, staff_user) -> AsyncMock:
    """Backend double serving two items and one supplier."""
    backend = AsyncMock(spec=IInventoryBackend)
    backend.get_inventory.return_value = [paper, cement]
    backend.get_suppliers.return_value = suppliers
    backend.get_dashboard_stats.return_value = DashboardStats(total_items=2, total_stock=150)
    backend.login.return_value = staff_user
    backend.search_items.return_value = [paper]
    backend.get_transactions.return_value = []
    backend.get_users.return_value = []
    backend.get_activity_logs.return_value = []
    return backend


@pytest.fixture
def state_store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def ctx(fake_backend, state_store) -> AppContext:
    """Application root with nobody signed in."""
    return AppContext(backend=fake_backend, state_store=state_store, settings=Settings())


@pytest.fixture
async def staff_ctx(ctx, staff_user) -> AppContext:
    """Signed in as STAFF with a loaded cache."""
    ctx.sign_in(staff_user)
    await ctx.cache.refresh()
    return ctx


@pytest.fixture
async def admin_ctx(ctx, admin_user) -> AppContext:
    """Signed in as ADMIN with a loaded cache."""
    ctx.sign_in(admin_user)
    await ctx.cache.refresh()
    return ctx
