"""Typed backend gateway: one method per RPC action, results parsed into entities."""

from datetime import date
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from prostock.config import get_logger
from prostock.core.entities import (
    ActivityLog,
    DashboardStats,
    HistoricalStockReport,
    InventoryItem,
    ManualTransaction,
    OpnameDocument,
    StockInDocument,
    StockOutDocument,
    Supplier,
    TransactionRecord,
    User,
)
from prostock.core.exceptions import BackendResponseError
from prostock.core.interfaces import BackendAction, IInventoryBackend
from prostock.infrastructure.backend.gas_client import GASClient

logger = get_logger(__name__)

T = TypeVar("T")


class BackendGateway(IInventoryBackend):
    """IInventoryBackend over a GASClient."""

    def __init__(self, client: GASClient | None = None):
        self._client = client or GASClient()

    @property
    def client(self) -> GASClient:
        return self._client

    def _parse(self, type_: Any, data: Any, action: BackendAction) -> Any:
        try:
            return TypeAdapter(type_).validate_python(data)
        except PydanticValidationError as e:
            logger.warning("backend_parse_failed", action=action.value, errors=e.error_count())
            raise BackendResponseError(f"unexpected {action.value} data: {e.errors()[0]['msg']}", action.value)

    async def _fetch(self, action: BackendAction, type_: Any, payload: dict[str, Any] | None = None) -> Any:
        data = await self._client.call(action, payload)
        return self._parse(type_, data, action)

    # Session

    async def login(self, username: str, password: str) -> User | None:
        data = await self._client.call(
            BackendAction.LOGIN, {"username": username, "password": password}
        )
        if not data:
            return None
        user: User = self._parse(User, data, BackendAction.LOGIN)
        return user.without_secret()

    # Inventory

    async def get_inventory(self) -> list[InventoryItem]:
        return await self._fetch(BackendAction.GET_INVENTORY, list[InventoryItem])

    async def search_items(self, query: str) -> list[InventoryItem]:
        return await self._fetch(BackendAction.SEARCH_ITEMS, list[InventoryItem], {"query": query})

    async def update_item(self, item: InventoryItem, actor: str) -> None:
        await self._client.call(BackendAction.UPDATE_ITEM, {"item": item.to_payload(), "actor": actor})

    async def delete_item(self, item_id: str, actor: str) -> None:
        await self._client.call(BackendAction.DELETE_ITEM, {"id": item_id, "actor": actor})

    # Suppliers

    async def get_suppliers(self) -> list[Supplier]:
        return await self._fetch(BackendAction.GET_SUPPLIERS, list[Supplier])

    async def update_supplier(self, supplier: Supplier, actor: str) -> None:
        await self._client.call(
            BackendAction.UPDATE_SUPPLIER,
            {"supplier": supplier.model_dump(by_alias=True, mode="json"), "actor": actor},
        )

    async def delete_supplier(self, supplier_id: str, actor: str) -> None:
        await self._client.call(BackendAction.DELETE_SUPPLIER, {"id": supplier_id, "actor": actor})

    # Users

    async def get_users(self) -> list[User]:
        users: list[User] = await self._fetch(BackendAction.GET_USERS, list[User])
        return [u.without_secret() for u in users]

    async def update_user(self, user: User, actor: str) -> None:
        await self._client.call(
            BackendAction.UPDATE_USER,
            {"user": user.model_dump(mode="json", exclude_none=True), "actor": actor},
        )

    async def delete_user(self, user_id: str, actor: str) -> None:
        await self._client.call(BackendAction.DELETE_USER, {"id": user_id, "actor": actor})

    # Transactions

    async def save_stock_in(self, document: StockInDocument) -> None:
        await self._client.call(BackendAction.SAVE_STOCK_IN, document.model_dump(by_alias=True, mode="json"))

    async def save_stock_out(self, document: StockOutDocument) -> None:
        await self._client.call(BackendAction.SAVE_STOCK_OUT, document.model_dump(by_alias=True, mode="json"))

    async def save_opname(self, document: OpnameDocument) -> None:
        await self._client.call(BackendAction.SAVE_OPNAME, document.model_dump(by_alias=True, mode="json"))

    async def add_transaction(self, transaction: ManualTransaction) -> None:
        await self._client.call(
            BackendAction.ADD_TRANSACTION, transaction.model_dump(by_alias=True, mode="json")
        )

    # Reporting

    async def get_dashboard_stats(self) -> DashboardStats:
        return await self._fetch(BackendAction.GET_DASHBOARD_STATS, DashboardStats)

    async def get_activity_logs(self) -> list[ActivityLog]:
        return await self._fetch(BackendAction.GET_LOGS, list[ActivityLog])

    async def get_transactions(self) -> list[TransactionRecord]:
        return await self._fetch(BackendAction.GET_TRANSACTIONS, list[TransactionRecord])

    async def get_history_report(
        self, item_id: str, start_date: date, end_date: date
    ) -> HistoricalStockReport:
        return await self._fetch(
            BackendAction.GET_HISTORY_REPORT,
            HistoricalStockReport,
            {
                "itemId": item_id,
                "startDate": start_date.isoformat(),
                "endDate": end_date.isoformat(),
            },
        )


# Singleton
_gateway: BackendGateway | None = None


def get_backend_gateway() -> BackendGateway:
    """Get or create the backend gateway singleton."""
    global _gateway
    if _gateway is None:
        _gateway = BackendGateway()
    return _gateway


def reset_backend_gateway() -> None:
    global _gateway
    _gateway = None
