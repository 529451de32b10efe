"""
Abstract interface for the remote inventory backend.

The backend owns persistence, stock arithmetic and authorization; the
client only calls these operations and caches what they return.
"""

from abc import ABC, abstractmethod
from datetime import date
from enum import Enum

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


class BackendAction(str, Enum):
    """RPC action names understood by the backend endpoint."""

    LOGIN = "LOGIN"
    GET_INVENTORY = "GET_INVENTORY"
    SEARCH_ITEMS = "SEARCH_ITEMS"
    UPDATE_ITEM = "UPDATE_ITEM"
    DELETE_ITEM = "DELETE_ITEM"
    GET_SUPPLIERS = "GET_SUPPLIERS"
    UPDATE_SUPPLIER = "UPDATE_SUPPLIER"
    DELETE_SUPPLIER = "DELETE_SUPPLIER"
    GET_USERS = "GET_USERS"
    UPDATE_USER = "UPDATE_USER"
    DELETE_USER = "DELETE_USER"
    SAVE_STOCK_IN = "SAVE_STOCK_IN"
    SAVE_STOCK_OUT = "SAVE_STOCK_OUT"
    SAVE_OPNAME = "SAVE_OPNAME"
    ADD_TRANSACTION = "ADD_TRANSACTION"
    GET_DASHBOARD_STATS = "GET_DASHBOARD_STATS"
    GET_LOGS = "GET_LOGS"
    GET_TRANSACTIONS = "GET_TRANSACTIONS"
    GET_HISTORY_REPORT = "GET_HISTORY_REPORT"

    @property
    def is_read_only(self) -> bool:
        """Safe to retry: the action never mutates backend state."""
        return self in _READ_ONLY_ACTIONS


_READ_ONLY_ACTIONS = frozenset(
    {
        BackendAction.LOGIN,
        BackendAction.GET_INVENTORY,
        BackendAction.SEARCH_ITEMS,
        BackendAction.GET_SUPPLIERS,
        BackendAction.GET_USERS,
        BackendAction.GET_DASHBOARD_STATS,
        BackendAction.GET_LOGS,
        BackendAction.GET_TRANSACTIONS,
        BackendAction.GET_HISTORY_REPORT,
    }
)


class IStockDataSource(ABC):
    """The three datasets the client cache is built from."""

    @abstractmethod
    async def get_inventory(self) -> list[InventoryItem]:
        """Get every inventory item."""
        pass

    @abstractmethod
    async def get_suppliers(self) -> list[Supplier]:
        """Get every supplier."""
        pass

    @abstractmethod
    async def get_dashboard_stats(self) -> DashboardStats:
        """Get dashboard aggregates."""
        pass


class IInventoryBackend(IStockDataSource):
    """Full backend contract used by the client."""

    @abstractmethod
    async def login(self, username: str, password: str) -> User | None:
        """Check credentials. Returns None when rejected."""
        pass

    @abstractmethod
    async def search_items(self, query: str) -> list[InventoryItem]:
        """Find items by partial name or SKU."""
        pass

    @abstractmethod
    async def update_item(self, item: InventoryItem, actor: str) -> None:
        """Create or update an item (empty id creates)."""
        pass

    @abstractmethod
    async def delete_item(self, item_id: str, actor: str) -> None:
        """Delete an item."""
        pass

    @abstractmethod
    async def update_supplier(self, supplier: Supplier, actor: str) -> None:
        """Create or update a supplier."""
        pass

    @abstractmethod
    async def delete_supplier(self, supplier_id: str, actor: str) -> None:
        """Delete a supplier."""
        pass

    @abstractmethod
    async def get_users(self) -> list[User]:
        """List user accounts."""
        pass

    @abstractmethod
    async def update_user(self, user: User, actor: str) -> None:
        """Create or update a user account."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: str, actor: str) -> None:
        """Delete a user account."""
        pass

    @abstractmethod
    async def save_stock_in(self, document: StockInDocument) -> None:
        """Commit an inbound receipt in one batch."""
        pass

    @abstractmethod
    async def save_stock_out(self, document: StockOutDocument) -> None:
        """Commit an outbound issuance in one batch."""
        pass

    @abstractmethod
    async def save_opname(self, document: OpnameDocument) -> None:
        """Commit a physical count session in one batch."""
        pass

    @abstractmethod
    async def add_transaction(self, transaction: ManualTransaction) -> None:
        """Record a single manual movement."""
        pass

    @abstractmethod
    async def get_activity_logs(self) -> list[ActivityLog]:
        """Get the backend audit trail."""
        pass

    @abstractmethod
    async def get_transactions(self) -> list[TransactionRecord]:
        """Get the flat movement ledger."""
        pass

    @abstractmethod
    async def get_history_report(
        self, item_id: str, start_date: date, end_date: date
    ) -> HistoricalStockReport:
        """Get one item's opening/closing balance and movements for a range."""
        pass
