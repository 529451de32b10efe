"""Core domain entities."""

from prostock.core.entities.assistant import ChatMessage, MessageRole
from prostock.core.entities.inventory import (
    MAX_ALT_UNITS,
    InventoryItem,
    ItemStatus,
    Supplier,
)
from prostock.core.entities.report import (
    DashboardStats,
    HistoricalStockReport,
    TopItem,
)
from prostock.core.entities.transaction import (
    ManualTransaction,
    OpnameDocument,
    OpnameItem,
    StockInDocument,
    StockOutDocument,
    Transaction,
    TransactionItem,
    TransactionRecord,
    TransactionType,
    parse_timestamp,
)
from prostock.core.entities.unit import UnitOption, normalize_alt_units, parse_factor
from prostock.core.entities.user import ActivityLog, User, UserRole

__all__ = [
    # Inventory entities
    "InventoryItem",
    "ItemStatus",
    "Supplier",
    "MAX_ALT_UNITS",
    # Unit entities
    "UnitOption",
    "parse_factor",
    "normalize_alt_units",
    # Transaction entities
    "TransactionType",
    "TransactionItem",
    "OpnameItem",
    "Transaction",
    "ManualTransaction",
    "StockInDocument",
    "StockOutDocument",
    "OpnameDocument",
    "TransactionRecord",
    "parse_timestamp",
    # Report entities
    "DashboardStats",
    "HistoricalStockReport",
    "TopItem",
    # User entities
    "User",
    "UserRole",
    "ActivityLog",
    # Assistant entities
    "ChatMessage",
    "MessageRole",
]
