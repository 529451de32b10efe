"""SQLite storage implementations."""

from prostock.infrastructure.storage.sqlite.client_state_store import (
    SQLiteClientStateStore,
    get_client_state_store,
    reset_client_state_store,
)
from prostock.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_pool,
)

__all__ = [
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "SQLiteClientStateStore",
    "get_client_state_store",
    "reset_client_state_store",
]
