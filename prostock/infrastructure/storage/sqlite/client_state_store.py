"""SQLite implementation of the client state store."""

from prostock.config import get_logger
from prostock.core.interfaces import IClientStateStore
from prostock.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool

logger = get_logger(__name__)


class SQLiteClientStateStore(IClientStateStore):
    """Key/value rows in the `client_state` table."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    async def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            self._pool = await get_pool()
        return self._pool

    async def get(self, key: str) -> str | None:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT value FROM client_state WHERE key = ?",
                (key,),
            )
            row = await cursor.fetchone()
            return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        pool = await self._get_pool()
        async with pool.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO client_state (key, value, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
        logger.debug("client_state_saved", key=key)

    async def delete(self, key: str) -> bool:
        pool = await self._get_pool()
        async with pool.transaction() as conn:
            cursor = await conn.execute("DELETE FROM client_state WHERE key = ?", (key,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.debug("client_state_deleted", key=key)
        return deleted


# Singleton instance
_client_state_store: SQLiteClientStateStore | None = None


async def get_client_state_store() -> SQLiteClientStateStore:
    """Get singleton client state store instance."""
    global _client_state_store
    if _client_state_store is None:
        _client_state_store = SQLiteClientStateStore(await get_pool())
    return _client_state_store


def reset_client_state_store() -> None:
    global _client_state_store
    _client_state_store = None
