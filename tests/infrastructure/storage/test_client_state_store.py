"""Tests for the SQLite client state store."""

import pytest

from prostock.infrastructure.storage.sqlite import ConnectionPool, SQLiteClientStateStore
from prostock.infrastructure.storage.sqlite.connection import apply_migrations


@pytest.fixture
async def pool(tmp_path):
    pool = ConnectionPool(tmp_path / "state" / "prostock.db", pool_size=2)
    await pool.initialize()
    yield pool
    await pool.close()


class TestSQLiteClientStateStore:
    async def test_roundtrip_and_overwrite(self, pool):
        store = SQLiteClientStateStore(pool)

        assert await store.get("prostock_session") is None

        await store.set("prostock_session", '{"username": "budi"}')
        await store.set("prostock_session", '{"username": "sari"}')

        assert await store.get("prostock_session") == '{"username": "sari"}'

    async def test_delete(self, pool):
        store = SQLiteClientStateStore(pool)
        await store.set("prostock_session", "{}")

        assert await store.delete("prostock_session") is True
        assert await store.delete("prostock_session") is False
        assert await store.get("prostock_session") is None

    async def test_survives_reopen(self, tmp_path):
        path = tmp_path / "prostock.db"
        first = ConnectionPool(path)
        await SQLiteClientStateStore(first).set("prostock_session", "kept")
        await first.close()

        second = ConnectionPool(path)
        try:
            assert await SQLiteClientStateStore(second).get("prostock_session") == "kept"
        finally:
            await second.close()

    async def test_pool_creates_parent_directory(self, tmp_path):
        pool = ConnectionPool(tmp_path / "nested" / "dir" / "prostock.db")
        await pool.initialize()
        try:
            assert pool.initialized
            assert (tmp_path / "nested" / "dir" / "prostock.db").exists()
        finally:
            await pool.close()
        assert not pool.initialized


class TestMigrations:
    async def test_applied_once(self, pool):
        async with pool.acquire() as conn:
            assert await apply_migrations(conn) == []
            cursor = await conn.execute("SELECT version, name FROM schema_migrations")
            rows = [tuple(r) for r in await cursor.fetchall()]
        assert rows == [(1, "client_state")]
