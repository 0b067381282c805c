"""Unit tests for SQLite connection pool."""

import asyncio
from pathlib import Path

import aiosqlite
import pytest

from purchasing.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
)


class TestConnectionPoolInit:
    """Tests for ConnectionPool initialization."""

    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        assert pool.db_path == temp_db_path
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool._initialized is False
        assert len(pool._connections) == 0

    def test_custom_values(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=10, busy_timeout=60000)
        assert pool.pool_size == 10
        assert pool.busy_timeout == 60000


class TestConnectionPoolInitialize:
    """Tests for ConnectionPool.initialize()."""

    async def test_initialize_creates_directory(self, tmp_path: Path):
        db_path = tmp_path / "subdir" / "nested" / "test.db"
        pool = ConnectionPool(db_path, pool_size=1)

        await pool.initialize()
        assert db_path.parent.exists()
        await pool.close()

    async def test_initialize_creates_connections(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=3)
        await pool.initialize()

        assert len(pool._connections) == 3
        assert pool._pool.qsize() == 3
        await pool.close()

    async def test_initialize_is_idempotent(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=2)
        await pool.initialize()
        await pool.initialize()

        assert len(pool._connections) == 2
        await pool.close()

    async def test_pragmas_applied(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1, busy_timeout=1234)
        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA foreign_keys")
            assert (await cursor.fetchone())[0] == 1
            cursor = await conn.execute("PRAGMA busy_timeout")
            assert (await cursor.fetchone())[0] == 1234
            cursor = await conn.execute("PRAGMA journal_mode")
            assert (await cursor.fetchone())[0] == "wal"
        await pool.close()


class TestConnectionPoolTransaction:
    """Tests for commit/rollback behaviour."""

    @pytest.fixture
    async def pool(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=2, busy_timeout=5000)
        await pool.initialize()
        async with pool.transaction() as conn:
            await conn.execute("CREATE TABLE t (v INTEGER)")
        yield pool
        await pool.close()

    async def _count(self, pool: ConnectionPool) -> int:
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            return (await cursor.fetchone())[0]

    async def test_commit_on_success(self, pool: ConnectionPool):
        async with pool.transaction(immediate=True) as conn:
            await conn.execute("INSERT INTO t VALUES (1)")
        assert await self._count(pool) == 1

    async def test_rollback_on_error(self, pool: ConnectionPool):
        with pytest.raises(RuntimeError):
            async with pool.transaction(immediate=True) as conn:
                await conn.execute("INSERT INTO t VALUES (1)")
                raise RuntimeError("boom")
        assert await self._count(pool) == 0

    async def test_connection_returned_after_error(self, pool: ConnectionPool):
        with pytest.raises(RuntimeError):
            async with pool.transaction(immediate=True):
                raise RuntimeError("boom")
        assert pool._pool.qsize() == 2

    async def test_immediate_serialises_writers(self, pool: ConnectionPool):
        order: list[str] = []

        async def writer(name: str, hold: float) -> None:
            async with pool.transaction(immediate=True) as conn:
                order.append(f"{name}-start")
                await asyncio.sleep(hold)
                await conn.execute("INSERT INTO t VALUES (1)")
                order.append(f"{name}-end")

        await asyncio.gather(writer("a", 0.05), writer("b", 0.0))

        # No interleaving: each writer finishes before the other starts
        assert order in (
            ["a-start", "a-end", "b-start", "b-end"],
            ["b-start", "b-end", "a-start", "a-end"],
        )
        assert await self._count(pool) == 2


class TestGlobalPool:
    """Tests for the settings-driven global pool."""

    async def test_get_pool_is_singleton(self):
        pool = await get_pool()
        try:
            assert await get_pool() is pool
        finally:
            await close_pool()

    async def test_get_connection(self):
        try:
            async with get_connection() as conn:
                assert isinstance(conn, aiosqlite.Connection)
        finally:
            await close_pool()
