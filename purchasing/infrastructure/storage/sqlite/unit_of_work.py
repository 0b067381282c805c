"""
Per-request unit of work over the SQLite pool.

Each session pins one pooled connection; the order repository and the
reference lookup share it, so every read and write in a block belongs to
the same transaction.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite

from purchasing.config import get_logger
from purchasing.core.exceptions import DatabaseError
from purchasing.core.interfaces.order_store import IOrderUnitOfWork, OrderSession
from purchasing.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool
from purchasing.infrastructure.storage.sqlite.purchase_order_store import (
    SQLitePurchaseOrderRepository,
)
from purchasing.infrastructure.storage.sqlite.reference_store import SQLiteReferenceLookup

logger = get_logger(__name__)


def _session(conn: aiosqlite.Connection) -> OrderSession:
    return OrderSession(
        orders=SQLitePurchaseOrderRepository(conn),
        references=SQLiteReferenceLookup(conn),
    )


class SQLiteOrderUnitOfWork(IOrderUnitOfWork):
    """Opens transactions on the given pool, or the global one."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    async def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            self._pool = await get_pool()
        return self._pool

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[OrderSession]:
        pool = await self._get_pool()
        try:
            async with pool.transaction(immediate=True) as conn:
                yield _session(conn)
        except aiosqlite.Error as e:
            logger.error("order_transaction_failed", error=str(e))
            raise DatabaseError("transaction", str(e)) from e

    @asynccontextmanager
    async def read(self) -> AsyncIterator[OrderSession]:
        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                yield _session(conn)
        except aiosqlite.Error as e:
            logger.error("order_read_failed", error=str(e))
            raise DatabaseError("read", str(e)) from e
