"""SQLite storage implementations."""

from purchasing.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
)
from purchasing.infrastructure.storage.sqlite.purchase_order_store import (
    SQLitePurchaseOrderRepository,
)
from purchasing.infrastructure.storage.sqlite.reference_store import SQLiteReferenceLookup
from purchasing.infrastructure.storage.sqlite.unit_of_work import SQLiteOrderUnitOfWork

# Singleton instances
_order_unit_of_work: SQLiteOrderUnitOfWork | None = None


async def get_order_unit_of_work() -> SQLiteOrderUnitOfWork:
    """Get singleton unit of work over the global pool."""
    global _order_unit_of_work
    if _order_unit_of_work is None:
        _order_unit_of_work = SQLiteOrderUnitOfWork(await get_pool())
    return _order_unit_of_work


def reset_order_unit_of_work() -> None:
    """Forget the singleton (used after the pool is closed)."""
    global _order_unit_of_work
    _order_unit_of_work = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    # Store classes
    "SQLitePurchaseOrderRepository",
    "SQLiteReferenceLookup",
    "SQLiteOrderUnitOfWork",
    # Factory functions
    "get_order_unit_of_work",
    "reset_order_unit_of_work",
]
