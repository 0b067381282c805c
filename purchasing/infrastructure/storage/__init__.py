"""Storage infrastructure implementations."""

from purchasing.infrastructure.storage.sqlite import (
    SQLiteOrderUnitOfWork,
    SQLitePurchaseOrderRepository,
    SQLiteReferenceLookup,
    close_pool,
    get_connection,
    get_order_unit_of_work,
    get_pool,
)

__all__ = [
    # SQLite stores
    "SQLiteOrderUnitOfWork",
    "SQLitePurchaseOrderRepository",
    "SQLiteReferenceLookup",
    "get_order_unit_of_work",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
]
