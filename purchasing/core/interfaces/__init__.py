"""Core interfaces (ports) for dependency injection."""

from purchasing.core.interfaces.order_store import (
    IOrderUnitOfWork,
    IPurchaseOrderRepository,
    IReferenceLookup,
    OrderSession,
)

__all__ = [
    "IOrderUnitOfWork",
    "IPurchaseOrderRepository",
    "IReferenceLookup",
    "OrderSession",
]
