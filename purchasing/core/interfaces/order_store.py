"""
Abstract interfaces for purchase order persistence.

The order engine never touches a global database handle. Each request
opens a unit of work and receives an ``OrderSession`` whose repositories
all share one transaction.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any

from purchasing.core.entities.purchase_order import (
    PurchaseOrder,
    PurchaseOrderPage,
    PurchaseOrderStatus,
)
from purchasing.core.entities.reference import Product, Supplier, User


class IReferenceLookup(ABC):
    """Read access to suppliers, products and users."""

    @abstractmethod
    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        """Get supplier by ID."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_first_user(self) -> User | None:
        """Get the oldest user, or None when there are no users."""
        pass

    @abstractmethod
    async def get_products(self, product_ids: list[str]) -> dict[str, Product]:
        """Batch-load products, keyed by ID. Missing IDs are absent from the result."""
        pass


class IPurchaseOrderRepository(ABC):
    """Purchase order header and line item persistence."""

    @abstractmethod
    async def get(self, order_id: int) -> PurchaseOrder | None:
        """Get a hydrated purchase order by ID."""
        pass

    @abstractmethod
    async def get_last_number(self, prefix: str) -> str | None:
        """Get the highest po_number starting with ``prefix``."""
        pass

    @abstractmethod
    async def insert(self, order: PurchaseOrder) -> PurchaseOrder:
        """
        Insert header and items.

        Raises:
            OrderNumberCollisionError: po_number is already taken
        """
        pass

    @abstractmethod
    async def replace(self, order: PurchaseOrder) -> PurchaseOrder:
        """Overwrite header fields and swap the entire item set."""
        pass

    @abstractmethod
    async def update_header(self, order_id: int, changes: dict[str, Any]) -> None:
        """Write a narrow header patch (status, delivery_date, notes)."""
        pass

    @abstractmethod
    async def delete(self, order_id: int) -> bool:
        """Delete an order; items cascade. Returns False if nothing was deleted."""
        pass

    @abstractmethod
    async def list_orders(
        self,
        status: PurchaseOrderStatus | None = None,
        supplier_id: str | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> PurchaseOrderPage:
        """List orders newest first with optional filters."""
        pass


@dataclass
class OrderSession:
    """Repositories bound to a single transaction."""

    orders: IPurchaseOrderRepository
    references: IReferenceLookup


class IOrderUnitOfWork(ABC):
    """Per-request transaction boundary for the order engine."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[OrderSession]:
        """
        Open a write transaction.

        Commits when the block exits normally, rolls back on any exception.
        Writers are serialised for the lifetime of the block.
        """
        pass

    @abstractmethod
    def read(self) -> AbstractAsyncContextManager[OrderSession]:
        """Open a read-only session."""
        pass
