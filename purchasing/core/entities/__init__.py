"""Core domain entities."""

from purchasing.core.entities.purchase_order import (
    ItemType,
    LineItem,
    PurchaseOrder,
    PurchaseOrderPage,
    PurchaseOrderStatus,
)
from purchasing.core.entities.reference import Product, Supplier, User

__all__ = [
    # Purchase orders
    "PurchaseOrder",
    "PurchaseOrderPage",
    "PurchaseOrderStatus",
    "LineItem",
    "ItemType",
    # Reference entities
    "Supplier",
    "Product",
    "User",
]
