"""
Domain exceptions for the purchase order service.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class PurchasingError(Exception):
    """Base exception for all purchasing errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(PurchasingError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Not Found Exceptions
class NotFoundError(PurchasingError):
    """Base exception for missing referenced entities."""

    pass


class PurchaseOrderNotFoundError(NotFoundError):
    """Purchase order not found in storage."""

    def __init__(self, order_id: int):
        super().__init__(
            f"Purchase order not found: {order_id}",
            code="PURCHASE_ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class SupplierNotFoundError(NotFoundError):
    """Supplier not found."""

    def __init__(self, supplier_id: str):
        super().__init__(
            f"Supplier not found: {supplier_id}",
            code="SUPPLIER_NOT_FOUND",
            details={"supplier_id": supplier_id},
        )


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str | None):
        super().__init__(
            f"User not found: {user_id}" if user_id else "No users found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class ProductsNotFoundError(NotFoundError):
    """One or more referenced products do not exist."""

    def __init__(self, product_ids: list[str]):
        super().__init__(
            f"Products not found: {', '.join(product_ids)}",
            code="PRODUCTS_NOT_FOUND",
            details={"product_ids": product_ids},
        )


# Conflict Exceptions
class ConflictError(PurchasingError):
    """Request conflicts with the current state of an order."""

    pass


class InvalidStatusTransitionError(ConflictError):
    """Requested status change is not in the transition table."""

    def __init__(self, current: str, requested: str, allowed: list[str]):
        super().__init__(
            f"Cannot transition from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            details={"current": current, "requested": requested, "allowed": allowed},
        )


class OrderNotDeletableError(ConflictError):
    """Order cannot be deleted in its current status."""

    def __init__(self, order_id: int, status: str):
        super().__init__(
            f"Purchase order {order_id} cannot be deleted in status {status}",
            code="ORDER_NOT_DELETABLE",
            details={"order_id": order_id, "status": status},
        )


class OrderNumberExhaustedError(ConflictError):
    """Order number allocation kept colliding until attempts ran out."""

    def __init__(self, attempts: int, last_number: str | None = None):
        super().__init__(
            f"Could not allocate a unique order number after {attempts} attempts",
            code="ORDER_NUMBER_EXHAUSTED",
            details={"attempts": attempts, "last_number": last_number},
        )


# Storage Exceptions
class InternalError(PurchasingError):
    """Unexpected failure inside the service."""

    pass


class StorageError(InternalError):
    """Base exception for storage operations."""

    pass


class OrderNumberCollisionError(StorageError):
    """Insert hit the UNIQUE constraint on po_number."""

    def __init__(self, po_number: str):
        super().__init__(
            f"Order number already taken: {po_number}",
            code="ORDER_NUMBER_COLLISION",
            details={"po_number": po_number},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(PurchasingError):
    """Configuration error."""

    pass
