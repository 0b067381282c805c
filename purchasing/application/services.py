"""
Service factory functions for dependency injection.

This module wires settings into core services. Use cases should import
from here rather than reading settings themselves.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from purchasing.config import Settings, get_settings
from purchasing.core.services import (
    DeletePolicy,
    OrderAssembler,
    OrderNumberAllocator,
    UserFallback,
)

# Singleton service instances
_order_assembler: OrderAssembler | None = None
_order_number_allocator: OrderNumberAllocator | None = None


def get_order_assembler(settings: Settings | None = None) -> OrderAssembler:
    """
    Get or create the OrderAssembler.

    Args:
        settings: Optional settings override; bypasses the singleton

    Returns:
        Assembler configured with VAT rate and user fallback policy
    """
    global _order_assembler

    if settings is None and _order_assembler is not None:
        return _order_assembler

    orders = (settings or get_settings()).orders
    assembler = OrderAssembler(
        vat_rate=orders.vat_rate,
        user_fallback=UserFallback(orders.user_fallback),
        default_user_id=orders.default_user_id,
    )

    if settings is None:
        _order_assembler = assembler
    return assembler


def get_order_number_allocator(settings: Settings | None = None) -> OrderNumberAllocator:
    """Get or create the OrderNumberAllocator."""
    global _order_number_allocator

    if settings is None and _order_number_allocator is not None:
        return _order_number_allocator

    orders = (settings or get_settings()).orders
    allocator = OrderNumberAllocator(
        prefix=orders.number_prefix,
        marker=orders.sequence_marker,
        width=orders.sequence_width,
    )

    if settings is None:
        _order_number_allocator = allocator
    return allocator


def get_delete_policy(settings: Settings | None = None) -> DeletePolicy:
    """Delete policy from settings."""
    return DeletePolicy((settings or get_settings()).orders.delete_policy)


def reset_services() -> None:
    """Reset all singleton services (for testing)."""
    global _order_assembler, _order_number_allocator
    _order_assembler = None
    _order_number_allocator = None
