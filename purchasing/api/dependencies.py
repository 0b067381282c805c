"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers.
"""

from functools import lru_cache

from fastapi import Depends

from purchasing.application.use_cases import (
    CreatePurchaseOrderUseCase,
    DeletePurchaseOrderUseCase,
    GetPurchaseOrderUseCase,
    ListPurchaseOrdersUseCase,
    PatchPurchaseOrderUseCase,
    ReplacePurchaseOrderUseCase,
)
from purchasing.config import Settings, get_settings
from purchasing.core.interfaces import IOrderUnitOfWork
from purchasing.infrastructure.storage.sqlite import get_order_unit_of_work


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


async def get_unit_of_work() -> IOrderUnitOfWork:
    """Get the per-request unit of work factory over the global pool."""
    return await get_order_unit_of_work()


# Use case dependencies
def get_create_purchase_order_use_case(
    unit_of_work: IOrderUnitOfWork = Depends(get_unit_of_work),
) -> CreatePurchaseOrderUseCase:
    """Get create purchase order use case."""
    return CreatePurchaseOrderUseCase(unit_of_work=unit_of_work)


def get_replace_purchase_order_use_case(
    unit_of_work: IOrderUnitOfWork = Depends(get_unit_of_work),
) -> ReplacePurchaseOrderUseCase:
    """Get full update use case."""
    return ReplacePurchaseOrderUseCase(unit_of_work=unit_of_work)


def get_patch_purchase_order_use_case(
    unit_of_work: IOrderUnitOfWork = Depends(get_unit_of_work),
) -> PatchPurchaseOrderUseCase:
    """Get status/metadata patch use case."""
    return PatchPurchaseOrderUseCase(unit_of_work=unit_of_work)


def get_delete_purchase_order_use_case(
    unit_of_work: IOrderUnitOfWork = Depends(get_unit_of_work),
) -> DeletePurchaseOrderUseCase:
    """Get delete use case."""
    return DeletePurchaseOrderUseCase(unit_of_work=unit_of_work)


def get_get_purchase_order_use_case(
    unit_of_work: IOrderUnitOfWork = Depends(get_unit_of_work),
) -> GetPurchaseOrderUseCase:
    """Get single-order query use case."""
    return GetPurchaseOrderUseCase(unit_of_work=unit_of_work)


def get_list_purchase_orders_use_case(
    unit_of_work: IOrderUnitOfWork = Depends(get_unit_of_work),
) -> ListPurchaseOrdersUseCase:
    """Get list query use case."""
    return ListPurchaseOrdersUseCase(unit_of_work=unit_of_work)
