"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from purchasing.application.dto.requests import (
    CreatePurchaseOrderRequest,
    ListPurchaseOrdersRequest,
    PatchPurchaseOrderRequest,
    UpdatePurchaseOrderRequest,
)
from purchasing.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    LineItemResponse,
    PaginatedResponse,
    ComponentHealthResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
)
from purchasing.application.services import (
    get_delete_policy,
    get_order_assembler,
    get_order_number_allocator,
    reset_services,
)
from purchasing.application.use_cases import (
    CreatePurchaseOrderUseCase,
    DeletePurchaseOrderUseCase,
    GetPurchaseOrderUseCase,
    ListPurchaseOrdersUseCase,
    PatchPurchaseOrderUseCase,
    ReplacePurchaseOrderUseCase,
)

__all__ = [
    # Request DTOs
    "CreatePurchaseOrderRequest",
    "UpdatePurchaseOrderRequest",
    "PatchPurchaseOrderRequest",
    "ListPurchaseOrdersRequest",
    # Response DTOs
    "PurchaseOrderResponse",
    "PurchaseOrderListResponse",
    "LineItemResponse",
    "HealthResponse",
    "ComponentHealthResponse",
    "ErrorResponse",
    "PaginatedResponse",
    # Use Cases
    "CreatePurchaseOrderUseCase",
    "ReplacePurchaseOrderUseCase",
    "PatchPurchaseOrderUseCase",
    "DeletePurchaseOrderUseCase",
    "GetPurchaseOrderUseCase",
    "ListPurchaseOrdersUseCase",
    # Service factories
    "get_order_assembler",
    "get_order_number_allocator",
    "get_delete_policy",
    "reset_services",
]
