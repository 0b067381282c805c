"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from purchasing.application.dto.requests import (
    CreatePurchaseOrderRequest,
    ItemRequest,
    ListPurchaseOrdersRequest,
    ManualItemRequest,
    OtherItemRequest,
    PatchPurchaseOrderRequest,
    StandardItemRequest,
    UpdatePurchaseOrderRequest,
)
from purchasing.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    LineItemResponse,
    PaginatedResponse,
    ProductRefResponse,
    ComponentHealthResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
    SupplierRefResponse,
    UserRefResponse,
)

__all__ = [
    # Requests
    "CreatePurchaseOrderRequest",
    "UpdatePurchaseOrderRequest",
    "PatchPurchaseOrderRequest",
    "ListPurchaseOrdersRequest",
    "ItemRequest",
    "StandardItemRequest",
    "ManualItemRequest",
    "OtherItemRequest",
    # Responses
    "PurchaseOrderResponse",
    "PurchaseOrderListResponse",
    "LineItemResponse",
    "SupplierRefResponse",
    "UserRefResponse",
    "ProductRefResponse",
    "PaginatedResponse",
    "HealthResponse",
    "ComponentHealthResponse",
    "ErrorResponse",
]
