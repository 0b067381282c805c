"""Application use cases."""

from purchasing.application.use_cases.create_purchase_order import (
    CreatePurchaseOrderResult,
    CreatePurchaseOrderUseCase,
)
from purchasing.application.use_cases.delete_purchase_order import DeletePurchaseOrderUseCase
from purchasing.application.use_cases.patch_purchase_order import (
    PatchPurchaseOrderResult,
    PatchPurchaseOrderUseCase,
)
from purchasing.application.use_cases.query_purchase_orders import (
    GetPurchaseOrderUseCase,
    ListPurchaseOrdersUseCase,
)
from purchasing.application.use_cases.replace_purchase_order import (
    ReplacePurchaseOrderResult,
    ReplacePurchaseOrderUseCase,
)

__all__ = [
    "CreatePurchaseOrderUseCase",
    "CreatePurchaseOrderResult",
    "ReplacePurchaseOrderUseCase",
    "ReplacePurchaseOrderResult",
    "PatchPurchaseOrderUseCase",
    "PatchPurchaseOrderResult",
    "DeletePurchaseOrderUseCase",
    "GetPurchaseOrderUseCase",
    "ListPurchaseOrdersUseCase",
]
