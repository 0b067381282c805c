"""Purchase order endpoints."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from purchasing.api.dependencies import (
    get_create_purchase_order_use_case,
    get_delete_purchase_order_use_case,
    get_get_purchase_order_use_case,
    get_list_purchase_orders_use_case,
    get_patch_purchase_order_use_case,
    get_replace_purchase_order_use_case,
)
from purchasing.application.dto.requests import (
    CreatePurchaseOrderRequest,
    ListPurchaseOrdersRequest,
    PatchPurchaseOrderRequest,
    UpdatePurchaseOrderRequest,
)
from purchasing.application.dto.responses import (
    ErrorResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
)
from purchasing.application.use_cases import (
    CreatePurchaseOrderUseCase,
    DeletePurchaseOrderUseCase,
    GetPurchaseOrderUseCase,
    ListPurchaseOrdersUseCase,
    PatchPurchaseOrderUseCase,
    ReplacePurchaseOrderUseCase,
)
from purchasing.core.entities.purchase_order import PurchaseOrderStatus

router = APIRouter(prefix="/api/purchase-orders", tags=["purchase-orders"])


@router.post(
    "",
    response_model=PurchaseOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def create_purchase_order(
    request: CreatePurchaseOrderRequest,
    use_case: CreatePurchaseOrderUseCase = Depends(get_create_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Create a DRAFT purchase order and allocate its number."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=PurchaseOrderListResponse)
async def list_purchase_orders(
    status_filter: PurchaseOrderStatus | None = Query(default=None, alias="status"),
    supplier_id: str | None = Query(default=None),
    search: str | None = Query(default=None, description="po_number or supplier name"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    use_case: ListPurchaseOrdersUseCase = Depends(get_list_purchase_orders_use_case),
) -> PurchaseOrderListResponse:
    """List purchase orders, newest first."""
    page = await use_case.execute(
        ListPurchaseOrdersRequest(
            status=status_filter,
            supplier_id=supplier_id,
            search=search,
            limit=limit,
            offset=offset,
        )
    )
    return use_case.to_response(page)


@router.get(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_purchase_order(
    order_id: int,
    use_case: GetPurchaseOrderUseCase = Depends(get_get_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Get a purchase order with items, supplier and owner."""
    order = await use_case.execute(order_id)
    return use_case.to_response(order)


@router.put(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def replace_purchase_order(
    order_id: int,
    request: UpdatePurchaseOrderRequest,
    use_case: ReplacePurchaseOrderUseCase = Depends(get_replace_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Replace header fields and the whole item set; totals are recomputed."""
    result = await use_case.execute(order_id, request)
    return use_case.to_response(result)


@router.patch(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def patch_purchase_order(
    order_id: int,
    request: PatchPurchaseOrderRequest,
    use_case: PatchPurchaseOrderUseCase = Depends(get_patch_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Change status, delivery date or notes."""
    result = await use_case.execute(order_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def delete_purchase_order(
    order_id: int,
    use_case: DeletePurchaseOrderUseCase = Depends(get_delete_purchase_order_use_case),
) -> Response:
    """Delete a purchase order and its items."""
    await use_case.execute(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
