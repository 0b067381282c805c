"""Read-side use cases: fetch one purchase order or list them."""

from purchasing.application.dto.requests import ListPurchaseOrdersRequest
from purchasing.application.dto.responses import (
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
)
from purchasing.application.mappers import to_order_list_response, to_order_response
from purchasing.config import get_logger
from purchasing.core.entities.purchase_order import PurchaseOrder, PurchaseOrderPage
from purchasing.core.exceptions import PurchaseOrderNotFoundError
from purchasing.core.interfaces.order_store import IOrderUnitOfWork

logger = get_logger(__name__)


class _ReadUseCase:
    def __init__(self, unit_of_work: IOrderUnitOfWork | None = None):
        self._unit_of_work = unit_of_work

    async def _get_unit_of_work(self) -> IOrderUnitOfWork:
        if self._unit_of_work is None:
            from purchasing.infrastructure.storage.sqlite import get_order_unit_of_work

            self._unit_of_work = await get_order_unit_of_work()
        return self._unit_of_work


class GetPurchaseOrderUseCase(_ReadUseCase):
    """Load one hydrated purchase order."""

    async def execute(self, order_id: int) -> PurchaseOrder:
        unit_of_work = await self._get_unit_of_work()
        async with unit_of_work.read() as session:
            order = await session.orders.get(order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(order_id)
        return order

    def to_response(self, order: PurchaseOrder) -> PurchaseOrderResponse:
        return to_order_response(order)


class ListPurchaseOrdersUseCase(_ReadUseCase):
    """List purchase orders newest first, filtered by status, supplier or search text."""

    async def execute(self, request: ListPurchaseOrdersRequest) -> PurchaseOrderPage:
        unit_of_work = await self._get_unit_of_work()
        search = request.search.strip() if request.search else None

        async with unit_of_work.read() as session:
            page = await session.orders.list_orders(
                status=request.status,
                supplier_id=request.supplier_id,
                search=search or None,
                limit=request.limit,
                offset=request.offset,
            )

        logger.debug(
            "purchase_orders_listed",
            total=page.total,
            returned=len(page.orders),
            status=request.status.value if request.status else None,
        )
        return page

    def to_response(self, page: PurchaseOrderPage) -> PurchaseOrderListResponse:
        return to_order_list_response(page)
