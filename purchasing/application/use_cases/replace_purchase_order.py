"""Replace Purchase Order Use Case - full update of header and item set."""

from dataclasses import dataclass

from purchasing.application.dto.requests import UpdatePurchaseOrderRequest
from purchasing.application.dto.responses import PurchaseOrderResponse
from purchasing.application.mappers import to_order_response
from purchasing.config import get_logger
from purchasing.core.entities.purchase_order import PurchaseOrder
from purchasing.core.exceptions import PurchaseOrderNotFoundError
from purchasing.core.interfaces.order_store import IOrderUnitOfWork
from purchasing.core.services import OrderAssembler

logger = get_logger(__name__)


@dataclass
class ReplacePurchaseOrderResult:
    """Result of a full update."""

    order: PurchaseOrder
    previous: PurchaseOrder


class ReplacePurchaseOrderUseCase:
    """
    Overwrite an order's header fields and swap its entire item set.

    po_number and status are never touched. A null or omitted
    discount_amount or user_id keeps the stored value.
    """

    def __init__(
        self,
        unit_of_work: IOrderUnitOfWork | None = None,
        assembler: OrderAssembler | None = None,
    ):
        self._unit_of_work = unit_of_work
        self._assembler = assembler

    async def _get_unit_of_work(self) -> IOrderUnitOfWork:
        if self._unit_of_work is None:
            from purchasing.infrastructure.storage.sqlite import get_order_unit_of_work

            self._unit_of_work = await get_order_unit_of_work()
        return self._unit_of_work

    def _get_assembler(self) -> OrderAssembler:
        if self._assembler is None:
            from purchasing.application.services import get_order_assembler

            self._assembler = get_order_assembler()
        return self._assembler

    async def execute(
        self,
        order_id: int,
        request: UpdatePurchaseOrderRequest,
    ) -> ReplacePurchaseOrderResult:
        """Execute full update; any failure rolls the whole update back."""
        logger.info(
            "replace_purchase_order_started",
            order_id=order_id,
            items=len(request.items),
        )

        unit_of_work = await self._get_unit_of_work()
        assembler = self._get_assembler()

        async with unit_of_work.transaction() as session:
            existing = await session.orders.get(order_id)
            if existing is None:
                raise PurchaseOrderNotFoundError(order_id)

            discount = (
                request.discount_amount
                if request.discount_amount is not None
                else existing.discount_amount
            )

            assembled = await assembler.assemble(
                session.references,
                supplier_id=request.supplier_id,
                user_id=request.user_id or existing.user_id,
                lines=request.line_items(),
                discount_amount=discount,
                shipping_cost=request.shipping_cost,
            )
            totals = assembled.totals

            updated = existing.model_copy(
                update={
                    "supplier_id": assembled.supplier.id,
                    "user_id": assembled.user.id,
                    "issue_date": request.issue_date,
                    "delivery_date": request.delivery_date,
                    "subtotal": totals.subtotal,
                    "discount_amount": totals.discount_amount,
                    "vat_amount": totals.vat_amount,
                    "shipping_cost": totals.shipping_cost,
                    "grand_total": totals.grand_total,
                    "notes": request.notes,
                    "items": totals.lines,
                }
            )
            await session.orders.replace(updated)

            order = await session.orders.get(order_id) or updated

        logger.info(
            "purchase_order_replaced",
            order_id=order_id,
            po_number=order.po_number,
            items=len(order.items),
            grand_total=str(order.grand_total),
        )
        return ReplacePurchaseOrderResult(order=order, previous=existing)

    def to_response(self, result: ReplacePurchaseOrderResult) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return to_order_response(result.order)
