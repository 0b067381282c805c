"""Patch Purchase Order Use Case - status transition and metadata edits."""

from dataclasses import dataclass
from typing import Any

from purchasing.application.dto.requests import PatchPurchaseOrderRequest
from purchasing.application.dto.responses import PurchaseOrderResponse
from purchasing.application.mappers import to_order_response
from purchasing.config import get_logger
from purchasing.core.entities.purchase_order import PurchaseOrder, PurchaseOrderStatus
from purchasing.core.exceptions import PurchaseOrderNotFoundError
from purchasing.core.interfaces.order_store import IOrderUnitOfWork
from purchasing.core.services import ensure_transition

logger = get_logger(__name__)


@dataclass
class PatchPurchaseOrderResult:
    """Result of a status/metadata patch."""

    order: PurchaseOrder
    previous_status: PurchaseOrderStatus
    changed_fields: list[str]


class PatchPurchaseOrderUseCase:
    """Move an order through its lifecycle and edit delivery date or notes."""

    def __init__(self, unit_of_work: IOrderUnitOfWork | None = None):
        self._unit_of_work = unit_of_work

    async def _get_unit_of_work(self) -> IOrderUnitOfWork:
        if self._unit_of_work is None:
            from purchasing.infrastructure.storage.sqlite import get_order_unit_of_work

            self._unit_of_work = await get_order_unit_of_work()
        return self._unit_of_work

    async def execute(
        self,
        order_id: int,
        request: PatchPurchaseOrderRequest,
    ) -> PatchPurchaseOrderResult:
        """
        Execute patch use case.

        Raises:
            PurchaseOrderNotFoundError: no such order
            InvalidStatusTransitionError: status change outside the table
        """
        unit_of_work = await self._get_unit_of_work()

        async with unit_of_work.transaction() as session:
            existing = await session.orders.get(order_id)
            if existing is None:
                raise PurchaseOrderNotFoundError(order_id)

            changes: dict[str, Any] = {}
            if request.status is not None:
                ensure_transition(existing.status, request.status)
                changes["status"] = request.status
            if request.delivery_date is not None:
                changes["delivery_date"] = request.delivery_date
            if "notes" in request.model_fields_set:
                changes["notes"] = request.notes

            if changes:
                await session.orders.update_header(order_id, changes)
                order = await session.orders.get(order_id) or existing
            else:
                order = existing

        logger.info(
            "purchase_order_patched",
            order_id=order_id,
            from_status=existing.status.value,
            to_status=order.status.value,
            fields=sorted(changes),
        )
        return PatchPurchaseOrderResult(
            order=order,
            previous_status=existing.status,
            changed_fields=sorted(changes),
        )

    def to_response(self, result: PatchPurchaseOrderResult) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return to_order_response(result.order)
