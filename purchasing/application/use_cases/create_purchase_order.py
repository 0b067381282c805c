"""
Create Purchase Order Use Case.

Checks references, prices the items, allocates the next order number and
writes header plus items in one transaction. A UNIQUE collision on the
order number retries the whole transaction with backoff.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from purchasing.application.dto.requests import CreatePurchaseOrderRequest
from purchasing.application.dto.responses import PurchaseOrderResponse
from purchasing.application.mappers import to_order_response
from purchasing.config import Settings, get_logger, get_settings
from purchasing.core.entities.purchase_order import PurchaseOrder, PurchaseOrderStatus
from purchasing.core.exceptions import (
    OrderNumberCollisionError,
    OrderNumberExhaustedError,
)
from purchasing.core.interfaces.order_store import IOrderUnitOfWork
from purchasing.core.services import (
    OrderAssembler,
    OrderNumberAllocator,
    business_today,
)

logger = get_logger(__name__)


@dataclass
class CreatePurchaseOrderResult:
    """Result of creating a purchase order."""

    order: PurchaseOrder
    attempts: int = 1


class CreatePurchaseOrderUseCase:
    """Create a DRAFT purchase order with a freshly allocated number."""

    def __init__(
        self,
        unit_of_work: IOrderUnitOfWork | None = None,
        assembler: OrderAssembler | None = None,
        allocator: OrderNumberAllocator | None = None,
        settings: Settings | None = None,
        today: Callable[[], date] | None = None,
    ):
        self._unit_of_work = unit_of_work
        self._settings = settings or get_settings()
        self._assembler = assembler
        self._allocator = allocator
        self._today = today or (lambda: business_today(self._settings.orders.timezone))

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

    def _get_allocator(self) -> OrderNumberAllocator:
        if self._allocator is None:
            from purchasing.application.services import get_order_number_allocator

            self._allocator = get_order_number_allocator()
        return self._allocator

    def _get_retry_decorator(self) -> Any:
        """Retry only number collisions; everything else fails fast."""
        orders = self._settings.orders
        return retry(
            stop=stop_after_attempt(orders.max_allocation_attempts),
            wait=wait_exponential(
                multiplier=orders.retry_delay,
                min=orders.retry_delay,
                max=orders.retry_delay * (orders.retry_multiplier**3),
            ),
            retry=retry_if_exception_type(OrderNumberCollisionError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "order_number_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def execute(self, request: CreatePurchaseOrderRequest) -> CreatePurchaseOrderResult:
        """
        Execute create purchase order use case.

        Raises:
            ValidationError: bad input or missing user under the fallback policy
            NotFoundError: supplier, user or products missing
            OrderNumberExhaustedError: collisions outlasted the retry budget
            DatabaseError: storage failure
        """
        logger.info(
            "create_purchase_order_started",
            supplier_id=request.supplier_id,
            items=len(request.items),
        )

        unit_of_work = await self._get_unit_of_work()
        attempts = 0

        async def create_once() -> PurchaseOrder:
            nonlocal attempts
            attempts += 1
            return await self._create_once(unit_of_work, request)

        try:
            order = await self._get_retry_decorator()(create_once)()
        except OrderNumberCollisionError as e:
            logger.error(
                "order_number_exhausted",
                attempts=attempts,
                po_number=e.details.get("po_number"),
            )
            raise OrderNumberExhaustedError(attempts, e.details.get("po_number")) from e

        logger.info(
            "purchase_order_created",
            order_id=order.id,
            po_number=order.po_number,
            grand_total=str(order.grand_total),
            attempts=attempts,
        )
        return CreatePurchaseOrderResult(order=order, attempts=attempts)

    async def _create_once(
        self,
        unit_of_work: IOrderUnitOfWork,
        request: CreatePurchaseOrderRequest,
    ) -> PurchaseOrder:
        """One full attempt: check, price, allocate and insert in a single transaction."""
        assembler = self._get_assembler()
        allocator = self._get_allocator()

        async with unit_of_work.transaction() as session:
            assembled = await assembler.assemble(
                session.references,
                supplier_id=request.supplier_id,
                user_id=request.user_id,
                lines=request.line_items(),
                discount_amount=request.discount_amount,
                shipping_cost=request.shipping_cost,
            )
            totals = assembled.totals

            po_number = await allocator.allocate(session.orders, self._today())

            order = PurchaseOrder(
                po_number=po_number,
                status=PurchaseOrderStatus.DRAFT,
                supplier_id=assembled.supplier.id,
                user_id=assembled.user.id,
                issue_date=request.issue_date,
                delivery_date=request.delivery_date,
                subtotal=totals.subtotal,
                discount_amount=totals.discount_amount,
                vat_amount=totals.vat_amount,
                shipping_cost=totals.shipping_cost,
                grand_total=totals.grand_total,
                notes=request.notes,
                items=totals.lines,
            )
            order = await session.orders.insert(order)

            hydrated = await session.orders.get(order.id)  # type: ignore[arg-type]
            return hydrated or order

    def to_response(self, result: CreatePurchaseOrderResult) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return to_order_response(result.order)
