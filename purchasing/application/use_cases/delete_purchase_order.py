"""Delete Purchase Order Use Case."""

from purchasing.config import get_logger
from purchasing.core.exceptions import PurchaseOrderNotFoundError
from purchasing.core.interfaces.order_store import IOrderUnitOfWork
from purchasing.core.services import DeletePolicy, ensure_deletable

logger = get_logger(__name__)


class DeletePurchaseOrderUseCase:
    """Delete an order and, by cascade, its items."""

    def __init__(
        self,
        unit_of_work: IOrderUnitOfWork | None = None,
        policy: DeletePolicy | None = None,
    ):
        self._unit_of_work = unit_of_work
        self._policy = policy

    async def _get_unit_of_work(self) -> IOrderUnitOfWork:
        if self._unit_of_work is None:
            from purchasing.infrastructure.storage.sqlite import get_order_unit_of_work

            self._unit_of_work = await get_order_unit_of_work()
        return self._unit_of_work

    def _get_policy(self) -> DeletePolicy:
        if self._policy is None:
            from purchasing.application.services import get_delete_policy

            self._policy = get_delete_policy()
        return self._policy

    async def execute(self, order_id: int) -> None:
        """
        Execute delete use case.

        Raises:
            PurchaseOrderNotFoundError: no such order
            OrderNotDeletableError: draft-only policy and the order left DRAFT
        """
        unit_of_work = await self._get_unit_of_work()
        policy = self._get_policy()

        async with unit_of_work.transaction() as session:
            existing = await session.orders.get(order_id)
            if existing is None:
                raise PurchaseOrderNotFoundError(order_id)

            ensure_deletable(order_id, existing.status, policy)

            if not await session.orders.delete(order_id):
                raise PurchaseOrderNotFoundError(order_id)

        logger.info(
            "purchase_order_deleted",
            order_id=order_id,
            po_number=existing.po_number,
            status=existing.status.value,
            items=existing.item_count,
        )
