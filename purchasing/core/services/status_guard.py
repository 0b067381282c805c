"""
Purchase order status transitions.

    DRAFT -> APPROVED | CANCELLED
    APPROVED -> SENT | CANCELLED
    SENT -> CANCELLED
    CANCELLED is terminal
"""

from enum import Enum

from purchasing.config import get_logger
from purchasing.core.entities.purchase_order import PurchaseOrderStatus
from purchasing.core.exceptions import (
    InvalidStatusTransitionError,
    OrderNotDeletableError,
)

logger = get_logger(__name__)

ALLOWED_TRANSITIONS: dict[PurchaseOrderStatus, tuple[PurchaseOrderStatus, ...]] = {
    PurchaseOrderStatus.DRAFT: (
        PurchaseOrderStatus.APPROVED,
        PurchaseOrderStatus.CANCELLED,
    ),
    PurchaseOrderStatus.APPROVED: (
        PurchaseOrderStatus.SENT,
        PurchaseOrderStatus.CANCELLED,
    ),
    PurchaseOrderStatus.SENT: (PurchaseOrderStatus.CANCELLED,),
    PurchaseOrderStatus.CANCELLED: (),
}


class DeletePolicy(str, Enum):
    """Which orders may be deleted."""

    ANY_STATUS = "any_status"
    DRAFT_ONLY = "draft_only"


def allowed_targets(current: PurchaseOrderStatus) -> list[PurchaseOrderStatus]:
    """Statuses reachable from ``current`` in one step."""
    return list(ALLOWED_TRANSITIONS[current])


def can_transition(current: PurchaseOrderStatus, target: PurchaseOrderStatus) -> bool:
    """Check a single transition against the table."""
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: PurchaseOrderStatus, target: PurchaseOrderStatus) -> None:
    """
    Reject a transition that is not in the table.

    Staying in the same status is not a transition and is rejected too.

    Raises:
        InvalidStatusTransitionError: transition not allowed
    """
    if can_transition(current, target):
        return

    allowed = [s.value for s in allowed_targets(current)]
    logger.info(
        "status_transition_rejected",
        current=current.value,
        requested=target.value,
        allowed=allowed,
    )
    raise InvalidStatusTransitionError(current.value, target.value, allowed)


def ensure_deletable(
    order_id: int,
    status: PurchaseOrderStatus,
    policy: DeletePolicy = DeletePolicy.ANY_STATUS,
) -> None:
    """
    Apply the delete policy to an order.

    Raises:
        OrderNotDeletableError: policy is draft-only and the order left DRAFT
    """
    if policy == DeletePolicy.DRAFT_ONLY and status != PurchaseOrderStatus.DRAFT:
        raise OrderNotDeletableError(order_id, status.value)
