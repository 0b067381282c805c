"""Tests for purchase order status transitions and delete policy."""

import pytest

from purchasing.core.entities.purchase_order import PurchaseOrderStatus as S
from purchasing.core.exceptions import InvalidStatusTransitionError, OrderNotDeletableError
from purchasing.core.services.status_guard import (
    DeletePolicy,
    allowed_targets,
    can_transition,
    ensure_deletable,
    ensure_transition,
)


class TestTransitions:
    @pytest.mark.parametrize(
        "current, target",
        [
            (S.DRAFT, S.APPROVED),
            (S.DRAFT, S.CANCELLED),
            (S.APPROVED, S.SENT),
            (S.APPROVED, S.CANCELLED),
            (S.SENT, S.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)
        ensure_transition(current, target)

    @pytest.mark.parametrize(
        "current, target",
        [
            (S.DRAFT, S.SENT),
            (S.APPROVED, S.DRAFT),
            (S.SENT, S.APPROVED),
            (S.CANCELLED, S.DRAFT),
            (S.CANCELLED, S.APPROVED),
        ],
    )
    def test_rejected(self, current, target):
        assert not can_transition(current, target)
        with pytest.raises(InvalidStatusTransitionError):
            ensure_transition(current, target)

    @pytest.mark.parametrize("status", list(S))
    def test_same_status_rejected(self, status):
        with pytest.raises(InvalidStatusTransitionError):
            ensure_transition(status, status)

    def test_cancelled_is_terminal(self):
        assert allowed_targets(S.CANCELLED) == []

    def test_error_lists_allowed_targets(self):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            ensure_transition(S.DRAFT, S.SENT)
        assert exc_info.value.details["allowed"] == ["APPROVED", "CANCELLED"]
        assert exc_info.value.details["current"] == "DRAFT"


class TestDeletePolicy:
    @pytest.mark.parametrize("status", list(S))
    def test_any_status(self, status):
        ensure_deletable(1, status, DeletePolicy.ANY_STATUS)

    def test_draft_only_allows_draft(self):
        ensure_deletable(1, S.DRAFT, DeletePolicy.DRAFT_ONLY)

    @pytest.mark.parametrize("status", [S.APPROVED, S.SENT, S.CANCELLED])
    def test_draft_only_rejects_others(self, status):
        with pytest.raises(OrderNotDeletableError):
            ensure_deletable(1, status, DeletePolicy.DRAFT_ONLY)

    def test_policy_from_config_string(self):
        assert DeletePolicy("draft_only") is DeletePolicy.DRAFT_ONLY
