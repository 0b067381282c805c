"""Tests for PatchPurchaseOrderUseCase."""

from datetime import date

import pytest

from purchasing.application.dto.requests import PatchPurchaseOrderRequest
from purchasing.application.use_cases.patch_purchase_order import PatchPurchaseOrderUseCase
from purchasing.core.entities.purchase_order import PurchaseOrderStatus
from purchasing.core.exceptions import InvalidStatusTransitionError, PurchaseOrderNotFoundError


@pytest.fixture
def existing(order_factory, mock_orders):
    order = order_factory()
    state = {"order": order}

    async def get(order_id):
        return state["order"] if order_id == order.id else None

    async def update_header(order_id, changes):
        state["order"] = state["order"].model_copy(update=changes)

    mock_orders.get.side_effect = get
    mock_orders.update_header.side_effect = update_header
    return order


@pytest.fixture
def use_case(fake_uow):
    return PatchPurchaseOrderUseCase(unit_of_work=fake_uow)


class TestPatchPurchaseOrder:
    async def test_approve_draft(self, use_case, existing, mock_orders):
        request = PatchPurchaseOrderRequest(status="APPROVED")

        result = await use_case.execute(existing.id, request)

        assert result.order.status == PurchaseOrderStatus.APPROVED
        assert result.previous_status == PurchaseOrderStatus.DRAFT
        assert result.changed_fields == ["status"]
        mock_orders.update_header.assert_called_once_with(
            existing.id, {"status": PurchaseOrderStatus.APPROVED}
        )

    async def test_draft_to_sent_rejected(self, use_case, existing, mock_orders, fake_uow):
        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(existing.id, PatchPurchaseOrderRequest(status="SENT"))

        mock_orders.update_header.assert_not_called()
        assert fake_uow.rollbacks == 1

    async def test_same_status_rejected(self, use_case, existing):
        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(existing.id, PatchPurchaseOrderRequest(status="DRAFT"))

    async def test_rejected_transition_writes_nothing(self, use_case, existing, mock_orders):
        request = PatchPurchaseOrderRequest(status="SENT", notes="should not stick")

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(existing.id, request)

        mock_orders.update_header.assert_not_called()

    async def test_delivery_date_and_notes(self, use_case, existing):
        request = PatchPurchaseOrderRequest(delivery_date="2026-03-15", notes="Call first")

        result = await use_case.execute(existing.id, request)

        assert result.order.delivery_date == date(2026, 3, 15)
        assert result.order.notes == "Call first"
        assert result.order.status == PurchaseOrderStatus.DRAFT
        assert result.changed_fields == ["delivery_date", "notes"]

    async def test_null_notes_clears(self, use_case, existing):
        request = PatchPurchaseOrderRequest.model_validate({"notes": None})
        assert request.clears_notes

        result = await use_case.execute(existing.id, request)

        assert result.order.notes is None

    async def test_omitted_notes_untouched(self, use_case, existing):
        result = await use_case.execute(
            existing.id, PatchPurchaseOrderRequest(delivery_date="2026-03-15")
        )
        assert result.order.notes == existing.notes

    async def test_empty_patch_is_noop(self, use_case, existing, mock_orders):
        result = await use_case.execute(existing.id, PatchPurchaseOrderRequest())

        assert result.order == existing
        assert result.changed_fields == []
        mock_orders.update_header.assert_not_called()

    async def test_not_found(self, use_case, existing):
        with pytest.raises(PurchaseOrderNotFoundError):
            await use_case.execute(42, PatchPurchaseOrderRequest(status="APPROVED"))
