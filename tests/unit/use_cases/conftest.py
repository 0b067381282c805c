"""Fixtures for use case tests: an in-memory unit of work over AsyncMock stores."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from purchasing.core.entities.purchase_order import (
    LineItem,
    PurchaseOrder,
    PurchaseOrderStatus,
)
from purchasing.core.entities.reference import Product, Supplier, User
from purchasing.core.interfaces.order_store import IOrderUnitOfWork, OrderSession

SUPPLIER = Supplier(id="supplier-001", company_name="Siam Flour Co.")
OTHER_SUPPLIER = Supplier(id="supplier-002", company_name="Bangkok Sugar Ltd.")
ADMIN = User(id="user-admin", name="Admin")
PURCHASER = User(id="user-purchaser", name="Purchaser")
FLOUR = Product(id="product-flour", name="Bread flour")
SUGAR = Product(id="product-sugar", name="Cane sugar")


class FakeUnitOfWork(IOrderUnitOfWork):
    """Yields the same mocked session and records commit/rollback."""

    def __init__(self, orders: AsyncMock, references: AsyncMock):
        self.session = OrderSession(orders=orders, references=references)
        self.commits = 0
        self.rollbacks = 0
        self.reads = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[OrderSession]:
        try:
            yield self.session
        except BaseException:
            self.rollbacks += 1
            raise
        self.commits += 1

    @asynccontextmanager
    async def read(self) -> AsyncIterator[OrderSession]:
        self.reads += 1
        yield self.session


def make_order(order_id: int = 1, **overrides) -> PurchaseOrder:
    data = {
        "id": order_id,
        "po_number": "PO25690219-P001",
        "status": PurchaseOrderStatus.DRAFT,
        "supplier_id": SUPPLIER.id,
        "user_id": PURCHASER.id,
        "issue_date": date(2026, 2, 19),
        "delivery_date": date(2026, 2, 26),
        "subtotal": Decimal("100"),
        "discount_amount": Decimal("10"),
        "vat_amount": Decimal("6.3"),
        "grand_total": Decimal("96.3"),
        "notes": "Deliver before noon",
        "items": [
            LineItem(
                id=1,
                po_id=order_id,
                product_id=FLOUR.id,
                item_name=FLOUR.name,
                quantity=Decimal("1"),
                unit_price=Decimal("100"),
                total_price=Decimal("100"),
            )
        ],
    }
    data.update(overrides)
    return PurchaseOrder(**data)


@pytest.fixture
def mock_references():
    refs = AsyncMock()
    refs.get_supplier.side_effect = lambda sid: {
        SUPPLIER.id: SUPPLIER,
        OTHER_SUPPLIER.id: OTHER_SUPPLIER,
    }.get(sid)
    refs.get_user.side_effect = lambda uid: {ADMIN.id: ADMIN, PURCHASER.id: PURCHASER}.get(uid)
    refs.get_first_user.return_value = ADMIN
    refs.get_products.side_effect = lambda ids: {
        p.id: p for p in (FLOUR, SUGAR) if p.id in ids
    }
    return refs


@pytest.fixture
def mock_orders():
    return AsyncMock()


@pytest.fixture
def fake_uow(mock_orders, mock_references) -> FakeUnitOfWork:
    return FakeUnitOfWork(mock_orders, mock_references)


@pytest.fixture
def order_factory():
    return make_order
