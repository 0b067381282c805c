"""Pytest fixtures for SQLite storage tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from purchasing.core.entities import ItemType, LineItem, PurchaseOrder


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def make_po():
    """Build an already-priced order ready for insert."""

    def _make(po_number: str = "PO25690219-P001", **overrides) -> PurchaseOrder:
        data = {
            "po_number": po_number,
            "supplier_id": "supplier-001",
            "user_id": "user-purchaser",
            "issue_date": date(2026, 2, 19),
            "delivery_date": date(2026, 2, 26),
            "subtotal": Decimal("250"),
            "discount_amount": Decimal("0"),
            "vat_amount": Decimal("17.5"),
            "shipping_cost": Decimal("20"),
            "grand_total": Decimal("287.5"),
            "notes": "Deliver to warehouse B",
            "items": [
                LineItem(
                    product_id="product-flour",
                    item_name="Flour snapshot",
                    quantity=Decimal("2"),
                    unit_price=Decimal("100"),
                    total_price=Decimal("200"),
                ),
                LineItem(
                    item_type=ItemType.MANUAL,
                    item_name="Pallet wrap",
                    quantity=Decimal("1"),
                    unit_price=Decimal("50"),
                    total_price=Decimal("50"),
                ),
            ],
        }
        data.update(overrides)
        return PurchaseOrder(**data)

    return _make
