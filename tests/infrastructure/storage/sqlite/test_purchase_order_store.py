"""Tests for the SQLite purchase order repository and reference lookup."""

from datetime import date
from decimal import Decimal

import pytest

from purchasing.core.entities import ItemType, LineItem, PurchaseOrderStatus
from purchasing.core.exceptions import OrderNumberCollisionError
from purchasing.infrastructure.storage.sqlite.connection import ConnectionPool
from purchasing.infrastructure.storage.sqlite.purchase_order_store import (
    SQLitePurchaseOrderRepository,
)
from purchasing.infrastructure.storage.sqlite.reference_store import SQLiteReferenceLookup


async def _insert(pool: ConnectionPool, order):
    async with pool.transaction(immediate=True) as conn:
        return await SQLitePurchaseOrderRepository(conn).insert(order)


async def _get(pool: ConnectionPool, order_id: int):
    async with pool.acquire() as conn:
        return await SQLitePurchaseOrderRepository(conn).get(order_id)


class TestInsertAndGet:
    async def test_round_trip_with_hydration(self, pool, make_po):
        inserted = await _insert(pool, make_po())
        assert inserted.id is not None
        assert all(item.id is not None for item in inserted.items)

        order = await _get(pool, inserted.id)

        assert order.po_number == "PO25690219-P001"
        assert order.status == PurchaseOrderStatus.DRAFT
        assert order.issue_date == date(2026, 2, 19)
        assert order.grand_total == Decimal("287.5")
        assert order.notes == "Deliver to warehouse B"
        assert order.supplier.id == "supplier-001"
        assert order.user.id == "user-purchaser"
        assert [item.item_type for item in order.items] == [ItemType.STANDARD, ItemType.MANUAL]
        assert order.items[0].product.sku == "RM-FLOUR-001"
        assert order.items[0].item_name == "Flour snapshot"
        assert order.items[1].product is None

    async def test_money_keeps_eight_decimals(self, pool, make_po):
        order = make_po(grand_total=Decimal("0.12345678"))
        inserted = await _insert(pool, order)

        async with pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT grand_total FROM purchase_orders WHERE id = ?", (inserted.id,)
            )
            raw = (await cursor.fetchone())[0]

        assert raw == "0.12345678"
        assert (await _get(pool, inserted.id)).grand_total == Decimal("0.12345678")

    async def test_get_missing(self, pool):
        assert await _get(pool, 999) is None

    async def test_duplicate_number_raises_collision(self, pool, make_po):
        await _insert(pool, make_po())

        with pytest.raises(OrderNumberCollisionError) as exc_info:
            await _insert(pool, make_po())

        assert exc_info.value.details["po_number"] == "PO25690219-P001"

    async def test_failed_insert_leaves_nothing(self, pool, make_po):
        await _insert(pool, make_po())
        with pytest.raises(OrderNumberCollisionError):
            await _insert(pool, make_po())

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM purchase_order_items")
            assert (await cursor.fetchone())[0] == 2


class TestGetLastNumber:
    async def test_none_when_empty(self, pool):
        async with pool.acquire() as conn:
            assert await SQLitePurchaseOrderRepository(conn).get_last_number("PO25690219-P") is None

    async def test_highest_for_prefix_only(self, pool, make_po):
        for number in ("PO25690219-P001", "PO25690219-P003", "PO25690220-P009"):
            await _insert(pool, make_po(number))

        async with pool.acquire() as conn:
            last = await SQLitePurchaseOrderRepository(conn).get_last_number("PO25690219-P")

        assert last == "PO25690219-P003"

    async def test_widened_sequence_sorts_last(self, pool, make_po):
        for number in ("PO25690219-P999", "PO25690219-P1000"):
            await _insert(pool, make_po(number))

        async with pool.acquire() as conn:
            last = await SQLitePurchaseOrderRepository(conn).get_last_number("PO25690219-P")

        assert last == "PO25690219-P1000"


class TestReplace:
    async def test_swaps_items(self, pool, make_po):
        inserted = await _insert(pool, make_po())
        new_items = [
            LineItem(
                item_type=ItemType.OTHER,
                item_name="Delivery fee",
                quantity=Decimal("1"),
                unit_price=Decimal("30"),
                total_price=Decimal("30"),
            )
        ]
        updated = inserted.model_copy(
            update={
                "supplier_id": "supplier-002",
                "items": new_items,
                "subtotal": Decimal("30"),
                "notes": None,
            }
        )

        async with pool.transaction(immediate=True) as conn:
            await SQLitePurchaseOrderRepository(conn).replace(updated)

        order = await _get(pool, inserted.id)
        assert order.supplier_id == "supplier-002"
        assert order.po_number == inserted.po_number
        assert order.notes is None
        assert len(order.items) == 1
        assert order.items[0].item_name == "Delivery fee"


class TestUpdateHeader:
    async def test_patch_status_and_notes(self, pool, make_po):
        inserted = await _insert(pool, make_po())

        async with pool.transaction(immediate=True) as conn:
            await SQLitePurchaseOrderRepository(conn).update_header(
                inserted.id,
                {
                    "status": PurchaseOrderStatus.APPROVED,
                    "delivery_date": date(2026, 3, 1),
                    "notes": None,
                },
            )

        order = await _get(pool, inserted.id)
        assert order.status == PurchaseOrderStatus.APPROVED
        assert order.delivery_date == date(2026, 3, 1)
        assert order.notes is None
        assert order.updated_at >= inserted.updated_at

    async def test_rejects_other_columns(self, pool, make_po):
        inserted = await _insert(pool, make_po())

        async with pool.acquire() as conn:
            with pytest.raises(ValueError):
                await SQLitePurchaseOrderRepository(conn).update_header(
                    inserted.id, {"grand_total": "0"}
                )


class TestDelete:
    async def test_cascades_to_items(self, pool, make_po):
        inserted = await _insert(pool, make_po())

        async with pool.transaction(immediate=True) as conn:
            assert await SQLitePurchaseOrderRepository(conn).delete(inserted.id) is True

        async with pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM purchase_order_items WHERE po_id = ?", (inserted.id,)
            )
            assert (await cursor.fetchone())[0] == 0

    async def test_missing_returns_false(self, pool):
        async with pool.transaction(immediate=True) as conn:
            assert await SQLitePurchaseOrderRepository(conn).delete(12345) is False


class TestListOrders:
    @pytest.fixture
    async def seeded_orders(self, pool, make_po):
        await _insert(pool, make_po("PO25690219-P001"))
        await _insert(pool, make_po("PO25690219-P002", supplier_id="supplier-002"))
        approved = await _insert(pool, make_po("PO25690220-P001"))
        async with pool.transaction(immediate=True) as conn:
            await SQLitePurchaseOrderRepository(conn).update_header(
                approved.id, {"status": PurchaseOrderStatus.APPROVED}
            )

    async def _list(self, pool, **kwargs):
        async with pool.acquire() as conn:
            return await SQLitePurchaseOrderRepository(conn).list_orders(**kwargs)

    async def test_newest_first(self, pool, seeded_orders):
        page = await self._list(pool)

        assert page.total == 3
        assert [o.po_number for o in page.orders] == [
            "PO25690220-P001",
            "PO25690219-P002",
            "PO25690219-P001",
        ]
        assert all(o.items for o in page.orders)

    async def test_filter_status(self, pool, seeded_orders):
        page = await self._list(pool, status=PurchaseOrderStatus.APPROVED)
        assert [o.po_number for o in page.orders] == ["PO25690220-P001"]

    async def test_filter_supplier(self, pool, seeded_orders):
        page = await self._list(pool, supplier_id="supplier-002")
        assert page.total == 1

    async def test_search_po_number(self, pool, seeded_orders):
        page = await self._list(pool, search="25690219")
        assert page.total == 2

    async def test_search_treats_wildcards_literally(self, pool, seeded_orders):
        page = await self._list(pool, search="%")
        assert page.total == 0

    async def test_pagination(self, pool, seeded_orders):
        page = await self._list(pool, limit=2, offset=0)
        assert len(page.orders) == 2
        assert page.has_more is True

        page = await self._list(pool, limit=2, offset=2)
        assert len(page.orders) == 1
        assert page.has_more is False


class TestReferenceLookup:
    async def test_lookups(self, pool):
        async with pool.acquire() as conn:
            refs = SQLiteReferenceLookup(conn)

            assert (await refs.get_supplier("supplier-001")).tax_id == "0105555000001"
            assert await refs.get_supplier("supplier-ghost") is None
            assert (await refs.get_user("user-admin")).role == "ADMIN"
            assert await refs.get_user("user-ghost") is None
            assert (await refs.get_first_user()).id == "user-admin"

    async def test_get_products_batch(self, pool):
        async with pool.acquire() as conn:
            products = await SQLiteReferenceLookup(conn).get_products(
                ["product-flour", "product-ghost", "product-salt"]
            )

        assert set(products) == {"product-flour", "product-salt"}
        assert products["product-flour"].default_price == Decimal("850")

    async def test_get_products_empty(self, pool):
        async with pool.acquire() as conn:
            assert await SQLiteReferenceLookup(conn).get_products([]) == {}
