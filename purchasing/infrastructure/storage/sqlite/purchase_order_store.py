"""SQLite implementation of purchase order storage."""

from collections import defaultdict
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

import aiosqlite

from purchasing.config import get_logger
from purchasing.core.entities.purchase_order import (
    ItemType,
    LineItem,
    PurchaseOrder,
    PurchaseOrderPage,
    PurchaseOrderStatus,
)
from purchasing.core.entities.reference import Product, Supplier, User
from purchasing.core.exceptions import OrderNumberCollisionError
from purchasing.core.interfaces.order_store import IPurchaseOrderRepository

logger = get_logger(__name__)

HEADER_SELECT = """
    SELECT po.*,
           s.company_name AS s_company_name,
           s.tax_id AS s_tax_id,
           s.address AS s_address,
           s.phone AS s_phone,
           s.regular_price AS s_regular_price,
           u.name AS u_name,
           u.email AS u_email,
           u.role AS u_role
    FROM purchase_orders po
    LEFT JOIN suppliers s ON s.id = po.supplier_id
    LEFT JOIN users u ON u.id = po.user_id
"""

ITEM_SELECT = """
    SELECT i.*,
           p.sku AS p_sku,
           p.name AS p_name,
           p.unit AS p_unit,
           p.default_price AS p_default_price
    FROM purchase_order_items i
    LEFT JOIN products p ON p.id = i.product_id
"""

# Columns a status/metadata patch may touch
PATCHABLE_COLUMNS = frozenset({"status", "delivery_date", "notes"})


def _money(value: Decimal) -> str:
    """Serialize a decimal without exponent notation."""
    return format(value, "f")


def _decimal_or_none(value: str | None) -> Decimal | None:
    return Decimal(value) if value is not None else None


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLitePurchaseOrderRepository(IPurchaseOrderRepository):
    """
    Purchase order repository bound to one connection.

    The caller owns the transaction; nothing here commits.
    """

    def __init__(self, conn: aiosqlite.Connection):
        self.conn = conn

    async def get(self, order_id: int) -> PurchaseOrder | None:
        cursor = await self.conn.execute(
            f"{HEADER_SELECT} WHERE po.id = ?",
            (order_id,),
        )
        row = await cursor.fetchone()
        if not row:
            return None

        order = self._row_to_order(row)
        items = await self._load_items([order_id])
        order.items = items.get(order_id, [])
        return order

    async def get_last_number(self, prefix: str) -> str | None:
        # Length first so a widened suffix (1000) sorts after 999
        cursor = await self.conn.execute(
            """
            SELECT po_number FROM purchase_orders
            WHERE substr(po_number, 1, ?) = ?
            ORDER BY LENGTH(po_number) DESC, po_number DESC
            LIMIT 1
            """,
            (len(prefix), prefix),
        )
        row = await cursor.fetchone()
        return row[0] if row else None

    async def insert(self, order: PurchaseOrder) -> PurchaseOrder:
        now = datetime.now(UTC)
        order.created_at = now
        order.updated_at = now

        try:
            cursor = await self.conn.execute(
                """
                INSERT INTO purchase_orders (
                    po_number, status, supplier_id, user_id,
                    issue_date, delivery_date,
                    subtotal, discount_amount, vat_amount, shipping_cost, grand_total,
                    notes, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order.po_number,
                    order.status.value,
                    order.supplier_id,
                    order.user_id,
                    order.issue_date.isoformat(),
                    order.delivery_date.isoformat(),
                    _money(order.subtotal),
                    _money(order.discount_amount),
                    _money(order.vat_amount),
                    _money(order.shipping_cost),
                    _money(order.grand_total),
                    order.notes,
                    order.created_at.isoformat(),
                    order.updated_at.isoformat(),
                ),
            )
        except aiosqlite.IntegrityError as e:
            if "po_number" in str(e):
                logger.warning("order_number_collision", po_number=order.po_number)
                raise OrderNumberCollisionError(order.po_number) from e
            raise

        order.id = cursor.lastrowid
        await self._insert_items(order)

        logger.debug(
            "purchase_order_inserted",
            order_id=order.id,
            po_number=order.po_number,
            items=len(order.items),
        )
        return order

    async def replace(self, order: PurchaseOrder) -> PurchaseOrder:
        order.updated_at = datetime.now(UTC)

        await self.conn.execute(
            """
            UPDATE purchase_orders SET
                supplier_id = ?, user_id = ?,
                issue_date = ?, delivery_date = ?,
                subtotal = ?, discount_amount = ?, vat_amount = ?,
                shipping_cost = ?, grand_total = ?,
                notes = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                order.supplier_id,
                order.user_id,
                order.issue_date.isoformat(),
                order.delivery_date.isoformat(),
                _money(order.subtotal),
                _money(order.discount_amount),
                _money(order.vat_amount),
                _money(order.shipping_cost),
                _money(order.grand_total),
                order.notes,
                order.updated_at.isoformat(),
                order.id,
            ),
        )

        cursor = await self.conn.execute(
            "DELETE FROM purchase_order_items WHERE po_id = ?",
            (order.id,),
        )
        removed = cursor.rowcount
        await self._insert_items(order)

        logger.debug(
            "purchase_order_items_replaced",
            order_id=order.id,
            removed=removed,
            inserted=len(order.items),
        )
        return order

    async def update_header(self, order_id: int, changes: dict[str, Any]) -> None:
        unknown = set(changes) - PATCHABLE_COLUMNS
        if unknown:
            raise ValueError(f"Columns not patchable: {sorted(unknown)}")
        if not changes:
            return

        values: dict[str, Any] = {}
        for column, value in changes.items():
            if isinstance(value, PurchaseOrderStatus):
                value = value.value
            elif isinstance(value, date):
                value = value.isoformat()
            values[column] = value
        values["updated_at"] = datetime.now(UTC).isoformat()

        assignments = ", ".join(f"{column} = ?" for column in values)
        await self.conn.execute(
            f"UPDATE purchase_orders SET {assignments} WHERE id = ?",
            (*values.values(), order_id),
        )

    async def delete(self, order_id: int) -> bool:
        cursor = await self.conn.execute(
            "DELETE FROM purchase_orders WHERE id = ?",
            (order_id,),
        )
        return cursor.rowcount > 0

    async def list_orders(
        self,
        status: PurchaseOrderStatus | None = None,
        supplier_id: str | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> PurchaseOrderPage:
        conditions: list[str] = []
        params: list[Any] = []

        if status is not None:
            conditions.append("po.status = ?")
            params.append(status.value)
        if supplier_id:
            conditions.append("po.supplier_id = ?")
            params.append(supplier_id)
        if search:
            # LIKE is case-insensitive for ASCII in SQLite
            pattern = f"%{_escape_like(search)}%"
            conditions.append(
                "(po.po_number LIKE ? ESCAPE '\\' OR s.company_name LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern])

        where = f" WHERE {' AND '.join(conditions)}" if conditions else ""

        cursor = await self.conn.execute(
            "SELECT COUNT(*) FROM purchase_orders po "
            f"LEFT JOIN suppliers s ON s.id = po.supplier_id{where}",
            tuple(params),
        )
        total = (await cursor.fetchone())[0]

        cursor = await self.conn.execute(
            f"{HEADER_SELECT}{where} ORDER BY po.created_at DESC, po.id DESC LIMIT ? OFFSET ?",
            (*params, limit, offset),
        )
        rows = await cursor.fetchall()
        orders = [self._row_to_order(row) for row in rows]

        items = await self._load_items([order.id for order in orders])
        for order in orders:
            order.items = items.get(order.id, [])

        return PurchaseOrderPage(orders=orders, total=total, limit=limit, offset=offset)

    async def _insert_items(self, order: PurchaseOrder) -> None:
        for item in order.items:
            item.po_id = order.id
            cursor = await self.conn.execute(
                """
                INSERT INTO purchase_order_items (
                    po_id, product_id, item_name, item_type,
                    quantity, unit_price, total_price
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.po_id,
                    item.product_id,
                    item.item_name,
                    item.item_type.value,
                    _money(item.quantity),
                    _money(item.unit_price),
                    _money(item.total_price),
                ),
            )
            item.id = cursor.lastrowid

    async def _load_items(self, order_ids: list[int]) -> dict[int, list[LineItem]]:
        """Batch-load items for several orders, ordered by item id."""
        if not order_ids:
            return {}
        placeholders = ", ".join("?" for _ in order_ids)
        cursor = await self.conn.execute(
            f"{ITEM_SELECT} WHERE i.po_id IN ({placeholders}) ORDER BY i.po_id, i.id",
            tuple(order_ids),
        )
        rows = await cursor.fetchall()

        grouped: dict[int, list[LineItem]] = defaultdict(list)
        for row in rows:
            grouped[row["po_id"]].append(self._row_to_item(row))
        return grouped

    def _row_to_order(self, row: aiosqlite.Row) -> PurchaseOrder:
        """Convert a joined header row to a PurchaseOrder."""
        supplier = None
        if row["s_company_name"] is not None:
            supplier = Supplier(
                id=row["supplier_id"],
                company_name=row["s_company_name"],
                tax_id=row["s_tax_id"],
                address=row["s_address"],
                phone=row["s_phone"],
                regular_price=_decimal_or_none(row["s_regular_price"]),
            )

        user = None
        if row["u_name"] is not None:
            user = User(
                id=row["user_id"],
                name=row["u_name"],
                email=row["u_email"],
                role=row["u_role"],
            )

        return PurchaseOrder(
            id=row["id"],
            po_number=row["po_number"],
            status=PurchaseOrderStatus(row["status"]),
            supplier_id=row["supplier_id"],
            user_id=row["user_id"],
            issue_date=date.fromisoformat(row["issue_date"]),
            delivery_date=date.fromisoformat(row["delivery_date"]),
            subtotal=Decimal(row["subtotal"]),
            discount_amount=Decimal(row["discount_amount"]),
            vat_amount=Decimal(row["vat_amount"]),
            shipping_cost=Decimal(row["shipping_cost"]),
            grand_total=Decimal(row["grand_total"]),
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            supplier=supplier,
            user=user,
        )

    def _row_to_item(self, row: aiosqlite.Row) -> LineItem:
        """Convert a joined item row to a LineItem."""
        product = None
        if row["p_name"] is not None:
            product = Product(
                id=row["product_id"],
                sku=row["p_sku"],
                name=row["p_name"],
                unit=row["p_unit"],
                default_price=_decimal_or_none(row["p_default_price"]),
            )

        return LineItem(
            id=row["id"],
            po_id=row["po_id"],
            product_id=row["product_id"],
            item_name=row["item_name"],
            item_type=ItemType(row["item_type"]),
            quantity=Decimal(row["quantity"]),
            unit_price=Decimal(row["unit_price"]),
            total_price=Decimal(row["total_price"]),
            product=product,
        )
