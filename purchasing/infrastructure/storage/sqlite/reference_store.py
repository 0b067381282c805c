"""SQLite lookups for suppliers, products and users."""

from decimal import Decimal

import aiosqlite

from purchasing.core.entities.reference import Product, Supplier, User
from purchasing.core.interfaces.order_store import IReferenceLookup


def _decimal_or_none(value: str | None) -> Decimal | None:
    return Decimal(value) if value is not None else None


class SQLiteReferenceLookup(IReferenceLookup):
    """Reference lookups bound to one connection (and its open transaction)."""

    def __init__(self, conn: aiosqlite.Connection):
        self.conn = conn

    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        cursor = await self.conn.execute(
            "SELECT * FROM suppliers WHERE id = ?",
            (supplier_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_supplier(row) if row else None

    async def get_user(self, user_id: str) -> User | None:
        cursor = await self.conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_user(row) if row else None

    async def get_first_user(self) -> User | None:
        cursor = await self.conn.execute(
            "SELECT * FROM users ORDER BY created_at, id LIMIT 1"
        )
        row = await cursor.fetchone()
        return self._row_to_user(row) if row else None

    async def get_products(self, product_ids: list[str]) -> dict[str, Product]:
        """Load all requested products in a single query."""
        if not product_ids:
            return {}
        placeholders = ", ".join("?" for _ in product_ids)
        cursor = await self.conn.execute(
            f"SELECT * FROM products WHERE id IN ({placeholders})",
            tuple(product_ids),
        )
        rows = await cursor.fetchall()
        return {row["id"]: self._row_to_product(row) for row in rows}

    @staticmethod
    def _row_to_supplier(row: aiosqlite.Row) -> Supplier:
        return Supplier(
            id=row["id"],
            company_name=row["company_name"],
            tax_id=row["tax_id"],
            address=row["address"],
            phone=row["phone"],
            regular_price=_decimal_or_none(row["regular_price"]),
        )

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            role=row["role"],
        )

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        return Product(
            id=row["id"],
            sku=row["sku"],
            name=row["name"],
            unit=row["unit"],
            default_price=_decimal_or_none(row["default_price"]),
        )
