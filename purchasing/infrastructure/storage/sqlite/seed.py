"""
Demo reference data.

Loads users, suppliers and products so orders can be created against a
fresh database. Safe to run repeatedly.

    python -m purchasing.infrastructure.storage.sqlite.seed
"""

import asyncio
from pathlib import Path

import aiosqlite

from purchasing.config import get_logger, get_settings

logger = get_logger(__name__)

USERS = [
    ("user-admin", "Admin Tri-Ek", "admin@tri-ek.com", "ADMIN"),
    ("user-purchaser", "Somchai Jaidee", "purchaser@tri-ek.com", "PURCHASER"),
]

SUPPLIERS = [
    (
        "supplier-001",
        "บริษัท ไทยฟู้ดส์ จำกัด",
        "0105555000001",
        "123 ถ.สุขุมวิท แขวงคลองเตย เขตคลองเตย กรุงเทพฯ 10110",
        "02-123-4567",
    ),
    (
        "supplier-002",
        "ห้างหุ้นส่วนจำกัด เครื่องเทศไทย",
        "0105555000002",
        "456 ถ.พระราม 2 แขวงบางมด เขตจอมทอง กรุงเทพฯ 10150",
        "02-234-5678",
    ),
    (
        "supplier-003",
        "บริษัท แพ็คเกจจิ้งไทย จำกัด",
        "0105555000003",
        "789 ถ.บางนา-ตราด แขวงบางนา เขตบางนา กรุงเทพฯ 10260",
        "02-345-6789",
    ),
]

PRODUCTS = [
    ("product-flour", "RM-FLOUR-001", "แป้งสาลีอเนกประสงค์", "ถุง", "850.00000000"),
    ("product-sugar", "RM-SUGAR-001", "น้ำตาลทรายขาว", "ถุง", "1250.00000000"),
    ("product-salt", "RM-SALT-001", "เกลือสมุทร", "ถุง", "180.00000000"),
    ("product-oil", "RM-OIL-001", "น้ำมันพืช", "แกลลอน", "650.00000000"),
]


async def seed_database(db_path: Path | None = None) -> dict[str, int]:
    """
    Insert demo reference rows, skipping any that already exist.

    Returns:
        Number of rows inserted per table
    """
    db_path = db_path or get_settings().storage.db_path
    inserted = {"users": 0, "suppliers": 0, "products": 0}

    async with aiosqlite.connect(db_path) as conn:
        for row in USERS:
            cursor = await conn.execute(
                "INSERT OR IGNORE INTO users (id, name, email, role) VALUES (?, ?, ?, ?)",
                row,
            )
            inserted["users"] += cursor.rowcount

        for row in SUPPLIERS:
            cursor = await conn.execute(
                """
                INSERT OR IGNORE INTO suppliers (id, company_name, tax_id, address, phone)
                VALUES (?, ?, ?, ?, ?)
                """,
                row,
            )
            inserted["suppliers"] += cursor.rowcount

        for row in PRODUCTS:
            cursor = await conn.execute(
                """
                INSERT OR IGNORE INTO products (id, sku, name, unit, default_price)
                VALUES (?, ?, ?, ?, ?)
                """,
                row,
            )
            inserted["products"] += cursor.rowcount

        await conn.commit()

    logger.info("database_seeded", db_path=str(db_path), **inserted)
    return inserted


def main() -> None:
    """CLI entry point for seeding."""
    import argparse

    parser = argparse.ArgumentParser(description="Seed demo reference data")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    args = parser.parse_args()

    counts = asyncio.run(seed_database(args.db_path))
    for table, count in counts.items():
        print(f"{table}: {count} inserted")


if __name__ == "__main__":
    main()
