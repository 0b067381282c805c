"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest

from purchasing.application.services import reset_services
from purchasing.config import OrderSettings, Settings, StorageSettings, reset_settings
from purchasing.infrastructure.storage.sqlite.connection import ConnectionPool
from purchasing.infrastructure.storage.sqlite.migrations.migrator import run_migrations
from purchasing.infrastructure.storage.sqlite.seed import seed_database
from purchasing.infrastructure.storage.sqlite.unit_of_work import SQLiteOrderUnitOfWork

# Seeded reference IDs
SUPPLIER_ID = "supplier-001"
OTHER_SUPPLIER_ID = "supplier-002"
ADMIN_ID = "user-admin"
PURCHASER_ID = "user-purchaser"
FLOUR_ID = "product-flour"
SUGAR_ID = "product-sugar"
SALT_ID = "product-salt"


@pytest.fixture(autouse=True)
def _isolate_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point global settings at a throwaway data dir and drop cached singletons."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("ORDERS_RETRY_DELAY", "0")
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings with no retry backoff."""
    return Settings(
        storage=StorageSettings(data_dir=tmp_path / "data"),
        orders=OrderSettings(retry_delay=0.0),
    )


@pytest.fixture
async def migrated_db(tmp_path: Path) -> Path:
    """Temporary database with the real schema and demo reference data."""
    db_path = tmp_path / "orders.db"
    results = await run_migrations(db_path)
    assert all(r.success for r in results)
    await seed_database(db_path)
    return db_path


@pytest.fixture
async def pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    pool = ConnectionPool(migrated_db, pool_size=4, busy_timeout=5000)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def unit_of_work(pool: ConnectionPool) -> SQLiteOrderUnitOfWork:
    return SQLiteOrderUnitOfWork(pool)


@pytest.fixture
def order_payload() -> dict:
    """Create payload matching the worked pricing example."""
    return {
        "supplier_id": SUPPLIER_ID,
        "user_id": PURCHASER_ID,
        "issue_date": "2026-02-19",
        "delivery_date": "2026-02-26",
        "shipping_cost": 20,
        "items": [
            {"product_id": FLOUR_ID, "quantity": 2, "unit_price": 100},
            {"item_type": "MANUAL", "item_name": "Pallet wrap", "quantity": 1, "unit_price": 50},
        ],
    }
