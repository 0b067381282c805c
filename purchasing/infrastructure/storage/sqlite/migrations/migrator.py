"""
Versioned schema migrations for the purchase order database.

Files named ``vNNN_<name>.sql`` beside this module are applied in version
order, each inside one transaction together with its ``schema_migrations``
row. A recorded checksum that no longer matches its file stops the run;
schema changes go into a new version instead.

    python -m purchasing.infrastructure.storage.sqlite.migrations.migrator
"""

import asyncio
import hashlib
import re
import time
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from purchasing.config import get_logger, get_settings
from purchasing.core.exceptions import ConfigurationError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
MIGRATION_FILENAME = re.compile(r"^v(\d{3})_(\w+)\.sql$")

ORDER_TABLES = ("users", "suppliers", "products", "purchase_orders", "purchase_order_items")
# Order numbering depends on this index rejecting duplicate po_numbers
PO_NUMBER_INDEX = "ux_purchase_orders_po_number"

LEDGER_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    duration_ms INTEGER,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""


@dataclass(frozen=True)
class Migration:
    """One schema version on disk."""

    version: str
    name: str
    path: Path

    @property
    def sql(self) -> str:
        return self.path.read_text(encoding="utf-8")

    @property
    def checksum(self) -> str:
        return hashlib.sha256(self.path.read_bytes()).hexdigest()[:16]


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    duration_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """
    List the migrations in a directory, oldest first.

    Raises:
        ConfigurationError: a v*.sql file is misnamed or a version repeats
    """
    migrations: dict[str, Migration] = {}
    for path in sorted(directory.glob("v*.sql")):
        match = MIGRATION_FILENAME.match(path.name)
        if not match:
            raise ConfigurationError(
                f"Migration file must be named vNNN_name.sql: {path.name}",
                code="MIGRATION_ERROR",
                details={"path": str(path)},
            )
        version, name = match.groups()
        if version in migrations:
            raise ConfigurationError(
                f"Duplicate migration version v{version}",
                code="MIGRATION_ERROR",
                details={"files": [migrations[version].path.name, path.name]},
            )
        migrations[version] = Migration(version=version, name=name, path=path)
    return list(migrations.values())


async def ensure_ledger(conn: aiosqlite.Connection) -> None:
    await conn.executescript(LEDGER_DDL)


async def applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    """Map of applied version to the checksum recorded when it ran."""
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    return {row[0]: row[1] for row in await cursor.fetchall()}


def pending_migrations(
    migrations: list[Migration],
    applied: dict[str, str],
) -> list[Migration]:
    """
    Select migrations not yet applied.

    Raises:
        ConfigurationError: an applied migration file was edited afterwards
    """
    pending = []
    for migration in migrations:
        recorded = applied.get(migration.version)
        if recorded is None:
            pending.append(migration)
        elif recorded != migration.checksum:
            raise ConfigurationError(
                f"Migration v{migration.version} changed after it was applied",
                code="MIGRATION_ERROR",
                details={
                    "version": migration.version,
                    "recorded": recorded,
                    "current": migration.checksum,
                },
            )
    return pending


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: Migration,
) -> MigrationResult:
    """Run one migration and record it; on failure nothing from it is kept."""
    started = time.perf_counter()
    try:
        # executescript commits before it runs, so the BEGIN here stays open
        await conn.executescript(f"BEGIN;\n{migration.sql}")
        await conn.execute(
            "INSERT INTO schema_migrations (version, name, checksum, duration_ms) "
            "VALUES (?, ?, ?, ?)",
            (
                migration.version,
                migration.name,
                migration.checksum,
                int((time.perf_counter() - started) * 1000),
            ),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        if conn.in_transaction:
            await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            duration_ms=int((time.perf_counter() - started) * 1000),
            error=str(e),
        )

    duration_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        duration_ms=duration_ms,
    )
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        duration_ms=duration_ms,
    )


async def verify_order_schema(conn: aiosqlite.Connection) -> None:
    """
    Check the tables and the po_number uniqueness the order engine relies on.

    Raises:
        ConfigurationError: a table or the unique po_number index is missing
    """
    cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    tables = {row[0] for row in await cursor.fetchall()}
    missing = [table for table in ORDER_TABLES if table not in tables]
    if missing:
        raise ConfigurationError(
            f"Order tables missing: {', '.join(missing)}",
            code="MIGRATION_ERROR",
            details={"missing_tables": missing},
        )

    cursor = await conn.execute("PRAGMA index_list('purchase_orders')")
    unique_indexes = {row[1] for row in await cursor.fetchall() if row[2]}
    if PO_NUMBER_INDEX not in unique_indexes:
        raise ConfigurationError(
            "purchase_orders.po_number is not backed by a unique index",
            code="MIGRATION_ERROR",
            details={"index": PO_NUMBER_INDEX},
        )


async def run_migrations(db_path: Path | None = None) -> list[MigrationResult]:
    """
    Bring a database up to the latest schema version.

    Stops at the first failing migration. The order schema is verified only
    when every pending migration succeeded.

    Args:
        db_path: Database file (default from settings), created if absent

    Returns:
        One result per migration attempted in this run
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    migrations = discover_migrations()

    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        await ensure_ledger(conn)

        pending = pending_migrations(migrations, await applied_checksums(conn))
        for migration in pending:
            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                return results

        await verify_order_schema(conn)

    logger.info(
        "schema_up_to_date",
        db_path=str(db_path),
        applied=len(results),
        version=migrations[-1].version if migrations else None,
    )
    return results


async def migration_status(db_path: Path | None = None) -> dict[str, list[str]]:
    """Applied and pending versions, without changing the database."""
    db_path = db_path or get_settings().storage.db_path
    migrations = discover_migrations()
    if not db_path.exists():
        return {"applied": [], "pending": [m.version for m in migrations]}

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_migrations'"
        )
        applied = await applied_checksums(conn) if await cursor.fetchone() else {}

    return {
        "applied": sorted(applied),
        "pending": [m.version for m in pending_migrations(migrations, applied)],
    }


def main() -> None:
    """CLI entry point: apply pending migrations, or report status."""
    import argparse

    parser = argparse.ArgumentParser(description="Purchase order schema migrations")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument(
        "--status", action="store_true", help="Show applied and pending versions"
    )
    args = parser.parse_args()

    if args.status:
        status = asyncio.run(migration_status(args.db_path))
        print(f"Applied: {', '.join(status['applied']) or 'none'}")
        print(f"Pending: {', '.join(status['pending']) or 'none'}")
        return

    results = asyncio.run(run_migrations(args.db_path))
    if not results:
        print("Schema already up to date")
    for result in results:
        outcome = "ok" if result.success else f"FAILED: {result.error}"
        print(f"v{result.version} {result.name} ({result.duration_ms}ms) {outcome}")
    if not all(r.success for r in results):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
