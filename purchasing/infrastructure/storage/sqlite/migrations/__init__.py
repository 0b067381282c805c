"""Database migrations module."""

from purchasing.infrastructure.storage.sqlite.migrations.migrator import (
    Migration,
    MigrationResult,
    discover_migrations,
    migration_status,
    run_migrations,
    verify_order_schema,
)

__all__ = [
    "Migration",
    "MigrationResult",
    "discover_migrations",
    "migration_status",
    "run_migrations",
    "verify_order_schema",
]
