"""Versioned SQL migrations for the onboarding schema."""

from kycgate.infrastructure.storage.sqlite.migrations.migrator import (
    IntegrityCheck,
    MigrationInfo,
    MigrationResult,
    MigrationStatus,
    SchemaMigrator,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)

__all__ = [
    "IntegrityCheck",
    "MigrationInfo",
    "MigrationResult",
    "MigrationStatus",
    "SchemaMigrator",
    "discover_migrations",
    "get_migration_status",
    "initialize_database",
    "verify_schema_integrity",
]
