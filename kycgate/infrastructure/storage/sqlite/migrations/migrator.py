"""
Schema migrations for the onboarding database.

Files in this package named ``v<NNN>_<name>.sql`` are applied in order and
recorded in ``schema_migrations`` together with a short content hash. A
recorded migration whose file has since changed stops the upgrade with a
DatabaseError; the fix is a new migration, never an edit.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import aiosqlite

from kycgate.config import get_logger, get_settings
from kycgate.core.exceptions import DatabaseError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

REQUIRED_TABLES = (
    "companies",
    "documents",
    "compliance_requirements",
    "audit_log",
    "renewal_reminders",
    "schema_migrations",
)

_FILENAME = re.compile(r"v(?P<version>\d+)_(?P<name>.+)\.sql")


@dataclass(frozen=True)
class MigrationInfo:
    """One migration script on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME.fullmatch(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(match["version"], match["name"], path, digest[:16])


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


@dataclass
class MigrationStatus:
    exists: bool
    current_version: str | None = None
    applied: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)


@dataclass
class IntegrityCheck:
    name: str
    passed: bool
    detail: str = ""


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration scripts in version order; badly named files are skipped."""
    found = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return found


class SchemaMigrator:
    """Applies pending migrations to one database file."""

    def __init__(self, db_path: Path, directory: Path = MIGRATIONS_DIR):
        self.db_path = db_path
        self.directory = directory

    async def _recorded(self, conn: aiosqlite.Connection) -> dict[str, str]:
        try:
            cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
        except aiosqlite.OperationalError:
            return {}
        return {version: checksum for version, checksum in await cursor.fetchall()}

    async def _apply(self, conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
        logger.info("applying_migration", version=migration.version, name=migration.name)
        started = time.perf_counter()

        def elapsed() -> int:
            return int((time.perf_counter() - started) * 1000)

        try:
            await conn.executescript(migration.path.read_text(encoding="utf-8"))
            await conn.execute(
                "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms) "
                "VALUES (?, ?, ?, ?)",
                (migration.version, migration.name, migration.checksum, elapsed()),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            logger.error("migration_failed", version=migration.version, error=str(e))
            return MigrationResult(migration.version, migration.name, False, elapsed(), str(e))

        logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed())
        return MigrationResult(migration.version, migration.name, True, elapsed())

    async def upgrade(self) -> list[MigrationResult]:
        """Apply every pending migration, stopping at the first failure."""
        migrations = discover_migrations(self.directory)
        if not migrations:
            logger.warning("no_migrations_found", directory=str(self.directory))
            return []

        results: list[MigrationResult] = []
        async with aiosqlite.connect(self.db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            recorded = await self._recorded(conn)

            for migration in migrations:
                checksum = recorded.get(migration.version)
                if checksum is not None:
                    if checksum != migration.checksum:
                        raise DatabaseError(
                            "migrate",
                            f"migration v{migration.version} changed after it was applied",
                        )
                    continue

                result = await self._apply(conn, migration)
                results.append(result)
                if not result.success:
                    break
        return results

    async def status(self) -> MigrationStatus:
        available = [m.version for m in discover_migrations(self.directory)]
        if not self.db_path.exists():
            return MigrationStatus(exists=False, pending=available)

        async with aiosqlite.connect(self.db_path) as conn:
            applied = sorted(await self._recorded(conn))
        return MigrationStatus(
            exists=True,
            current_version=applied[-1] if applied else None,
            applied=applied,
            pending=[v for v in available if v not in applied],
        )

    async def verify(self) -> list[IntegrityCheck]:
        """Foreign keys, page integrity and presence of the onboarding tables."""
        async with aiosqlite.connect(self.db_path) as conn:
            cursor = await conn.execute("PRAGMA foreign_key_check")
            violations = await cursor.fetchall()

            cursor = await conn.execute("PRAGMA integrity_check")
            (integrity,) = await cursor.fetchone()

            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            tables = {row[0] for row in await cursor.fetchall()}

        missing = [t for t in REQUIRED_TABLES if t not in tables]
        return [
            IntegrityCheck("foreign_keys", not violations, f"{len(violations)} violation(s)"),
            IntegrityCheck("integrity", integrity == "ok", integrity),
            IntegrityCheck("required_tables", not missing, ", ".join(missing)),
        ]


def _backup(db_path: Path) -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{stamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring the database up to the latest schema.

    An existing file is copied aside first when ``create_backup_before`` is
    set. The copy is restored if the upgrade raises and removed once every
    pending migration has applied.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = _backup(db_path) if create_backup_before and db_path.exists() else None

    try:
        results = await SchemaMigrator(db_path).upgrade()
    except Exception:
        if backup_path is not None:
            shutil.copy2(backup_path, db_path)
            logger.warning("database_restored_from_backup", backup_path=str(backup_path))
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()
    return results


async def get_migration_status(db_path: Path | None = None) -> MigrationStatus:
    return await SchemaMigrator(db_path or get_settings().storage.db_path).status()


async def verify_schema_integrity(db_path: Path | None = None) -> list[IntegrityCheck]:
    return await SchemaMigrator(db_path or get_settings().storage.db_path).verify()


def main() -> None:
    """Command-line entry point: migrate, or report status / integrity."""
    import argparse

    parser = argparse.ArgumentParser(description="KYC Gate database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument("--verify", action="store_true", help="Verify schema integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip backup before migrating")
    args = parser.parse_args()

    async def run() -> int:
        if args.status:
            status = await get_migration_status(args.db_path)
            print(f"exists={status.exists} current={status.current_version or '-'}")
            print(f"applied={status.applied} pending={status.pending}")
            return 0

        if args.verify:
            checks = await verify_schema_integrity(args.db_path)
            for check in checks:
                print(f"[{'PASS' if check.passed else 'FAIL'}] {check.name} {check.detail}")
            return 0 if all(c.passed for c in checks) else 1

        results = await initialize_database(args.db_path, create_backup_before=not args.no_backup)
        for result in results:
            outcome = "ok" if result.success else f"FAILED: {result.error}"
            print(f"v{result.version} {result.name} ({result.execution_time_ms}ms) {outcome}")
        return 0 if all(r.success for r in results) else 1

    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
