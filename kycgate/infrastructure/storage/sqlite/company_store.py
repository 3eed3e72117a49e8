"""
SQLite implementation of the company profile store.

Status writes go through compare_and_set_status so two concurrent writers
can never both apply a transition computed from the same observed state.
"""

import json
from datetime import UTC, date, datetime

import aiosqlite

from kycgate.config import get_logger
from kycgate.core.entities.audit import AuditEntry
from kycgate.core.entities.company import CompanyProfile, OnboardingStatus
from kycgate.core.interfaces.storage import ICompanyStore
from kycgate.infrastructure.storage.sqlite.audit_store import insert_audit_entry
from kycgate.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteCompanyStore(ICompanyStore):
    """SQLite implementation of company storage."""

    async def create(self, company: CompanyProfile) -> CompanyProfile:
        """Create a new company profile."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO companies (
                    company_name, contact_email, renewal_date, onboarding_status,
                    status_version, activated_at, notes, metadata_json,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    company.company_name,
                    company.contact_email,
                    company.renewal_date.isoformat() if company.renewal_date else None,
                    company.onboarding_status.value,
                    company.status_version,
                    company.activated_at.isoformat() if company.activated_at else None,
                    company.notes,
                    json.dumps(company.metadata),
                    company.created_at.isoformat(),
                    company.updated_at.isoformat(),
                ),
            )
            company.id = cursor.lastrowid
            logger.info("company_created", company_id=company.id)
            return company

    async def get(self, company_id: int) -> CompanyProfile | None:
        """Get company by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM companies WHERE id = ?", (company_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def list_companies(
        self,
        status: OnboardingStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[CompanyProfile]:
        """List companies, newest first."""
        async with get_connection() as conn:
            if status:
                cursor = await conn.execute(
                    """
                    SELECT * FROM companies
                    WHERE onboarding_status = ?
                    ORDER BY id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (status.value, limit, offset),
                )
            else:
                cursor = await conn.execute(
                    "SELECT * FROM companies ORDER BY id DESC LIMIT ? OFFSET ?",
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def list_renewal_lapsed(
        self, today: date, status: OnboardingStatus
    ) -> list[CompanyProfile]:
        """Companies in status whose renewal day is strictly before today."""
        async with get_connection() as conn:
            # ISO dates compare correctly as text
            cursor = await conn.execute(
                """
                SELECT * FROM companies
                WHERE onboarding_status = ?
                  AND renewal_date IS NOT NULL
                  AND renewal_date < ?
                ORDER BY id
                """,
                (status.value, today.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def update_renewal_date(
        self,
        company_id: int,
        renewal_date: date | None,
        audit: AuditEntry | None = None,
    ) -> CompanyProfile | None:
        """Set or clear the renewal date."""
        now = datetime.now(UTC)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE companies SET renewal_date = ?, updated_at = ? WHERE id = ?",
                (
                    renewal_date.isoformat() if renewal_date else None,
                    now.isoformat(),
                    company_id,
                ),
            )
            if cursor.rowcount == 0:
                return None
            if audit is not None:
                await insert_audit_entry(conn, audit)
            cursor = await conn.execute("SELECT * FROM companies WHERE id = ?", (company_id,))
            row = await cursor.fetchone()
            logger.info(
                "company_renewal_updated",
                company_id=company_id,
                renewal_date=renewal_date.isoformat() if renewal_date else None,
            )
            return self._row_to_entity(row)

    async def compare_and_set_status(
        self,
        company_id: int,
        expected_version: int,
        new_status: OnboardingStatus,
        activated_at: datetime | None = None,
        audit: AuditEntry | None = None,
    ) -> CompanyProfile | None:
        """Write the new status only if status_version is unchanged."""
        now = datetime.now(UTC)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE companies SET
                    onboarding_status = ?,
                    status_version = status_version + 1,
                    activated_at = COALESCE(?, activated_at),
                    updated_at = ?
                WHERE id = ? AND status_version = ?
                """,
                (
                    new_status.value,
                    activated_at.isoformat() if activated_at else None,
                    now.isoformat(),
                    company_id,
                    expected_version,
                ),
            )
            if cursor.rowcount == 0:
                logger.info(
                    "company_status_guard_missed",
                    company_id=company_id,
                    expected_version=expected_version,
                )
                return None
            if audit is not None:
                await insert_audit_entry(conn, audit)

            cursor = await conn.execute("SELECT * FROM companies WHERE id = ?", (company_id,))
            row = await cursor.fetchone()
            company = self._row_to_entity(row)
            logger.info(
                "company_status_changed",
                company_id=company_id,
                status=company.onboarding_status.value,
                status_version=company.status_version,
            )
            return company

    async def list_renewal_upcoming(
        self, today: date, until: date, status: OnboardingStatus
    ) -> list[CompanyProfile]:
        """Companies in status whose renewal day is after today and on or before until."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM companies
                WHERE onboarding_status = ?
                  AND renewal_date > ?
                  AND renewal_date <= ?
                ORDER BY renewal_date, id
                """,
                (status.value, today.isoformat(), until.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def claim_renewal_reminder(
        self, company_id: int, renewal_date: date, days_before: int
    ) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT OR IGNORE INTO renewal_reminders (company_id, renewal_date, days_before, sent_at)
                VALUES (?, ?, ?, ?)
                """,
                (company_id, renewal_date.isoformat(), days_before, datetime.now(UTC).isoformat()),
            )
            return cursor.rowcount == 1

    async def release_renewal_reminder(
        self, company_id: int, renewal_date: date, days_before: int
    ) -> None:
        async with get_transaction() as conn:
            await conn.execute(
                """
                DELETE FROM renewal_reminders
                WHERE company_id = ? AND renewal_date = ? AND days_before = ?
                """,
                (company_id, renewal_date.isoformat(), days_before),
            )

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> CompanyProfile:
        """Convert database row to CompanyProfile entity."""
        return CompanyProfile(
            id=row["id"],
            company_name=row["company_name"],
            contact_email=row["contact_email"],
            renewal_date=date.fromisoformat(row["renewal_date"]) if row["renewal_date"] else None,
            onboarding_status=OnboardingStatus(row["onboarding_status"]),
            status_version=row["status_version"],
            activated_at=(
                datetime.fromisoformat(row["activated_at"]) if row["activated_at"] else None
            ),
            notes=row["notes"],
            metadata=json.loads(row["metadata_json"]) if row["metadata_json"] else {},
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
