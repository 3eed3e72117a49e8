"""Tests for SQLiteCompanyStore."""

from datetime import UTC, date, datetime

import pytest

from kycgate.core.entities import (
    AuditAction,
    AuditEntityType,
    AuditEntry,
    CompanyProfile,
    OnboardingStatus,
)
from kycgate.infrastructure.storage.sqlite import SQLiteAuditLog, SQLiteCompanyStore


def _company(name: str = "Acme Traders", renewal: date | None = None, **kwargs) -> CompanyProfile:
    return CompanyProfile(
        company_name=name,
        contact_email="ops@acme.example",
        renewal_date=renewal,
        **kwargs,
    )


class TestSQLiteCompanyStore:
    """Tests for SQLiteCompanyStore against a migrated temp database."""

    @pytest.fixture(autouse=True)
    def _setup(self, sqlite_db):
        self.store = SQLiteCompanyStore()

    async def test_create_and_get(self):
        created = await self.store.create(
            _company(renewal=date(2027, 1, 31), notes="priority", metadata={"tier": "gold"})
        )
        assert created.id is not None

        fetched = await self.store.get(created.id)
        assert fetched is not None
        assert fetched.company_name == "Acme Traders"
        assert fetched.renewal_date == date(2027, 1, 31)
        assert fetched.onboarding_status == OnboardingStatus.PENDING
        assert fetched.status_version == 0
        assert fetched.metadata == {"tier": "gold"}

    async def test_get_missing(self):
        assert await self.store.get(12345) is None

    async def test_list_filters_by_status(self):
        await self.store.create(_company("Pending Co"))
        await self.store.create(_company("Done Co", onboarding_status=OnboardingStatus.COMPLETED))

        completed = await self.store.list_companies(status=OnboardingStatus.COMPLETED)
        everyone = await self.store.list_companies()

        assert [c.company_name for c in completed] == ["Done Co"]
        assert [c.company_name for c in everyone] == ["Done Co", "Pending Co"]

    async def test_list_renewal_lapsed(self):
        today = date(2026, 3, 15)
        lapsed = await self.store.create(
            _company("Lapsed", date(2026, 3, 14), onboarding_status=OnboardingStatus.COMPLETED)
        )
        await self.store.create(
            _company("Due today", today, onboarding_status=OnboardingStatus.COMPLETED)
        )
        await self.store.create(_company("Pending lapsed", date(2026, 1, 1)))
        await self.store.create(_company("No renewal", onboarding_status=OnboardingStatus.COMPLETED))

        result = await self.store.list_renewal_lapsed(today, OnboardingStatus.COMPLETED)

        assert [c.id for c in result] == [lapsed.id]

    async def test_update_renewal_date(self):
        created = await self.store.create(_company(renewal=date(2026, 1, 1)))

        updated = await self.store.update_renewal_date(created.id, date(2027, 6, 30))
        cleared = await self.store.update_renewal_date(created.id, None)

        assert updated.renewal_date == date(2027, 6, 30)
        assert cleared.renewal_date is None
        # Status is untouched
        assert cleared.status_version == 0

    async def test_update_renewal_missing_company(self):
        assert await self.store.update_renewal_date(999, None) is None

    async def test_compare_and_set_status(self):
        created = await self.store.create(_company())
        activated_at = datetime(2026, 3, 15, 9, 30, tzinfo=UTC)

        updated = await self.store.compare_and_set_status(
            created.id, 0, OnboardingStatus.COMPLETED, activated_at=activated_at
        )

        assert updated is not None
        assert updated.onboarding_status == OnboardingStatus.COMPLETED
        assert updated.status_version == 1
        assert updated.activated_at == activated_at

    async def test_compare_and_set_stale_version(self):
        """Only one of two writers holding the same version wins."""
        created = await self.store.create(_company())

        first = await self.store.compare_and_set_status(created.id, 0, OnboardingStatus.REJECTED)
        second = await self.store.compare_and_set_status(created.id, 0, OnboardingStatus.COMPLETED)

        assert first is not None
        assert second is None
        current = await self.store.get(created.id)
        assert current.onboarding_status == OnboardingStatus.REJECTED
        assert current.status_version == 1

    async def test_compare_and_set_keeps_activation_stamp(self):
        created = await self.store.create(_company())
        activated_at = datetime(2026, 3, 15, tzinfo=UTC)
        await self.store.compare_and_set_status(
            created.id, 0, OnboardingStatus.COMPLETED, activated_at=activated_at
        )

        expired = await self.store.compare_and_set_status(created.id, 1, OnboardingStatus.EXPIRED)

        assert expired.activated_at == activated_at

    async def test_guarded_write_records_audit_entry(self):
        created = await self.store.create(_company())

        def audit() -> AuditEntry:
            return AuditEntry(
                company_id=created.id,
                action=AuditAction.COMPANY_STATUS_CHANGED,
                entity_type=AuditEntityType.COMPANY,
                entity_id=created.id,
                actor_id="admin-1",
                details={"status": "REJECTED"},
            )

        await self.store.compare_and_set_status(
            created.id, 0, OnboardingStatus.REJECTED, audit=audit()
        )
        # Stale version: neither the status nor the audit trail changes
        await self.store.compare_and_set_status(
            created.id, 0, OnboardingStatus.COMPLETED, audit=audit()
        )

        entries = await SQLiteAuditLog().list_for_company(created.id)
        assert len(entries) == 1
        assert entries[0].actor_id == "admin-1"
        assert entries[0].details == {"status": "REJECTED"}

    async def test_list_renewal_upcoming(self):
        today = date(2026, 3, 15)
        completed = {"onboarding_status": OnboardingStatus.COMPLETED}
        soon = await self.store.create(_company("Soon", date(2026, 3, 20), **completed))
        edge = await self.store.create(_company("Edge", date(2026, 4, 14), **completed))
        await self.store.create(_company("Today", today, **completed))
        await self.store.create(_company("Later", date(2026, 4, 15), **completed))
        await self.store.create(_company("Pending", date(2026, 3, 20)))

        result = await self.store.list_renewal_upcoming(
            today, date(2026, 4, 14), OnboardingStatus.COMPLETED
        )

        assert [c.id for c in result] == [soon.id, edge.id]

    async def test_renewal_reminder_claims(self):
        created = await self.store.create(_company(renewal=date(2026, 4, 1)))
        renewal = date(2026, 4, 1)

        assert await self.store.claim_renewal_reminder(created.id, renewal, 30) is True
        assert await self.store.claim_renewal_reminder(created.id, renewal, 30) is False
        # Another threshold or a new renewal date is a separate reminder
        assert await self.store.claim_renewal_reminder(created.id, renewal, 7) is True
        assert await self.store.claim_renewal_reminder(created.id, date(2027, 4, 1), 30) is True

        await self.store.release_renewal_reminder(created.id, renewal, 30)
        assert await self.store.claim_renewal_reminder(created.id, renewal, 30) is True
