"""
Check Renewals Use Case.

Moves COMPLETED companies whose renewal day has passed to EXPIRED and reminds
active companies whose renewal day is approaching. Runs on demand;
scheduling it is left to the deployment.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta

from kycgate.config import get_logger, get_settings
from kycgate.core.entities.audit import AuditAction, AuditEntityType, AuditEntry
from kycgate.core.entities.company import CompanyProfile, OnboardingStatus
from kycgate.core.entities.compliance import OnboardingState
from kycgate.core.entities.notification import NotificationEvent
from kycgate.core.exceptions import KYCGateError
from kycgate.core.interfaces.notifier import INotifier
from kycgate.core.interfaces.storage import ICompanyStore
from kycgate.core.services import publish, utc_today

logger = get_logger(__name__)


@dataclass
class RenewalCheckResult:
    """Result of a renewal sweep."""

    checked: int = 0
    expired: int = 0
    skipped: int = 0
    failed: int = 0
    expired_company_ids: list[int] = field(default_factory=list)
    reminders_sent: int = 0
    reminded_company_ids: list[int] = field(default_factory=list)


def reminder_threshold(days_remaining: int, reminder_days: list[int]) -> int | None:
    """
    The reminder a company is due for, if any.

    The tightest threshold that days_remaining has reached, so a sweep that
    did not run on the exact day still sends it.
    """
    reached = [d for d in reminder_days if 0 < days_remaining <= d]
    return min(reached) if reached else None


class CheckRenewalsUseCase:
    """Expire lapsed active companies and remind upcoming ones."""

    def __init__(
        self,
        company_store: ICompanyStore | None = None,
        notifier: INotifier | None = None,
        reminder_days: list[int] | None = None,
    ):
        self._company_store = company_store
        self._notifier = notifier
        self._reminder_days = reminder_days

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from kycgate.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    def _get_notifier(self) -> INotifier:
        if self._notifier is None:
            from kycgate.infrastructure.notifications import get_notifier

            self._notifier = get_notifier()
        return self._notifier

    def _get_reminder_days(self) -> list[int]:
        if self._reminder_days is None:
            self._reminder_days = get_settings().onboarding.renewal_reminder_days
        return self._reminder_days

    async def execute(self, today: date | None = None) -> RenewalCheckResult:
        """
        Expire lapsed companies, then send due renewal reminders.

        A company that fails or loses the compare-and-set is logged and left
        for the next run; the sweep carries on with the rest.
        """
        today = today or utc_today()
        store = await self._get_company_store()
        notifier = self._get_notifier()

        lapsed = await store.list_renewal_lapsed(today, OnboardingStatus.COMPLETED)
        result = RenewalCheckResult(checked=len(lapsed))

        for company in lapsed:
            if company.id is None:
                continue
            try:
                updated = await store.compare_and_set_status(
                    company.id,
                    expected_version=company.status_version,
                    new_status=OnboardingStatus.EXPIRED,
                    audit=AuditEntry(
                        company_id=company.id,
                        action=AuditAction.RENEWAL_EXPIRED,
                        entity_type=AuditEntityType.COMPANY,
                        entity_id=company.id,
                        details={
                            "previous_status": OnboardingStatus.COMPLETED.value,
                            "status": OnboardingStatus.EXPIRED.value,
                            "renewal_date": _iso(company.renewal_date),
                        },
                    ),
                )
            except KYCGateError as e:
                result.failed += 1
                logger.error("renewal_expiry_failed", company_id=company.id, error=e.message)
                continue

            if updated is None:
                result.skipped += 1
                logger.info("renewal_expiry_skipped", company_id=company.id)
                continue

            result.expired += 1
            result.expired_company_ids.append(company.id)
            await publish(
                notifier,
                company.id,
                NotificationEvent.STAGE_CHANGED,
                {
                    "previous_status": OnboardingStatus.COMPLETED.value,
                    "status": OnboardingStatus.EXPIRED.value,
                    "state": OnboardingState.RENEWAL_EXPIRED.value,
                    "renewal_date": _iso(company.renewal_date),
                },
            )

        await self._send_reminders(store, notifier, today, result)

        logger.info(
            "renewal_check_complete",
            today=today.isoformat(),
            checked=result.checked,
            expired=result.expired,
            skipped=result.skipped,
            failed=result.failed,
            reminders_sent=result.reminders_sent,
        )
        return result

    async def _send_reminders(
        self,
        store: ICompanyStore,
        notifier: INotifier,
        today: date,
        result: RenewalCheckResult,
    ) -> None:
        reminder_days = self._get_reminder_days()
        if not reminder_days:
            return

        until = today + timedelta(days=max(reminder_days))
        upcoming = await store.list_renewal_upcoming(today, until, OnboardingStatus.COMPLETED)

        for company in upcoming:
            if company.id is None or company.renewal_date is None:
                continue
            days_remaining = (company.renewal_date - today).days
            days_before = reminder_threshold(days_remaining, reminder_days)
            if days_before is None:
                continue
            try:
                sent = await self._remind(store, notifier, company, days_before, days_remaining)
            except KYCGateError as e:
                result.failed += 1
                logger.error("renewal_reminder_failed", company_id=company.id, error=e.message)
                continue
            if sent:
                result.reminders_sent += 1
                result.reminded_company_ids.append(company.id)

    @staticmethod
    async def _remind(
        store: ICompanyStore,
        notifier: INotifier,
        company: CompanyProfile,
        days_before: int,
        days_remaining: int,
    ) -> bool:
        # Claimed per renewal date, so a new renewal date is reminded afresh
        if not await store.claim_renewal_reminder(company.id, company.renewal_date, days_before):
            return False

        delivered = await publish(
            notifier,
            company.id,
            NotificationEvent.RENEWAL_REMINDER,
            {
                "company_name": company.company_name,
                "contact_email": company.contact_email,
                "renewal_date": _iso(company.renewal_date),
                "days_before": days_before,
                "days_remaining": days_remaining,
            },
        )
        if not delivered:
            # Retried on the next sweep
            await store.release_renewal_reminder(company.id, company.renewal_date, days_before)
            return False

        logger.info(
            "renewal_reminder_sent",
            company_id=company.id,
            days_before=days_before,
            days_remaining=days_remaining,
        )
        return True


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None
