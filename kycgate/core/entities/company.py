"""Company profile entity and its onboarding status lifecycle."""

from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class OnboardingStatus(str, Enum):
    """Persisted onboarding status of a company."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


# Administrative status changes. Activation (PENDING -> COMPLETED) and the
# renewal check (COMPLETED -> EXPIRED) go through the same table.
ALLOWED_STATUS_TRANSITIONS: dict[OnboardingStatus, tuple[OnboardingStatus, ...]] = {
    OnboardingStatus.PENDING: (OnboardingStatus.COMPLETED, OnboardingStatus.REJECTED),
    OnboardingStatus.COMPLETED: (OnboardingStatus.PENDING, OnboardingStatus.EXPIRED),
    OnboardingStatus.REJECTED: (OnboardingStatus.PENDING,),
    OnboardingStatus.EXPIRED: (OnboardingStatus.COMPLETED, OnboardingStatus.PENDING),
}


def can_transition_status(current: OnboardingStatus, target: OnboardingStatus) -> bool:
    """Check if an onboarding status change is allowed."""
    return target in ALLOWED_STATUS_TRANSITIONS.get(current, ())


class CompanyProfile(BaseModel):
    """
    A company being onboarded.

    status_version increases on every status write and serves as the
    compare-and-set token for concurrent writers.
    """

    id: int | None = None
    company_name: str
    contact_email: str
    renewal_date: date | None = None
    onboarding_status: OnboardingStatus = OnboardingStatus.PENDING
    status_version: int = 0
    activated_at: datetime | None = None
    notes: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("renewal_date", mode="before")
    @classmethod
    def strip_time_of_day(cls, v: Any) -> Any:
        # Renewal is tracked per calendar day only
        if isinstance(v, datetime):
            return v.date()
        return v

    @property
    def is_active(self) -> bool:
        return self.onboarding_status == OnboardingStatus.COMPLETED
