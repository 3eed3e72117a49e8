"""Core domain services."""

from kycgate.core.services.activation import (
    ActivationOutcome,
    ActivationResult,
    ActivationService,
)
from kycgate.core.services.compliance_evaluator import (
    ComplianceEvaluator,
    evaluate_compliance,
)
from kycgate.core.services.events import publish
from kycgate.core.services.onboarding_stage import (
    OnboardingSnapshot,
    OnboardingStageReader,
    derive_onboarding_state,
    has_pending_uploads_for_missing,
    is_renewal_expired,
    utc_today,
)
from kycgate.core.services.review_state_machine import (
    REVIEWABLE_STATUSES,
    DocumentReviewService,
    ReviewPlan,
    plan_review,
)
from kycgate.core.services.upload_policy import (
    UploadSpec,
    build_file_key,
    sanitize_file_name,
    validate_upload,
)

__all__ = [
    # Compliance
    "ComplianceEvaluator",
    "evaluate_compliance",
    # Review
    "DocumentReviewService",
    "ReviewPlan",
    "plan_review",
    "REVIEWABLE_STATUSES",
    # Stage derivation
    "OnboardingSnapshot",
    "OnboardingStageReader",
    "derive_onboarding_state",
    "has_pending_uploads_for_missing",
    "is_renewal_expired",
    "utc_today",
    # Activation
    "ActivationOutcome",
    "ActivationResult",
    "ActivationService",
    # Uploads
    "UploadSpec",
    "build_file_key",
    "sanitize_file_name",
    "validate_upload",
    # Events
    "publish",
]
