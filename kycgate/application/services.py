"""
Service factory functions for dependency injection.

Wires infrastructure implementations to core services for callers that do
not bring their own collaborators.
"""

from typing import TYPE_CHECKING

from kycgate.core.services import (
    ActivationService,
    ComplianceEvaluator,
    OnboardingStageReader,
)

if TYPE_CHECKING:
    from kycgate.core.interfaces import (
        ICompanyStore,
        IDocumentLedger,
        INotifier,
        IRequirementRegistry,
    )


async def get_compliance_evaluator(
    registry: "IRequirementRegistry | None" = None,
    ledger: "IDocumentLedger | None" = None,
) -> ComplianceEvaluator:
    """
    Build a ComplianceEvaluator.

    Args:
        registry: Optional requirement registry override
        ledger: Optional document ledger override
    """
    # Lazy import infrastructure to avoid circular imports
    from kycgate.infrastructure.storage.sqlite import (
        get_document_ledger,
        get_requirement_registry,
    )

    return ComplianceEvaluator(
        registry=registry or await get_requirement_registry(),
        ledger=ledger or await get_document_ledger(),
    )


async def get_activation_service(
    company_store: "ICompanyStore | None" = None,
    evaluator: ComplianceEvaluator | None = None,
    notifier: "INotifier | None" = None,
) -> ActivationService:
    """
    Build the activation trigger.

    The notifier defaults to the configured backend.
    """
    from kycgate.infrastructure.notifications import get_notifier
    from kycgate.infrastructure.storage.sqlite import get_company_store

    return ActivationService(
        company_store=company_store or await get_company_store(),
        evaluator=evaluator or await get_compliance_evaluator(),
        notifier=notifier or get_notifier(),
    )


async def get_stage_reader(
    evaluator: ComplianceEvaluator | None = None,
) -> OnboardingStageReader:
    """Build the onboarding stage reader."""
    return OnboardingStageReader(evaluator or await get_compliance_evaluator())
