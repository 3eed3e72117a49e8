"""API tests for document review endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from kycgate.api.dependencies import get_document_use_case, get_review_document_use_case
from kycgate.application.use_cases import ReviewDocumentResult
from kycgate.core.entities import (
    ComplianceStatus,
    DocumentStatus,
    DocumentType,
    OnboardingState,
    OnboardingStatus,
)
from kycgate.core.exceptions import (
    ConcurrentModificationError,
    DocumentNotFoundError,
    DocumentNotReviewableError,
    ForbiddenError,
    RejectionReasonRequiredError,
)
from kycgate.core.services import ActivationOutcome, ActivationResult


@pytest.fixture
def review_use_case(override):
    return override(get_review_document_use_case, AsyncMock())


class TestReviewEndpoint:
    """Tests for POST /api/documents/{id}/review."""

    async def test_approve_activates(
        self, client: AsyncClient, review_use_case, company_factory, document_factory
    ):
        compliance = ComplianceStatus(
            company_id=1,
            required_document_types=[DocumentType.PAN],
            approved_document_types=[DocumentType.PAN],
            is_compliant=True,
        )
        review_use_case.execute.return_value = ReviewDocumentResult(
            document=document_factory(status=DocumentStatus.VERIFIED),
            compliance=compliance,
            previous_state=OnboardingState.PENDING_APPROVAL,
            onboarding_state=OnboardingState.COMPLIANT,
            activation=ActivationResult(
                1,
                ActivationOutcome.ACTIVATED,
                compliance,
                company_factory(status=OnboardingStatus.COMPLETED),
            ),
        )

        response = await client.post(
            "/api/documents/10/review",
            json={"decision": "APPROVE"},
            headers={"X-Actor-Id": "admin-1", "X-Actor-Companies": "1,2"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["document"]["status"] == "VERIFIED"
        assert data["onboarding_state"] == "compliant"
        assert data["stage_changed"] is True
        assert data["company_activated"] is True
        assert data["activation_outcome"] == "activated"
        assert data["compliance"]["is_compliant"] is True

        args = review_use_case.execute.call_args
        assert args.args == (10, "APPROVE")
        actor = args.kwargs["actor"]
        assert actor.actor_id == "admin-1"
        assert actor.company_ids == frozenset({1, 2})

    @pytest.mark.parametrize(
        ("error", "status_code", "error_code"),
        [
            (DocumentNotFoundError(10), 404, "DOCUMENT_NOT_FOUND"),
            (ForbiddenError(1, "admin-1"), 403, "FORBIDDEN"),
            (RejectionReasonRequiredError(10), 400, "REJECTION_REASON_REQUIRED"),
            (DocumentNotReviewableError(10, "VERIFIED"), 409, "DOCUMENT_NOT_REVIEWABLE"),
            (ConcurrentModificationError("Document", 10), 409, "CONCURRENT_MODIFICATION"),
        ],
    )
    async def test_error_mapping(
        self, client: AsyncClient, review_use_case, error, status_code, error_code
    ):
        review_use_case.execute.side_effect = error

        response = await client.post(
            "/api/documents/10/review",
            json={"decision": "REJECT", "rejection_reason": "  "},
        )

        assert response.status_code == status_code
        data = response.json()
        assert data["error_code"] == error_code
        assert data["hint"]
        assert data["path"] == "/api/documents/10/review"

    async def test_missing_decision_is_422(self, client: AsyncClient, review_use_case):
        response = await client.post("/api/documents/10/review", json={})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        review_use_case.execute.assert_not_awaited()

    async def test_bad_actor_header(self, client: AsyncClient, review_use_case):
        response = await client.post(
            "/api/documents/10/review",
            json={"decision": "APPROVE"},
            headers={"X-Actor-Companies": "1,abc"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "BAD_REQUEST"


class TestGetDocumentEndpoint:
    async def test_get(self, client: AsyncClient, override, document_factory):
        use_case = override(get_document_use_case, AsyncMock())
        use_case.execute.return_value = document_factory(
            status=DocumentStatus.REJECTED, rejection_reason="Expired card"
        )

        response = await client.get("/api/documents/10")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "REJECTED"
        assert data["rejection_reason"] == "Expired card"
        assert response.headers["X-Request-ID"]
