"""Tests for the application-level service factories."""

from unittest.mock import AsyncMock

from kycgate.application.services import (
    get_activation_service,
    get_compliance_evaluator,
    get_stage_reader,
)
from kycgate.core.services import ActivationService, ComplianceEvaluator, OnboardingStageReader
from kycgate.infrastructure.storage.sqlite import SQLiteDocumentLedger, SQLiteRequirementRegistry


class TestServiceFactories:
    async def test_evaluator_keeps_overrides(self):
        registry, ledger = AsyncMock(), AsyncMock()

        evaluator = await get_compliance_evaluator(registry=registry, ledger=ledger)

        assert isinstance(evaluator, ComplianceEvaluator)
        assert evaluator._registry is registry
        assert evaluator._ledger is ledger

    async def test_evaluator_defaults_to_sqlite(self):
        evaluator = await get_compliance_evaluator()

        assert isinstance(evaluator._registry, SQLiteRequirementRegistry)
        assert isinstance(evaluator._ledger, SQLiteDocumentLedger)

    async def test_stage_reader_and_activation(self):
        evaluator = await get_compliance_evaluator(registry=AsyncMock(), ledger=AsyncMock())

        reader = await get_stage_reader(evaluator)
        activation = await get_activation_service(evaluator=evaluator)

        assert isinstance(reader, OnboardingStageReader)
        assert isinstance(activation, ActivationService)
