"""Unit tests for requirement administration."""

from unittest.mock import AsyncMock

import pytest

from kycgate.application.use_cases.manage_requirements import ManageRequirementsUseCase
from kycgate.core.entities import DocumentType
from kycgate.core.exceptions import (
    DuplicateRequirementError,
    InvalidDocumentTypeError,
    RequirementNotFoundError,
)


class TestManageRequirements:
    def _make_use_case(self):
        registry = AsyncMock()
        registry.create.side_effect = lambda r: r
        return ManageRequirementsUseCase(registry=registry), registry

    async def test_create_defaults_name(self):
        use_case, _ = self._make_use_case()

        requirement = await use_case.create_requirement("aadhaar")

        assert requirement.document_type == DocumentType.AADHAAR
        assert requirement.name == "Aadhaar"

    async def test_create_other_is_rejected(self):
        use_case, registry = self._make_use_case()

        with pytest.raises(InvalidDocumentTypeError):
            await use_case.create_requirement("OTHER")
        registry.create.assert_not_awaited()

    async def test_create_duplicate_propagates(self):
        use_case, registry = self._make_use_case()
        registry.create.side_effect = DuplicateRequirementError("PAN")

        with pytest.raises(DuplicateRequirementError):
            await use_case.create_requirement("PAN")

    async def test_delete_missing(self):
        use_case, registry = self._make_use_case()
        registry.delete.return_value = False

        with pytest.raises(RequirementNotFoundError):
            await use_case.delete_requirement("PAN")

    async def test_delete(self):
        use_case, registry = self._make_use_case()
        registry.delete.return_value = True

        await use_case.delete_requirement("pan")

        registry.delete.assert_awaited_once_with(DocumentType.PAN)
