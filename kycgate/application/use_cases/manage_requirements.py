"""
Requirement administration.

Changes apply to every company on its next evaluation; nobody is
grandfathered.
"""

from kycgate.config import get_logger
from kycgate.core.entities.document import DocumentType, parse_document_type
from kycgate.core.entities.requirement import ComplianceRequirement
from kycgate.core.exceptions import InvalidDocumentTypeError, RequirementNotFoundError
from kycgate.core.interfaces.storage import IRequirementRegistry

logger = get_logger(__name__)


class ManageRequirementsUseCase:
    """Create, list and remove compliance requirements."""

    def __init__(self, registry: IRequirementRegistry | None = None):
        self._registry = registry

    async def _get_registry(self) -> IRequirementRegistry:
        if self._registry is None:
            from kycgate.infrastructure.storage.sqlite import get_requirement_registry

            self._registry = await get_requirement_registry()
        return self._registry

    async def list_requirements(self) -> list[ComplianceRequirement]:
        registry = await self._get_registry()
        return await registry.list_requirements()

    async def create_requirement(
        self,
        document_type: DocumentType | str,
        name: str | None = None,
        description: str | None = None,
    ) -> ComplianceRequirement:
        """
        Register a required document type.

        Raises:
            InvalidDocumentTypeError: Unknown type, or OTHER.
            DuplicateRequirementError: Type already registered.
        """
        doc_type = parse_document_type(document_type)
        if not doc_type.is_requirable:
            raise InvalidDocumentTypeError(doc_type.value, "reserved for ad-hoc uploads")

        registry = await self._get_registry()
        created = await registry.create(
            ComplianceRequirement(
                document_type=doc_type,
                name=name or doc_type.value.title(),
                description=description,
            )
        )
        logger.info("requirement_added", document_type=doc_type.value)
        return created

    async def delete_requirement(self, document_type: DocumentType | str) -> None:
        """
        Remove a required document type.

        Raises:
            InvalidDocumentTypeError: Unknown type.
            RequirementNotFoundError: Type not registered.
        """
        doc_type = parse_document_type(document_type)
        registry = await self._get_registry()
        if not await registry.delete(doc_type):
            raise RequirementNotFoundError(doc_type.value)
        logger.info("requirement_removed", document_type=doc_type.value)
