"""SQLite implementation of the compliance requirement registry."""

from datetime import datetime

import aiosqlite

from kycgate.config import get_logger
from kycgate.core.entities.document import DocumentType
from kycgate.core.entities.requirement import ComplianceRequirement
from kycgate.core.exceptions import DuplicateRequirementError
from kycgate.core.interfaces.storage import IRequirementRegistry
from kycgate.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteRequirementRegistry(IRequirementRegistry):
    """SQLite implementation of the requirement registry."""

    async def list_required_types(self) -> set[DocumentType]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT document_type FROM compliance_requirements")
            rows = await cursor.fetchall()
            return {DocumentType(row["document_type"]) for row in rows}

    async def list_requirements(self) -> list[ComplianceRequirement]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM compliance_requirements ORDER BY document_type"
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def get(self, document_type: DocumentType) -> ComplianceRequirement | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM compliance_requirements WHERE document_type = ?",
                (document_type.value,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def create(self, requirement: ComplianceRequirement) -> ComplianceRequirement:
        """Register a requirement; the document_type column is unique."""
        async with get_transaction() as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO compliance_requirements (
                        document_type, name, description, created_at
                    ) VALUES (?, ?, ?, ?)
                    """,
                    (
                        requirement.document_type.value,
                        requirement.name,
                        requirement.description,
                        requirement.created_at.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise DuplicateRequirementError(requirement.document_type.value) from e
            requirement.id = cursor.lastrowid
            logger.info(
                "requirement_created",
                requirement_id=requirement.id,
                document_type=requirement.document_type.value,
            )
            return requirement

    async def delete(self, document_type: DocumentType) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM compliance_requirements WHERE document_type = ?",
                (document_type.value,),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("requirement_deleted", document_type=document_type.value)
            return deleted

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> ComplianceRequirement:
        return ComplianceRequirement(
            id=row["id"],
            document_type=DocumentType(row["document_type"]),
            name=row["name"],
            description=row["description"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
