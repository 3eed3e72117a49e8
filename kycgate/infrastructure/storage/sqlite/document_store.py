"""
SQLite implementation of the document ledger.

Documents are append-only apart from review outcomes. record_review carries
the status the reviewer observed into the WHERE clause, so a review computed
from stale state writes nothing.
"""

from datetime import UTC, datetime

import aiosqlite

from kycgate.config import get_logger
from kycgate.core.entities.audit import AuditEntry
from kycgate.core.entities.document import Document, DocumentStatus, DocumentType
from kycgate.core.interfaces.storage import IDocumentLedger
from kycgate.infrastructure.storage.sqlite.audit_store import insert_audit_entry
from kycgate.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteDocumentLedger(IDocumentLedger):
    """SQLite implementation of the document ledger."""

    async def create(self, document: Document) -> Document:
        """Append a new document record."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO documents (
                    company_id, document_type, status, file_name, file_key,
                    file_size, mime_type, rejection_reason, admin_remarks,
                    reviewed_by, reviewed_at, version, replaces_id,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    document.company_id,
                    document.document_type.value,
                    document.status.value,
                    document.file_name,
                    document.file_key,
                    document.file_size,
                    document.mime_type,
                    document.rejection_reason,
                    document.admin_remarks,
                    document.reviewed_by,
                    document.reviewed_at.isoformat() if document.reviewed_at else None,
                    document.version,
                    document.replaces_id,
                    document.created_at.isoformat(),
                    document.updated_at.isoformat(),
                ),
            )
            document.id = cursor.lastrowid
            logger.info(
                "document_created",
                document_id=document.id,
                company_id=document.company_id,
                document_type=document.document_type.value,
                version=document.version,
            )
            return document

    async def get(self, document_id: int) -> Document | None:
        """Get document by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM documents WHERE id = ?", (document_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def list_by_company(self, company_id: int) -> list[Document]:
        """Every record of a company, superseded ones included, oldest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM documents WHERE company_id = ? ORDER BY created_at, id",
                (company_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def record_review(
        self,
        document_id: int,
        expected_status: DocumentStatus,
        new_status: DocumentStatus,
        rejection_reason: str | None,
        admin_remarks: str | None,
        reviewed_by: str | None,
        reviewed_at: datetime,
        audit: AuditEntry | None = None,
    ) -> Document | None:
        """Apply a review outcome guarded by the previously observed status."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE documents SET
                    status = ?, rejection_reason = ?, admin_remarks = ?,
                    reviewed_by = ?, reviewed_at = ?, updated_at = ?
                WHERE id = ? AND status = ?
                """,
                (
                    new_status.value,
                    rejection_reason,
                    admin_remarks,
                    reviewed_by,
                    reviewed_at.isoformat(),
                    datetime.now(UTC).isoformat(),
                    document_id,
                    expected_status.value,
                ),
            )
            if cursor.rowcount == 0:
                return None
            if audit is not None:
                await insert_audit_entry(conn, audit)

            cursor = await conn.execute("SELECT * FROM documents WHERE id = ?", (document_id,))
            row = await cursor.fetchone()
            return self._row_to_entity(row)

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> Document:
        """Convert database row to Document entity."""
        return Document(
            id=row["id"],
            company_id=row["company_id"],
            document_type=DocumentType(row["document_type"]),
            status=DocumentStatus(row["status"]),
            file_name=row["file_name"],
            file_key=row["file_key"],
            file_size=row["file_size"],
            mime_type=row["mime_type"],
            rejection_reason=row["rejection_reason"],
            admin_remarks=row["admin_remarks"],
            reviewed_by=row["reviewed_by"],
            reviewed_at=datetime.fromisoformat(row["reviewed_at"]) if row["reviewed_at"] else None,
            version=row["version"],
            replaces_id=row["replaces_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
