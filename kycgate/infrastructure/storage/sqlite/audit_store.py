"""
SQLite implementation of the audit log.

The other stores call insert_audit_entry on their own transaction
connection, so an entry commits or rolls back together with the change it
records.
"""

import json
from datetime import datetime

import aiosqlite

from kycgate.config import get_logger
from kycgate.core.entities.audit import AuditAction, AuditEntityType, AuditEntry
from kycgate.core.interfaces.storage import IAuditLog
from kycgate.infrastructure.storage.sqlite.connection import get_connection

logger = get_logger(__name__)


async def insert_audit_entry(conn: aiosqlite.Connection, entry: AuditEntry) -> AuditEntry:
    """Insert an entry using the caller's connection; no commit."""
    cursor = await conn.execute(
        """
        INSERT INTO audit_log (
            company_id, action, entity_type, entity_id, actor_id, details_json, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (
            entry.company_id,
            entry.action.value,
            entry.entity_type.value,
            entry.entity_id,
            entry.actor_id,
            json.dumps(entry.details, default=str),
            entry.created_at.isoformat(),
        ),
    )
    entry.id = cursor.lastrowid
    logger.info("audit_entry_recorded", company_id=entry.company_id, action=entry.action.value)
    return entry


class SQLiteAuditLog(IAuditLog):
    """Append-only audit trail."""

    async def list_for_company(
        self, company_id: int, limit: int = 100, offset: int = 0
    ) -> list[AuditEntry]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM audit_log WHERE company_id = ? ORDER BY id LIMIT ? OFFSET ?",
                (company_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> AuditEntry:
        return AuditEntry(
            id=row["id"],
            company_id=row["company_id"],
            action=AuditAction(row["action"]),
            entity_type=AuditEntityType(row["entity_type"]),
            entity_id=row["entity_id"],
            actor_id=row["actor_id"],
            details=json.loads(row["details_json"]) if row["details_json"] else {},
            created_at=datetime.fromisoformat(row["created_at"]),
        )
