"""SQLite storage implementations."""

from kycgate.infrastructure.storage.sqlite.audit_store import SQLiteAuditLog
from kycgate.infrastructure.storage.sqlite.company_store import SQLiteCompanyStore
from kycgate.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from kycgate.infrastructure.storage.sqlite.document_store import SQLiteDocumentLedger
from kycgate.infrastructure.storage.sqlite.requirement_store import SQLiteRequirementRegistry

# Singleton instances
_company_store: SQLiteCompanyStore | None = None
_document_ledger: SQLiteDocumentLedger | None = None
_requirement_registry: SQLiteRequirementRegistry | None = None
_audit_log: SQLiteAuditLog | None = None


async def get_company_store() -> SQLiteCompanyStore:
    """Get singleton company store instance."""
    global _company_store
    if _company_store is None:
        _company_store = SQLiteCompanyStore()
    return _company_store


async def get_document_ledger() -> SQLiteDocumentLedger:
    """Get singleton document ledger instance."""
    global _document_ledger
    if _document_ledger is None:
        _document_ledger = SQLiteDocumentLedger()
    return _document_ledger


async def get_requirement_registry() -> SQLiteRequirementRegistry:
    """Get singleton requirement registry instance."""
    global _requirement_registry
    if _requirement_registry is None:
        _requirement_registry = SQLiteRequirementRegistry()
    return _requirement_registry


async def get_audit_log() -> SQLiteAuditLog:
    """Get singleton audit log instance."""
    global _audit_log
    if _audit_log is None:
        _audit_log = SQLiteAuditLog()
    return _audit_log


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteCompanyStore",
    "SQLiteDocumentLedger",
    "SQLiteRequirementRegistry",
    "SQLiteAuditLog",
    # Factory functions
    "get_company_store",
    "get_document_ledger",
    "get_requirement_registry",
    "get_audit_log",
]
