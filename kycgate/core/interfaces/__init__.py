"""Core interfaces (ports) for dependency injection."""

from kycgate.core.interfaces.notifier import INotifier
from kycgate.core.interfaces.storage import (
    IAuditLog,
    ICompanyStore,
    IDocumentLedger,
    IRequirementRegistry,
)
from kycgate.core.interfaces.uploads import IUploadSlotProvider, UploadDestination

__all__ = [
    # Storage interfaces
    "IAuditLog",
    "ICompanyStore",
    "IDocumentLedger",
    "IRequirementRegistry",
    # Collaborators
    "INotifier",
    "IUploadSlotProvider",
    "UploadDestination",
]
