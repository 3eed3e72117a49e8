"""
Request Upload Slot Use Case.

Validates the declared file, issues a presigned destination and records the
new UPLOADED document. File bytes go straight from the client to object
storage.
"""

import uuid
from dataclasses import dataclass

from kycgate.application.use_cases.access import load_company
from kycgate.config import get_logger, get_settings
from kycgate.config.settings import UploadSettings
from kycgate.core.entities.actor import Actor
from kycgate.core.entities.document import Document, DocumentType, parse_document_type
from kycgate.core.exceptions import DocumentNotFoundError, InvalidUploadError
from kycgate.core.interfaces.storage import ICompanyStore, IDocumentLedger
from kycgate.core.interfaces.uploads import IUploadSlotProvider
from kycgate.core.services import build_file_key, validate_upload

logger = get_logger(__name__)


@dataclass
class UploadSlotResult:
    """Created document record plus where to PUT the file."""

    document: Document
    upload_url: str
    expires_in: int
    method: str = "PUT"


class RequestUploadSlotUseCase:
    """Issue a direct-upload slot for a company document."""

    def __init__(
        self,
        company_store: ICompanyStore | None = None,
        ledger: IDocumentLedger | None = None,
        upload_provider: IUploadSlotProvider | None = None,
        upload_settings: UploadSettings | None = None,
    ):
        self._company_store = company_store
        self._ledger = ledger
        self._provider = upload_provider
        self._settings = upload_settings

    async def _get_company_store(self) -> ICompanyStore:
        if self._company_store is None:
            from kycgate.infrastructure.storage.sqlite import get_company_store

            self._company_store = await get_company_store()
        return self._company_store

    async def _get_ledger(self) -> IDocumentLedger:
        if self._ledger is None:
            from kycgate.infrastructure.storage.sqlite import get_document_ledger

            self._ledger = await get_document_ledger()
        return self._ledger

    def _get_provider(self) -> IUploadSlotProvider:
        if self._provider is None:
            from kycgate.infrastructure.uploads import get_upload_provider

            self._provider = get_upload_provider()
        return self._provider

    def _get_settings(self) -> UploadSettings:
        if self._settings is None:
            self._settings = get_settings().upload
        return self._settings

    async def execute(
        self,
        company_id: int,
        document_type: DocumentType | str,
        file_name: str,
        file_size: int,
        mime_type: str | None = None,
        replaces_document_id: int | None = None,
        actor: Actor | None = None,
    ) -> UploadSlotResult:
        """
        Issue an upload slot.

        When replaces_document_id is given the new record supersedes that
        document: it must belong to the same company and type, and the new
        record's version is one higher. The old record is left untouched.

        Raises:
            ForbiddenError, CompanyNotFoundError, DocumentNotFoundError,
            InvalidDocumentTypeError, InvalidUploadError, UploadProviderError
        """
        settings = self._get_settings()
        doc_type = parse_document_type(document_type)
        spec = validate_upload(
            file_name,
            file_size,
            mime_type,
            allowed_extensions=settings.allowed_extensions,
            max_file_size=settings.max_file_size,
        )

        await load_company(await self._get_company_store(), company_id, actor)
        ledger = await self._get_ledger()

        version = 1
        if replaces_document_id is not None:
            replaced = await ledger.get(replaces_document_id)
            if replaced is None:
                raise DocumentNotFoundError(replaces_document_id)
            if replaced.company_id != company_id or replaced.document_type != doc_type:
                raise InvalidUploadError(
                    "replaced document must belong to the same company and type",
                    file_name=file_name,
                )
            version = replaced.version + 1

        file_key = build_file_key(company_id, doc_type, spec.file_name, uuid.uuid4().hex)
        destination = await self._get_provider().create_upload_destination(
            file_key,
            content_type=spec.mime_type,
            expires_in=settings.url_expiry_seconds,
        )

        document = await ledger.create(
            Document(
                company_id=company_id,
                document_type=doc_type,
                file_name=spec.file_name,
                file_key=file_key,
                file_size=spec.file_size,
                mime_type=spec.mime_type,
                version=version,
                replaces_id=replaces_document_id,
            )
        )

        logger.info(
            "upload_slot_issued",
            company_id=company_id,
            document_id=document.id,
            document_type=doc_type.value,
            version=version,
            replaces_id=replaces_document_id,
        )

        return UploadSlotResult(
            document=document,
            upload_url=destination.upload_url,
            expires_in=destination.expires_in,
            method=destination.method,
        )
