"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Iterator
from datetime import date
from pathlib import Path

import pytest

from kycgate.config import reset_settings
from kycgate.core.entities import (
    CompanyProfile,
    Document,
    DocumentStatus,
    DocumentType,
    OnboardingStatus,
)

TODAY = date(2026, 3, 15)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point storage at a temp dir and use the log notifier."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("NOTIFY_BACKEND", "log")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
async def sqlite_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Path, None]:
    """Migrated temporary database wired in as the global connection pool."""
    from kycgate.infrastructure.storage.sqlite import connection
    from kycgate.infrastructure.storage.sqlite.migrations import initialize_database

    db_path = tmp_path / "kycgate-test.db"
    results = await initialize_database(db_path, create_backup_before=False)
    assert all(r.success for r in results)

    pool = connection.ConnectionPool(db_path, pool_size=3)
    await pool.initialize()
    monkeypatch.setattr(connection, "_pool", pool)

    yield db_path

    await pool.close()


@pytest.fixture
def today() -> date:
    """Fixed calendar day for stage derivation."""
    return TODAY


def make_company(
    company_id: int = 1,
    status: OnboardingStatus = OnboardingStatus.PENDING,
    renewal_date: date | None = None,
    status_version: int = 0,
) -> CompanyProfile:
    """Create a sample company profile."""
    return CompanyProfile(
        id=company_id,
        company_name="Acme Traders",
        contact_email="ops@acme.example",
        renewal_date=renewal_date,
        onboarding_status=status,
        status_version=status_version,
    )


def make_document(
    document_id: int = 10,
    company_id: int = 1,
    document_type: DocumentType = DocumentType.PAN,
    status: DocumentStatus = DocumentStatus.UPLOADED,
    **kwargs,
) -> Document:
    """Create a sample document record."""
    return Document(
        id=document_id,
        company_id=company_id,
        document_type=document_type,
        status=status,
        file_name=f"{document_type.value.lower()}.pdf",
        file_key=f"companies/{company_id}/{document_type.value.lower()}/abc-file.pdf",
        file_size=2048,
        mime_type="application/pdf",
        **kwargs,
    )


@pytest.fixture
def company_factory():
    """Factory for company profiles."""
    return make_company


@pytest.fixture
def document_factory():
    """Factory for document records."""
    return make_document


@pytest.fixture
def sample_company() -> CompanyProfile:
    return make_company()


@pytest.fixture
def sample_document() -> Document:
    return make_document()
