"""
File constraints for direct uploads.

The engine never receives file bytes, so these checks run on the metadata
the client declares when asking for an upload slot.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from kycgate.core.entities.document import DocumentType
from kycgate.core.exceptions import InvalidUploadError

MAX_FILE_NAME_LENGTH = 255

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")

MIME_TYPES_BY_EXTENSION: dict[str, tuple[str, ...]] = {
    ".pdf": ("application/pdf",),
    ".jpg": ("image/jpeg", "image/jpg"),
    ".jpeg": ("image/jpeg", "image/jpg"),
    ".png": ("image/png",),
}


@dataclass(frozen=True)
class UploadSpec:
    """Validated upload metadata."""

    file_name: str
    file_size: int
    mime_type: str


def sanitize_file_name(file_name: str) -> str:
    """Drop path components and replace unsafe characters with underscores."""
    basename = re.split(r"[/\\]", file_name)[-1] or file_name
    return _UNSAFE_CHARS.sub("_", basename)[:MAX_FILE_NAME_LENGTH]


def file_extension(file_name: str) -> str:
    """Lowercased extension including the dot, or '' if there is none."""
    match = re.search(r"\.[^.]+$", file_name)
    return match.group(0).lower() if match else ""


def validate_upload(
    file_name: str,
    file_size: int,
    mime_type: str | None,
    allowed_extensions: Iterable[str],
    max_file_size: int,
) -> UploadSpec:
    """
    Check declared file metadata.

    Returns:
        UploadSpec with the sanitized name and a resolved MIME type.

    Raises:
        InvalidUploadError: empty name, disallowed extension, bad size, or a
            MIME type that does not match the extension.
    """
    if not file_name or not file_name.strip():
        raise InvalidUploadError("file name is required")

    sanitized = sanitize_file_name(file_name.strip())
    allowed = {ext.lower() for ext in allowed_extensions}
    ext = file_extension(sanitized)
    if ext not in allowed:
        raise InvalidUploadError(
            f"file type not allowed, expected one of {', '.join(sorted(allowed))}",
            file_name=file_name,
        )

    if file_size <= 0:
        raise InvalidUploadError("file size must be positive", file_name=file_name)
    if file_size > max_file_size:
        raise InvalidUploadError(
            f"file size exceeds maximum of {max_file_size // (1024 * 1024)}MB",
            file_name=file_name,
        )

    expected = MIME_TYPES_BY_EXTENSION.get(ext, ())
    if mime_type:
        mime_type = mime_type.strip().lower()
        if expected and mime_type not in expected:
            raise InvalidUploadError(
                f"MIME type {mime_type} does not match extension {ext}",
                file_name=file_name,
            )
    else:
        mime_type = expected[0] if expected else "application/octet-stream"

    return UploadSpec(file_name=sanitized, file_size=file_size, mime_type=mime_type)


def build_file_key(
    company_id: int,
    document_type: DocumentType,
    file_name: str,
    token: str,
) -> str:
    """Object key: companies/<id>/<type>/<token>-<name>."""
    return f"companies/{company_id}/{document_type.value.lower()}/{token}-{file_name}"
