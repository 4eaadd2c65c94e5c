"""Utility helpers for validating uploaded files."""

from __future__ import annotations

import logging
from pathlib import PurePath

from docinsight.models import FileType

LOGGER = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

SUPPORTED_EXTENSIONS: dict[str, FileType] = {
    ".pdf": "pdf",
    ".docx": "docx",
    ".txt": "txt",
    ".md": "md",
}

SUPPORTED_CONTENT_TYPES = frozenset(
    {
        "application/pdf",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
        "text/markdown",
    }
)


class UploadError(ValueError):
    """Raised when an uploaded file cannot be accepted or read."""


def detect_file_type(file_name: str) -> FileType | None:
    """Map a file name to a supported file type by its extension."""
    return SUPPORTED_EXTENSIONS.get(PurePath(file_name.lower()).suffix)


def validate_upload(file_name: str, size: int, content_type: str | None = None) -> FileType:
    """Check size and extension of an upload and return its file type.

    The extension decides the type; a content type that disagrees with a
    valid extension is only logged.
    """
    if size == 0:
        raise UploadError("File is empty")
    if size > MAX_UPLOAD_BYTES:
        raise UploadError("File size must be less than 10MB")

    file_type = detect_file_type(file_name)
    if file_type is None:
        raise UploadError(
            "Unsupported file type. Please upload PDF, DOCX, TXT, or MD files only. "
            f"Received: {file_name}"
        )

    if content_type and content_type not in SUPPORTED_CONTENT_TYPES:
        LOGGER.warning(
            "MIME type mismatch for %s: %s but extension is valid", file_name, content_type
        )
    return file_type
