"""Text extraction for uploaded PDF, DOCX and plain-text files.

Uses PyMuPDF (fitz) for PDFs and python-docx for Word documents.
"""

from __future__ import annotations

import io
import logging

import fitz  # PyMuPDF
from docx import Document

from docinsight.models import ExtractedDocument, FileType
from docinsight.utils.files import UploadError, validate_upload
from docinsight.utils.text import normalize_whitespace

LOGGER = logging.getLogger(__name__)

MIN_EXTRACTED_CHARS = 20


def extract_pdf_text(data: bytes) -> str:
    """Return the text of every page in a PDF, one page after another."""
    doc = fitz.open(stream=data, filetype="pdf")
    try:
        pages = []
        for index in range(len(doc)):
            try:
                text = doc[index].get_text() or ""
            except Exception as exc:  # pragma: no cover - defensive path
                LOGGER.warning("Failed to read page %s: %s", index, exc)
                continue
            normalized = normalize_whitespace(text.splitlines())
            if normalized:
                pages.append(normalized)
        LOGGER.info("PDF extraction: %s characters from %s pages", sum(map(len, pages)), len(doc))
    finally:
        doc.close()

    if not pages:
        LOGGER.warning("PDF appears to have no extractable text - may be image-based (scanned)")
    return "\n".join(pages)


def extract_docx_text(data: bytes) -> str:
    document = Document(io.BytesIO(data))
    paragraphs = [p.text.strip() for p in document.paragraphs if p.text.strip()]
    return "\n\n".join(paragraphs)


def extract_plain_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def extract_text(data: bytes, file_type: FileType) -> str:
    """Dispatch to the extractor matching ``file_type``."""
    try:
        if file_type == "pdf":
            return extract_pdf_text(data)
        if file_type == "docx":
            return extract_docx_text(data)
        return extract_plain_text(data)
    except Exception as exc:
        LOGGER.error("Failed to parse %s file: %s", file_type.upper(), exc)
        raise UploadError(f"Failed to parse {file_type.upper()} file: {exc}") from exc


def load_document(
    file_name: str, data: bytes, content_type: str | None = None
) -> ExtractedDocument:
    """Validate an upload and extract its text."""
    LOGGER.info("File upload: %s (%s, %s bytes)", file_name, content_type, len(data))
    file_type = validate_upload(file_name, len(data), content_type)
    text = extract_text(data, file_type)

    text_length = len(text.strip())
    LOGGER.info("Extracted text length: %s characters", text_length)
    if text_length == 0:
        raise UploadError(
            "Could not extract text from the file. The file may be image-based "
            "(scanned PDF) or corrupted. Please ensure the file contains selectable text."
        )
    if text_length < MIN_EXTRACTED_CHARS:
        raise UploadError(
            f"Only {text_length} characters were extracted from the file. The file may be "
            "image-based (scanned PDF), password-protected, or contain very little text. "
            "Please ensure the file contains selectable text."
        )

    return ExtractedDocument(
        text=text, file_name=file_name, file_size=len(data), file_type=file_type
    )
