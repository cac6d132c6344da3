"""Document format detection utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import filetype

from .models import DocumentFormat, RawDocument

logger = logging.getLogger(__name__)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MIME_FORMATS: Dict[str, DocumentFormat] = {
    "application/pdf": DocumentFormat.PDF,
    "text/plain": DocumentFormat.TEXT,
    DOCX_MIME: DocumentFormat.DOCX,
    "application/msword": DocumentFormat.DOC,
}

EXTENSION_FORMATS: Dict[str, DocumentFormat] = {
    ".pdf": DocumentFormat.PDF,
    ".txt": DocumentFormat.TEXT,
    ".docx": DocumentFormat.DOCX,
    ".doc": DocumentFormat.DOC,
}


def _normalize_mime(mime_type: Optional[str]) -> str:
    return (mime_type or "").split(";", 1)[0].strip().lower()


def _detect_mime(content: bytes) -> Optional[str]:
    if not content:
        return None

    try:
        kind = filetype.guess(content)
        if kind and kind.mime:
            return kind.mime.lower()
    except Exception as exc:  # pragma: no cover
        logger.debug("filetype.guess failed: %s", exc)

    # Fallback to the PDF signature, allowing leading whitespace.
    if content.lstrip()[:4] == b"%PDF":
        return "application/pdf"

    return None


def detect_document_format(document: RawDocument) -> DocumentFormat:
    """Resolve the document format from the declared MIME type, magic bytes, then extension."""

    declared = _normalize_mime(document.mime_type)
    if declared in MIME_FORMATS:
        return MIME_FORMATS[declared]

    sniffed = _detect_mime(document.content)
    if sniffed in MIME_FORMATS:
        return MIME_FORMATS[sniffed]
    if sniffed is not None:
        logger.debug("Sniffed unsupported MIME type %s for %s", sniffed, document.filename)

    suffix = Path(document.filename or "").suffix.lower()
    return EXTENSION_FORMATS.get(suffix, DocumentFormat.UNKNOWN)


def detect_path_format(file_path: Path, mime_type: Optional[str] = None) -> DocumentFormat:
    """Detect the format of a document stored on disk."""

    if not file_path.is_file():
        return DocumentFormat.UNKNOWN
    return detect_document_format(RawDocument.from_path(file_path, mime_type))


__all__ = [
    "DOCX_MIME",
    "EXTENSION_FORMATS",
    "MIME_FORMATS",
    "detect_document_format",
    "detect_path_format",
]
