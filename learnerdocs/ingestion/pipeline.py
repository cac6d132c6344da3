"""End-to-end processing of a single uploaded document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..config import ProcessingConfig
from .analyzer import run_analysis
from .classifier import is_generated_content
from .detector import detect_document_format
from .errors import InvalidDocumentError, ProcessingError
from .extractor import DocumentExtractor
from .models import STATUS_COMPLETED, DocumentFormat, ProcessingResult, RawDocument
from .splitter import split_answer_key

logger = logging.getLogger(__name__)

MIN_DOCUMENT_BYTES = 10
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
MAX_BYTES: Dict[DocumentFormat, int] = {
    DocumentFormat.PDF: 100 * 1024 * 1024,
    DocumentFormat.TEXT: 5 * 1024 * 1024,
    DocumentFormat.DOCX: 50 * 1024 * 1024,
    DocumentFormat.DOC: 50 * 1024 * 1024,
}


@dataclass(frozen=True)
class ProcessingContext:
    """Caller-supplied context; ``learner_name`` is only used for display."""

    learner_name: str = ""


def validate_document(document: RawDocument) -> None:
    """Raise ``InvalidDocumentError`` for payloads not worth extracting."""

    filename = document.filename or ""
    if not filename.strip():
        raise InvalidDocumentError("A filename is required.")
    if ".." in filename or "/" in filename or "\\" in filename:
        raise InvalidDocumentError("Invalid filename detected.")
    if document.size < MIN_DOCUMENT_BYTES:
        raise InvalidDocumentError("Invalid or empty file detected.")

    limit = MAX_BYTES.get(detect_document_format(document), DEFAULT_MAX_BYTES)
    if document.size > limit:
        raise InvalidDocumentError(
            f"File too large for processing. Maximum size: {round(limit / (1024 * 1024))}MB"
        )


def sanitize_text(text: str, max_chars: Optional[int] = None) -> str:
    """Trim, drop angle brackets and cap the length of ``text``."""

    if not text:
        return ""
    cleaned = text.strip().replace("<", "").replace(">", "")
    if max_chars is not None and max_chars >= 0:
        cleaned = cleaned[:max_chars]
    return cleaned


async def process_document(
    document: RawDocument,
    context: Optional[ProcessingContext] = None,
    config: Optional[ProcessingConfig] = None,
    extractor: Optional[DocumentExtractor] = None,
) -> ProcessingResult:
    """Extract, split and analyze a document.

    Extraction is the only awaited step. Any ``ProcessingError`` short-circuits
    into a failed result carrying the error kind and a message fit to be
    stored as-is; splitting and analysis never fail.
    """

    cfg = config or ProcessingConfig()
    ctx = context or ProcessingContext()
    extractor = extractor or DocumentExtractor(timeout_seconds=cfg.extraction_timeout_seconds)
    learner_name = sanitize_text(ctx.learner_name, 100) or cfg.default_learner_name

    try:
        validate_document(document)
        raw_text = await extractor.extract_text(document)
    except ProcessingError as exc:
        logger.warning("Processing failed for %s (%s): %s", document.filename, exc.kind, exc.message)
        return ProcessingResult.failure(exc.kind, exc.message)

    extracted_text = sanitize_text(raw_text, cfg.max_text_chars)
    logger.info("Extracted %s characters from %s", len(extracted_text), document.filename)

    split = split_answer_key(extracted_text, cfg.marker_patterns)
    analysis = run_analysis(document.filename, extracted_text, learner_name, cfg)

    return ProcessingResult(
        status=STATUS_COMPLETED,
        extracted_text=extracted_text,
        main_content=split.main_content,
        answer_key=split.answer_key,
        analysis=analysis,
        generated_content=is_generated_content(extracted_text),
    )


__all__ = [
    "ProcessingContext",
    "process_document",
    "sanitize_text",
    "validate_document",
]
