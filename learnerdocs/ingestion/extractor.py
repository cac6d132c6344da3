"""Adapters that turn uploaded documents into plain text."""

from __future__ import annotations

import asyncio
import logging
from io import BytesIO
from typing import Callable, Dict, Mapping, Optional

from docling.datamodel.base_models import DocumentStream, InputFormat
from docling.document_converter import DocumentConverter
from pypdf import PdfReader

from ..config import DEFAULT_EXTRACTION_TIMEOUT
from .detector import detect_document_format
from .errors import ExtractionFailedError, ProcessingError, UnsupportedFormatError
from .models import DocumentFormat, RawDocument

logger = logging.getLogger(__name__)

MIN_PDF_TEXT_CHARS = 10

FORMAT_EXTENSIONS: Dict[DocumentFormat, str] = {
    DocumentFormat.TEXT: ".txt",
    DocumentFormat.PDF: ".pdf",
    DocumentFormat.DOCX: ".docx",
    DocumentFormat.DOC: ".doc",
}

# A backend receives the raw bytes and the original filename.
ExtractionBackend = Callable[[bytes, str], str]


def extract_pdf_text(content: bytes, filename: str = "document.pdf") -> str:
    """Extract the text layer of a PDF page by page."""

    reader = PdfReader(BytesIO(content))
    if reader.is_encrypted and not reader.decrypt(""):
        raise ExtractionFailedError(f"{filename} is password protected and cannot be read.")

    pages = []
    for index, page in enumerate(reader.pages):
        try:
            text = page.extract_text() or ""
        except Exception as exc:  # pragma: no cover
            logger.debug("Failed to extract text from page %s of %s: %s", index, filename, exc)
            continue
        pages.append(text)

    full_text = "\n\n".join(pages).strip()
    if len(full_text) < MIN_PDF_TEXT_CHARS:
        raise ExtractionFailedError(
            "PDF appears to contain no readable text. "
            "It may be a scanned image or an empty document."
        )
    return full_text


def extract_plain_text(content: bytes, filename: str = "document.txt") -> str:
    """Decode a UTF-8 text upload."""

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ExtractionFailedError(f"{filename} is not valid UTF-8 text.") from exc

    if not text.strip():
        raise ExtractionFailedError("Text file appears to be empty.")
    return text.strip()


class DoclingTextBackend:
    """Extracts Word documents using Docling DocumentConverter."""

    def __init__(self) -> None:
        self._converter: Optional[DocumentConverter] = None

    def _get_converter(self) -> DocumentConverter:
        if self._converter is None:
            self._converter = DocumentConverter(allowed_formats=[InputFormat.DOCX])
        return self._converter

    def __call__(self, content: bytes, filename: str = "document.docx") -> str:
        stream = DocumentStream(name=filename, stream=BytesIO(content))
        result = self._get_converter().convert(stream)

        for error in getattr(result, "errors", []) or []:
            message = getattr(error, "error_message", "")
            if message:
                logger.debug("Docling reported an issue for %s: %s", filename, message)

        text = result.document.export_to_text().strip()
        if not text:
            raise ExtractionFailedError("DOCX file appears to contain no readable text.")
        return text


def default_backends() -> Dict[DocumentFormat, ExtractionBackend]:
    return {
        DocumentFormat.PDF: extract_pdf_text,
        DocumentFormat.TEXT: extract_plain_text,
        DocumentFormat.DOCX: DoclingTextBackend(),
    }


class DocumentExtractor:
    """Routes a document to the backend registered for its format."""

    def __init__(
        self,
        backends: Optional[Mapping[DocumentFormat, ExtractionBackend]] = None,
        timeout_seconds: float = DEFAULT_EXTRACTION_TIMEOUT,
    ) -> None:
        self._backends = dict(default_backends() if backends is None else backends)
        self._timeout_seconds = timeout_seconds

    def supported_extensions(self) -> str:
        return ", ".join(
            FORMAT_EXTENSIONS[fmt] for fmt in FORMAT_EXTENSIONS if fmt in self._backends
        )

    async def extract_text(self, document: RawDocument) -> str:
        """Return the document text or raise a ``ProcessingError``."""

        document_format = detect_document_format(document)
        backend = self._backends.get(document_format)
        if backend is None:
            raise UnsupportedFormatError(
                f"File type not supported. Supported formats: {self.supported_extensions()}"
            )

        logger.debug("Extracting %s as %s", document.filename, document_format.value)
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(backend, document.content, document.filename),
                timeout=self._timeout_seconds,
            )
        except ProcessingError:
            raise
        except asyncio.TimeoutError as exc:
            raise ExtractionFailedError(
                f"File processing timeout after {self._timeout_seconds:g} seconds."
            ) from exc
        except Exception as exc:
            raise ExtractionFailedError(
                f"Failed to extract text from {document.filename}: {exc}"
            ) from exc


__all__ = [
    "DoclingTextBackend",
    "DocumentExtractor",
    "ExtractionBackend",
    "default_backends",
    "extract_pdf_text",
    "extract_plain_text",
]
