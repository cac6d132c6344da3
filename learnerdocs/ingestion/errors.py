"""Exceptions raised while turning an uploaded document into text."""

from __future__ import annotations


class ProcessingError(Exception):
    """Base class for failures that abort a processing invocation."""

    kind = "ProcessingError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidDocumentError(ProcessingError):
    """Raised when the uploaded payload fails basic sanity checks."""

    kind = "InvalidDocumentError"


class UnsupportedFormatError(ProcessingError):
    """Raised when no extraction backend handles the document format."""

    kind = "UnsupportedFormatError"


class ExtractionFailedError(ProcessingError):
    """Raised when a backend fails on a nominally supported document."""

    kind = "ExtractionFailedError"


__all__ = [
    "ExtractionFailedError",
    "InvalidDocumentError",
    "ProcessingError",
    "UnsupportedFormatError",
]
