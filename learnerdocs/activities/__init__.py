"""Temporal activity package for learnerdocs."""

from .detect import detect_document_format_activity
from .process import process_document_activity

__all__ = [
    "detect_document_format_activity",
    "process_document_activity",
]
