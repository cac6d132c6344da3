"""Document content processing: extraction, answer-key splitting and analysis."""

from .analyzer import analyze_test_content, run_analysis
from .classifier import is_generated_content, should_analyze
from .errors import (
    ExtractionFailedError,
    InvalidDocumentError,
    ProcessingError,
    UnsupportedFormatError,
)
from .extractor import DocumentExtractor
from .models import (
    Analysis,
    ContentSplit,
    DocumentFormat,
    ProcessingResult,
    QuestionResult,
    RawDocument,
)
from .pipeline import ProcessingContext, process_document
from .splitter import split_answer_key

__all__ = [
    "Analysis",
    "ContentSplit",
    "DocumentExtractor",
    "DocumentFormat",
    "ExtractionFailedError",
    "InvalidDocumentError",
    "ProcessingContext",
    "ProcessingError",
    "ProcessingResult",
    "QuestionResult",
    "RawDocument",
    "UnsupportedFormatError",
    "analyze_test_content",
    "is_generated_content",
    "process_document",
    "run_analysis",
    "should_analyze",
    "split_answer_key",
]
