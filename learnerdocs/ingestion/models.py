"""Common data models for document content processing."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


class DocumentFormat(str, Enum):
    """Enumerated document formats recognised by the extractor."""

    PDF = "pdf"
    DOCX = "docx"
    DOC = "doc"
    TEXT = "text"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RawDocument:
    """Uploaded binary payload with its filename and declared MIME type."""

    content: bytes
    filename: str
    mime_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path, mime_type: Optional[str] = None) -> "RawDocument":
        """Read a document from disk."""

        return cls(content=path.read_bytes(), filename=path.name, mime_type=mime_type)


@dataclass
class ContentSplit:
    """Main content of a document and its trailing answer key, if any."""

    main_content: str
    answer_key: Optional[str] = None
    marker_line: Optional[str] = None
    marker_line_number: Optional[int] = None

    @property
    def has_answer_key(self) -> bool:
        return self.answer_key is not None


@dataclass
class QuestionResult:
    question: str
    student_answer: str
    correct_answer: str


@dataclass
class Analysis:
    """Advisory summary of a test-like document."""

    learner_name: str
    subject: Optional[str] = None
    total_questions: int = 0
    correct_answers: int = 0
    incorrect_answers: int = 0
    accuracy: int = 0
    problem_areas: List[str] = field(default_factory=list)
    correct: List[QuestionResult] = field(default_factory=list)
    incorrect: List[QuestionResult] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    raw_text_length: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping."""

        return {
            "learner_name": self.learner_name,
            "subject": self.subject,
            "total_questions": self.total_questions,
            "correct_answers": self.correct_answers,
            "incorrect_answers": self.incorrect_answers,
            "accuracy": self.accuracy,
            "problem_areas": list(self.problem_areas),
            "detailed_results": {
                "correct": [asdict(item) for item in self.correct],
                "incorrect": [asdict(item) for item in self.incorrect],
            },
            "recommendations": list(self.recommendations),
            "raw_text_length": self.raw_text_length,
        }


@dataclass
class ProcessingResult:
    """Outcome of a single pipeline invocation."""

    status: str
    extracted_text: str = ""
    main_content: Optional[str] = None
    answer_key: Optional[str] = None
    analysis: Optional[Analysis] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None
    generated_content: bool = False

    @property
    def ok(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def analyzed(self) -> bool:
        return self.analysis is not None

    @classmethod
    def failure(cls, kind: str, message: str) -> "ProcessingResult":
        return cls(status=STATUS_FAILED, error_kind=kind, error=message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "extracted_text": self.extracted_text,
            "main_content": self.main_content,
            "answer_key": self.answer_key,
            "analyzed": self.analyzed,
            "analysis": self.analysis.to_dict() if self.analysis is not None else None,
            "generated_content": self.generated_content,
            "error_kind": self.error_kind,
            "error": self.error,
        }
