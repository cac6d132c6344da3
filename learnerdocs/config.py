"""Application configuration dataclasses."""

from __future__ import annotations

import os
import re
from dataclasses import field
from typing import Any, Dict, List

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic.dataclasses import dataclass

load_dotenv()

DEFAULT_MARKER_PATTERNS: List[str] = [
    r"answer\s+key\s*:?",
    r"answers\s*:?",
    r"answer\s+sheet\s*:?",
    r"solutions\s*:?",
]
DEFAULT_FILENAME_KEYWORDS: List[str] = ["test"]
DEFAULT_CONTENT_KEYWORDS: List[str] = ["question", "answer", "math"]

DEFAULT_MAX_TEXT_CHARS = int(os.environ.get("LEARNERDOCS_MAX_TEXT_CHARS", "50000"))
DEFAULT_EXTRACTION_TIMEOUT = float(os.environ.get("LEARNERDOCS_EXTRACTION_TIMEOUT", "30"))
DEFAULT_LEARNER_NAME = os.environ.get("LEARNERDOCS_DEFAULT_LEARNER_NAME", "Student")
DEFAULT_TEMPORAL_ADDRESS = os.environ.get("LEARNERDOCS_TEMPORAL_ADDRESS", "127.0.0.1:7233")
DEFAULT_TEMPORAL_NAMESPACE = os.environ.get("LEARNERDOCS_TEMPORAL_NAMESPACE", "default")
DEFAULT_TEMPORAL_TASK_QUEUE = os.environ.get("LEARNERDOCS_TEMPORAL_TASK_QUEUE", "learnerdocs")


@dataclass
class ProcessingConfig:
    """Tunable knobs of the document processing pipeline."""

    marker_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_MARKER_PATTERNS))
    filename_keywords: List[str] = field(default_factory=lambda: list(DEFAULT_FILENAME_KEYWORDS))
    content_keywords: List[str] = field(default_factory=lambda: list(DEFAULT_CONTENT_KEYWORDS))
    max_text_chars: int = DEFAULT_MAX_TEXT_CHARS
    extraction_timeout_seconds: float = DEFAULT_EXTRACTION_TIMEOUT
    default_learner_name: str = DEFAULT_LEARNER_NAME

    @field_validator("marker_patterns")
    @classmethod
    def _check_marker_patterns(cls, value: List[str]) -> List[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"Invalid marker pattern {pattern!r}: {exc}") from exc
        return value

    def to_activity_payload(self) -> Dict[str, Any]:
        """Return a dict compatible with activity execution."""

        return {
            "marker_patterns": list(self.marker_patterns),
            "filename_keywords": list(self.filename_keywords),
            "content_keywords": list(self.content_keywords),
            "max_text_chars": self.max_text_chars,
            "extraction_timeout_seconds": self.extraction_timeout_seconds,
            "default_learner_name": self.default_learner_name,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any] | None) -> "ProcessingConfig":
        """Build a config from an activity payload, ignoring unknown keys."""

        payload = payload or {}
        known = {name: payload[name] for name in cls.__dataclass_fields__ if name in payload}
        return cls(**known)

    def copy(self, **updates: Any) -> "ProcessingConfig":
        """Return a shallow copy with optional overrides."""

        values = {name: getattr(self, name) for name in self.__dataclass_fields__}
        values.update(updates)
        return ProcessingConfig(**values)


@dataclass
class WorkerConfig:
    """Connection settings for the Temporal worker."""

    address: str = DEFAULT_TEMPORAL_ADDRESS
    namespace: str = DEFAULT_TEMPORAL_NAMESPACE
    task_queue: str = DEFAULT_TEMPORAL_TASK_QUEUE
