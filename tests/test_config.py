from __future__ import annotations

import pytest
from pydantic import ValidationError

from learnerdocs.config import DEFAULT_MARKER_PATTERNS, ProcessingConfig


def test_invalid_marker_pattern_is_rejected() -> None:
    with pytest.raises(ValidationError, match="Invalid marker pattern"):
        ProcessingConfig(marker_patterns=["answer(key"])


def test_copy_validates_marker_overrides() -> None:
    config = ProcessingConfig()

    with pytest.raises(ValidationError):
        config.copy(marker_patterns=[r"answers\s*:?", "[unclosed"])

    assert config.marker_patterns == DEFAULT_MARKER_PATTERNS


def test_activity_payload_with_invalid_marker_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ProcessingConfig.from_payload({"marker_patterns": ["*answers"]})


def test_valid_marker_patterns_are_kept() -> None:
    config = ProcessingConfig(marker_patterns=[r"mark\s+scheme"])

    assert config.marker_patterns == [r"mark\s+scheme"]
    assert config.to_activity_payload()["marker_patterns"] == [r"mark\s+scheme"]
