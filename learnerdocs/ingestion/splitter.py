"""Separate the main body of a document from a trailing answer key."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import List, Optional, Pattern, Sequence, Tuple

from ..config import DEFAULT_MARKER_PATTERNS
from .models import ContentSplit

logger = logging.getLogger(__name__)

# Markdown heading hashes and emphasis wrapped around a header line.
_HEADER_DECORATION = re.compile(r"^[#*_\s]+|[*_\s]+$")


@lru_cache(maxsize=32)
def _compile(patterns: Tuple[str, ...]) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


def compile_marker_patterns(patterns: Optional[Sequence[str]] = None) -> Tuple[Pattern[str], ...]:
    """Compile marker patterns, falling back to the default set when ``None``."""

    if patterns is None:
        patterns = DEFAULT_MARKER_PATTERNS
    return _compile(tuple(patterns))


def is_marker_line(line: str, compiled: Sequence[Pattern[str]]) -> bool:
    """Return True when the whole line is an answer-key header."""

    candidate = _HEADER_DECORATION.sub("", line)
    if not candidate:
        return False
    return any(pattern.fullmatch(candidate) for pattern in compiled)


def _join_without_trailing_blanks(lines: List[str]) -> str:
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return ""
    # The last kept line is not blank, so splitlines() yields its content
    # without the line terminator.
    return "".join(lines[:-1]) + lines[-1].splitlines()[0]


def split_answer_key(text: str, marker_patterns: Optional[Sequence[str]] = None) -> ContentSplit:
    """Split ``text`` at the first standalone answer-key header line.

    Lines are scanned top to bottom and the first line matching any marker
    pattern wins, regardless of which pattern matched. Everything above the
    marker (trailing blank lines dropped) becomes the main content; the marker
    line and everything after it becomes the answer key. Without a marker the
    text is returned untouched as the main content.
    """

    if not text:
        return ContentSplit(main_content="")

    compiled = compile_marker_patterns(marker_patterns)
    lines = text.splitlines(keepends=True)

    for number, line in enumerate(lines):
        if not is_marker_line(line, compiled):
            continue

        main_content = _join_without_trailing_blanks(lines[:number])
        answer_key = "".join(lines[number:])
        logger.debug("Answer key marker %r found on line %s", line.strip(), number)
        return ContentSplit(
            main_content=main_content,
            answer_key=answer_key,
            marker_line=line.strip(),
            marker_line_number=number,
        )

    return ContentSplit(main_content=text)


__all__ = ["compile_marker_patterns", "is_marker_line", "split_answer_key"]
