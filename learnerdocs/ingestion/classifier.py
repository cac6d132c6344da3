"""Keyword heuristics that decide how a document should be treated."""

from __future__ import annotations

import re
from typing import Optional

from ..config import ProcessingConfig

_REQUEST_PHRASES = (
    "can you",
    "please create",
    "i would like",
    "make me",
    "generate",
    "create a",
    "give me",
    "i need",
    "could you",
)
_SHORT_REPLY_OPENERS = ("here", "sure", "of course")
_CONVERSATION_PHRASES = (
    "that sounds great",
    "i understand",
    "let me help",
    "here are some",
    "you can try",
    "some suggestions",
    "here are a few",
)
_NUMBERED_ITEM = re.compile(r"\d+\.\s")
_NUMBERING = re.compile(r"\d+\.")
_BLANKS = re.compile(r"___|______|blank|answer:?\s*_")
_MIN_GENERATED_LENGTH = 150


def should_analyze(filename: str, text: str, config: Optional[ProcessingConfig] = None) -> bool:
    """Return True when the filename or text carries a test-like keyword."""

    cfg = config or ProcessingConfig()
    lowered_name = (filename or "").lower()
    if any(keyword.lower() in lowered_name for keyword in cfg.filename_keywords):
        return True

    lowered_text = (text or "").lower()
    return any(keyword.lower() in lowered_text for keyword in cfg.content_keywords)


def _is_request(text: str, lowered: str) -> bool:
    if any(phrase in lowered for phrase in _REQUEST_PHRASES):
        return True
    if len(text) < 100 and lowered.startswith(_SHORT_REPLY_OPENERS):
        return True
    return len(text) < 80 and "create" in lowered


def _has_generated_signals(text: str, lowered: str) -> bool:
    if _NUMBERED_ITEM.search(text) or _BLANKS.search(lowered):
        return True
    if "questions:" in lowered and "answers:" in lowered:
        return True
    if "problems:" in lowered and "solutions:" in lowered:
        return True
    numbered = _NUMBERING.search(text) is not None
    if numbered and any(word in lowered for word in ("worksheet", "practice test", "activity", "game")):
        return True
    return numbered and len(text.split("\n")) > 6


def is_generated_content(text: str) -> bool:
    """Return True for substantial worksheet-like text.

    Requests ("can you create ...") and conversational replies ("that sounds
    great ...") are rejected even when they mention tests or worksheets.
    """

    if not text:
        return False
    lowered = text.lower()
    if _is_request(text, lowered):
        return False
    if any(phrase in lowered for phrase in _CONVERSATION_PHRASES):
        return False
    return _has_generated_signals(text, lowered) and len(text) > _MIN_GENERATED_LENGTH


__all__ = ["is_generated_content", "should_analyze"]
