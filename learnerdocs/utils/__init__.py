"""Utility helpers for the learnerdocs CLI."""

from __future__ import annotations

from .cli import (
    build_main_cli_parser,
    build_result_view,
    configure_logging,
    emit_plain_result,
    render_result,
)

__all__ = [
    "build_main_cli_parser",
    "build_result_view",
    "configure_logging",
    "emit_plain_result",
    "render_result",
]
