"""CLI helper utilities shared across the learnerdocs commands."""

from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console, Group, RenderableType
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import DEFAULT_TEMPORAL_ADDRESS, DEFAULT_TEMPORAL_NAMESPACE, DEFAULT_TEMPORAL_TASK_QUEUE

_CONSOLE: Optional[Console] = None

PREVIEW_CHARS = 600


@dataclass(frozen=True)
class CLITheme:
    """Palette used when rendering processing results."""

    success: str = "#22c55e"
    warning: str = "#facc15"
    error: str = "#f87171"
    accent: str = "#38bdf8"
    muted: str = "#9ca3af"


DEFAULT_THEME = CLITheme()


@dataclass
class ResultView:
    """Renderable details for one processed document."""

    status: str
    title: str
    body: RenderableType
    metadata: Dict[str, Any] = field(default_factory=dict)


def get_console() -> Console:
    """Return a singleton Rich Console configured for the CLI."""

    global _CONSOLE

    if _CONSOLE is None:
        _CONSOLE = Console(
            log_time=False,
            log_path=False,
            highlight=False,
            soft_wrap=True,
        )

    return _CONSOLE


def configure_logging(verbose: bool = False) -> None:
    """Route log records through Rich."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=get_console(), show_path=False, rich_tracebacks=True)],
        force=True,
    )


def use_plain_output() -> bool:
    return os.environ.get("LEARNERDOCS_FORCE_PLAIN", "").lower() in {"1", "true", "yes"}


def _preview(text: Optional[str]) -> str:
    if not text:
        return ""
    if len(text) <= PREVIEW_CHARS:
        return text
    return text[:PREVIEW_CHARS].rstrip() + " …"


def _analysis_table(analysis: Dict[str, Any], theme: CLITheme) -> Table:
    table = Table(box=box.SIMPLE, show_header=False, pad_edge=False)
    table.add_column("field", style=theme.accent)
    table.add_column("value")
    table.add_row("Learner", str(analysis.get("learner_name") or ""))
    table.add_row("Subject", str(analysis.get("subject") or "unknown"))
    table.add_row("Questions", str(analysis.get("total_questions", 0)))
    table.add_row(
        "Graded",
        f"{analysis.get('correct_answers', 0)} correct / {analysis.get('incorrect_answers', 0)} incorrect",
    )
    table.add_row("Accuracy", f"{analysis.get('accuracy', 0)}%")
    areas: List[str] = analysis.get("problem_areas") or []
    table.add_row("Problem areas", ", ".join(areas) or "none")
    for recommendation in analysis.get("recommendations") or []:
        table.add_row("Recommendation", recommendation)
    return table


def build_result_view(
    filename: str,
    result: Dict[str, Any],
    theme: CLITheme = DEFAULT_THEME,
) -> ResultView:
    """Create a ResultView from a serialized ``ProcessingResult``."""

    status = (result.get("status") or "failed").lower()
    if status != "completed":
        message = result.get("error") or "Processing failed."
        kind = result.get("error_kind") or "ProcessingError"
        return ResultView(
            status="error",
            title=f"{filename}: {kind}",
            body=Text(message, style=f"bold {theme.error}"),
            metadata={"message": message, "error_kind": kind},
        )

    sections: List[RenderableType] = [
        Text("Main content", style=f"bold {theme.accent}"),
        Text(_preview(result.get("main_content")) or "(empty)"),
    ]
    answer_key = result.get("answer_key")
    if answer_key is not None:
        sections.append(Text("Answer key", style=f"bold {theme.accent}"))
        sections.append(Text(_preview(answer_key) or "(empty)"))

    analysis = result.get("analysis")
    if analysis:
        sections.append(Text("Analysis", style=f"bold {theme.accent}"))
        sections.append(_analysis_table(analysis, theme))
    if result.get("generated_content"):
        sections.append(Text("Looks like generated practice material.", style=theme.muted))

    return ResultView(
        status="success" if answer_key is not None or analysis else "warn",
        title=filename,
        body=Group(*sections),
        metadata={
            "text_length": len(result.get("extracted_text") or ""),
            "has_answer_key": answer_key is not None,
            "analyzed": bool(result.get("analyzed")),
            "generated_content": bool(result.get("generated_content")),
        },
    )


def render_result(
    filename: str,
    result: Dict[str, Any],
    *,
    console: Optional[Console] = None,
    theme: CLITheme = DEFAULT_THEME,
) -> None:
    view = build_result_view(filename, result, theme)
    border = {"success": theme.success, "warn": theme.warning, "error": theme.error}[view.status]
    (console or get_console()).print(Panel(view.body, title=view.title, border_style=border))


def emit_plain_result(filename: str, result: Dict[str, Any]) -> None:
    """Plain JSON rendering for scripting."""

    print(json.dumps({"file": filename, **result}, ensure_ascii=False, indent=2))


def build_main_cli_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the processing CLI."""

    parser = argparse.ArgumentParser(description="Extract, split and analyze learner documents")
    parser.add_argument("paths", nargs="+", help="Documents to process")
    parser.add_argument("--learner", default="", help="Learner or owner name shown in the analysis")
    parser.add_argument("--mime-type", default=None, help="Declared MIME type for every document")
    parser.add_argument(
        "--marker",
        dest="markers",
        action="append",
        default=None,
        help="Answer-key marker regex (repeatable, replaces the default set).",
    )
    parser.add_argument(
        "--keyword",
        dest="keywords",
        action="append",
        default=None,
        help="Content keyword triggering analysis (repeatable, replaces the default set).",
    )
    parser.add_argument(
        "--filename-keyword",
        dest="filename_keywords",
        action="append",
        default=None,
        help="Filename keyword triggering analysis (repeatable, replaces the default set).",
    )
    parser.add_argument("--json", action="store_true", help="Print raw JSON results")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--temporal",
        action="store_true",
        help="Submit documents to the Temporal workflow instead of processing in-process.",
    )
    parser.add_argument("--address", default=DEFAULT_TEMPORAL_ADDRESS)
    parser.add_argument("--namespace", default=DEFAULT_TEMPORAL_NAMESPACE)
    parser.add_argument("--task-queue", default=DEFAULT_TEMPORAL_TASK_QUEUE)
    return parser


__all__ = [
    "CLITheme",
    "DEFAULT_THEME",
    "ResultView",
    "build_main_cli_parser",
    "build_result_view",
    "configure_logging",
    "emit_plain_result",
    "get_console",
    "render_result",
    "use_plain_output",
]
