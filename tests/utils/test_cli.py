from __future__ import annotations

from pathlib import Path

import pytest
from learnerdocs.app import _config_from_args, main, process_paths
from learnerdocs.utils.cli import ResultView, build_main_cli_parser, build_result_view


def test_build_result_view_for_split_document() -> None:
    result = {
        "status": "completed",
        "extracted_text": "Quiz\nAnswers\n1. A",
        "main_content": "Quiz",
        "answer_key": "Answers\n1. A",
        "analyzed": True,
        "analysis": {
            "learner_name": "Ada",
            "subject": "math",
            "total_questions": 1,
            "correct_answers": 0,
            "incorrect_answers": 0,
            "accuracy": 0,
            "problem_areas": ["addition"],
            "recommendations": ["Practice basic addition with regrouping/carrying"],
        },
    }

    view = build_result_view("quiz.txt", result)

    assert isinstance(view, ResultView)
    assert view.status == "success"
    assert view.title == "quiz.txt"
    assert view.metadata == {"text_length": 17, "has_answer_key": True, "analyzed": True}


def test_build_result_view_warns_for_plain_documents() -> None:
    result = {"status": "completed", "extracted_text": "Notes", "main_content": "Notes", "answer_key": None}

    view = build_result_view("notes.txt", result)

    assert view.status == "warn"
    assert view.metadata["has_answer_key"] is False


def test_build_result_view_for_failure() -> None:
    result = {"status": "failed", "error_kind": "ExtractionFailedError", "error": "PDF is damaged."}

    view = build_result_view("broken.pdf", result)

    assert view.status == "error"
    assert view.metadata["message"] == "PDF is damaged."
    assert "ExtractionFailedError" in view.title


def test_cli_overrides_marker_and_keyword_sets() -> None:
    args = build_main_cli_parser().parse_args(
        ["paper.txt", "--marker", r"mark\s+scheme", "--keyword", "quiz", "--keyword", "exam"]
    )

    config = _config_from_args(args)

    assert config.marker_patterns == [r"mark\s+scheme"]
    assert config.content_keywords == ["quiz", "exam"]
    assert config.filename_keywords == ["test"]


@pytest.mark.asyncio
async def test_process_paths_handles_existing_and_missing_files(tmp_path: Path) -> None:
    worksheet = tmp_path / "worksheet.txt"
    worksheet.write_text("Worksheet\n1. 2 + 2 = ___\n\nSolutions\n1. 4\n", encoding="utf-8")
    missing = tmp_path / "missing.txt"

    outcomes = dict(await process_paths([worksheet, missing], learner_name="Ada"))

    assert outcomes[worksheet]["answer_key"] == "Solutions\n1. 4"
    assert outcomes[missing]["status"] == "failed"
    assert outcomes[missing]["error_kind"] == "InvalidDocumentError"


def test_build_result_view_reports_generated_content() -> None:
    result = {
        "status": "completed",
        "extracted_text": "1. 2 + 2 = ___",
        "main_content": "1. 2 + 2 = ___",
        "answer_key": None,
        "generated_content": True,
    }

    view = build_result_view("worksheet.txt", result)

    assert view.metadata["generated_content"] is True


def test_cli_overrides_filename_keywords() -> None:
    args = build_main_cli_parser().parse_args(
        ["paper.txt", "--filename-keyword", "quiz", "--filename-keyword", "exam"]
    )

    config = _config_from_args(args)

    assert config.filename_keywords == ["quiz", "exam"]
    assert config.content_keywords == ["question", "answer", "math"]


@pytest.mark.asyncio
async def test_filename_keyword_override_triggers_analysis(tmp_path: Path) -> None:
    paper = tmp_path / "weekly quiz.txt"
    paper.write_text("Chapter notes about plants and rivers.", encoding="utf-8")
    args = build_main_cli_parser().parse_args([str(paper), "--filename-keyword", "quiz"])

    outcomes = dict(await process_paths([paper], config=_config_from_args(args)))

    assert outcomes[paper]["analyzed"] is True


def test_invalid_marker_is_rejected_by_the_cli(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["paper.txt", "--marker", "answer(key"])

    assert excinfo.value.code == 2
    assert "Invalid marker pattern" in capsys.readouterr().err
