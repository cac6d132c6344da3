from __future__ import annotations

import asyncio

import pytest

from learnerdocs.config import ProcessingConfig
from learnerdocs.ingestion import pipeline
from learnerdocs.ingestion.extractor import DocumentExtractor
from learnerdocs.ingestion.models import DocumentFormat, RawDocument
from learnerdocs.ingestion.pipeline import ProcessingContext, process_document, sanitize_text

WORKSHEET = "Math Worksheet\n1. 2 + 2 = ___\n2. 3 + 5 = ___\n\nAnswer Key\n1. 4\n2. 8"


def _stub_extractor(text: str) -> DocumentExtractor:
    return DocumentExtractor(backends={DocumentFormat.TEXT: lambda content, filename: text})


def _document(filename: str = "worksheet.txt", content: bytes = b"0123456789 payload") -> RawDocument:
    return RawDocument(content=content, filename=filename, mime_type="text/plain")


@pytest.mark.asyncio
async def test_worksheet_is_split_and_analyzed() -> None:
    result = await process_document(
        _document(),
        ProcessingContext(learner_name="Ada"),
        extractor=_stub_extractor(WORKSHEET),
    )

    assert result.ok
    assert result.extracted_text == WORKSHEET
    assert result.main_content == "Math Worksheet\n1. 2 + 2 = ___\n2. 3 + 5 = ___"
    assert result.answer_key == "Answer Key\n1. 4\n2. 8"
    assert result.analyzed
    assert result.analysis is not None
    assert result.analysis.learner_name == "Ada"
    assert "addition" in result.analysis.problem_areas


@pytest.mark.asyncio
async def test_plain_notes_are_not_analyzed() -> None:
    text = "Just some general notes about history."

    result = await process_document(_document("notes.txt"), extractor=_stub_extractor(text))

    assert result.ok
    assert result.main_content == text
    assert result.answer_key is None
    assert result.analysis is None
    assert not result.analyzed


@pytest.mark.asyncio
async def test_empty_extraction_yields_empty_split() -> None:
    result = await process_document(_document("blank.txt"), extractor=_stub_extractor(""))

    assert result.ok
    assert result.main_content == ""
    assert result.answer_key is None
    assert result.analysis is None


@pytest.mark.asyncio
async def test_extraction_failure_short_circuits(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(content: bytes, filename: str) -> str:
        raise RuntimeError("encrypted payload")

    def fail_split(*args: object, **kwargs: object) -> None:
        raise AssertionError("splitter must not run after a failed extraction")

    monkeypatch.setattr(pipeline, "split_answer_key", fail_split)
    extractor = DocumentExtractor(backends={DocumentFormat.TEXT: broken})

    result = await process_document(_document("quiz test.txt"), extractor=extractor)

    assert not result.ok
    assert result.status == "failed"
    assert result.error_kind == "ExtractionFailedError"
    assert "encrypted payload" in (result.error or "")
    assert result.extracted_text == ""
    assert result.main_content is None
    assert result.answer_key is None
    assert result.analysis is None


@pytest.mark.asyncio
async def test_unsupported_format_is_reported() -> None:
    document = RawDocument(b"\x89PNG\r\n\x1a\n" + b"\x00" * 32, "diagram.png", "image/png")

    result = await process_document(document, extractor=_stub_extractor("unused"))

    assert result.error_kind == "UnsupportedFormatError"


@pytest.mark.asyncio
async def test_invalid_documents_are_rejected() -> None:
    extractor = _stub_extractor("unused")

    tiny = await process_document(_document(content=b"abc"), extractor=extractor)
    sneaky = await process_document(_document("../etc/passwd.txt"), extractor=extractor)

    assert tiny.error_kind == "InvalidDocumentError"
    assert tiny.error == "Invalid or empty file detected."
    assert sneaky.error_kind == "InvalidDocumentError"


@pytest.mark.asyncio
async def test_text_is_sanitized_and_truncated() -> None:
    config = ProcessingConfig(max_text_chars=12)

    result = await process_document(
        _document("notes.txt"),
        config=config,
        extractor=_stub_extractor("  <b>History</b> of the world  "),
    )

    assert result.extracted_text == "bHistory/b o"


@pytest.mark.asyncio
async def test_default_learner_name_is_used() -> None:
    result = await process_document(
        _document("unit test.txt"),
        ProcessingContext(learner_name="   "),
        extractor=_stub_extractor("irrelevant"),
    )

    assert result.analysis is not None
    assert result.analysis.learner_name == "Student"


@pytest.mark.asyncio
async def test_custom_markers_flow_through_config() -> None:
    config = ProcessingConfig(marker_patterns=[r"mark\s+scheme"])
    text = "Paper 1\nAnswers\n1. A\nMark Scheme\n1. A"

    result = await process_document(_document("paper.txt"), config=config, extractor=_stub_extractor(text))

    assert result.main_content == "Paper 1\nAnswers\n1. A"
    assert result.answer_key == "Mark Scheme\n1. A"


@pytest.mark.asyncio
async def test_concurrent_invocations_are_independent() -> None:
    first, second = await asyncio.gather(
        process_document(_document("a.txt"), extractor=_stub_extractor(WORKSHEET)),
        process_document(_document("b.txt"), extractor=_stub_extractor("Plain prose only.")),
    )

    assert first.answer_key is not None
    assert second.answer_key is None
    assert second.main_content == "Plain prose only."


def test_sanitize_text_handles_empty_input() -> None:
    assert sanitize_text("") == ""
    assert sanitize_text("  a<b>c  ") == "abc"


def test_result_serialization() -> None:
    result = asyncio.run(process_document(_document(), extractor=_stub_extractor(WORKSHEET)))

    payload = result.to_dict()

    assert payload["status"] == "completed"
    assert payload["analyzed"] is True
    assert payload["analysis"]["learner_name"] == "Student"


@pytest.mark.asyncio
async def test_generated_practice_material_is_flagged() -> None:
    text = (
        "Fractions Practice Test\n\n"
        "1. What is half of 8? ______\n"
        "2. What is a quarter of 12? ______\n"
        "3. Shade one third of the circle. ______\n"
        "4. Which is larger, 1/2 or 1/3? ______\n\n"
        "Answer Key\n1. 4\n2. 3\n3. one of three parts\n4. 1/2"
    )

    generated = await process_document(_document("fractions.txt"), extractor=_stub_extractor(text))
    short = await process_document(_document(), extractor=_stub_extractor(WORKSHEET))

    assert generated.generated_content
    assert generated.to_dict()["generated_content"] is True
    assert not short.generated_content
    assert short.to_dict()["generated_content"] is False


@pytest.mark.asyncio
async def test_failed_result_is_not_flagged_as_generated() -> None:
    result = await process_document(_document(content=b"abc"), extractor=_stub_extractor("unused"))

    assert result.generated_content is False
