"""Activity that runs the document processing pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from temporalio import activity

from ..config import ProcessingConfig
from ..ingestion.errors import InvalidDocumentError
from ..ingestion.models import ProcessingResult, RawDocument
from ..ingestion.pipeline import ProcessingContext, process_document


@activity.defn
async def process_document_activity(
    source_path: str,
    learner_name: str = "",
    mime_type: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Read the source file and return the serialized processing result."""

    file_path = Path(source_path)
    if not file_path.is_file():
        result = ProcessingResult.failure(
            InvalidDocumentError.kind, f"File not found: {file_path}"
        )
        return result.to_dict()

    try:
        document = RawDocument.from_path(file_path, mime_type)
    except OSError as exc:
        result = ProcessingResult.failure(
            InvalidDocumentError.kind, f"Unable to read {file_path}: {exc}"
        )
        return result.to_dict()

    result = await process_document(
        document,
        ProcessingContext(learner_name=learner_name),
        ProcessingConfig.from_payload(config),
    )
    return result.to_dict()


__all__ = ["process_document_activity"]
