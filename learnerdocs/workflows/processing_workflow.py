"""Temporal workflow that processes one uploaded document."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Optional

from temporalio import workflow
from temporalio.common import RetryPolicy

DETECT_FORMAT_ACTIVITY = "detect_document_format_activity"
PROCESS_DOCUMENT_ACTIVITY = "process_document_activity"
NO_RETRY = RetryPolicy(maximum_attempts=1)


@dataclass
class DocumentProcessingInput:
    """Input payload for the processing workflow."""

    source_path: str
    learner_name: str = ""
    mime_type: Optional[str] = None
    config: Dict[str, Any] = field(default_factory=dict)

    def to_activity_args(self) -> tuple[Any, ...]:
        return (self.source_path, self.learner_name, self.mime_type, self.config)


@workflow.defn
class DocumentProcessingWorkflow:
    """Workflow that detects the document format and then processes it.

    Failures are reported in the returned payload (``status == "failed"``)
    rather than retried, so the caller can record them against the document.
    """

    @workflow.run
    async def run(self, payload: DocumentProcessingInput) -> Dict[str, Any]:
        if not payload.source_path:
            raise ValueError("source_path must be provided in payload")

        detection_result = await workflow.execute_activity(
            DETECT_FORMAT_ACTIVITY,
            args=(payload.source_path, payload.mime_type),
            schedule_to_close_timeout=timedelta(minutes=2),
            retry_policy=NO_RETRY,
        )

        result = await workflow.execute_activity(
            PROCESS_DOCUMENT_ACTIVITY,
            args=payload.to_activity_args(),
            schedule_to_close_timeout=timedelta(minutes=5),
            retry_policy=NO_RETRY,
        )

        return {
            **result,
            "document_format": detection_result["document_format"],
            "source_path": payload.source_path,
        }


__all__ = ["DocumentProcessingInput", "DocumentProcessingWorkflow"]
