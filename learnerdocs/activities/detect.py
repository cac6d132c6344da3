"""Activity that detects the format of an uploaded document."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from temporalio import activity

from ..ingestion.detector import detect_path_format


@activity.defn
async def detect_document_format_activity(
    source_path: str,
    mime_type: Optional[str] = None,
) -> Dict[str, Any]:
    """Detect the document format for the provided source file."""

    detected = detect_path_format(Path(source_path), mime_type)

    return {
        "document_format": detected.value,
    }


__all__ = ["detect_document_format_activity"]
