"""Command-line interface for processing learner documents."""

from __future__ import annotations

import argparse
import asyncio
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from temporalio.client import Client

from .config import ProcessingConfig
from .ingestion.errors import InvalidDocumentError
from .ingestion.extractor import DocumentExtractor
from .ingestion.models import ProcessingResult, RawDocument
from .ingestion.pipeline import ProcessingContext, process_document
from .utils.cli import (
    build_main_cli_parser,
    configure_logging,
    emit_plain_result,
    render_result,
    use_plain_output,
)
from .workflows import DocumentProcessingInput, DocumentProcessingWorkflow

logger = logging.getLogger(__name__)


def _config_from_args(args: argparse.Namespace) -> ProcessingConfig:
    updates: Dict[str, Any] = {}
    if args.markers:
        updates["marker_patterns"] = list(args.markers)
    if args.keywords:
        updates["content_keywords"] = list(args.keywords)
    if args.filename_keywords:
        updates["filename_keywords"] = list(args.filename_keywords)
    return ProcessingConfig().copy(**updates)


async def _process_local(
    path: Path,
    learner_name: str,
    mime_type: Optional[str],
    config: ProcessingConfig,
    extractor: DocumentExtractor,
) -> Dict[str, Any]:
    if not path.is_file():
        return ProcessingResult.failure(InvalidDocumentError.kind, f"File not found: {path}").to_dict()

    result = await process_document(
        RawDocument.from_path(path, mime_type),
        ProcessingContext(learner_name=learner_name),
        config,
        extractor,
    )
    return result.to_dict()


async def process_paths(
    paths: Sequence[Path],
    learner_name: str = "",
    mime_type: Optional[str] = None,
    config: Optional[ProcessingConfig] = None,
) -> List[Tuple[Path, Dict[str, Any]]]:
    """Process every path concurrently in-process."""

    cfg = config or ProcessingConfig()
    extractor = DocumentExtractor(timeout_seconds=cfg.extraction_timeout_seconds)
    results = await asyncio.gather(
        *(_process_local(path, learner_name, mime_type, cfg, extractor) for path in paths)
    )
    return list(zip(paths, results))


async def process_paths_via_temporal(
    paths: Sequence[Path],
    args: argparse.Namespace,
    config: ProcessingConfig,
) -> List[Tuple[Path, Dict[str, Any]]]:
    """Start one workflow per document and wait for all of them."""

    client = await Client.connect(args.address, namespace=args.namespace)
    handles = []
    for path in paths:
        payload = DocumentProcessingInput(
            source_path=str(path.resolve()),
            learner_name=args.learner,
            mime_type=args.mime_type,
            config=config.to_activity_payload(),
        )
        workflow_id = f"process-{path.stem}-{uuid.uuid4().hex[:8]}"
        handle = await client.start_workflow(
            DocumentProcessingWorkflow.run,
            payload,
            id=workflow_id,
            task_queue=args.task_queue,
        )
        logger.info("Started workflow %s for %s", workflow_id, path)
        handles.append(handle)

    results = await asyncio.gather(*(handle.result() for handle in handles))
    return list(zip(paths, results))


async def run(args: argparse.Namespace, config: Optional[ProcessingConfig] = None) -> int:
    config = config or _config_from_args(args)
    paths = [Path(value).expanduser() for value in args.paths]

    if args.temporal:
        outcomes = await process_paths_via_temporal(paths, args, config)
    else:
        outcomes = await process_paths(paths, args.learner, args.mime_type, config)

    failures = 0
    for path, result in outcomes:
        if result.get("status") != "completed":
            failures += 1
        if args.json or use_plain_output():
            emit_plain_result(path.name, result)
        else:
            render_result(path.name, result)

    return 1 if failures else 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_main_cli_parser()
    args = parser.parse_args(argv)
    try:
        config = _config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))
    configure_logging(args.verbose)
    raise SystemExit(asyncio.run(run(args, config)))


if __name__ == "__main__":  # pragma: no cover
    main()
