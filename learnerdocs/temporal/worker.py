"""Temporal worker entry point for the learnerdocs workflows."""

from __future__ import annotations

import argparse
import asyncio
import logging

from temporalio.client import Client
from temporalio.worker import Worker

from ..activities import detect_document_format_activity, process_document_activity
from ..config import WorkerConfig
from ..workflows import DocumentProcessingWorkflow

logger = logging.getLogger(__name__)


def build_worker(client: Client, task_queue: str) -> Worker:
    return Worker(
        client,
        task_queue=task_queue,
        workflows=[DocumentProcessingWorkflow],
        activities=[
            detect_document_format_activity,
            process_document_activity,
        ],
    )


async def _run_worker(address: str, namespace: str, task_queue: str) -> None:
    client = await Client.connect(address, namespace=namespace)
    logger.info("Worker polling task queue %s on %s/%s", task_queue, address, namespace)
    await build_worker(client, task_queue).run()


def build_parser() -> argparse.ArgumentParser:
    defaults = WorkerConfig()
    parser = argparse.ArgumentParser(
        description="Run the Temporal worker for the learnerdocs workflows",
    )
    parser.add_argument(
        "--address",
        default=defaults.address,
        help="Temporal server address (host:port)",
    )
    parser.add_argument(
        "--namespace",
        default=defaults.namespace,
        help="Temporal namespace",
    )
    parser.add_argument(
        "--task-queue",
        default=defaults.task_queue,
        help="Temporal task queue",
    )
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_run_worker(args.address, args.namespace, args.task_queue))


if __name__ == "__main__":  # pragma: no cover
    main()
