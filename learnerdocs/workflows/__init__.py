"""Workflow package exposing public Temporal workflows."""

from .processing_workflow import DocumentProcessingInput, DocumentProcessingWorkflow

__all__ = [
    "DocumentProcessingInput",
    "DocumentProcessingWorkflow",
]
