"""Temporal-specific entry points and helpers."""

from .worker import build_parser, build_worker, main

__all__ = ["build_parser", "build_worker", "main"]
