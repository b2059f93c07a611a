"""Logging helpers shared by the interpreter and the command line."""

from __future__ import annotations

from .logging import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
]
