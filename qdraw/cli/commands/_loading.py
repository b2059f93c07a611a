"""Shared helpers for loading sources and settings from command arguments."""

import argparse
from pathlib import Path

from pydantic import ValidationError

from qdraw.config import QdrawSettings, get_settings, load_settings

from ..errors import CLIFileNotFoundError, CLIValidationError


def read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.is_file():
        raise CLIFileNotFoundError(
            f"Source file not found: {path}",
            hint="Pass the path to a Qdraw program, for example: qdraw run drawing.qd",
        )
    try:
        return source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CLIFileNotFoundError(f"Cannot read {path}: {exc}") from exc


def resolve_settings(args: argparse.Namespace) -> QdrawSettings:
    """Settings from ``--config`` when given, otherwise the process defaults."""
    resolved = getattr(args, "settings", None)
    if resolved is not None:
        return resolved
    config = getattr(args, "config", None)
    if not config:
        return get_settings()
    if not Path(config).is_file():
        raise CLIFileNotFoundError(f"Config file not found: {config}")
    try:
        return load_settings(config)
    except (ValidationError, ValueError) as exc:
        raise CLIValidationError(f"Invalid config file {config}", hint=str(exc)) from exc
