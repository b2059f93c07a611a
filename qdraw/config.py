"""Interpreter settings for Qdraw.

Settings are loaded from ``QDRAW_*`` environment variables, from an optional
TOML or JSON file, or passed explicitly. All safety limits of the interpreter
live here.
"""

from __future__ import annotations

import json
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal, Union

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SpeedName = Literal["instant", "fast", "normal", "slow"]

DEFAULT_SPEED_DELAYS_MS: Dict[str, int] = {
    "instant": 0,
    "fast": 30,
    "normal": 150,
    "slow": 500,
}


class QdrawSettings(BaseSettings):
    """
    Runtime limits and defaults.

    Environment variables use the ``QDRAW_`` prefix, for example
    ``QDRAW_MAX_EXECUTION_STEPS=5000``.
    """

    model_config = SettingsConfigDict(
        env_prefix="QDRAW_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Executor
    max_execution_steps: int = Field(default=100_000, ge=1, description="Statements executed before aborting")
    max_recursion_depth: int = Field(default=1000, ge=1, description="Maximum nested procedure calls")
    max_repeat_count: int = Field(default=10_000, ge=0, description="Largest count accepted by 'repetir'")

    # Lexer
    max_number_literal: int = Field(default=1_000_000, ge=0, description="Largest integer literal")

    # Parser
    max_nesting_depth: int = Field(
        default=100, ge=1, le=150, description="Deepest chain of nested blocks, counting the outermost one"
    )

    # Board
    min_board_size: int = Field(default=1, ge=1, description="Smallest board side")
    max_board_size: int = Field(default=50, ge=1, description="Largest board side")

    # Pacing
    default_speed: SpeedName = Field(default="normal", description="Speed used when none is given")
    speed_delays_ms: Dict[SpeedName, int] = Field(
        default_factory=lambda: dict(DEFAULT_SPEED_DELAYS_MS),
        description="Pause after each command, per speed",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level used by the command line",
    )

    @model_validator(mode="after")
    def _check_consistency(self) -> "QdrawSettings":
        if self.min_board_size > self.max_board_size:
            raise ValueError("min_board_size must not exceed max_board_size")
        missing = set(DEFAULT_SPEED_DELAYS_MS) - set(self.speed_delays_ms)
        if missing:
            raise ValueError(f"speed_delays_ms is missing: {', '.join(sorted(missing))}")
        if any(delay < 0 for delay in self.speed_delays_ms.values()):
            raise ValueError("speed delays must not be negative")
        return self


@lru_cache(maxsize=1)
def get_settings() -> QdrawSettings:
    """Return the process-wide default settings."""
    return QdrawSettings()


def _read_config_file(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        data = json.loads(content)
    else:
        data = tomllib.loads(content)
        # [qdraw] table or top-level keys
        data = data.get("qdraw", data)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a table of settings")
    return data


def load_settings(path: Union[str, Path, None] = None, **overrides: Any) -> QdrawSettings:
    """
    Build settings from an optional TOML/JSON file plus keyword overrides.

    Values given explicitly win over file values, which win over the
    environment.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        data.update(_read_config_file(Path(path)))
    data.update(overrides)
    return QdrawSettings(**data)


__all__ = [
    "QdrawSettings",
    "SpeedName",
    "DEFAULT_SPEED_DELAYS_MS",
    "get_settings",
    "load_settings",
]
