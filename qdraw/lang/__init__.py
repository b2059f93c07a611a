"""Qdraw language definition helpers."""

from .keywords import (
    ALL_WORDS,
    COMMAND_WORDS,
    SENSOR_WORDS,
    STRUCTURE_WORDS,
    suggest_word,
)

__all__ = [
    "COMMAND_WORDS",
    "SENSOR_WORDS",
    "STRUCTURE_WORDS",
    "ALL_WORDS",
    "suggest_word",
]
