"""Statement nodes of the Qdraw AST.

Statements form a closed set of tagged variants. The executor dispatches on
the concrete class, so adding a variant means extending that dispatch too.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class CommandKind(Enum):
    """Zero-argument board commands."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_RIGHT = "move_right"
    MOVE_LEFT = "move_left"
    PAINT_BLACK = "paint_black"
    PAINT_RED = "paint_red"
    PAINT_GREEN = "paint_green"
    CLEAR = "clear"

    @property
    def is_movement(self) -> bool:
        return self in _MOVEMENTS


_MOVEMENTS = frozenset({
    CommandKind.MOVE_UP,
    CommandKind.MOVE_DOWN,
    CommandKind.MOVE_RIGHT,
    CommandKind.MOVE_LEFT,
})


class Sensor(Enum):
    """Boolean queries about the head's cell."""

    IS_EMPTY = "is_empty"
    IS_PAINTED_BLACK = "is_painted_black"
    IS_PAINTED_RED = "is_painted_red"
    IS_PAINTED_GREEN = "is_painted_green"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    line: int


@dataclass(frozen=True)
class ProcedureCall:
    name: str
    line: int


@dataclass(frozen=True)
class Repeat:
    count: int
    body: "Block"
    line: int


@dataclass(frozen=True)
class If:
    sensor: Sensor
    then_body: "Block"
    else_body: Optional["Block"]
    line: int


Statement = Union[Command, ProcedureCall, Repeat, If]
Block = Tuple[Statement, ...]


def count_statements(block: Block) -> int:
    """Count statements syntactically present in a block, nested ones included."""
    total = 0
    for stmt in block:
        total += 1
        if isinstance(stmt, Repeat):
            total += count_statements(stmt.body)
        elif isinstance(stmt, If):
            total += count_statements(stmt.then_body)
            if stmt.else_body is not None:
                total += count_statements(stmt.else_body)
    return total


__all__ = [
    "CommandKind",
    "Sensor",
    "Command",
    "ProcedureCall",
    "Repeat",
    "If",
    "Statement",
    "Block",
    "count_statements",
]
