"""Board model and executor for Qdraw programs."""

from .board import Board, BoardSnapshot, Color, ExecutionState
from .executor import (
    SPEED_CODES,
    ExecutionResult,
    Executor,
    Speed,
    StepObserver,
    build_procedure_table,
    resolve_speed,
)
from .session import ProgramSession
from .state import ExecutionContext

__all__ = [
    "Board",
    "BoardSnapshot",
    "Color",
    "ExecutionState",
    "ExecutionContext",
    "Executor",
    "ExecutionResult",
    "Speed",
    "SPEED_CODES",
    "StepObserver",
    "build_procedure_table",
    "resolve_speed",
    "ProgramSession",
]
