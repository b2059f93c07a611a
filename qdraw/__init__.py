"""
Qdraw: a teaching language that moves a head over a grid and paints cells.

Example:
    ```python
    import asyncio
    from qdraw import Board, Executor, parse_program

    board = Board(8, 8)
    program = parse_program("programa { repetir 5 veces { PintarRojo MoverDerecha } }")
    result = asyncio.run(Executor(board, program, speed="instant").execute())
    print(result.message)
    ```
"""

__version__ = "1.0.0"

from .config import QdrawSettings, get_settings, load_settings
from .errors import (
    BoardError,
    BoardStateError,
    BoundaryError,
    DuplicateProcedureError,
    ExecutionCancelled,
    LexError,
    QdrawError,
    QdrawRuntimeError,
    QdrawSyntaxError,
    RecursionLimitError,
    RepeatLimitError,
    StepLimitError,
    UnknownProcedureError,
    extract_line,
)
from .lang.parser import parse_program, tokenize
from .runtime import (
    Board,
    BoardSnapshot,
    Color,
    ExecutionResult,
    ExecutionState,
    Executor,
    ProgramSession,
    Speed,
)

__all__ = [
    "__version__",
    "QdrawSettings",
    "get_settings",
    "load_settings",
    "QdrawError",
    "LexError",
    "QdrawSyntaxError",
    "DuplicateProcedureError",
    "QdrawRuntimeError",
    "BoundaryError",
    "UnknownProcedureError",
    "RecursionLimitError",
    "StepLimitError",
    "RepeatLimitError",
    "ExecutionCancelled",
    "BoardError",
    "BoardStateError",
    "extract_line",
    "tokenize",
    "parse_program",
    "Board",
    "BoardSnapshot",
    "Color",
    "ExecutionState",
    "Executor",
    "ExecutionResult",
    "ProgramSession",
    "Speed",
]
