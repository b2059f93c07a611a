"""Unified error model for Qdraw.

Every failure surfaced to a user is a :class:`QdrawError` carrying:
- the source line (and column when known) it originated from
- a short machine-readable error code
- an optional hint with a corrective example

Errors render as ``Line N: message`` followed by indented detail lines, so a
host can recover the line number with :func:`extract_line`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

LINE_PATTERN = re.compile(r"^Line (\d+)")


@dataclass(eq=False)
class QdrawError(Exception):
    """Base class for all Qdraw errors."""

    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    code: str = "QDRAW_ERROR"
    hint: Optional[str] = None

    def details(self) -> List[str]:
        """Extra lines rendered under the headline."""
        return []

    def __str__(self) -> str:
        headline = self.message
        if self.line is not None:
            headline = f"Line {self.line}: {self.message}"

        details = self.details()
        if self.hint:
            details.append(f"Hint: {self.hint}")

        if details:
            return headline + "\n  " + "\n  ".join(details)
        return headline


@dataclass(eq=False)
class LexError(QdrawError):
    """Raised when the source text cannot be split into tokens."""

    code: str = "LEX_ERROR"


@dataclass(eq=False)
class QdrawSyntaxError(QdrawError):
    """Syntax error with expected/found information."""

    expected: List[str] = field(default_factory=list)
    found: Optional[str] = None
    code: str = "SYNTAX_ERROR"

    def details(self) -> List[str]:
        details = []
        if self.expected:
            if len(self.expected) == 1:
                details.append(f"Expected: {self.expected[0]}")
            else:
                details.append(f"Expected one of: {', '.join(self.expected)}")
        if self.found is not None:
            details.append(f"Found: '{self.found}'")
        return details


@dataclass(eq=False)
class DuplicateProcedureError(QdrawError):
    """Two procedures share a name."""

    name: Optional[str] = None
    first_line: Optional[int] = None
    code: str = "DUPLICATE_PROCEDURE"

    def details(self) -> List[str]:
        details = []
        if self.first_line is not None:
            details.append(f"First definition: line {self.first_line}")
        return details


@dataclass(eq=False)
class BoardError(QdrawError):
    """Invalid board dimensions or coordinates."""

    code: str = "BOARD_ERROR"


@dataclass(eq=False)
class BoardStateError(BoardError):
    """An operation is not allowed in the board's current execution state."""

    code: str = "BOARD_STATE_ERROR"


@dataclass(eq=False)
class QdrawRuntimeError(QdrawError):
    """Base class for faults raised while a program runs."""

    code: str = "RUNTIME_ERROR"


@dataclass(eq=False)
class BoundaryError(QdrawRuntimeError):
    """The head tried to leave the board."""

    origin: Optional[Tuple[int, int]] = None
    direction: Optional[str] = None
    code: str = "BOOM"


@dataclass(eq=False)
class UnknownProcedureError(QdrawRuntimeError):
    """A call names a procedure that was never defined."""

    name: Optional[str] = None
    available: List[str] = field(default_factory=list)
    code: str = "UNKNOWN_PROCEDURE"

    def details(self) -> List[str]:
        if self.available:
            details = [f"Available procedures: {', '.join(self.available)}"]
        else:
            details = ["No procedures are defined."]
        details.extend([
            "Make sure that:",
            "  1. the procedure is declared with 'procedimiento'",
            "  2. the name is spelled exactly the same (case matters)",
            f"  3. it is called with parentheses: {self.name}()",
        ])
        return details


@dataclass(eq=False)
class RecursionLimitError(QdrawRuntimeError):
    """Nested procedure calls went deeper than allowed."""

    limit: Optional[int] = None
    call_stack: List[str] = field(default_factory=list)
    code: str = "RECURSION_LIMIT"

    def details(self) -> List[str]:
        return [f"Call stack: {' -> '.join(self.call_stack)}"]


@dataclass(eq=False)
class StepLimitError(QdrawRuntimeError):
    """The program executed more statements than allowed."""

    limit: Optional[int] = None
    code: str = "STEP_LIMIT"


@dataclass(eq=False)
class RepeatLimitError(QdrawRuntimeError):
    """A 'repetir' count is above the runtime cap."""

    count: Optional[int] = None
    limit: Optional[int] = None
    code: str = "REPEAT_LIMIT"


@dataclass(eq=False)
class ExecutionCancelled(QdrawError):
    """The user stopped the run. Not a program fault."""

    code: str = "CANCELLED"


def extract_line(text: str) -> Optional[int]:
    """Return the line number at the start of a rendered error, if any."""
    match = LINE_PATTERN.match(text)
    if match is None:
        return None
    return int(match.group(1))


__all__ = [
    "QdrawError",
    "LexError",
    "QdrawSyntaxError",
    "DuplicateProcedureError",
    "BoardError",
    "BoardStateError",
    "QdrawRuntimeError",
    "BoundaryError",
    "UnknownProcedureError",
    "RecursionLimitError",
    "StepLimitError",
    "RepeatLimitError",
    "ExecutionCancelled",
    "LINE_PATTERN",
    "extract_line",
]
