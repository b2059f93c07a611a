"""
Output formatting for CLI operations.

Text rendering of boards, run results and program summaries.
"""

import sys
from typing import Dict, List, Optional

from qdraw.ast import Program, count_statements
from qdraw.runtime import Board, Color, ExecutionResult

CELL_SYMBOLS: Dict[Optional[Color], str] = {
    None: ".",
    Color.BLACK: "B",
    Color.RED: "R",
    Color.GREEN: "G",
}


def render_board(board: Board) -> str:
    """
    Render a board as text, top row first, head cell in brackets.

    Examples:
        >>> board = Board(3, 2)
        >>> board.set_color(1, 0, Color.RED)
        >>> print(render_board(board))
         .  .  .
        [.] R  .
    """
    rows: List[str] = []
    for y in reversed(range(board.height)):
        cells = []
        for x in range(board.width):
            symbol = CELL_SYMBOLS[board.get_color(x, y)]
            if (x, y) == board.head:
                cells.append(f"[{symbol}]")
            else:
                cells.append(f" {symbol} ")
        rows.append("".join(cells).rstrip())
    return "\n".join(rows)


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Program is valid")
        ✓ Program is valid
    """
    print(f"✓ {message}")


def print_error(message: str) -> None:
    """Print error message with cross prefix to stderr."""
    print(f"✗ {message}", file=sys.stderr)


def print_result(result: ExecutionResult) -> None:
    if result.success:
        print_success(f"{result.message}, {result.command_count} command(s)")
    elif result.cancelled:
        print_error(f"Cancelled after {result.step_count} steps")
    else:
        print_error(result.message)


def print_program_summary(program: Program) -> None:
    """Print the main block size and the declared procedures."""
    if program.main is None:
        print("No 'programa' block.")
        return
    print(f"programa: {count_statements(program.main.body)} statement(s), line {program.main.line}")
    if not program.procedures:
        print("No procedures defined.")
        return
    print(f"Procedures ({len(program.procedures)}):")
    for proc in program.procedures:
        print(f"  - {proc.name}() line {proc.line}, {count_statements(proc.body)} statement(s)")
