"""
Run command implementation.

Runs a program on a fresh board and prints the final board.
"""

import argparse
import asyncio
from typing import Tuple

from qdraw.errors import BoardError
from qdraw.observability import get_logger
from qdraw.runtime import Board, ProgramSession

from ..errors import CLIValidationError
from ..output import print_result, render_board
from ._loading import read_source, resolve_settings

logger = get_logger(__name__)


def parse_start(value: str) -> Tuple[int, int]:
    """
    Parse a ``X,Y`` head position.

    Examples:
        >>> parse_start("2,3")
        (2, 3)
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise CLIValidationError(
            f"Invalid start position '{value}'",
            hint="Use X,Y with the origin at the bottom-left cell, for example --start 0,0",
        )
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise CLIValidationError(
            f"Invalid start position '{value}'",
            hint="Both coordinates must be whole numbers, for example --start 2,3",
        ) from exc


def cmd_run(args: argparse.Namespace) -> int:
    """Execute a source file and print the outcome and the final board."""
    settings = resolve_settings(args)
    source = read_source(args.file)

    try:
        board = Board(args.width, args.height, settings=settings)
        if args.start:
            board.teleport(*parse_start(args.start))
    except BoardError as exc:
        raise CLIValidationError(str(exc)) from exc

    session = ProgramSession(board, settings=settings)
    logger.debug("Running %s on %r", args.file, board)
    result = asyncio.run(session.run(source, speed=args.speed))

    print_result(result)
    print(render_board(board))
    return 0 if result.success else 1
