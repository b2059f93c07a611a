"""The Qdraw board: a bounded grid of cell colors plus a head position.

Coordinates are ``(x, y)`` with ``(0, 0)`` the bottom-left cell. ``y`` grows
upwards, so moving up increments it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

from qdraw.ast import CommandKind
from qdraw.config import QdrawSettings, get_settings
from qdraw.errors import BoardError, BoardStateError, BoundaryError


class Color(Enum):
    """Paint colors. An empty cell is ``None``."""

    BLACK = "black"
    RED = "red"
    GREEN = "green"


class ExecutionState(Enum):
    """Lifecycle of a board with respect to program runs."""

    EDITING = "editing"
    RUNNING = "running"
    FINISHED = "finished"
    ERROR = "error"


# Any state may also go back to EDITING
_TRANSITIONS: Dict[ExecutionState, FrozenSet[ExecutionState]] = {
    ExecutionState.EDITING: frozenset({ExecutionState.RUNNING}),
    ExecutionState.RUNNING: frozenset({ExecutionState.FINISHED, ExecutionState.ERROR}),
    ExecutionState.FINISHED: frozenset(),
    ExecutionState.ERROR: frozenset(),
}

# direction -> (dx, dy, name used in messages)
_MOVES: Dict[CommandKind, Tuple[int, int, str]] = {
    CommandKind.MOVE_UP: (0, 1, "up"),
    CommandKind.MOVE_DOWN: (0, -1, "down"),
    CommandKind.MOVE_RIGHT: (1, 0, "right"),
    CommandKind.MOVE_LEFT: (-1, 0, "left"),
}

# Editing tool order: empty -> red -> green -> black -> empty
_CYCLE: Tuple[Optional[Color], ...] = (None, Color.RED, Color.GREEN, Color.BLACK)

Grid = Tuple[Tuple[Optional[Color], ...], ...]


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable copy of the cells and head position of a board."""

    width: int
    height: int
    grid: Grid
    head_x: int
    head_y: int

    def get_color(self, x: int, y: int) -> Optional[Color]:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.grid[y][x]
        return None


class Board:
    """
    Mutable world a program acts on.

    Cell edits from outside a run (:meth:`teleport`, :meth:`cycle_color`) are
    only accepted while the board is in :attr:`ExecutionState.EDITING`.
    """

    def __init__(self, width: int, height: int, *, settings: Optional[QdrawSettings] = None):
        self.settings = settings or get_settings()
        self._validate_size(width, height)
        self.width = width
        self.height = height
        self.grid: List[List[Optional[Color]]] = self._empty_grid()
        self.head_x = 0
        self.head_y = 0
        self.state = ExecutionState.EDITING

    def __repr__(self) -> str:
        return (
            f"Board({self.width}x{self.height}, head=({self.head_x}, {self.head_y}), "
            f"state={self.state.value})"
        )

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def _validate_size(self, width: int, height: int) -> None:
        low, high = self.settings.min_board_size, self.settings.max_board_size
        if not low <= width <= high:
            raise BoardError(f"Invalid width {width}: must be between {low} and {high}")
        if not low <= height <= high:
            raise BoardError(f"Invalid height {height}: must be between {low} and {high}")

    def _empty_grid(self) -> List[List[Optional[Color]]]:
        return [[None] * self.width for _ in range(self.height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    @property
    def head(self) -> Tuple[int, int]:
        return (self.head_x, self.head_y)

    def resize(self, width: int, height: int) -> None:
        """Reallocate an empty grid of the new size and go back to editing."""
        self._validate_size(width, height)
        self.width = width
        self.height = height
        self.grid = self._empty_grid()
        if not self.in_bounds(self.head_x, self.head_y):
            self.head_x, self.head_y = 0, 0
        self.state = ExecutionState.EDITING

    # ------------------------------------------------------------------
    # Cells
    # ------------------------------------------------------------------

    def get_color(self, x: int, y: int) -> Optional[Color]:
        """Color at ``(x, y)``; ``None`` for empty or out-of-bounds cells."""
        if not self.in_bounds(x, y):
            return None
        return self.grid[y][x]

    def set_color(self, x: int, y: int, color: Optional[Color]) -> None:
        self._require_editing("edit cells")
        if not self.in_bounds(x, y):
            raise BoardError(f"Invalid position ({x}, {y})")
        self.grid[y][x] = color

    def painted_cells(self) -> Iterator[Tuple[int, int, Color]]:
        """Yield ``(x, y, color)`` for every painted cell, bottom row first."""
        for y, row in enumerate(self.grid):
            for x, color in enumerate(row):
                if color is not None:
                    yield x, y, color

    # ------------------------------------------------------------------
    # Head commands and sensors
    # ------------------------------------------------------------------

    def move(self, direction: CommandKind, *, line: Optional[int] = None) -> None:
        """Move the head one cell, raising :class:`BoundaryError` at the edge."""
        dx, dy, name = _MOVES[direction]
        new_x, new_y = self.head_x + dx, self.head_y + dy
        if not self.in_bounds(new_x, new_y):
            raise BoundaryError(
                message=(
                    f"BOOM: the head fell off the board trying to move {name} "
                    f"from ({self.head_x}, {self.head_y})"
                ),
                line=line,
                origin=(self.head_x, self.head_y),
                direction=name,
                hint="Check the board size and the number of moves before this line.",
            )
        self.head_x, self.head_y = new_x, new_y

    def paint(self, color: Optional[Color]) -> None:
        """Paint (or with ``None`` clear) the head's cell."""
        self.grid[self.head_y][self.head_x] = color

    def is_empty(self) -> bool:
        return self.get_color(self.head_x, self.head_y) is None

    def is_painted(self, color: Color) -> bool:
        return self.get_color(self.head_x, self.head_y) is color

    # ------------------------------------------------------------------
    # Editing tools
    # ------------------------------------------------------------------

    def _require_editing(self, action: str) -> None:
        if self.state is not ExecutionState.EDITING:
            raise BoardStateError(
                f"Cannot {action} while the board is {self.state.value}",
                hint="Reset the board to go back to editing.",
            )

    def teleport(self, x: int, y: int) -> None:
        """Place the head on ``(x, y)``."""
        self._require_editing("move the head")
        if not self.in_bounds(x, y):
            raise BoardError(f"Invalid position ({x}, {y})")
        self.head_x, self.head_y = x, y

    def cycle_color(self, x: int, y: int) -> Optional[Color]:
        """Advance the cell through empty, red, green, black and back; return the new color."""
        self._require_editing("edit cells")
        current = self.get_color(x, y)
        new_color = _CYCLE[(_CYCLE.index(current) + 1) % len(_CYCLE)]
        self.set_color(x, y, new_color)
        return new_color

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def clone_state(self) -> BoardSnapshot:
        return BoardSnapshot(
            width=self.width,
            height=self.height,
            grid=tuple(tuple(row) for row in self.grid),
            head_x=self.head_x,
            head_y=self.head_y,
        )

    def restore_state(self, snapshot: BoardSnapshot) -> None:
        """Copy a snapshot back into the live board; the state is left alone."""
        if (snapshot.width, snapshot.height) != (self.width, self.height):
            self._validate_size(snapshot.width, snapshot.height)
            self.width, self.height = snapshot.width, snapshot.height
        self.grid = [list(row) for row in snapshot.grid]
        self.head_x, self.head_y = snapshot.head_x, snapshot.head_y

    def reset(self) -> None:
        """Empty grid, head at the origin, back to editing."""
        self.grid = self._empty_grid()
        self.head_x, self.head_y = 0, 0
        self.state = ExecutionState.EDITING

    # ------------------------------------------------------------------
    # Execution state machine
    # ------------------------------------------------------------------

    def transition(self, new_state: ExecutionState) -> None:
        if new_state is ExecutionState.EDITING or new_state in _TRANSITIONS[self.state]:
            self.state = new_state
            return
        raise BoardStateError(
            f"Invalid board state transition: {self.state.value} -> {new_state.value}",
        )

    def start_run(self) -> None:
        self.transition(ExecutionState.RUNNING)

    def finish(self) -> None:
        self.transition(ExecutionState.FINISHED)

    def fail(self) -> None:
        self.transition(ExecutionState.ERROR)


__all__ = [
    "Board",
    "BoardSnapshot",
    "Color",
    "ExecutionState",
]
