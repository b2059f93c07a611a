"""Tree-walking executor for Qdraw programs.

The executor walks the AST depth-first, left-to-right, against a
:class:`~qdraw.runtime.board.Board`. Procedure bodies, loop iterations and
branches are pushed on an explicit frame stack instead of the Python call
stack, so deeply recursive Qdraw programs are bounded only by the configured
recursion limit.

After every command the optional step observer is called and the run pauses
for the configured speed; this pause is the only suspension point.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Set, Union

from qdraw.ast import (
    Block,
    Command,
    CommandKind,
    If,
    Procedure,
    ProcedureCall,
    Program,
    Repeat,
    Sensor,
    Statement,
)
from qdraw.config import QdrawSettings, get_settings
from qdraw.errors import (
    DuplicateProcedureError,
    ExecutionCancelled,
    QdrawError,
    QdrawSyntaxError,
    RepeatLimitError,
    UnknownProcedureError,
)
from qdraw.lang.keywords import suggest_word
from qdraw.observability import get_logger

from .board import Board, Color
from .state import ExecutionContext

logger = get_logger(__name__)

StepObserver = Callable[[], None]


class Speed(Enum):
    """Named animation speeds."""

    INSTANT = "instant"
    FAST = "fast"
    NORMAL = "normal"
    SLOW = "slow"


# Numeric speed selector values used by the original editor UI
SPEED_CODES: Dict[int, Speed] = {
    0: Speed.INSTANT,
    1: Speed.SLOW,
    3: Speed.NORMAL,
    7: Speed.FAST,
}

_PAINT_COLORS: Dict[CommandKind, Optional[Color]] = {
    CommandKind.PAINT_BLACK: Color.BLACK,
    CommandKind.PAINT_RED: Color.RED,
    CommandKind.PAINT_GREEN: Color.GREEN,
    CommandKind.CLEAR: None,
}

_SENSOR_COLORS: Dict[Sensor, Color] = {
    Sensor.IS_PAINTED_BLACK: Color.BLACK,
    Sensor.IS_PAINTED_RED: Color.RED,
    Sensor.IS_PAINTED_GREEN: Color.GREEN,
}


def resolve_speed(value: Union[Speed, str, int, None], *, settings: Optional[QdrawSettings] = None) -> Speed:
    """
    Turn a speed selector into a :class:`Speed`.

    Accepts a ``Speed``, a name (``"fast"``), or a numeric code (``0``, ``1``,
    ``3``, ``7``, also as strings). ``None`` selects the configured default.
    Anything else falls back to ``Speed.NORMAL``.
    """
    if value is None:
        return Speed((settings or get_settings()).default_speed)
    if isinstance(value, Speed):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value in SPEED_CODES:
        return SPEED_CODES[value]
    if isinstance(value, str):
        text = value.strip().lower()
        for speed in Speed:
            if speed.value == text:
                return speed
        if text.isdigit() and int(text) in SPEED_CODES:
            return SPEED_CODES[int(text)]

    logger.warning("Unrecognized speed %r, using %s", value, Speed.NORMAL.value)
    return Speed.NORMAL


@dataclass
class ExecutionResult:
    """Terminal outcome of one run."""

    success: bool
    step_count: int
    command_count: int = 0
    error: Optional[QdrawError] = None

    @property
    def message(self) -> str:
        if self.error is None:
            return f"Execution completed successfully ({self.step_count} steps)"
        return str(self.error)

    @property
    def line(self) -> Optional[int]:
        return self.error.line if self.error is not None else None

    @property
    def cancelled(self) -> bool:
        return isinstance(self.error, ExecutionCancelled)


@dataclass
class _Frame:
    """A block being executed; ``remaining`` counts iterations left including the current one."""

    body: Block
    index: int = 0
    remaining: int = 1
    procedure: Optional[str] = None


def build_procedure_table(procedures: List[Procedure]) -> Dict[str, Procedure]:
    """Map names to procedures, rejecting duplicate names."""
    table: Dict[str, Procedure] = {}
    for proc in procedures:
        first = table.get(proc.name)
        if first is not None:
            raise DuplicateProcedureError(
                message=f"Procedure '{proc.name}' is already defined",
                line=proc.line,
                name=proc.name,
                first_line=first.line,
                hint="Each procedure needs a unique name. Rename one of the two procedures.",
            )
        table[proc.name] = proc
    return table


def _mark_inert(block: Block, inert: Set[int]) -> bool:
    """Record loops that would execute no statement at all; return whether ``block`` is one."""
    block_inert = True
    for stmt in block:
        if isinstance(stmt, Repeat):
            if _mark_inert(stmt.body, inert):
                inert.add(id(stmt))
                continue
        elif isinstance(stmt, If):
            _mark_inert(stmt.then_body, inert)
            if stmt.else_body is not None:
                _mark_inert(stmt.else_body, inert)
        block_inert = False
    return block_inert


class Executor:
    """
    Run a parsed program against a board.

    Example:
        ```python
        board = Board(8, 8)
        executor = Executor(board, parse_program(source), speed="instant")
        steps = await executor.run()
        ```
    """

    def __init__(
        self,
        board: Board,
        program: Program,
        *,
        on_step: Optional[StepObserver] = None,
        speed: Union[Speed, str, int, None] = None,
        settings: Optional[QdrawSettings] = None,
    ):
        if program.main is None:
            raise QdrawSyntaxError(
                message="Missing 'programa' block",
                expected=["'programa'"],
                hint="Every Qdraw file needs a main block. Example: programa { MoverArriba }",
            )

        self.board = board
        self.program = program
        self.on_step = on_step
        self.settings = settings or get_settings()
        self.speed = resolve_speed(speed, settings=self.settings)
        self.procedures = build_procedure_table(program.procedures)
        self.context = ExecutionContext(
            max_steps=self.settings.max_execution_steps,
            max_depth=self.settings.max_recursion_depth,
        )
        self._cancelled = False
        self._inert: Set[int] = set()
        _mark_inert(program.main.body, self._inert)
        for proc in self.procedures.values():
            _mark_inert(proc.body, self._inert)

    @property
    def delay_seconds(self) -> float:
        return self.settings.speed_delays_ms[self.speed.value] / 1000

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Request a stop; honoured before the next statement."""
        self._cancelled = True

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    async def execute(self) -> ExecutionResult:
        """Run the program and report the outcome instead of raising."""
        try:
            step_count = await self.run()
        except QdrawError as exc:
            return ExecutionResult(
                success=False,
                step_count=self.context.step_count,
                command_count=self.context.command_count,
                error=exc,
            )
        return ExecutionResult(
            success=True,
            step_count=step_count,
            command_count=self.context.command_count,
        )

    async def run(self) -> int:
        """Run the main block to completion and return the number of steps executed."""
        main = self.program.main
        if main is None:
            raise QdrawSyntaxError(message="Missing 'programa' block", expected=["'programa'"])
        self.context = ExecutionContext(
            max_steps=self.settings.max_execution_steps,
            max_depth=self.settings.max_recursion_depth,
        )
        logger.debug(
            "Starting run: %d procedure(s), speed=%s, board=%r",
            len(self.procedures), self.speed.value, self.board,
        )

        frames: List[_Frame] = [_Frame(main.body)]
        try:
            while frames:
                frame = frames[-1]
                if frame.index >= len(frame.body):
                    frame.remaining -= 1
                    if frame.remaining > 0:
                        frame.index = 0
                        continue
                    frames.pop()
                    if frame.procedure is not None:
                        self.context.exit_call()
                    continue

                stmt = frame.body[frame.index]
                frame.index += 1
                await self._execute_statement(stmt, frames)
        except ExecutionCancelled:
            logger.info("Run cancelled after %d steps", self.context.step_count)
            raise
        except QdrawError as exc:
            logger.info("Run failed after %d steps: %s", self.context.step_count, exc.code)
            raise
        finally:
            # A stop request only applies to the run it interrupted
            self._cancelled = False
            # Unwind procedure frames left by an aborted run
            for frame in reversed(frames):
                if frame.procedure is not None:
                    self.context.exit_call()

        logger.info(
            "Run finished: %d steps, %d commands",
            self.context.step_count, self.context.command_count,
        )
        return self.context.step_count

    async def _execute_statement(self, stmt: Statement, frames: List[_Frame]) -> None:
        if self._cancelled:
            raise ExecutionCancelled(message="Execution stopped by the user", line=stmt.line)

        if isinstance(stmt, Repeat):
            # Loops are containers: their body statements are what gets counted
            self._check_repeat(stmt)
            if stmt.count > 0 and id(stmt) not in self._inert:
                frames.append(_Frame(stmt.body, remaining=stmt.count))
            return

        self.context.step(stmt.line)

        if isinstance(stmt, Command):
            await self._execute_command(stmt)
        elif isinstance(stmt, ProcedureCall):
            proc = self._resolve(stmt)
            self.context.enter_call(stmt.name, stmt.line)
            frames.append(_Frame(proc.body, procedure=proc.name))
        elif isinstance(stmt, If):
            body = stmt.then_body if self._evaluate(stmt.sensor) else stmt.else_body
            if body:
                frames.append(_Frame(body))
        else:
            raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    async def _execute_command(self, stmt: Command) -> None:
        if stmt.kind.is_movement:
            self.board.move(stmt.kind, line=stmt.line)
        else:
            self.board.paint(_PAINT_COLORS[stmt.kind])
        self.context.command_count += 1

        if self.on_step is not None:
            self.on_step()
        await self._pause()

    async def _pause(self) -> None:
        await asyncio.sleep(self.delay_seconds)

    def _check_repeat(self, stmt: Repeat) -> None:
        limit = self.settings.max_repeat_count
        if stmt.count > limit:
            raise RepeatLimitError(
                message=f"Too many repetitions ({stmt.count})",
                line=stmt.line,
                count=stmt.count,
                limit=limit,
                hint=f"The limit is {limit}. If you need more iterations, check your logic.",
            )
        if stmt.count > 0 and id(stmt) in self._inert:
            for inner in stmt.body:
                self._check_repeat(inner)  # type: ignore[arg-type]

    def _resolve(self, stmt: ProcedureCall) -> Procedure:
        proc = self.procedures.get(stmt.name)
        if proc is not None:
            return proc

        available = list(self.procedures)
        suggestion = suggest_word(stmt.name, available, cutoff=0.6)
        raise UnknownProcedureError(
            message=f"Procedure '{stmt.name}' does not exist",
            line=stmt.line,
            name=stmt.name,
            available=available,
            hint=f"Did you mean '{suggestion}'?" if suggestion else None,
        )

    def _evaluate(self, sensor: Sensor) -> bool:
        if sensor is Sensor.IS_EMPTY:
            return self.board.is_empty()
        return self.board.is_painted(_SENSOR_COLORS[sensor])


__all__ = [
    "Executor",
    "ExecutionResult",
    "Speed",
    "SPEED_CODES",
    "StepObserver",
    "build_procedure_table",
    "resolve_speed",
]
