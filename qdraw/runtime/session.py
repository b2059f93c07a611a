"""Run lifecycle for a host (editor, command line, tests).

A :class:`ProgramSession` ties compiling, board state transitions and the
before/after snapshots together, the way an editor drives a run.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

from qdraw.ast import Program
from qdraw.config import QdrawSettings, get_settings
from qdraw.errors import BoardStateError, QdrawError
from qdraw.lang.parser import parse_program
from qdraw.observability import get_logger

from .board import Board, BoardSnapshot, ExecutionState
from .executor import ExecutionResult, Executor, Speed, StepObserver, build_procedure_table

logger = get_logger(__name__)


class ProgramSession:
    """Compile and run programs against one board."""

    def __init__(
        self,
        board: Board,
        *,
        settings: Optional[QdrawSettings] = None,
        on_step: Optional[StepObserver] = None,
    ):
        self.board = board
        self.settings = settings or get_settings()
        self.on_step = on_step
        self.executor: Optional[Executor] = None
        self.initial_state: Optional[BoardSnapshot] = None
        self.final_state: Optional[BoardSnapshot] = None
        self.last_result: Optional[ExecutionResult] = None
        self._start_head: Optional[Tuple[int, int]] = None

    @property
    def running(self) -> bool:
        return self.board.state is ExecutionState.RUNNING

    def compile(self, source: str) -> Program:
        """Lex and parse ``source`` and check its procedure table."""
        program = parse_program(source, settings=self.settings)
        build_procedure_table(program.procedures)
        return program

    async def run(self, source: str, speed: Union[Speed, str, int, None] = None) -> ExecutionResult:
        """
        Compile and execute ``source``.

        Compile errors are returned as a failed result and leave the board in
        editing. Runtime failures and cancellations mark the board as error.
        """
        if self.board.state is not ExecutionState.EDITING:
            raise BoardStateError(
                f"Cannot start a run while the board is {self.board.state.value}",
                hint="Reset the board before running again.",
            )

        self.initial_state = self.board.clone_state()
        self.final_state = None
        self._start_head = self.board.head

        try:
            program = self.compile(source)
            self.executor = Executor(
                self.board,
                program,
                on_step=self.on_step,
                speed=speed,
                settings=self.settings,
            )
        except QdrawError as exc:
            logger.info("Compilation failed: %s", exc.code)
            self.last_result = ExecutionResult(success=False, step_count=0, error=exc)
            return self.last_result

        self.board.start_run()
        try:
            result = await self.executor.execute()
        except BaseException:
            self.board.fail()
            raise

        if result.success:
            self.board.finish()
            self.final_state = self.board.clone_state()
        else:
            self.board.fail()
        self.last_result = result
        return result

    def cancel(self) -> bool:
        """Ask the active run to stop. Returns False when nothing is running."""
        if self.executor is None or not self.running:
            return False
        self.executor.cancel()
        return True

    def show_initial(self) -> bool:
        """Put the board back to how it was before the last run."""
        if self.initial_state is None or self.running:
            return False
        self.board.restore_state(self.initial_state)
        return True

    def show_final(self) -> bool:
        """Put the board back to how the last successful run left it."""
        if self.final_state is None or self.running:
            return False
        self.board.restore_state(self.final_state)
        return True

    def reset(self) -> None:
        """Clear the board and put the head back where the last run started."""
        self.board.reset()
        if self._start_head is not None and self.board.in_bounds(*self._start_head):
            self.board.teleport(*self._start_head)
        self.initial_state = None
        self.final_state = None
        self.last_result = None


__all__ = ["ProgramSession"]
