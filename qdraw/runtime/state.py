"""Per-run bookkeeping for the executor."""

from __future__ import annotations

from typing import List, Optional

from qdraw.errors import RecursionLimitError, StepLimitError


class ExecutionContext:
    """Track step count, call stack and limits for one run."""

    def __init__(self, max_steps: int = 100_000, max_depth: int = 1000):
        self.max_steps = max_steps
        self.max_depth = max_depth
        self.step_count = 0
        self.command_count = 0
        self.call_stack: List[str] = []

    @property
    def depth(self) -> int:
        return len(self.call_stack)

    def step(self, line: Optional[int] = None) -> None:
        """Count one statement about to run, failing if the cap is already used up."""
        if self.step_count >= self.max_steps:
            raise StepLimitError(
                message=f"Execution limit exceeded ({self.max_steps} steps)",
                line=line,
                limit=self.max_steps,
                hint="Possible infinite loop or very long program. "
                "Check your 'repetir' loops and recursive calls.",
            )
        self.step_count += 1

    def enter_call(self, name: str, line: Optional[int] = None) -> None:
        """Push a procedure name, failing if the stack is already full."""
        if len(self.call_stack) >= self.max_depth:
            raise RecursionLimitError(
                message=f"Recursion depth exceeded in '{name}' (limit: {self.max_depth})",
                line=line,
                limit=self.max_depth,
                call_stack=self.call_stack + [name],
                hint="A procedure keeps calling itself (or others) without stopping.",
            )
        self.call_stack.append(name)

    def exit_call(self) -> None:
        if self.call_stack:
            self.call_stack.pop()


__all__ = ["ExecutionContext"]
