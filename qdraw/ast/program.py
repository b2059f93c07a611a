"""Top-level AST nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .statements import Block


@dataclass(frozen=True)
class MainBlock:
    """The ``programa { ... }`` block."""

    body: Block
    line: int


@dataclass(frozen=True)
class Procedure:
    """A named, parameterless ``procedimiento``."""

    name: str
    body: Block
    line: int


@dataclass
class Program:
    """Root of a parsed source file."""

    main: Optional[MainBlock] = None
    procedures: List[Procedure] = field(default_factory=list)

    @property
    def procedure_names(self) -> List[str]:
        return [proc.name for proc in self.procedures]


__all__ = ["MainBlock", "Procedure", "Program"]
