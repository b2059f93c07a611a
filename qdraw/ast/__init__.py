"""Dataclasses representing the Qdraw abstract syntax tree."""

from .program import MainBlock, Procedure, Program
from .statements import (
    Block,
    Command,
    CommandKind,
    If,
    ProcedureCall,
    Repeat,
    Sensor,
    Statement,
    count_statements,
)

__all__ = [
    "Program",
    "MainBlock",
    "Procedure",
    "Block",
    "Statement",
    "Command",
    "CommandKind",
    "ProcedureCall",
    "Repeat",
    "If",
    "Sensor",
    "count_statements",
]
