"""
CLI command modules.

Each module implements one ``qdraw`` subcommand and returns its exit code.
"""

from .check import cmd_check
from .run import cmd_run

__all__ = ["cmd_check", "cmd_run"]
