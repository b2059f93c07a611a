"""
Check command implementation.

Lexes and parses a program without running it.
"""

import argparse

from qdraw.errors import QdrawError
from qdraw.lang.parser import parse_program
from qdraw.runtime import build_procedure_table

from ..output import print_error, print_program_summary, print_success
from ._loading import read_source, resolve_settings


def cmd_check(args: argparse.Namespace) -> int:
    """Validate a source file and print its procedure summary."""
    settings = resolve_settings(args)
    source = read_source(args.file)

    try:
        program = parse_program(source, settings=settings)
        build_procedure_table(program.procedures)
    except QdrawError as exc:
        print_error(str(exc))
        return 1

    print_success(f"{args.file} is a valid Qdraw program")
    print_program_summary(program)
    return 0
