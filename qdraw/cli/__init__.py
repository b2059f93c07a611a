"""
Qdraw CLI entry point.

Dispatches the ``run`` and ``check`` subcommands to the command modules.
"""

import argparse
import sys
from typing import List, Optional

from qdraw import __version__
from qdraw.observability import configure_logging

from .commands import cmd_check, cmd_run
from .commands._loading import resolve_settings
from .errors import CLIError, handle_cli_exception

LOG_LEVELS = ['debug', 'info', 'warning', 'error']
SPEEDS = ['instant', 'fast', 'normal', 'slow']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Qdraw - run drawing programs on a grid board",
        prog="qdraw",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--config', default=None, help='Path to a TOML or JSON settings file')
    common.add_argument(
        '--log-level',
        choices=LOG_LEVELS,
        default=None,
        help='Logging level (or set QDRAW_LOG_LEVEL)',
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    run_parser = subparsers.add_parser('run', parents=[common], help='Run a program and print the final board')
    run_parser.add_argument('file', help='Path to the Qdraw source file')
    run_parser.add_argument('--width', type=int, default=8, help='Board width (default: 8)')
    run_parser.add_argument('--height', type=int, default=8, help='Board height (default: 8)')
    run_parser.add_argument('--start', default=None, metavar='X,Y', help='Initial head position (default: 0,0)')
    run_parser.add_argument(
        '--speed',
        choices=SPEEDS,
        default='instant',
        help='Pause after each command (default: instant)',
    )
    run_parser.set_defaults(func=cmd_run)

    check_parser = subparsers.add_parser('check', parents=[common], help='Check a program for errors without running it')
    check_parser.add_argument('file', help='Path to the Qdraw source file')
    check_parser.set_defaults(func=cmd_check)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Returns:
        Process exit code: 0 on success, 1 when the program fails

    Examples:
        >>> main(['check', 'drawing.qd'])  # doctest: +SKIP
        >>> main(['run', 'drawing.qd', '--width', '10', '--start', '2,3'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    try:
        args.settings = resolve_settings(args)
        level = args.log_level or args.settings.log_level
        configure_logging(level.upper())
        return args.func(args)
    except CLIError as exc:
        handle_cli_exception(exc)


__all__ = ["main", "build_parser"]
