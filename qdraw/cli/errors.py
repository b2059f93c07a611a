"""
Error handling for the Qdraw CLI.

Problems with the invocation itself (missing file, bad option value) are
:class:`CLIError` instances. Program diagnostics are
:class:`~qdraw.errors.QdrawError` instances and are printed by the commands.
"""

import sys
from typing import Any, Dict, NoReturn, Optional


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIValidationError(CLIError):
    """Invalid command arguments or options."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_VALIDATION_ERROR')
        super().__init__(message, **kwargs)


class CLIFileNotFoundError(CLIError):
    """The source or config file does not exist or cannot be read."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_FILE_NOT_FOUND')
        super().__init__(message, **kwargs)


def format_cli_error(exc: BaseException) -> str:
    """
    Format exception for CLI display.

    Examples:
        >>> print(format_cli_error(CLIValidationError("Invalid width", hint="Use 1-50")))
        Error [CLI_VALIDATION_ERROR]: Invalid width
        Hint: Use 1-50
    """
    if isinstance(exc, CLIError):
        lines = [f"Error [{exc.code}]: {exc.message}"]
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        return "\n".join(lines)
    return f"Error: {exc.__class__.__name__}: {exc}"


def handle_cli_exception(exc: BaseException, *, exit_code: int = 1) -> NoReturn:
    """Print the error to stderr and exit."""
    print(format_cli_error(exc), file=sys.stderr)
    sys.exit(exit_code)
