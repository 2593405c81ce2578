"""Standardized CLI error codes and error handling.

Every failure in the launcher is terminal for the current invocation: it is
raised as a ``CLIError`` subclass, reported once, and mapped to an exit code.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional


class ExitCode(IntEnum):
    """Standard CLI exit codes."""
    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    CONFIG_ERROR = 3
    NOT_FOUND = 6
    ALREADY_EXISTS = 8
    IO_ERROR = 9
    LAUNCH_ERROR = 10
    DIALOG_ERROR = 11
    INTERRUPTED = 130  # Standard for Ctrl+C


@dataclass
class CLIError(Exception):
    """CLI error with exit code and message."""
    message: str
    code: ExitCode = ExitCode.ERROR
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class UsageError(CLIError):
    """Usage/argument error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.USAGE, hint)


class MissingInputError(UsageError):
    """A required flag or value was not supplied."""


class UnsupportedError(UsageError):
    """Shortcut is restricted to other executables."""


class NotFoundError(CLIError):
    """Resource not found error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.NOT_FOUND, hint)


class ConfigNotFoundError(NotFoundError):
    """The configuration file does not exist."""


class ConfigError(CLIError):
    """Configuration-related error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.CONFIG_ERROR, hint)


class ConfigParseError(ConfigError):
    """The configuration file is malformed."""


class AlreadyExistsError(CLIError):
    """A named entry already exists and will not be overwritten."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.ALREADY_EXISTS, hint)


class ConfigIOError(CLIError):
    """Filesystem failure while reading or writing configuration."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.IO_ERROR, hint)


class LaunchError(CLIError):
    """The child process could not be spawned."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.LAUNCH_ERROR, hint)


class DialogError(CLIError):
    """A GUI dialog failed or was cancelled."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.DIALOG_ERROR, hint)


def _stderr_report(message: str) -> None:
    print(message, file=sys.stderr)


def format_error(error: CLIError) -> str:
    """Render an error and its hint as the user sees them."""
    text = f"Error: {error.message}"
    if error.hint:
        text += f"\nHint: {error.hint}"
    return text


def handle_error(
    error: BaseException,
    verbose: bool = False,
    report: Optional[Callable[[str], None]] = None,
) -> int:
    """Handle an exception and return appropriate exit code.

    Args:
        error: The exception to handle.
        verbose: If True, print stack trace for unexpected errors.
        report: Callable receiving the rendered message (defaults to stderr).

    Returns:
        Exit code to use.
    """
    report = report or _stderr_report
    if isinstance(error, CLIError):
        report(format_error(error))
        return int(error.code)

    if isinstance(error, KeyboardInterrupt):
        _stderr_report("\nInterrupted.")
        return int(ExitCode.INTERRUPTED)

    # Unexpected error
    report(f"Error: {error}")
    if verbose:
        import traceback
        traceback.print_exception(type(error), error, error.__traceback__)
    return int(ExitCode.ERROR)

