"""CLI output utilities for consistent messaging.

Output is filtered by a process-wide verbosity level. Errors are always shown.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

_console = Console(soft_wrap=True, highlight=False)


class Verbosity(IntEnum):
    """How much output the CLI emits."""

    SILENT = 0
    NORMAL = 1
    VERBOSE = 2


_verbosity = Verbosity.NORMAL


def set_verbosity(level: Verbosity) -> None:
    """Set the verbosity used by all subsequent output calls."""
    global _verbosity
    _verbosity = level


def success(message: str) -> None:
    """Print a success message with green checkmark."""
    if _verbosity >= Verbosity.NORMAL:
        _console.print(f"[green]✓[/green] {message}")


def error(message: str) -> None:
    """Print an error message with red X."""
    _console.print(f"[red]✗[/red] {message}")


def info(message: str) -> None:
    """Print an info message (no prefix)."""
    if _verbosity >= Verbosity.NORMAL:
        _console.print(message)


def dim(message: str) -> None:
    """Print a dimmed message (for secondary info)."""
    if _verbosity >= Verbosity.NORMAL:
        _console.print(f"[dim]{message}[/dim]")


def verbose(message: str) -> None:
    """Print a diagnostic message, only in verbose mode."""
    if _verbosity >= Verbosity.VERBOSE:
        _console.print(f"[dim]{message}[/dim]")


def plain(message: str) -> None:
    """Print text with markup escaped, at normal verbosity."""
    info(escape(message))


def plain_verbose(message: str) -> None:
    """Print text with markup escaped, only in verbose mode."""
    verbose(escape(message))
