"""Error types and formatting utilities for pluginctl.

Provides the exit-code carrying ``UserError``, clean messages for Pydantic
validation errors, and the last-resort handler used at the CLI boundary.
"""

import yaml
from pydantic import ValidationError
from rich.markup import escape

from pluginctl import cli_logger, exit_codes


class UserError(Exception):
    """An error caused by user input or installation state.

    Carries the exit code the CLI should terminate with.
    """

    def __init__(self, exit_code: int, message: str) -> None:
        """Initialize with an exit code from exit_codes and a message."""
        self.exit_code = exit_code
        self.message = message
        super().__init__(message)


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic ValidationError into clean, user-friendly message.

    Removes Pydantic-specific URLs and technical jargon, producing a message
    suitable for CLI output.

    Args:
        error: The Pydantic ValidationError to format.

    Returns:
        A clean, human-readable error message.
    """
    messages = []

    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"])
        error_type = err["type"]

        if error_type == "missing":
            messages.append(f"'{loc}': field is required")
        elif error_type == "extra_forbidden":
            messages.append(f"'{loc}': unknown field")
        else:
            messages.append(f"'{loc}': {err['msg'].lower()}")

    return "; ".join(messages)


def handle_cli_error(error: Exception) -> int:
    """Handle an unhandled exception at the CLI boundary.

    Formats the error into a clean user-friendly message and returns
    an appropriate exit code, so raw tracebacks never reach the user.

    Args:
        error: The exception to handle.

    Returns:
        An exit code from exit_codes.
    """
    if isinstance(error, UserError):
        cli_logger.error(escape(error.message))
        return error.exit_code

    if isinstance(error, ValidationError):
        cli_logger.error(f"Invalid configuration: {escape(format_validation_errors(error))}")
        return exit_codes.CONFIG

    if isinstance(error, yaml.YAMLError):
        cli_logger.error(f"Invalid YAML: {escape(str(error))}")
        return exit_codes.CONFIG

    if isinstance(error, OSError):
        if error.filename:
            cli_logger.error(f"{escape(str(error.strerror))}: {escape(str(error.filename))}")
        else:
            cli_logger.error(escape(str(error)))
        return exit_codes.IO_ERROR

    cli_logger.error(f"Unexpected error: {escape(str(error))}")
    return exit_codes.GENERAL_ERROR
