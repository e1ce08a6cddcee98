import logging
from typing import Any

from rich.console import Console
from rich.panel import Panel

logger = logging.getLogger(__name__)


class LshSigError(Exception):
    """Base exception class for lshsig."""

    pass


class InvalidParameterError(LshSigError, ValueError):
    """Raised when a parameter value is outside its allowed domain."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {field}: {value!r} ({reason})")


class InputReadError(LshSigError):
    """Raised when input rows cannot be read."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Failed to read {path}: {message}")


class NonConstantParameterError(LshSigError, ValueError):
    """Raised when a parameter bound as constant differs across rows."""

    def __init__(self, field: str, first: Any = None, other: Any = None, row: int = -1):
        self.field = field
        self.first = first
        self.other = other
        self.row = row
        message = f"Parameter {field} must be constant across the batch"
        if row >= 0:
            message += f" (row 0 has {first!r}, row {row} has {other!r})"
        super().__init__(message)


def handle_error(console: Console, error: Exception) -> int:
    """Handle errors with user-friendly messages."""
    error_msg = format_error_message(error)
    panel = Panel(
        error_msg,
        title="Error",
        border_style="red",
        padding=(1, 2),
    )
    console.print(panel)

    if isinstance(error, InvalidParameterError):
        logger.error("Invalid parameter: %s", error)
        return 2
    elif isinstance(error, NonConstantParameterError):
        logger.error("Non-constant parameter: %s", error)
        return 3
    elif isinstance(error, InputReadError):
        logger.error("Input read failed: %s", error)
        return 4
    elif isinstance(error, LshSigError):
        logger.error("Operation failed: %s", error)
        return 4
    else:
        logger.exception("Unexpected error")
        return 1


def format_error_message(error: Exception) -> str:
    """Format error message for display."""
    if isinstance(error, InvalidParameterError):
        return (
            f"[red]Invalid parameter[/red]\n"
            f"Field: {error.field}\n"
            f"Value: {error.value!r}\n"
            f"Reason: {error.reason}"
        )
    elif isinstance(error, NonConstantParameterError):
        message = f"[red]Parameter is not constant[/red]\nField: {error.field}"
        if error.row >= 0:
            message += (
                f"\nRow 0: {error.first!r}\n"
                f"Row {error.row}: {error.other!r}"
            )
        return message
    elif isinstance(error, InputReadError):
        return f"[red]Could not read input[/red]\nPath: {error.path}"
    return f"[red]Error: {str(error)}[/red]"
