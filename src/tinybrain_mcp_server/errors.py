"""Custom error types for TinyBrain tools."""

from __future__ import annotations

from typing import NoReturn


class ToolError(Exception):
    """Structured tool failure carrying a type tag and optional details.

    The dispatcher reports every handler failure as an internal error and uses
    ``str(error)`` as the diagnostic data, so the type is folded into the text.
    ``details`` stays available to direct callers of a handler.
    """

    def __init__(
        self, error_type: str, message: str, details: object | None = None
    ) -> None:
        """Create a structured tool error."""
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return f"{self.error_type}: {self.message}"


def raise_tool_error(
    error_type: str, message: str, details: object | None = None
) -> NoReturn:
    """Raise a :class:`ToolError` with the given type, message and details."""
    raise ToolError(error_type=error_type, message=message, details=details)
