"""Exception hierarchy for termfx.

Every error raised on purpose by the toolkit derives from TermFXError.
Failures of the output stream itself are not wrapped: they propagate as
the original OSError so callers can tell a broken pipe from a bad argument.
"""

from __future__ import annotations

from typing import Any


class TermFXError(Exception):
    """Base exception for all termfx errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize termfx error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(TermFXError):
    """Data validation errors."""


class InvalidArgumentError(ValidationError, ValueError):
    """An effect or helper was called with an argument it cannot render.

    Raised for negative counts, unknown spinner styles and empty gradients.
    """


class ConfigurationError(ValidationError):
    """Configuration loading or validation errors."""
