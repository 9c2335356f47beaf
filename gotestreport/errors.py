"""Exception types raised by the report pipeline.

Every failure is fatal for a run: nothing is written unless a complete
document was produced.
"""

from __future__ import annotations

from typing import Optional


class GoTestReportError(Exception):
    """Base class for all gotestreport errors."""


class DecodeError(GoTestReportError, ValueError):
    """A line of the event stream is not a valid ``go test -json`` record."""

    def __init__(self, message: str, lineno: Optional[int] = None) -> None:
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class EmptyInputError(GoTestReportError, ValueError):
    """The event stream contained no events."""


class LayoutUnavailableError(GoTestReportError, RuntimeError):
    """The page layout template could not be obtained."""


class TemplateError(GoTestReportError, RuntimeError):
    """Substituting report data into the page layout failed."""


class ConfigError(GoTestReportError, ValueError):
    """A configuration file is unreadable or has invalid values."""
