"""
Custom exception classes for ingestion, library and export failures.

This module defines the error family raised by the normalizer, the
in-memory strategy library and the interchange writer. The statistics
engine never raises for numeric edge cases and has no entry here.

All exceptions include a descriptive message and optional context data
to help callers report the failure to a human.
"""

from typing import Any


class StratfolioError(Exception):
    """Base exception for all stratfolio failures."""


class ValidationError(StratfolioError):
    """
    Raised when an uploaded record is malformed or incomplete.

    Always carries the source label (file name, or ``file[index]`` for a
    record inside a file) so batch callers can report which input failed.

    Attributes:
        message: Human-readable error description.
        source: Context label of the offending input.
        context: Optional dictionary with additional error details.

    Examples:
        >>> raise ValidationError(
        ...     "Missing or invalid dataId",
        ...     source="strategies.json[0]",
        ... )
        Traceback (most recent call last):
        ...
        ValidationError: Missing or invalid dataId in strategies.json[0]
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.source = source
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        text = self.message
        if self.source:
            text = f"{text} in {self.source}"
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            text = f"{text} ({context_str})"
        return text


class CoercionError(ValidationError):
    """
    Raised when a numeric field holds a value that is not a number.

    Attributes:
        field: Dotted path of the offending field (e.g. 'equity[3]').
        value: The raw value that failed coercion.

    Examples:
        >>> raise CoercionError("equity[1]", "abc", source="a.json[0]")
        Traceback (most recent call last):
        ...
        CoercionError: Non-numeric value in numeric field 'equity[1]' in a.json[0] (value='abc')
    """

    def __init__(self, field: str, value: Any, source: str | None = None):
        super().__init__(
            f"Non-numeric value in numeric field '{field}'",
            source=source,
            context={"value": value},
        )
        self.field = field
        self.value = value


class BatchIngestionError(ValidationError):
    """
    Raised when a batch upload produced no valid strategy record at all.

    Attributes:
        errors: Per-file error messages, in input order.
    """

    def __init__(self, errors: list[str]):
        joined = "\n".join(errors)
        super().__init__(f"Failed to parse any files:\n{joined}")
        self.errors = list(errors)


class ExportError(StratfolioError):
    """
    Raised when archive or summary generation fails.

    Attributes:
        message: Human-readable error description.
        cause: Underlying exception, if any.

    Examples:
        >>> raise ExportError("Failed to generate ZIP file", cause=OSError("disk full"))
        Traceback (most recent call last):
        ...
        ExportError: Failed to generate ZIP file: disk full
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class LibraryError(StratfolioError):
    """Raised when a strategy library operation cannot be applied."""
