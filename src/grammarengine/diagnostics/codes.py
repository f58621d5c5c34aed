"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Match failures (recoverable inside Or/Optional/Many)
        2000-2999: Driver failures (final, produced by parse_to_end)
        3000-3999: Grammar definition errors (raised at construction)
        4000-4999: Locale-aware matching
    """

    # Match failures (1000-1999)
    MATCH_FAILED = 1001
    ALTERNATIVES_EXHAUSTED = 1002

    # Driver failures (2000-2999)
    INCOMPLETE_PARSE = 2001
    NESTING_DEPTH_EXCEEDED = 2002
    SOURCE_TOO_LARGE = 2003

    # Grammar definition errors (3000-3999)
    INVALID_PATTERN = 3001
    INVALID_GRAMMAR = 3002

    # Locale-aware matching (4000-4999)
    LOCALE_NUMBER_INVALID = 4001
    LOCALE_UNKNOWN = 4002


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Every Failure produced by the
    engine carries one; exceptions raised at grammar construction carry one
    too.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None until the failure is located)
        hint: Suggestion for fixing the error
        expected: Patterns the failing matcher expected
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: tuple[str, ...] = ()
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[INCOMPLETE_PARSE]: Parse incomplete: 3 character(s) left unconsumed
              --> line 1, column 4
              = help: Extend the grammar to cover the trailing input

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
