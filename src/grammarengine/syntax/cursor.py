"""Immutable cursor and result values for combinator evaluation.

Implements the immutable cursor pattern: every grammar receives a Cursor and
returns either a Success (value plus advanced cursor) or a Failure. Nothing
is mutated and nothing is thrown, so backtracking is simply re-using an
earlier cursor.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - Every advance() returns a NEW cursor
    - Failure is data, not an exception
    - Line:column computed on-demand (O(n) only for errors)

Line Ending Support:
    Both Cursor.compute_line_col() and LineOffsetCache use \\n as the line
    delimiter. CRLF input works because the \\n is still present. CR-only
    input is reported as a single line.

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
"""

from dataclasses import dataclass, field, replace
from typing import NoReturn, TypeIs

from grammarengine.constants import FAILURE_PREVIEW_LENGTH
from grammarengine.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    GrammarParseError,
    OutputFormat,
    SourceSpan,
)

__all__ = [
    "Cursor",
    "Failure",
    "LineOffsetCache",
    "Result",
    "Success",
    "is_failure",
    "is_success",
]


def _preview_head(text: str) -> str:
    """Keep the end of consumed text, which is nearest the cursor."""
    if len(text) > FAILURE_PREVIEW_LENGTH:
        return "..." + text[-FAILURE_PREVIEW_LENGTH:]
    return text


def _preview_tail(text: str) -> str:
    if len(text) > FAILURE_PREVIEW_LENGTH:
        return text[:FAILURE_PREVIEW_LENGTH] + "..."
    return text


@dataclass(frozen=True, slots=True, order=True)
class Cursor:
    """Immutable source position tracker.

    Equality and ordering are on (source, pos).

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> new_cursor = cursor.advance(2)
        >>> new_cursor.remaining
        'llo'
        >>> cursor.pos  # Original unchanged (immutability)
        0
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int = 0

    def __post_init__(self) -> None:
        """Validate 0 <= pos <= len(source).

        Raises:
            ValueError: If pos lies outside the source
        """
        if not 0 <= self.pos <= len(self.source):
            msg = f"Cursor position {self.pos} outside source of length {len(self.source)}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"Cursor{{{self.pos}, {self.consumed!r}, {self.remaining!r}}}"

    @property
    def is_eof(self) -> bool:
        """True when every character has been consumed."""
        return self.pos >= len(self.source)

    @property
    def consumed(self) -> str:
        """Source text before the cursor."""
        return self.source[: self.pos]

    @property
    def remaining(self) -> str:
        """Source text from the cursor to the end."""
        return self.source[self.pos :]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        Args:
            count: Number of positions to advance (default: 1)

        Returns:
            New Cursor instance, clamped at end of source

        Example:
            >>> cursor = Cursor("hello", 0)
            >>> cursor.advance(10).pos
            5
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def fail(
        self, diagnostic: Diagnostic, causes: tuple["Failure", ...] = ()
    ) -> "Failure":
        """Build a Failure located at this cursor.

        Args:
            diagnostic: What went wrong (usually from ErrorTemplate)
            causes: Component failures, for aggregated failures

        Returns:
            Failure at this position
        """
        return Failure(self, diagnostic, causes)

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position.
            Only call for error reporting, not during normal parsing!

        Example:
            >>> source = "line1\\nline2\\nline3"
            >>> Cursor(source, 0).compute_line_col()
            (1, 1)
            >>> Cursor(source, 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in O(n) single pass, then provides
    O(log n) lookups using binary search. Use this when reporting many
    failures against the same source.

    Example:
        >>> cache = LineOffsetCache("line1\\nline2\\nline3")
        >>> cache.get_line_col(6)   # Start of line 2
        (2, 1)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get line and column for position using binary search.

        Args:
            pos: Character position in source (0-indexed, clamped)

        Returns:
            (line, column) tuple (1-indexed)
        """
        pos = max(0, min(pos, self._source_len))

        # Line index = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)


@dataclass(frozen=True, slots=True)
class Success[T]:
    """Successful evaluation: parsed value and the cursor after it.

    Type Parameters:
        T: The type of the parsed value

    Example:
        >>> result = Success("h", Cursor("hello", 1))
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor

    @property
    def offset(self) -> int:
        """Offset reached by the match."""
        return self.cursor.pos

    def unwrap(self) -> T:
        """Return the parsed value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    """Recoverable evaluation failure with location and context.

    A Failure is a value: combinators that recover (Or, Optional, Many)
    inspect and discard it, all others hand it upward unchanged. Only the
    driver's result is final.

    Attributes:
        cursor: Position where the failure was detected
        diagnostic: Structured description (code, message, expected)
        causes: Component failures (both branches of an exhausted Or)

    str() previews at most FAILURE_PREVIEW_LENGTH (40) characters on each
    side of the cursor. A longer consumed part keeps its last 40 characters
    behind a leading "...", a longer remainder keeps its first 40 followed
    by "...". The full text is always on cursor.

    Example:
        >>> failure = Cursor("123abc", 3).fail(ErrorTemplate.incomplete_parse(3))
        >>> str(failure)
        "Parse incomplete: 3 character(s) left unconsumed at offset 3: consumed '123', remaining 'abc'"
    """

    cursor: Cursor
    diagnostic: Diagnostic
    causes: tuple["Failure", ...] = field(default=())

    def __str__(self) -> str:
        return (
            f"{self.message} at offset {self.offset}: "
            f"consumed {_preview_head(self.cursor.consumed)!r}, "
            f"remaining {_preview_tail(self.cursor.remaining)!r}"
        )

    @property
    def offset(self) -> int:
        """Character offset of the failure."""
        return self.cursor.pos

    @property
    def text(self) -> str:
        """Full source text the failure refers to."""
        return self.cursor.source

    @property
    def message(self) -> str:
        """Human-readable failure description."""
        return self.diagnostic.message

    @property
    def code(self) -> DiagnosticCode:
        """Failure category."""
        return self.diagnostic.code

    def to_diagnostic(self) -> Diagnostic:
        """Return the diagnostic with its source span filled in."""
        line, col = self.cursor.compute_line_col()
        span = SourceSpan(start=self.offset, end=self.offset, line=line, column=col)
        return replace(self.diagnostic, span=span)

    def format_error(self) -> str:
        """Format failure with line:column.

        Example:
            >>> failure = Cursor("hello\\nworld", 7).fail(ErrorTemplate.match_failed("]"))
            >>> failure.format_error()
            "2:2: could not match ] (expected: ']')"
        """
        line, col = self.cursor.compute_line_col()
        error_msg = f"{line}:{col}: {self.message}"

        if self.diagnostic.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.diagnostic.expected)
            error_msg += f" (expected: {expected_str})"

        return error_msg

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format failure with source context and pointer.

        Shows the failing line and a caret pointing to the failure offset.

        Args:
            context_lines: Number of lines to show before/after the failure

        Returns:
            Multi-line formatted failure with context

        Example:
            >>> failure = Cursor("a = 1\\nb = x", 10).fail(ErrorTemplate.match_failed("[0-9]+"))
            >>> print(failure.format_with_context())
            2:5: could not match [0-9]+ (expected: '[0-9]+')
            <BLANKLINE>
               1 | a = 1
               2 | b = x
                       ^
        """
        line, col = self.cursor.compute_line_col()
        lines = self.text.split("\n")

        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])

            if i == line:
                pointer = " " * (len(line_num_str) + col - 1) + "^"
                result_lines.append(pointer)

        return "\n".join(result_lines)

    def format_tree(self) -> str:
        """Format this failure and its causes, one line each, indented."""
        return DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format_failure(self)

    def unwrap(self) -> NoReturn:
        """Raise GrammarParseError for callers that want an exception.

        Raises:
            GrammarParseError: Always
        """
        raise GrammarParseError(self)


type Result[T] = Success[T] | Failure


def is_success[T](result: Result[T]) -> TypeIs[Success[T]]:
    """Type guard: True if result is a Success."""
    return isinstance(result, Success)


def is_failure[T](result: Result[T]) -> TypeIs[Failure]:
    """Type guard: True if result is a Failure."""
    return isinstance(result, Failure)
