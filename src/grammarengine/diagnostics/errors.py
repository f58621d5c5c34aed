"""GrammarEngine exception hierarchy with structured diagnostics.

Parse outcomes are values (Success / Failure), not exceptions. The
exceptions here cover the remaining cases: malformed grammar construction,
the evaluation depth bound, and callers that opt into raising via
Failure.unwrap().

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from grammarengine.syntax.cursor import Cursor, Failure

__all__ = [
    "DepthLimitExceededError",
    "GrammarDefinitionError",
    "GrammarError",
    "GrammarParseError",
]


class GrammarError(Exception):
    """Base exception for all GrammarEngine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize GrammarError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class GrammarDefinitionError(GrammarError):
    """Grammar could not be constructed.

    Examples:
    - Token pattern is not a valid regular expression
    - Combinator operand is not a Grammar
    - LocaleDecimal built for an unknown locale
    """


class GrammarParseError(GrammarError):
    """Parse failed and the caller asked for an exception.

    Raised only by Failure.unwrap(). The engine itself returns Failure values.

    Attributes:
        failure: The Failure that was unwrapped
    """

    def __init__(self, failure: "Failure") -> None:
        """Initialize GrammarParseError.

        Args:
            failure: The final Failure returned by the driver
        """
        super().__init__(failure.to_diagnostic())
        self.failure = failure

    def __str__(self) -> str:
        return self.failure.format_error()


class DepthLimitExceededError(GrammarError):
    """Raised when evaluation nests deeper than the ParseContext allows.

    Deliberately an exception rather than a Failure: Or, Optional and Many
    recover from Failure values only, so the depth bound cannot be swallowed
    by an enclosing alternative. parse_to_end converts it into a final
    NESTING_DEPTH_EXCEEDED Failure.

    Attributes:
        cursor: Position at which the limit was hit
    """

    def __init__(self, message: str | Diagnostic, cursor: "Cursor") -> None:
        """Initialize DepthLimitExceededError.

        Args:
            message: Error message string OR Diagnostic object
            cursor: Position at which the limit was hit
        """
        super().__init__(message)
        self.cursor = cursor
