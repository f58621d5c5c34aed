"""Primitive matchers.

Token and Literal are the leaves of every grammar tree. Both match exactly
at the cursor position (anchored, never a forward search) and fail with
MATCH_FAILED without advancing.

Zero-width patterns:
    A Token whose pattern can match the empty string (r"\\s*") succeeds
    without advancing. That is useful for optional whitespace, but inside
    Many/Many1 a non-advancing success ends the repetition.
"""

import re
from dataclasses import dataclass, field

from grammarengine.diagnostics import ErrorTemplate, GrammarDefinitionError
from grammarengine.syntax import Cursor, Result, Success

from .base import Grammar, ParseContext

__all__ = ["Literal", "Token"]


@dataclass(frozen=True, slots=True)
class Token(Grammar[str]):
    """Match a regular expression anchored at the cursor.

    Args:
        pattern: Regular expression source or compiled pattern
        flags: re flags, applied when pattern is a string. A compiled
            pattern carries its own flags and must be given with flags=0.

    Raises:
        GrammarDefinitionError: If pattern does not compile, or if flags
            accompany a compiled pattern

    Example:
        >>> Token(r"\\d+").evaluate(Cursor("123 456")).value
        '123'
        >>> Token(r"\\d+").evaluate(Cursor("x123")).message
        'could not match \\\\d+'
    """

    pattern: str | re.Pattern[str]
    flags: int = 0
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.pattern, re.Pattern):
            if self.flags:
                raise GrammarDefinitionError(
                    ErrorTemplate.invalid_pattern(
                        self.pattern.pattern, "flags cannot be applied to a compiled pattern"
                    )
                )
            regex = self.pattern
        else:
            try:
                regex = re.compile(self.pattern, self.flags)
            except re.error as e:
                raise GrammarDefinitionError(
                    ErrorTemplate.invalid_pattern(self.pattern, str(e))
                ) from e
        object.__setattr__(self, "_regex", regex)

    @property
    def source(self) -> str:
        """Pattern text used in failure messages."""
        return self._regex.pattern

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[str]:
        found = self._regex.match(cursor.source, cursor.pos)
        if found is None:
            return cursor.fail(ErrorTemplate.match_failed(self.source))
        return Success(found.group(), cursor.advance(found.end() - cursor.pos))


@dataclass(frozen=True, slots=True)
class Literal(Grammar[str]):
    """Match a fixed string at the cursor.

    Example:
        >>> Literal("RoutedShape").evaluate(Cursor("RoutedShape M2")).cursor.pos
        11
    """

    text: str

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[str]:
        if not cursor.source.startswith(self.text, cursor.pos):
            return cursor.fail(ErrorTemplate.match_failed(self.text))
        return Success(self.text, cursor.advance(len(self.text)))
