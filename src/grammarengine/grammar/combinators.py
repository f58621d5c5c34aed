"""Composition combinators.

Propagation policy:
    Map, And, Sequence, Skip and the leading element of Many1 hand a child
    Failure upward unchanged. Or, Optional and Many are the only combinators
    that recover from a child Failure.

Backtracking:
    Or re-evaluates its second branch from the original cursor. Nothing is
    memoized, so nested alternations over a shared prefix re-scan it and
    ambiguous nestings can take exponential time. Grammars that need linear
    behavior must be written to commit early (factor common prefixes out of
    alternatives).

Zero-width repetition:
    An iteration of Many/Many1 that succeeds without advancing the cursor
    ends the repetition and its value is dropped. Without this rule a
    pattern such as Token(r"\\s*").many() would never terminate. The
    required first element of Many1 is kept even when zero-width.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from grammarengine.diagnostics import ErrorTemplate, GrammarDefinitionError
from grammarengine.syntax import Cursor, Either, Failure, Left, Result, Right, Success

from .base import SKIPPED, Grammar, ParseContext, Skipped

__all__ = [
    "And",
    "Many",
    "Many1",
    "Map",
    "Optional",
    "Or",
    "Sequence",
    "Skip",
]

logger = logging.getLogger(__name__)


def _require_grammar(combinator: str, operand: object) -> None:
    if not isinstance(operand, Grammar):
        raise GrammarDefinitionError(ErrorTemplate.invalid_grammar(combinator, operand))


@dataclass(frozen=True, slots=True)
class Map[T, U](Grammar[U]):
    """Transform the value of a successful match.

    Exceptions raised by fn are not caught: they are client bugs, not
    parse failures.

    Example:
        >>> Map(Token(r"\\d+"), int).evaluate(Cursor("42")).value
        42
    """

    grammar: Grammar[T]
    fn: Callable[[T], U]

    def __post_init__(self) -> None:
        _require_grammar("Map", self.grammar)

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[U]:
        result = self.grammar.evaluate(cursor, context)
        if isinstance(result, Failure):
            return result
        return Success(self.fn(result.value), result.cursor)


@dataclass(frozen=True, slots=True)
class And[A, B](Grammar[tuple[A, B]]):
    """Match first, then second from where first stopped.

    Not an alternative: a failure of first is returned as-is and second is
    never tried.
    """

    first: Grammar[A]
    second: Grammar[B]

    def __post_init__(self) -> None:
        _require_grammar("And", self.first)
        _require_grammar("And", self.second)

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[tuple[A, B]]:
        left = self.first.evaluate(cursor, context)
        if isinstance(left, Failure):
            return left
        right = self.second.evaluate(left.cursor, context)
        if isinstance(right, Failure):
            return right
        return Success((left.value, right.value), right.cursor)


@dataclass(frozen=True, slots=True)
class Sequence(Grammar[tuple[Any, ...]]):
    """Match each grammar in order, collecting values into a tuple.

    Values produced by Skip are left out of the tuple; their cursor
    advance still applies. The first failing component ends the sequence
    and its failure is returned unchanged.

    Args:
        grammars: Components, matched left to right
        chained: Set on sequences built by the * operator. Such a chain is
            spliced into any * expression it appears in, on either side, so
            its values do not nest. Wrap a chain with .map() (or build it with
            Sequence([...])) to keep its values grouped as a sub-tuple.

    Example:
        >>> number = Token(r"\\d+").map(int)
        >>> Sequence([number, -Token(" "), number]).evaluate(Cursor("1 2")).value
        (1, 2)
    """

    grammars: tuple[Grammar[Any], ...]
    chained: bool = field(default=False, kw_only=True, compare=False)

    def __post_init__(self) -> None:
        grammars = tuple(self.grammars)
        for grammar in grammars:
            _require_grammar("Sequence", grammar)
        object.__setattr__(self, "grammars", grammars)

    @classmethod
    def chain(cls, left: Grammar[Any], right: Grammar[Any]) -> Sequence:
        """Join two operands of *, splicing in either side that is itself a * chain.

        (a * b) * c and a * (b * c) both become Sequence([a, b, c]).
        """
        return cls((*cls._chain_parts(left), *cls._chain_parts(right)), chained=True)

    @staticmethod
    def _chain_parts(grammar: Grammar[Any]) -> tuple[Grammar[Any], ...]:
        if isinstance(grammar, Sequence) and grammar.chained:
            return grammar.grammars
        return (grammar,)

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[tuple[Any, ...]]:
        values: list[Any] = []
        for grammar in self.grammars:
            result = grammar.evaluate(cursor, context)
            if isinstance(result, Failure):
                return result
            if result.value is not SKIPPED:
                values.append(result.value)
            cursor = result.cursor
        return Success(tuple(values), cursor)


@dataclass(frozen=True, slots=True)
class Or[A, B](Grammar[Either[A, B]]):
    """Ordered choice with full backtracking.

    first is tried at the original cursor; if it succeeds its value is
    returned as Left and second is never evaluated. Otherwise second is
    tried at the same original cursor and wins as Right. When both fail the
    result is an ALTERNATIVES_EXHAUSTED failure at the original offset that
    keeps both branch failures as causes.
    """

    first: Grammar[A]
    second: Grammar[B]

    def __post_init__(self) -> None:
        _require_grammar("Or", self.first)
        _require_grammar("Or", self.second)

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[Either[A, B]]:
        left = self.first.evaluate(cursor, context)
        if isinstance(left, Success):
            return Success(Left(left.value), left.cursor)

        right = self.second.evaluate(cursor, context)
        if isinstance(right, Success):
            return Success(Right(right.value), right.cursor)

        return cursor.fail(
            ErrorTemplate.alternatives_exhausted(left.diagnostic, right.diagnostic),
            causes=(left, right),
        )


@dataclass(frozen=True, slots=True)
class Skip[T](Grammar[Skipped]):
    """Match grammar but produce SKIPPED, which Sequence leaves out."""

    grammar: Grammar[T]

    def __post_init__(self) -> None:
        _require_grammar("Skip", self.grammar)

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[Skipped]:
        result = self.grammar.evaluate(cursor, context)
        if isinstance(result, Failure):
            return result
        return Success(SKIPPED, result.cursor)


def _log_zero_width(cursor: Cursor, count: int) -> None:
    logger.debug(
        "Zero-width match ended repetition at offset %d after %d item(s)", cursor.pos, count
    )


# Many and Many1 run their loop inline: every combinator costs exactly
# FRAMES_PER_LEVEL stack frames per nesting level, which depth_clamp relies on.


@dataclass(frozen=True, slots=True)
class Many[T](Grammar[tuple[T, ...]]):
    """Match grammar zero or more times. Never fails.

    The failure that ends the repetition is discarded.

    Example:
        >>> Many(Token("a")).evaluate(Cursor("aab")).value
        ('a', 'a')
        >>> Many(Token("a")).evaluate(Cursor("b")).value
        ()
    """

    grammar: Grammar[T]

    def __post_init__(self) -> None:
        _require_grammar("Many", self.grammar)

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[tuple[T, ...]]:
        values: list[T] = []
        while True:
            result = self.grammar.evaluate(cursor, context)
            if isinstance(result, Failure):
                break
            if result.cursor.pos == cursor.pos:
                _log_zero_width(cursor, len(values))
                break
            values.append(result.value)
            cursor = result.cursor
        return Success(tuple(values), cursor)


@dataclass(frozen=True, slots=True)
class Many1[T](Grammar[tuple[T, ...]]):
    """Match grammar one or more times.

    If the first attempt fails, that failure is returned unchanged.
    """

    grammar: Grammar[T]

    def __post_init__(self) -> None:
        _require_grammar("Many1", self.grammar)

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[tuple[T, ...]]:
        first = self.grammar.evaluate(cursor, context)
        if isinstance(first, Failure):
            return first
        values = [first.value]
        if first.cursor.pos == cursor.pos:
            _log_zero_width(cursor, 1)
            return Success(tuple(values), first.cursor)

        cursor = first.cursor
        while True:
            result = self.grammar.evaluate(cursor, context)
            if isinstance(result, Failure):
                break
            if result.cursor.pos == cursor.pos:
                _log_zero_width(cursor, len(values))
                break
            values.append(result.value)
            cursor = result.cursor
        return Success(tuple(values), cursor)


@dataclass(frozen=True, slots=True)
class Optional[T](Grammar[T | None]):
    """Match grammar or nothing. Never fails.

    On failure the value is None and the cursor is the original one.
    """

    grammar: Grammar[T]

    def __post_init__(self) -> None:
        _require_grammar("Optional", self.grammar)

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[T | None]:
        result = self.grammar.evaluate(cursor, context)
        if isinstance(result, Failure):
            return Success(None, cursor)
        return result
