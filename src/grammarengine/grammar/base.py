"""Grammar capability shared by every combinator.

A Grammar is an immutable node of a combinator tree. It exposes a single
operation, evaluate(cursor) -> Success | Failure, which must be free of
side effects: the same grammar evaluated at the same cursor always yields
the same result. Trees are built once and can be reused across inputs and
threads.

Composition operators:
    a * b         Sequence (chains built with * flatten into one node)
    a | b         Or (ordered choice, Left/Right tagged)
    -a            Skip (value elided from enclosing Sequence)
    a.map(f)      Map
    a.then(b)     And (pair of values)
    a.many()      Many
    a.many1()     Many1
    a.optional()  Optional

Evaluation depth:
    evaluate() threads a ParseContext through the tree. Each nesting level
    receives a new context one level deeper; when the bound is reached
    DepthLimitExceededError is raised. Recovering combinators only inspect
    Failure values, so the bound cannot be swallowed by an Or.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from grammarengine.constants import MAX_DEPTH
from grammarengine.diagnostics import DepthLimitExceededError, ErrorTemplate

if TYPE_CHECKING:
    from grammarengine.syntax import Cursor, Result

    from .combinators import And, Many, Many1, Map, Optional, Or, Sequence, Skip

__all__ = ["SKIPPED", "Grammar", "ParseContext", "Skipped"]


class Skipped(Enum):
    """Marker type for values produced by Skip."""

    SKIPPED = "skipped"

    def __repr__(self) -> str:
        return "SKIPPED"


SKIPPED = Skipped.SKIPPED


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Explicit context for one evaluation.

    Replaces any global or thread-local state with explicit parameter
    passing, so evaluation stays reentrant.

    Attributes:
        max_depth: Maximum allowed nesting depth of grammar evaluation
        current_depth: Current nesting depth (0 = not yet inside the root)
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_depth

    def descend(self, cursor: Cursor) -> ParseContext:
        """Create new context one nesting level deeper.

        Args:
            cursor: Position being evaluated (reported if the bound is hit)

        Raises:
            DepthLimitExceededError: If max_depth has been reached
        """
        if self.is_depth_exceeded():
            raise DepthLimitExceededError(
                ErrorTemplate.nesting_depth_exceeded(self.max_depth), cursor
            )
        return ParseContext(
            max_depth=self.max_depth,
            current_depth=self.current_depth + 1,
        )


class Grammar[T](ABC):
    """Abstract combinator producing values of type T."""

    __slots__ = ()

    def evaluate(self, cursor: Cursor, context: ParseContext | None = None) -> Result[T]:
        """Evaluate this grammar at cursor.

        Args:
            cursor: Position to start matching at
            context: Evaluation context (a fresh one when omitted)

        Returns:
            Success(value, cursor_after) or Failure

        Raises:
            DepthLimitExceededError: If nesting exceeds context.max_depth
        """
        if context is None:
            context = ParseContext()
        return self._evaluate(cursor, context.descend(cursor))

    @abstractmethod
    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[T]:
        """Combinator-specific evaluation; children get the same context."""

    # Composition operators build combinators lazily to avoid an import cycle.

    def __mul__(self, other: Grammar[Any]) -> Sequence:
        from .combinators import Sequence  # noqa: PLC0415 - circular

        if not isinstance(other, Grammar):
            return NotImplemented
        return Sequence.chain(self, other)

    def __or__[U](self, other: Grammar[U]) -> Or[T, U]:
        from .combinators import Or  # noqa: PLC0415 - circular

        if not isinstance(other, Grammar):
            return NotImplemented
        return Or(self, other)

    def __neg__(self) -> Skip[T]:
        from .combinators import Skip  # noqa: PLC0415 - circular

        return Skip(self)

    def map[U](self, fn: Callable[[T], U]) -> Map[T, U]:
        """Transform the value of a successful match."""
        from .combinators import Map  # noqa: PLC0415 - circular

        return Map(self, fn)

    def then[U](self, other: Grammar[U]) -> And[T, U]:
        """Match self then other, producing the pair of values."""
        from .combinators import And  # noqa: PLC0415 - circular

        return And(self, other)

    def many(self) -> Many[T]:
        """Match self zero or more times."""
        from .combinators import Many  # noqa: PLC0415 - circular

        return Many(self)

    def many1(self) -> Many1[T]:
        """Match self one or more times."""
        from .combinators import Many1  # noqa: PLC0415 - circular

        return Many1(self)

    def optional(self) -> Optional[T]:
        """Match self or nothing."""
        from .combinators import Optional  # noqa: PLC0415 - circular

        return Optional(self)
