"""Two-variant tagged union produced by ordered choice.

Or(G1, G2) wraps the winning branch's value in Left (G1) or Right (G2) so
callers can tell which alternative matched even when both produce the same
type. Use pattern matching to unpack:

    match result.value:
        case Left(value=number):
            ...
        case Right(value=word):
            ...

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["Either", "Left", "Right"]


@dataclass(frozen=True, slots=True)
class Left[A]:
    """Value produced by the first alternative."""

    value: A


@dataclass(frozen=True, slots=True)
class Right[B]:
    """Value produced by the second alternative."""

    value: B


type Either[A, B] = Left[A] | Right[B]
