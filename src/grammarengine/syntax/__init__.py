"""Evaluation values: cursor, results and the Either union.

Every grammar consumes a Cursor and produces a Result:

    Cursor --evaluate--> Success(value, cursor) | Failure(cursor, diagnostic)

Public API:
    Cursor: Immutable (source, pos) position
    LineOffsetCache: O(log n) line:column lookups
    Success / Failure / Result: Evaluation outcomes
    is_success / is_failure: TypeIs guards
    Left / Right / Either: Ordered-choice result tags
"""

from .cursor import (
    Cursor,
    Failure,
    LineOffsetCache,
    Result,
    Success,
    is_failure,
    is_success,
)
from .either import Either, Left, Right

__all__ = [
    "Cursor",
    "Either",
    "Failure",
    "Left",
    "LineOffsetCache",
    "Result",
    "Right",
    "Success",
    "is_failure",
    "is_success",
]
