"""Hypothesis strategies for GrammarEngine property-based testing.

Usage:
    from tests.strategies import combinator_grammars, cursor_texts
"""

from .grammar import (
    ALPHABET,
    combinator_grammars,
    cursor_texts,
    leaf_grammars,
    never_matching_grammars,
)

__all__ = [
    "ALPHABET",
    "combinator_grammars",
    "cursor_texts",
    "leaf_grammars",
    "never_matching_grammars",
]
