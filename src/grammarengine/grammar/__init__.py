"""Combinator algebra and driver.

Module Organization:
- base.py: Grammar ABC, ParseContext, SKIPPED marker
- primitives.py: Token (anchored regex) and Literal matchers
- combinators.py: Map, And, Sequence, Or, Skip, Many, Many1, Optional
- driver.py: parse_to_end entry point
- numbers.py: LocaleDecimal (requires the optional Babel dependency)

LocaleDecimal is not imported here so that engine-only installations never
touch Babel; import it from grammarengine.grammar.numbers.
"""

from .base import SKIPPED, Grammar, ParseContext, Skipped
from .combinators import And, Many, Many1, Map, Optional, Or, Sequence, Skip
from .driver import parse_to_end
from .primitives import Literal, Token

__all__ = [
    "SKIPPED",
    "And",
    "Grammar",
    "Literal",
    "Many",
    "Many1",
    "Map",
    "Optional",
    "Or",
    "ParseContext",
    "Sequence",
    "Skip",
    "Skipped",
    "Token",
    "parse_to_end",
]
