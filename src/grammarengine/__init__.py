"""GrammarEngine - composable parser combinators with explicit results.

Describe a grammar declaratively from small building blocks, run it over a
complete input, and get either a structured value or a precise Failure.
Evaluation is synchronous, side-effect free and backtracking; failures are
values, not exceptions.

Public API:
    Token, Literal - Primitive matchers (anchored at the cursor)
    Map, And, Sequence, Or, Skip, Many, Many1, Optional - Combinators
    parse_to_end - Run a grammar and require full consumption
    Cursor, Success, Failure - Evaluation values
    Left, Right - Ordered-choice result tags

Exceptions:
    GrammarError - Base exception class
    GrammarDefinitionError - Malformed grammar construction
    GrammarParseError - Raised by Failure.unwrap()

Submodules:
    grammarengine.grammar.numbers - LocaleDecimal (requires Babel)
    grammarengine.diagnostics - Codes, templates and formatting
"""

from .diagnostics import (
    DiagnosticCode,
    GrammarDefinitionError,
    GrammarError,
    GrammarParseError,
)
from .grammar import (
    SKIPPED,
    And,
    Grammar,
    Literal,
    Many,
    Many1,
    Map,
    Optional,
    Or,
    Sequence,
    Skip,
    Token,
    parse_to_end,
)
from .syntax import Cursor, Failure, Left, Result, Right, Success, is_failure, is_success

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("grammarengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "SKIPPED",
    "And",
    "Cursor",
    "DiagnosticCode",
    "Failure",
    "Grammar",
    "GrammarDefinitionError",
    "GrammarError",
    "GrammarParseError",
    "Left",
    "Literal",
    "Many",
    "Many1",
    "Map",
    "Optional",
    "Or",
    "Result",
    "Right",
    "Sequence",
    "Skip",
    "Success",
    "Token",
    "__version__",
    "is_failure",
    "is_success",
    "parse_to_end",
]
