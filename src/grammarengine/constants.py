"""Shared constants for GrammarEngine.

This module provides centralized configuration constants used across
the syntax and grammar packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection during grammar evaluation
- Input limits: DoS prevention via size constraints
- Rendering: Diagnostic output bounds

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    "RECURSION_RESERVE_FRAMES",
    "FRAMES_PER_LEVEL",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Rendering
    "FAILURE_PREVIEW_LENGTH",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Grammar evaluation is a plain recursive tree walk. Each nesting level of
# the combinator tree costs FRAMES_PER_LEVEL Python stack frames
# (Grammar.evaluate -> subclass _evaluate). A left-nested chain of `|`
# operators with N alternatives is N levels deep.
#
# The driver bounds nesting at MAX_DEPTH levels and clamps that bound
# against sys.getrecursionlimit(). Every combinator, repetition included,
# recurses through exactly FRAMES_PER_LEVEL frames per level. A caller that
# already holds more than RECURSION_RESERVE_FRAMES frames can still hit the
# interpreter limit first; the driver reports that as a depth Failure too.
#
# ============================================================================

# Maximum nesting depth of combinator evaluation per parse.
MAX_DEPTH: int = 100

# Stack frames kept free for the caller and the driver itself.
RECURSION_RESERVE_FRAMES: int = 50

# Python frames consumed per nesting level of evaluation.
FRAMES_PER_LEVEL: int = 2

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MiB).
# Prevents runaway backtracking over unbounded inputs.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# RENDERING
# ============================================================================

# Maximum characters of consumed/remaining text shown by str(Failure).
FAILURE_PREVIEW_LENGTH: int = 40
