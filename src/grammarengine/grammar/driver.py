"""Top-level driver: run a grammar over a complete input.

parse_to_end is the only place where a Failure becomes final. Every inner
failure is, by construction, still recoverable by an enclosing Or,
Optional or Many; once the root has been evaluated nothing can recover it.

Security:
    Includes a configurable input size limit and a nesting depth bound so
    that oversized inputs and deeply nested grammars yield a Failure rather
    than exhausting memory or the interpreter stack.
"""

import logging

from grammarengine.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from grammarengine.core.depth_guard import depth_clamp
from grammarengine.diagnostics import DepthLimitExceededError, ErrorTemplate
from grammarengine.syntax import Cursor, Failure, Result

from .base import Grammar, ParseContext

__all__ = ["parse_to_end"]

logger = logging.getLogger(__name__)


def parse_to_end[T](
    text: str,
    grammar: Grammar[T],
    *,
    max_depth: int = MAX_DEPTH,
    max_source_size: int = MAX_SOURCE_SIZE,
) -> Result[T]:
    """Evaluate grammar over the whole of text.

    Args:
        text: Complete input (already loaded by the caller)
        grammar: Root of the grammar tree
        max_depth: Maximum nesting depth of evaluation, clamped against
            the interpreter recursion limit
        max_source_size: Maximum input length in characters (0 = no limit)

    Returns:
        Success whose cursor sits at len(text), or the final Failure:
        - the grammar's own failure, unchanged
        - INCOMPLETE_PARSE at the stopping offset if input remains
        - NESTING_DEPTH_EXCEEDED if evaluation nested beyond max_depth, or
          ran out of interpreter stack first (reported at offset 0)
        - SOURCE_TOO_LARGE if text exceeds max_source_size

    Example:
        >>> number = Token(r"\\d+").map(int)
        >>> parse_to_end("123", number).value
        123
        >>> parse_to_end("123abc", number).offset
        3
    """
    cursor = Cursor(text, 0)

    if max_source_size > 0 and len(text) > max_source_size:
        logger.warning(
            "Source size %d exceeds limit %d, not parsed", len(text), max_source_size
        )
        return cursor.fail(ErrorTemplate.source_too_large(len(text), max_source_size))

    context = ParseContext(max_depth=depth_clamp(max_depth))
    logger.debug(
        "Parsing %d characters with %s (max depth %d)",
        len(text),
        type(grammar).__name__,
        context.max_depth,
    )

    try:
        result = grammar.evaluate(cursor, context)
    except DepthLimitExceededError as e:
        logger.warning(
            "Grammar nesting depth %d exceeded at offset %d", context.max_depth, e.cursor.pos
        )
        diagnostic = e.diagnostic or ErrorTemplate.nesting_depth_exceeded(context.max_depth)
        return e.cursor.fail(diagnostic)
    except RecursionError:
        # The caller already held more frames than RECURSION_RESERVE_FRAMES.
        logger.warning(
            "Interpreter stack exhausted below nesting depth %d", context.max_depth
        )
        return cursor.fail(ErrorTemplate.nesting_depth_exceeded(context.max_depth))

    if isinstance(result, Failure):
        logger.debug("Parse failed at offset %d: %s", result.offset, result.message)
        return result

    if not result.cursor.is_eof:
        logger.debug("Parse stopped at offset %d of %d", result.cursor.pos, len(text))
        return result.cursor.fail(ErrorTemplate.incomplete_parse(len(text) - result.cursor.pos))

    logger.debug("Parse succeeded")
    return result
