"""Depth clamping for recursion protection.

Grammar evaluation is a plain recursive call tree. The nesting bound used by
ParseContext must stay below what the interpreter can actually execute,
otherwise a RecursionError escapes instead of a NESTING_DEPTH_EXCEEDED
failure.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

from grammarengine.constants import FRAMES_PER_LEVEL, RECURSION_RESERVE_FRAMES

__all__ = ["depth_clamp"]

logger = logging.getLogger(__name__)


def depth_clamp(
    requested_depth: int,
    reserve_frames: int = RECURSION_RESERVE_FRAMES,
    frames_per_level: int = FRAMES_PER_LEVEL,
) -> int:
    """Clamp requested depth against Python recursion limit.

    Validates requested depth against sys.getrecursionlimit() to prevent
    RecursionError on systems with constrained stack limits. Logs warning
    if clamping occurs.

    Args:
        requested_depth: Desired maximum nesting depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)
        frames_per_level: Stack frames consumed per nesting level (default: 2)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(250)
        >>> depth_clamp(50)  # OK, within limit
        50
        >>> depth_clamp(500)  # Exceeds limit, clamped to (250 - 50) // 2
        100
    """
    max_safe_depth = (sys.getrecursionlimit() - reserve_frames) // frames_per_level
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
