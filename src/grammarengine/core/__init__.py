"""Core utilities shared across the syntax and grammar layers.

By isolating these utilities here, we maintain a clean dependency graph:

    core <- syntax <- grammar

Exports:
    depth_clamp: Clamp a nesting bound against the recursion limit
    is_babel_available: Whether the optional Babel dependency is importable

Python 3.13+.
"""

from .babel_compat import is_babel_available
from .depth_guard import depth_clamp

__all__ = ["depth_clamp", "is_babel_available"]
