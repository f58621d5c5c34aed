"""Tests for cursor infrastructure.

Validates the immutable cursor pattern and line:column computation.
"""

from __future__ import annotations

import pytest

from grammarengine.syntax.cursor import Cursor, LineOffsetCache

# ============================================================================
# CURSOR BASIC TESTS
# ============================================================================


class TestCursorBasic:
    """Test basic cursor functionality."""

    def test_create_cursor(self) -> None:
        """Create cursor at position 0."""
        cursor = Cursor("hello", 0)

        assert cursor.source == "hello"
        assert cursor.pos == 0
        assert not cursor.is_eof

    def test_default_position_is_start(self) -> None:
        """Position defaults to 0."""
        assert Cursor("hello").pos == 0

    def test_cursor_immutability(self) -> None:
        """Cursor is immutable (frozen dataclass)."""
        cursor = Cursor("hello", 0)

        with pytest.raises(AttributeError):
            cursor.pos = 5  # type: ignore[misc]

    def test_position_at_end_is_valid(self) -> None:
        """pos == len(source) is the EOF position."""
        cursor = Cursor("hello", 5)

        assert cursor.is_eof
        assert cursor.remaining == ""

    def test_empty_source_is_eof(self) -> None:
        """Empty source starts at EOF."""
        assert Cursor("", 0).is_eof

    @pytest.mark.parametrize("pos", [-1, 6, 100])
    def test_position_outside_source_rejected(self, pos: int) -> None:
        """Positions outside [0, len(source)] raise ValueError."""
        with pytest.raises(ValueError, match="outside source"):
            Cursor("hello", pos)


# ============================================================================
# NAVIGATION
# ============================================================================


class TestCursorNavigation:
    """Test advance, consumed and remaining."""

    def test_advance_returns_new_cursor(self) -> None:
        """advance() leaves the original untouched."""
        cursor = Cursor("hello", 0)
        advanced = cursor.advance(2)

        assert cursor.pos == 0
        assert advanced.pos == 2
        assert advanced.source is cursor.source

    def test_advance_clamps_at_eof(self) -> None:
        """advance() never passes the end of source."""
        assert Cursor("hello", 3).advance(10).pos == 5

    def test_advance_zero(self) -> None:
        """advance(0) yields an equal cursor."""
        cursor = Cursor("hello", 2)

        assert cursor.advance(0) == cursor

    def test_consumed_and_remaining(self) -> None:
        """consumed + remaining reconstructs the source."""
        cursor = Cursor("123abc", 3)

        assert cursor.consumed == "123"
        assert cursor.remaining == "abc"

    def test_str_shows_offset_and_both_sides(self) -> None:
        """str() renders offset, consumed prefix and remaining suffix."""
        assert str(Cursor("123abc", 3)) == "Cursor{3, '123', 'abc'}"


# ============================================================================
# EQUALITY AND ORDERING
# ============================================================================


class TestCursorComparison:
    """Equality and ordering are on (source, pos)."""

    def test_equal_cursors(self) -> None:
        assert Cursor("abc", 1) == Cursor("abc", 1)

    def test_different_source_not_equal(self) -> None:
        assert Cursor("abc", 1) != Cursor("abd", 1)

    def test_ordering_by_position(self) -> None:
        assert Cursor("abc", 0) < Cursor("abc", 2)

    def test_hashable(self) -> None:
        """Frozen cursors can be used as dict keys."""
        assert len({Cursor("abc", 1), Cursor("abc", 1), Cursor("abc", 2)}) == 2


# ============================================================================
# LINE:COLUMN
# ============================================================================


class TestLineColumn:
    """Test line:column computation."""

    @pytest.mark.parametrize(
        ("pos", "expected"),
        [(0, (1, 1)), (4, (1, 5)), (6, (2, 1)), (8, (2, 3)), (12, (3, 1))],
    )
    def test_compute_line_col(self, pos: int, expected: tuple[int, int]) -> None:
        """compute_line_col() is 1-indexed."""
        assert Cursor("line1\nline2\nline3", pos).compute_line_col() == expected

    def test_crlf_counts_one_line(self) -> None:
        """CRLF line endings count as a single line break."""
        assert Cursor("ab\r\ncd", 4).compute_line_col() == (2, 1)

    @pytest.mark.parametrize("pos", range(18))
    def test_cache_matches_cursor(self, pos: int) -> None:
        """LineOffsetCache agrees with Cursor.compute_line_col()."""
        source = "line1\nline2\nline3"
        cache = LineOffsetCache(source)

        assert cache.get_line_col(pos) == Cursor(source, pos).compute_line_col()

    def test_cache_clamps_position(self) -> None:
        """Out-of-range positions are clamped."""
        cache = LineOffsetCache("abc\ndef")

        assert cache.get_line_col(-5) == (1, 1)
        assert cache.get_line_col(100) == (2, 4)
