"""Tests for core utilities: depth clamping and Babel availability.

Python 3.13+.
"""

import logging
import sys

import pytest

from grammarengine.core import babel_compat, depth_clamp
from grammarengine.core.babel_compat import (
    BabelImportError,
    is_babel_available,
    require_babel,
)

# ============================================================================
# DEPTH CLAMP
# ============================================================================


class TestDepthClamp:
    """Test depth_clamp against a controlled recursion limit."""

    @pytest.fixture(autouse=True)
    def _recursion_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "getrecursionlimit", lambda: 250)

    def test_within_limit_unchanged(self) -> None:
        assert depth_clamp(50) == 50

    def test_exact_limit_unchanged(self) -> None:
        assert depth_clamp(100) == 100

    def test_exceeding_limit_clamped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="grammarengine.core.depth_guard"):
            assert depth_clamp(500) == 100

        assert "Clamping to 100" in caplog.text

    def test_no_warning_when_not_clamped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="grammarengine.core.depth_guard"):
            depth_clamp(10)

        assert caplog.records == []

    def test_custom_reserve_and_frames(self) -> None:
        assert depth_clamp(500, reserve_frames=10, frames_per_level=4) == 60


# ============================================================================
# BABEL COMPAT
# ============================================================================


class TestBabelCompat:
    """Test the optional Babel dependency guard."""

    def test_is_babel_available_is_cached(self) -> None:
        assert is_babel_available() == is_babel_available()

    def test_require_babel_raises_when_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(babel_compat, "_check_babel_available", lambda: False)

        with pytest.raises(BabelImportError, match=r"LocaleDecimal requires Babel") as exc_info:
            require_babel("LocaleDecimal")

        assert exc_info.value.feature == "LocaleDecimal"
        assert "pip install grammarengine[babel]" in str(exc_info.value)
        assert isinstance(exc_info.value, ImportError)

    def test_getters_raise_when_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(babel_compat, "_check_babel_available", lambda: False)

        with pytest.raises(BabelImportError):
            babel_compat.get_babel_numbers()
        with pytest.raises(BabelImportError):
            babel_compat.get_locale_class()

    def test_getters_return_babel_objects(self) -> None:
        pytest.importorskip("babel")
        from babel import Locale, numbers  # noqa: PLC0415

        assert babel_compat.get_locale_class() is Locale
        assert babel_compat.get_babel_numbers() is numbers
        assert issubclass(babel_compat.get_number_format_error(), ValueError)
