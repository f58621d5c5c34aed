"""Babel compatibility layer for optional dependency handling.

Provides centralized, lazy import infrastructure for Babel so that the
combinator engine never imports it.

Design Rationale:
    GrammarEngine supports two installation modes:
    - Engine-only: `pip install grammarengine` (no external dependencies)
    - Locale-aware: `pip install grammarengine[babel]` (adds LocaleDecimal)

    This module ensures that:
    1. Engine-only installations never trigger Babel imports
    2. Locale-aware matchers get a consistent, helpful error when Babel is missing
    3. Babel types are available for TYPE_CHECKING without runtime import

Python 3.13+.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from babel import Locale
    from babel.core import UnknownLocaleError as UnknownLocaleErrorType
    from babel.numbers import NumberFormatError as NumberFormatErrorType


# pylint: disable=unnecessary-ellipsis
# Reason: Ellipsis (...) is the standard Protocol method body per PEP 544
class BabelNumbersProtocol(Protocol):
    """Protocol for Babel numbers module interface.

    Defines the subset of babel.numbers API actually used by GrammarEngine.
    """

    def get_decimal_symbol(self, locale: Locale | str | None = None) -> str:
        """Return the locale's decimal separator."""
        ...

    def get_group_symbol(self, locale: Locale | str | None = None) -> str:
        """Return the locale's grouping separator."""
        ...

    def get_minus_sign_symbol(self, locale: Locale | str | None = None) -> str:
        """Return the locale's minus sign."""
        ...

    def get_plus_sign_symbol(self, locale: Locale | str | None = None) -> str:
        """Return the locale's plus sign."""
        ...

    def parse_decimal(
        self,
        string: str,
        locale: Locale | str | None = None,
        strict: bool = False,
    ) -> Decimal:
        """Parse a locale-formatted decimal string."""
        ...
# pylint: enable=unnecessary-ellipsis


__all__ = [
    "BabelImportError",
    "BabelNumbersProtocol",
    "get_babel_numbers",
    "get_locale_class",
    "get_number_format_error",
    "get_unknown_locale_error",
    "is_babel_available",
    "require_babel",
]


@lru_cache(maxsize=1)
def _check_babel_available() -> bool:
    """Check if Babel is installed (computed once, cached via lru_cache)."""
    try:
        import babel  # noqa: F401, PLC0415  # pylint: disable=unused-import

        return True
    except ImportError:
        return False


class BabelImportError(ImportError):
    """Raised when Babel is required but not installed."""

    def __init__(self, feature: str) -> None:
        """Create error with feature-specific message.

        Args:
            feature: Name of the feature requiring Babel
        """
        message = (
            f"{feature} requires Babel for CLDR locale data. "
            "Install with: pip install grammarengine[babel]"
        )
        super().__init__(message)
        self.feature = feature


def is_babel_available() -> bool:
    """Check if Babel is installed.

    Returns:
        True if Babel is installed and importable, False otherwise.
    """
    return _check_babel_available()


def require_babel(feature: str) -> None:
    """Assert that Babel is available, raising BabelImportError if not.

    Args:
        feature: Name of the feature requiring Babel (for error message)

    Raises:
        BabelImportError: If Babel is not installed
    """
    if not _check_babel_available():
        raise BabelImportError(feature)


def get_locale_class() -> type[Locale]:
    """Get the Babel Locale class.

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("get_locale_class")
    from babel import Locale  # noqa: PLC0415

    return Locale


def get_unknown_locale_error() -> type[UnknownLocaleErrorType]:
    """Get the Babel UnknownLocaleError exception class.

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("get_unknown_locale_error")
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    return UnknownLocaleError


def get_number_format_error() -> type[NumberFormatErrorType]:
    """Get the Babel NumberFormatError exception class.

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("get_number_format_error")
    from babel.numbers import NumberFormatError  # noqa: PLC0415

    return NumberFormatError


def get_babel_numbers() -> BabelNumbersProtocol:
    """Get the Babel numbers module.

    Returns:
        The babel.numbers module (typed via BabelNumbersProtocol)

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("get_babel_numbers")
    from babel import numbers  # noqa: PLC0415

    return numbers
