"""Locale-aware decimal matcher.

LocaleDecimal matches a number written with a locale's separators
("1,234.56" for en_US, "1.234,56" for de_DE) and converts it to Decimal
(financial precision) with Babel's CLDR-backed parser.

Babel Dependency:
    This module requires Babel for CLDR data. Import is deferred to grammar
    construction time so that engine-only installations never load it.
    Constructing a LocaleDecimal without Babel raises BabelImportError.

Thread-safe. Locale data is resolved once, at construction.

Python 3.13+.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from grammarengine.core.babel_compat import (
    get_babel_numbers,
    get_locale_class,
    get_number_format_error,
    get_unknown_locale_error,
    require_babel,
)
from grammarengine.diagnostics import ErrorTemplate, GrammarDefinitionError
from grammarengine.syntax import Cursor, Result, Success

from .base import Grammar, ParseContext

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["LocaleDecimal"]

# ASCII digits only: str.isdigit() accepts digits like ² that Decimal rejects.
_DIGIT = "[0-9]"

_ASCII_SIGNS = frozenset({"+", "-"})


def _build_regex(group: str, decimal: str, signs: frozenset[str]) -> re.Pattern[str]:
    """Compile the number pattern for one locale's separators.

    Grouped integers must use groups of exactly three digits; an ungrouped
    run of digits is accepted too. The decimal part is optional.
    """
    sign = "|".join(re.escape(s) for s in sorted(signs, key=len, reverse=True))
    grp = re.escape(group)
    dec = re.escape(decimal)
    integer = rf"{_DIGIT}{{1,3}}(?:{grp}{_DIGIT}{{3}})+|{_DIGIT}+"
    return re.compile(
        rf"(?P<sign>{sign})?(?P<number>(?:{integer})(?:{dec}{_DIGIT}+)?)"
    )


@dataclass(frozen=True, slots=True)
class LocaleDecimal(Grammar[Decimal]):
    """Match a locale-formatted decimal number at the cursor.

    Args:
        locale_code: CLDR locale identifier (e.g. "en_US", "de-DE")

    Raises:
        BabelImportError: If Babel is not installed
        GrammarDefinitionError: If locale_code is not a known locale

    Example:
        >>> LocaleDecimal("de_DE").evaluate(Cursor("1.234,5 EUR")).value
        Decimal('1234.5')
    """

    locale_code: str
    _locale: "Locale" = field(init=False, repr=False, compare=False)
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)
    _minus_signs: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        require_babel("LocaleDecimal")
        locale_class = get_locale_class()
        unknown_locale_error = get_unknown_locale_error()
        numbers = get_babel_numbers()

        try:
            locale = locale_class.parse(self.locale_code.replace("-", "_"))
        except (unknown_locale_error, ValueError) as e:
            raise GrammarDefinitionError(
                ErrorTemplate.locale_unknown(self.locale_code)
            ) from e

        minus_signs = frozenset({"-", numbers.get_minus_sign_symbol(locale)})
        signs = _ASCII_SIGNS | minus_signs | {numbers.get_plus_sign_symbol(locale)}
        regex = _build_regex(
            numbers.get_group_symbol(locale),
            numbers.get_decimal_symbol(locale),
            signs,
        )
        object.__setattr__(self, "_locale", locale)
        object.__setattr__(self, "_regex", regex)
        object.__setattr__(self, "_minus_signs", minus_signs)

    def _evaluate(self, cursor: Cursor, context: ParseContext) -> Result[Decimal]:
        found = self._regex.match(cursor.source, cursor.pos)
        if found is None:
            return cursor.fail(ErrorTemplate.match_failed(f"{self.locale_code} decimal"))

        text = found.group("number")
        try:
            value = get_babel_numbers().parse_decimal(text, locale=self._locale)
        except (get_number_format_error(), InvalidOperation, ValueError) as e:
            return cursor.fail(
                ErrorTemplate.locale_number_invalid(found.group(), self.locale_code, str(e))
            )

        if found.group("sign") in self._minus_signs:
            value = -value
        return Success(value, cursor.advance(found.end() - cursor.pos))
