"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All failure and exception messages are created here. NO f-strings in
    exception constructors! This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # Separator joining the messages of two failed alternatives
    OR_SEPARATOR = " <+or+> "

    @staticmethod
    def match_failed(pattern: str) -> Diagnostic:
        """Primitive matcher did not match at the current offset.

        Args:
            pattern: The pattern text the matcher was built from

        Returns:
            Diagnostic for MATCH_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.MATCH_FAILED,
            message=f"could not match {pattern}",
            expected=(pattern,),
        )

    @staticmethod
    def alternatives_exhausted(first: Diagnostic, second: Diagnostic) -> Diagnostic:
        """Both branches of an ordered choice failed.

        Args:
            first: Diagnostic of the left branch failure
            second: Diagnostic of the right branch failure

        Returns:
            Diagnostic for ALTERNATIVES_EXHAUSTED
        """
        return Diagnostic(
            code=DiagnosticCode.ALTERNATIVES_EXHAUSTED,
            message=first.message + ErrorTemplate.OR_SEPARATOR + second.message,
            expected=first.expected + second.expected,
        )

    @staticmethod
    def incomplete_parse(remaining: int) -> Diagnostic:
        """Grammar succeeded without consuming the whole input.

        Args:
            remaining: Number of unconsumed characters

        Returns:
            Diagnostic for INCOMPLETE_PARSE
        """
        return Diagnostic(
            code=DiagnosticCode.INCOMPLETE_PARSE,
            message=f"Parse incomplete: {remaining} character(s) left unconsumed",
            hint="Extend the grammar to cover the trailing input",
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int) -> Diagnostic:
        """Grammar evaluation nested deeper than allowed.

        Args:
            max_depth: The depth limit that was exceeded

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Maximum grammar nesting depth ({max_depth}) exceeded",
            hint="Flatten long '|' chains or raise max_depth",
        )

    @staticmethod
    def source_too_large(size: int, max_size: int) -> Diagnostic:
        """Input exceeds the configured size limit.

        Args:
            size: Actual input size in characters
            max_size: Configured limit

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=f"Source size ({size} characters) exceeds limit ({max_size})",
            hint="Pass a larger max_source_size, or 0 to disable the check",
        )

    @staticmethod
    def invalid_pattern(pattern: str, reason: str) -> Diagnostic:
        """Regular expression failed to compile.

        Args:
            pattern: The offending pattern
            reason: Error text from the re module

        Returns:
            Diagnostic for INVALID_PATTERN
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_PATTERN,
            message=f"Invalid token pattern {pattern!r}: {reason}",
        )

    @staticmethod
    def invalid_grammar(combinator: str, received: object) -> Diagnostic:
        """Combinator built from something that is not a Grammar.

        Args:
            combinator: Name of the combinator being constructed
            received: The offending operand

        Returns:
            Diagnostic for INVALID_GRAMMAR
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_GRAMMAR,
            message=(
                f"{combinator} expects Grammar operands, "
                f"got {type(received).__name__}"
            ),
        )

    @staticmethod
    def locale_unknown(locale_code: str) -> Diagnostic:
        """Locale code not recognized by Babel.

        Args:
            locale_code: The locale that failed to load

        Returns:
            Diagnostic for LOCALE_UNKNOWN
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALE_UNKNOWN,
            message=f"Unknown locale: {locale_code}",
            hint="Use a CLDR locale identifier such as 'en_US' or 'de_DE'",
        )

    @staticmethod
    def locale_number_invalid(value: str, locale_code: str, reason: str) -> Diagnostic:
        """Matched number text rejected by Babel.

        Args:
            value: The matched text
            locale_code: Locale used for conversion
            reason: Error text from Babel

        Returns:
            Diagnostic for LOCALE_NUMBER_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALE_NUMBER_INVALID,
            message=f"Invalid {locale_code} number {value!r}: {reason}",
        )
