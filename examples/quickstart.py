"""Quickstart example for grammarengine.

This example builds small grammars from primitives and combinators, runs
them with parse_to_end, and shows how failures are reported.

Note: Examples print Failure values directly for brevity. In production,
check the result type (or call unwrap()) before using the value.
"""

from grammarengine import Literal, Token, parse_to_end
from grammarengine.core import is_babel_available
from grammarengine.diagnostics import DiagnosticFormatter, GrammarParseError, OutputFormat
from grammarengine.syntax import Success

# Example 1: Primitive matchers
print("=" * 50)
print("Example 1: Token and Literal")
print("=" * 50)

digits = Token(r"\d+").map(int)
print(parse_to_end("12345", digits))
# Output: Success(value=12345, cursor=...)

print(parse_to_end("hello", Literal("hello")).unwrap())
# Output: hello

# Example 2: Sequencing and skipping
print("\n" + "=" * 50)
print("Example 2: Sequence with Skip")
print("=" * 50)

ws = -Token(r"\s*")
word = Token(r"\w+")
line = digits * ws * digits * ws * (digits | word)

result = parse_to_end("123 456 aaa", line)
print(result.unwrap())
# Output: (123, 456, Right(value='aaa'))

# Example 3: Repetition and options
print("\n" + "=" * 50)
print("Example 3: many / many1 / optional")
print("=" * 50)

numbers = (digits * ws).map(lambda v: v[0]).many()
print(parse_to_end("1 2 3 5 8 13", numbers).unwrap())
# Output: (1, 2, 3, 5, 8, 13)

signed = (Literal("-").optional() * digits).map(lambda v: -v[1] if v[0] else v[1])
print(parse_to_end("-42", signed).unwrap(), parse_to_end("42", signed).unwrap())
# Output: -42 42

# Example 4: Failures
print("\n" + "=" * 50)
print("Example 4: Reading a Failure")
print("=" * 50)

failure = parse_to_end("123abc", digits)
print(failure)
# Output: Parse incomplete: 3 character(s) left unconsumed at offset 3: ...

failure = parse_to_end("C", Token("A") | Token("B"))
print(failure.format_tree())
print(DiagnosticFormatter(output_format=OutputFormat.JSON).format_failure(failure))

try:
    parse_to_end("x = ?", Token(r"\w+") * ws * Literal("=") * ws * digits).unwrap()
except GrammarParseError as e:
    print(e.failure.format_with_context())

# Example 5: Locale-aware numbers (requires grammarengine[babel])
print("\n" + "=" * 50)
print("Example 5: LocaleDecimal")
print("=" * 50)

if is_babel_available():
    from grammarengine.grammar.numbers import LocaleDecimal

    for locale_code, text in [("en_US", "1,234.56"), ("de_DE", "1.234,56")]:
        result = parse_to_end(text, LocaleDecimal(locale_code))
        if isinstance(result, Success):
            print(f"{locale_code}: {text} -> {result.value!r}")
else:
    print("Babel not installed, skipping (pip install grammarengine[babel])")

print("\n" + "=" * 50)
print("[SUCCESS] All examples completed successfully!")
print("=" * 50)
