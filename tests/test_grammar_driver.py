"""Tests for parse_to_end.

End-to-end scenarios over layout-style records, plus the driver's input
size and nesting depth bounds.
"""

from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor

import pytest

from grammarengine import parse_to_end
from grammarengine.core.depth_guard import depth_clamp
from grammarengine.diagnostics import DiagnosticCode, GrammarParseError
from grammarengine.grammar import Grammar, Literal, Token
from grammarengine.syntax import Cursor, Failure, Right, Success

# ============================================================================
# GRAMMARS
# ============================================================================

integer = Token(r"\d+").map(int)
spaces = -Token(r" *")

point = (
    -Literal("(") * spaces * integer * spaces * -Literal(",") * spaces * integer * spaces
    * -Literal(")")
).map(tuple)
rect = (point * spaces * point).map(tuple)
layer = Token(r"M\d+").map(lambda s: int(s[1:]))
routed_shape = (
    -Literal("RoutedShape ") * layer * spaces * rect * -Literal("\n")
).map(lambda v: {"layer": v[0], "rect": v[1]})


def _or_chain(length: int) -> Grammar[object]:
    grammar: Grammar[object] = Literal("x")
    for _ in range(length):
        grammar = grammar | Literal("y")
    return grammar


def _nested_many(levels: int) -> Grammar[object]:
    grammar: Grammar[object] = Literal("a")
    for _ in range(levels):
        grammar = grammar.many()
    return grammar


# ============================================================================
# SCENARIOS
# ============================================================================


class TestScenarios:
    """Whole-input parses."""

    def test_numbers_then_word(self) -> None:
        digits = Token(r"\d+").map(int)
        ws = -Token(r"\s*")
        word = Token(r"\w+")

        result = parse_to_end("123 456 aaa", digits * ws * digits * ws * (digits | word))

        assert isinstance(result, Success)
        assert result.value == (123, 456, Right("aaa"))
        assert result.cursor.pos == 11

    def test_routed_shape_record(self) -> None:
        result = parse_to_end("RoutedShape M2 (694,482) (700,517)\n", routed_shape)

        assert isinstance(result, Success)
        assert result.value == {"layer": 2, "rect": ((694, 482), (700, 517))}

    def test_many_records(self) -> None:
        text = "RoutedShape M1 (0,0) (1,1)\nRoutedShape M3 ( 5 , 6 ) (7,8)\n"

        result = parse_to_end(text, routed_shape.many())

        assert isinstance(result, Success)
        assert [record["layer"] for record in result.value] == [1, 3]
        assert result.value[1]["rect"] == ((5, 6), (7, 8))

    def test_trailing_input_is_incomplete(self) -> None:
        result = parse_to_end("123abc", Token(r"\d+").map(int))

        assert isinstance(result, Failure)
        assert result.code is DiagnosticCode.INCOMPLETE_PARSE
        assert result.offset == 3
        assert result.text == "123abc"
        assert str(result) == (
            "Parse incomplete: 3 character(s) left unconsumed at offset 3: "
            "consumed '123', remaining 'abc'"
        )

    def test_exhausted_alternatives(self) -> None:
        result = parse_to_end("C", Token("A") | Token("B"))

        assert isinstance(result, Failure)
        assert result.code is DiagnosticCode.ALTERNATIVES_EXHAUSTED
        assert result.offset == 0
        assert result.message == "could not match A <+or+> could not match B"
        assert len(result.causes) == 2

    def test_grammar_failure_returned_unchanged(self) -> None:
        grammar = Literal("a") * Literal("b")

        result = parse_to_end("ax", grammar)

        assert result == grammar.evaluate(Cursor("ax"))

    def test_empty_input(self) -> None:
        assert parse_to_end("", Literal("a").many()) == Success((), Cursor("", 0))
        assert isinstance(parse_to_end("", Literal("a")), Failure)

    def test_unwrap(self) -> None:
        assert parse_to_end("42", integer).unwrap() == 42

        with pytest.raises(GrammarParseError, match=r"1:3: Parse incomplete"):
            parse_to_end("42x", integer).unwrap()


# ============================================================================
# BOUNDS
# ============================================================================


class TestSourceSize:
    """Input size limit."""

    def test_oversized_input_rejected(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="grammarengine.grammar.driver"):
            result = parse_to_end("a" * 11, Literal("a").many(), max_source_size=10)

        assert isinstance(result, Failure)
        assert result.code is DiagnosticCode.SOURCE_TOO_LARGE
        assert result.offset == 0
        assert "exceeds limit" in caplog.text

    def test_at_limit_accepted(self) -> None:
        result = parse_to_end("a" * 10, Literal("a").many(), max_source_size=10)

        assert isinstance(result, Success)

    def test_zero_disables_check(self) -> None:
        result = parse_to_end("a" * 100, Literal("a").many(), max_source_size=0)

        assert isinstance(result, Success)


class TestNestingDepth:
    """Nesting depth bound."""

    def test_long_or_chain_exceeds_default(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="grammarengine.grammar.driver"):
            result = parse_to_end("y", _or_chain(150))

        assert isinstance(result, Failure)
        assert result.code is DiagnosticCode.NESTING_DEPTH_EXCEEDED
        assert result.offset == 0
        assert "nesting depth" in caplog.text

    def test_raised_limit_allows_chain(self) -> None:
        if sys.getrecursionlimit() < 1000:
            pytest.skip("recursion limit too low for this depth")

        result = parse_to_end("y", _or_chain(150), max_depth=200)

        assert isinstance(result, Success)
        assert result.cursor.pos == 1

    def test_shallow_grammar_unaffected(self) -> None:
        result = parse_to_end("x", _or_chain(5), max_depth=10)

        assert isinstance(result, Success)

    def test_requested_depth_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "getrecursionlimit", lambda: 250)

        result = parse_to_end("y", _or_chain(150), max_depth=10_000)

        assert isinstance(result, Failure)
        assert result.message == "Maximum grammar nesting depth (100) exceeded"

    def test_nested_many_under_clamped_depth(self) -> None:
        levels = depth_clamp(10**6) - 5

        result = parse_to_end("a", _nested_many(levels), max_depth=10**6)

        assert isinstance(result, Success | Failure)

    def test_stack_exhaustion_is_a_failure(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        real_limit = sys.getrecursionlimit()
        monkeypatch.setattr(sys, "getrecursionlimit", lambda: real_limit * 100)

        with caplog.at_level(logging.WARNING, logger="grammarengine.grammar.driver"):
            result = parse_to_end("a", _nested_many(real_limit), max_depth=10**9)

        assert isinstance(result, Failure)
        assert result.code is DiagnosticCode.NESTING_DEPTH_EXCEEDED
        assert result.offset == 0
        assert "Interpreter stack exhausted" in caplog.text


# ============================================================================
# CONCURRENCY
# ============================================================================


class TestConcurrency:
    """A grammar tree is shared read-only across threads."""

    def test_shared_grammar_parallel_parses(self) -> None:
        texts = [f"RoutedShape M{i} ({i},{i}) ({i + 1},{i + 1})\n" for i in range(50)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda text: parse_to_end(text, routed_shape), texts))

        assert [result.unwrap()["layer"] for result in results] == list(range(50))
