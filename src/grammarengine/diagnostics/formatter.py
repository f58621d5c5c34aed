"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from grammarengine.syntax.cursor import Failure

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects (and Failure trees) into
    human-readable or machine-readable output.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to prevent oversized output
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.incomplete_parse(3)
        >>> print(formatter.format(diagnostic))
        error[INCOMPLETE_PARSE]: Parse incomplete: 3 character(s) left unconsumed
          = help: Extend the grammar to cover the trailing input

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        INCOMPLETE_PARSE: Parse incomplete: 3 character(s) left unconsumed
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return json.dumps(self._json_data(diagnostic), ensure_ascii=False)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics.

        Args:
            diagnostics: Iterable of diagnostics to format

        Returns:
            Formatted string with all diagnostics separated by blank lines
        """
        return "\n\n".join(self.format(d) for d in diagnostics)

    def format_failure(self, failure: "Failure") -> str:
        """Format a Failure together with its nested causes.

        Causes of an exhausted alternative are rendered below their parent,
        indented one level per nesting step. JSON output nests them under a
        "causes" key instead.

        Args:
            failure: Failure to format

        Returns:
            Formatted failure tree
        """
        if self.output_format is OutputFormat.JSON:
            return json.dumps(self._json_tree(failure), ensure_ascii=False)

        lines: list[str] = []
        self._append_tree(failure, 0, lines)
        return "\n".join(lines)

    def _append_tree(self, failure: "Failure", level: int, lines: list[str]) -> None:
        indent = "    " * level
        lines.extend(
            indent + line for line in self.format(failure.to_diagnostic()).split("\n")
        )
        for cause in failure.causes:
            self._append_tree(cause, level + 1, lines)

    def _json_tree(self, failure: "Failure") -> dict[str, object]:
        data: dict[str, object] = dict(self._json_data(failure.to_diagnostic()))
        if failure.causes:
            data["causes"] = [self._json_tree(cause) for cause in failure.causes]
        return data

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[MATCH_FAILED]: could not match \\d+
              --> line 1, column 5
              = expected: \\d+
        """
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"

        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        message = self._maybe_sanitize(diagnostic.message)
        parts = [f"{severity_str}[{diagnostic.code.name}]: {message}"]

        if diagnostic.span:
            parts.append(f"  --> line {diagnostic.span.line}, column {diagnostic.span.column}")

        if diagnostic.expected:
            parts.append(f"  = expected: {', '.join(diagnostic.expected)}")

        if diagnostic.hint:
            hint = self._maybe_sanitize(diagnostic.hint)
            parts.append(f"  = help: {hint}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            MATCH_FAILED at 1:5: could not match \\d+
        """
        message = self._maybe_sanitize(diagnostic.message)
        if diagnostic.span:
            return (
                f"{diagnostic.code.name} at "
                f"{diagnostic.span.line}:{diagnostic.span.column}: {message}"
            )
        return f"{diagnostic.code.name}: {message}"

    def _json_data(self, diagnostic: Diagnostic) -> dict[str, str | int | list[str]]:
        data: dict[str, str | int | list[str]] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        if diagnostic.expected:
            data["expected"] = list(diagnostic.expected)

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return data

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled.

        Args:
            text: Text to possibly truncate

        Returns:
            Original or truncated text
        """
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
