"""
Code Formatter Service - Reformat JSON, SQL, JS/TS, CSS and HTML text

JSON is parsed and re-serialized, the SQL family is handed to sqlparse, and
everything else goes through a punctuation-driven re-indentation pass. The
heuristic pass does not understand strings, comments or regular expressions,
so braces, semicolons and angle brackets inside them are treated as structure.
"""

from __future__ import annotations

import json
import re
import time

import sqlparse

from models.format import (
    FormatResult,
    FormatStats,
    FormatStrategy,
    KeywordCase,
    SyntaxKind,
)

BLANK_LINE_RUN = re.compile(r"\n\s*\n")
WHITESPACE_RUN = re.compile(r"\s+")
LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")

_LANGUAGE_LABELS = {
    SyntaxKind.JAVASCRIPT: "JavaScript",
    SyntaxKind.TYPESCRIPT: "TypeScript",
    SyntaxKind.CSS: "CSS",
    SyntaxKind.HTML: "HTML",
}


class ParseError(ValueError):
    """Input declared as a structured format is not well-formed"""


class FormatError(RuntimeError):
    """A formatting dependency rejected the input or failed unexpectedly"""


def strategy_for(syntax: SyntaxKind) -> FormatStrategy:
    """Which strategy handles the given syntax"""
    if syntax is SyntaxKind.JSON:
        return FormatStrategy.EXACT
    if syntax.is_sql:
        return FormatStrategy.EXTERNAL
    return FormatStrategy.HEURISTIC


class CodeFormatter:
    """Reformat text according to its declared syntax family"""

    def reformat(
        self,
        raw_text: str,
        syntax: SyntaxKind,
        indent_width: int,
        keyword_case: KeywordCase | None = None,
        blank_lines: int = 1,
    ) -> FormatResult:
        """Format raw_text and collect output statistics.

        Raises ParseError for invalid JSON, FormatError when the SQL
        formatter (or a heuristic pass) fails, and ValueError for
        invalid options.
        """
        syntax = SyntaxKind(syntax)
        if indent_width <= 0:
            raise ValueError(f"indent_width must be positive, got {indent_width}")
        if blank_lines < 0:
            raise ValueError(f"blank_lines must be non-negative, got {blank_lines}")

        started = time.perf_counter()

        if syntax is SyntaxKind.JSON:
            formatted = self.format_json(raw_text, indent_width)
        elif syntax.is_sql:
            formatted = self.format_sql(
                raw_text, syntax, indent_width, keyword_case, blank_lines
            )
        else:
            formatted = self._run_heuristic(raw_text, syntax, indent_width)

        elapsed = time.perf_counter() - started

        return FormatResult(
            formatted_text=formatted,
            syntax=syntax,
            strategy=strategy_for(syntax),
            stats=FormatStats(
                lines=len(formatted.split("\n")),
                characters=len(formatted),
                processing_time=round(elapsed, 2),
            ),
        )

    # ========== Exact / External ==========

    def format_json(self, raw_text: str, indent_width: int) -> str:
        """Parse and re-serialize JSON, preserving key order"""
        try:
            parsed = json.loads(raw_text, parse_constant=_reject_constant)
        except ValueError as e:
            raise ParseError(f"JSON formatting error: {e}") from e
        except RecursionError as e:
            raise FormatError(f"JSON formatting error: {e}") from e

        try:
            formatted = json.dumps(parsed, indent=indent_width, ensure_ascii=False)
        except RecursionError as e:
            raise FormatError(f"JSON formatting error: {e}") from e

        # Lone surrogates cannot be encoded as UTF-8, keep them escaped
        return LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", formatted)

    def format_sql(
        self,
        raw_text: str,
        dialect: SyntaxKind,
        indent_width: int,
        keyword_case: KeywordCase | None,
        blank_lines: int,
    ) -> str:
        """Format each SQL statement with sqlparse and join them.

        sqlparse is dialect-agnostic, so the dialect only selects this path.
        """
        case = KeywordCase(keyword_case).value if keyword_case else None
        try:
            statements = [s for s in sqlparse.split(raw_text) if s.strip()]
            formatted = [
                sqlparse.format(
                    statement,
                    reindent=True,
                    indent_width=indent_width,
                    keyword_case=case,
                ).strip()
                for statement in statements
            ]
        except Exception as e:
            raise FormatError(f"SQL formatting error: {e}") from e

        return ("\n" * (blank_lines + 1)).join(formatted)

    # ========== Heuristic ==========

    def _run_heuristic(self, raw_text: str, syntax: SyntaxKind, indent_width: int) -> str:
        label = _LANGUAGE_LABELS[syntax]
        try:
            if syntax is SyntaxKind.CSS:
                return self.format_css(raw_text, indent_width)
            if syntax is SyntaxKind.HTML:
                return self.format_html(raw_text, indent_width)
            return self.format_script(raw_text, indent_width)
        except Exception as e:
            raise FormatError(f"{label} formatting error: {e}") from e

    def format_script(self, code: str, indent_width: int) -> str:
        """Break after '{' and ';', before '}', then re-indent by brace depth"""
        formatted = code.replace("{", "{\n")
        formatted = formatted.replace("}", "\n}")
        formatted = formatted.replace(";", ";\n")
        formatted = BLANK_LINE_RUN.sub("\n", formatted)
        return _reindent_braces(formatted.split("\n"), indent_width)

    def format_css(self, css: str, indent_width: int) -> str:
        """Collapse whitespace, break around rule punctuation, re-indent"""
        formatted = WHITESPACE_RUN.sub(" ", css)
        formatted = formatted.replace("{", " {\n")
        formatted = formatted.replace("}", "\n}\n")
        formatted = formatted.replace(";", ";\n")
        formatted = BLANK_LINE_RUN.sub("\n", formatted)
        return _reindent_braces(formatted.split("\n"), indent_width)

    def format_html(self, html: str, indent_width: int) -> str:
        """Put every tag on its own line and indent by tag nesting"""
        formatted = html.replace(">", ">\n")
        formatted = formatted.replace("<", "\n<")
        formatted = BLANK_LINE_RUN.sub("\n", formatted)

        indent = " " * indent_width
        level = 0
        result = []
        for line in formatted.split("\n"):
            trimmed = line.strip()
            if not trimmed:
                continue
            if trimmed.startswith("</"):
                level -= 1
            result.append(indent * max(0, level) + trimmed)
            if (
                trimmed.startswith("<")
                and not trimmed.startswith("</")
                and not trimmed.endswith("/>")
            ):
                level += 1
        return "\n".join(result)


def _reindent_braces(lines: list[str], indent_width: int) -> str:
    # A line is dedented before it is emitted if it closes a block and
    # indents the following lines if it opens one.
    indent = " " * indent_width
    level = 0
    result = []
    for line in lines:
        trimmed = line.strip()
        if "}" in trimmed:
            level -= 1
        result.append(indent * max(0, level) + trimmed)
        if "{" in trimmed:
            level += 1
    return "\n".join(result)


def _reject_constant(name: str):
    raise ValueError(f"Unexpected token {name}")


_formatter = CodeFormatter()


def reformat(
    raw_text: str,
    syntax: SyntaxKind,
    indent_width: int = 2,
    keyword_case: KeywordCase | None = None,
    blank_lines: int = 1,
) -> FormatResult:
    """Module-level shortcut for CodeFormatter.reformat"""
    return _formatter.reformat(raw_text, syntax, indent_width, keyword_case, blank_lines)
