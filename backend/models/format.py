"""Formatting data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SyntaxKind(str, Enum):
    """Declared content type driving the formatting strategy"""

    JSON = "json"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    CSS = "css"
    HTML = "html"
    SQL = "sql"
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"

    @property
    def is_sql(self) -> bool:
        return self in SQL_DIALECTS


SQL_DIALECTS = frozenset(
    {SyntaxKind.SQL, SyntaxKind.MYSQL, SyntaxKind.POSTGRESQL, SyntaxKind.SQLITE}
)


class KeywordCase(str, Enum):
    """Keyword case policy for the SQL family"""

    UPPER = "upper"
    LOWER = "lower"


class FormatStrategy(str, Enum):
    """How the output was produced"""

    EXACT = "exact"  # parsed and re-serialized
    HEURISTIC = "heuristic"  # punctuation-driven re-indentation
    EXTERNAL = "external"  # delegated to the SQL formatter


class FormatRequest(BaseModel):
    """Request to reformat a blob of text"""

    raw_text: str
    syntax: SyntaxKind
    indent_width: int | None = Field(default=None, gt=0)
    keyword_case: KeywordCase | None = None
    blank_lines: int | None = Field(default=None, ge=0)


class FormatStats(BaseModel):
    """Statistics about the formatted output"""

    lines: int
    characters: int
    processing_time: float  # seconds


class FormatResult(BaseModel):
    """Formatted text and how it was produced"""

    formatted_text: str
    syntax: SyntaxKind
    strategy: FormatStrategy
    stats: FormatStats


class SyntaxInfo(BaseModel):
    """Entry of the supported syntax listing"""

    syntax: SyntaxKind
    strategy: FormatStrategy
    family: str
