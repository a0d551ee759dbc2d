"""Models module - Pydantic data models"""

from .diff import (
    DiffKind,
    DiffLine,
    DiffRequest,
    DiffResult,
    DiffSummary,
    UnifiedDiffResult,
)
from .format import (
    SQL_DIALECTS,
    FormatRequest,
    FormatResult,
    FormatStats,
    FormatStrategy,
    KeywordCase,
    SyntaxInfo,
    SyntaxKind,
)

__all__ = [
    # Diff models
    "DiffKind",
    "DiffLine",
    "DiffRequest",
    "DiffResult",
    "DiffSummary",
    "UnifiedDiffResult",
    # Format models
    "SQL_DIALECTS",
    "FormatRequest",
    "FormatResult",
    "FormatStats",
    "FormatStrategy",
    "KeywordCase",
    "SyntaxInfo",
    "SyntaxKind",
]
