"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DiffKind(str, Enum):
    """How a line position differs between the two texts"""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class DiffLine(BaseModel):
    """A single line position where the two texts disagree"""

    line_number: int = Field(ge=1)  # 1-indexed
    kind: DiffKind
    new_content: str
    old_content: str | None = None  # only set for "modified"


class DiffRequest(BaseModel):
    """Request to compare two texts"""

    text_a: str
    text_b: str
    name_a: str = "a"
    name_b: str = "b"


class DiffSummary(BaseModel):
    """Counts per difference kind"""

    added: int = 0
    removed: int = 0
    modified: int = 0
    total: int = 0


class DiffResult(BaseModel):
    """Complete positional diff result"""

    lines: list[DiffLine]
    summary: DiffSummary
    report: str  # Plain text, one line per difference


class UnifiedDiffResult(BaseModel):
    """Unified patch between two texts"""

    unified_diff: str
