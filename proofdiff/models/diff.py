"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class SegmentKind(str, Enum):
    """Per-character classification of an alignment"""

    EQUAL = "Equal"
    DELETED = "Deleted"  # only in the candidate
    REPLACED = "Replaced"  # only in the reference


class DiffSegment(BaseModel):
    """A contiguous run of characters sharing one kind"""

    model_config = ConfigDict(frozen=True)

    kind: SegmentKind
    content: str

    @field_validator("content")
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("segment content must not be empty")
        return value


class DiffStats(BaseModel):
    """Summary of a two-way text comparison"""

    replaced: int
    deleted: int
    changes: int
    similarity: float  # percentage, 0-100


class DiffComparison(BaseModel):
    """Side-by-side comparison of two texts"""

    left: list[DiffSegment]
    right: list[DiffSegment]
    stats: DiffStats


class DiffRequest(BaseModel):
    """Request to align two texts"""

    reference: str
    candidate: str
    collapse: bool | None = None  # None = use the configured default


class CompareRequest(BaseModel):
    """Request for a side-by-side comparison"""

    left: str
    right: str
