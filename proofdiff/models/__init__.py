"""Models module - Pydantic data models"""

from .diff import CompareRequest, DiffComparison, DiffRequest, DiffSegment, DiffStats, SegmentKind
from .issue import (
    ALL_CATEGORIES,
    AnnotatedSegment,
    CategoryStyle,
    CorrectionRequest,
    Issue,
    IssueCategory,
)
from .proofread import (
    AcceptRequest,
    CategoryRequest,
    SegmentView,
    SessionCreateRequest,
    SessionResponse,
)

__all__ = [
    # Diff models
    "SegmentKind",
    "DiffSegment",
    "DiffStats",
    "DiffComparison",
    "DiffRequest",
    "CompareRequest",
    # Issue models
    "ALL_CATEGORIES",
    "IssueCategory",
    "CategoryStyle",
    "CorrectionRequest",
    "Issue",
    "AnnotatedSegment",
    # Session API models
    "SessionCreateRequest",
    "AcceptRequest",
    "CategoryRequest",
    "SegmentView",
    "SessionResponse",
]
