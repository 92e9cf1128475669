"""Proofreading session API models"""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from .issue import ALL_CATEGORIES, CorrectionRequest, Issue


class SessionCreateRequest(BaseModel):
    """Request to open a session on a checked text"""

    text: str
    corrections: list[CorrectionRequest] | None = None
    raw: str | None = None  # Unparsed model output, used when corrections is absent
    strategy: str | None = None  # FixStrategy value; None = configured default

    @model_validator(mode="after")
    def _has_corrections(self) -> "SessionCreateRequest":
        if self.corrections is None and self.raw is None:
            raise ValueError("either corrections or raw must be provided")
        return self


class AcceptRequest(BaseModel):
    """Request to accept an issue, optionally with an edited suggestion"""

    suggestion: str | None = None


class CategoryRequest(BaseModel):
    """Request for a batch transition over one category"""

    category: str = ALL_CATEGORIES


class SegmentView(BaseModel):
    """One run of the annotated view as sent to the client"""

    kind: str  # "text" or "highlight"
    content: str
    issue_id: int | None = None
    css_class: str | None = None


class SessionResponse(BaseModel):
    """Full state of a proofreading session"""

    session_id: str
    text: str
    issues: list[Issue]
    segments: list[SegmentView]
    unfixed_count: int
    ignored_count: int
    category_counts: dict[str, int]
    complete: bool
