"""Correction and issue models for proofreading sessions.

A correction request is what an external checker (usually a language model)
proposes: replace ``original`` with ``suggestion``. Anchoring turns each
request into an :class:`Issue` carrying offsets into the checked text and the
mutable review state (fixed / ignored).
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class IssueCategory(str, Enum):
    """Closed vocabulary shared with renderers and exporters.

    Values are part of the wire format and must not change.
    """

    TYPO = "Typo"
    GRAMMAR = "Grammar"
    PUNCTUATION = "Punctuation"
    STYLE = "Style"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]

    @classmethod
    def parse(cls, value: object) -> "IssueCategory":
        """Coerce a free-form label into a category.

        Missing labels default to ``Grammar``; anything unrecognised lands in
        the ``Style`` fallback bucket instead of failing.
        """
        if isinstance(value, IssueCategory):
            return value
        if not str(value or "").strip():
            return cls.GRAMMAR
        return cls.lookup(value) or cls.STYLE

    @classmethod
    def lookup(cls, value: object) -> "IssueCategory | None":
        """Exact category for a known label or alias, else ``None``"""
        if isinstance(value, IssueCategory):
            return value
        label = str(value or "").strip()
        for member in cls:
            if member.value.lower() == label.lower():
                return member
        return _CATEGORY_ALIASES.get(label)


# Labels used by the upstream Chinese prompt
_CATEGORY_ALIASES = {
    "错别字": IssueCategory.TYPO,
    "语法错误": IssueCategory.GRAMMAR,
    "标点符号": IssueCategory.PUNCTUATION,
    "表达优化": IssueCategory.STYLE,
}


ALL_CATEGORIES = "all"


class CategoryStyle(str, Enum):
    """Display bucket used when highlighting an issue"""

    ERROR = "error"
    WARNING = "warning"
    SUGGEST = "suggest"
    INFO = "info"


class CorrectionRequest(BaseModel):
    """A proposed "replace X with Y" correction, without offsets"""

    original: str = Field(min_length=1)
    suggestion: str = ""
    reason: str = ""
    category: IssueCategory = IssueCategory.GRAMMAR

    @field_validator("suggestion", "reason", mode="before")
    def _coerce_text(cls, value: object) -> str:
        return "" if value is None else str(value)

    @field_validator("category", mode="before")
    def _coerce_category(cls, value: object) -> IssueCategory:
        return IssueCategory.parse(value)


class Issue(BaseModel):
    """One anchored correction with its review state.

    ``start``/``end`` are half-open codepoint offsets into the text snapshot
    the issue was anchored against. They are never updated after fixes.
    """

    id: int
    original: str
    suggestion: str
    reason: str = ""
    category: IssueCategory = IssueCategory.GRAMMAR
    start: int = 0
    end: int = 0
    locatable: bool = False
    fixed: bool = False
    ignored: bool = False
    edited_suggestion: str | None = None  # set when accepted with an override

    @field_validator("category", mode="before")
    def _coerce_category(cls, value: object) -> IssueCategory:
        return IssueCategory.parse(value)

    @property
    def replacement(self) -> str:
        """Text written into the document when this issue is fixed"""
        if self.edited_suggestion is not None:
            return self.edited_suggestion
        return self.suggestion

    @property
    def pending(self) -> bool:
        return not self.fixed and not self.ignored

    def matches(self, category: IssueCategory | str) -> bool:
        """True when the issue falls under ``category`` (or ``"all"``).

        Unknown filter labels match nothing.
        """
        if category == ALL_CATEGORIES:
            return True
        return self.category == IssueCategory.lookup(category)


class AnnotatedSegment(BaseModel):
    """A run of the linear annotated view.

    Highlight segments hold a reference to the live Issue, so the displayed
    content follows the issue state after the view was built.
    """

    kind: Literal["text", "highlight"]
    text: str
    issue: Issue | None = None

    @property
    def content(self) -> str:
        if self.issue is None:
            return self.text
        if self.issue.fixed:
            return self.issue.replacement
        return self.issue.original
