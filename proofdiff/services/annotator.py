"""
Annotator Service - Anchor correction requests in a text and build the
annotated view
"""

from __future__ import annotations

import logging
from typing import Iterable

from proofdiff.models.diff import DiffSegment
from proofdiff.models.issue import (
    ALL_CATEGORIES,
    AnnotatedSegment,
    CategoryStyle,
    CorrectionRequest,
    Issue,
    IssueCategory,
)
from proofdiff.services.diff_generator import diff, mask_deleted

logger = logging.getLogger(__name__)


def anchor(base_text: str, requests: Iterable[CorrectionRequest]) -> list[Issue]:
    """Locate every request's ``original`` in ``base_text``.

    Requests are searched in the given order with a cursor that only moves
    forward. After a hit at ``p`` the cursor moves to ``p + 1`` rather than
    past the match, so a later, shorter request inside the same region is
    still found. Requests that cannot be found become unlocatable issues,
    pre-ignored at offsets ``0, 0``.
    """
    issues: list[Issue] = []
    cursor = 0
    unlocatable = 0

    for issue_id, request in enumerate(requests):
        issue = Issue(
            id=issue_id,
            original=request.original,
            suggestion=request.suggestion,
            reason=request.reason,
            category=request.category,
            ignored=True,
        )
        position = base_text.find(request.original, cursor)
        if position != -1:
            issue.start = position
            issue.end = position + len(request.original)
            issue.locatable = True
            issue.ignored = False
            cursor = position + 1
            logger.debug("[Annotator] Issue %d anchored at [%d, %d)", issue_id, issue.start, issue.end)
        else:
            unlocatable += 1
            logger.debug("[Annotator] Issue %d not found: %r", issue_id, request.original)
        issues.append(issue)

    if unlocatable:
        logger.warning("[Annotator] %d of %d corrections could not be located", unlocatable, len(issues))

    # Unlocatable issues (start 0) go ahead of a hit at offset 0
    issues.sort(key=lambda issue: (issue.start, issue.locatable))
    return issues


def reconstruct(base_text: str, issues: list[Issue]) -> list[AnnotatedSegment]:
    """Split ``base_text`` into plain runs and issue highlights.

    ``issues`` must be sorted by ``start`` and must not overlap, which is what
    :func:`anchor` returns. Unlocatable issues are skipped.
    """
    located = [issue for issue in issues if issue.locatable]
    if not located:
        return [AnnotatedSegment(kind="text", text=base_text)]

    segments: list[AnnotatedSegment] = []
    last_index = 0
    for issue in located:
        if issue.start > last_index:
            segments.append(AnnotatedSegment(kind="text", text=base_text[last_index : issue.start]))
        segments.append(
            AnnotatedSegment(kind="highlight", text=base_text[issue.start : issue.end], issue=issue)
        )
        last_index = issue.end

    if last_index < len(base_text):
        segments.append(AnnotatedSegment(kind="text", text=base_text[last_index:]))

    return segments


def display_order(issues: list[Issue]) -> list[Issue]:
    """Issue panel order: located issues by offset, unlocatable ones last"""
    return sorted(issues, key=lambda issue: (not issue.locatable, issue.start))


def preview(issue: Issue) -> list[DiffSegment]:
    """Diff of the issue's replacement against its original text"""
    return mask_deleted(diff(issue.replacement, issue.original, collapse_deleted_after_replaced=True))


_CATEGORY_STYLES = {
    IssueCategory.TYPO: CategoryStyle.ERROR,
    IssueCategory.GRAMMAR: CategoryStyle.WARNING,
    IssueCategory.PUNCTUATION: CategoryStyle.SUGGEST,
    IssueCategory.STYLE: CategoryStyle.INFO,
}


def category_style(category: IssueCategory | str | None) -> CategoryStyle:
    """Display bucket for a category; unknown labels map to ``info``"""
    return _CATEGORY_STYLES[IssueCategory.parse(category)]


def highlight_class(issue: Issue, active_category: IssueCategory | str = ALL_CATEGORIES) -> str:
    """CSS class for an issue highlight in the annotated view"""
    if issue.fixed:
        return "highlight-fixed"
    if issue.ignored:
        return "highlight-ignored"

    css = f"highlight-{category_style(issue.category).value}"
    if not issue.matches(active_category):
        css += " dimmed"
    return css
