"""
Fix Applier Service - Write accepted issues back into a text
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from proofdiff.models.issue import Issue

logger = logging.getLogger(__name__)


class FixStrategy(str, Enum):
    """How an accepted issue is written into the text"""

    # Replace every occurrence of issue.original, wherever it is
    REPLACE_ALL_OCCURRENCES = "ReplaceAllOccurrences"
    # Splice only the anchored [start, end) span
    REPLACE_AT_OFFSET = "ReplaceAtOffset"


def replace_all_occurrences(text: str, issues: list[Issue]) -> tuple[str, list[Issue]]:
    """Content-based replacement.

    Accepting one issue also rewrites every other occurrence of the same
    original text in the document.
    """
    for issue in issues:
        text = text.replace(issue.original, issue.replacement)
    return text, list(issues)


def replace_at_offset(text: str, issues: list[Issue]) -> tuple[str, list[Issue]]:
    """Positional replacement of each issue's anchored span.

    ``issues`` must be ordered by descending ``start`` so earlier offsets stay
    valid while splicing. Unlocatable issues and spans that no longer hold
    the issue's original text are skipped.
    """
    applied = []
    for issue in issues:
        if not issue.locatable:
            continue
        if text[issue.start : issue.end] != issue.original:
            logger.warning(
                "[FixApplier] Stale offsets for issue %d: expected %r at [%d, %d)",
                issue.id,
                issue.original,
                issue.start,
                issue.end,
            )
            continue
        text = text[: issue.start] + issue.replacement + text[issue.end :]
        applied.append(issue)
    return text, applied


_STRATEGIES: dict[FixStrategy, Callable[[str, list[Issue]], tuple[str, list[Issue]]]] = {
    FixStrategy.REPLACE_ALL_OCCURRENCES: replace_all_occurrences,
    FixStrategy.REPLACE_AT_OFFSET: replace_at_offset,
}


def apply_fixes(
    base_text: str,
    issues: list[Issue],
    strategy: FixStrategy | str = FixStrategy.REPLACE_ALL_OCCURRENCES,
) -> str:
    """Apply ``issues`` to ``base_text`` and mark the applied ones fixed.

    Offsets of the other issues are left untouched: they keep referring to
    the text the issues were anchored against.
    """
    apply = _STRATEGIES[FixStrategy(strategy)]
    ordered = sorted(issues, key=lambda issue: issue.start, reverse=True)
    text, applied = apply(base_text, ordered)

    for issue in applied:
        issue.fixed = True

    logger.debug("[FixApplier] Applied %d of %d issues (%s)", len(applied), len(issues), FixStrategy(strategy).value)
    return text
