"""
Diff Generator Service - Character-level alignment of two text revisions
"""

from __future__ import annotations

import logging

from proofdiff.models.diff import DiffComparison, DiffSegment, DiffStats, SegmentKind
from proofdiff.services.errors import InputTooLongError

logger = logging.getLogger(__name__)


def diff(
    reference: str,
    candidate: str,
    collapse_deleted_after_replaced: bool = False,
) -> list[DiffSegment]:
    """Align ``candidate`` against ``reference`` character by character.

    Characters only in ``reference`` come out as ``Replaced``, characters only
    in ``candidate`` as ``Deleted``. Time and memory are O(len(reference) *
    len(candidate)); callers must bound the input size.
    """
    m = len(reference)
    n = len(candidate)

    # dp[i][j] = LCS length of reference[:i] and candidate[:j]
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row, prev = dp[i], dp[i - 1]
        ref_char = reference[i - 1]
        for j in range(1, n + 1):
            if ref_char == candidate[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = max(prev[j], row[j - 1])

    # Backtrack from the end; ties go to the candidate axis (Deleted)
    raw: list[tuple[SegmentKind, str]] = []
    i, j = m, n
    while i > 0 or j > 0:
        if i > 0 and j > 0 and reference[i - 1] == candidate[j - 1]:
            raw.append((SegmentKind.EQUAL, reference[i - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            raw.append((SegmentKind.DELETED, candidate[j - 1]))
            j -= 1
        else:
            raw.append((SegmentKind.REPLACED, reference[i - 1]))
            i -= 1
    raw.reverse()

    return _merge_runs(raw, collapse_deleted_after_replaced)


align = diff


def _merge_runs(
    raw: list[tuple[SegmentKind, str]],
    collapse_deleted_after_replaced: bool,
) -> list[DiffSegment]:
    """Run-length merge single characters into segments"""
    runs: list[tuple[SegmentKind, list[str]]] = []
    for kind, char in raw:
        last_kind = runs[-1][0] if runs else None
        if (
            collapse_deleted_after_replaced
            and kind == SegmentKind.DELETED
            and last_kind == SegmentKind.REPLACED
        ):
            continue
        if kind == last_kind:
            runs[-1][1].append(char)
        else:
            runs.append((kind, [char]))

    return [DiffSegment(kind=kind, content="".join(chars)) for kind, chars in runs]


def mask_deleted(segments: list[DiffSegment], placeholder: str = " ") -> list[DiffSegment]:
    """Blank out Deleted runs, keeping their position in the view"""
    return [
        DiffSegment(kind=segment.kind, content=placeholder)
        if segment.kind == SegmentKind.DELETED
        else segment
        for segment in segments
    ]


def compare(left: str, right: str) -> DiffComparison:
    """Build the side-by-side view of two texts with summary stats"""
    left_diff = diff(left, right, collapse_deleted_after_replaced=True)
    right_diff = diff(right, left, collapse_deleted_after_replaced=True)

    replaced = sum(1 for s in right_diff if s.kind == SegmentKind.REPLACED)
    deleted = sum(1 for s in right_diff if s.kind == SegmentKind.DELETED)

    common = sum(len(s.content) for s in left_diff if s.kind == SegmentKind.EQUAL)
    longest = max(len(left), len(right))
    similarity = round(common / longest * 100, 2) if longest > 0 else 0.0

    return DiffComparison(
        left=mask_deleted(left_diff),
        right=mask_deleted(right_diff),
        stats=DiffStats(
            replaced=replaced,
            deleted=deleted,
            changes=replaced + deleted,
            similarity=similarity,
        ),
    )


class DiffGenerator:
    """Generate character diffs with an input length gate"""

    def __init__(self, max_length: int | None = None, collapse_deleted_after_replaced: bool = True):
        if max_length is not None and max_length < 1:
            raise ValueError(f"max_length must be a positive integer or None, got {max_length}")
        self.max_length = max_length
        self.collapse_deleted_after_replaced = collapse_deleted_after_replaced

    @classmethod
    def from_config(cls, config: dict) -> "DiffGenerator":
        """Build from the ``diff`` section of the backend config"""
        section = config.get("diff", {})
        return cls(
            max_length=section.get("max_length"),
            collapse_deleted_after_replaced=section.get("collapse_deleted_after_replaced", True),
        )

    def check_length(self, *texts: str) -> None:
        """Raise if any text is longer than the configured limit"""
        if self.max_length is None:
            return
        for text in texts:
            if len(text) > self.max_length:
                logger.warning(
                    "[DiffGenerator] Rejected input of %d chars (limit %d)",
                    len(text),
                    self.max_length,
                )
                raise InputTooLongError(len(text), self.max_length)

    def generate_diff(
        self,
        reference: str,
        candidate: str,
        collapse: bool | None = None,
    ) -> list[DiffSegment]:
        """Gate, then align ``candidate`` against ``reference``"""
        self.check_length(reference, candidate)
        if collapse is None:
            collapse = self.collapse_deleted_after_replaced
        segments = diff(reference, candidate, collapse_deleted_after_replaced=collapse)
        logger.debug("[DiffGenerator] %d segments for %d/%d chars", len(segments), len(reference), len(candidate))
        return segments

    def generate_comparison(self, left: str, right: str) -> DiffComparison:
        """Gate, then build the side-by-side comparison"""
        self.check_length(left, right)
        return compare(left, right)
