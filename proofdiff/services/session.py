"""
Proofreading Session - Review state of one checked text

A session owns the issues anchored against one text snapshot and the live
text that accepted fixes are written into. Issues move through
``pending -> fixed`` and ``pending -> ignored -> pending``; fixed issues stay
fixed.
"""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Iterable, Iterator

from proofdiff.models.diff import DiffSegment
from proofdiff.models.issue import (
    ALL_CATEGORIES,
    AnnotatedSegment,
    CorrectionRequest,
    Issue,
    IssueCategory,
)
from proofdiff.services.annotator import anchor, display_order, preview, reconstruct
from proofdiff.services.errors import IssueNotFoundError, SessionNotFoundError
from proofdiff.services.fix_applier import FixStrategy, apply_fixes

logger = logging.getLogger(__name__)


class ProofreadingSession:
    """Mutable issue list bound to one immutable text snapshot"""

    def __init__(
        self,
        base_text: str,
        issues: list[Issue],
        strategy: FixStrategy | str = FixStrategy.REPLACE_ALL_OCCURRENCES,
    ):
        self.base_text = base_text
        self.text = base_text
        self.strategy = FixStrategy(strategy)
        self.issues = issues
        self._by_id = {issue.id: issue for issue in issues}

    @classmethod
    def start(
        cls,
        text: str,
        requests: Iterable[CorrectionRequest],
        strategy: FixStrategy | str = FixStrategy.REPLACE_ALL_OCCURRENCES,
    ) -> "ProofreadingSession":
        """Anchor ``requests`` in ``text`` and open a session on the result"""
        return cls(text, anchor(text, requests), strategy=strategy)

    def get(self, issue_id: int) -> Issue:
        try:
            return self._by_id[issue_id]
        except KeyError:
            raise IssueNotFoundError(issue_id) from None

    # State transitions

    def accept(self, issue_id: int, override_suggestion: str | None = None) -> Issue:
        """Write the issue's suggestion (or an edited one) into the text"""
        issue = self.get(issue_id)
        if issue.fixed:
            return issue
        if override_suggestion is not None:
            issue.edited_suggestion = override_suggestion
        self._apply([issue])
        return issue

    def ignore(self, issue_id: int) -> Issue:
        issue = self.get(issue_id)
        if issue.fixed:
            logger.warning("[Session] Ignoring issue %d which is already fixed", issue_id)
        issue.ignored = True
        return issue

    def unignore(self, issue_id: int) -> Issue:
        issue = self.get(issue_id)
        issue.ignored = False
        return issue

    def fix_category(self, category: IssueCategory | str = ALL_CATEGORIES) -> list[Issue]:
        """Accept every pending issue in ``category`` (or ``"all"``)"""
        targets = self._pending_in(category)
        if targets:
            self._apply(targets)
        return targets

    def fix_all(self) -> list[Issue]:
        return self.fix_category(ALL_CATEGORIES)

    def ignore_category(self, category: IssueCategory | str = ALL_CATEGORIES) -> list[Issue]:
        """Ignore every pending issue in ``category`` (or ``"all"``)"""
        targets = self._pending_in(category)
        for issue in targets:
            issue.ignored = True
        return targets

    # Views

    def unfixed_count(self, category: IssueCategory | str = ALL_CATEGORIES) -> int:
        return len(self._pending_in(category))

    def ignored_count(self) -> int:
        return sum(1 for issue in self.issues if issue.ignored)

    def category_counts(self) -> dict[str, int]:
        counts = {ALL_CATEGORIES: len(self.issues)}
        for category in IssueCategory:
            counts[category.value] = sum(1 for issue in self.issues if issue.category == category)
        return counts

    def is_complete(self) -> bool:
        return self.unfixed_count() == 0

    def segments(self) -> list[AnnotatedSegment]:
        return reconstruct(self.base_text, self.issues)

    def ordered_issues(self) -> list[Issue]:
        return display_order(self.issues)

    def preview(self, issue_id: int) -> list[DiffSegment]:
        return preview(self.get(issue_id))

    def _pending_in(self, category: IssueCategory | str) -> list[Issue]:
        return [issue for issue in self.issues if issue.pending and issue.matches(category)]

    def _apply(self, issues: list[Issue]) -> None:
        if self.strategy is FixStrategy.REPLACE_AT_OFFSET:
            # Offsets refer to base_text, so splice every fix into it again
            ids = {issue.id for issue in issues}
            targets = [issue for issue in self.issues if issue.fixed or issue.id in ids]
            self.text = apply_fixes(self.base_text, targets, strategy=self.strategy)
        else:
            self.text = apply_fixes(self.text, issues, strategy=self.strategy)
        logger.info("[Session] Fixed %d issue(s), %d left", len(issues), self.unfixed_count())


class SessionStore:
    """In-memory sessions, each writable by one caller at a time"""

    def __init__(self):
        self._sessions: dict[str, tuple[ProofreadingSession, threading.Lock]] = {}
        self._lock = threading.Lock()

    def add(self, session: ProofreadingSession) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = (session, threading.Lock())
        logger.info("[SessionStore] Opened session %s with %d issues", session_id, len(session.issues))
        return session_id

    def _entry(self, session_id: str) -> tuple[ProofreadingSession, threading.Lock]:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError:
                raise SessionNotFoundError(session_id) from None

    @contextmanager
    def edit(self, session_id: str) -> Iterator[ProofreadingSession]:
        """Exclusive access to a session for the duration of the block"""
        session, lock = self._entry(session_id)
        with lock:
            yield session

    def remove(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.info("[SessionStore] Closed session %s", session_id)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
