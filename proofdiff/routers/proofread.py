"""Proofreading session API endpoints"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from proofdiff.models.diff import DiffSegment
from proofdiff.models.issue import Issue
from proofdiff.models.proofread import (
    AcceptRequest,
    CategoryRequest,
    SegmentView,
    SessionCreateRequest,
    SessionResponse,
)
from proofdiff.services.annotator import highlight_class
from proofdiff.services.config_manager import ConfigManager
from proofdiff.services.corrections import parse_corrections
from proofdiff.services.errors import (
    CorrectionParseError,
    IssueNotFoundError,
    SessionNotFoundError,
)
from proofdiff.services.fix_applier import FixStrategy
from proofdiff.services.session import ProofreadingSession, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()
store = SessionStore()


def build_session_response(session_id: str, session: ProofreadingSession) -> SessionResponse:
    """Serialise a session for the client"""
    segments = [
        SegmentView(
            kind=segment.kind,
            content=segment.content,
            issue_id=segment.issue.id if segment.issue else None,
            css_class=highlight_class(segment.issue) if segment.issue else None,
        )
        for segment in session.segments()
    ]
    return SessionResponse(
        session_id=session_id,
        text=session.text,
        issues=session.ordered_issues(),
        segments=segments,
        unfixed_count=session.unfixed_count(),
        ignored_count=session.ignored_count(),
        category_counts=session.category_counts(),
        complete=session.is_complete(),
    )


def _not_found(e: Exception) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


@router.post("/sessions", response_model=SessionResponse)
async def create_session(request: SessionCreateRequest) -> SessionResponse:
    """Anchor a correction list in the text and open a session"""
    if request.corrections is not None:
        corrections = request.corrections
    else:
        try:
            corrections = parse_corrections(request.raw)
        except CorrectionParseError as e:
            raise HTTPException(status_code=422, detail=str(e))

    strategy = request.strategy or ConfigManager.get_instance().get_config()["fix"]["strategy"]
    try:
        strategy = FixStrategy(strategy)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown fix strategy: {strategy}")

    session = ProofreadingSession.start(request.text, corrections, strategy=strategy)
    session_id = store.add(session)
    return build_session_response(session_id, session)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str) -> SessionResponse:
    """Current state of a session"""
    try:
        with store.edit(session_id) as session:
            return build_session_response(session_id, session)
    except SessionNotFoundError as e:
        raise _not_found(e)


@router.delete("/sessions/{session_id}")
async def close_session(session_id: str) -> dict[str, str]:
    """Drop a session"""
    try:
        store.remove(session_id)
    except SessionNotFoundError as e:
        raise _not_found(e)
    return {"status": "closed", "session_id": session_id}


@router.post("/sessions/{session_id}/issues/{issue_id}/accept", response_model=SessionResponse)
async def accept_issue(session_id: str, issue_id: int, request: AcceptRequest | None = None) -> SessionResponse:
    """Accept one issue, with an optional edited suggestion"""
    override = request.suggestion if request else None
    try:
        with store.edit(session_id) as session:
            session.accept(issue_id, override)
            return build_session_response(session_id, session)
    except (SessionNotFoundError, IssueNotFoundError) as e:
        raise _not_found(e)


@router.post("/sessions/{session_id}/issues/{issue_id}/ignore", response_model=SessionResponse)
async def ignore_issue(session_id: str, issue_id: int) -> SessionResponse:
    """Hide one issue"""
    try:
        with store.edit(session_id) as session:
            session.ignore(issue_id)
            return build_session_response(session_id, session)
    except (SessionNotFoundError, IssueNotFoundError) as e:
        raise _not_found(e)


@router.post("/sessions/{session_id}/issues/{issue_id}/unignore", response_model=SessionResponse)
async def unignore_issue(session_id: str, issue_id: int) -> SessionResponse:
    """Restore an ignored issue"""
    try:
        with store.edit(session_id) as session:
            session.unignore(issue_id)
            return build_session_response(session_id, session)
    except (SessionNotFoundError, IssueNotFoundError) as e:
        raise _not_found(e)


@router.get("/sessions/{session_id}/issues/{issue_id}/preview", response_model=list[DiffSegment])
async def preview_issue(session_id: str, issue_id: int) -> list[DiffSegment]:
    """Suggestion-vs-original diff for one issue"""
    try:
        with store.edit(session_id) as session:
            return session.preview(issue_id)
    except (SessionNotFoundError, IssueNotFoundError) as e:
        raise _not_found(e)


@router.post("/sessions/{session_id}/fix", response_model=SessionResponse)
async def fix_category(session_id: str, request: CategoryRequest) -> SessionResponse:
    """Accept every pending issue in a category ("all" for every category)"""
    try:
        with store.edit(session_id) as session:
            fixed: list[Issue] = session.fix_category(request.category)
            logger.info("[Proofread] Session %s: fixed %d issue(s) in %s", session_id, len(fixed), request.category)
            return build_session_response(session_id, session)
    except SessionNotFoundError as e:
        raise _not_found(e)


@router.post("/sessions/{session_id}/ignore", response_model=SessionResponse)
async def ignore_category(session_id: str, request: CategoryRequest) -> SessionResponse:
    """Ignore every pending issue in a category ("all" for every category)"""
    try:
        with store.edit(session_id) as session:
            session.ignore_category(request.category)
            return build_session_response(session_id, session)
    except SessionNotFoundError as e:
        raise _not_found(e)
