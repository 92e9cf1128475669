from __future__ import annotations

import threading

import pytest

from proofdiff.models.issue import CorrectionRequest, IssueCategory
from proofdiff.services.errors import IssueNotFoundError, SessionNotFoundError
from proofdiff.services.fix_applier import FixStrategy
from proofdiff.services.session import ProofreadingSession, SessionStore


@pytest.fixture()
def session(story, story_corrections) -> ProofreadingSession:
    return ProofreadingSession.start(story, story_corrections)


def test_start_counts(session):
    assert session.unfixed_count() == 4
    assert session.ignored_count() == 1
    assert session.category_counts() == {
        "all": 5,
        "Typo": 2,
        "Grammar": 1,
        "Punctuation": 1,
        "Style": 1,
    }
    assert session.is_complete() is False


def test_accept_updates_live_text_only(session, story):
    issue = session.accept(0)

    assert issue.fixed is True
    assert session.text == story.replace("小名", "小明")
    assert session.base_text == story
    assert session.unfixed_count() == 3


def test_accept_twice_is_a_noop(session):
    session.accept(1)
    text = session.text
    session.accept(1, "发觉")

    assert session.text == text
    assert session.get(1).edited_suggestion is None


def test_accept_with_override(session):
    issue = session.accept(3, "慌慌张张地")
    assert issue.edited_suggestion == "慌慌张张地"
    assert "他慌慌张张地穿上衣服" in session.text


def test_unknown_issue_raises(session):
    with pytest.raises(IssueNotFoundError):
        session.accept(99)
    with pytest.raises(KeyError):
        session.ignore(99)


def test_ignore_and_unignore(session):
    session.ignore(2)
    assert session.get(2).ignored is True
    assert session.unfixed_count() == 3

    session.unignore(2)
    assert session.get(2).ignored is False
    assert session.unfixed_count() == 4


def test_ignoring_a_fixed_issue_is_logged_not_blocked(session, caplog):
    session.accept(0)
    session.ignore(0)

    assert session.get(0).ignored is True
    assert session.get(0).fixed is True
    assert "already fixed" in caplog.text


def test_fix_category(session):
    fixed = session.fix_category(IssueCategory.TYPO)

    assert sorted(issue.id for issue in fixed) == [0, 1]
    assert session.text == "小明从梦中惊醒，发现已经9点了。他慌张的穿上衣服。"
    assert session.unfixed_count() == 2
    assert session.unfixed_count("Typo") == 0
    assert session.unfixed_count("Style") == 1


def test_fix_all_leaves_nothing_unfixed(session):
    session.fix_all()

    assert session.unfixed_count() == 0
    assert session.is_complete() is True
    assert session.text == "小明从梦中惊醒，发现已是九点。他慌张地穿上衣服。"
    # The unlocatable issue stays ignored, never fixed
    assert session.get(4).fixed is False
    assert session.get(4).ignored is True


def test_fix_category_skips_ignored(session):
    session.ignore(0)
    session.fix_category("all")

    assert session.get(0).fixed is False
    assert session.text.startswith("小名")


def test_ignore_category(session):
    ignored = session.ignore_category("Typo")

    assert sorted(issue.id for issue in ignored) == [0, 1]
    assert session.unfixed_count() == 2
    assert session.ignored_count() == 3


def test_segments_follow_fixes(session):
    session.accept(0)
    highlights = [s for s in session.segments() if s.kind == "highlight"]

    assert [s.content for s in highlights] == ["小明", "发先", "已经9点了", "慌张的"]
    assert "".join(s.text for s in session.segments()) == session.base_text


def test_preview_by_id(session):
    segments = session.preview(1)
    assert "".join(s.content for s in segments if s.kind != "Deleted") == "发现"


def test_offset_strategy_session(story, story_corrections):
    session = ProofreadingSession.start(story, story_corrections, strategy="ReplaceAtOffset")
    assert session.strategy is FixStrategy.REPLACE_AT_OFFSET

    session.fix_all()
    assert session.text == "小明从梦中惊醒，发现已是九点。他慌张地穿上衣服。"


def test_store_roundtrip(session):
    store = SessionStore()
    session_id = store.add(session)

    assert session_id in store
    assert len(store) == 1
    with store.edit(session_id) as edited:
        assert edited is session

    store.remove(session_id)
    assert session_id not in store


def test_store_unknown_session():
    store = SessionStore()
    with pytest.raises(SessionNotFoundError):
        with store.edit("missing"):
            pass
    with pytest.raises(SessionNotFoundError):
        store.remove("missing")


def test_store_serialises_writers(story, story_corrections):
    store = SessionStore()
    session_id = store.add(ProofreadingSession.start(story, story_corrections))

    def toggle():
        for _ in range(200):
            with store.edit(session_id) as session:
                session.ignore(2)
                assert session.get(2).ignored is True
                session.unignore(2)

    threads = [threading.Thread(target=toggle) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    with store.edit(session_id) as session:
        assert session.get(2).ignored is False


@pytest.mark.parametrize("label", ["Tpyo", "", "Unknown"])
def test_unknown_category_filter_matches_nothing(session, story, label):
    assert session.fix_category(label) == []
    assert session.ignore_category(label) == []

    assert session.text == story
    assert session.unfixed_count() == 4
    assert session.unfixed_count(label) == 0


def test_category_filter_accepts_alias(session):
    fixed = session.fix_category("错别字")
    assert sorted(issue.id for issue in fixed) == [0, 1]


def test_offset_strategy_accepts_one_at_a_time():
    session = ProofreadingSession.start(
        "abc def",
        [CorrectionRequest(original="abc", suggestion="X"), CorrectionRequest(original="def", suggestion="Yz")],
        strategy=FixStrategy.REPLACE_AT_OFFSET,
    )

    session.accept(0)
    assert session.text == "X def"
    session.accept(1)

    assert session.text == "X Yz"
    assert session.get(1).fixed is True
    assert session.is_complete() is True


def test_offset_strategy_keeps_earlier_fixes_when_accepting_backwards():
    session = ProofreadingSession.start(
        "abc def",
        [CorrectionRequest(original="abc", suggestion="X"), CorrectionRequest(original="def", suggestion="Yz")],
        strategy=FixStrategy.REPLACE_AT_OFFSET,
    )

    session.accept(1)
    session.accept(0, "Wv")
    assert session.text == "Wv Yz"
