from __future__ import annotations

import pytest

from proofdiff.models.issue import CorrectionRequest, IssueCategory
from proofdiff.services.config_manager import ConfigManager

STORY = "小名从梦中惊醒，发先已经9点了。他慌张的穿上衣服。"


@pytest.fixture()
def isolated_config(tmp_path, monkeypatch) -> ConfigManager:
    """Config manager writing into a temp dir instead of the home directory"""
    monkeypatch.setenv("PROOFDIFF_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setattr(ConfigManager, "_instance", None)
    return ConfigManager.get_instance()


@pytest.fixture()
def story() -> str:
    return STORY


@pytest.fixture()
def story_corrections() -> list[CorrectionRequest]:
    return [
        CorrectionRequest(original="小名", suggestion="小明", reason="人名前后不一致", category=IssueCategory.TYPO),
        CorrectionRequest(original="发先", suggestion="发现", reason="错别字", category=IssueCategory.TYPO),
        CorrectionRequest(original="已经9点了", suggestion="已是九点", reason="表达更简洁", category=IssueCategory.STYLE),
        CorrectionRequest(original="慌张的", suggestion="慌张地", reason="状语用“地”", category=IssueCategory.GRAMMAR),
        CorrectionRequest(original="不存在", suggestion="存在", reason="", category=IssueCategory.PUNCTUATION),
    ]
