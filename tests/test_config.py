# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from meta_scout.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("max_depth: 3\ntimeout: 5", ".yaml", None),
        (json.dumps({"max_depth": 3, "timeout": 5}), ".json", None),
        ("max_depth: 0", ".yaml", ValidationError),
        ("unknown_key: 1", ".yaml", ValidationError),
        ("key: [unclosed", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken", ".json", ValueError),
        ("max_depth = 2", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.max_depth == 3
        assert cfg.timeout == 5.0


def test_defaults_when_no_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None)
    assert cfg.max_depth == 1
    assert cfg.user_agent == "MetaScoutBot/1.0"
    assert "keyboard_arrow_down" in cfg.text_artifacts


def test_default_file_is_used(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_depth: 4\n", encoding="utf-8")
    assert load_config(None).max_depth == 4


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_config_is_frozen_and_copyable():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.max_depth = 5
    assert cfg.model_copy(update={"max_depth": 5}).max_depth == 5


def test_blank_artifacts_dropped():
    assert CrawlerConfig(text_artifacts=["", "  ", "icon"]).text_artifacts == ["icon"]
