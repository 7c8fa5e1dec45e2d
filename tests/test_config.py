"""Tests for src/config.py — SiteContextConfig, TOML loading, overrides."""

from pathlib import Path

import pytest
from pydantic import ValidationError
from sitecontext import config as config_module
from sitecontext.config import SiteContextConfig, load_config, merge_overrides
from sitecontext.pagination.models import DEFAULT_PAGE_URL_SEGMENT

ENV_VARS = ("SITECONTEXT_GRACE_SECONDS", "SITECONTEXT_PAGE_SEGMENT", "SITECONTEXT_SNAPSHOT")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    """Isolate tests from the caller's env vars and config files."""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "CONFIG_SEARCH_PATHS", [tmp_path])
    monkeypatch.setattr(config_module, "GLOBAL_CONFIG_PATH", tmp_path / "global.toml")


class TestDefaults:
    def test_defaults(self):
        cfg = SiteContextConfig()
        assert cfg.visibility.grace_seconds == 60
        assert cfg.pagination.page_url_segment == "page-"
        assert cfg.content.snapshot == "data.json"
        assert cfg.snapshot_path == Path("data.json")

    def test_segment_default_matches_paginator(self):
        assert SiteContextConfig().pagination.page_url_segment == DEFAULT_PAGE_URL_SEGMENT

    def test_negative_grace_rejected(self):
        with pytest.raises(ValidationError):
            SiteContextConfig.model_validate({"visibility": {"grace_seconds": -1}})


class TestLoadConfig:
    def test_no_file_gives_defaults(self):
        assert load_config() == SiteContextConfig()

    def test_explicit_path(self, tmp_path: Path):
        path = tmp_path / "custom.toml"
        path.write_text('[pagination]\npage_url_segment = "p"\n', encoding="utf-8")
        cfg = load_config(path)
        assert cfg.pagination.page_url_segment == "p"
        assert cfg.visibility.grace_seconds == 60

    def test_missing_explicit_path(self, tmp_path: Path, caplog):
        with caplog.at_level("WARNING"):
            cfg = load_config(tmp_path / "missing.toml")
        assert cfg == SiteContextConfig()
        assert "Config file not found" in caplog.text

    def test_search_path(self, tmp_path: Path):
        (tmp_path / ".sitecontext.toml").write_text(
            "[visibility]\ngrace_seconds = 5\n", encoding="utf-8"
        )
        assert load_config().visibility.grace_seconds == 5

    def test_global_config(self, tmp_path: Path):
        (tmp_path / "global.toml").write_text(
            '[content]\nsnapshot = "build/data.json"\n', encoding="utf-8"
        )
        assert load_config().content.snapshot == "build/data.json"

    def test_invalid_toml(self, tmp_path: Path, caplog):
        path = tmp_path / "bad.toml"
        path.write_text("[pagination\n", encoding="utf-8")
        with caplog.at_level("WARNING"):
            cfg = load_config(path)
        assert cfg == SiteContextConfig()
        assert "Failed to parse" in caplog.text


class TestEnvVars:
    def test_string_overrides(self, monkeypatch):
        monkeypatch.setenv("SITECONTEXT_PAGE_SEGMENT", "seite-")
        monkeypatch.setenv("SITECONTEXT_SNAPSHOT", "/tmp/site.json")
        cfg = load_config()
        assert cfg.pagination.page_url_segment == "seite-"
        assert cfg.content.snapshot == "/tmp/site.json"

    def test_grace_seconds(self, monkeypatch):
        monkeypatch.setenv("SITECONTEXT_GRACE_SECONDS", "120")
        assert load_config().visibility.grace_seconds == 120

    def test_invalid_grace_seconds_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("SITECONTEXT_GRACE_SECONDS", "soon")
        with caplog.at_level("WARNING"):
            cfg = load_config()
        assert cfg.visibility.grace_seconds == 60
        assert "Invalid SITECONTEXT_GRACE_SECONDS" in caplog.text

    def test_env_beats_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".sitecontext.toml").write_text(
            "[visibility]\ngrace_seconds = 5\n", encoding="utf-8"
        )
        monkeypatch.setenv("SITECONTEXT_GRACE_SECONDS", "7")
        assert load_config().visibility.grace_seconds == 7


class TestMergeOverrides:
    def test_applies_set_values(self):
        cfg = merge_overrides(SiteContextConfig(), grace_seconds=0, page_url_segment="p")
        assert cfg.visibility.grace_seconds == 0
        assert cfg.pagination.page_url_segment == "p"

    def test_none_is_ignored(self):
        cfg = merge_overrides(SiteContextConfig(), snapshot=None)
        assert cfg.content.snapshot == "data.json"

    def test_unknown_key_ignored(self, caplog):
        with caplog.at_level("WARNING"):
            cfg = merge_overrides(SiteContextConfig(), colour="blue")
        assert cfg == SiteContextConfig()
        assert "unknown config override" in caplog.text
