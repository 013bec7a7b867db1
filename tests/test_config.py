# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from config import CONFIG_DIR, load_config


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Fixtures
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("APPLIFE_BACKGROUND_BUDGET", "APPLIFE_UPLOAD_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tests - Loading
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestLoadConfig:

    def test_default_file(self):
        """The bundled YAML provides the documented defaults."""
        assert (CONFIG_DIR / "default_lifecycle.yaml").exists()
        config = load_config()
        assert config["background"]["budget_seconds"] == 30.0
        assert config["demo"]["upload_seconds"] == 2.0
        assert config["demo"]["expiry_budget_seconds"] == 1.0
        assert config["logging"]["level"] == "INFO"

    def test_custom_file(self, tmp_path):
        """Values come from the given YAML file."""
        path = tmp_path / "custom.yaml"
        path.write_text("background:\n  budget_seconds: 5\ndemo:\n  upload_seconds: 0.5\n")
        config = load_config(str(path))
        assert config["background"]["budget_seconds"] == 5.0
        assert config["demo"]["upload_seconds"] == 0.5

    def test_missing_file_uses_defaults(self, tmp_path):
        """A missing file falls back to built-in defaults."""
        config = load_config(str(tmp_path / "nope.yaml"))
        assert config["background"]["budget_seconds"] == 30.0
        assert config["demo"]["upload_seconds"] == 2.0

    def test_empty_file_uses_defaults(self, tmp_path):
        """An empty YAML document is treated as no overrides."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(str(path))
        assert config["background"]["budget_seconds"] == 30.0

    def test_env_overrides(self, tmp_path, monkeypatch):
        """Environment variables win over the file."""
        monkeypatch.setenv("APPLIFE_BACKGROUND_BUDGET", "12")
        monkeypatch.setenv("APPLIFE_UPLOAD_SECONDS", "0")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        config = load_config(str(tmp_path / "nope.yaml"))
        assert config["background"]["budget_seconds"] == 12.0
        assert config["demo"]["upload_seconds"] == 0.0
        assert config["logging"]["level"] == "DEBUG"

    def test_non_positive_budget_rejected(self, tmp_path):
        """A zero background budget is a configuration error."""
        path = tmp_path / "bad.yaml"
        path.write_text("background:\n  budget_seconds: 0\n")
        with pytest.raises(ValueError):
            load_config(str(path))
