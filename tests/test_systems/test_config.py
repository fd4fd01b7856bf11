"""Tests for settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tabuleiro.config import Settings, get_settings
from tabuleiro.game.rules import RuleRevision


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        for var in (
            "TABULEIRO_DEFAULT_RULE_REVISION",
            "TABULEIRO_ROLL_HISTORY_SIZE",
            "TABULEIRO_LOG_LEVEL",
        ):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.default_rule_revision is RuleRevision.CURRENT
        assert settings.roll_history_size == 50
        assert settings.log_level == "INFO"
        assert settings.sheets_dir == Path("./data/sheets")

    def test_env_prefix(self, monkeypatch):
        """Test overriding settings from the environment."""
        monkeypatch.setenv("TABULEIRO_DEFAULT_RULE_REVISION", "legacy")
        monkeypatch.setenv("TABULEIRO_ROLL_HISTORY_SIZE", "10")

        settings = Settings(_env_file=None)

        assert settings.default_rule_revision is RuleRevision.LEGACY
        assert settings.roll_history_size == 10

    def test_history_size_positive(self, monkeypatch):
        """Test that the history must hold at least one roll."""
        monkeypatch.setenv("TABULEIRO_ROLL_HISTORY_SIZE", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_cached(self):
        """Test that get_settings returns one cached instance."""
        assert get_settings() is get_settings()
