"""Tests for KnowledgeBaseSettings and LoggingSettings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gamekb.config import KnowledgeBaseSettings, LoggingSettings


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test away from any real .env file and GAMEKB_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "GAMEKB_EVENT_LOG_LIMIT",
        "GAMEKB_VERB_HISTORY_LIMIT",
        "GAMEKB_AUTO_REGISTER_CARDS",
        "GAMEKB_ARCHIVE_REMOVED",
        "GAMEKB_LOG_VERBOSE",
        "GAMEKB_LOG_JSON_OUTPUT",
        "GAMEKB_LOG_MODULE_LEVELS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestKnowledgeBaseSettings:
    def test_defaults(self) -> None:
        settings = KnowledgeBaseSettings()
        assert settings.event_log_limit == 10_000
        assert settings.verb_history_limit == 10_000
        assert settings.auto_register_cards is True
        assert settings.archive_removed is True

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GAMEKB_EVENT_LOG_LIMIT", "25")
        monkeypatch.setenv("GAMEKB_AUTO_REGISTER_CARDS", "false")
        settings = KnowledgeBaseSettings()
        assert settings.event_log_limit == 25
        assert settings.auto_register_cards is False

    def test_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("GAMEKB_VERB_HISTORY_LIMIT=7\nUNRELATED=1\n")
        assert KnowledgeBaseSettings().verb_history_limit == 7

    def test_explicit_values_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GAMEKB_ARCHIVE_REMOVED", "false")
        assert KnowledgeBaseSettings(archive_removed=True).archive_removed is True

    @pytest.mark.parametrize("field", ["event_log_limit", "verb_history_limit"])
    def test_limits_must_be_positive(self, field: str) -> None:
        with pytest.raises(ValidationError):
            KnowledgeBaseSettings(**{field: 0})


class TestLoggingSettings:
    def test_defaults(self) -> None:
        settings = LoggingSettings()
        assert settings.verbose is False
        assert settings.json_output is False
        assert settings.module_levels == {}

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GAMEKB_LOG_VERBOSE", "1")
        monkeypatch.setenv("GAMEKB_LOG_JSON_OUTPUT", "true")
        settings = LoggingSettings()
        assert settings.verbose is True
        assert settings.json_output is True

    def test_module_levels_from_json_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GAMEKB_LOG_MODULE_LEVELS", '{"events": "DEBUG", "core.verb": "ERROR"}')
        settings = LoggingSettings()
        assert settings.module_levels == {"events": "DEBUG", "core.verb": "ERROR"}
