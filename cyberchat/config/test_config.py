"""
Unit Tests for Configuration
============================

Loading, fallback to defaults, environment overrides and validation.
"""

import logging

import pytest

from cyberchat.config import (
    ConfigManager, LoggingConfig, configure_logging, get_config_manager, get_validation_errors, load_config,
    validate_config
)
from cyberchat.config.config_manager import DEFAULT_COMMANDS, ENV_OVERRIDES


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [*ENV_OVERRIDES, "CYBERCHAT_CONFIG"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_config(tmp_path):
    def _write(text):
        path = tmp_path / "settings.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


class TestConfigLoading:
    """Test file loading and fallback."""

    def test_packaged_settings(self):
        manager = ConfigManager()

        assert manager.get_default_user_name() == "User"
        assert manager.get_default_favorite_topic() == "privacy"
        assert manager.is_sentiment_analysis_enabled()
        assert manager.settings.settings.history_size == 5
        assert manager.get_command_aliases("startQuiz") == ["start quiz", "begin quiz", "take quiz"]

    def test_missing_file_uses_defaults(self, tmp_path):
        manager = ConfigManager(str(tmp_path / "absent.yaml"))

        assert manager.settings.commands == DEFAULT_COMMANDS
        assert manager.settings.settings.activity_log_size == 100

    def test_malformed_yaml_uses_defaults(self, write_config):
        manager = ConfigManager(write_config("settings: [unclosed\n  - oops: {"))
        assert manager.get_default_user_name() == "User"

    def test_non_mapping_root_uses_defaults(self, write_config):
        manager = ConfigManager(write_config("- just\n- a list\n"))
        assert manager.get_follow_up_keywords() == ["tell me more", "what else?", "more", "explain", "elaborate"]

    def test_invalid_values_fall_back_per_field(self, write_config):
        manager = ConfigManager(write_config(
            "settings:\n"
            "  default_user_name: Dana\n"
            "  history_size: 0\n"
            "  enable_sentiment_analysis: sometimes\n"
            "  unknown_option: 1\n"
        ))

        assert manager.get_default_user_name() == "Dana"
        assert manager.settings.settings.history_size == 5
        assert manager.is_sentiment_analysis_enabled() is True

    def test_commands_are_merged_and_lowercased(self, write_config):
        manager = ConfigManager(write_config("commands:\n  startQuiz: ['Quiz Time ']\n"))

        assert manager.get_command_aliases("startQuiz") == ["quiz time"]
        assert manager.get_command_aliases("viewLog") == DEFAULT_COMMANDS["viewLog"]
        assert manager.matches_command("Quiz time please", "startQuiz")
        assert not manager.matches_command("start quiz", "startQuiz")

    def test_environment_overrides(self, monkeypatch, write_config):
        monkeypatch.setenv("CYBERCHAT_DEFAULT_USER", "Zed")
        monkeypatch.setenv("CYBERCHAT_FAVORITE_TOPIC", "Phishing")
        manager = ConfigManager(write_config("settings:\n  default_user_name: Dana\n"))

        assert manager.get_default_user_name() == "Zed"
        assert manager.get_default_favorite_topic() == "phishing"

    def test_config_path_from_environment(self, monkeypatch, write_config):
        monkeypatch.setenv("CYBERCHAT_CONFIG", write_config("settings:\n  default_user_name: Env\n"))
        assert ConfigManager().get_default_user_name() == "Env"

    def test_global_manager(self, write_config):
        settings = load_config(write_config("settings:\n  default_user_name: Global\n"))

        assert settings.settings.default_user_name == "Global"
        assert get_config_manager().get_default_user_name() == "Global"
        load_config()

    def test_configure_logging_with_file(self, tmp_path):
        log_file = tmp_path / "bot.log"
        configure_logging(LoggingConfig(level="debug", log_file=str(log_file)))

        root = logging.getLogger()
        try:
            assert root.level == logging.DEBUG
            assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
        finally:
            configure_logging(LoggingConfig())


class TestValidation:
    """Test configuration validation."""

    def test_valid_configuration(self):
        result = validate_config({"settings": {"default_user_name": "Ann", "history_size": 3}})

        assert result.is_valid
        assert result.errors == []

    def test_field_errors(self):
        errors = get_validation_errors({
            "settings": {"default_user_name": "", "activity_log_size": True},
            "logging": {"level": "LOUD"},
        })

        assert "settings.default_user_name: Must be a non-empty string" in errors
        assert "settings.activity_log_size: Must be an integer >= 1" in errors
        assert any(e.startswith("logging.level") for e in errors)

    def test_string_lists(self):
        result = validate_config({
            "commands": {"startQuiz": []},
            "sentiment_keywords": {"worried": ["worried", 3]},
            "follow_up_keywords": "more",
        })

        assert set(result.error_fields()) == {
            "commands.startQuiz", "sentiment_keywords.worried", "follow_up_keywords"
        }

    def test_missing_commands_warn(self):
        result = validate_config({"commands": {"startQuiz": ["start quiz"]}})

        assert result.is_valid
        assert result.warnings[0].field_path == "commands"

    def test_unknown_setting_warns(self):
        result = validate_config({"settings": {"max_response_length": 10}})

        assert result.is_valid
        assert result.warnings[0].field_path == "settings.max_response_length"

    def test_non_mapping_root(self):
        assert not validate_config(["not", "a", "mapping"]).is_valid
