"""
Configuration Manager
=====================

Centralized configuration for the assistant: YAML file, environment
overrides, validation, and logging setup. A missing or malformed file
never stops the bot; built-in defaults are used instead.
"""

import os
import copy
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field, asdict

from .validation import ConfigValidator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path(__file__).parent / "settings.yaml"

DEFAULT_COMMANDS: Dict[str, List[str]] = {
    "startQuiz": ["start quiz", "begin quiz", "take quiz"],
    "addTask": ["add task -", "add task", "create task", "new task"],
    "viewTasks": ["view tasks", "show tasks", "list tasks"],
    "viewLog": ["view log", "show log", "activity log"],
    "deleteTask": ["delete task -", "delete task", "remove task"],
    "completeTask": ["complete task -", "complete task", "finish task"],
    "remindMeTo": ["remind me to"],
}

DEFAULT_SENTIMENT_KEYWORDS: Dict[str, List[str]] = {
    "worried": ["worried", "scared", "anxious", "nervous", "afraid", "concerned"],
    "curious": ["curious", "interested", "wondering", "want to know", "tell me"],
    "frustrated": ["frustrated", "annoyed", "stuck", "confused", "don't understand"],
}

DEFAULT_FOLLOW_UP_KEYWORDS: List[str] = ["tell me more", "what else?", "more", "explain", "elaborate"]

# env var -> dotted config path
ENV_OVERRIDES = {
    "CYBERCHAT_DEFAULT_USER": "settings.default_user_name",
    "CYBERCHAT_FAVORITE_TOPIC": "settings.default_favorite_topic",
    "CYBERCHAT_DATA_DIR": "settings.data_dir",
    "CYBERCHAT_LOG_LEVEL": "logging.level",
    "CYBERCHAT_LOG_FILE": "logging.log_file",
}


@dataclass
class BotSettings:
    """Bot behaviour settings."""
    default_user_name: str = "User"
    default_favorite_topic: str = "privacy"
    enable_sentiment_analysis: bool = True
    history_size: int = 5
    activity_log_size: int = 100
    data_dir: Optional[str] = None


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None


@dataclass
class Settings:
    """Complete assistant configuration."""
    settings: BotSettings = field(default_factory=BotSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    commands: Dict[str, List[str]] = field(default_factory=lambda: copy.deepcopy(DEFAULT_COMMANDS))
    sentiment_keywords: Dict[str, List[str]] = field(
        default_factory=lambda: copy.deepcopy(DEFAULT_SENTIMENT_KEYWORDS))
    follow_up_keywords: List[str] = field(default_factory=lambda: list(DEFAULT_FOLLOW_UP_KEYWORDS))

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logging from the logging section."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=config.format,
        handlers=handlers,
        force=True
    )


class ConfigManager:
    """
    Configuration manager for the assistant.

    Loads ``settings.yaml`` (or the file named by ``CYBERCHAT_CONFIG``),
    applies environment overrides, drops invalid values and exposes
    the lookups the dialogue router needs.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or self._find_config_path()
        self._settings: Optional[Settings] = None

        self.load_config()

    def _find_config_path(self) -> str:
        """Find configuration file path."""
        env_path = os.environ.get("CYBERCHAT_CONFIG")
        if env_path:
            return env_path
        return str(DEFAULT_CONFIG_FILE)

    def load_config(self) -> Settings:
        """Load configuration from file, falling back to defaults."""
        config_data: Dict[str, Any] = {}
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise ValueError("configuration root is not a mapping")
            config_data = loaded
            logger.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.warning(f"Failed to load configuration from {self.config_path}, using defaults: {e}")

        config_data = self._merge_environment_variables(config_data)
        config_data = self._drop_invalid_values(config_data)

        self._settings = self._create_settings_from_dict(config_data)
        return self._settings

    def reload_config(self) -> Settings:
        """Reload configuration from disk."""
        return self.load_config()

    def _merge_environment_variables(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Merge environment variables with configuration data."""
        for env_var, config_path in ENV_OVERRIDES.items():
            env_value = os.environ.get(env_var)
            if env_value:
                self._set_nested_value(config_data, config_path, env_value)

        return config_data

    def _set_nested_value(self, data: Dict[str, Any], path: str, value: Any):
        """Set nested dictionary value using dot notation."""
        keys = path.split('.')
        current = data

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def _drop_invalid_values(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Remove values that failed validation so their defaults apply."""
        result = ConfigValidator.validate_settings(config_data)

        for warning in result.warnings:
            logger.warning(f"Configuration warning at '{warning.field_path}': {warning.message}")

        for error in result.errors:
            logger.warning(f"Invalid configuration at '{error.field_path}' ignored: {error.message}")
            keys = error.field_path.split('.')
            current = config_data
            for key in keys[:-1]:
                current = current.get(key, {}) if isinstance(current, dict) else {}
            if isinstance(current, dict):
                current.pop(keys[-1], None)

        return config_data

    def _create_settings_from_dict(self, config_data: Dict[str, Any]) -> Settings:
        """Create Settings object from configuration dictionary."""
        settings_dict: Dict[str, Any] = {}

        known_bot_fields = BotSettings.__dataclass_fields__.keys()
        bot_data = {k: v for k, v in config_data.get('settings', {}).items() if k in known_bot_fields}
        settings_dict['settings'] = BotSettings(**bot_data)

        known_log_fields = LoggingConfig.__dataclass_fields__.keys()
        log_data = {k: v for k, v in config_data.get('logging', {}).items() if k in known_log_fields}
        settings_dict['logging'] = LoggingConfig(**log_data)

        commands = copy.deepcopy(DEFAULT_COMMANDS)
        for name, aliases in config_data.get('commands', {}).items():
            commands[name] = [a.lower().strip() for a in aliases]
        settings_dict['commands'] = commands

        if config_data.get('sentiment_keywords'):
            settings_dict['sentiment_keywords'] = {
                label: [k.lower() for k in keywords]
                for label, keywords in config_data['sentiment_keywords'].items()
            }

        if config_data.get('follow_up_keywords'):
            settings_dict['follow_up_keywords'] = [k.lower() for k in config_data['follow_up_keywords']]

        return Settings(**settings_dict)

    @property
    def settings(self) -> Settings:
        """Get current settings."""
        if self._settings is None:
            self.load_config()
        return self._settings

    def get_command_aliases(self, command_type: str) -> List[str]:
        """Get command aliases for a command type."""
        return self.settings.commands.get(command_type, [])

    def matches_command(self, text: str, command_type: str) -> bool:
        """Check if text equals or starts with any alias of a command."""
        lower_text = text.lower().strip()
        return any(lower_text == alias or lower_text.startswith(alias)
                   for alias in self.get_command_aliases(command_type))

    def get_sentiment_keywords(self, sentiment_type: str) -> List[str]:
        return self.settings.sentiment_keywords.get(sentiment_type, [])

    def get_follow_up_keywords(self) -> List[str]:
        return self.settings.follow_up_keywords

    def get_default_user_name(self) -> str:
        return self.settings.settings.default_user_name

    def get_default_favorite_topic(self) -> str:
        return self.settings.settings.default_favorite_topic.lower().strip()

    def is_sentiment_analysis_enabled(self) -> bool:
        return self.settings.settings.enable_sentiment_analysis


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(config_path: Optional[str] = None) -> Settings:
    """Load configuration into the global manager."""
    global _config_manager
    _config_manager = ConfigManager(config_path)
    return _config_manager.settings


def reload_config() -> Settings:
    """Reload the global configuration."""
    return get_config_manager().reload_config()


def get_settings() -> Settings:
    """Get current application settings."""
    return get_config_manager().settings
