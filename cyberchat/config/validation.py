"""
Configuration Validation
========================

Validation for the assistant configuration with detailed error reporting.
Runs on the raw dictionary read from YAML, before it is turned into
settings objects.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
KNOWN_BOT_SETTINGS = ["default_user_name", "default_favorite_topic", "enable_sentiment_analysis",
                      "history_size", "activity_log_size", "data_dir"]
REQUIRED_COMMANDS = ["startQuiz", "addTask", "viewTasks", "viewLog",
                     "deleteTask", "completeTask", "remindMeTo"]


@dataclass
class ValidationError:
    """Validation error details."""
    field_path: str
    message: str
    severity: str = "error"  # error, warning
    suggested_value: Optional[Any] = None


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self):
        self.errors: List[ValidationError] = []
        self.warnings: List[ValidationError] = []
        self.is_valid = True

    def add_error(self, field_path: str, message: str, suggested_value: Optional[Any] = None):
        """Add validation error."""
        self.errors.append(ValidationError(field_path, message, "error", suggested_value))
        self.is_valid = False

    def add_warning(self, field_path: str, message: str):
        """Add validation warning."""
        self.warnings.append(ValidationError(field_path, message, "warning"))

    def error_fields(self) -> List[str]:
        return [e.field_path for e in self.errors]

    def get_summary(self) -> str:
        """Get validation summary."""
        if self.is_valid:
            return f"Configuration valid. {len(self.warnings)} warnings."
        return f"Configuration invalid. {len(self.errors)} errors, {len(self.warnings)} warnings."


class ConfigValidator:
    """Validator for the assistant configuration sections."""

    @staticmethod
    def validate_string_lists(section: Any, field_path: str, result: ValidationResult):
        """Validate a mapping of name -> list of non-empty strings."""
        if not isinstance(section, dict):
            result.add_error(field_path, "Must be a mapping of names to lists of strings")
            return

        for name, values in section.items():
            if not isinstance(values, list) or not values:
                result.add_error(f"{field_path}.{name}", "Must be a non-empty list")
            elif not all(isinstance(v, str) and v.strip() for v in values):
                result.add_error(f"{field_path}.{name}", "All entries must be non-empty strings")

    @staticmethod
    def validate_bot_settings(config: Dict[str, Any], result: ValidationResult):
        """Validate the bot settings section."""
        prefix = "settings"

        if not isinstance(config, dict):
            result.add_error(prefix, "Must be a mapping")
            return

        user_name = config.get("default_user_name", "User")
        if not isinstance(user_name, str) or not user_name.strip():
            result.add_error(f"{prefix}.default_user_name", "Must be a non-empty string", "User")

        favorite = config.get("default_favorite_topic", "privacy")
        if not isinstance(favorite, str) or not favorite.strip():
            result.add_error(f"{prefix}.default_favorite_topic", "Must be a non-empty string", "privacy")

        for int_field, minimum in (("history_size", 1), ("activity_log_size", 1)):
            value = config.get(int_field)
            if value is None:
                continue
            if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
                result.add_error(f"{prefix}.{int_field}", f"Must be an integer >= {minimum}")

        if "enable_sentiment_analysis" in config and not isinstance(config["enable_sentiment_analysis"], bool):
            result.add_error(f"{prefix}.enable_sentiment_analysis", "Must be true or false")

        data_dir = config.get("data_dir")
        if data_dir is not None and not isinstance(data_dir, str):
            result.add_error(f"{prefix}.data_dir", "Must be a directory path")

        for key in config:
            if key not in KNOWN_BOT_SETTINGS:
                result.add_warning(f"{prefix}.{key}", f"Unknown setting '{key}' is ignored")

    @staticmethod
    def validate_logging_config(config: Dict[str, Any], result: ValidationResult):
        """Validate the logging section."""
        if not isinstance(config, dict):
            result.add_error("logging", "Must be a mapping")
            return

        level = str(config.get("level", "INFO")).upper()
        if level not in VALID_LOG_LEVELS:
            result.add_error("logging.level", f"Invalid log level. Must be one of: {VALID_LOG_LEVELS}", "INFO")

    @classmethod
    def validate_settings(cls, settings_dict: Dict[str, Any]) -> ValidationResult:
        """Validate the complete configuration dictionary."""
        result = ValidationResult()

        if not isinstance(settings_dict, dict):
            result.add_error("", "Configuration root must be a mapping")
            return result

        if "settings" in settings_dict:
            cls.validate_bot_settings(settings_dict["settings"], result)

        if "logging" in settings_dict:
            cls.validate_logging_config(settings_dict["logging"], result)

        if "commands" in settings_dict:
            cls.validate_string_lists(settings_dict["commands"], "commands", result)
            if isinstance(settings_dict["commands"], dict):
                missing = [c for c in REQUIRED_COMMANDS if c not in settings_dict["commands"]]
                if missing:
                    result.add_warning("commands", f"No aliases configured for: {missing}")

        if "sentiment_keywords" in settings_dict:
            cls.validate_string_lists(settings_dict["sentiment_keywords"], "sentiment_keywords", result)

        if "follow_up_keywords" in settings_dict:
            follow_ups = settings_dict["follow_up_keywords"]
            if not isinstance(follow_ups, list) or not all(isinstance(k, str) and k for k in follow_ups):
                result.add_error("follow_up_keywords", "Must be a list of non-empty strings")

        logger.info(f"Configuration validation completed: {result.get_summary()}")
        return result


def validate_config(settings_dict: Dict[str, Any]) -> ValidationResult:
    """Validate a configuration dictionary."""
    return ConfigValidator.validate_settings(settings_dict)


def get_validation_errors(settings_dict: Dict[str, Any]) -> List[str]:
    """Get human-readable validation errors."""
    result = validate_config(settings_dict)
    return [f"{e.field_path}: {e.message}" for e in result.errors]
