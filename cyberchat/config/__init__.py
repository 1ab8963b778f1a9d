"""
Configuration Management Module
===============================

This module provides:
- YAML configuration loading with environment overrides
- Configuration validation with per-field fallback to defaults
- Logging setup from the logging section
"""

from .config_manager import (
    Settings, BotSettings, LoggingConfig, ConfigManager,
    configure_logging, load_config, get_config_manager, reload_config, get_settings
)

from .validation import (
    ConfigValidator, ValidationError, ValidationResult,
    validate_config, get_validation_errors
)

__all__ = [
    # Configuration Management
    "Settings", "BotSettings", "LoggingConfig", "ConfigManager",
    "configure_logging", "load_config", "get_config_manager", "reload_config", "get_settings",

    # Validation
    "ConfigValidator", "ValidationError", "ValidationResult",
    "validate_config", "get_validation_errors"
]
