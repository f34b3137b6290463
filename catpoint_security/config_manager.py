"""Configuration management with JSON persistence and change callbacks."""

import json
import os
from dataclasses import asdict, fields, replace
from typing import Optional, Dict, Any, Callable, List

from .config.defaults import DEFAULT_PATHS, VALID_CLASSIFIER_BACKENDS, VALID_REPOSITORY_BACKENDS
from .exceptions import ConfigurationError
from .logging_config import get_logger
from .models.config import SystemConfig
from .utils import ensure_directory_exists

logger = get_logger("config_manager")


class ConfigManager:
    """Manages system configuration with file persistence and change notification."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[SystemConfig] = None
        self._config_change_callbacks: List[Callable[[SystemConfig], None]] = []

        self.load_config()

    def load_config(self) -> SystemConfig:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                known = {config_field.name for config_field in fields(SystemConfig)}
                self._config = SystemConfig(**{k: v for k, v in config_dict.items() if k in known})
            except (json.JSONDecodeError, TypeError) as e:
                logger.error(f"Error loading config: {e}. Using defaults.")
                self._config = SystemConfig()
        else:
            self._config = SystemConfig()
            self.save_config()

        return self._config

    def save_config(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        ensure_directory_exists(os.path.dirname(self.config_path))
        with open(self.config_path, 'w') as f:
            json.dump(self.export_config(), f, indent=2)

    def get_config(self) -> SystemConfig:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values.

        Unknown keys are ignored. The new values are validated on a copy and
        only committed if it passes; otherwise ConfigurationError is raised
        and the current configuration is left untouched.
        """
        known = {config_field.name for config_field in fields(SystemConfig)}
        changes = {}
        for key, value in kwargs.items():
            if key in known:
                changes[key] = value
            else:
                logger.warning(f"Ignoring unknown config key: {key}")

        candidate = replace(self.get_config(), **changes)
        errors = self.get_validation_errors(candidate)
        if errors:
            raise ConfigurationError("; ".join(errors))

        self._config = candidate
        self.save_config()
        self._notify_callbacks()

    def get_validation_errors(self, config: Optional[SystemConfig] = None) -> List[str]:
        """Return a list of problems with ``config``, or the current configuration."""
        config = config or self._config
        if config is None:
            return ["configuration not loaded"]

        errors = []
        if not isinstance(config.confidence_threshold, (int, float)) or \
                not 0.0 <= config.confidence_threshold <= 100.0:
            errors.append("confidence_threshold must be between 0 and 100")
        if config.classifier_backend not in VALID_CLASSIFIER_BACKENDS:
            errors.append(f"classifier_backend must be one of {VALID_CLASSIFIER_BACKENDS}")
        if config.repository_backend not in VALID_REPOSITORY_BACKENDS:
            errors.append(f"repository_backend must be one of {VALID_REPOSITORY_BACKENDS}")
        if config.repository_backend == "json" and not config.repository_path:
            errors.append("repository_path is required for the json backend")
        if not isinstance(config.escalate_when_disarmed, bool):
            errors.append("escalate_when_disarmed must be a boolean")
        if not isinstance(config.alarm_on_cat_when_away, bool):
            errors.append("alarm_on_cat_when_away must be a boolean")
        if str(config.log_level).upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append("log_level must be a standard logging level name")
        if not isinstance(config.web_port, int) or not 0 < config.web_port < 65536:
            errors.append("web_port must be between 1 and 65535")
        if not isinstance(config.event_history_size, int) or config.event_history_size < 1:
            errors.append("event_history_size must be at least 1")
        return errors

    def validate_config(self) -> bool:
        """Validate current configuration."""
        return not self.get_validation_errors()

    def register_change_callback(self, callback: Callable[[SystemConfig], None]) -> None:
        """Register a callback to be called when config changes."""
        if callback not in self._config_change_callbacks:
            self._config_change_callbacks.append(callback)

    def unregister_change_callback(self, callback: Callable[[SystemConfig], None]) -> None:
        """Unregister a config change callback."""
        if callback in self._config_change_callbacks:
            self._config_change_callbacks.remove(callback)

    def _notify_callbacks(self) -> None:
        for callback in self._config_change_callbacks:
            try:
                callback(replace(self._config))
            except Exception as e:
                logger.error(f"Error in config change callback: {e}")

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self._config = SystemConfig()
        self.save_config()
        self._notify_callbacks()

    def export_config(self) -> Dict[str, Any]:
        """Export current configuration as a dictionary."""
        if not self._config:
            return {}
        return asdict(self._config)

    def import_config(self, config_dict: Dict[str, Any]) -> bool:
        """
        Import configuration from a dictionary.

        Args:
            config_dict: Dictionary containing configuration values

        Returns:
            True if import was successful, False otherwise
        """
        try:
            temp_config = SystemConfig(**config_dict)
        except TypeError as e:
            logger.error(f"Error importing config: {e}")
            return False

        old_config = self._config
        self._config = temp_config

        if not self.validate_config():
            self._config = old_config
            return False

        self.save_config()
        self._notify_callbacks()
        return True
