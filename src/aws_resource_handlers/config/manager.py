"""Configuration management for the resource handlers."""
import copy
import json
import logging
import os
import re
import threading
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from aws_resource_handlers.config.defaults import (
    DEFAULT_CONFIG,
    ENV_OVERRIDES,
    LOGGING_ENV_OVERRIDES,
    LogDestination,
    LogLevel,
)
from aws_resource_handlers.config.schemas.app_schema import AppConfig
from aws_resource_handlers.infrastructure.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "RESOURCE_HANDLERS_CONFIG"
_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::([^}]*))?\}")


class ConfigurationManager:
    """
    Manages application configuration with defaults and overrides.

    This class handles:
    - Loading default configuration
    - Merging a JSON or YAML configuration file
    - Applying environment variable overrides
    - ``${VAR:default}`` interpolation
    - Configuration validation
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager with defaults.

        Args:
            config_file: Optional path to a configuration file. If not provided,
                         the RESOURCE_HANDLERS_CONFIG environment variable is used
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None

        config_file = config_file or os.environ.get(CONFIG_FILE_ENV)
        if config_file:
            self._load_config_file(config_file)

        # Environment variables have the highest priority
        self._load_env_vars()

        self.validate_config()

    def _load_config_file(self, config_path: str) -> None:
        """Load configuration from a JSON or YAML file."""
        try:
            with open(config_path, 'r') as f:
                if config_path.endswith(('.yml', '.yaml')):
                    user_config = yaml.safe_load(f) or {}
                else:
                    user_config = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}")

        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")

        logger.debug("Loaded configuration file %s", config_path)
        self.update_config(user_config)

    def _load_env_vars(self) -> None:
        """Load and apply environment variable overrides."""
        for env_var in ENV_OVERRIDES:
            if env_var in os.environ:
                self._config[env_var] = os.environ[env_var]

        for env_var, path in LOGGING_ENV_OVERRIDES.items():
            if env_var in os.environ:
                self._set_nested_value(self._config["LOGGING_CONFIG"], path, os.environ[env_var])

    def _set_nested_value(self, config: Dict[str, Any], path: tuple, value: Any) -> None:
        """Set a nested configuration value."""
        current = config
        for key in path[:-1]:
            current = current.setdefault(key, {})
        current[path[-1]] = value

    def _interpolate_values(self, config: Any) -> Any:
        """Interpolate ``${VAR}`` and ``${VAR:default}`` placeholders."""
        if isinstance(config, str):
            def replace(match: "re.Match[str]") -> str:
                var_name, default = match.group(1), match.group(2)
                return os.environ.get(var_name, default if default is not None else match.group(0))
            return _PLACEHOLDER.sub(replace, config)
        elif isinstance(config, dict):
            return {k: self._interpolate_values(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._interpolate_values(v) for v in config]
        return config

    def update_config(self, user_config: Dict[str, Any]) -> None:
        """
        Deep-merge user-provided values into the configuration.

        Args:
            user_config: Configuration dictionary from a user config file
        """
        def deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
            for key, value in source.items():
                if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                    deep_update(target[key], value)
                else:
                    target[key] = value

        with self._lock:
            deep_update(self._config, user_config)
            self._app_config = None

    def get_config(self) -> Dict[str, Any]:
        """
        Get the complete configuration with all interpolations applied.

        Returns:
            Dict containing the complete configuration
        """
        return self._interpolate_values(self._config)

    @property
    def app_config(self) -> AppConfig:
        """Typed, validated configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    try:
                        self._app_config = AppConfig.from_dict(self.get_config())
                    except PydanticValidationError as e:
                        raise ConfigurationError(f"Invalid configuration: {e}", e.errors())
        return self._app_config

    def validate_config(self) -> None:
        """
        Validate the configuration.

        Validates:
        - Required fields are present
        - Values are within allowed ranges
        - Proxy configuration is consistent
        - Log level and destination are known

        Raises:
            ConfigurationError: If configuration is invalid with detailed error messages
        """
        config = self.get_config()
        rules = config["VALIDATION_RULES"]
        errors: List[str] = []

        for field in rules["required_fields"]:
            if not config.get(field):
                errors.append(f"{field} is required")

        for field, required_by in rules.get("conditional_required", {}).items():
            for other in required_by:
                if config.get(other) and not config.get(field):
                    errors.append(f"{field} is required when {other} is specified")

        if config.get("AWS_PROXY_HOST"):
            try:
                int(config.get("AWS_PROXY_PORT"))
            except (TypeError, ValueError):
                errors.append("AWS_PROXY_PORT must be an integer")

        log_config = config["LOGGING_CONFIG"]
        log_level = str(log_config["level"]).upper()
        if log_level not in LogLevel.__members__:
            errors.append(f"Invalid log level: {log_level}")

        log_dest = str(log_config["destination"]).lower()
        try:
            LogDestination(log_dest)
        except ValueError:
            errors.append(
                f"Invalid log destination: {log_dest}. Must be one of: "
                f"{', '.join(d.value for d in LogDestination)}"
            )

        for field, field_rules in rules.items():
            if isinstance(field_rules, dict) and field_rules.get("type") == "int":
                value = config.get(field)
                if value is None:
                    continue
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    errors.append(f"{field} must be an integer")
                    continue
                if "min" in field_rules and value < field_rules["min"]:
                    errors.append(f"{field} must be at least {field_rules['min']}")
                if "max" in field_rules and value > field_rules["max"]:
                    errors.append(f"{field} must be at most {field_rules['max']}")

        if errors:
            raise ConfigurationError("Invalid configuration:\n" + "\n".join(errors), errors)
