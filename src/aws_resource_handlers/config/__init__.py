"""Configuration package - defaults, loading and typed schemas."""

from .defaults import DEFAULT_CONFIG, LogDestination, LogLevel
from .manager import ConfigurationManager
from .schemas import AppConfig, AWSProviderConfig, LogFileConfig, LoggingConfig

__all__ = [
    "AppConfig",
    "AWSProviderConfig",
    "ConfigurationManager",
    "DEFAULT_CONFIG",
    "LogDestination",
    "LogFileConfig",
    "LogLevel",
    "LoggingConfig",
]
