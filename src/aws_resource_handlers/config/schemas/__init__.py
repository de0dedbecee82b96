"""Configuration schemas."""

from .app_schema import AppConfig, AWSProviderConfig, LogFileConfig, LoggingConfig

__all__ = ["AppConfig", "AWSProviderConfig", "LogFileConfig", "LoggingConfig"]
