"""Errors raised outside the domain layer: configuration, credentials and AWS calls."""
from typing import Any, Optional


class InfrastructureError(Exception):
    """Base exception for failures outside the domain layer."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(InfrastructureError):
    """
    Raised when configuration cannot be loaded or fails validation.

    ``details`` carries the individual validation messages, if any.
    """


class CredentialsError(ConfigurationError):
    """Raised when the configured credentials cannot be resolved to an account."""
