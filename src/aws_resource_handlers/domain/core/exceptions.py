# src/aws_resource_handlers/domain/core/exceptions.py
from typing import Any, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass


class ValidationError(DomainException):
    """Raised when resource input validation fails."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class FormatError(ValidationError):
    """Raised when a composite resource ID cannot be encoded or decoded."""
    def __init__(self, value: Any, message: str):
        super().__init__(message, value)
        self.value = value


class NotFoundError(DomainException):
    """Raised when a resource, or the container holding it, does not exist."""
    def __init__(self, message: str = "couldn't find resource",
                 last_error: Optional[Exception] = None,
                 last_request: Any = None):
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)
        self.last_error = last_error
        self.last_request = last_request


class EmptyResultError(NotFoundError):
    """Raised when a lookup returns no items."""
    def __init__(self, last_request: Any = None):
        super().__init__("empty result", last_request=last_request)


class TooManyResultsError(DomainException):
    """Raised when a lookup expected to match one item matches several."""
    def __init__(self, count: int, last_request: Any = None):
        super().__init__(f"too many results: wanted 1, got {count}")
        self.count = count
        self.last_request = last_request


class OperationCancelledError(DomainException):
    """Raised when the calling context cancels an operation before an API call."""
    def __init__(self, operation: str):
        super().__init__(f"{operation}: operation cancelled")
        self.operation = operation


def is_not_found(error: Optional[BaseException]) -> bool:
    """Return True when the error means the resource no longer exists."""
    return isinstance(error, NotFoundError)
