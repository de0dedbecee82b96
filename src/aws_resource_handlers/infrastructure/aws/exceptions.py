# src/aws_resource_handlers/infrastructure/aws/exceptions.py
from typing import Optional

from aws_resource_handlers.infrastructure.exceptions import InfrastructureError

class AWSHandlerError(InfrastructureError):
    """Base exception for AWS handler errors."""
    pass

class ApiError(AWSHandlerError):
    """Raised when an AWS API call made by a lifecycle operation fails."""
    def __init__(self, operation: str, target: str, cause: BaseException,
                 error_code: Optional[str] = None):
        super().__init__(f"{operation} ({target}): {cause}")
        self.operation = operation
        self.target = target
        self.cause = cause
        self.error_code = error_code

class UnsupportedResourceTypeError(AWSHandlerError):
    """Raised when no handler is registered for a resource type name."""
    pass
