"""Base AWS handlers with common functionality."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Generic, Optional, Type, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from aws_resource_handlers.domain.base.context import ProviderContext
from aws_resource_handlers.domain.base.entity import ResourceModel
from aws_resource_handlers.domain.core.exceptions import NotFoundError
from aws_resource_handlers.infrastructure.aws.aws_client import AWSClient
from aws_resource_handlers.infrastructure.aws.exceptions import ApiError
from aws_resource_handlers.infrastructure.aws.pagination import error_code

M = TypeVar('M', bound=ResourceModel)
R = TypeVar('R')


class AWSHandler(ABC, Generic[M]):
    """Base class for AWS resource and data-source handlers."""

    model: ClassVar[Type[ResourceModel]]

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        """
        Initialize AWS handler.

        Args:
            logger: Logger for logging messages; defaults to the module logger
        """
        self._logger = logger or logging.getLogger(self.__class__.__module__)

    @property
    def type_name(self) -> str:
        return self.model.type_name

    def _call(self, context: ProviderContext, operation: str, target: str,
              func: Callable[..., R], **kwargs: Any) -> R:
        """
        Issue a single AWS API call.

        Args:
            context: Provider context of the running operation
            operation: Human-readable description used in errors, e.g.
                "reading Route 53 CIDR Location"
            target: Identifier of the resource being operated on
            func: boto3 client method
            **kwargs: Request parameters

        Returns:
            The API response

        Raises:
            OperationCancelledError: If the caller cancelled before the call
            ApiError: If the call fails
        """
        context.raise_if_cancelled(operation)

        api_name = getattr(func, '__name__', 'aws_operation')
        self._logger.debug("Calling %s for %s (%s)", api_name, self.type_name, target)
        try:
            return func(**kwargs)
        except ClientError as e:
            raise self._convert_client_error(e, operation, target) from e
        except BotoCoreError as e:
            raise ApiError(operation, target, e) from e

    def _convert_client_error(self, error: ClientError, operation: str, target: str) -> ApiError:
        """Convert AWS ClientError to ApiError, keeping the AWS error code."""
        code = error_code(error)
        message = error.response.get('Error', {}).get('Message', str(error))
        return ApiError(operation, target, Exception(f"{code}: {message}"), error_code=code)

    def _api_error(self, operation: str, target: str, error: Exception) -> ApiError:
        """Wrap a lookup failure raised outside :meth:`_call`."""
        if isinstance(error, ApiError):
            return error
        if isinstance(error, ClientError):
            return self._convert_client_error(error, operation, target)
        return ApiError(operation, target, error)


class ResourceHandler(AWSHandler[M]):
    """
    Lifecycle handler for a managed resource.

    Every operation receives the AWS client handle and the provider context
    explicitly and runs to completion before returning.
    """

    @abstractmethod
    def create(self, aws_client: AWSClient, context: ProviderContext, plan: M) -> M:
        """
        Create the resource described by ``plan``.

        Returns:
            The created resource with identity and computed attributes set

        Raises:
            ApiError: If the create call fails
        """

    @abstractmethod
    def read(self, aws_client: AWSClient, context: ProviderContext, state: M) -> Optional[M]:
        """
        Refresh ``state`` from AWS.

        Returns:
            The refreshed resource, or None when it no longer exists and
            should be dropped from tracked state
        """

    @abstractmethod
    def update(self, aws_client: AWSClient, context: ProviderContext, state: M, plan: M) -> M:
        """Apply the difference between ``state`` and ``plan`` in place."""

    @abstractmethod
    def delete(self, aws_client: AWSClient, context: ProviderContext, state: M) -> None:
        """
        Delete the resource. A resource that is already gone is not an error.

        Raises:
            ApiError: If the removal call fails for another reason
        """

    def import_state(self, aws_client: AWSClient, context: ProviderContext,
                     resource_id: str) -> Optional[M]:
        """Adopt an existing resource by its ID and read its current state."""
        stub = self.model.model_construct(id=resource_id)
        return self.read(aws_client, context, stub)

    def _read_after_write(self, aws_client: AWSClient, context: ProviderContext,
                          state: M, operation: str) -> M:
        """Read back a resource that was just written; it must exist."""
        refreshed = self.read(aws_client, context, state)
        if refreshed is None:
            raise ApiError(operation, state.id or self.type_name,
                           NotFoundError(f"{self.type_name} not found after {operation}"))
        return refreshed

    def _drop(self, state: M, error: NotFoundError) -> None:
        self._logger.warning(
            "%s (%s) not found, removing from state: %s", self.type_name, state.id, str(error)
        )


class DataSourceHandler(AWSHandler[M]):
    """Read-only handler for a data source."""

    @abstractmethod
    def read(self, aws_client: AWSClient, context: ProviderContext, config: M) -> M:
        """
        Look up the data source described by ``config``.

        Raises:
            ApiError: If the lookup fails, including when the target does not exist
        """
