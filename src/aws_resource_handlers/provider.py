"""Provider facade.

The host process drives resources through this module: it hands in attribute
mappings, gets state mappings back, and never touches the typed records or the
AWS clients directly.
"""
import threading
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

import structlog

from aws_resource_handlers.config.manager import ConfigurationManager
from aws_resource_handlers.domain.base.context import ProviderContext
from aws_resource_handlers.domain.base.entity import ResourceModel
from aws_resource_handlers.helpers.logger import setup_logging
from aws_resource_handlers.infrastructure.aws.aws_client import AWSClient
from aws_resource_handlers.infrastructure.aws.exceptions import UnsupportedResourceTypeError
from aws_resource_handlers.infrastructure.aws.handlers import (
    BucketDataSourceHandler,
    CIDRLocationHandler,
    DataSourceHandler,
    ResourceHandler,
    SerialConsoleAccessHandler,
)


class PlanAction(str, Enum):
    """What applying a desired configuration to a prior state requires."""
    CREATE = "create"
    UPDATE = "update"
    REPLACE = "replace"
    DELETE = "delete"
    NO_CHANGE = "no_change"


def default_resource_handlers() -> Dict[str, ResourceHandler]:
    handlers = [SerialConsoleAccessHandler(), CIDRLocationHandler()]
    return {handler.type_name: handler for handler in handlers}


def default_data_source_handlers() -> Dict[str, DataSourceHandler]:
    handlers = [BucketDataSourceHandler()]
    return {handler.type_name: handler for handler in handlers}


class Provider:
    """Dispatches lifecycle operations to the handler registered for a type name."""

    def __init__(self, aws_client: AWSClient, context: ProviderContext,
                 resources: Optional[Dict[str, ResourceHandler]] = None,
                 data_sources: Optional[Dict[str, DataSourceHandler]] = None,
                 logger: Optional[Any] = None):
        """
        Initialize the provider.

        Args:
            aws_client: AWS client handle passed to every operation
            context: Account, region and partition passed to every operation
            resources: Resource handlers by type name
            data_sources: Data-source handlers by type name
            logger: structlog logger
        """
        self.aws_client = aws_client
        self.context = context
        self._resources = resources if resources is not None else default_resource_handlers()
        self._data_sources = data_sources if data_sources is not None else default_data_source_handlers()
        self._log = logger or structlog.get_logger(__name__)

    @classmethod
    def from_config(cls, config_file: Optional[str] = None,
                    cancel_event: Optional[threading.Event] = None) -> "Provider":
        """
        Build a provider from configuration.

        Loads configuration, configures logging and resolves the account the
        credentials belong to.

        Raises:
            ConfigurationError: If configuration is invalid
            CredentialsError: If the credentials cannot be validated
        """
        manager = ConfigurationManager(config_file)
        app_config = manager.app_config
        logger = setup_logging(app_config.logging)

        aws_client = AWSClient(app_config.provider.region, app_config.provider.to_client_config())
        context = aws_client.provider_context(cancel_event)
        logger.info("Provider configured", account_id=context.account_id,
                    region=context.region, partition=context.partition)
        return cls(aws_client, context, logger=logger)

    @property
    def resource_types(self) -> List[str]:
        return sorted(self._resources)

    @property
    def data_source_types(self) -> List[str]:
        return sorted(self._data_sources)

    def _resource_handler(self, type_name: str) -> ResourceHandler:
        try:
            return self._resources[type_name]
        except KeyError:
            raise UnsupportedResourceTypeError(f"unsupported resource type: {type_name}")

    def _data_source_handler(self, type_name: str) -> DataSourceHandler:
        try:
            return self._data_sources[type_name]
        except KeyError:
            raise UnsupportedResourceTypeError(f"unsupported data source type: {type_name}")

    def plan(self, type_name: str, prior: Optional[Mapping[str, Any]],
             desired: Optional[Mapping[str, Any]]) -> PlanAction:
        """
        Decide how to move a resource from ``prior`` to ``desired``.

        Args:
            type_name: Resource type name
            prior: Last applied state, or None if the resource is not tracked
            desired: Desired configuration, or None if the resource should go

        Returns:
            The required action
        """
        model = self._resource_handler(type_name).model
        if prior is None and desired is None:
            return PlanAction.NO_CHANGE
        if prior is None:
            model.from_state(desired)
            return PlanAction.CREATE
        if desired is None:
            return PlanAction.DELETE

        prior_model = model.from_state(prior)
        desired_model = model.from_state(desired)
        if prior_model.replacement_fields_changed(desired_model):
            return PlanAction.REPLACE
        if prior_model.changed_fields(desired_model):
            return PlanAction.UPDATE
        return PlanAction.NO_CHANGE

    def create(self, type_name: str, config: Mapping[str, Any]) -> Dict[str, Any]:
        """Create a resource and return its state."""
        handler = self._resource_handler(type_name)
        plan = handler.model.from_state(config)
        created = handler.create(self.aws_client, self.context, plan)
        self._log.info("Resource created", type_name=type_name, id=created.id)
        return created.to_state()

    def read(self, type_name: str, state: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Refresh a resource, or look up a data source.

        Returns:
            The current state, or None when the resource no longer exists
        """
        if type_name in self._data_sources:
            handler = self._data_source_handler(type_name)
            result: Optional[ResourceModel] = handler.read(
                self.aws_client, self.context, handler.model.from_state(state)
            )
        else:
            resource_handler = self._resource_handler(type_name)
            result = resource_handler.read(
                self.aws_client, self.context, resource_handler.model.from_state(state)
            )
            if result is None:
                self._log.warning("Resource removed from state", type_name=type_name, id=state.get("id"))
                return None
        return result.to_state()

    def update(self, type_name: str, state: Mapping[str, Any],
               config: Mapping[str, Any]) -> Dict[str, Any]:
        """Update a resource in place and return its new state."""
        handler = self._resource_handler(type_name)
        prior = handler.model.from_state(state)
        plan = handler.model.from_state(config)
        updated = handler.update(self.aws_client, self.context, prior, plan)
        self._log.info("Resource updated", type_name=type_name, id=updated.id)
        return updated.to_state()

    def delete(self, type_name: str, state: Mapping[str, Any]) -> None:
        """Delete a resource. Deleting a resource that is already gone succeeds."""
        handler = self._resource_handler(type_name)
        handler.delete(self.aws_client, self.context, handler.model.from_state(state))
        self._log.info("Resource deleted", type_name=type_name, id=state.get("id"))

    def import_resource(self, type_name: str, resource_id: str) -> Optional[Dict[str, Any]]:
        """Adopt an existing resource by ID; None if it does not exist."""
        handler = self._resource_handler(type_name)
        imported = handler.import_state(self.aws_client, self.context, resource_id)
        return imported.to_state() if imported is not None else None
