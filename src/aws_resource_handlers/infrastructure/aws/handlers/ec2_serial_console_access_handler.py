"""EC2 serial console access handler.

Serial console access is a single account-level switch per region, so the
resource has no identity of its own beyond the account ID. Creating or
updating it sets the switch; deleting it turns access off again.
"""
from typing import Optional

from aws_resource_handlers.domain.base.context import ProviderContext
from aws_resource_handlers.domain.resources import SerialConsoleAccess
from aws_resource_handlers.infrastructure.aws.aws_client import AWSClient
from aws_resource_handlers.infrastructure.aws.handlers.base_handler import ResourceHandler


class SerialConsoleAccessHandler(ResourceHandler[SerialConsoleAccess]):
    """Handler for ``aws_ec2_serial_console_access``."""

    model = SerialConsoleAccess

    def create(self, aws_client: AWSClient, context: ProviderContext,
               plan: SerialConsoleAccess) -> SerialConsoleAccess:
        self._set_serial_console_access(
            aws_client, context, plan.enabled,
            f"setting EC2 Serial Console Access ({str(plan.enabled).lower()})"
        )

        data = plan.model_copy(update={'id': context.account_id})
        self._logger.info("Set EC2 Serial Console Access for account %s to %s", data.id, plan.enabled)
        return self._read_after_write(aws_client, context, data, "creating EC2 Serial Console Access")

    def read(self, aws_client: AWSClient, context: ProviderContext,
             state: SerialConsoleAccess) -> Optional[SerialConsoleAccess]:
        output = self._call(
            context, "reading EC2 Serial Console Access", state.id or context.account_id,
            aws_client.ec2_client.get_serial_console_access_status
        )

        return state.model_copy(update={
            'id': state.id or context.account_id,
            'enabled': bool(output.get('SerialConsoleAccessEnabled', False)),
        })

    def update(self, aws_client: AWSClient, context: ProviderContext,
               state: SerialConsoleAccess, plan: SerialConsoleAccess) -> SerialConsoleAccess:
        self._set_serial_console_access(
            aws_client, context, plan.enabled,
            f"updating EC2 Serial Console Access ({str(plan.enabled).lower()})"
        )

        data = plan.model_copy(update={'id': state.id or context.account_id})
        return self._read_after_write(aws_client, context, data, "updating EC2 Serial Console Access")

    def delete(self, aws_client: AWSClient, context: ProviderContext,
               state: SerialConsoleAccess) -> None:
        # Removing the resource disables serial console access.
        self._set_serial_console_access(
            aws_client, context, False, "disabling EC2 Serial Console Access"
        )
        self._logger.info("Disabled EC2 Serial Console Access for account %s", state.id)

    def _set_serial_console_access(self, aws_client: AWSClient, context: ProviderContext,
                                   enabled: bool, operation: str) -> None:
        ec2 = aws_client.ec2_client
        if enabled:
            self._call(context, operation, context.account_id, ec2.enable_serial_console_access)
        else:
            self._call(context, operation, context.account_id, ec2.disable_serial_console_access)
