"""EC2 serial console access record."""
from typing import ClassVar

from pydantic import Field

from aws_resource_handlers.domain.base.entity import ResourceModel


class SerialConsoleAccess(ResourceModel):
    """Account-wide EC2 serial console access setting. The ID is the account ID."""
    type_name: ClassVar[str] = "aws_ec2_serial_console_access"

    enabled: bool = Field(True, description="Whether serial console access is enabled")
