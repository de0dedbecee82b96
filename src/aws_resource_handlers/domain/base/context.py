"""Provider context passed explicitly to every lifecycle operation."""
import threading
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from aws_resource_handlers.domain.core.exceptions import OperationCancelledError

PARTITION_DNS_SUFFIXES = {
    "aws": "amazonaws.com",
    "aws-cn": "amazonaws.com.cn",
    "aws-us-gov": "amazonaws.com",
    "aws-iso": "c2s.ic.gov",
    "aws-iso-b": "sc2s.sgov.gov",
    "aws-iso-e": "cloud.adc-e.uk",
    "aws-iso-f": "csp.hci.ic.gov",
}


class ProviderContext(BaseModel):
    """Account, region and partition the handlers operate against."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    account_id: str
    region: str
    partition: str = "aws"
    dns_suffix: Optional[str] = None
    cancel_event: Optional[threading.Event] = Field(default=None, exclude=True)

    @property
    def partition_dns_suffix(self) -> str:
        """DNS suffix for the partition, e.g. ``amazonaws.com``."""
        return self.dns_suffix or PARTITION_DNS_SUFFIXES.get(self.partition, "amazonaws.com")

    def partition_hostname(self, prefix: str) -> str:
        """Hostname within the partition, e.g. ``bucket.s3.amazonaws.com``."""
        return f"{prefix}.{self.partition_dns_suffix}"

    def raise_if_cancelled(self, operation: str) -> None:
        """Raise OperationCancelledError if the caller has cancelled."""
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise OperationCancelledError(operation)
