"""Route 53 CIDR location record."""
import ipaddress
from typing import ClassVar, FrozenSet

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from aws_resource_handlers.domain.base import identity
from aws_resource_handlers.domain.base.entity import ResourceModel
from aws_resource_handlers.domain.core.exceptions import FormatError

CIDR_LOCATION_ID_PART_COUNT = 2


class CIDRLocation(ResourceModel):
    """A named set of CIDR blocks inside a Route 53 CIDR collection."""
    type_name: ClassVar[str] = "aws_route53_cidr_location"
    requires_replace: ClassVar[FrozenSet[str]] = frozenset({"cidr_collection_id", "name"})

    cidr_collection_id: str = Field(..., min_length=1, description="ID of the parent CIDR collection")
    name: str = Field(
        ...,
        max_length=16,
        pattern=r"^[0-9A-Za-z_-]+$",
        description="Location name; letters, digits, underscore (_) and dash (-)",
    )
    cidr_blocks: FrozenSet[str] = Field(..., min_length=1, description="CIDR blocks of the location")

    @field_validator("cidr_blocks")
    @classmethod
    def validate_cidr_blocks(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        """
        Validate CIDR blocks.

        Each block must parse as an IPv4 or IPv6 network with no host bits set
        and be written in canonical form.
        """
        for block in v:
            try:
                network = ipaddress.ip_network(block, strict=True)
            except ValueError as e:
                raise ValueError(f"{block!r} is not a valid CIDR block: {e}")
            if str(network) != block:
                raise ValueError(f"{block!r} is not a valid CIDR block, expected {str(network)!r}")
        return v

    def build_id(self) -> str:
        """Composite ID ``<cidr collection id>:<name>``."""
        return identity.encode([self.cidr_collection_id, self.name], CIDR_LOCATION_ID_PART_COUNT)

    def init_from_id(self) -> None:
        """Restore the key fields from ``id``."""
        collection_id, name = identity.decode(self.id or "", CIDR_LOCATION_ID_PART_COUNT)
        try:
            self.cidr_collection_id = collection_id
            self.name = name
        except PydanticValidationError as e:
            raise FormatError(self.id, f"unexpected format for ID ({self.id}): {e}") from e
