"""Domain base - identity codec, set reconciliation and shared record types."""

from .context import ProviderContext
from .entity import ResourceModel
from .identity import RESOURCE_ID_SEPARATOR, decode, encode
from .reconciliation import SetDelta, diff

__all__ = [
    "ProviderContext",
    "ResourceModel",
    "RESOURCE_ID_SEPARATOR",
    "SetDelta",
    "decode",
    "diff",
    "encode",
]
