"""Typed records for each supported resource and data source."""

from .cidr_location import CIDRLocation
from .s3_bucket import BucketLookup
from .serial_console_access import SerialConsoleAccess

__all__ = ["BucketLookup", "CIDRLocation", "SerialConsoleAccess"]
