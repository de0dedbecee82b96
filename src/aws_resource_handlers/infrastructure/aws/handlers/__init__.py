"""AWS resource and data-source handlers."""

from .base_handler import AWSHandler, DataSourceHandler, ResourceHandler
from .ec2_serial_console_access_handler import SerialConsoleAccessHandler
from .route53_cidr_location_handler import CIDRLocationHandler
from .s3_bucket_data_source_handler import BucketDataSourceHandler

__all__ = [
    "AWSHandler",
    "BucketDataSourceHandler",
    "CIDRLocationHandler",
    "DataSourceHandler",
    "ResourceHandler",
    "SerialConsoleAccessHandler",
]
