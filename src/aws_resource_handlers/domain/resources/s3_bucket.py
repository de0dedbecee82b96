"""S3 bucket data-source record."""
from typing import ClassVar, Optional

from botocore.utils import ArnParser
from pydantic import Field

from aws_resource_handlers.domain.base.entity import ResourceModel


class BucketLookup(ResourceModel):
    """Metadata of an existing S3 bucket, looked up by name or access point ARN."""
    type_name: ClassVar[str] = "aws_s3_bucket"

    bucket: str = Field(..., min_length=1, description="Bucket name or access point ARN")

    # Computed
    arn: Optional[str] = None
    bucket_domain_name: Optional[str] = None
    bucket_region: Optional[str] = None
    bucket_regional_domain_name: Optional[str] = None
    hosted_zone_id: Optional[str] = None
    website_domain: Optional[str] = None
    website_endpoint: Optional[str] = None

    @property
    def is_arn(self) -> bool:
        return ArnParser.is_arn(self.bucket)
