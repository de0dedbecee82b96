"""S3 bucket data source handler."""
from typing import Any, Dict, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from aws_resource_handlers.domain.base.context import ProviderContext
from aws_resource_handlers.domain.core.exceptions import NotFoundError
from aws_resource_handlers.domain.resources import BucketLookup
from aws_resource_handlers.infrastructure.aws.aws_client import AWSClient
from aws_resource_handlers.infrastructure.aws.handlers.base_handler import DataSourceHandler
from aws_resource_handlers.infrastructure.aws.pagination import error_code

BUCKET_NOT_FOUND_CODES = ("404", "NoSuchBucket", "NotFound")
WEBSITE_NOT_FOUND_CODES = ("NoSuchWebsiteConfiguration", "NoSuchBucket")

# Route 53 hosted zone IDs of the S3 website endpoints, per region.
HOSTED_ZONE_IDS = {
    "af-south-1": "Z83WF9RJE8B12",
    "ap-east-1": "ZNB98KWMFR0R6",
    "ap-northeast-1": "Z2M4EHUR26P7ZW",
    "ap-northeast-2": "Z3W03O7B5YMIYP",
    "ap-northeast-3": "Z2YQB5RD63NC85",
    "ap-south-1": "Z11RGJOFQNVJUP",
    "ap-south-2": "Z02976202B4EZMXIPMXF7",
    "ap-southeast-1": "Z3O0J2DXBE1FTB",
    "ap-southeast-2": "Z1WCIGYICN2BYD",
    "ap-southeast-3": "Z01846753K324LI26A3VV",
    "ap-southeast-4": "Z0312387243XT5FE14WFO",
    "ca-central-1": "Z1QDHH18159H29",
    "cn-north-1": "Z5CN8UMXT92WN",
    "cn-northwest-1": "Z282HJ1KT0DH03",
    "eu-central-1": "Z21DNDUVLTQW6Q",
    "eu-central-2": "Z030506016YDQGETNASS",
    "eu-north-1": "Z3BAZG2TWCNX0D",
    "eu-south-1": "Z30OZKI7KPW7MI",
    "eu-south-2": "Z0081959F7139GRJC19J",
    "eu-west-1": "Z1BKCTXD74EZPE",
    "eu-west-2": "Z3GKZC51ZF0DB4",
    "eu-west-3": "Z3R1K369G5AVDG",
    "il-central-1": "Z09640613K4A3MN55U7GU",
    "me-central-1": "Z06143092I8HRXZRUZROF",
    "me-south-1": "Z1MPMWCPA7YB62",
    "sa-east-1": "Z7KQH4QJS55SO",
    "us-east-1": "Z3AQBSTGFYJSTF",
    "us-east-2": "Z2O1EMRO9K5GLX",
    "us-gov-east-1": "Z2NIFVYYW2VKV1",
    "us-gov-west-1": "Z31GFT0UA1I2HV",
    "us-west-1": "Z2F56UZL2M1ACD",
    "us-west-2": "Z3BJ6K6RIION7M",
}

# Regions whose website endpoints use "s3-website-<region>" rather than "s3-website.<region>".
LEGACY_WEBSITE_ENDPOINT_REGIONS = frozenset({
    "ap-northeast-1",
    "ap-southeast-1",
    "ap-southeast-2",
    "eu-west-1",
    "sa-east-1",
    "us-east-1",
    "us-gov-west-1",
    "us-west-1",
    "us-west-2",
})


def find_bucket(client: Any, bucket: str) -> Dict[str, Any]:
    """
    HeadBucket the bucket.

    Raises:
        NotFoundError: If the bucket does not exist
    """
    try:
        return client.head_bucket(Bucket=bucket)
    except ClientError as e:
        if error_code(e) in BUCKET_NOT_FOUND_CODES:
            raise NotFoundError(last_error=e, last_request={'Bucket': bucket}) from e
        raise


def find_bucket_region(client: Any, bucket: str,
                       head_output: Optional[Dict[str, Any]] = None) -> str:
    """
    Region the bucket lives in.

    Uses the ``x-amz-bucket-region`` header of HeadBucket and falls back to
    GetBucketLocation when the header is absent.
    """
    if head_output is None:
        head_output = find_bucket(client, bucket)

    region = head_output.get('BucketRegion')
    if not region:
        headers = head_output.get('ResponseMetadata', {}).get('HTTPHeaders', {})
        region = headers.get('x-amz-bucket-region')
    if region:
        return region

    try:
        location = client.get_bucket_location(Bucket=bucket).get('LocationConstraint')
    except ClientError as e:
        if error_code(e) in BUCKET_NOT_FOUND_CODES:
            raise NotFoundError(last_error=e, last_request={'Bucket': bucket}) from e
        raise
    return normalize_bucket_location(location)


def normalize_bucket_location(location: Optional[str]) -> str:
    """Map a GetBucketLocation constraint to a region name."""
    if not location:
        return "us-east-1"
    if location == "EU":
        return "eu-west-1"
    return location


def find_bucket_website(client: Any, bucket: str) -> Dict[str, Any]:
    """
    Website configuration of the bucket.

    Raises:
        NotFoundError: If the bucket has no website configuration
    """
    try:
        return client.get_bucket_website(Bucket=bucket)
    except ClientError as e:
        if error_code(e) in WEBSITE_NOT_FOUND_CODES:
            raise NotFoundError(last_error=e, last_request={'Bucket': bucket}) from e
        raise


def bucket_arn(context: ProviderContext, bucket: str) -> str:
    return f"arn:{context.partition}:s3:::{bucket}"


def bucket_regional_domain_name(context: ProviderContext, bucket: str, region: str) -> str:
    return f"{bucket}.s3.{region}.{context.partition_dns_suffix}"


def hosted_zone_id_for_region(region: str) -> str:
    """
    Route 53 hosted zone ID of the S3 website endpoint in ``region``.

    Raises:
        ValueError: If the region has no known hosted zone
    """
    if region not in HOSTED_ZONE_IDS:
        raise ValueError(f"S3 hosted zone ID not found for region ({region})")
    return HOSTED_ZONE_IDS[region]


def bucket_website_endpoint_and_domain(context: ProviderContext, bucket: str,
                                       region: str) -> Tuple[str, str]:
    """Return ``(website_endpoint, website_domain)`` for a bucket in ``region``."""
    if region in LEGACY_WEBSITE_ENDPOINT_REGIONS:
        domain = f"s3-website-{region}.{context.partition_dns_suffix}"
    else:
        domain = f"s3-website.{region}.{context.partition_dns_suffix}"
    return f"{bucket}.{domain}", domain


class BucketDataSourceHandler(DataSourceHandler[BucketLookup]):
    """Handler for the ``aws_s3_bucket`` data source."""

    model = BucketLookup

    def read(self, aws_client: AWSClient, context: ProviderContext,
             config: BucketLookup) -> BucketLookup:
        bucket = config.bucket
        conn = aws_client.s3_client_for_bucket(bucket)

        operation = "reading S3 Bucket"
        context.raise_if_cancelled(operation)
        try:
            head_output = find_bucket(conn, bucket)
        except Exception as e:
            raise self._api_error(operation, bucket, e) from e

        operation = "reading S3 Bucket Region"
        context.raise_if_cancelled(operation)
        try:
            region = find_bucket_region(conn, bucket, head_output)
        except Exception as e:
            raise self._api_error(operation, bucket, e) from e

        data = config.model_copy(update={
            'id': bucket,
            'arn': bucket if config.is_arn else bucket_arn(context, bucket),
            'bucket_domain_name': context.partition_hostname(f"{bucket}.s3"),
            'bucket_region': region,
            'bucket_regional_domain_name': bucket_regional_domain_name(context, bucket, region),
        })

        try:
            data.hosted_zone_id = hosted_zone_id_for_region(region)
        except ValueError as e:
            self._logger.warning("HostedZoneIDForRegion: %s", str(e))

        context.raise_if_cancelled("reading S3 Bucket Website")
        try:
            find_bucket_website(conn, bucket)
        except NotFoundError:
            self._logger.debug("S3 Bucket (%s) has no website configuration", bucket)
        except (ClientError, BotoCoreError) as e:
            self._logger.warning("Reading S3 Bucket (%s) Website: %s", bucket, str(e))
        else:
            endpoint, domain = bucket_website_endpoint_and_domain(context, bucket, region)
            data.website_domain = domain
            data.website_endpoint = endpoint

        self._logger.debug("Read S3 Bucket %s in region %s", bucket, region)
        return data
