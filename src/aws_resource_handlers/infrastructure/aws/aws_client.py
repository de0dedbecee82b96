import logging
import threading
import boto3
from botocore.config import Config
from typing import Dict, Any, Optional
from botocore.exceptions import BotoCoreError, ClientError
from botocore.utils import ArnParser

from aws_resource_handlers.domain.base.context import ProviderContext
from aws_resource_handlers.infrastructure.exceptions import CredentialsError

logger = logging.getLogger(__name__)

class AWSClient:
    """
    Centralized AWS client management.
    Creates the service clients used by the resource handlers and resolves
    the account, region and partition they operate in.
    """

    def __init__(self, region_name: str, config: Optional[Dict[str, Any]] = None):
        """
        Initialize AWS client with configuration.

        Args:
            region_name: AWS region name
            config: Optional configuration dictionary
        """
        config = config or {}
        self.region_name = region_name
        self.endpoint_url = config.get('AWS_ENDPOINT_URL') or None
        self.session = boto3.Session(
            profile_name=config.get('AWS_PROFILE') or None,
            region_name=region_name
        )
        self.config = Config(
            region_name=region_name,
            retries={
                'max_attempts': int(config.get('AWS_REQUEST_RETRY_ATTEMPTS', 3)),
                'mode': 'standard'
            },
            connect_timeout=int(config.get('AWS_CONNECTION_TIMEOUT_MS', 1000)) / 1000,
            read_timeout=int(config.get('AWS_READ_TIMEOUT_MS', 60000)) / 1000,
            proxies=self._proxy_settings(config)
        )

        self._clients: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._account_id: Optional[str] = None

    @staticmethod
    def _proxy_settings(config: Dict[str, Any]) -> Optional[Dict[str, str]]:
        """Build proxy settings for AWS clients."""
        if config.get('AWS_PROXY_HOST') and config.get('AWS_PROXY_PORT'):
            return {
                'http': f"http://{config['AWS_PROXY_HOST']}:{config['AWS_PROXY_PORT']}",
                'https': f"https://{config['AWS_PROXY_HOST']}:{config['AWS_PROXY_PORT']}"
            }
        return None

    def _client(self, service_name: str, config: Optional[Config] = None) -> Any:
        key = service_name if config is None else f"{service_name}:custom"
        if key not in self._clients:
            with self._lock:
                if key not in self._clients:
                    client_config = self.config if config is None else self.config.merge(config)
                    self._clients[key] = self.session.client(
                        service_name,
                        config=client_config,
                        endpoint_url=self.endpoint_url
                    )
                    logger.debug("Created %s client for region %s", service_name, self.region_name)
        return self._clients[key]

    @property
    def ec2_client(self) -> Any:
        return self._client('ec2')

    @property
    def route53_client(self) -> Any:
        return self._client('route53')

    @property
    def s3_client(self) -> Any:
        return self._client('s3')

    @property
    def sts_client(self) -> Any:
        return self._client('sts')

    def s3_client_for_bucket(self, bucket: str) -> Any:
        """
        S3 client suitable for the given bucket.

        Access point ARNs may live in another region than the client, so those
        lookups use a client that follows the region in the ARN.
        """
        if ArnParser.is_arn(bucket):
            return self._client('s3', Config(s3={'use_arn_region': True}))
        return self.s3_client

    @property
    def account_id(self) -> str:
        """Account ID of the configured credentials."""
        if self._account_id is None:
            try:
                self._account_id = self.sts_client.get_caller_identity()['Account']
            except (ClientError, BotoCoreError) as e:
                logger.error("Failed to validate AWS credentials: %s", str(e))
                raise CredentialsError(f"Failed to validate AWS credentials: {str(e)}")
        return self._account_id

    @property
    def partition(self) -> str:
        """Partition of the configured region, e.g. ``aws`` or ``aws-cn``."""
        return self.session.get_partition_for_region(self.region_name)

    def provider_context(self, cancel_event: Optional[threading.Event] = None) -> ProviderContext:
        """Build the context passed to every lifecycle operation."""
        return ProviderContext(
            account_id=self.account_id,
            region=self.region_name,
            partition=self.partition,
            cancel_event=cancel_event
        )
