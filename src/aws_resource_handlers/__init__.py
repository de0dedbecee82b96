"""AWS Resource Handlers - Root Package.

This package provides resource and data-source handlers that translate a
declarative configuration record into calls against the AWS control-plane API
and map the responses back into resource state.

Key Components:
    - config: Configuration defaults, loading and typed schemas
    - domain: Resource models, composite identities and set reconciliation
    - infrastructure: AWS client, pagination and lifecycle handlers
    - provider: Host-facing facade dispatching lifecycle operations

Usage:
    >>> from aws_resource_handlers.provider import Provider
    >>> provider = Provider.from_config()
    >>> provider.read("aws_s3_bucket", {"bucket": "my-bucket"})
"""

from ._version import __version__

__author__ = "AWS Professional Services"
__package_name__ = "aws-resource-handlers"
