import threading

import pytest
from botocore.stub import Stubber
from moto import mock_aws

from aws_resource_handlers.domain.base.context import ProviderContext
from aws_resource_handlers.infrastructure.aws.aws_client import AWSClient

ACCOUNT_ID = "123456789012"


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')


@pytest.fixture
def aws_client():
    """AWS client with test configuration; service clients are stubbed per test."""
    config = {
        'AWS_REQUEST_RETRY_ATTEMPTS': 0,
        'AWS_CONNECTION_TIMEOUT_MS': 1000
    }
    return AWSClient(region_name='us-east-1', config=config)


@pytest.fixture
def mocked_aws_client():
    """AWS client backed by moto."""
    with mock_aws():
        yield AWSClient(region_name='us-east-1', config={'AWS_REQUEST_RETRY_ATTEMPTS': 0})


@pytest.fixture
def cancel_event():
    return threading.Event()


@pytest.fixture
def context(cancel_event):
    return ProviderContext(account_id=ACCOUNT_ID, region='us-east-1', cancel_event=cancel_event)


@pytest.fixture
def route53_stub(aws_client):
    with Stubber(aws_client.route53_client) as stubber:
        yield stubber
        stubber.assert_no_pending_responses()


@pytest.fixture
def ec2_stub(aws_client):
    with Stubber(aws_client.ec2_client) as stubber:
        yield stubber
        stubber.assert_no_pending_responses()
