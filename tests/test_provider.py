import logging
from unittest.mock import Mock

import pytest
from moto import mock_aws

from aws_resource_handlers.domain.core.exceptions import ValidationError
from aws_resource_handlers.domain.resources import BucketLookup, CIDRLocation
from aws_resource_handlers.infrastructure.aws.aws_client import AWSClient
from aws_resource_handlers.infrastructure.aws.exceptions import UnsupportedResourceTypeError
from aws_resource_handlers.infrastructure.aws.handlers import (
    BucketDataSourceHandler,
    CIDRLocationHandler,
)
from aws_resource_handlers.provider import PlanAction, Provider

CIDR_TYPE = "aws_route53_cidr_location"
COLLECTION_ID = "a1b2c3d4-0000-1111-2222-333344445555"
LOCATION_ID = f"{COLLECTION_ID}:my-location"


def location_state(blocks=("10.0.0.0/24",), name="my-location", id=None):
    return {"id": id, "cidr_collection_id": COLLECTION_ID, "name": name, "cidr_blocks": list(blocks)}


@pytest.fixture
def cidr_handler():
    handler = Mock(spec=CIDRLocationHandler)
    handler.model = CIDRLocation
    return handler


@pytest.fixture
def bucket_handler():
    handler = Mock(spec=BucketDataSourceHandler)
    handler.model = BucketLookup
    return handler


@pytest.fixture
def provider(cidr_handler, bucket_handler, context):
    return Provider(
        Mock(spec=AWSClient), context,
        resources={CIDR_TYPE: cidr_handler},
        data_sources={"aws_s3_bucket": bucket_handler},
    )


@pytest.mark.unit
class TestPlan:
    """Tests for planning changes."""

    def test_plan_create(self, provider):
        assert provider.plan(CIDR_TYPE, None, location_state()) == PlanAction.CREATE

    def test_plan_delete(self, provider):
        assert provider.plan(CIDR_TYPE, location_state(id=LOCATION_ID), None) == PlanAction.DELETE

    def test_plan_nothing(self, provider):
        assert provider.plan(CIDR_TYPE, None, None) == PlanAction.NO_CHANGE

    def test_plan_no_change_ignores_id(self, provider):
        action = provider.plan(CIDR_TYPE, location_state(id=LOCATION_ID), location_state())

        assert action == PlanAction.NO_CHANGE

    def test_plan_update(self, provider):
        action = provider.plan(CIDR_TYPE, location_state(id=LOCATION_ID),
                               location_state(blocks=["10.0.0.0/24", "10.0.1.0/24"]))

        assert action == PlanAction.UPDATE

    def test_plan_replace(self, provider):
        action = provider.plan(CIDR_TYPE, location_state(id=LOCATION_ID), location_state(name="other"))

        assert action == PlanAction.REPLACE

    def test_plan_invalid_configuration(self, provider):
        with pytest.raises(ValidationError):
            provider.plan(CIDR_TYPE, None, location_state(blocks=["10.0.0.1/24"]))


@pytest.mark.unit
class TestLifecycle:
    """Tests for dispatching lifecycle operations."""

    def test_create(self, provider, cidr_handler, context):
        cidr_handler.create.return_value = CIDRLocation.from_state(location_state(id=LOCATION_ID))

        state = provider.create(CIDR_TYPE, location_state())

        plan = cidr_handler.create.call_args[0][2]
        assert cidr_handler.create.call_args[0][1] is context
        assert plan.cidr_blocks == frozenset({"10.0.0.0/24"})
        assert state == location_state(id=LOCATION_ID)

    def test_create_rejects_invalid_configuration(self, provider, cidr_handler):
        with pytest.raises(ValidationError) as exc_info:
            provider.create(CIDR_TYPE, location_state(name="bad name"))

        assert "name" in exc_info.value.details
        cidr_handler.create.assert_not_called()

    def test_read(self, provider, cidr_handler):
        cidr_handler.read.return_value = CIDRLocation.from_state(
            location_state(blocks=["10.0.1.0/24"], id=LOCATION_ID)
        )

        state = provider.read(CIDR_TYPE, location_state(id=LOCATION_ID))

        assert state["cidr_blocks"] == ["10.0.1.0/24"]

    def test_read_dropped_resource(self, provider, cidr_handler):
        cidr_handler.read.return_value = None

        assert provider.read(CIDR_TYPE, location_state(id=LOCATION_ID)) is None

    def test_read_data_source(self, provider, bucket_handler, cidr_handler):
        bucket_handler.read.return_value = BucketLookup(
            id="my-bucket", bucket="my-bucket", bucket_region="us-west-2"
        )

        state = provider.read("aws_s3_bucket", {"bucket": "my-bucket"})

        assert state["bucket_region"] == "us-west-2"
        cidr_handler.read.assert_not_called()

    def test_update(self, provider, cidr_handler):
        desired = location_state(blocks=["10.0.1.0/24"])
        cidr_handler.update.return_value = CIDRLocation.from_state(dict(desired, id=LOCATION_ID))

        state = provider.update(CIDR_TYPE, location_state(id=LOCATION_ID), desired)

        prior, plan = cidr_handler.update.call_args[0][2:]
        assert prior.id == LOCATION_ID
        assert plan.cidr_blocks == frozenset({"10.0.1.0/24"})
        assert state["id"] == LOCATION_ID

    def test_delete(self, provider, cidr_handler):
        assert provider.delete(CIDR_TYPE, location_state(id=LOCATION_ID)) is None

        cidr_handler.delete.assert_called_once()

    def test_import_resource(self, provider, cidr_handler):
        cidr_handler.import_state.return_value = CIDRLocation.from_state(location_state(id=LOCATION_ID))

        state = provider.import_resource(CIDR_TYPE, LOCATION_ID)

        assert state["name"] == "my-location"
        assert cidr_handler.import_state.call_args[0][2] == LOCATION_ID

    def test_import_missing_resource(self, provider, cidr_handler):
        cidr_handler.import_state.return_value = None

        assert provider.import_resource(CIDR_TYPE, LOCATION_ID) is None

    def test_unsupported_resource_type(self, provider):
        with pytest.raises(UnsupportedResourceTypeError, match="aws_instance"):
            provider.create("aws_instance", {})

    def test_data_source_is_not_a_resource(self, provider):
        with pytest.raises(UnsupportedResourceTypeError):
            provider.delete("aws_s3_bucket", {"bucket": "my-bucket"})


@pytest.mark.unit
def test_default_registries(context):
    provider = Provider(Mock(spec=AWSClient), context)

    assert provider.resource_types == ["aws_ec2_serial_console_access", "aws_route53_cidr_location"]
    assert provider.data_source_types == ["aws_s3_bucket"]


@pytest.mark.aws
def test_from_config(tmp_path, monkeypatch, cancel_event):
    config_file = tmp_path / "config.yml"
    config_file.write_text("AWS_REGION: us-west-2\nLOGGING_CONFIG:\n  level: WARNING\n")
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_DESTINATION", raising=False)
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]

    try:
        with mock_aws():
            provider = Provider.from_config(str(config_file), cancel_event=cancel_event)
    finally:
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        for handler in handlers:
            root_logger.addHandler(handler)

    assert provider.context.account_id == "123456789012"
    assert provider.context.region == "us-west-2"
    assert provider.context.cancel_event is cancel_event
    assert provider.aws_client.region_name == "us-west-2"
