import threading

import pytest

from aws_resource_handlers.domain.base.context import ProviderContext
from aws_resource_handlers.domain.core.exceptions import (
    FormatError,
    OperationCancelledError,
    ValidationError,
)
from aws_resource_handlers.domain.resources import BucketLookup, CIDRLocation, SerialConsoleAccess


@pytest.fixture
def cidr_location():
    return CIDRLocation(
        cidr_collection_id="abc123",
        name="my-location",
        cidr_blocks=frozenset({"10.0.0.0/24", "2001:db8::/32"}),
    )


@pytest.mark.unit
class TestCIDRLocation:
    """Tests for the CIDR location record."""

    def test_build_id(self, cidr_location):
        assert cidr_location.build_id() == "abc123:my-location"

    def test_init_from_id(self):
        location = CIDRLocation.model_construct(
            id="abc123:my-location", cidr_collection_id="", name="", cidr_blocks=frozenset()
        )

        location.init_from_id()

        assert location.cidr_collection_id == "abc123"
        assert location.name == "my-location"

    def test_init_from_malformed_id(self, cidr_location):
        cidr_location.id = "abc123"

        with pytest.raises(FormatError):
            cidr_location.init_from_id()

    def test_init_from_id_with_invalid_name(self, cidr_location):
        cidr_location.id = "abc123:bad name!"

        with pytest.raises(FormatError):
            cidr_location.init_from_id()

    @pytest.mark.parametrize("name", ["", "has space", "x" * 17, "dot.ted"])
    def test_invalid_names(self, name):
        with pytest.raises(ValidationError) as exc_info:
            CIDRLocation.from_state({
                "cidr_collection_id": "abc123",
                "name": name,
                "cidr_blocks": ["10.0.0.0/24"],
            })

        assert "name" in exc_info.value.details

    @pytest.mark.parametrize("block", ["10.0.0.1/24", "not-a-cidr", "10.0.0.0/33", "2001:DB8::/32"])
    def test_invalid_cidr_blocks(self, block):
        with pytest.raises(ValidationError) as exc_info:
            CIDRLocation.from_state({
                "cidr_collection_id": "abc123",
                "name": "loc",
                "cidr_blocks": [block],
            })

        assert "cidr_blocks" in exc_info.value.details

    def test_empty_cidr_blocks(self):
        with pytest.raises(ValidationError):
            CIDRLocation.from_state({"cidr_collection_id": "abc123", "name": "loc", "cidr_blocks": []})

    def test_unknown_attribute(self):
        with pytest.raises(ValidationError) as exc_info:
            CIDRLocation.from_state({
                "cidr_collection_id": "abc123",
                "name": "loc",
                "cidr_blocks": ["10.0.0.0/24"],
                "tags": {},
            })

        assert "tags" in exc_info.value.details

    def test_to_state_sorts_cidr_blocks(self, cidr_location):
        state = cidr_location.to_state()

        assert state == {
            "id": None,
            "cidr_collection_id": "abc123",
            "name": "my-location",
            "cidr_blocks": ["10.0.0.0/24", "2001:db8::/32"],
        }

    def test_state_round_trip(self, cidr_location):
        assert CIDRLocation.from_state(cidr_location.to_state()) == cidr_location

    def test_changed_fields(self, cidr_location):
        other = cidr_location.model_copy(update={"cidr_blocks": frozenset({"10.0.0.0/24"}), "id": "x:y"})

        assert cidr_location.changed_fields(other) == ["cidr_blocks"]
        assert cidr_location.replacement_fields_changed(other) == []

    def test_replacement_fields_changed(self, cidr_location):
        other = cidr_location.model_copy(update={"name": "other"})

        assert cidr_location.replacement_fields_changed(other) == ["name"]


@pytest.mark.unit
class TestOtherRecords:
    """Tests for the serial console and bucket records."""

    def test_serial_console_access_defaults_to_enabled(self):
        assert SerialConsoleAccess.from_state({}).enabled is True

    def test_serial_console_access_rejects_non_boolean(self):
        with pytest.raises(ValidationError):
            SerialConsoleAccess.from_state({"enabled": "perhaps"})

    def test_bucket_lookup_requires_bucket(self):
        with pytest.raises(ValidationError) as exc_info:
            BucketLookup.from_state({})

        assert "bucket" in exc_info.value.details

    def test_bucket_lookup_is_arn(self):
        by_name = BucketLookup(bucket="my-bucket")
        by_arn = BucketLookup(bucket="arn:aws:s3:us-west-2:123456789012:accesspoint/my-ap")

        assert not by_name.is_arn
        assert by_arn.is_arn


@pytest.mark.unit
class TestProviderContext:
    """Tests for the provider context."""

    def test_partition_hostname(self):
        context = ProviderContext(account_id="123456789012", region="us-east-1")

        assert context.partition_hostname("bucket.s3") == "bucket.s3.amazonaws.com"

    def test_china_partition_dns_suffix(self):
        context = ProviderContext(account_id="123456789012", region="cn-north-1", partition="aws-cn")

        assert context.partition_dns_suffix == "amazonaws.com.cn"

    def test_explicit_dns_suffix(self):
        context = ProviderContext(account_id="123456789012", region="us-east-1", dns_suffix="example.test")

        assert context.partition_hostname("svc") == "svc.example.test"

    def test_raise_if_cancelled(self):
        event = threading.Event()
        context = ProviderContext(account_id="123456789012", region="us-east-1", cancel_event=event)

        context.raise_if_cancelled("reading")
        event.set()

        with pytest.raises(OperationCancelledError, match="reading: operation cancelled"):
            context.raise_if_cancelled("reading")

    def test_cancel_event_not_dumped(self):
        context = ProviderContext(account_id="123456789012", region="us-east-1",
                                  cancel_event=threading.Event())

        assert "cancel_event" not in context.model_dump()
