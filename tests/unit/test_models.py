"""
Core model tests: DeliveryMetadata, CredentialHeader, OrchestrationResult.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.models import DeliveryMetadata, CredentialHeader, OrchestrationResult


class TestDeliveryMetadata:

    def test_log_dimensions(self):
        metadata = DeliveryMetadata(
            delivery_count=1,
            enqueued_time_utc=datetime(2024, 1, 1, tzinfo=timezone.utc),
            message_id="m-1",
        )
        assert metadata.log_dimensions() == {
            "delivery_count": 1,
            "enqueued_time_utc": "2024-01-01T00:00:00+00:00",
            "message_id": "m-1",
        }

    @pytest.mark.parametrize("field, value", [
        ("delivery_count", 0),
        ("message_id", ""),
        ("message_id", " "),
        ("enqueued_time_utc", "not a timestamp"),
    ])
    def test_invalid_values_rejected(self, field, value):
        data = {
            "delivery_count": 1,
            "enqueued_time_utc": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "message_id": "m-1",
        }
        data[field] = value
        with pytest.raises(ValidationError):
            DeliveryMetadata(**data)

    def test_frozen(self):
        metadata = DeliveryMetadata(
            delivery_count=1,
            enqueued_time_utc=datetime(2024, 1, 1, tzinfo=timezone.utc),
            message_id="m-1",
        )
        with pytest.raises(ValidationError):
            metadata.delivery_count = 2


class TestCredentialHeader:

    def test_secret_hidden_from_repr_and_dump(self, api_key):
        header = CredentialHeader(name="x-api-key", value=api_key)
        assert api_key not in repr(header)
        assert api_key not in str(header.model_dump())

    def test_as_headers_read_only(self, api_key):
        headers = CredentialHeader(name="x-api-key", value=api_key).as_headers()
        assert dict(headers) == {"x-api-key": api_key}
        with pytest.raises(TypeError):
            headers["x-api-key"] = "other"


class TestOrchestrationResult:

    @pytest.mark.parametrize("status, ok", [(200, True), (202, True), (299, True), (301, False), (500, False)])
    def test_ok(self, status, ok):
        assert OrchestrationResult(status_code=status).ok is ok
