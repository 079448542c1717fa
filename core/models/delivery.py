# ============================================================================
# DELIVERY METADATA MODEL
# ============================================================================
# STATUS: Core model - broker metadata carried with every Service Bus delivery
# PURPOSE: Validate and carry delivery_count / enqueued_time_utc / message_id
# EXPORTS: DeliveryMetadata
# DEPENDENCIES: pydantic
# ============================================================================
"""
Delivery Metadata Model.

Service Bus hands each trigger invocation a message body plus metadata.
The body is opaque and never passes through this model; only the
metadata is validated here so the payload reaches the orchestration
service exactly as received.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeliveryMetadata(BaseModel):
    """
    Broker-supplied metadata for one delivery attempt.

    delivery_count starts at 1 and is incremented by Service Bus on each
    redelivery after a failed attempt.
    """

    model_config = ConfigDict(frozen=True)

    delivery_count: int = Field(..., ge=1, description="Delivery attempt number (1 = first)")
    enqueued_time_utc: datetime = Field(..., description="When the message was enqueued")
    message_id: str = Field(..., min_length=1, description="Broker message id")

    @field_validator('message_id')
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message_id must not be blank")
        return value

    def log_dimensions(self) -> dict:
        return {
            'delivery_count': self.delivery_count,
            'enqueued_time_utc': self.enqueued_time_utc.isoformat(),
            'message_id': self.message_id,
        }
