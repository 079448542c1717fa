"""
Service Bus Route Configuration.

Provides configuration for:
    - One route per Azure Function (function name -> topic + subscription)
    - Service Bus connection app setting referenced by the trigger binding
    - Credential key name used to resolve the orchestration API key

Routes are immutable once loaded. Function names and (topic, subscription)
pairs must be unique so a delivery on one subscription can only ever reach
one dispatcher.

Exports:
    RouteConfig: Single route (frozen Pydantic model)
    RouteTable: Validated, immutable collection of routes
"""

import os
from typing import Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .defaults import RouteDefaults


# ============================================================================
# ROUTE
# ============================================================================

class RouteConfig(BaseModel):
    """
    One Service Bus topic subscription bound to one Azure Function.
    """

    model_config = ConfigDict(frozen=True)

    function_name: str = Field(
        ...,
        min_length=1,
        description="Azure Function name registered with the Functions host"
    )

    topic_name: str = Field(
        ...,
        min_length=1,
        description="Service Bus topic the function subscribes to"
    )

    subscription_name: str = Field(
        default=RouteDefaults.SUBSCRIPTION_NAME,
        min_length=1,
        description="Service Bus subscription (consumer group) on the topic"
    )

    connection_setting: str = Field(
        default=RouteDefaults.CONNECTION_SETTING,
        min_length=1,
        description="App setting name holding the Service Bus connection"
    )

    credential_key_name: str = Field(
        default=RouteDefaults.CREDENTIAL_KEY_NAME,
        min_length=1,
        description="Key Vault secret name (or env binding stem) for the API key"
    )

    @field_validator('function_name', 'topic_name', 'subscription_name', 'connection_setting')
    @classmethod
    def _strip_names(cls, value: str) -> str:
        # Binding names are whitespace sensitive on the broker side
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped


# ============================================================================
# ROUTE TABLE
# ============================================================================

class RouteTable(BaseModel):
    """
    Immutable route table, created once at process start.

    Usage:
        table = RouteTable.from_environment()
        route = table.get("encodingservice")
        route = table.find("video-events", "metadata-processor")
    """

    model_config = ConfigDict(frozen=True)

    routes: Tuple[RouteConfig, ...] = Field(
        ...,
        min_length=1,
        description="Routes, one per Azure Function"
    )

    @model_validator(mode='after')
    def _check_unique(self) -> 'RouteTable':
        names = [r.function_name for r in self.routes]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate function names in route table: {names}")

        pairs = [(r.topic_name, r.subscription_name) for r in self.routes]
        if len(pairs) != len(set(pairs)):
            raise ValueError(f"Duplicate topic/subscription pairs in route table: {pairs}")
        return self

    def __iter__(self) -> Iterator[RouteConfig]:
        return iter(self.routes)

    def __len__(self) -> int:
        return len(self.routes)

    @property
    def function_names(self) -> Tuple[str, ...]:
        return tuple(r.function_name for r in self.routes)

    def get(self, function_name: str) -> Optional[RouteConfig]:
        """Return the route for a function name, or None."""
        for route in self.routes:
            if route.function_name == function_name:
                return route
        return None

    def find(self, topic_name: str, subscription_name: str) -> Optional[RouteConfig]:
        """Return the route bound to a topic subscription, or None."""
        for route in self.routes:
            if route.topic_name == topic_name and route.subscription_name == subscription_name:
                return route
        return None

    @classmethod
    def default(
        cls,
        subscription_name: str = RouteDefaults.SUBSCRIPTION_NAME,
        connection_setting: str = RouteDefaults.CONNECTION_SETTING,
        credential_key_name: str = RouteDefaults.CREDENTIAL_KEY_NAME
    ) -> 'RouteTable':
        """Build the standard three-route table."""
        return cls(routes=tuple(
            RouteConfig(
                function_name=function_name,
                topic_name=topic_name,
                subscription_name=subscription_name,
                connection_setting=connection_setting,
                credential_key_name=credential_key_name,
            )
            for function_name, topic_name in RouteDefaults.ROUTES
        ))

    @classmethod
    def from_environment(cls) -> 'RouteTable':
        """Load from environment variables."""
        return cls.default(
            subscription_name=os.environ.get(
                "SERVICE_BUS_SUBSCRIPTION", RouteDefaults.SUBSCRIPTION_NAME
            ),
            connection_setting=os.environ.get(
                "SERVICE_BUS_CONNECTION_SETTING", RouteDefaults.CONNECTION_SETTING
            ),
            credential_key_name=os.environ.get(
                "ORCHESTRATOR_API_KEY_NAME", RouteDefaults.CREDENTIAL_KEY_NAME
            ),
        )
