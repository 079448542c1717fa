"""
Route table tests.

Anti-overfitting: count assertions catch silent additions/removals of routes.
"""

import pytest
from pydantic import ValidationError

from config import RouteConfig, RouteTable


EXPECTED_ROUTES = {
    "notificationservice": "notification-service",
    "metadataprocessor": "video-events",
    "encodingservice": "encoding-service",
}


class TestDefaultRouteTable:

    def test_has_exactly_3_routes(self):
        assert len(RouteTable.default()) == 3

    def test_function_to_topic_mapping(self):
        table = RouteTable.default()
        assert {r.function_name: r.topic_name for r in table} == EXPECTED_ROUTES

    def test_all_routes_share_subscription_and_connection(self):
        for route in RouteTable.default():
            assert route.subscription_name == "metadata-processor"
            assert route.connection_setting == "ServiceBusConnectionString"
            assert route.credential_key_name == "orchestrator-api-key"

    def test_get_and_find(self):
        table = RouteTable.default()
        assert table.get("metadataprocessor").topic_name == "video-events"
        assert table.find("encoding-service", "metadata-processor").function_name == "encodingservice"

    def test_unknown_lookups_return_none(self):
        table = RouteTable.default()
        assert table.get("nope") is None
        assert table.find("video-events", "other-subscription") is None

    def test_function_names_order(self):
        assert RouteTable.default().function_names == (
            "notificationservice", "metadataprocessor", "encodingservice"
        )


class TestRouteConfigValidation:

    def test_subscription_whitespace_stripped(self):
        route = RouteConfig(
            function_name="encodingservice",
            topic_name="encoding-service",
            subscription_name=" metadata-processor",
        )
        assert route.subscription_name == "metadata-processor"

    def test_blank_topic_rejected(self):
        with pytest.raises(ValidationError):
            RouteConfig(function_name="encodingservice", topic_name="   ")

    def test_frozen(self):
        route = RouteConfig(function_name="encodingservice", topic_name="encoding-service")
        with pytest.raises(ValidationError):
            route.topic_name = "video-events"


class TestRouteTableValidation:

    def test_duplicate_function_names_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate function names"):
            RouteTable(routes=(
                RouteConfig(function_name="a", topic_name="t1"),
                RouteConfig(function_name="a", topic_name="t2"),
            ))

    def test_duplicate_subscriptions_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate topic/subscription"):
            RouteTable(routes=(
                RouteConfig(function_name="a", topic_name="t1"),
                RouteConfig(function_name="b", topic_name="t1"),
            ))

    def test_empty_table_rejected(self):
        with pytest.raises(ValidationError):
            RouteTable(routes=())


class TestRouteTableFromEnvironment:

    def test_defaults(self, clean_env):
        table = RouteTable.from_environment()
        assert {r.subscription_name for r in table} == {"metadata-processor"}

    def test_overrides(self, clean_env):
        clean_env.setenv("SERVICE_BUS_SUBSCRIPTION", "metadata-processor-qa")
        clean_env.setenv("SERVICE_BUS_CONNECTION_SETTING", "ServiceBusQa")
        clean_env.setenv("ORCHESTRATOR_API_KEY_NAME", "orchestrator-api-key-qa")

        table = RouteTable.from_environment()

        assert {r.subscription_name for r in table} == {"metadata-processor-qa"}
        assert {r.connection_setting for r in table} == {"ServiceBusQa"}
        assert {r.credential_key_name for r in table} == {"orchestrator-api-key-qa"}
