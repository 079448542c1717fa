"""
Unit test fixtures - routes, fake collaborators, dispatchers.
"""

import logging

import pytest

from tests.factories.fakes import (
    RecordingOrchestrator,
    FakeSecretClient,
    make_service_bus_message,
)


@pytest.fixture
def route_table():
    from config import RouteTable
    return RouteTable.default()


@pytest.fixture
def encoding_route(route_table):
    return route_table.get("encodingservice")


@pytest.fixture
def api_key_headers(api_key):
    return {"x-api-key": api_key}


@pytest.fixture
def orchestrator(api_key_headers):
    return RecordingOrchestrator(headers=api_key_headers)


@pytest.fixture
def dispatcher(encoding_route, orchestrator):
    from triggers.service_bus import TriggerDispatcher
    return TriggerDispatcher(encoding_route, orchestrator, default_timeout=30.0)


@pytest.fixture
def make_message():
    """Factory fixture: fake ServiceBusMessage."""
    return make_service_bus_message


@pytest.fixture
def secret_client(api_key):
    return FakeSecretClient({"orchestrator-api-key": api_key})


@pytest.fixture
def trigger_records(caplog):
    """Factory fixture: INFO+ records emitted by one function's trigger logger."""
    caplog.set_level(logging.INFO)

    def _records(function_name: str):
        return [r for r in caplog.records if r.name == f"trigger.{function_name}"]
    return _records
