"""
function_app.py registration tests.

Imports function_app inside tests so the session env fixture is applied
before startup validation runs at import time.
"""

import importlib

import pytest

from tests.factories.fakes import make_service_bus_message


EXPECTED_TRIGGERS = {
    "notificationservice": "notification-service",
    "metadataprocessor": "video-events",
    "encodingservice": "encoding-service",
}


def _trigger_bindings(app):
    bindings = {}
    for function in app.get_functions():
        trigger = function.get_trigger()
        bindings[function.get_function_name()] = trigger
    return bindings


@pytest.fixture
def function_app_module(fresh_config):
    import function_app
    return importlib.reload(function_app)


@pytest.fixture
def reload_function_app(monkeypatch):
    """Reload function_app under a patched environment, restore it afterwards."""
    from config import reset_config
    import function_app

    def _reload():
        reset_config()
        return importlib.reload(function_app)

    yield _reload

    monkeypatch.undo()
    reset_config()
    importlib.reload(function_app)


class TestTriggerRegistration:

    def test_three_topic_triggers(self, function_app_module):
        bindings = _trigger_bindings(function_app_module.app)
        assert set(bindings) == set(EXPECTED_TRIGGERS)

    def test_topic_subscription_connection(self, function_app_module):
        for name, trigger in _trigger_bindings(function_app_module.app).items():
            assert trigger.topic_name == EXPECTED_TRIGGERS[name]
            assert trigger.subscription_name == "metadata-processor"
            assert trigger.connection == "ServiceBusConnectionString"
            assert trigger.name == "msg"

    def test_registry_built_lazily(self, function_app_module):
        registry = function_app_module.registry
        assert len(registry) == 3
        assert not any(registry.is_built(name) for name in EXPECTED_TRIGGERS)

    def test_handler_delegates_to_route_dispatcher(self, function_app_module, monkeypatch):
        handled = []

        class FakeDispatcher:
            def __init__(self, name):
                self.name = name

            def handle_message(self, msg):
                handled.append((self.name, msg.message_id))

        monkeypatch.setattr(function_app_module.registry, "get", lambda name: FakeDispatcher(name))

        functions = {f.get_function_name(): f for f in function_app_module.app.get_functions()}
        functions["metadataprocessor"].get_user_function()(make_service_bus_message(message_id="m-video"))

        assert handled == [("metadataprocessor", "m-video")]


class TestStartupGate:

    def test_no_triggers_when_validation_fails(self, reload_function_app, monkeypatch):
        monkeypatch.delenv("ORCHESTRATOR_BASE_URL", raising=False)

        module = reload_function_app()

        assert module.registry is None
        assert module.app.get_functions() == []

    def test_no_triggers_without_api_key_source(self, reload_function_app, monkeypatch):
        monkeypatch.delenv("ORCHESTRATOR_API_KEY", raising=False)
        monkeypatch.delenv("KEY_VAULT_NAME", raising=False)

        module = reload_function_app()

        assert module.registry is None
        assert module.app.get_functions() == []
        assert module._startup_state.credentials.error_type == "MISSING_API_KEY"
