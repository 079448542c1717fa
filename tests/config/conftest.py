"""
Config test fixtures - clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "ORCHESTRATOR_BASE_URL", "ORCHESTRATOR_RUN_PATH", "ORCHESTRATOR_API_KEY_HEADER",
        "ORCHESTRATOR_TIMEOUT_SECONDS", "ORCHESTRATOR_CONTENT_TYPE", "ORCHESTRATOR_API_KEY_NAME",
        "KEY_VAULT_NAME", "SERVICE_BUS_SUBSCRIPTION", "SERVICE_BUS_CONNECTION_SETTING",
        "ENVIRONMENT", "DEBUG_MODE",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
