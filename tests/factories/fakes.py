"""
Test doubles for the external collaborators.

- RecordingOrchestrator: IOrchestrationService that records every run() call
- make_service_bus_message: duck-typed azure.functions.ServiceBusMessage
- FakeSecretClient: azure.keyvault.secrets.SecretClient stand-in

Message factories randomize non-identity fields (ids, timestamps) so tests
cannot rely on specific default values.
"""

import random
import threading
import uuid
from datetime import datetime, timezone, timedelta
from types import MappingProxyType, SimpleNamespace

from azure.core.exceptions import ResourceNotFoundError as AzureResourceNotFoundError

from interfaces.orchestration import IOrchestrationService


class RecordingOrchestrator(IOrchestrationService):
    """Records (payload, timeout) per call; returns `result` or raises `error`."""

    def __init__(self, headers=None, result="accepted", error=None):
        self._headers = MappingProxyType(dict(headers or {}))
        self.result = result
        self.error = error
        self.calls = []
        self._lock = threading.Lock()

    @property
    def headers(self):
        return self._headers

    @property
    def payloads(self):
        return [payload for payload, _ in self.calls]

    def run(self, payload, timeout=None):
        with self._lock:
            self.calls.append((payload, timeout))
        if self.error is not None:
            raise self.error
        return self.result


def _random_timestamp() -> datetime:
    """Generate random timestamp within last 7 days."""
    offset = random.randint(0, 7 * 24 * 3600)
    return datetime.now(timezone.utc) - timedelta(seconds=offset)


def make_service_bus_message(body='{"assetId":"abc123"}', delivery_count=1,
                             enqueued_time_utc=None, message_id=None):
    """
    Build an object with the ServiceBusMessage attributes the dispatcher reads.

    body may be str (encoded as UTF-8), bytes, or None.
    """
    if isinstance(body, str):
        raw = body.encode("utf-8")
    else:
        raw = body

    return SimpleNamespace(
        get_body=lambda: raw,
        delivery_count=delivery_count,
        enqueued_time_utc=enqueued_time_utc or _random_timestamp(),
        message_id=message_id or f"msg-{uuid.uuid4().hex[:12]}",
    )


class FakeSecretClient:
    """In-memory SecretClient; missing names raise azure.core ResourceNotFoundError."""

    def __init__(self, secrets=None):
        self.secrets = dict(secrets or {})
        self.requests = []

    def get_secret(self, name):
        self.requests.append(name)
        if name not in self.secrets:
            raise AzureResourceNotFoundError(f"Secret not found: {name}")
        return SimpleNamespace(name=name, value=self.secrets[name])
