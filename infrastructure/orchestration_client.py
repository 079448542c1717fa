# ============================================================================
# MANAGED ORCHESTRATOR CLIENT
# ============================================================================
# STATUS: Infrastructure - HTTP client for the orchestration service
# PURPOSE: Authenticated run() calls carrying the raw Service Bus payload
# EXPORTS: ManagedOrchestratorClient
# DEPENDENCIES: httpx, config, core.models.orchestration
# ============================================================================
"""
Managed Orchestrator Client.

Handles HTTP communication with the orchestration service. The API key
header set is fixed at construction time; every run() call sends exactly
that header set plus the payload as the request body.

Instances hold no mutable state and open a fresh httpx.Client per call,
so one instance is safely shared by concurrent invocations.

Usage:
    from infrastructure.orchestration_client import ManagedOrchestratorClient

    client = ManagedOrchestratorClient.from_config(config.orchestrator, header.as_headers())
    result = client.run(message_body)
"""

from types import MappingProxyType
from typing import Mapping, Optional, Union

import httpx

from config import OrchestratorConfig
from core.models.orchestration import OrchestrationResult
from exceptions import OrchestrationError
from interfaces.orchestration import IOrchestrationService
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "ManagedOrchestratorClient")


class ManagedOrchestratorClient(IOrchestrationService):
    """
    Client for the orchestration service run endpoint.

    Handles:
    - Sending the credential header set on every call
    - Forwarding the payload byte-for-byte as the request body
    - Translating non-2xx and transport failures into OrchestrationError

    No retries: a failed call raises so Service Bus can redeliver.
    """

    def __init__(
        self,
        headers: Mapping[str, str],
        base_url: str,
        run_path: str = "/run",
        timeout_seconds: float = 30.0,
        content_type: str = "application/json",
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize client.

        Args:
            headers: Credential header set (copied, read-only afterwards)
            base_url: Orchestration service base URL
            run_path: Path of the run endpoint
            timeout_seconds: Default per-call timeout
            content_type: Content-Type for the forwarded payload
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._headers = MappingProxyType(dict(headers))
        self._run_url = f"{base_url.rstrip('/')}/{run_path.lstrip('/')}"
        self._timeout_seconds = timeout_seconds
        self._content_type = content_type
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: OrchestratorConfig,
        headers: Mapping[str, str],
        transport: Optional[httpx.BaseTransport] = None
    ) -> 'ManagedOrchestratorClient':
        return cls(
            headers=headers,
            base_url=config.base_url,
            run_path=config.run_path,
            timeout_seconds=config.timeout_seconds,
            content_type=config.content_type,
            transport=transport,
        )

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    @property
    def run_url(self) -> str:
        return self._run_url

    def run(self, payload: Union[str, bytes], timeout: Optional[float] = None) -> OrchestrationResult:
        """
        POST the payload to the run endpoint.

        Args:
            payload: Raw message body
            timeout: Per-call timeout in seconds (None = client default)

        Returns:
            OrchestrationResult with status code and response body.

        Raises:
            OrchestrationError: Non-2xx response, timeout or transport failure.
        """
        effective_timeout = timeout if timeout is not None else self._timeout_seconds
        request_headers = dict(self._headers)
        request_headers["Content-Type"] = self._content_type

        logger.debug(f"POST {self._run_url} (timeout={effective_timeout}s)")

        try:
            with httpx.Client(timeout=effective_timeout, transport=self._transport) as client:
                response = client.post(self._run_url, content=payload, headers=request_headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise OrchestrationError(
                f"Orchestration service returned {status} for {self._run_url}",
                status_code=status
            ) from e
        except httpx.TimeoutException as e:
            raise OrchestrationError(
                f"Orchestration service timed out after {effective_timeout}s: {self._run_url}"
            ) from e
        except httpx.TransportError as e:
            raise OrchestrationError(
                f"Orchestration service unreachable: {self._run_url}: {e}"
            ) from e

        result = OrchestrationResult(
            status_code=response.status_code,
            body=response.text,
            request_id=response.headers.get("x-request-id"),
        )
        logger.debug(f"Orchestration run returned {result.status_code}")
        return result
