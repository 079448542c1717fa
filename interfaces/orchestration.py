# ============================================================================
# ORCHESTRATION SERVICE INTERFACE
# ============================================================================
# PURPOSE: Abstract interface for the external orchestration service
# EXPORTS: IOrchestrationService - Abstract base class for orchestration clients
# DEPENDENCIES: abc, typing
# ============================================================================

"""
Orchestration Service Interface

Defines the contract between the Service Bus dispatchers and the external
orchestration service that does the actual processing.

The service is a black box. The dispatchers only rely on:
- An authentication header set fixed at construction time
- One synchronous run(payload) call per delivered message
- Failures surfacing as exceptions

Implementations MUST tolerate concurrent and duplicate run() calls:
Service Bus delivers at-least-once and the Functions host runs
invocations in parallel.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union


class IOrchestrationService(ABC):
    """
    Interface for orchestration service clients.
    """

    @property
    @abstractmethod
    def headers(self) -> Mapping[str, str]:
        """Authentication header set supplied at construction."""
        pass

    @abstractmethod
    def run(self, payload: Union[str, bytes], timeout: Optional[float] = None) -> Any:
        """
        Hand one message payload to the orchestration service.

        Args:
            payload: Raw message body, forwarded unmodified
            timeout: Deadline for the call in seconds (None = implementation default)

        Returns:
            Implementation-defined result; callers do not inspect it

        Raises:
            Exception: Any failure. Callers propagate it unchanged.
        """
        pass
