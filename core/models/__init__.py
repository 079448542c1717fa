"""
Core Models.

Pure data structures (no business logic).

Exports:
    DeliveryMetadata: Broker-supplied metadata for one delivery
    CredentialHeader: Immutable API key header for the orchestration service
    OrchestrationResult: Raw response from the orchestration service
"""

from .delivery import DeliveryMetadata
from .orchestration import CredentialHeader, OrchestrationResult

__all__ = [
    'DeliveryMetadata',
    'CredentialHeader',
    'OrchestrationResult',
]
