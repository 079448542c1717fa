"""
Infrastructure Package - Lazy Loading Implementation.

Provides the external-integration classes with lazy loading to prevent
premature initialization of Azure credentials and environment reads.

The Azure Functions runtime imports function_app.py on every cold start,
before managed identity tokens are guaranteed to be ready. Importing
azure.identity / azure.keyvault here eagerly would make the Key Vault
client try to authenticate during module load. With __getattr__ the
actual import happens only when a class is first used, which is when the
first Service Bus message builds its dispatcher.

Exports:
    ManagedOrchestratorClient: httpx client for the orchestration service
    VaultRepository: Azure Key Vault secret access
    VaultAccessError: Key Vault failure
    ApiKeyProvider: Resolves the orchestration API key (Key Vault or env)
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .orchestration_client import ManagedOrchestratorClient as _ManagedOrchestratorClient
    from .vault import VaultRepository as _VaultRepository
    from .vault import VaultAccessError as _VaultAccessError
    from .credentials import ApiKeyProvider as _ApiKeyProvider


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    """
    if name == "ManagedOrchestratorClient":
        from .orchestration_client import ManagedOrchestratorClient
        return ManagedOrchestratorClient
    elif name == "VaultRepository":
        from .vault import VaultRepository
        return VaultRepository
    elif name == "VaultAccessError":
        from .vault import VaultAccessError
        return VaultAccessError
    elif name == "ApiKeyProvider":
        from .credentials import ApiKeyProvider
        return ApiKeyProvider
    raise AttributeError(f"module 'infrastructure' has no attribute '{name}'")


__all__ = [
    "ManagedOrchestratorClient",
    "VaultRepository",
    "VaultAccessError",
    "ApiKeyProvider",
]
