# ============================================================================
# VAULT REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Key Vault repository
# PURPOSE: Secure retrieval of the orchestration API key
# EXPORTS: VaultRepository, VaultAccessError
# DEPENDENCIES: azure.keyvault.secrets, azure.identity, azure.core, util_logger, config
# SOURCE: Azure Key Vault via DefaultAzureCredential
# ============================================================================

"""
Azure Key Vault Repository - Secure Credential Management

Provides secure access to the orchestration API key so it is never
compiled into source or app settings in clear text.

Security Features:
- DefaultAzureCredential for managed identity authentication
- In-memory secret cache with TTL (secrets rotate without redeploy)
- Explicit error handling for vault access failures
- Secret values never logged
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone, timedelta

from azure.keyvault.secrets import SecretClient
from azure.identity import DefaultAzureCredential
from azure.core.exceptions import AzureError

from config.defaults import OrchestratorDefaults
from exceptions import CredentialError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "VaultRepository")


class VaultAccessError(CredentialError):
    """Key Vault client creation or secret retrieval failed."""
    pass


class VaultRepository:
    """
    Azure Key Vault repository for secure credential management.

    Usage:
        vault_repo = VaultRepository("metadata-kv")
        api_key = vault_repo.get_secret("orchestrator-api-key")
    """

    def __init__(
        self,
        vault_name: str,
        client: Optional[Any] = None,
        cache_ttl_minutes: int = OrchestratorDefaults.SECRET_CACHE_TTL_MINUTES
    ):
        """
        Initialize vault repository with Azure Key Vault client.

        Args:
            vault_name: Key Vault name
            client: Optional pre-built SecretClient (tests pass a fake)
            cache_ttl_minutes: How long a fetched secret is reused
        """
        if not vault_name:
            raise VaultAccessError("Key Vault name is required")

        self.vault_name = vault_name
        self.vault_url = f"https://{self.vault_name}.vault.azure.net/"

        if client is not None:
            self.client = client
        else:
            try:
                self.credential = DefaultAzureCredential()
                self.client = SecretClient(vault_url=self.vault_url, credential=self.credential)
                logger.info(f"VaultRepository initialized for vault: {self.vault_name}")
            except Exception as e:
                logger.error(f"Failed to initialize VaultRepository: {e}")
                raise VaultAccessError(f"Vault client initialization failed: {e}") from e

        self._secret_cache: Dict[str, Dict[str, Any]] = {}
        self._cache_ttl_minutes = cache_ttl_minutes

    def get_secret(self, secret_name: str, use_cache: bool = True) -> str:
        """
        Retrieve secret value from Azure Key Vault.

        Args:
            secret_name: Name of the secret in Key Vault
            use_cache: Whether to use cached value if available

        Returns:
            Secret value as string

        Raises:
            VaultAccessError: If secret cannot be retrieved or is empty
        """
        logger.debug(f"Retrieving secret: {secret_name}")

        if use_cache and self._is_secret_cached(secret_name):
            logger.debug(f"Using cached secret: {secret_name}")
            return self._secret_cache[secret_name]['value']

        try:
            secret = self.client.get_secret(secret_name)
        except AzureError as e:
            error_msg = f"Failed to retrieve secret '{secret_name}' from vault '{self.vault_name}': {e}"
            logger.error(error_msg)
            raise VaultAccessError(error_msg) from e

        secret_value = secret.value
        if not secret_value:
            raise VaultAccessError(f"Secret '{secret_name}' is empty or null")

        if use_cache:
            self._cache_secret(secret_name, secret_value)

        logger.debug(f"Retrieved secret: {secret_name}")
        return secret_value

    def _is_secret_cached(self, secret_name: str) -> bool:
        """Check if secret is cached and not expired."""
        if secret_name not in self._secret_cache:
            return False

        cached_time = self._secret_cache[secret_name]['cached_at']
        expiry_time = cached_time + timedelta(minutes=self._cache_ttl_minutes)

        if datetime.now(timezone.utc) > expiry_time:
            del self._secret_cache[secret_name]
            return False

        return True

    def _cache_secret(self, secret_name: str, secret_value: str) -> None:
        """Cache secret value with timestamp."""
        self._secret_cache[secret_name] = {
            'value': secret_value,
            'cached_at': datetime.now(timezone.utc)
        }


__all__ = [
    'VaultRepository',
    'VaultAccessError'
]
