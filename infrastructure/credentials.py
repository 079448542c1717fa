# ============================================================================
# API KEY PROVIDER
# ============================================================================
# STATUS: Infrastructure - credential resolution for the orchestration service
# PURPOSE: Narrow accessor for the orchestration API key
# EXPORTS: ApiKeyProvider
# DEPENDENCIES: config, core.models.orchestration, infrastructure.vault
# ============================================================================
"""
API Key Provider.

Resolves the orchestration API key for a route's credential key name:

    KEY_VAULT_NAME set   -> Key Vault secret named <credential_key_name>
    KEY_VAULT_NAME unset -> env var <CREDENTIAL_KEY_NAME> ('-' -> '_')
                            e.g. orchestrator-api-key -> ORCHESTRATOR_API_KEY

On Azure the env var is normally a Key Vault reference app setting
(@Microsoft.KeyVault(...)), so both paths keep the key out of source.
"""

import os
from typing import Mapping, Optional

from config import OrchestratorConfig
from core.models.orchestration import CredentialHeader
from exceptions import CredentialError
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "ApiKeyProvider")


class ApiKeyProvider:
    """
    Resolves API keys and builds the credential header.

    Usage:
        provider = ApiKeyProvider.from_config(config.orchestrator)
        header = provider.credential_header("orchestrator-api-key")
        client = ManagedOrchestratorClient.from_config(config.orchestrator, header.as_headers())
    """

    def __init__(
        self,
        config: OrchestratorConfig,
        vault=None,
        environ: Optional[Mapping[str, str]] = None
    ):
        """
        Args:
            config: Orchestrator configuration (header name)
            vault: Optional VaultRepository; None = environment binding
            environ: Optional environment mapping (defaults to os.environ)
        """
        self._config = config
        self._vault = vault
        self._environ = environ if environ is not None else os.environ

    @classmethod
    def from_config(cls, config: OrchestratorConfig) -> 'ApiKeyProvider':
        vault = None
        if config.key_vault_name:
            from .vault import VaultRepository
            vault = VaultRepository(vault_name=config.key_vault_name)
        return cls(config, vault=vault)

    @staticmethod
    def env_var_name(credential_key_name: str) -> str:
        return credential_key_name.strip().upper().replace('-', '_')

    @property
    def source(self) -> str:
        return "key_vault" if self._vault is not None else "environment"

    @log_exceptions(ComponentType.SERVICE, "ApiKeyProvider")
    def get_api_key(self, credential_key_name: str) -> str:
        """
        Resolve the API key for a credential key name.

        Raises:
            CredentialError: Key not configured or empty
            VaultAccessError: Key Vault lookup failed
        """
        if self._vault is not None:
            value = self._vault.get_secret(credential_key_name)
        else:
            env_name = self.env_var_name(credential_key_name)
            value = self._environ.get(env_name)
            if value is None or not value.strip():
                raise CredentialError(
                    f"API key '{credential_key_name}' not configured: "
                    f"set {env_name} or KEY_VAULT_NAME"
                )

        logger.debug(f"Resolved API key '{credential_key_name}' from {self.source}")
        return value

    def credential_header(self, credential_key_name: str) -> CredentialHeader:
        """Build the single-entry credential header for a route."""
        return CredentialHeader(
            name=self._config.api_key_header,
            value=self.get_api_key(credential_key_name),
        )
