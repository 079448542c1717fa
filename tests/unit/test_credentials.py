"""
ApiKeyProvider and VaultRepository tests.

The Key Vault SecretClient is replaced by FakeSecretClient; no Azure calls.
"""

import logging
from datetime import datetime, timezone, timedelta

import pytest

from config import OrchestratorConfig
from exceptions import CredentialError, ConfigurationError
from infrastructure.credentials import ApiKeyProvider
from infrastructure.vault import VaultRepository, VaultAccessError
from tests.factories.fakes import FakeSecretClient


class TestApiKeyProviderEnvironment:

    def test_env_var_name(self):
        assert ApiKeyProvider.env_var_name("orchestrator-api-key") == "ORCHESTRATOR_API_KEY"

    def test_reads_env_binding(self, api_key):
        provider = ApiKeyProvider(OrchestratorConfig(), environ={"ORCHESTRATOR_API_KEY": api_key})
        assert provider.source == "environment"
        assert provider.get_api_key("orchestrator-api-key") == api_key

    @pytest.mark.parametrize("environ", [{}, {"ORCHESTRATOR_API_KEY": ""}, {"ORCHESTRATOR_API_KEY": "  "}])
    def test_missing_key_raises(self, environ):
        provider = ApiKeyProvider(OrchestratorConfig(), environ=environ)
        with pytest.raises(CredentialError, match="ORCHESTRATOR_API_KEY"):
            provider.get_api_key("orchestrator-api-key")

    def test_credential_error_is_configuration_error(self):
        assert issubclass(CredentialError, ConfigurationError)

    def test_credential_header(self, api_key):
        provider = ApiKeyProvider(OrchestratorConfig(), environ={"ORCHESTRATOR_API_KEY": api_key})
        header = provider.credential_header("orchestrator-api-key")

        assert dict(header.as_headers()) == {"x-api-key": api_key}
        assert api_key not in repr(header)

    def test_custom_header_name(self, api_key):
        config = OrchestratorConfig(api_key_header="Ocp-Apim-Subscription-Key")
        provider = ApiKeyProvider(config, environ={"ORCHESTRATOR_API_KEY": api_key})
        assert dict(provider.credential_header("orchestrator-api-key").as_headers()) == {
            "Ocp-Apim-Subscription-Key": api_key
        }

    def test_key_never_logged(self, api_key, caplog):
        caplog.set_level(logging.DEBUG)
        provider = ApiKeyProvider(OrchestratorConfig(), environ={"ORCHESTRATOR_API_KEY": api_key})
        provider.credential_header("orchestrator-api-key")
        assert api_key not in caplog.text

    def test_from_config_without_vault(self):
        assert ApiKeyProvider.from_config(OrchestratorConfig()).source == "environment"


class TestApiKeyProviderKeyVault:

    def test_reads_vault_secret(self, secret_client, api_key):
        vault = VaultRepository("metadata-kv", client=secret_client)
        provider = ApiKeyProvider(OrchestratorConfig(), vault=vault, environ={})

        assert provider.source == "key_vault"
        assert provider.get_api_key("orchestrator-api-key") == api_key
        assert secret_client.requests == ["orchestrator-api-key"]

    def test_vault_miss_raises_credential_error(self):
        vault = VaultRepository("metadata-kv", client=FakeSecretClient())
        provider = ApiKeyProvider(OrchestratorConfig(), vault=vault)

        with pytest.raises(CredentialError):
            provider.get_api_key("orchestrator-api-key")


class TestVaultRepository:

    def test_vault_url(self, secret_client):
        vault = VaultRepository("metadata-kv", client=secret_client)
        assert vault.vault_url == "https://metadata-kv.vault.azure.net/"

    def test_requires_name(self, secret_client):
        with pytest.raises(VaultAccessError):
            VaultRepository("", client=secret_client)

    def test_secret_cached(self, secret_client, api_key):
        vault = VaultRepository("metadata-kv", client=secret_client)

        assert vault.get_secret("orchestrator-api-key") == api_key
        assert vault.get_secret("orchestrator-api-key") == api_key

        assert secret_client.requests == ["orchestrator-api-key"]
        assert vault._is_secret_cached("orchestrator-api-key")

    def test_cache_bypass(self, secret_client):
        vault = VaultRepository("metadata-kv", client=secret_client)
        vault.get_secret("orchestrator-api-key", use_cache=False)
        vault.get_secret("orchestrator-api-key", use_cache=False)
        assert len(secret_client.requests) == 2

    def test_expired_cache_refetches(self, secret_client):
        vault = VaultRepository("metadata-kv", client=secret_client, cache_ttl_minutes=15)
        vault.get_secret("orchestrator-api-key")

        vault._secret_cache["orchestrator-api-key"]["cached_at"] = (
            datetime.now(timezone.utc) - timedelta(minutes=16)
        )
        vault.get_secret("orchestrator-api-key")

        assert len(secret_client.requests) == 2

    def test_azure_error_wrapped(self):
        vault = VaultRepository("metadata-kv", client=FakeSecretClient())
        with pytest.raises(VaultAccessError, match="orchestrator-api-key") as exc_info:
            vault.get_secret("orchestrator-api-key")
        assert exc_info.value.__cause__ is not None

    def test_empty_secret_rejected(self):
        vault = VaultRepository("metadata-kv", client=FakeSecretClient({"orchestrator-api-key": ""}))
        with pytest.raises(VaultAccessError, match="empty"):
            vault.get_secret("orchestrator-api-key")
