"""
Orchestration Service Configuration.

Provides configuration for:
    - Orchestration service endpoint (base URL + run path)
    - API key header name
    - Request timeout and content type
    - Key Vault name used to resolve the API key (optional)

The API key itself is NOT part of this model. It is resolved at startup
by infrastructure.credentials.ApiKeyProvider, either from Key Vault
(KEY_VAULT_NAME set) or from an environment binding.

Exports:
    OrchestratorConfig: Pydantic orchestration client configuration
"""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .defaults import AzureDefaults, OrchestratorDefaults


class OrchestratorConfig(BaseModel):
    """
    Orchestration service client configuration.
    """

    base_url: str = Field(
        default=AzureDefaults.ORCHESTRATOR_BASE_URL,
        description="Orchestration service base URL (ORCHESTRATOR_BASE_URL)"
    )

    run_path: str = Field(
        default=OrchestratorDefaults.RUN_PATH,
        description="Path of the run endpoint, appended to base_url"
    )

    api_key_header: str = Field(
        default=OrchestratorDefaults.API_KEY_HEADER,
        min_length=1,
        description="Header name carrying the API key"
    )

    timeout_seconds: float = Field(
        default=OrchestratorDefaults.TIMEOUT_SECONDS,
        gt=0,
        le=600,
        description="Default timeout for a run call, in seconds"
    )

    content_type: str = Field(
        default=OrchestratorDefaults.CONTENT_TYPE,
        description="Content-Type sent with the forwarded payload"
    )

    key_vault_name: Optional[str] = Field(
        default=None,
        description="Key Vault holding the API key (None = environment binding)"
    )

    @field_validator('base_url')
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip('/')

    @field_validator('run_path')
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith('/') else f"/{value}"

    @property
    def run_url(self) -> str:
        return f"{self.base_url}{self.run_path}"

    @property
    def uses_placeholder_url(self) -> bool:
        return self.base_url == AzureDefaults.ORCHESTRATOR_BASE_URL

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            base_url=os.environ.get("ORCHESTRATOR_BASE_URL", AzureDefaults.ORCHESTRATOR_BASE_URL),
            run_path=os.environ.get("ORCHESTRATOR_RUN_PATH", OrchestratorDefaults.RUN_PATH),
            api_key_header=os.environ.get("ORCHESTRATOR_API_KEY_HEADER", OrchestratorDefaults.API_KEY_HEADER),
            timeout_seconds=float(os.environ.get(
                "ORCHESTRATOR_TIMEOUT_SECONDS", str(OrchestratorDefaults.TIMEOUT_SECONDS)
            )),
            content_type=os.environ.get("ORCHESTRATOR_CONTENT_TYPE", OrchestratorDefaults.CONTENT_TYPE),
            key_vault_name=os.environ.get("KEY_VAULT_NAME") or None,
        )

    def debug_dict(self) -> dict:
        return {
            'base_url': self.base_url,
            'run_path': self.run_path,
            'api_key_header': self.api_key_header,
            'timeout_seconds': self.timeout_seconds,
            'content_type': self.content_type,
            'key_vault_name': self.key_vault_name,
        }
