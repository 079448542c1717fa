"""
Orchestration Service Models.

Models:
    CredentialHeader - The single API key header sent with every run call
    OrchestrationResult - Response from POST {base_url}{run_path}

The dispatcher never inspects OrchestrationResult.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class CredentialHeader(BaseModel):
    """
    Immutable API key header.

    The value is a SecretStr so repr(), str() and model_dump() never
    expose it in logs.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Header name (e.g. x-api-key)")
    value: SecretStr = Field(..., description="API key")

    def as_headers(self) -> Mapping[str, str]:
        """Return a read-only single-entry header set."""
        return MappingProxyType({self.name: self.value.get_secret_value()})


class OrchestrationResult(BaseModel):
    """Raw orchestration service response."""
    status_code: int
    body: str = ""
    request_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
