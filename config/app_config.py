"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - RouteTable (Service Bus topic subscriptions)
    - OrchestratorConfig (orchestration service client)

Exports:
    AppConfig: Main configuration class

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os

from pydantic import BaseModel, Field

from .route_config import RouteTable
from .orchestrator_config import OrchestratorConfig


# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================

class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    environment: str = Field(
        default="dev",
        description="Deployment stage (dev, qa, uat, test, staging, prod)"
    )

    debug_mode: bool = Field(
        default=False,
        description="Verbose diagnostics (DEBUG_MODE)"
    )

    routes: RouteTable = Field(
        default_factory=RouteTable.default,
        description="Service Bus route table"
    )

    orchestrator: OrchestratorConfig = Field(
        default_factory=OrchestratorConfig,
        description="Orchestration service client configuration"
    )

    @classmethod
    def from_environment(cls):
        """Load all configs from environment."""
        return cls(
            environment=os.environ.get("ENVIRONMENT", "dev"),
            debug_mode=os.environ.get("DEBUG_MODE", "false").lower() in ("true", "1", "yes"),
            routes=RouteTable.from_environment(),
            orchestrator=OrchestratorConfig.from_environment(),
        )
