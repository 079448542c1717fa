"""
Configuration Defaults - Single source of truth for all default values.

FAIL-FAST DESIGN:
Tenant-specific defaults use INTENTIONALLY INVALID placeholder values.
Deployments fail loudly if required environment variables aren't set.

Organization:
    - AzureDefaults: MUST be overridden - uses invalid placeholders (fail-fast)
    - RouteDefaults: Safe universal defaults for the Service Bus routes
    - OrchestratorDefaults: Safe universal defaults for the orchestration client

Required Environment Variables (will fail if not set):
    ORCHESTRATOR_BASE_URL - Orchestration service base URL
    ORCHESTRATOR_API_KEY  - API key (unless KEY_VAULT_NAME is set)

Usage:
    from config.defaults import RouteDefaults, OrchestratorDefaults

    subscription: str = Field(default=RouteDefaults.SUBSCRIPTION_NAME, ...)
"""


# =============================================================================
# AZURE RESOURCE DEFAULTS (MUST override for new tenant)
# =============================================================================

class AzureDefaults:
    """
    Defaults that MUST be overridden for a new Azure tenant deployment.

    These defaults are INTENTIONALLY INVALID to cause loud failures if not
    overridden.
    """

    # Orchestration service - Override: ORCHESTRATOR_BASE_URL
    ORCHESTRATOR_BASE_URL = "https://your-orchestrator-url"


# =============================================================================
# ROUTE DEFAULTS (Safe for any deployment)
# =============================================================================

class RouteDefaults:
    """
    Service Bus route table.

    Each route binds one Azure Function to one topic subscription.
    All three share the metadata-processor subscription and the same
    connection app setting.
    """

    SUBSCRIPTION_NAME = "metadata-processor"

    # App setting holding the Service Bus connection string (binding reference)
    CONNECTION_SETTING = "ServiceBusConnectionString"

    # Credential key name shared by all routes
    CREDENTIAL_KEY_NAME = "orchestrator-api-key"

    # (function_name, topic_name)
    ROUTES = (
        ("notificationservice", "notification-service"),
        ("metadataprocessor", "video-events"),
        ("encodingservice", "encoding-service"),
    )


# =============================================================================
# ORCHESTRATOR DEFAULTS (Safe for any deployment)
# =============================================================================

class OrchestratorDefaults:
    """Orchestration service client defaults."""

    API_KEY_HEADER = "x-api-key"
    RUN_PATH = "/run"
    TIMEOUT_SECONDS = 30.0
    CONTENT_TYPE = "application/json"

    # Key Vault secret cache lifetime
    SECRET_CACHE_TTL_MINUTES = 15
