"""
Azure Functions entry point for the Metadata Processor.

Subscribes to three Service Bus topics on one subscription and forwards
every delivered message, unmodified, to the orchestration service's run
endpoint using a stored API key.

Architecture:
    Service Bus topic -> TriggerDispatcher -> ManagedOrchestratorClient -> /run
                              |                        |
                     metadata log lines          x-api-key header
                                              (Key Vault or app setting)

Functions:
    notificationservice: topic notification-service
    metadataprocessor:   topic video-events
    encodingservice:     topic encoding-service
    (all on subscription metadata-processor, connection ServiceBusConnectionString)

Delivery Semantics:
    Normal return  -> host completes the message
    Raised error   -> host abandons, Service Bus redelivers (DeliveryCount + 1),
                      dead-letters after MaxDeliveryCount

Exports:
    app: Azure Function App instance
    registry: DispatcherRegistry (None if startup validation failed)

Environment Variables:
    ORCHESTRATOR_BASE_URL: Orchestration service base URL (required)
    ORCHESTRATOR_API_KEY: API key app setting, used when KEY_VAULT_NAME is unset
    KEY_VAULT_NAME: Key Vault holding the orchestrator-api-key secret (optional)
    ServiceBusConnectionString: Service Bus connection for the trigger bindings
"""

# ========================================================================
# IMPORTS
# ========================================================================

import logging

import azure.functions as func

# Suppress Azure Identity and Azure SDK authentication/HTTP logging
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.identity._internal").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("msal").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

from config import RouteConfig, get_config
from startup import run_startup_validation
from triggers.service_bus import DispatcherRegistry, build_dispatcher_registry

logger = logging.getLogger("function_app")

# ========================================================================
# STARTUP VALIDATION
# ========================================================================
# Runs at import. On failure the app still loads (so the host can report
# the problem) but no Service Bus trigger is registered.

_startup_state = run_startup_validation()

app = func.FunctionApp()

registry = None


# ============================================================================
# SERVICE BUS TOPIC TRIGGERS
# ============================================================================

def _register_route(function_app: func.FunctionApp, routes: DispatcherRegistry, route: RouteConfig) -> None:
    """Register one topic subscription trigger that delegates to its dispatcher."""
    function_name = route.function_name

    @function_app.function_name(name=function_name)
    @function_app.service_bus_topic_trigger(
        arg_name="msg",
        topic_name=route.topic_name,
        subscription_name=route.subscription_name,
        connection=route.connection_setting
    )
    def _handler(msg: func.ServiceBusMessage) -> None:
        routes.get(function_name).handle_message(msg)


if _startup_state.all_passed:
    registry = build_dispatcher_registry(get_config())
    for _route in registry.routes:
        _register_route(app, registry, _route)
    logger.info(f"Registered {len(registry)} Service Bus triggers: {list(registry.routes.function_names)}")
else:
    logger.warning(
        f"Startup validation failed, Service Bus triggers NOT registered: "
        f"{[check.name for check in _startup_state.get_failed_checks()]}"
    )
