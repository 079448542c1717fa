# ============================================================================
# SERVICE BUS TRIGGERS MODULE
# ============================================================================
# STATUS: Trigger layer - Service Bus topic subscription handling
# PURPOSE: Dispatch delivered messages to the orchestration service
# ============================================================================
"""
Service Bus Triggers Module.

Usage in function_app.py:
    from triggers.service_bus import build_dispatcher_registry

    registry = build_dispatcher_registry(get_config())

    @app.function_name(name="encodingservice")
    @app.service_bus_topic_trigger(
        arg_name="msg",
        topic_name="encoding-service",
        subscription_name="metadata-processor",
        connection="ServiceBusConnectionString"
    )
    def encodingservice(msg: func.ServiceBusMessage) -> None:
        registry.get("encodingservice").handle_message(msg)

Exports:
    TriggerDispatcher: Per-route message dispatcher
    DispatcherRegistry: Lazy function name -> dispatcher map
    build_dispatcher_registry: Wire config routes to orchestration clients
    PROCESSED_MARKER: First log line written for every delivery
"""

from .dispatcher import TriggerDispatcher, PROCESSED_MARKER
from .registry import DispatcherRegistry, build_dispatcher_registry

__all__ = [
    'TriggerDispatcher',
    'PROCESSED_MARKER',
    'DispatcherRegistry',
    'build_dispatcher_registry',
]
