# ============================================================================
# DISPATCHER REGISTRY
# ============================================================================
# STATUS: Trigger layer - Route to dispatcher wiring
# PURPOSE: Build one TriggerDispatcher per route, lazily, once per process
# EXPORTS: DispatcherRegistry, build_dispatcher_registry
# ============================================================================
"""
Dispatcher Registry.

Maps Azure Function names to TriggerDispatcher instances. Dispatchers are
built on first use rather than at import: building one resolves the API
key (possibly a Key Vault round trip), which would otherwise slow every
cold start even for functions that never fire.

Usage:
    registry = build_dispatcher_registry(get_config())
    registry.get("encodingservice").handle_message(msg)
"""

import threading
from typing import Callable, Dict, Iterator, Mapping, Optional

from config import AppConfig, RouteConfig, RouteTable
from exceptions import ResourceNotFoundError
from interfaces.orchestration import IOrchestrationService
from util_logger import LoggerFactory, ComponentType

from .dispatcher import TriggerDispatcher

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "DispatcherRegistry")

DispatcherBuilder = Callable[[RouteConfig], TriggerDispatcher]
OrchestratorFactory = Callable[[RouteConfig, Mapping[str, str]], IOrchestrationService]


class DispatcherRegistry:
    """Thread-safe, lazily populated function name -> dispatcher map."""

    def __init__(self, routes: RouteTable, builder: DispatcherBuilder):
        self._routes = routes
        self._builder = builder
        self._dispatchers: Dict[str, TriggerDispatcher] = {}
        self._lock = threading.Lock()

    @property
    def routes(self) -> RouteTable:
        return self._routes

    def get(self, function_name: str) -> TriggerDispatcher:
        """
        Return the dispatcher for a function, building it on first call.

        Raises:
            ResourceNotFoundError: No route with that function name
        """
        dispatcher = self._dispatchers.get(function_name)
        if dispatcher is not None:
            return dispatcher

        route = self._routes.get(function_name)
        if route is None:
            raise ResourceNotFoundError(
                f"No Service Bus route for function '{function_name}'. "
                f"Known functions: {list(self._routes.function_names)}"
            )

        with self._lock:
            dispatcher = self._dispatchers.get(function_name)
            if dispatcher is None:
                dispatcher = self._builder(route)
                self._dispatchers[function_name] = dispatcher
                logger.debug(
                    f"Built dispatcher for {function_name} "
                    f"({route.topic_name}/{route.subscription_name})"
                )
        return dispatcher

    def for_subscription(self, topic_name: str, subscription_name: str) -> TriggerDispatcher:
        """Return the dispatcher bound to a topic subscription."""
        route = self._routes.find(topic_name, subscription_name)
        if route is None:
            raise ResourceNotFoundError(
                f"No Service Bus route for {topic_name}/{subscription_name}"
            )
        return self.get(route.function_name)

    def warm_up(self) -> int:
        """Build every dispatcher now. Returns the number built."""
        for route in self._routes:
            self.get(route.function_name)
        return len(self._dispatchers)

    def is_built(self, function_name: str) -> bool:
        return function_name in self._dispatchers

    def __iter__(self) -> Iterator[TriggerDispatcher]:
        for route in self._routes:
            yield self.get(route.function_name)

    def __len__(self) -> int:
        return len(self._routes)


def build_dispatcher_registry(
    config: AppConfig,
    credential_provider=None,
    orchestrator_factory: Optional[OrchestratorFactory] = None
) -> DispatcherRegistry:
    """
    Wire routes to orchestration clients.

    Args:
        config: Application configuration
        credential_provider: Object with credential_header(key_name);
            defaults to ApiKeyProvider.from_config(config.orchestrator)
        orchestrator_factory: (route, headers) -> IOrchestrationService;
            defaults to ManagedOrchestratorClient

    Returns:
        DispatcherRegistry with nothing built yet
    """
    if orchestrator_factory is None:
        def orchestrator_factory(route: RouteConfig, headers: Mapping[str, str]) -> IOrchestrationService:
            from infrastructure.orchestration_client import ManagedOrchestratorClient
            return ManagedOrchestratorClient.from_config(config.orchestrator, headers)

    provider_holder = {'provider': credential_provider}

    def _provider():
        if provider_holder['provider'] is None:
            from infrastructure.credentials import ApiKeyProvider
            provider_holder['provider'] = ApiKeyProvider.from_config(config.orchestrator)
        return provider_holder['provider']

    def _build(route: RouteConfig) -> TriggerDispatcher:
        header = _provider().credential_header(route.credential_key_name)
        orchestrator = orchestrator_factory(route, header.as_headers())
        return TriggerDispatcher(
            route,
            orchestrator,
            default_timeout=config.orchestrator.timeout_seconds,
        )

    if config.orchestrator.uses_placeholder_url:
        logger.warning(
            f"ORCHESTRATOR_BASE_URL not set, run calls will go to {config.orchestrator.run_url} and fail"
        )

    logger.debug(f"Registry created for {len(config.routes)} routes: {list(config.routes.function_names)}")
    return DispatcherRegistry(config.routes, _build)
