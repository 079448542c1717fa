# ============================================================================
# SERVICE BUS TRIGGER DISPATCHER
# ============================================================================
# STATUS: Trigger layer - Topic subscription message dispatch
# PURPOSE: Forward one delivered message to the orchestration service
# EXPORTS: TriggerDispatcher, PROCESSED_MARKER
# ============================================================================
"""
Service Bus Trigger Dispatcher.

One dispatcher per route (topic + subscription). All routes share this
implementation; they differ only by RouteConfig and by the orchestrator
client built for them.

Processing Flow (per delivered message):
    1. Validate delivery metadata
    2. Log the processed marker, EnqueuedTimeUtc, DeliveryCount, MessageId
    3. orchestrator.run(payload) with the payload untouched
    4. Return normally -> Functions host completes the message

Failure Policy:
    Any exception from run() is logged and re-raised unchanged. The
    Functions host abandons the message, Service Bus redelivers it with
    DeliveryCount + 1, and dead-letters it after MaxDeliveryCount attempts.
    No retries, deduplication or dead-lettering happen here.

Usage:
    dispatcher = TriggerDispatcher(route, orchestrator, default_timeout=30.0)

    @app.service_bus_topic_trigger(...)
    def encodingservice(msg: func.ServiceBusMessage) -> None:
        dispatcher.handle_message(msg)
"""

import time
import uuid
from datetime import datetime
from typing import Any, Optional, Union

import azure.functions as func
from pydantic import ValidationError

from config import RouteConfig
from core.models.delivery import DeliveryMetadata
from exceptions import ContractViolationError
from interfaces.orchestration import IOrchestrationService
from util_logger import LoggerFactory, ComponentType

PROCESSED_MARKER = "Service Bus trigger function processed a request."


class TriggerDispatcher:
    """
    Bridges one Service Bus subscription to the orchestration service.

    Holds only immutable state (route, orchestrator, timeout), so the
    Functions host may run any number of invocations concurrently.
    """

    def __init__(
        self,
        route: RouteConfig,
        orchestrator: IOrchestrationService,
        default_timeout: Optional[float] = None
    ):
        self.route = route
        self.orchestrator = orchestrator
        self.default_timeout = default_timeout
        self.logger = LoggerFactory.create_with_context(
            ComponentType.TRIGGER,
            route.function_name,
            topic_name=route.topic_name,
            subscription_name=route.subscription_name
        )

    @property
    def function_name(self) -> str:
        return self.route.function_name

    def handle(
        self,
        message: Union[str, bytes],
        delivery_count: int,
        enqueued_time_utc: datetime,
        message_id: str,
        timeout: Optional[float] = None
    ) -> Any:
        """
        Forward one message to the orchestration service.

        Args:
            message: Raw message body, forwarded unmodified
            delivery_count: Broker delivery attempt (>= 1)
            enqueued_time_utc: When the message was enqueued
            message_id: Broker message id
            timeout: Deadline for the run call (None = default_timeout)

        Returns:
            Whatever orchestrator.run returned (not inspected)

        Raises:
            ContractViolationError: Missing body or invalid metadata
            Exception: Anything raised by orchestrator.run, unchanged
        """
        if message is None:
            raise ContractViolationError(
                f"{self.function_name}: message body is required (message_id={message_id})"
            )

        try:
            metadata = DeliveryMetadata(
                delivery_count=delivery_count,
                enqueued_time_utc=enqueued_time_utc,
                message_id=message_id,
            )
        except ValidationError as e:
            raise ContractViolationError(
                f"{self.function_name}: invalid delivery metadata: {e}"
            ) from e

        correlation_id = str(uuid.uuid4())[:8]
        dims = metadata.log_dimensions()
        dims['correlation_id'] = correlation_id

        # Logged before run() so failed attempts carry their delivery count too
        self.logger.info(PROCESSED_MARKER, extra={'custom_dimensions': dict(dims, checkpoint='MESSAGE_RECEIVED')})
        self.logger.info(f"EnqueuedTimeUtc={metadata.enqueued_time_utc.isoformat()}", extra={'custom_dimensions': dims})
        self.logger.info(f"DeliveryCount={metadata.delivery_count}", extra={'custom_dimensions': dims})
        self.logger.info(f"MessageId={metadata.message_id}", extra={'custom_dimensions': dims})

        effective_timeout = timeout if timeout is not None else self.default_timeout
        start_time = time.time()

        try:
            return self.orchestrator.run(message, timeout=effective_timeout)
        except Exception as e:
            elapsed = time.time() - start_time
            self.logger.error(
                f"[{correlation_id}] Orchestration run failed after {elapsed:.3f}s "
                f"(delivery {metadata.delivery_count}); message will be redelivered",
                exc_info=True,
                extra={'custom_dimensions': dict(
                    dims,
                    checkpoint='ORCHESTRATION_FAILED',
                    exception_type=type(e).__name__,
                    elapsed_seconds=round(elapsed, 3),
                )}
            )
            raise

    def handle_message(self, msg: func.ServiceBusMessage, timeout: Optional[float] = None) -> Any:
        """
        Adapter for the azure.functions Service Bus binding.

        The body is decoded as UTF-8 text, the form the orchestration
        service accepts. Bodies that are not valid UTF-8 are forwarded as
        the raw bytes.
        """
        body = msg.get_body()
        if body is None:
            raise ContractViolationError(
                f"{self.function_name}: Service Bus message has no body (message_id={msg.message_id})"
            )

        try:
            payload = body.decode('utf-8')
        except UnicodeDecodeError:
            self.logger.debug(
                f"{self.function_name}: body is not UTF-8, forwarding raw bytes (message_id={msg.message_id})"
            )
            payload = body

        return self.handle(
            payload,
            delivery_count=msg.delivery_count,
            enqueued_time_utc=msg.enqueued_time_utc,
            message_id=msg.message_id,
            timeout=timeout,
        )
