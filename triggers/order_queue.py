# ============================================================================
# CLAUDE CONTEXT - ORDER QUEUE TRIGGERS
# ============================================================================
# STATUS: Queue Trigger - Order relay consumers
# PURPOSE: Adapt storage queue messages to SeedConsumer / FinalizeConsumer
# EXPORTS: OrderQueueTrigger
# DEPENDENCIES: azure.functions, services.order_pipeline
# PATTERNS: Correlation id per invocation, log and re-raise
# ============================================================================
"""
Order Queue Triggers.

One OrderQueueTrigger wraps each consumer. Every invocation gets a short
correlation id that prefixes its log lines. Exceptions are logged and
re-raised: the Functions host then redelivers the message and, after
maxDequeueCount attempts, moves it to the "<queue>-poison" queue.

Exports:
    OrderQueueTrigger: Queue message adapter for one relay stage
"""

import time
import uuid
from typing import Any, Protocol, Union

import azure.functions as func

from util_logger import LoggerFactory, ComponentType, LogContext, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "OrderQueueTrigger")


class _Consumer(Protocol):
    def handle(self, raw: Union[str, bytes]) -> Any: ...


class OrderQueueTrigger:
    """
    Queue message adapter for one relay stage.

    Usage:
        seed_trigger = OrderQueueTrigger("seed", "orders", seed_consumer)

        @app.queue_trigger(arg_name="msg", queue_name="%OrdersQueueName%", ...)
        def orders_seed(msg: func.QueueMessage) -> None:
            seed_trigger.handle(msg)
    """

    def __init__(self, stage_name: str, queue_name: str, consumer: _Consumer):
        self.stage_name = stage_name
        self.queue_name = queue_name
        self.consumer = consumer

    @log_exceptions(logger=logger)
    def handle(self, msg: func.QueueMessage) -> Any:
        correlation_id = str(uuid.uuid4())[:8]
        start_time = time.time()
        body = msg.get_body()

        context = LogContext(correlation_id=correlation_id, queue_name=self.queue_name)

        logger.info(
            f"[{correlation_id}] 📬 {self.stage_name} message {msg.id} "
            f"(dequeue #{msg.dequeue_count}, {len(body)} bytes)",
            extra={'custom_dimensions': {
                **context.to_dict(),
                'stage': self.stage_name,
                'message_id': msg.id,
                'dequeue_count': msg.dequeue_count,
            }}
        )

        try:
            result = self.consumer.handle(body)
        except Exception as e:
            elapsed = time.time() - start_time
            logger.error(
                f"[{correlation_id}] ❌ {self.stage_name} failed after {elapsed:.3f}s: "
                f"{type(e).__name__}: {e}"
            )
            raise

        elapsed = time.time() - start_time
        logger.info(f"[{correlation_id}] ✅ {self.stage_name} processed in {elapsed:.3f}s")
        return result
