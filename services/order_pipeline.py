# ============================================================================
# CLAUDE CONTEXT - ORDER RELAY SERVICES
# ============================================================================
# STATUS: Service - Order relay business logic
# PURPOSE: Enqueue gateway, seed consumer and finalize consumer
# EXPORTS: EnqueueGateway, EnqueueResult, SeedConsumer, FinalizeConsumer
# DEPENDENCIES: core.schema.queue, core.models, infrastructure interfaces
# PATTERNS: Constructor injection; no process-wide state
# ============================================================================

"""
Order Relay Services.

Three stages, each a stateless handler over injected repositories:

    EnqueueGateway   request -> complete OrderMessage -> queue "orders"
    SeedConsumer     "orders" message -> upsert Pending row -> queue "orders-finalize"
    FinalizeConsumer "orders-finalize" message -> conditional merge to Processed

Delivery is at-least-once. The seed upsert is a REPLACE keyed by order id,
so a redelivered stage-1 message rewrites the same Pending row. Finalize
reads the row and merges under its ETag; a conflict raises
OrderConcurrencyError and the host redelivers, which re-reads fresh state.

None of the stages retries locally. Errors propagate to the HTTP trigger
(gateway) or to the Functions host (consumers), whose redelivery and
poison queue handling apply.

Exports:
    EnqueueGateway: Stage 0 -> 1
    SeedConsumer: Stage 1 -> 2
    FinalizeConsumer: Stage 2 -> table
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union

from config import OrderConfig
from core.models import OrderRow
from core.schema import OrderMessage, decode_order_message
from infrastructure.interface_repository import IOrderRepository, IQueueRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "OrderPipeline")

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_order_id() -> str:
    """32 lowercase hex chars (uuid4 without dashes)."""
    return uuid.uuid4().hex


@dataclass
class EnqueueResult:
    """Outcome of a stage-1 publish."""

    order_id: str
    queue: str
    message_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'queued': True,
            'queue': self.queue,
            'orderId': self.order_id,
        }


# ============================================================================
# STAGE 0 -> 1: ENQUEUE GATEWAY
# ============================================================================

class EnqueueGateway:
    """
    Normalize an order request and publish it to the stage-1 queue.

    Never touches the table.
    """

    def __init__(
        self,
        queue_repo: IQueueRepository,
        queue_name: str,
        config: Optional[OrderConfig] = None,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_order_id,
    ):
        self.queue_repo = queue_repo
        self.queue_name = queue_name
        self.config = config or OrderConfig()
        self.clock = clock
        self.id_factory = id_factory

    def complete(self, request: Union[OrderMessage, Dict[str, Any], None]) -> OrderMessage:
        """
        Fill every absent field with its default.

        Raises:
            ValueError: request is not an object, or a field is invalid
                (pydantic ValidationError is a ValueError)
        """
        if request is None:
            message = OrderMessage()
        elif isinstance(request, OrderMessage):
            message = request
        elif isinstance(request, dict):
            message = OrderMessage.model_validate(request)
        else:
            raise ValueError(f"Order request must be a JSON object, got {type(request).__name__}")

        customer = message.customer.strip() if message.customer else ""
        return OrderMessage(
            order_id=message.order_id or self.id_factory(),
            customer=customer or self.config.anonymous_customer,
            total=message.total if message.total is not None else 0.0,
            timestamp=message.timestamp or self.clock(),
        )

    def enqueue(self, request: Union[OrderMessage, Dict[str, Any], None]) -> EnqueueResult:
        """
        Publish exactly one stage-1 message.

        Raises:
            ValueError: Invalid request
            QueuePublishError: Send failed (no local retry)
        """
        message = self.complete(request)
        message_id = self.queue_repo.send_message(self.queue_name, message)
        logger.info(f"📨 Enqueued order {message.order_id} to {self.queue_name}")
        return EnqueueResult(order_id=message.order_id, queue=self.queue_name, message_id=message_id)


# ============================================================================
# STAGE 1 -> 2: SEED CONSUMER
# ============================================================================

class SeedConsumer:
    """
    Write the Pending row, then forward the order to the finalize queue.

    A crash between the upsert and the publish leaves a Pending row with
    no finalize message in flight; PendingOrderReconciler re-drives those.
    """

    def __init__(
        self,
        order_repo: IOrderRepository,
        queue_repo: IQueueRepository,
        finalize_queue: str,
        config: Optional[OrderConfig] = None,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_order_id,
    ):
        self.order_repo = order_repo
        self.queue_repo = queue_repo
        self.finalize_queue = finalize_queue
        self.config = config or OrderConfig()
        self.clock = clock
        self.id_factory = id_factory

    def handle(self, raw: Union[str, bytes]) -> OrderRow:
        """
        Process one stage-1 message body.

        Returns:
            The Pending row as written

        Raises:
            InvalidOrderMessageError: Body did not decode
            OrderStoreError: Table write failed
            QueuePublishError: Stage-2 publish failed (row already written)
        """
        message = decode_order_message(raw)

        order_id = message.order_id
        if not order_id:
            order_id = self.id_factory()
            logger.warning(f"⚠️ Stage-1 message had no order_id, assigned {order_id}")

        row = OrderRow(
            order_id=order_id,
            customer=message.customer or self.config.unknown_customer,
            total=message.total if message.total is not None else 0.0,
            created_at=self.clock(),
        )
        written = self.order_repo.upsert_pending(row)
        logger.info(f"🌱 Seeded order {order_id} as {written.status.value}")

        self.queue_repo.send_message(self.finalize_queue, message.with_order_id(order_id))
        logger.info(f"➡️ Forwarded order {order_id} to {self.finalize_queue}")
        return written


# ============================================================================
# STAGE 2: FINALIZE CONSUMER
# ============================================================================

class FinalizeConsumer:
    """
    Transition an existing row to Processed.

    Missing correlation (no order_id, or no row) is dropped: logged,
    not raised, so the host does not redeliver it.
    """

    def __init__(self, order_repo: IOrderRepository, clock: Clock = utc_now):
        self.order_repo = order_repo
        self.clock = clock

    def handle(self, raw: Union[str, bytes]) -> Optional[OrderRow]:
        """
        Process one stage-2 message body.

        Returns:
            The Processed row, or None when the message was dropped

        Raises:
            InvalidOrderMessageError: Body did not decode
            OrderConcurrencyError: Row changed between read and merge
            OrderStoreError: Any other table failure
        """
        message = decode_order_message(raw)

        if not message.order_id:
            logger.warning("⚠️ Finalize message without order_id dropped")
            return None

        row = self.order_repo.get_order(message.order_id)
        if row is None:
            logger.warning(f"⚠️ Order {message.order_id} not found, finalize dropped")
            return None

        processed = self.order_repo.mark_processed(row, self.clock())
        logger.info(f"✅ Order {processed.order_id} marked {processed.status.value}")
        return processed
