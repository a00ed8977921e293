"""
Azure Storage Queue Configuration.

Provides configuration for the two-stage order relay:
    - orders: gateway -> seed consumer
    - orders-finalize: seed consumer -> finalize consumer

The same setting names are referenced by the queue trigger bindings in
function_app.py (%OrdersQueueName%, %OrdersFinalizeQueueName%), so the
publisher and the consumer always agree on the queue.

Exports:
    QueueConfig: Pydantic queue configuration model
"""

import os
from pydantic import BaseModel, Field

from .defaults import QueueDefaults


# ============================================================================
# QUEUE CONFIGURATION
# ============================================================================

class QueueConfig(BaseModel):
    """
    Azure Storage queue configuration.
    """

    orders_queue: str = Field(
        default=QueueDefaults.ORDERS_QUEUE,
        min_length=3,
        max_length=63,
        description="Stage-1 queue: orders accepted by the gateway"
    )

    orders_finalize_queue: str = Field(
        default=QueueDefaults.ORDERS_FINALIZE_QUEUE,
        min_length=3,
        max_length=63,
        description="Stage-2 queue: seeded orders awaiting finalization"
    )

    base64_messages: bool = Field(
        default=QueueDefaults.MESSAGE_ENCODING == "base64",
        description="Base64-encode message text (queue trigger default decoding)"
    )

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            orders_queue=os.environ.get("OrdersQueueName", QueueDefaults.ORDERS_QUEUE),
            orders_finalize_queue=os.environ.get(
                "OrdersFinalizeQueueName", QueueDefaults.ORDERS_FINALIZE_QUEUE
            ),
            base64_messages=os.environ.get(
                "ORDERS_QUEUE_MESSAGE_ENCODING", QueueDefaults.MESSAGE_ENCODING
            ).lower() == "base64",
        )
