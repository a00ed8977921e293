# ============================================================================
# CLAUDE CONTEXT - QUEUE REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Storage Queue repository
# PURPOSE: Publish order envelopes to the relay queues
# EXPORTS: QueueRepository
# INTERFACES: IQueueRepository
# PYDANTIC_MODELS: Accepts OrderMessage envelopes
# DEPENDENCIES: azure-storage-queue, azure-core, base64
# PATTERNS: Repository, per-instance queue client cache
# ============================================================================

"""
Queue Repository Implementation

Sends order envelopes to Azure Storage Queues. The JSON text comes from
encode_order_message, the same codec the consumers decode with.

Design Principles:
- Message encoding handled internally (base64 by default, which is what
  the Functions queue trigger decodes)
- Queues are created on first use (idempotent)
- No retry loop: a failed send raises QueuePublishError and the caller
  (HTTP trigger or queue consumer) decides what happens next

Usage:
    queue_repo = QueueRepository(clients.queues)
    message_id = queue_repo.send_message("orders", order_message)
"""

import base64
from typing import Dict

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.queue import QueueServiceClient, QueueClient

from core.schema import OrderMessage, encode_order_message
from exceptions import ContractViolationError, QueuePublishError
from infrastructure.interface_repository import IQueueRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "QueueRepository")


class QueueRepository(IQueueRepository):
    """
    Storage queue repository.
    """

    def __init__(self, queue_service: QueueServiceClient, base64_messages: bool = True):
        """
        Args:
            queue_service: Account-level queue service client
            base64_messages: Base64-encode message text before sending
        """
        self.queue_service = queue_service
        self.base64_messages = base64_messages
        self._queue_clients: Dict[str, QueueClient] = {}

    def _get_queue_client(self, queue_name: str) -> QueueClient:
        """
        Get or create a queue client.

        The first call per queue also creates the queue if needed.
        """
        if queue_name not in self._queue_clients:
            logger.debug(f"📦 Creating queue client for: {queue_name}")
            client = self.queue_service.get_queue_client(queue_name)
            try:
                client.create_queue()
                logger.info(f"✅ Created queue: {queue_name}")
            except ResourceExistsError:
                logger.debug(f"Queue already exists: {queue_name}")
            self._queue_clients[queue_name] = client

        return self._queue_clients[queue_name]

    def encode(self, text: str) -> str:
        """Apply the configured wire encoding to message text."""
        if self.base64_messages:
            return base64.b64encode(text.encode('utf-8')).decode('ascii')
        return text

    def send_message(self, queue_name: str, message: OrderMessage) -> str:
        """
        Send a message to the specified queue.

        Args:
            queue_name: Target queue name
            message: Order envelope to send

        Returns:
            Message ID

        Raises:
            ContractViolationError: message is not an OrderMessage
            QueuePublishError: Send failed
        """
        if not isinstance(message, OrderMessage):
            raise ContractViolationError(
                f"send_message expects an OrderMessage, got {type(message).__name__}"
            )

        message_json = encode_order_message(message)
        logger.debug(f"📤 Sending {type(message).__name__} ({len(message_json)} bytes) to {queue_name}")

        try:
            queue_client = self._get_queue_client(queue_name)
            response = queue_client.send_message(self.encode(message_json))
        except AzureError as e:
            logger.error(f"❌ Failed to send message to {queue_name}: {e}")
            raise QueuePublishError(f"Failed to send message to {queue_name}: {e}") from e

        logger.info(f"✅ Message sent to {queue_name}. ID: {response.id}")
        return response.id

    def get_queue_length(self, queue_name: str) -> int:
        """
        Get approximate number of messages in queue.

        Note: Count is approximate due to distributed nature of Azure Queues.
        """
        queue_client = self._get_queue_client(queue_name)
        properties = queue_client.get_queue_properties()
        count = properties.approximate_message_count
        logger.debug(f"📊 Queue {queue_name} has ~{count} messages")
        return count
