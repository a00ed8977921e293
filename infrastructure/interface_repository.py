"""
Repository Abstract Base Classes - Single Point of Truth.

Enforces exact method signatures across all repository implementations.
Services depend on these interfaces only, so tests can substitute
in-memory implementations or fake SDK clients.

Exports:
    IOrderRepository: Orders table interface
    IQueueRepository: Storage queue interface
    ICustomerRepository: Customers table interface
    IBlobRepository: Blob container interface
    IFileShareRepository: File share interface
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Any, List, Optional

from core.models import OrderRow, OrderStatus, Customer
from core.schema import OrderMessage


class IOrderRepository(ABC):
    """
    Orders table operations.

    All rows live in one partition keyed by order id. Writes are
    single-row; the only conditional write is mark_processed.
    """

    @abstractmethod
    def upsert_pending(self, row: OrderRow) -> OrderRow:
        """Insert or replace the row with status Pending."""
        pass

    @abstractmethod
    def get_order(self, order_id: str) -> Optional[OrderRow]:
        """Return the row with its ETag, or None when absent."""
        pass

    @abstractmethod
    def mark_processed(self, row: OrderRow, processed_at: datetime) -> OrderRow:
        """Merge Status=Processed/ProcessedUtc if the row's ETag still matches."""
        pass

    @abstractmethod
    def list_orders(self, status: Optional[OrderStatus] = None) -> List[OrderRow]:
        """All rows in the partition, optionally filtered by status."""
        pass

    @abstractmethod
    def list_pending_before(self, cutoff: datetime, limit: int) -> List[OrderRow]:
        """Pending rows created before cutoff, at most limit rows."""
        pass

    @abstractmethod
    def health_check(self) -> Dict[str, Any]:
        pass


class IQueueRepository(ABC):
    """
    Storage queue operations.

    send_message accepts an order envelope and handles serialization
    (encode_order_message) and transport encoding. Failures propagate;
    there is no local retry.
    """

    @abstractmethod
    def send_message(self, queue_name: str, message: OrderMessage) -> str:
        """
        Send a message to the named queue.

        Returns:
            Message ID

        Raises:
            QueuePublishError: Send failed
        """
        pass

    @abstractmethod
    def get_queue_length(self, queue_name: str) -> int:
        """Approximate number of messages in the queue."""
        pass


class ICustomerRepository(ABC):

    @abstractmethod
    def list_customers(self) -> List[Customer]:
        pass

    @abstractmethod
    def create_customer(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    def get_customer(self, partition: str, customer_id: str) -> Optional[Customer]:
        pass


class IBlobRepository(ABC):

    @abstractmethod
    def upload_text(self, container: str, blob_name: str, content: str,
                    overwrite: bool = True) -> str:
        """Upload text and return the blob URL."""
        pass


class IFileShareRepository(ABC):

    @abstractmethod
    def write_text(self, share: str, file_name: str, content: str) -> str:
        """Write text to the share root, replacing any existing file. Returns the file path."""
        pass
