# ============================================================================
# CLAUDE CONTEXT - REPOSITORY FACTORY
# ============================================================================
# STATUS: Infrastructure - Central factory for all repository instances
# PURPOSE: Wire repositories onto the storage service clients
# EXPORTS: RepositoryFactory
# INTERFACES: Creates IOrderRepository, IQueueRepository, ICustomerRepository,
#             IBlobRepository, IFileShareRepository implementations
# DEPENDENCIES: infrastructure/*, config
# PATTERNS: Factory pattern, Dependency Injection
# ENTRY_POINTS: RepositoryFactory.create_repositories()
# ============================================================================

"""
Repository Factory - Central Creation Point

Every repository receives its SDK client from a StorageClients instance,
so tests can pass fake service clients and production passes real ones.
"""

from typing import Dict, Any, Optional

from azure.core.exceptions import HttpResponseError

from config import AppConfig, get_config
from exceptions import StorageOperationError
from util_logger import LoggerFactory, ComponentType
from .storage_clients import StorageClients
from .order_repository import OrderTableRepository
from .customer_repository import CustomerTableRepository
from .queue import QueueRepository
from .blob import BlobRepository
from .file_share import FileShareRepository

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "RepositoryFactory")


class RepositoryFactory:
    """
    Factory for creating repository instances.
    """

    @staticmethod
    def ensure_table(clients: StorageClients, table_name: str):
        """Create the table if it does not exist and return its client."""
        try:
            clients.tables.create_table_if_not_exists(table_name=table_name)
        except HttpResponseError as e:
            raise StorageOperationError(f"Failed to ensure table {table_name}: {e}") from e
        return clients.tables.get_table_client(table_name)

    @staticmethod
    def create_order_repository(clients: StorageClients,
                                config: Optional[AppConfig] = None) -> OrderTableRepository:
        config = config or get_config()
        table_client = RepositoryFactory.ensure_table(clients, config.storage.orders_table)
        return OrderTableRepository(table_client, partition_key=config.orders.partition_key)

    @staticmethod
    def create_customer_repository(clients: StorageClients,
                                   config: Optional[AppConfig] = None) -> CustomerTableRepository:
        config = config or get_config()
        table_client = RepositoryFactory.ensure_table(clients, config.storage.customers_table)
        return CustomerTableRepository(table_client)

    @staticmethod
    def create_queue_repository(clients: StorageClients,
                                config: Optional[AppConfig] = None) -> QueueRepository:
        config = config or get_config()
        return QueueRepository(clients.queues, base64_messages=config.queues.base64_messages)

    @staticmethod
    def create_repositories(clients: StorageClients,
                            config: Optional[AppConfig] = None) -> Dict[str, Any]:
        """
        Create all repository instances.

        Args:
            clients: Storage service clients
            config: Application config (uses get_config() if not provided)

        Returns:
            Dictionary with order_repo, customer_repo, queue_repo,
            blob_repo and file_repo

        Example:
            repos = RepositoryFactory.create_repositories(clients)
            order_repo = repos['order_repo']
        """
        config = config or get_config()
        logger.info("🏭 Creating storage repositories")

        repos = {
            'order_repo': RepositoryFactory.create_order_repository(clients, config),
            'customer_repo': RepositoryFactory.create_customer_repository(clients, config),
            'queue_repo': RepositoryFactory.create_queue_repository(clients, config),
            'blob_repo': BlobRepository(clients.blobs),
            'file_repo': FileShareRepository(clients.shares),
        }

        logger.info("✅ All repositories created successfully")
        return repos
