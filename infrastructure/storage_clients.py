# ============================================================================
# CLAUDE CONTEXT - STORAGE CLIENTS
# ============================================================================
# STATUS: Infrastructure - Azure Storage service clients
# PURPOSE: Build table/queue/blob/file service clients from StorageConfig
# EXPORTS: StorageClients
# DEPENDENCIES: azure-data-tables, azure-storage-queue, azure-storage-blob,
#               azure-storage-file-share, azure-identity, config
# PATTERNS: Explicit construction, passed to repositories (no singletons)
# ============================================================================

"""
Storage Clients - Authentication Point for Azure Storage.

One StorageClients instance holds the four service clients for the
storage account. It is built by the composition root and handed to
each repository; repositories never create clients of their own.

Authentication:
    1. Connection string (StorageConnection / AzureWebJobsStorage)
    2. DefaultAzureCredential against STORAGE_ACCOUNT_NAME
       (managed identity in Azure, Azure CLI locally)

Usage:
    clients = StorageClients.from_config(get_config().storage)
    table_client = clients.tables.get_table_client("Orders")
"""

from typing import Optional

from azure.data.tables import TableServiceClient
from azure.storage.queue import QueueServiceClient
from azure.storage.blob import BlobServiceClient
from azure.storage.fileshare import ShareServiceClient
from azure.identity import DefaultAzureCredential

from config import StorageConfig
from exceptions import ConfigurationError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "StorageClients")


class StorageClients:
    """
    Table, queue, blob and file share service clients for one account.
    """

    def __init__(
        self,
        tables: TableServiceClient,
        queues: QueueServiceClient,
        blobs: BlobServiceClient,
        shares: ShareServiceClient,
    ):
        self.tables = tables
        self.queues = queues
        self.blobs = blobs
        self.shares = shares

    @classmethod
    def from_config(cls, storage: StorageConfig,
                    credential: Optional[DefaultAzureCredential] = None) -> 'StorageClients':
        """
        Build all service clients.

        Args:
            storage: Storage configuration
            credential: Credential override for identity auth

        Raises:
            ConfigurationError: Neither a connection string nor an account name is set
        """
        if storage.connection_string:
            logger.info("🔐 Building storage clients from connection string")
            conn = storage.connection_string
            return cls(
                tables=TableServiceClient.from_connection_string(conn),
                queues=QueueServiceClient.from_connection_string(conn),
                blobs=BlobServiceClient.from_connection_string(conn),
                shares=ShareServiceClient.from_connection_string(conn),
            )

        if not storage.account_name:
            raise ConfigurationError(
                "No storage connection configured: set AzureWebJobsStorage "
                "(or StorageConnection) or STORAGE_ACCOUNT_NAME"
            )

        logger.info(f"🔐 Building storage clients with DefaultAzureCredential for {storage.account_name}")
        credential = credential or DefaultAzureCredential()
        return cls(
            tables=TableServiceClient(endpoint=storage.service_url("table"), credential=credential),
            queues=QueueServiceClient(account_url=storage.service_url("queue"), credential=credential),
            blobs=BlobServiceClient(account_url=storage.service_url("blob"), credential=credential),
            # File shares over OAuth require the backup intent header
            shares=ShareServiceClient(
                account_url=storage.service_url("file"),
                credential=credential,
                token_intent="backup",
            ),
        )
