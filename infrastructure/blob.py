# ============================================================================
# CLAUDE CONTEXT - BLOB REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Blob Storage repository
# PURPOSE: Write product image blobs
# EXPORTS: BlobRepository
# INTERFACES: IBlobRepository
# DEPENDENCIES: azure-storage-blob, azure-core
# ============================================================================

"""
Blob Storage Repository.

Container clients are created lazily and the container itself is created
on first use.

Usage:
    blob_repo = BlobRepository(clients.blobs)
    url = blob_repo.upload_text("product-images", "shoe.txt", "...")
"""

from typing import Dict

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from exceptions import StorageOperationError
from infrastructure.interface_repository import IBlobRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "BlobRepository")


class BlobRepository(IBlobRepository):

    def __init__(self, blob_service: BlobServiceClient):
        self.blob_service = blob_service
        self._container_clients: Dict[str, ContainerClient] = {}

    def _get_container_client(self, container: str) -> ContainerClient:
        if container not in self._container_clients:
            client = self.blob_service.get_container_client(container)
            try:
                client.create_container()
                logger.info(f"✅ Created container: {container}")
            except ResourceExistsError:
                logger.debug(f"Container already exists: {container}")
            self._container_clients[container] = client
        return self._container_clients[container]

    def upload_text(self, container: str, blob_name: str, content: str,
                    overwrite: bool = True) -> str:
        """
        Upload UTF-8 text as a block blob.

        Returns:
            Blob URL

        Raises:
            StorageOperationError: Upload failed (including an existing
                blob when overwrite is False)
        """
        try:
            blob_client = self._get_container_client(container).get_blob_client(blob_name)
            blob_client.upload_blob(
                content.encode('utf-8'),
                overwrite=overwrite,
                content_settings=ContentSettings(content_type="text/plain; charset=utf-8"),
            )
        except AzureError as e:
            logger.error(f"❌ Upload failed for {container}/{blob_name}: {e}")
            raise StorageOperationError(f"Failed to upload blob {container}/{blob_name}: {e}") from e

        logger.info(f"📤 Uploaded blob {blob_name} in {container}")
        return blob_client.url
