"""
File Share Repository.

Writes text files to the root directory of an Azure file share.
The share is created on first use; an existing file with the same name
is replaced.

Exports:
    FileShareRepository
"""

from typing import Dict

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.fileshare import ShareServiceClient, ShareClient

from exceptions import StorageOperationError
from infrastructure.interface_repository import IFileShareRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "FileShareRepository")


class FileShareRepository(IFileShareRepository):

    def __init__(self, share_service: ShareServiceClient):
        self.share_service = share_service
        self._share_clients: Dict[str, ShareClient] = {}

    def _get_share_client(self, share: str) -> ShareClient:
        if share not in self._share_clients:
            client = self.share_service.get_share_client(share)
            try:
                client.create_share()
                logger.info(f"✅ Created file share: {share}")
            except ResourceExistsError:
                logger.debug(f"File share already exists: {share}")
            self._share_clients[share] = client
        return self._share_clients[share]

    def write_text(self, share: str, file_name: str, content: str) -> str:
        """
        Write UTF-8 text to share root.

        upload_file creates the file at the new size, which replaces any
        existing content.
        """
        try:
            file_client = self._get_share_client(share).get_file_client(file_name)
            file_client.upload_file(content.encode('utf-8'))
        except AzureError as e:
            logger.error(f"❌ Write failed for {share}/{file_name}: {e}")
            raise StorageOperationError(f"Failed to write file {share}/{file_name}: {e}") from e

        logger.info(f"📄 Wrote file {file_name} to share {share}")
        return file_name
