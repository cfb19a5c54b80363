# blob_storage.py
import logging
import time
from typing import Protocol

from azure.core.exceptions import ResourceExistsError
from azure.storage.blob.aio import BlobClient, BlobServiceClient
from fastapi import Request

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Stores a named binary object and returns the URL it can be fetched from."""

    async def put(self, name: str, data: bytes) -> str:
        ...


def make_blob_name(filename: str) -> str:
    """Millisecond timestamp prefix + the client's original filename."""
    return f"{int(time.time() * 1000)}-{filename}"


class AzureBlobObjectStore:
    def __init__(self, connection_string: str, container_name: str = "videos"):
        self.connection_string = connection_string
        self.container_name = container_name

    def get_blob_service_client(self) -> BlobServiceClient:
        return BlobServiceClient.from_connection_string(self.connection_string)

    async def ensure_container(self):
        async with self.get_blob_service_client() as blob_service_client:
            container_client = blob_service_client.get_container_client(self.container_name)
            try:
                await container_client.create_container()
                logger.info("Created blob container %s", self.container_name)
            except ResourceExistsError:
                pass

    async def put(self, name: str, data: bytes) -> str:
        """Uploads the whole buffer in one call and returns the blob's URL."""
        async with self.get_blob_service_client() as blob_service_client:
            container_client = blob_service_client.get_container_client(self.container_name)
            blob_client: BlobClient = container_client.get_blob_client(name)
            await blob_client.upload_blob(data, overwrite=True)
            logger.info("Uploaded blob %s (%d bytes)", name, len(data))
            return blob_client.url


# Dependency function for FastAPI
def get_object_store(request: Request) -> ObjectStore:
    return request.app.state.object_store
