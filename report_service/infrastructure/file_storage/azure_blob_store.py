"""
Azure Blob Object Store

ObjectStoreProtocol implementation backed by Azure Blob Storage.

Responsibility:
    - Upload rendered artifacts as block blobs (overwrite)
    - Open stored artifacts as chunked download streams
    - Delete artifacts
    - Map azure-core errors onto the object store error contract

Addressing:
    - container -> Azure blob container (created on first upload if missing)
    - key       -> blob name, prefixed with BLOB_PREFIX when set

Configuration (environment):
    - AZURE_STORAGE_CONNECTION_STRING: connection string (preferred)
    - AZURE_STORAGE_ACCOUNT_URL: account URL, used with DefaultAzureCredential
      when no connection string is set
    - BLOB_PREFIX: blob name prefix (default "")
    - BLOB_REQUEST_TIMEOUT_SECONDS: per-request timeout (default 30)
    - BLOB_MAX_CONCURRENCY: parallel transfer connections (default 4)

Error Handling:
    - ResourceNotFoundError on get -> ObjectNotFoundError
    - ResourceNotFoundError on delete -> False (already absent)
    - Any other AzureError -> ObjectStoreError
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.identity import DefaultAzureCredential
from azure.storage.blob import BlobClient, BlobServiceClient, StorageStreamDownloader

from report_service.application.ports.object_store import (
    ObjectNotFoundError,
    ObjectStoreError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AzureBlobStoreConfig:
    account_url: Optional[str]
    connection_string: Optional[str]
    prefix: str = ""
    request_timeout_seconds: float = 30
    max_concurrency: int = 4

    @classmethod
    def from_env(cls) -> "AzureBlobStoreConfig":
        return cls(
            account_url=os.getenv("AZURE_STORAGE_ACCOUNT_URL") or None,
            connection_string=os.getenv("AZURE_STORAGE_CONNECTION_STRING") or None,
            prefix=os.getenv("BLOB_PREFIX", "").strip("/"),
            request_timeout_seconds=float(os.getenv("BLOB_REQUEST_TIMEOUT_SECONDS", "30")),
            max_concurrency=int(os.getenv("BLOB_MAX_CONCURRENCY", "4")),
        )


class BlobReader:
    """
    Binary reader over a blob download, fetched chunk by chunk.

    Read errors after the download started are raised as ObjectStoreError.
    """

    def __init__(self, downloader: StorageStreamDownloader, container: str, key: str) -> None:
        self._downloader = downloader
        self._container = container
        self._key = key
        self.closed = False

    def read(self, size: int = -1) -> bytes:
        if self.closed:
            raise ValueError("read from closed blob reader")
        try:
            return self._downloader.read(size)
        except AzureError as e:
            raise ObjectStoreError(
                f"Failed to read blob: {e}", container=self._container, key=self._key
            ) from e

    def close(self) -> None:
        self.closed = True


class AzureBlobObjectStore:
    """
    Object store backed by Azure Blob Storage.

    Examples:
        >>> store = AzureBlobObjectStore()  # config from environment
        >>> store.put("reports", "abc-123", b"PK...")
        >>> body = store.get("reports", "abc-123")
        >>> data = body.read()
        >>> body.close()
        >>> store.delete("reports", "abc-123")
        True
    """

    def __init__(
        self,
        config: Optional[AzureBlobStoreConfig] = None,
        service_client: Optional[BlobServiceClient] = None,
    ) -> None:
        """
        Initialize store.

        Args:
            config: Connection and transfer settings (default: from environment)
            service_client: Prebuilt client (default: built from config)

        Raises:
            ValueError: If neither a connection string nor an account URL is set
        """
        self.config = config or AzureBlobStoreConfig.from_env()
        self._service = service_client or self._build_service_client(self.config)
        self._known_containers: set[str] = set()

        logger.info(
            f"AzureBlobObjectStore initialized: prefix='{self.config.prefix}', "
            f"timeout={self.config.request_timeout_seconds}s"
        )

    @staticmethod
    def _build_service_client(config: AzureBlobStoreConfig) -> BlobServiceClient:
        if config.connection_string:
            return BlobServiceClient.from_connection_string(config.connection_string)
        if not config.account_url:
            raise ValueError(
                "Azure Blob storage needs AZURE_STORAGE_CONNECTION_STRING or "
                "AZURE_STORAGE_ACCOUNT_URL"
            )
        return BlobServiceClient(
            account_url=config.account_url, credential=DefaultAzureCredential()
        )

    def _blob_name(self, key: str) -> str:
        """
        Examples:
            >>> store._blob_name("abc-123")  # prefix "artifacts"
            'artifacts/abc-123'
        """
        if self.config.prefix:
            return f"{self.config.prefix}/{key}"
        return key

    def _blob_client(self, container: str, key: str) -> BlobClient:
        return self._service.get_blob_client(container=container, blob=self._blob_name(key))

    def _create_container(self, container: str) -> None:
        try:
            self._service.get_container_client(container).create_container(
                timeout=self.config.request_timeout_seconds
            )
            logger.info(f"Created blob container '{container}'")
        except ResourceExistsError:
            pass
        self._known_containers.add(container)

    def put(self, container: str, key: str, data: bytes) -> None:
        blob = self._blob_client(container, key)
        upload_options = {
            "overwrite": True,
            "max_concurrency": self.config.max_concurrency,
            "timeout": self.config.request_timeout_seconds,
        }

        try:
            try:
                blob.upload_blob(data, **upload_options)
            except ResourceNotFoundError:
                if container in self._known_containers:
                    raise
                self._create_container(container)
                blob.upload_blob(data, **upload_options)
        except AzureError as e:
            logger.error(f"Blob upload failed for {container}/{key}: {e}")
            raise ObjectStoreError(
                f"Failed to upload blob: {e}", container=container, key=key
            ) from e

        self._known_containers.add(container)
        logger.debug(f"Uploaded blob {container}/{key} ({len(data)} bytes)")

    def get(self, container: str, key: str) -> BlobReader:
        try:
            downloader = self._blob_client(container, key).download_blob(
                max_concurrency=self.config.max_concurrency,
                timeout=self.config.request_timeout_seconds,
            )
        except ResourceNotFoundError as e:
            raise ObjectNotFoundError(container, key) from e
        except AzureError as e:
            logger.error(f"Blob download failed for {container}/{key}: {e}")
            raise ObjectStoreError(
                f"Failed to download blob: {e}", container=container, key=key
            ) from e

        return BlobReader(downloader, container, key)

    def delete(self, container: str, key: str) -> bool:
        try:
            self._blob_client(container, key).delete_blob(
                timeout=self.config.request_timeout_seconds
            )
        except ResourceNotFoundError:
            logger.debug(f"Blob {container}/{key} already absent")
            return False
        except AzureError as e:
            logger.error(f"Blob delete failed for {container}/{key}: {e}")
            raise ObjectStoreError(
                f"Failed to delete blob: {e}", container=container, key=key
            ) from e

        logger.debug(f"Deleted blob {container}/{key}")
        return True
