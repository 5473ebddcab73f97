"""
Object Store Port

Protocol for the blob store holding rendered artifacts, plus the error
contract every implementation follows.

Architecture Notes:
    - Application Layer defines the contract, Infrastructure implements it
    - Synchronous, blocking methods; ReportService runs them in worker threads
    - Objects are addressed by (container, key); the report id is the key
"""

from typing import BinaryIO, Protocol


class ObjectStoreError(Exception):
    """
    Raised when the object store cannot complete an operation.

    Attributes:
        container: Container (bucket) involved
        key: Object key involved
    """

    def __init__(self, message: str, container: str = "", key: str = "") -> None:
        self.container = container
        self.key = key
        super().__init__(message)


class ObjectNotFoundError(ObjectStoreError):
    """Raised by get() when no object exists under (container, key)."""

    def __init__(self, container: str, key: str) -> None:
        super().__init__(
            f"Object '{key}' not found in container '{container}'",
            container=container,
            key=key,
        )


class ObjectStoreProtocol(Protocol):
    """
    Contract for artifact byte storage.

    Implementations:
        - LocalObjectStore: filesystem buckets (infrastructure/file_storage)
        - AzureBlobObjectStore: Azure Blob Storage containers
    """

    def put(self, container: str, key: str, data: bytes) -> None:
        """
        Store bytes under (container, key), replacing any existing object.

        Raises:
            ObjectStoreError: If the object could not be written
        """
        ...

    def get(self, container: str, key: str) -> BinaryIO:
        """
        Open a stored object for reading.

        The caller owns the returned stream and must close it.

        Raises:
            ObjectNotFoundError: If the object does not exist
            ObjectStoreError: If the object could not be opened
        """
        ...

    def delete(self, container: str, key: str) -> bool:
        """
        Remove a stored object.

        Returns:
            True if an object was removed, False if it was already absent

        Raises:
            ObjectStoreError: If the object exists but could not be removed
        """
        ...
