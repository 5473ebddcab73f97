"""
Local Object Store

Filesystem implementation of ObjectStoreProtocol.

Responsibility:
    - Store artifact bytes under {STORAGE_DIR}/{container}/{key}
    - Open stored objects as file handles for pass-through streaming
    - Remove objects on delete

Architecture Notes:
    - Infrastructure Layer (file system operations)
    - Implements Application Layer ObjectStoreProtocol
    - Atomic writes (write to .tmp, then os.replace)
    - Every OSError is raised as ObjectStoreError
"""

import logging
import os
import re
from pathlib import Path
from typing import BinaryIO, Optional

from report_service.application.ports.object_store import (
    ObjectNotFoundError,
    ObjectStoreError,
)

logger = logging.getLogger(__name__)


class LocalObjectStore:
    """
    Object store keeping each container as a directory.

    Storage Structure:
        Base directory: /tmp/report_service/storage (from env: STORAGE_DIR)
        Object path: {base_dir}/{container}/{key}
        In-flight write: {base_dir}/{container}/{key}.tmp

    Business Rules:
        - Container names and keys use only letters, digits, "-", "_" and "."
          and never start with "." (no path traversal, no hidden files)
        - A put replaces an existing object atomically

    Examples:
        >>> store = LocalObjectStore(base_dir="/tmp/store")
        >>> store.put("reports", "3fa85f64-5717-4562-b3fc-2c963f66afa6", b"...")
        >>> with store.get("reports", "3fa85f64-5717-4562-b3fc-2c963f66afa6") as stream:
        ...     data = stream.read()
        >>> store.delete("reports", "3fa85f64-5717-4562-b3fc-2c963f66afa6")
        True
    """

    SAFE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_\-][A-Za-z0-9_\-.]*$")
    TMP_SUFFIX = ".tmp"

    def __init__(self, base_dir: Optional[str] = None) -> None:
        """
        Initialize object store with its root directory.

        Args:
            base_dir: Root directory (default: env STORAGE_DIR or
                /tmp/report_service/storage)
        """
        self.base_dir = Path(
            base_dir or os.getenv("STORAGE_DIR", "/tmp/report_service/storage")
        )
        logger.info(f"LocalObjectStore initialized at {self.base_dir}")

    def put(self, container: str, key: str, data: bytes) -> None:
        """
        Store bytes atomically.

        Raises:
            ObjectStoreError: If the name is unsafe or the write fails
        """
        object_path = self._object_path(container, key)
        tmp_path = object_path.with_name(object_path.name + self.TMP_SUFFIX)

        try:
            object_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            os.replace(tmp_path, object_path)
        except OSError as e:
            self._discard(tmp_path)
            raise ObjectStoreError(
                f"Failed to write object: {e}", container=container, key=key
            ) from e

        logger.debug(f"Stored {len(data)} bytes at {container}/{key}")

    def get(self, container: str, key: str) -> BinaryIO:
        """
        Open a stored object for reading (binary, unbuffered by this class).

        Raises:
            ObjectNotFoundError: If the object does not exist
            ObjectStoreError: If the name is unsafe or the object cannot be opened
        """
        object_path = self._object_path(container, key)
        try:
            return open(object_path, "rb")
        except FileNotFoundError as e:
            raise ObjectNotFoundError(container, key) from e
        except OSError as e:
            raise ObjectStoreError(
                f"Failed to open object: {e}", container=container, key=key
            ) from e

    def delete(self, container: str, key: str) -> bool:
        """
        Remove a stored object.

        Returns:
            True if removed, False if it did not exist

        Raises:
            ObjectStoreError: If the name is unsafe or removal fails
        """
        object_path = self._object_path(container, key)
        try:
            object_path.unlink()
        except FileNotFoundError:
            logger.debug(f"Object already absent: {container}/{key}")
            return False
        except OSError as e:
            raise ObjectStoreError(
                f"Failed to delete object: {e}", container=container, key=key
            ) from e

        logger.debug(f"Deleted object {container}/{key}")
        return True

    def exists(self, container: str, key: str) -> bool:
        """Check whether an object is stored under (container, key)."""
        return self._object_path(container, key).is_file()

    def _object_path(self, container: str, key: str) -> Path:
        for name in (container, key):
            if not self.SAFE_NAME_PATTERN.match(name) or name.endswith(self.TMP_SUFFIX):
                raise ObjectStoreError(
                    f"Unsafe object name: {name!r}", container=container, key=key
                )
        return self.base_dir / container / key

    @staticmethod
    def _discard(tmp_path: Path) -> None:
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temporary file {tmp_path}: {e}")
