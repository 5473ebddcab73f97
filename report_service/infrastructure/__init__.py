"""
Infrastructure Layer - External Dependencies

Implements the collaborators the report pipeline talks to.

Architecture:
    - Implements Domain repository interfaces (ArtifactRepositoryProtocol)
    - Implements Application Layer protocols (renderer, object store)
    - Depends on external libraries (openpyxl, redis, azure-storage-blob)
    - No Domain business logic (only technical implementations)

Modules:
    - file_storage: openpyxl renderer, filesystem and Azure Blob object stores
    - persistence: In-memory and Redis metadata repositories

Usage:
    >>> from report_service.infrastructure import (
    ...     ExcelWriterService,
    ...     LocalObjectStore,
    ...     InMemoryArtifactRepository,
    ... )
"""

# File Storage
from .file_storage import AzureBlobObjectStore, ExcelWriterService, LocalObjectStore

# Persistence
from .persistence import InMemoryArtifactRepository, RedisArtifactRepository

__all__ = [
    # File Storage
    "AzureBlobObjectStore",
    "ExcelWriterService",
    "LocalObjectStore",
    # Persistence
    "InMemoryArtifactRepository",
    "RedisArtifactRepository",
]
