"""
API Dependency Injection

Builds the process-wide ReportService and its collaborators.

The service is cached so every request shares one metadata repository
(required for the in-memory backend). Tests replace it through
app.dependency_overrides[get_report_service].
"""

import logging
import os
from functools import lru_cache

from report_service.application.ports.object_store import ObjectStoreProtocol
from report_service.application.services.report_service import ReportService
from report_service.domain.report.repositories.artifact_repository import (
    ArtifactRepositoryProtocol,
)
from report_service.infrastructure.file_storage import (
    AzureBlobObjectStore,
    ExcelWriterService,
    LocalObjectStore,
)
from report_service.infrastructure.persistence.repositories import (
    InMemoryArtifactRepository,
    RedisArtifactRepository,
)

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("memory", "redis")
SUPPORTED_OBJECT_STORES = ("local", "azure")


def get_metadata_backend() -> str:
    """
    Metadata backend name from METADATA_BACKEND ("memory" or "redis").

    Raises:
        ValueError: If the configured backend is not supported
    """
    backend = os.getenv("METADATA_BACKEND", "memory").strip().lower()
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Unsupported METADATA_BACKEND '{backend}'. "
            f"Supported: {', '.join(SUPPORTED_BACKENDS)}"
        )
    return backend


def build_repository(backend: str) -> ArtifactRepositoryProtocol:
    if backend == "redis":
        return RedisArtifactRepository()
    return InMemoryArtifactRepository()


def get_object_store_backend() -> str:
    """
    Object store name from OBJECT_STORE_BACKEND ("local" or "azure").

    Raises:
        ValueError: If the configured object store is not supported
    """
    backend = os.getenv("OBJECT_STORE_BACKEND", "local").strip().lower()
    if backend not in SUPPORTED_OBJECT_STORES:
        raise ValueError(
            f"Unsupported OBJECT_STORE_BACKEND '{backend}'. "
            f"Supported: {', '.join(SUPPORTED_OBJECT_STORES)}"
        )
    return backend


def build_object_store(backend: str) -> ObjectStoreProtocol:
    if backend == "azure":
        return AzureBlobObjectStore()
    return LocalObjectStore()


@lru_cache(maxsize=1)
def get_report_service() -> ReportService:
    """
    Create the shared ReportService (once per process).

    Returns:
        ReportService wired with ExcelWriterService, the object store
        selected by OBJECT_STORE_BACKEND and the repository selected by
        METADATA_BACKEND
    """
    backend = get_metadata_backend()
    store_backend = get_object_store_backend()
    service = ReportService(
        renderer=ExcelWriterService(),
        object_store=build_object_store(store_backend),
        repository=build_repository(backend),
    )
    logger.info(
        f"ReportService ready: bucket={service.bucket}, "
        f"object_store={store_backend}, metadata_backend={backend}"
    )
    return service
