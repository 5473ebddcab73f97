"""
Report Service - Application Orchestration

Responsibility:
    Runs the report pipeline and the artifact lifecycle operations:
    generate, list, get, fetch and delete.

Architecture Notes:
    - Part of Application Layer (Services/Use Cases)
    - Depends on Domain Layer (SheetBuilder, entities, repository protocol)
    - Collaborators injected through constructor (renderer, object store,
      metadata repository), typed by Protocols
    - Async API; every blocking collaborator call runs in a worker thread
    - No HTTP handling (that's API Layer concern)

Generate Flow:
    ALLOCATED  allocate id
               build sheets            -> InvalidPartitionKeyError / RowShapeMismatchError
               render (timeout)        -> ArtifactGenerationFailedError
    STORED     upload bytes (timeout)  -> StorageUnavailableError
    RECORDED   save metadata record    -> OrphanedArtifactError

    A record is saved only after the upload succeeded, so a record never
    points at bytes that were not stored. The reverse (bytes without a
    record) is possible and is reported through OrphanedArtifactError.
"""

import asyncio
import logging
import os
from typing import BinaryIO, Callable, Iterator, Optional, TypeVar

from report_service.application.ports.object_store import (
    ObjectNotFoundError,
    ObjectStoreProtocol,
)
from report_service.application.ports.renderer import (
    RenderedWorkbook,
    ReportRendererProtocol,
)
from report_service.domain.report.entities.generated_artifact import GeneratedArtifact
from report_service.domain.report.entities.report_generation import ReportGeneration
from report_service.domain.report.repositories.artifact_repository import (
    ArtifactRepositoryProtocol,
)
from report_service.domain.report.services.sheet_builder import SheetBuilder
from report_service.domain.report.value_objects.report_request import ReportRequest
from report_service.domain.report.value_objects.sheet import ReportData
from report_service.domain.shared.exceptions import (
    ArtifactGenerationFailedError,
    ArtifactNotFoundError,
    MetadataUnavailableError,
    OrphanedArtifactError,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CHUNK_SIZE = 64 * 1024


# ============================================================================
# ARTIFACT STREAM (fetch result)
# ============================================================================


class ArtifactStream:
    """
    Metadata record plus an open binary stream of the stored bytes.

    The stream is passed through from the object store without buffering
    the whole artifact. Callers must close it, either by exhausting
    iter_chunks(), calling close(), or using the object as a context manager.

    Examples:
        >>> stream = await service.fetch(file_id)
        >>> with stream:
        ...     for chunk in stream.iter_chunks():
        ...         output.write(chunk)
    """

    def __init__(self, artifact: GeneratedArtifact, body: BinaryIO) -> None:
        self.artifact = artifact
        self.body = body

    def read(self, size: int = -1) -> bytes:
        return self.body.read(size)

    def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the stored bytes in chunks, closing the stream at the end."""
        try:
            while True:
                chunk = self.body.read(chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            self.close()

    def close(self) -> None:
        self.body.close()

    def __enter__(self) -> "ArtifactStream":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


# ============================================================================
# SERVICE
# ============================================================================


class ReportService:
    """
    Orchestrates report generation and the artifact lifecycle.

    Dependencies:
        - renderer: ReportRendererProtocol (ExcelWriterService)
        - object_store: ObjectStoreProtocol (LocalObjectStore)
        - repository: ArtifactRepositoryProtocol (in-memory or Redis)
        - sheet_builder: SheetBuilder (default instance if omitted)

    Configuration (constructor argument, else environment):
        - bucket: REPORT_BUCKET (default "reports")
        - render_timeout: RENDER_TIMEOUT_SECONDS (default 30)
        - upload_timeout: UPLOAD_TIMEOUT_SECONDS (default 30)

    Concurrency:
        Generate calls share no mutable state (each has its own id and
        ReportGeneration) and hold no locks across steps. Nothing is retried.

    Examples:
        >>> service = ReportService(
        ...     renderer=ExcelWriterService(),
        ...     object_store=LocalObjectStore(),
        ...     repository=InMemoryArtifactRepository(),
        ... )
        >>> artifact = await service.generate(
        ...     ReportRequest.single_sheet(["region", "amount"], [["east", 10]])
        ... )
        >>> [a.file_id for a in await service.list()] == [artifact.file_id]
        True
    """

    def __init__(
        self,
        renderer: ReportRendererProtocol,
        object_store: ObjectStoreProtocol,
        repository: ArtifactRepositoryProtocol,
        sheet_builder: Optional[SheetBuilder] = None,
        bucket: Optional[str] = None,
        render_timeout: Optional[float] = None,
        upload_timeout: Optional[float] = None,
    ) -> None:
        self.renderer = renderer
        self.object_store = object_store
        self.repository = repository
        self.sheet_builder = sheet_builder or SheetBuilder()

        self.bucket = bucket if bucket is not None else os.getenv("REPORT_BUCKET", "reports")
        self.render_timeout = (
            render_timeout
            if render_timeout is not None
            else float(os.getenv("RENDER_TIMEOUT_SECONDS", "30"))
        )
        self.upload_timeout = (
            upload_timeout
            if upload_timeout is not None
            else float(os.getenv("UPLOAD_TIMEOUT_SECONDS", "30"))
        )

    # ------------------------------------------------------------------
    # generate
    # ------------------------------------------------------------------

    async def generate(self, request: ReportRequest) -> GeneratedArtifact:
        """
        Build, render, store and record one report.

        Args:
            request: Single-sheet or partitioned report request

        Returns:
            The saved metadata record

        Raises:
            InvalidPartitionKeyError: Partition key not in headers or
                non-string partition value (nothing written)
            RowShapeMismatchError: Row length differs from header count
                (nothing written)
            ArtifactGenerationFailedError: Renderer failed or timed out
                (nothing written)
            StorageUnavailableError: Upload failed or timed out (no record)
            OrphanedArtifactError: Bytes stored but record save failed
        """
        generation = ReportGeneration.allocate(request)
        file_id = generation.file_id

        logger.info(
            f"Generating report {file_id} "
            f"(partitioned={request.partitioned}, rows={len(request.rows)})"
        )

        report = self.sheet_builder.build_report(file_id, request)
        rendered = await self._render(report)

        location = GeneratedArtifact.build_location(self.bucket, file_id)
        await self._upload(file_id, rendered.content)
        generation.mark_stored(location, rendered.file_name, rendered.size)

        artifact = generation.to_artifact()
        try:
            await asyncio.to_thread(self.repository.save, artifact)
        except Exception as e:
            logger.error(
                f"Metadata save failed for {file_id}; bytes left at {location}",
                exc_info=True,
            )
            raise OrphanedArtifactError(file_id, location, original_error=e) from e
        generation.mark_recorded()

        logger.info(
            f"Report {file_id} recorded: {artifact.file_name}, "
            f"{len(report.sheets)} sheets, {artifact.file_size} bytes"
        )
        return artifact

    async def _render(self, report: ReportData) -> RenderedWorkbook:
        try:
            rendered = await self._run_blocking(
                self.renderer.render, self.render_timeout, report
            )
        except asyncio.TimeoutError as e:
            logger.error(
                f"Rendering {report.file_id} timed out after {self.render_timeout}s"
            )
            raise ArtifactGenerationFailedError(
                f"Rendering timed out after {self.render_timeout}s",
                file_id=report.file_id,
            ) from e
        except Exception as e:
            logger.error(f"Rendering {report.file_id} failed", exc_info=True)
            raise ArtifactGenerationFailedError(
                "Rendering failed", file_id=report.file_id, original_error=e
            ) from e

        logger.debug(f"Rendered {report.file_id}: {rendered.size} bytes")
        return rendered

    async def _upload(self, file_id: str, content: bytes) -> None:
        try:
            await self._run_blocking(
                self.object_store.put,
                self.upload_timeout,
                self.bucket,
                file_id,
                content,
            )
        except asyncio.TimeoutError as e:
            # The worker thread may still finish the write after this point
            logger.error(
                f"Upload of {file_id} timed out after {self.upload_timeout}s; "
                f"object {self.bucket}/{file_id} may appear without a record"
            )
            raise StorageUnavailableError(
                f"Upload timed out after {self.upload_timeout}s",
                file_id=file_id,
                operation="put",
            ) from e
        except Exception as e:
            logger.error(f"Upload of {file_id} failed", exc_info=True)
            raise StorageUnavailableError(
                "Upload failed", file_id=file_id, operation="put", original_error=e
            ) from e

        logger.debug(f"Uploaded {file_id} to {self.bucket}: {len(content)} bytes")

    @staticmethod
    async def _run_blocking(func: Callable[..., T], timeout: float, *args) -> T:
        return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout)

    # ------------------------------------------------------------------
    # read operations
    # ------------------------------------------------------------------

    async def list(self) -> list[GeneratedArtifact]:
        """
        List all metadata records in repository order.

        Raises:
            MetadataUnavailableError: If the repository fails
        """
        try:
            return await asyncio.to_thread(self.repository.list_all)
        except Exception as e:
            logger.error("Listing artifact records failed", exc_info=True)
            raise MetadataUnavailableError(
                "Could not list artifact records", original_error=e
            ) from e

    async def get(self, file_id: str) -> GeneratedArtifact:
        """
        Look up one metadata record.

        Raises:
            ArtifactNotFoundError: If no record exists
            MetadataUnavailableError: If the repository fails
        """
        try:
            artifact = await asyncio.to_thread(self.repository.find_by_id, file_id)
        except Exception as e:
            logger.error(f"Lookup of artifact {file_id} failed", exc_info=True)
            raise MetadataUnavailableError(
                "Could not read artifact record", file_id=file_id, original_error=e
            ) from e

        if artifact is None:
            logger.warning(f"Artifact {file_id} not found")
            raise ArtifactNotFoundError(file_id)
        return artifact

    async def fetch(self, file_id: str) -> ArtifactStream:
        """
        Open the stored bytes of an artifact for streaming.

        Args:
            file_id: Artifact id

        Returns:
            ArtifactStream (caller must close it)

        Raises:
            ArtifactNotFoundError: If no record exists, or the record exists
                but its bytes are missing from the object store
            StorageUnavailableError: If the object store fails
            MetadataUnavailableError: If the repository fails
        """
        artifact = await self.get(file_id)
        container = artifact.storage_container

        try:
            body = await asyncio.to_thread(
                self.object_store.get, container, artifact.file_id
            )
        except ObjectNotFoundError as e:
            logger.warning(
                f"Artifact {file_id} has a record but no bytes at "
                f"{artifact.file_location} (orphaned record)"
            )
            raise ArtifactNotFoundError(
                file_id, f"Artifact with ID {file_id} has no stored content"
            ) from e
        except Exception as e:
            logger.error(f"Reading bytes of {file_id} failed", exc_info=True)
            raise StorageUnavailableError(
                "Could not read artifact content",
                file_id=file_id,
                operation="get",
                original_error=e,
            ) from e

        logger.info(f"Streaming artifact {file_id} ({artifact.file_size} bytes)")
        return ArtifactStream(artifact, body)

    # ------------------------------------------------------------------
    # delete
    # ------------------------------------------------------------------

    async def delete(self, file_id: str) -> GeneratedArtifact:
        """
        Delete the metadata record, then try to delete the bytes.

        The record is removed first so the artifact disappears from list and
        fetch even if byte deletion fails. Byte deletion is best-effort:
        failures are logged and never restore the record.

        Returns:
            The removed record

        Raises:
            ArtifactNotFoundError: If no record exists (object store untouched)
            MetadataUnavailableError: If the repository fails
        """
        try:
            artifact = await asyncio.to_thread(self.repository.delete_by_id, file_id)
        except Exception as e:
            logger.error(f"Deleting record {file_id} failed", exc_info=True)
            raise MetadataUnavailableError(
                "Could not delete artifact record", file_id=file_id, original_error=e
            ) from e

        if artifact is None:
            logger.warning(f"Delete requested for unknown artifact {file_id}")
            raise ArtifactNotFoundError(file_id)

        container = artifact.storage_container
        try:
            removed = await asyncio.to_thread(
                self.object_store.delete, container, artifact.file_id
            )
        except Exception:
            logger.error(
                f"Record {file_id} deleted but bytes at {artifact.file_location} "
                f"could not be removed",
                exc_info=True,
            )
        else:
            if not removed:
                logger.warning(
                    f"Record {file_id} deleted; bytes at {artifact.file_location} "
                    f"were already absent"
                )

        logger.info(f"Deleted artifact {file_id}")
        return artifact
