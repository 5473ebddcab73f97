"""
ArtifactRepository Interface

Repository pattern interface for GeneratedArtifact metadata records.

Responsibility:
    - Define the metadata persistence contract
    - Enable Dependency Inversion (Domain defines, Infrastructure implements)
    - Keep the orchestrator testable with in-memory or mocked stores

Architecture Notes:
    - Protocol-based interface (structural typing)
    - Synchronous methods; the orchestrator runs them in worker threads
    - Implementations: InMemoryArtifactRepository, RedisArtifactRepository
"""

from typing import Optional, Protocol

from ..entities.generated_artifact import GeneratedArtifact


class ArtifactRepositoryProtocol(Protocol):
    """
    Protocol defining the contract for artifact metadata persistence.

    The repository exclusively owns the authoritative set of records.
    Any storage failure is raised to the caller unchanged; the
    orchestrator translates it into MetadataUnavailableError.
    """

    def save(self, artifact: GeneratedArtifact) -> None:
        """
        Store a metadata record (overwrites a record with the same id).

        Args:
            artifact: Record to store
        """
        ...

    def find_by_id(self, file_id: str) -> Optional[GeneratedArtifact]:
        """
        Retrieve a record by id.

        Returns:
            The record, or None when no record exists
        """
        ...

    def list_all(self) -> list[GeneratedArtifact]:
        """
        Retrieve all records.

        Returns:
            All records in the implementation's documented order
        """
        ...

    def delete_by_id(self, file_id: str) -> Optional[GeneratedArtifact]:
        """
        Remove a record by id.

        Returns:
            The removed record, or None when no record existed
        """
        ...
