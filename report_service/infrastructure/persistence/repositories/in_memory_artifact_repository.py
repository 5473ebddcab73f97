"""
In-Memory Artifact Repository

Process-local implementation of ArtifactRepositoryProtocol.

Used as the default metadata backend (METADATA_BACKEND=memory) and in
tests. Records are lost when the process exits.
"""

import threading
from typing import Optional

from report_service.domain.report.entities.generated_artifact import GeneratedArtifact


class InMemoryArtifactRepository:
    """
    Dict-backed repository guarded by a lock.

    Ordering:
        list_all() returns records in insertion order. Saving an existing
        id replaces the record in place.
    """

    def __init__(self) -> None:
        self._records: dict[str, GeneratedArtifact] = {}
        self._lock = threading.Lock()

    def save(self, artifact: GeneratedArtifact) -> None:
        with self._lock:
            self._records[artifact.file_id] = artifact

    def find_by_id(self, file_id: str) -> Optional[GeneratedArtifact]:
        with self._lock:
            return self._records.get(file_id)

    def list_all(self) -> list[GeneratedArtifact]:
        with self._lock:
            return list(self._records.values())

    def delete_by_id(self, file_id: str) -> Optional[GeneratedArtifact]:
        with self._lock:
            return self._records.pop(file_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
