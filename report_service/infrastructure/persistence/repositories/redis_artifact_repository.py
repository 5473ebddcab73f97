"""
Redis Artifact Repository

Redis implementation of ArtifactRepositoryProtocol.

Responsibility:
    - Store GeneratedArtifact records as JSON strings
    - Keep an index ordered by generation time for list_all()
    - Remove record and index entry together on delete

Storage Layout:
    - report:artifact:{file_id}  -> GeneratedArtifact JSON (no TTL)
    - report:artifacts           -> sorted set, member = file_id,
                                    score = generated_time (unix seconds)

Architecture Notes:
    - Infrastructure Layer (depends on redis-py)
    - Writes and deletes use a transactional pipeline (MULTI/EXEC)
    - RedisError propagates; the orchestrator maps it to MetadataUnavailableError
"""

import logging
from typing import Optional

from redis import Redis

from report_service.domain.report.entities.generated_artifact import GeneratedArtifact
from report_service.infrastructure.persistence.redis.connection import get_redis_client

logger = logging.getLogger(__name__)


class RedisArtifactRepository:
    """
    Artifact metadata repository backed by Redis.

    Ordering:
        list_all() returns records by ascending generated_time; records
        generated in the same second are ordered by file_id.

    Examples:
        >>> repository = RedisArtifactRepository()
        >>> repository.save(artifact)
        >>> repository.find_by_id(artifact.file_id) == artifact
        True
        >>> repository.delete_by_id(artifact.file_id).file_id == artifact.file_id
        True
    """

    KEY_PREFIX = "report:artifact:"
    INDEX_KEY = "report:artifacts"

    def __init__(self, client: Optional[Redis] = None) -> None:
        """
        Initialize repository.

        Args:
            client: Redis client (default: pooled client from get_redis_client)

        The default client is not PINGed here; an unreachable server raises
        RedisError from the first repository call instead.
        """
        self.redis: Redis = client or get_redis_client(verify_connection=False)

    def _get_key(self, file_id: str) -> str:
        """
        Examples:
            >>> repository._get_key("abc-123")
            'report:artifact:abc-123'
        """
        return f"{self.KEY_PREFIX}{file_id}"

    def save(self, artifact: GeneratedArtifact) -> None:
        pipe = self.redis.pipeline()
        pipe.set(self._get_key(artifact.file_id), artifact.to_json())
        pipe.zadd(self.INDEX_KEY, {artifact.file_id: artifact.generated_time.timestamp()})
        pipe.execute()

        logger.debug(f"Saved artifact record {artifact.file_id}")

    def find_by_id(self, file_id: str) -> Optional[GeneratedArtifact]:
        data = self.redis.get(self._get_key(file_id))
        if data is None:
            return None
        return GeneratedArtifact.from_json(data)

    def list_all(self) -> list[GeneratedArtifact]:
        file_ids = self.redis.zrange(self.INDEX_KEY, 0, -1)
        if not file_ids:
            return []

        values = self.redis.mget([self._get_key(file_id) for file_id in file_ids])

        artifacts = []
        for file_id, data in zip(file_ids, values):
            if data is None:
                # Index entry without record: removed between ZRANGE and MGET
                logger.warning(f"Artifact {file_id} listed in index but has no record")
                continue
            artifacts.append(GeneratedArtifact.from_json(data))
        return artifacts

    def delete_by_id(self, file_id: str) -> Optional[GeneratedArtifact]:
        pipe = self.redis.pipeline()
        pipe.getdel(self._get_key(file_id))
        pipe.zrem(self.INDEX_KEY, file_id)
        data, _ = pipe.execute()

        if data is None:
            return None

        logger.debug(f"Deleted artifact record {file_id}")
        return GeneratedArtifact.from_json(data)
