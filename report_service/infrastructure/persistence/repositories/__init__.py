"""
Repository Implementations Module

Concrete implementations of Domain repository interfaces.

Exports:
    - InMemoryArtifactRepository: Process-local dict implementation
    - RedisArtifactRepository: Redis-based implementation
"""

from .in_memory_artifact_repository import InMemoryArtifactRepository
from .redis_artifact_repository import RedisArtifactRepository

__all__ = [
    "InMemoryArtifactRepository",
    "RedisArtifactRepository",
]
