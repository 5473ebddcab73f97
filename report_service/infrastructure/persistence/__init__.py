"""
Persistence Infrastructure Module

Artifact metadata repositories and the Redis connection pool.

Exports:
    From repositories:
        - InMemoryArtifactRepository
        - RedisArtifactRepository
"""

from .repositories import InMemoryArtifactRepository, RedisArtifactRepository

__all__ = [
    "InMemoryArtifactRepository",
    "RedisArtifactRepository",
]
