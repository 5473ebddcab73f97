"""
Shared Domain Module

Shared domain concepts used across the report subdomain.

This module exports:
    - DomainException: Base exception for all domain errors
    - The report pipeline failure kinds
"""

from .exceptions import (
    ArtifactGenerationFailedError,
    ArtifactNotFoundError,
    DomainException,
    InvalidGenerationTransitionError,
    InvalidPartitionKeyError,
    MetadataUnavailableError,
    OrphanedArtifactError,
    RowShapeMismatchError,
    StorageUnavailableError,
)

__all__ = [
    "DomainException",
    "InvalidPartitionKeyError",
    "RowShapeMismatchError",
    "ArtifactGenerationFailedError",
    "StorageUnavailableError",
    "ArtifactNotFoundError",
    "MetadataUnavailableError",
    "OrphanedArtifactError",
    "InvalidGenerationTransitionError",
]
