"""
Report Repository Interfaces Module

Repository contracts for artifact metadata.
Defined in Domain Layer, implemented in Infrastructure Layer.

This module exports:
    - ArtifactRepositoryProtocol: Metadata repository for GeneratedArtifact
"""

from .artifact_repository import ArtifactRepositoryProtocol

__all__ = [
    "ArtifactRepositoryProtocol",
]
