"""
Report Subdomain

Everything about turning tabular data into spreadsheet reports:
request, logical sheet model, sheet building and the artifact record.

This module exports:
    - ReportRequest, HeaderSpec, Sheet, ReportData: Value objects
    - GeneratedArtifact, ReportGeneration, GenerationState: Entities
    - SheetBuilder: Domain service
    - ArtifactRepositoryProtocol: Repository interface
"""

from .entities import GeneratedArtifact, GenerationState, ReportGeneration
from .repositories import ArtifactRepositoryProtocol
from .services import SheetBuilder
from .value_objects import DataRow, HeaderSpec, ReportData, ReportRequest, Sheet

__all__ = [
    "ReportRequest",
    "HeaderSpec",
    "Sheet",
    "ReportData",
    "DataRow",
    "GeneratedArtifact",
    "ReportGeneration",
    "GenerationState",
    "SheetBuilder",
    "ArtifactRepositoryProtocol",
]
