"""
Domain Layer - Core Business Logic

Report model, sheet building rules and the failure taxonomy.
Framework-independent and highly testable.

Architecture:
    - Clean Architecture: Domain Layer is the center, no I/O
    - Domain-Driven Design: Entities, Value Objects, Services, Repositories
    - Dependency Inversion: Domain defines interfaces, Infrastructure implements

Subdomains:
    - report: Report requests, sheets, artifacts
    - shared: Exception taxonomy

Usage:
    >>> from report_service.domain import ReportRequest, SheetBuilder
    >>> from report_service.domain.report.entities import GeneratedArtifact
"""

from .report import (
    ArtifactRepositoryProtocol,
    GeneratedArtifact,
    ReportData,
    ReportRequest,
    Sheet,
    SheetBuilder,
)
from .shared import DomainException

__all__ = [
    "ReportRequest",
    "ReportData",
    "Sheet",
    "SheetBuilder",
    "GeneratedArtifact",
    "ArtifactRepositoryProtocol",
    "DomainException",
]
