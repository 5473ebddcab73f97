"""
Application Services

Responsibility:
    Orchestration of the report pipeline over injected collaborators.

Contains:
    - ReportService: generate / list / get / fetch / delete
    - ArtifactStream: fetch result (record + open byte stream)

Does NOT contain:
    - Domain business logic (use Domain services)
    - Direct infrastructure construction (use dependency injection)
"""

from .report_service import ArtifactStream, ReportService

__all__ = ["ReportService", "ArtifactStream"]
