"""
Report Entities

Exports:
    - GeneratedArtifact: Immutable metadata record of a stored artifact
    - ReportGeneration, GenerationState: Lifecycle of one generate call
"""

from .generated_artifact import GeneratedArtifact
from .report_generation import GenerationState, ReportGeneration

__all__ = [
    "GeneratedArtifact",
    "ReportGeneration",
    "GenerationState",
]
