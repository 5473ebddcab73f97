"""
Application Layer Ports (Interfaces)

Contains Protocol definitions for dependency inversion.
Infrastructure Layer implements these protocols.
"""

from report_service.application.ports.object_store import (
    ObjectNotFoundError,
    ObjectStoreError,
    ObjectStoreProtocol,
)
from report_service.application.ports.renderer import (
    RenderedWorkbook,
    ReportRendererProtocol,
)

__all__ = [
    "ObjectStoreProtocol",
    "ObjectStoreError",
    "ObjectNotFoundError",
    "ReportRendererProtocol",
    "RenderedWorkbook",
]
