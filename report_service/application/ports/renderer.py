"""
Report Renderer Port

Protocol for the engine that turns the logical report model into file bytes.
"""

from dataclasses import dataclass
from typing import Protocol

from report_service.domain.report.value_objects.sheet import ReportData


@dataclass(frozen=True)
class RenderedWorkbook:
    """
    Result of rendering one report.

    Attributes:
        content: Complete file bytes
        file_name: Display name offered on download
    """

    content: bytes
    file_name: str

    @property
    def size(self) -> int:
        return len(self.content)


class ReportRendererProtocol(Protocol):
    """
    Contract for report rendering engines.

    Implementations:
        - ExcelWriterService: openpyxl .xlsx renderer (infrastructure/file_storage)
    """

    def render(self, report: ReportData) -> RenderedWorkbook:
        """
        Render a report.

        Raises:
            Exception: Any engine error; the caller treats every exception
                as a failed generation
        """
        ...
