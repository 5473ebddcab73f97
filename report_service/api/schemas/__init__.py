"""
API Schemas Package

Contains Pydantic models for API Layer.
"""

from report_service.api.schemas.common import ErrorResponse
from report_service.api.schemas.reports import (
    ExcelRequest,
    ExcelResponse,
    MultiSheetExcelRequest,
)

__all__ = ["ErrorResponse", "ExcelRequest", "MultiSheetExcelRequest", "ExcelResponse"]
