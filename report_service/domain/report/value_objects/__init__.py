"""
Report Value Objects

Immutable objects describing report requests and the logical sheet model.

Exports:
    - ReportRequest: Caller request (single-sheet or partitioned mode)
    - HeaderSpec, Sheet, ReportData, DataRow: Logical workbook model
"""

from .report_request import ReportRequest
from .sheet import DataRow, HeaderSpec, ReportData, Sheet

__all__ = [
    "ReportRequest",
    "HeaderSpec",
    "Sheet",
    "ReportData",
    "DataRow",
]
