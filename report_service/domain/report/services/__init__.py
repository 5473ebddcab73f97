"""
Report Domain Services Module

Pure operations on the report model.

This module exports:
    - SheetBuilder: Request -> ordered logical sheets (single or partitioned)
"""

from .sheet_builder import SheetBuilder

__all__ = [
    "SheetBuilder",
]
