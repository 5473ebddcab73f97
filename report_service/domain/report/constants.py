"""
Report Domain Constants

Fixed values shared by the sheet builder, the renderer and the orchestrator.
"""

from typing import Final

# Title of the only sheet produced for a non-partitioned request
DEFAULT_SHEET_TITLE: Final[str] = "sheet-1"

# Group key used for rows whose partition cell is None
MISSING_PARTITION_VALUE: Final[str] = ""

# Extension and media type of rendered artifacts
ARTIFACT_EXTENSION: Final[str] = ".xlsx"
ARTIFACT_MEDIA_TYPE: Final[str] = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)
