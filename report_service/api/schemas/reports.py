"""
Report API Schemas

Request and response bodies of the /api/excel endpoints.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from report_service.domain.report.entities.generated_artifact import GeneratedArtifact
from report_service.domain.report.value_objects.report_request import ReportRequest


# ============================================================================
# REQUEST MODELS
# ============================================================================


class ExcelRequest(BaseModel):
    """
    Request body for a single-sheet report.

    Attributes:
        description: Report title, also used for the download file name
        submitter: Identity of the requester
        headers: Column names in display order (at least one)
        data: Rows, each with one value per header
    """

    description: str = Field(default="", description="Report title / description")
    submitter: str = Field(default="", description="Identity of the requester")
    headers: list[str] = Field(..., min_length=1, description="Column names")
    data: list[list[Any]] = Field(
        default_factory=list, description="Rows aligned to headers"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "description": "Sales by region",
                "submitter": "alice",
                "headers": ["region", "amount"],
                "data": [["east", 10], ["west", 5], ["east", 3]],
            }
        }

    def to_report_request(self) -> ReportRequest:
        return ReportRequest.single_sheet(
            headers=self.headers,
            rows=self.data,
            description=self.description,
            submitter=self.submitter,
        )


class MultiSheetExcelRequest(ExcelRequest):
    """
    Request body for a report split into one sheet per value of a column.

    Attributes:
        split_by: Header whose values select the sheet (JSON: "splitBy")
    """

    split_by: str = Field(
        ...,
        alias="splitBy",
        min_length=1,
        description="Header used to partition rows into sheets",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "description": "Sales by region",
                "submitter": "alice",
                "headers": ["region", "amount"],
                "data": [["east", 10], ["west", 5], ["east", 3]],
                "splitBy": "region",
            }
        },
    }

    def to_report_request(self) -> ReportRequest:
        return ReportRequest.partitioned_by(
            partition_key=self.split_by,
            headers=self.headers,
            rows=self.data,
            description=self.description,
            submitter=self.submitter,
        )


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class ExcelResponse(BaseModel):
    """
    Metadata of one generated report.

    Attributes:
        file_id: Artifact id (use in /api/excel/{file_id} paths)
        file_name: Download file name
        file_location: Storage location "{bucket}/{file_id}"
        file_size: Size in bytes
        generated_time: Generation timestamp (UTC)
        submitter: Identity of the requester
        description: Report description
    """

    file_id: str = Field(description="Artifact id")
    file_name: str = Field(description="Download file name")
    file_location: str = Field(description="Storage location")
    file_size: int = Field(ge=0, description="Size in bytes")
    generated_time: datetime = Field(description="Generation timestamp")
    submitter: str = Field(default="", description="Identity of the requester")
    description: str = Field(default="", description="Report description")

    class Config:
        json_schema_extra = {
            "example": {
                "file_id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "file_name": "Sales by region.xlsx",
                "file_location": "reports/3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "file_size": 5120,
                "generated_time": "2024-01-15T10:30:00Z",
                "submitter": "alice",
                "description": "Sales by region",
            }
        }

    @classmethod
    def from_artifact(cls, artifact: GeneratedArtifact) -> "ExcelResponse":
        return cls(
            file_id=artifact.file_id,
            file_name=artifact.file_name,
            file_location=artifact.file_location,
            file_size=artifact.file_size,
            generated_time=artifact.generated_time,
            submitter=artifact.submitter,
            description=artifact.description,
        )
