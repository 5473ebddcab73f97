"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for all API errors.

    Provides consistent error structure across all endpoints.

    Attributes:
        code: Machine-readable error code (e.g., "ARTIFACT_NOT_FOUND", "ROW_SHAPE_MISMATCH")
        message: Human-readable error message
        details: Optional additional error context (exception type, ids)
    """

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "code": "ARTIFACT_NOT_FOUND",
                "message": "ArtifactNotFoundError: Artifact with ID 3fa85f64-5717-4562-b3fc-2c963f66afa6 not found",
                "details": {"exception_type": "ArtifactNotFoundError"},
            }
        }
