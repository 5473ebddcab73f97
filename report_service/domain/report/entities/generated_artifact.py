"""
GeneratedArtifact

Metadata record describing one stored spreadsheet artifact.

Responsibility:
    - Durable descriptor of an artifact (id, location, size, timestamp, owner)
    - JSON round-trip for repository storage

Architecture Notes:
    - Immutable pydantic model (frozen): created once, removed only by delete
    - Owned exclusively by the metadata repository; bytes live in the object store
"""

from datetime import datetime

from pydantic import BaseModel, Field


class GeneratedArtifact(BaseModel):
    """
    Immutable metadata record of a generated report.

    Attributes:
        file_id: Unique artifact id (uuid4 string), also the object store key
        file_location: "{bucket}/{file_id}" derived from id and configured bucket
        file_name: Display file name offered on download
        file_size: Size of stored bytes
        generated_time: Timestamp at which the artifact was produced
        submitter: Identity of the requester
        description: Report description from the request

    Examples:
        >>> artifact = GeneratedArtifact(
        ...     file_id="3fa85f64-5717-4562-b3fc-2c963f66afa6",
        ...     file_location="reports/3fa85f64-5717-4562-b3fc-2c963f66afa6",
        ...     file_name="sales.xlsx",
        ...     file_size=5120,
        ...     generated_time=datetime(2024, 1, 15, 10, 30),
        ...     submitter="alice",
        ...     description="sales",
        ... )
        >>> artifact.storage_container
        'reports'
    """

    file_id: str = Field(..., min_length=1, description="Unique artifact id")

    file_location: str = Field(..., description="Storage location: {bucket}/{file_id}")

    file_name: str = Field(..., description="Display file name")

    file_size: int = Field(..., ge=0, description="Size of stored bytes")

    generated_time: datetime = Field(..., description="Generation timestamp")

    submitter: str = Field(default="", description="Identity of the requester")

    description: str = Field(default="", description="Report description")

    model_config = {"frozen": True}

    @staticmethod
    def build_location(bucket: str, file_id: str) -> str:
        """
        Derive storage location from bucket name and artifact id.

        Examples:
            >>> GeneratedArtifact.build_location("reports", "abc")
            'reports/abc'
        """
        return "/".join([bucket, file_id])

    @property
    def storage_container(self) -> str:
        """Bucket part of file_location."""
        return self.file_location.rsplit("/", 1)[0]

    def to_json(self) -> str:
        """Serialize record for storage."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str) -> "GeneratedArtifact":
        """Rebuild record from to_json() output."""
        return cls.model_validate_json(data)
