"""
ReportRequest Value Object

Describes what the caller wants in a report: title, submitter, columns,
rows and, for the partitioned mode, which column splits rows into sheets.

Architecture Notes:
    - Value Object (immutable pydantic model, frozen)
    - Single request type with an explicit mode flag (no request subclasses)
    - Structural checks happen here; header membership of the partition key
      and row shapes are resolved by SheetBuilder
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ReportRequest(BaseModel):
    """
    Immutable request for one generated report.

    Attributes:
        description: Report title / description (stored in the metadata record)
        submitter: Identity of the requester
        headers: Column names in display order
        rows: Data rows, each positionally aligned to headers
        partitioned: True to split rows into one sheet per partition value
        partition_key: Header whose value selects the sheet (partitioned mode only)

    Business Rules:
        - partitioned=True requires a non-empty partition_key
        - partition_key is rejected when partitioned=False

    Examples:
        >>> request = ReportRequest(
        ...     description="Sales by region",
        ...     submitter="alice",
        ...     headers=["region", "amount"],
        ...     rows=[["east", 10], ["west", 5], ["east", 3]],
        ...     partitioned=True,
        ...     partition_key="region",
        ... )
        >>> request.headers
        ('region', 'amount')
    """

    description: str = Field(default="", description="Report title / description")

    submitter: str = Field(default="", description="Identity of the requester")

    headers: tuple[str, ...] = Field(
        ..., min_length=1, description="Column names in display order"
    )

    rows: tuple[tuple[Any, ...], ...] = Field(
        default_factory=tuple, description="Data rows aligned to headers"
    )

    partitioned: bool = Field(
        default=False, description="Split rows into one sheet per partition value"
    )

    partition_key: str | None = Field(
        default=None, description="Header used as partition key (partitioned mode)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_mode(self) -> "ReportRequest":
        if self.partitioned and not self.partition_key:
            raise ValueError("partition_key is required when partitioned=True")
        if not self.partitioned and self.partition_key is not None:
            raise ValueError("partition_key is only allowed when partitioned=True")
        return self

    @classmethod
    def single_sheet(
        cls,
        headers: list[str],
        rows: list[list[Any]],
        description: str = "",
        submitter: str = "",
    ) -> "ReportRequest":
        """Build a request that produces exactly one sheet."""
        return cls(
            description=description,
            submitter=submitter,
            headers=headers,
            rows=rows,
        )

    @classmethod
    def partitioned_by(
        cls,
        partition_key: str,
        headers: list[str],
        rows: list[list[Any]],
        description: str = "",
        submitter: str = "",
    ) -> "ReportRequest":
        """Build a request that produces one sheet per value of partition_key."""
        return cls(
            description=description,
            submitter=submitter,
            headers=headers,
            rows=rows,
            partitioned=True,
            partition_key=partition_key,
        )
