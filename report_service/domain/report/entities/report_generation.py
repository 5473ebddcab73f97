"""
ReportGeneration Entity.

Tracks one generate call through its linear lifecycle so every step
and its exact failure point can be tested on its own.

State progression:
    ALLOCATED -> STORED -> RECORDED

    ALLOCATED: id assigned, nothing written anywhere
    STORED:    bytes uploaded to the object store, no metadata record yet
    RECORDED:  metadata record saved, artifact visible to list/fetch/delete
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from report_service.domain.report.entities.generated_artifact import GeneratedArtifact
from report_service.domain.report.value_objects.report_request import ReportRequest
from report_service.domain.shared.exceptions import InvalidGenerationTransitionError


class GenerationState(str, Enum):
    """
    Lifecycle states of a single report generation.

    States:
        ALLOCATED: Id allocated, no side effects yet
        STORED: Artifact bytes uploaded (orphan if the process stops here)
        RECORDED: Metadata record saved
    """

    ALLOCATED = "allocated"
    STORED = "stored"
    RECORDED = "recorded"


@dataclass
class ReportGeneration:
    """
    Mutable entity following one report through allocate -> store -> record.

    Attributes:
        file_id: Allocated artifact id (uuid4 string, never changes)
        description: Report description from the request
        submitter: Requester identity
        state: Current lifecycle state
        file_location: Storage location (set when STORED)
        file_name: Display file name (set when STORED)
        file_size: Stored size in bytes (set when STORED)
        generated_time: Generation timestamp (set when STORED)

    Examples:
        >>> generation = ReportGeneration.allocate(request)
        >>> generation.state
        <GenerationState.ALLOCATED: 'allocated'>
        >>> generation.mark_stored("reports/abc", "sales.xlsx", 5120)
        >>> generation.mark_recorded()
        >>> generation.to_artifact().file_size
        5120
    """

    file_id: str = field(default_factory=lambda: str(uuid4()))
    description: str = ""
    submitter: str = ""

    state: GenerationState = GenerationState.ALLOCATED

    file_location: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    generated_time: Optional[datetime] = None

    @classmethod
    def allocate(cls, request: ReportRequest) -> "ReportGeneration":
        """
        Allocate a fresh id for a request.

        The id is assigned before any other step so failures later in the
        pipeline can be reported under it.
        """
        return cls(description=request.description, submitter=request.submitter)

    def mark_stored(
        self,
        file_location: str,
        file_name: str,
        file_size: int,
        generated_time: Optional[datetime] = None,
    ) -> None:
        """
        Record that the artifact bytes were uploaded.

        Raises:
            InvalidGenerationTransitionError: If state is not ALLOCATED
            ValueError: If file_size is negative
        """
        self._require(GenerationState.ALLOCATED, GenerationState.STORED)
        if file_size < 0:
            raise ValueError(f"file_size cannot be negative, got {file_size}")

        self.file_location = file_location
        self.file_name = file_name
        self.file_size = file_size
        self.generated_time = generated_time or datetime.now(timezone.utc)
        self.state = GenerationState.STORED

    def mark_recorded(self) -> None:
        """
        Record that the metadata record was saved.

        Raises:
            InvalidGenerationTransitionError: If state is not STORED
        """
        self._require(GenerationState.STORED, GenerationState.RECORDED)
        self.state = GenerationState.RECORDED

    def to_artifact(self) -> GeneratedArtifact:
        """
        Build the metadata record for this generation.

        Valid once the bytes are stored (STORED or RECORDED).

        Raises:
            InvalidGenerationTransitionError: If called in ALLOCATED state
        """
        if self.state == GenerationState.ALLOCATED:
            raise InvalidGenerationTransitionError(
                self.state.value, "artifact (requires stored bytes)"
            )
        return GeneratedArtifact(
            file_id=self.file_id,
            file_location=self.file_location,
            file_name=self.file_name,
            file_size=self.file_size,
            generated_time=self.generated_time,
            submitter=self.submitter,
            description=self.description,
        )

    def _require(self, expected: GenerationState, target: GenerationState) -> None:
        if self.state != expected:
            raise InvalidGenerationTransitionError(self.state.value, target.value)

    def __str__(self) -> str:
        return f"ReportGeneration({self.file_id}) [{self.state.value}]"
