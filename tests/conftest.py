"""
Pytest Configuration and Shared Fixtures

Shared fixtures used across unit and integration suites.

Fixtures:
    - sample_headers / sample_rows: The region/amount example data
    - single_sheet_request / partitioned_request: ReportRequest for each mode
    - make_artifact: Factory for GeneratedArtifact records
    - object_store: LocalObjectStore rooted in tmp_path
    - artifact_repository: Empty InMemoryArtifactRepository
    - report_service: ReportService wired with real collaborators

Usage:
    def test_something(report_service, single_sheet_request):
        ...
"""

import logging
from datetime import datetime, timezone

import pytest

from report_service.application.services.report_service import ReportService
from report_service.domain.report.entities.generated_artifact import GeneratedArtifact
from report_service.domain.report.value_objects.report_request import ReportRequest
from report_service.infrastructure.file_storage.excel_writer import ExcelWriterService
from report_service.infrastructure.file_storage.object_store import LocalObjectStore
from report_service.infrastructure.persistence.repositories import (
    InMemoryArtifactRepository,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


# ============================================================================
# SAMPLE DATA
# ============================================================================


@pytest.fixture
def sample_headers():
    return ["region", "amount"]


@pytest.fixture
def sample_rows():
    return [["east", 10], ["west", 5], ["east", 3]]


@pytest.fixture
def single_sheet_request(sample_headers, sample_rows):
    return ReportRequest.single_sheet(
        headers=sample_headers,
        rows=sample_rows,
        description="Sales by region",
        submitter="alice",
    )


@pytest.fixture
def partitioned_request(sample_headers, sample_rows):
    return ReportRequest.partitioned_by(
        "region",
        headers=sample_headers,
        rows=sample_rows,
        description="Sales by region",
        submitter="alice",
    )


@pytest.fixture
def make_artifact():
    """Factory building GeneratedArtifact records with sensible defaults."""

    def _make(file_id="3fa85f64-5717-4562-b3fc-2c963f66afa6", **overrides):
        values = {
            "file_id": file_id,
            "file_location": f"reports/{file_id}",
            "file_name": "Sales by region.xlsx",
            "file_size": 5120,
            "generated_time": datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
            "submitter": "alice",
            "description": "Sales by region",
        }
        values.update(overrides)
        return GeneratedArtifact(**values)

    return _make


# ============================================================================
# COLLABORATORS
# ============================================================================


@pytest.fixture
def object_store(tmp_path):
    return LocalObjectStore(base_dir=str(tmp_path / "storage"))


@pytest.fixture
def artifact_repository():
    return InMemoryArtifactRepository()


@pytest.fixture
def report_service(object_store, artifact_repository):
    return ReportService(
        renderer=ExcelWriterService(),
        object_store=object_store,
        repository=artifact_repository,
        bucket="reports",
        render_timeout=10,
        upload_timeout=10,
    )
