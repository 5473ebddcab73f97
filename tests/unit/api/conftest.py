"""
Common fixtures for API unit tests.

Provides shared test utilities:
- FastAPI app with the ReportService dependency overridden
- TestClient bound to that app
- Request bodies for the /api/excel endpoints
"""

import pytest
from fastapi.testclient import TestClient

from report_service.api.dependencies import get_report_service
from report_service.api.main import create_app


@pytest.fixture
def app(report_service):
    """
    FastAPI app whose ReportService uses an in-memory repository and a
    tmp_path object store.
    """
    application = create_app()
    application.dependency_overrides[get_report_service] = lambda: report_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """FastAPI TestClient for testing endpoints."""
    return TestClient(app)


@pytest.fixture
def excel_body(sample_headers, sample_rows):
    return {
        "description": "Sales by region",
        "submitter": "alice",
        "headers": sample_headers,
        "data": sample_rows,
    }


@pytest.fixture
def multi_sheet_body(excel_body):
    return {**excel_body, "splitBy": "region"}
