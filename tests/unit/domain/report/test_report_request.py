"""
Tests for ReportRequest Value Object.
Covers: mode validation, factory methods, immutability.
"""

import pytest
from pydantic import ValidationError

from report_service.domain.report.value_objects.report_request import ReportRequest


def test_single_sheet_factory(sample_headers, sample_rows):
    """Test single_sheet() builds a non-partitioned request."""
    request = ReportRequest.single_sheet(
        sample_headers, sample_rows, description="Sales", submitter="alice"
    )

    assert request.partitioned is False
    assert request.partition_key is None
    assert request.headers == ("region", "amount")
    assert request.rows == (("east", 10), ("west", 5), ("east", 3))
    assert request.description == "Sales"
    assert request.submitter == "alice"


def test_partitioned_by_factory(sample_headers, sample_rows):
    """Test partitioned_by() sets mode flag and key."""
    request = ReportRequest.partitioned_by("region", sample_headers, sample_rows)

    assert request.partitioned is True
    assert request.partition_key == "region"


def test_partitioned_without_key_is_rejected(sample_headers):
    """Test partitioned=True requires a partition key."""
    with pytest.raises(ValidationError, match="partition_key is required"):
        ReportRequest(headers=sample_headers, partitioned=True)


def test_partitioned_with_empty_key_is_rejected(sample_headers):
    with pytest.raises(ValidationError):
        ReportRequest(headers=sample_headers, partitioned=True, partition_key="")


def test_partition_key_without_partitioned_flag_is_rejected(sample_headers):
    """Test a key is not silently ignored in single-sheet mode."""
    with pytest.raises(ValidationError, match="only allowed"):
        ReportRequest(headers=sample_headers, partition_key="region")


def test_headers_must_not_be_empty():
    with pytest.raises(ValidationError):
        ReportRequest(headers=[])


def test_rows_default_to_empty(sample_headers):
    assert ReportRequest(headers=sample_headers).rows == ()


def test_request_is_immutable(single_sheet_request):
    """Test frozen model rejects attribute assignment."""
    with pytest.raises(ValidationError):
        single_sheet_request.description = "changed"
