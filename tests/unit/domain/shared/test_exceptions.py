"""
Tests for the domain exception taxonomy.
"""

import pytest

from report_service.domain.shared.exceptions import (
    ArtifactGenerationFailedError,
    ArtifactNotFoundError,
    DomainException,
    InvalidGenerationTransitionError,
    InvalidPartitionKeyError,
    MetadataUnavailableError,
    OrphanedArtifactError,
    RowShapeMismatchError,
    StorageUnavailableError,
)


@pytest.mark.parametrize(
    "exc",
    [
        InvalidPartitionKeyError("bad key"),
        RowShapeMismatchError(row_index=0, expected=2, actual=1),
        ArtifactGenerationFailedError("render failed"),
        StorageUnavailableError("store down"),
        ArtifactNotFoundError("abc"),
        MetadataUnavailableError("repo down"),
        OrphanedArtifactError("abc", "reports/abc"),
        InvalidGenerationTransitionError("allocated", "recorded"),
    ],
)
def test_all_failure_kinds_are_domain_exceptions(exc):
    assert isinstance(exc, DomainException)


def test_str_includes_class_name():
    assert str(ArtifactNotFoundError("abc")) == (
        "ArtifactNotFoundError: Artifact with ID abc not found"
    )


def test_invalid_partition_key_lists_available_headers():
    exc = InvalidPartitionKeyError(
        "Partition key 'country' not found in headers",
        partition_key="country",
        available_headers=["region", "amount"],
    )

    assert "Available headers: region, amount" in exc.message
    assert exc.partition_key == "country"


def test_row_shape_mismatch_message():
    exc = RowShapeMismatchError(row_index=3, expected=2, actual=5)

    assert exc.message == "Row 3 has 5 values, expected 2 (one per header)"


def test_generation_failed_includes_original_error():
    exc = ArtifactGenerationFailedError(
        "Rendering failed", file_id="abc", original_error=TypeError("bad cell")
    )

    assert "File: abc" in exc.message
    assert "Original error: TypeError: bad cell" in exc.message
    assert exc.file_id == "abc"


def test_storage_unavailable_records_operation():
    exc = StorageUnavailableError("Upload failed", file_id="abc", operation="put")

    assert exc.operation == "put"
    assert "Operation: put" in exc.message


def test_orphaned_artifact_is_metadata_unavailable():
    exc = OrphanedArtifactError("abc", "reports/abc", original_error=OSError("x"))

    assert isinstance(exc, MetadataUnavailableError)
    assert exc.storage_key == "reports/abc"
    assert exc.file_id == "abc"
    assert "reports/abc" in exc.message
