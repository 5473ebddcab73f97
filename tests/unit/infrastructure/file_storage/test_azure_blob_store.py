"""
Tests for AzureBlobObjectStore.

Covers:
- Upload options, blob naming and prefix
- Container created on first upload when missing
- Download stream and not-found mapping
- Delete (present / already absent)
- azure-core errors mapped to ObjectStoreError
"""

from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import (
    HttpResponseError,
    ResourceExistsError,
    ResourceNotFoundError,
    ServiceRequestError,
)
from azure.storage.blob import (
    BlobClient,
    BlobServiceClient,
    ContainerClient,
    StorageStreamDownloader,
)

from report_service.application.ports.object_store import (
    ObjectNotFoundError,
    ObjectStoreError,
)
from report_service.application.services.report_service import ArtifactStream
from report_service.infrastructure.file_storage.azure_blob_store import (
    AzureBlobObjectStore,
    AzureBlobStoreConfig,
)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def blob():
    return MagicMock(spec=BlobClient)


@pytest.fixture
def container_client():
    return MagicMock(spec=ContainerClient)


@pytest.fixture
def service(blob, container_client):
    client = MagicMock(spec=BlobServiceClient)
    client.get_blob_client.return_value = blob
    client.get_container_client.return_value = container_client
    return client


def _config(prefix=""):
    return AzureBlobStoreConfig(
        account_url="https://example.blob.core.windows.net",
        connection_string=None,
        prefix=prefix,
        request_timeout_seconds=15,
        max_concurrency=2,
    )


@pytest.fixture
def store(service):
    return AzureBlobObjectStore(config=_config(), service_client=service)


# ============================================================================
# put()
# ============================================================================


def test_put_uploads_with_overwrite(store, service, blob):
    store.put("reports", "abc-123", b"PK\x03\x04")

    service.get_blob_client.assert_called_once_with(container="reports", blob="abc-123")
    blob.upload_blob.assert_called_once_with(
        b"PK\x03\x04", overwrite=True, max_concurrency=2, timeout=15
    )


def test_put_applies_prefix(service, blob):
    store = AzureBlobObjectStore(config=_config(prefix="artifacts"), service_client=service)

    store.put("reports", "abc-123", b"data")

    service.get_blob_client.assert_called_once_with(
        container="reports", blob="artifacts/abc-123"
    )


def test_put_creates_missing_container_and_retries(store, blob, container_client):
    blob.upload_blob.side_effect = [ResourceNotFoundError("ContainerNotFound"), {}]

    store.put("reports", "abc-123", b"data")

    container_client.create_container.assert_called_once_with(timeout=15)
    assert blob.upload_blob.call_count == 2


def test_put_tolerates_container_created_concurrently(store, blob, container_client):
    blob.upload_blob.side_effect = [ResourceNotFoundError("ContainerNotFound"), {}]
    container_client.create_container.side_effect = ResourceExistsError("exists")

    store.put("reports", "abc-123", b"data")

    assert blob.upload_blob.call_count == 2


def test_put_http_error_raises_object_store_error(store, blob):
    blob.upload_blob.side_effect = HttpResponseError("Server busy")

    with pytest.raises(ObjectStoreError) as exc_info:
        store.put("reports", "abc-123", b"data")

    assert exc_info.value.container == "reports"
    assert exc_info.value.key == "abc-123"


def test_put_connection_error_raises_object_store_error(store, blob):
    blob.upload_blob.side_effect = ServiceRequestError("Connection refused")

    with pytest.raises(ObjectStoreError, match="Failed to upload blob"):
        store.put("reports", "abc-123", b"data")


# ============================================================================
# get()
# ============================================================================


def test_get_returns_readable_stream(store, blob):
    downloader = MagicMock(spec=StorageStreamDownloader)
    downloader.read.side_effect = [b"PK", b"\x03\x04", b""]
    blob.download_blob.return_value = downloader

    body = store.get("reports", "abc-123")

    blob.download_blob.assert_called_once_with(max_concurrency=2, timeout=15)
    assert body.read(2) == b"PK"
    assert body.read(2) == b"\x03\x04"
    assert body.read(2) == b""


def test_get_streams_through_artifact_stream(store, blob, make_artifact):
    downloader = MagicMock(spec=StorageStreamDownloader)
    downloader.read.side_effect = [b"PK", b"\x03\x04", b""]
    blob.download_blob.return_value = downloader

    stream = ArtifactStream(make_artifact(), store.get("reports", "abc-123"))

    assert b"".join(stream.iter_chunks()) == b"PK\x03\x04"
    assert stream.body.closed is True


def test_get_missing_blob_raises_not_found(store, blob):
    blob.download_blob.side_effect = ResourceNotFoundError("BlobNotFound")

    with pytest.raises(ObjectNotFoundError):
        store.get("reports", "abc-123")


def test_get_service_error_raises_object_store_error(store, blob):
    blob.download_blob.side_effect = HttpResponseError("Server busy")

    with pytest.raises(ObjectStoreError) as exc_info:
        store.get("reports", "abc-123")

    assert not isinstance(exc_info.value, ObjectNotFoundError)


def test_read_error_after_download_started(store, blob):
    downloader = MagicMock(spec=StorageStreamDownloader)
    downloader.read.side_effect = ServiceRequestError("Connection reset")
    blob.download_blob.return_value = downloader

    body = store.get("reports", "abc-123")

    with pytest.raises(ObjectStoreError, match="Failed to read blob"):
        body.read(1024)


def test_read_after_close_fails(store, blob):
    blob.download_blob.return_value = MagicMock(spec=StorageStreamDownloader)
    body = store.get("reports", "abc-123")
    body.close()

    with pytest.raises(ValueError):
        body.read()


# ============================================================================
# delete()
# ============================================================================


def test_delete_existing_blob(store, blob):
    assert store.delete("reports", "abc-123") is True
    blob.delete_blob.assert_called_once_with(timeout=15)


def test_delete_missing_blob_returns_false(store, blob):
    blob.delete_blob.side_effect = ResourceNotFoundError("BlobNotFound")

    assert store.delete("reports", "abc-123") is False


def test_delete_service_error_raises_object_store_error(store, blob):
    blob.delete_blob.side_effect = HttpResponseError("Forbidden")

    with pytest.raises(ObjectStoreError, match="Failed to delete blob"):
        store.delete("reports", "abc-123")


# ============================================================================
# CONFIGURATION
# ============================================================================


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("AZURE_STORAGE_ACCOUNT_URL", "https://acct.blob.core.windows.net")
    monkeypatch.delenv("AZURE_STORAGE_CONNECTION_STRING", raising=False)
    monkeypatch.setenv("BLOB_PREFIX", "/artifacts/")
    monkeypatch.setenv("BLOB_REQUEST_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("BLOB_MAX_CONCURRENCY", "8")

    config = AzureBlobStoreConfig.from_env()

    assert config.account_url == "https://acct.blob.core.windows.net"
    assert config.connection_string is None
    assert config.prefix == "artifacts"
    assert config.request_timeout_seconds == 5.0
    assert config.max_concurrency == 8
