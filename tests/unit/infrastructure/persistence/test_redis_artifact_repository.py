"""
Tests for RedisArtifactRepository.

Redis client is a MagicMock; tests check the commands issued and the
decoding of stored JSON.
"""

from unittest.mock import MagicMock, patch

import pytest
from redis import Redis
from redis.exceptions import RedisError

from report_service.infrastructure.persistence.repositories import (
    RedisArtifactRepository,
)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def mock_pipeline():
    pipeline = MagicMock()
    pipeline.execute.return_value = [True, 1]
    return pipeline


@pytest.fixture
def mock_redis(mock_pipeline):
    client = MagicMock(spec=Redis)
    client.pipeline.return_value = mock_pipeline
    return client


@pytest.fixture
def repository(mock_redis):
    return RedisArtifactRepository(client=mock_redis)


# ============================================================================
# TESTS
# ============================================================================


def test_key_format(repository):
    assert repository._get_key("abc-123") == "report:artifact:abc-123"


def test_save_writes_record_and_index_in_one_pipeline(
    repository, mock_pipeline, make_artifact
):
    artifact = make_artifact(file_id="abc")

    repository.save(artifact)

    mock_pipeline.set.assert_called_once_with("report:artifact:abc", artifact.to_json())
    mock_pipeline.zadd.assert_called_once_with(
        "report:artifacts", {"abc": artifact.generated_time.timestamp()}
    )
    mock_pipeline.execute.assert_called_once()


def test_find_by_id_decodes_json(repository, mock_redis, make_artifact):
    artifact = make_artifact(file_id="abc")
    mock_redis.get.return_value = artifact.to_json()

    assert repository.find_by_id("abc") == artifact
    mock_redis.get.assert_called_once_with("report:artifact:abc")


def test_find_by_id_missing(repository, mock_redis):
    mock_redis.get.return_value = None

    assert repository.find_by_id("abc") is None


def test_list_all_follows_index_order(repository, mock_redis, make_artifact):
    first = make_artifact(file_id="a")
    second = make_artifact(file_id="b")
    mock_redis.zrange.return_value = ["a", "b"]
    mock_redis.mget.return_value = [first.to_json(), second.to_json()]

    assert repository.list_all() == [first, second]
    mock_redis.zrange.assert_called_once_with("report:artifacts", 0, -1)
    mock_redis.mget.assert_called_once_with(["report:artifact:a", "report:artifact:b"])


def test_list_all_skips_index_entries_without_record(
    repository, mock_redis, make_artifact
):
    record = make_artifact(file_id="b")
    mock_redis.zrange.return_value = ["a", "b"]
    mock_redis.mget.return_value = [None, record.to_json()]

    assert repository.list_all() == [record]


def test_list_all_empty_index(repository, mock_redis):
    mock_redis.zrange.return_value = []

    assert repository.list_all() == []
    mock_redis.mget.assert_not_called()


def test_delete_by_id_removes_record_and_index(
    repository, mock_pipeline, make_artifact
):
    artifact = make_artifact(file_id="abc")
    mock_pipeline.execute.return_value = [artifact.to_json(), 1]

    assert repository.delete_by_id("abc") == artifact
    mock_pipeline.getdel.assert_called_once_with("report:artifact:abc")
    mock_pipeline.zrem.assert_called_once_with("report:artifacts", "abc")


def test_delete_by_id_missing(repository, mock_pipeline):
    mock_pipeline.execute.return_value = [None, 0]

    assert repository.delete_by_id("abc") is None


def test_redis_errors_propagate(repository, mock_redis):
    mock_redis.get.side_effect = RedisError("connection lost")

    with pytest.raises(RedisError):
        repository.find_by_id("abc")


def test_default_client_comes_from_pool():
    with patch(
        "report_service.infrastructure.persistence.repositories."
        "redis_artifact_repository.get_redis_client"
    ) as get_client:
        repository = RedisArtifactRepository()

    assert repository.redis is get_client.return_value
    get_client.assert_called_once_with(verify_connection=False)
