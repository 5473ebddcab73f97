"""
Tests for InMemoryArtifactRepository.
"""

import threading

from report_service.infrastructure.persistence.repositories import (
    InMemoryArtifactRepository,
)


def test_save_and_find(artifact_repository, make_artifact):
    artifact = make_artifact(file_id="abc")

    artifact_repository.save(artifact)

    assert artifact_repository.find_by_id("abc") == artifact


def test_find_unknown_returns_none(artifact_repository):
    assert artifact_repository.find_by_id("missing") is None


def test_list_all_in_insertion_order(artifact_repository, make_artifact):
    for file_id in ("c", "a", "b"):
        artifact_repository.save(make_artifact(file_id=file_id))

    assert [a.file_id for a in artifact_repository.list_all()] == ["c", "a", "b"]


def test_save_same_id_replaces_in_place(artifact_repository, make_artifact):
    artifact_repository.save(make_artifact(file_id="a"))
    artifact_repository.save(make_artifact(file_id="b"))
    artifact_repository.save(make_artifact(file_id="a", file_size=1))

    records = artifact_repository.list_all()
    assert [a.file_id for a in records] == ["a", "b"]
    assert records[0].file_size == 1


def test_delete_returns_removed_record(artifact_repository, make_artifact):
    artifact = make_artifact(file_id="abc")
    artifact_repository.save(artifact)

    assert artifact_repository.delete_by_id("abc") == artifact
    assert artifact_repository.find_by_id("abc") is None
    assert len(artifact_repository) == 0


def test_delete_unknown_returns_none(artifact_repository):
    assert artifact_repository.delete_by_id("missing") is None


def test_concurrent_saves_are_all_kept(make_artifact):
    repository = InMemoryArtifactRepository()

    threads = [
        threading.Thread(target=repository.save, args=(make_artifact(file_id=str(i)),))
        for i in range(50)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(repository) == 50
