import sqlite3
from pathlib import Path

import pytest

from application.ports import StartupError, StorageError
from core import FormValues
from infrastructure.sqlite_repository import SqliteProgressRepository


def _values(topic="Cardio", name="Run", recurring=False, percentage=0, finished=0, day_limit=0) -> FormValues:
    return FormValues(topic, name, recurring, percentage, finished, day_limit)


@pytest.fixture
def repo(tmp_path: Path):
    repository = SqliteProgressRepository.initialize(tmp_path / "data" / "fit.db")
    yield repository
    repository.close()


def test_roundtrip_preserves_submitted_values(repo):
    item_id = repo.create_topic_and_item(_values(name="Row", recurring=True, percentage=35, finished=4, day_limit=12))
    (loaded,) = repo.list_items("Cardio")
    assert loaded.id == item_id
    assert (loaded.name, loaded.topic, loaded.is_recurring, loaded.day_limit) == ("Row", "Cardio", True, 12)
    assert (loaded.percentage, loaded.times_finished) == (35, 4)
    assert loaded.created


def test_create_reuses_existing_topic(repo):
    repo.create_topic_and_item(_values(name="Run"))
    repo.create_topic_and_item(_values(name="Run"))
    repo.create_topic_and_item(_values(topic="Strength", name="Squat"))
    assert [t.name for t in repo.list_topics()] == ["Cardio", "Strength"]
    assert repo.count_items("Cardio") == 2
    assert [i.name for i in repo.list_items("Cardio")] == ["Run", "Run"]


def test_update_progress(repo):
    item_id = repo.create_topic_and_item(_values())
    repo.update_item_progress(item_id, 100, 1)
    (loaded,) = repo.list_items("Cardio")
    assert (loaded.percentage, loaded.times_finished) == (100, 1)


def test_update_missing_item_raises(repo):
    with pytest.raises(StorageError):
        repo.update_item_progress(404, 10, 0)


def test_percentage_out_of_range_is_rejected(repo):
    item_id = repo.create_topic_and_item(_values())
    with pytest.raises(StorageError):
        repo.update_item_progress(item_id, 101, 0)
    assert repo.list_items("Cardio")[0].percentage == 0


def test_oversized_integer_rolls_back_create(repo):
    with pytest.raises(StorageError):
        repo.create_topic_and_item(_values(day_limit=10**30))
    assert repo.list_topics() == []
    repo.create_topic_and_item(_values(name="Row"))
    assert [i.name for i in repo.list_items("Cardio")] == ["Row"]


def test_oversized_count_on_update_raises_storage_error(repo):
    item_id = repo.create_topic_and_item(_values(recurring=True))
    with pytest.raises(StorageError):
        repo.update_item_progress(item_id, 0, 10**30)
    assert repo.list_items("Cardio")[0].times_finished == 0


def test_delete_item(repo):
    keep = repo.create_topic_and_item(_values(name="Run"))
    drop = repo.create_topic_and_item(_values(name="Row"))
    repo.delete_item(drop)
    assert [i.id for i in repo.list_items("Cardio")] == [keep]


def test_delete_topic_cascades_to_items(repo):
    repo.create_topic_and_item(_values(name="Run"))
    repo.create_topic_and_item(_values(name="Row"))
    other = repo.create_topic_and_item(_values(topic="Strength", name="Squat"))
    repo.delete_topic("Cardio")
    assert [t.name for t in repo.list_topics()] == ["Strength"]
    assert repo.count_items("Cardio") == 0
    rows = repo.conn.execute("SELECT id FROM items").fetchall()
    assert [r["id"] for r in rows] == [other]


def test_names_are_stored_verbatim(repo):
    tricky = "Robert'); DROP TABLE items;--"
    repo.create_topic_and_item(_values(topic=tricky, name=tricky))
    assert repo.list_items(tricky)[0].name == tricky


def test_initialize_is_idempotent(tmp_path: Path):
    path = tmp_path / "fit.db"
    first = SqliteProgressRepository.initialize(path)
    first.create_topic_and_item(_values())
    first.close()
    second = SqliteProgressRepository.initialize(path)
    assert second.count_items("Cardio") == 1
    second.close()


def test_open_missing_file_refuses_to_start(tmp_path: Path):
    path = tmp_path / "missing.db"
    with pytest.raises(StartupError) as exc:
        SqliteProgressRepository.open(path)
    assert "fitdb init" in str(exc.value)
    assert not path.exists()


def test_open_uninitialized_file_refuses_to_start(tmp_path: Path):
    path = tmp_path / "empty.db"
    sqlite3.connect(str(path)).close()
    with pytest.raises(StartupError) as exc:
        SqliteProgressRepository.open(path)
    assert "fitdb init" in str(exc.value)


def test_open_initialized_file(tmp_path: Path):
    path = tmp_path / "fit.db"
    SqliteProgressRepository.initialize(path).close()
    repo = SqliteProgressRepository.open(path)
    assert repo.list_topics() == []
    repo.close()


def test_closed_connection_raises_storage_error(tmp_path: Path):
    repo = SqliteProgressRepository.initialize(tmp_path / "fit.db")
    repo.close()
    with pytest.raises(StorageError):
        repo.list_topics()


def test_in_memory_repository():
    repo = SqliteProgressRepository.in_memory()
    repo.create_topic_and_item(_values())
    assert repo.count_items("Cardio") == 1
    repo.close()
