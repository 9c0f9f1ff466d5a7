import json
import os

import pytest

from errors import PersistenceFailure
from local_store import LocalCollection, LocalHistoryStore


def test_missing_file_is_empty(store):
    assert store.collection("gym-journal").list() == []


def test_append_list_remove(store):
    col = store.collection("gym-journal")
    col.append({"id": "a", "n": 1})
    col.append({"id": "b", "n": 2})
    col.append({"id": "c", "n": 3})

    assert [item["id"] for item in col.list()] == ["a", "b", "c"]
    assert col.remove("b") is True
    assert col.remove("b") is False
    assert [item["id"] for item in col.list()] == ["a", "c"]


def test_persisted_as_one_json_file(tmp_path):
    store = LocalHistoryStore(str(tmp_path), "user-1")
    store.collection("gym-schedules").append({"id": "a"})

    path = tmp_path / "user-1" / "gym-schedules.json"
    assert json.loads(path.read_text()) == [{"id": "a"}]
    assert [p.name for p in (tmp_path / "user-1").iterdir()] == ["gym-schedules.json"]


def test_users_are_partitioned(tmp_path):
    LocalHistoryStore(str(tmp_path), "alice").collection("gym-journal").append({"id": "a"})
    assert LocalHistoryStore(str(tmp_path), "bob").collection("gym-journal").list() == []


def test_update_merges_and_keeps_id(store):
    col = store.collection("gym-schedules")
    col.append({"id": "a", "completed": False, "title": "Legs"})

    updated = col.update("a", {"completed": True, "id": "other"})
    assert updated == {"id": "a", "completed": True, "title": "Legs"}
    assert col.get("a") == updated
    assert col.update("missing", {"completed": True}) is None


def test_append_requires_id(store):
    with pytest.raises(ValueError):
        store.collection("gym-journal").append({"n": 1})


def test_replace_all(store):
    col = store.collection("gym-journal")
    col.append({"id": "a"})
    col.replace_all([{"id": "z"}])
    assert col.list() == [{"id": "z"}]


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(PersistenceFailure):
        LocalCollection(str(path)).list()


def test_non_list_file_raises(tmp_path):
    path = tmp_path / "object.json"
    path.write_text('{"id": "a"}')
    with pytest.raises(PersistenceFailure):
        LocalCollection(str(path)).list()


def test_unwritable_location_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    with pytest.raises(PersistenceFailure):
        LocalCollection(os.path.join(str(blocker), "col.json")).append({"id": "a"})


def test_names_cannot_escape_base_dir(tmp_path):
    store = LocalHistoryStore(str(tmp_path / "base"), "../evil")
    col = store.collection("../../gym-journal")
    assert os.path.abspath(col.path).startswith(os.path.abspath(str(tmp_path / "base")))
    with pytest.raises(ValueError):
        LocalHistoryStore(str(tmp_path), "..").collection("gym-journal")


@pytest.mark.parametrize("other", ["jane_doe", "jane@doe", "jane%20doe", "jane+doe"])
def test_similar_user_ids_do_not_share_files(tmp_path, other):
    LocalHistoryStore(str(tmp_path), "jane doe").collection("gym-journal").append({"id": "secret"})
    assert LocalHistoryStore(str(tmp_path), other).collection("gym-journal").list() == []


def test_circular_item_leaves_no_temp_file(store):
    col = store.collection("gym-journal")
    col.append({"id": "a"})
    item = {"id": "b"}
    item["self"] = item

    with pytest.raises(PersistenceFailure):
        col.append(item)
    directory = os.path.dirname(col.path)
    assert os.listdir(directory) == ["gym-journal.json"]
    assert col.list() == [{"id": "a"}]


def test_failed_replace_leaves_no_temp_file(store, monkeypatch):
    col = store.collection("gym-schedules")
    col.append({"id": "a"})

    def broken_replace(src, dst):
        raise OSError("disk full")

    with monkeypatch.context() as m:
        m.setattr(os, "replace", broken_replace)
        with pytest.raises(PersistenceFailure):
            col.append({"id": "b"})

    assert os.listdir(os.path.dirname(col.path)) == ["gym-schedules.json"]
    assert col.list() == [{"id": "a"}]
