import json
import os

from app.utils.persistent_store import FileLock, JsonStateStore


def test_missing_document_loads_empty(tmp_path):
    store = JsonStateStore("vatika-plants-storage", directory=str(tmp_path))

    assert store.path.endswith("vatika-plants-storage.json")
    assert store.load() == {}


def test_save_then_load(tmp_path):
    store = JsonStateStore("state", directory=str(tmp_path))
    store.save({"state": {"bookmarkedPlants": ["neem"]}, "version": 0})

    assert store.load() == {"state": {"bookmarkedPlants": ["neem"]}, "version": 0}
    assert not os.path.exists(store.path + ".tmp")
    assert not os.path.exists(store.path + ".lock")


def test_creates_missing_directory(tmp_path):
    directory = tmp_path / "nested" / "state"
    JsonStateStore("state", directory=str(directory))
    assert directory.is_dir()


def test_corrupt_or_non_object_documents_load_empty(tmp_path):
    store = JsonStateStore("state", directory=str(tmp_path))

    with open(store.path, "w", encoding="utf-8") as fh:
        fh.write("{not json")
    assert store.load() == {}

    with open(store.path, "w", encoding="utf-8") as fh:
        json.dump(["a", "b"], fh)
    assert store.load() == {}


def test_clear_removes_document(tmp_path):
    store = JsonStateStore("state", directory=str(tmp_path))
    store.save({"a": 1})
    store.clear()
    store.clear()

    assert store.load() == {}


def test_file_lock_times_out_when_held(tmp_path):
    path = str(tmp_path / "doc.lock")
    holder = FileLock(path)
    assert holder.acquire()
    try:
        assert FileLock(path, timeout=0.05, retry=0.01).acquire() is False
    finally:
        holder.release()

    assert not os.path.exists(path)
