"""Tests for storage adapters."""

import pytest

from todo_lingo.storage import (
    FileStorage,
    MemoryStorage,
    Storage,
    StorageError,
    StorageQuotaExceeded,
)
from todo_lingo.storage._utils import atomic_write_text, sanitize_filename


class TestMemoryStorage:
    """Tests for MemoryStorage."""

    def test_is_a_storage(self):
        assert isinstance(MemoryStorage(), Storage)

    def test_get_set_remove(self):
        storage = MemoryStorage()
        assert storage.get("todos") is None

        storage.set("todos", "[]")
        assert storage.get("todos") == "[]"

        storage.remove("todos")
        assert storage.get("todos") is None

    def test_remove_missing_key(self):
        MemoryStorage().remove("nothing")

    def test_initial_data_is_copied(self):
        initial = {"a": "1"}
        storage = MemoryStorage(initial)
        storage.set("b", "2")
        assert initial == {"a": "1"}

    def test_records_writes(self):
        storage = MemoryStorage()
        storage.set("a", "1")
        storage.set("a", "2")
        assert storage.writes == ["a", "a"]

    def test_quota_exceeded(self):
        storage = MemoryStorage(quota=10)
        storage.set("k", "12345")

        with pytest.raises(StorageQuotaExceeded) as exc_info:
            storage.set("other", "12345")

        assert exc_info.value.key == "other"
        assert isinstance(exc_info.value, StorageError)
        assert storage.get("other") is None

    def test_quota_counts_replaced_value_once(self):
        storage = MemoryStorage(quota=10)
        storage.set("k", "123456789")
        storage.set("k", "987654321")
        assert storage.get("k") == "987654321"
        assert storage.size() == 10


class TestFileStorage:
    """Tests for FileStorage."""

    def test_is_a_storage(self, tmp_path):
        assert isinstance(FileStorage(tmp_path), Storage)

    def test_get_missing(self, tmp_path):
        assert FileStorage(tmp_path / "storage").get("todos") is None

    def test_set_creates_directory_and_file(self, tmp_path):
        storage = FileStorage(tmp_path / "storage")
        storage.set("todos", "[]")

        assert storage.path_for("todos") == tmp_path / "storage" / "todos.json"
        assert storage.path_for("todos").read_text() == "[]"
        assert storage.get("todos") == "[]"

    def test_values_survive_new_instance(self, tmp_path):
        FileStorage(tmp_path).set("translationCache", "{\"a\": 1}")
        assert FileStorage(tmp_path).get("translationCache") == "{\"a\": 1}"

    def test_unicode_values(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.set("todos", "[\"买牛奶\", \"Überweisung\"]")
        assert storage.get("todos") == "[\"买牛奶\", \"Überweisung\"]"

    def test_remove(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.set("todos", "[]")
        storage.remove("todos")
        assert storage.get("todos") is None
        storage.remove("todos")

    def test_no_temp_file_left_behind(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.set("todos", "[]")
        assert [p.name for p in tmp_path.iterdir()] == ["todos.json"]

    def test_write_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        storage = FileStorage(blocker / "storage")

        with pytest.raises(StorageError) as exc_info:
            storage.set("todos", "[]")
        assert exc_info.value.key == "todos"

    def test_read_failure_raises_storage_error(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.path_for("todos").mkdir()

        with pytest.raises(StorageError):
            storage.get("todos")


class TestUtils:
    """Tests for storage helpers."""

    def test_sanitize_filename(self):
        assert sanitize_filename("translationCache") == "translationCache"
        assert sanitize_filename("../etc/passwd") == "___etc_passwd"

    def test_atomic_write_text(self, tmp_path):
        path = tmp_path / "nested" / "value.json"
        atomic_write_text(path, "hello")
        assert path.read_text() == "hello"
        assert not path.with_suffix(".json.tmp").exists()
