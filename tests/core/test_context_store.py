# tests/core/test_context_store.py
"""Tests for context store protocol and implementations."""

import json
from pathlib import Path

import pytest

from sourcebit_sample.core.context_store import (
    ContextStore,
    FilesystemContextStore,
    InMemoryContextStore,
)


class TestContextStoreProtocol:
    """Test ContextStore protocol definition."""

    def test_protocol_has_required_methods(self) -> None:
        assert hasattr(ContextStore, "get")
        assert hasattr(ContextStore, "set")

    def test_implementations_satisfy_protocol(self, tmp_path: Path) -> None:
        assert isinstance(InMemoryContextStore(), ContextStore)
        assert isinstance(FilesystemContextStore(tmp_path / "c.json"), ContextStore)


class TestInMemoryContextStore:
    """Test process-local store."""

    def test_get_unknown_plugin_returns_none(self) -> None:
        assert InMemoryContextStore().get("sample") is None

    def test_set_then_get(self) -> None:
        store = InMemoryContextStore()
        store.set("sample", {"entries": [1, 2]})

        assert store.get("sample") == {"entries": [1, 2]}
        assert store.write_count == 1

    def test_returned_context_is_a_copy(self) -> None:
        store = InMemoryContextStore()
        store.set("sample", {"entries": [1]})

        context = store.get("sample")
        assert context is not None
        context["entries"].append(2)

        assert store.get("sample") == {"entries": [1]}

    def test_stored_context_is_a_copy(self) -> None:
        store = InMemoryContextStore()
        context = {"entries": [1]}
        store.set("sample", context)
        context["entries"].append(2)

        assert store.get("sample") == {"entries": [1]}

    def test_plugins_are_isolated(self) -> None:
        store = InMemoryContextStore({"a": {"n": 1}})
        store.set("b", {"n": 2})

        assert store.get("a") == {"n": 1}
        assert store.get("b") == {"n": 2}


class TestFilesystemContextStore:
    """Test JSON file backed store."""

    def test_missing_file_starts_empty(self, tmp_path: Path) -> None:
        store = FilesystemContextStore(tmp_path / "cache.json")
        assert store.get("sample") is None
        assert not (tmp_path / "cache.json").exists()

    def test_set_writes_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "cache.json"
        store = FilesystemContextStore(path)

        store.set("sample", {"entries": [{"id": "1"}]})

        assert json.loads(path.read_text()) == {"sample": {"entries": [{"id": "1"}]}}
        assert not path.with_suffix(".json.tmp").exists()

    def test_survives_new_instance(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        FilesystemContextStore(path).set("sample", {"entries": [{"id": "1"}]})

        reloaded = FilesystemContextStore(path)

        assert reloaded.get("sample") == {"entries": [{"id": "1"}]}

    def test_other_plugins_preserved_on_write(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text(json.dumps({"other": {"x": 1}}))
        store = FilesystemContextStore(path)

        store.set("sample", {"y": 2})

        assert json.loads(path.read_text()) == {"other": {"x": 1}, "sample": {"y": 2}}

    def test_corrupt_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text("{not json")

        with pytest.raises(ValueError, match="Corrupt context cache"):
            FilesystemContextStore(path)

    def test_non_object_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text("[1, 2]")

        with pytest.raises(ValueError, match="expected object, got list"):
            FilesystemContextStore(path)
