"""Tests for the persisted state stores."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from split_or_die.core.data.state_store import (
    MemoryStateStore,
    YamlStateStore,
    default_state_path,
)
from split_or_die.types import StateStore


class TestMemoryStateStore:
    """Test MemoryStateStore."""

    def test_missing_key_reads_empty(self) -> None:
        assert MemoryStateStore().get_list("splitOrDie.excludedFolders") == []

    def test_update_then_read(self) -> None:
        store = MemoryStateStore()
        store.update_list("k", ["/a", "/b"])
        assert store.get_list("k") == ["/a", "/b"]

    def test_returned_list_is_a_copy(self) -> None:
        store = MemoryStateStore({"k": ["/a"]})
        store.get_list("k").append("/b")
        assert store.get_list("k") == ["/a"]

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryStateStore(), StateStore)


class TestYamlStateStore:
    """Test YamlStateStore."""

    def test_default_state_path(self, tmp_path: Path) -> None:
        assert default_state_path(tmp_path) == tmp_path / ".split-or-die" / "state.yaml"

    def test_missing_file_reads_empty(self, tmp_path: Path) -> None:
        store = YamlStateStore(default_state_path(tmp_path))
        assert store.get_list("splitOrDie.excludedFiles") == []

    def test_file_created_on_first_write(self, tmp_path: Path) -> None:
        path = default_state_path(tmp_path)
        store = YamlStateStore(path)

        store.update_list("splitOrDie.excludedFolders", ["/work/src"])

        assert path.exists()
        assert YamlStateStore(path).get_list("splitOrDie.excludedFolders") == ["/work/src"]

    def test_keys_are_independent(self, tmp_path: Path) -> None:
        store = YamlStateStore(default_state_path(tmp_path))

        store.update_list("a", ["/1"])
        store.update_list("b", ["/2"])

        assert store.get_list("a") == ["/1"]
        assert store.get_list("b") == ["/2"]

    def test_non_string_entries_filtered(self, tmp_path: Path) -> None:
        path = tmp_path / "state.yaml"
        _ = path.write_text("k:\n  - /a\n  - 3\n  - null\nother: scalar\n")
        store = YamlStateStore(path)

        assert store.get_list("k") == ["/a"]
        assert store.get_list("other") == []

    def test_corrupt_file_reads_empty_and_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "state.yaml"
        _ = path.write_text("k: [unclosed\n")

        with caplog.at_level(logging.WARNING):
            assert YamlStateStore(path).get_list("k") == []

        assert "Ignoring unreadable state file" in caplog.text
