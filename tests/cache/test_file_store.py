from __future__ import annotations

import stat
from typing import TYPE_CHECKING

import pytest

from kubetoken.cache.file_store import FileByteStore
from kubetoken.cache.serialization import EMPTY_STORE
from kubetoken.exceptions import StorageError

if TYPE_CHECKING:
    from pathlib import Path


class TestFileByteStore:
    def test_get_creates_empty_store_when_missing(self, tmp_path: Path) -> None:
        path = tmp_path / "kubetoken.json"
        store = FileByteStore(path)
        assert store.get() == EMPTY_STORE
        assert path.read_bytes() == EMPTY_STORE

    def test_get_returns_existing_contents_verbatim(self, tmp_path: Path) -> None:
        path = tmp_path / "kubetoken.json"
        path.write_bytes(b"[\n\t{}\n]")
        assert FileByteStore(path).get() == b"[\n\t{}\n]"

    def test_get_does_not_repair_invalid_contents(self, tmp_path: Path) -> None:
        path = tmp_path / "kubetoken.json"
        path.write_bytes(b"garbage")
        assert FileByteStore(path).get() == b"garbage"
        assert path.read_bytes() == b"garbage"

    def test_set_overwrites_whole_file(self, tmp_path: Path) -> None:
        path = tmp_path / "kubetoken.json"
        path.write_bytes(b"a much longer previous content")
        store = FileByteStore(path)
        store.set(b"[]")
        assert path.read_bytes() == b"[]"

    def test_set_creates_parent_dirs(self, tmp_path: Path) -> None:
        path = tmp_path / "deep" / "nested" / "kubetoken.json"
        FileByteStore(path).set(b"[]")
        assert path.read_bytes() == b"[]"

    def test_new_file_is_private(self, tmp_path: Path) -> None:
        path = tmp_path / "kubetoken.json"
        FileByteStore(path).get()
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_get_wraps_io_errors(self, tmp_path: Path) -> None:
        # A directory where the file should be cannot be read as bytes.
        path = tmp_path / "kubetoken.json"
        path.mkdir()
        with pytest.raises(StorageError, match="error reading file"):
            FileByteStore(path).get()

    def test_set_wraps_io_errors(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        with pytest.raises(StorageError, match="error writing file"):
            FileByteStore(blocker / "kubetoken.json").set(b"[]")
