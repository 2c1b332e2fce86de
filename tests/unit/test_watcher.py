"""Unit tests for the source watcher's event filtering and debounce."""
from unittest.mock import MagicMock, patch

import pytest
from cargo_disassemble.utils.watcher import FileWatcher, SourceChangeHandler


def event(path, is_directory=False):
    return MagicMock(src_path=path, is_directory=is_directory)


class TestSourceChangeHandler:

    def test_rust_source_triggers(self):
        callback = MagicMock()
        SourceChangeHandler(callback).on_modified(event("/crate/src/main.rs"))
        callback.assert_called_once_with("/crate/src/main.rs")

    def test_other_files_ignored(self):
        callback = MagicMock()
        handler = SourceChangeHandler(callback)
        handler.on_modified(event("/crate/src/main.rs.swp"))
        handler.on_modified(event("/crate/src/notes.txt"))
        callback.assert_not_called()

    def test_directories_ignored(self):
        callback = MagicMock()
        SourceChangeHandler(callback).on_modified(event("/crate/src/mod.rs", is_directory=True))
        callback.assert_not_called()

    def test_debounce(self):
        callback = MagicMock()
        handler = SourceChangeHandler(callback)
        with patch("cargo_disassemble.utils.watcher.time.time", side_effect=[100.0, 100.1, 101.0]):
            handler.on_modified(event("/crate/src/a.rs"))
            handler.on_modified(event("/crate/src/a.rs"))
            handler.on_modified(event("/crate/src/a.rs"))
        assert callback.call_count == 2


class TestFileWatcher:

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileWatcher().start_watching(str(tmp_path / "src"), MagicMock())

    def test_start_and_stop(self, tmp_path):
        watcher = FileWatcher()
        watcher.start_watching(str(tmp_path), MagicMock())
        assert watcher.observer.is_alive()
        watcher.stop_watching()
        assert not watcher.observer.is_alive()
