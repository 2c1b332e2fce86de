import time
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer


class SourceChangeHandler(FileSystemEventHandler):
    """
    Listens for changes to Rust sources under a directory and triggers a callback.
    """
    def __init__(self, callback: Callable[[str], None], suffix: str = ".rs"):
        self.callback = callback
        self.suffix = suffix
        self.last_triggered = 0.0
        self.debounce_seconds = 0.5 # Prevent double-triggers from some editors

    def on_modified(self, event):
        if event.is_directory:
            return

        path = str(event.src_path)
        if not path.endswith(self.suffix):
            return

        now = time.time()
        if now - self.last_triggered > self.debounce_seconds:
            self.last_triggered = now
            self.callback(path)


class FileWatcher:
    """
    Manages the watchdog observer thread.
    """
    def __init__(self):
        self.observer = Observer()
        self.watch = None

    def start_watching(self, directory: str, callback: Callable[[str], None]):
        """
        Starts a background thread watching `directory` recursively.
        """
        path = Path(directory).resolve()
        if not path.is_dir():
            raise FileNotFoundError(f"Cannot watch non-existent directory: {directory}")

        handler = SourceChangeHandler(callback)
        self.watch = self.observer.schedule(handler, str(path), recursive=True)
        self.observer.start()

    def stop_watching(self):
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
