"""
File system watcher that triggers rebuilds when content pages change.

This module provides:
- Watchdog-based file monitoring
- Debounced change batches (one rebuild per editor save burst)
- Extension filtering to content pages
"""

import logging
import threading
import time
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .pages.loader import DEFAULT_EXTENSIONS

logger = logging.getLogger(__name__)


class ContentEventHandler(FileSystemEventHandler):
    """
    Collects content file changes and reports them in settled batches.

    Key behaviors:
    - Debounces rapid modifications (e.g., editor save cycles)
    - Treats moves as a change to both the old and the new path
    - Ignores hidden files, directories, and non-page suffixes
    """

    DEBOUNCE_SECONDS = 1.0

    def __init__(
        self,
        content_path: Path,
        on_change: Callable[[set[Path]], None],
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    ):
        super().__init__()
        self.content_path = content_path
        self.on_change = on_change
        self.extensions = {ext.lower() for ext in extensions}

        # path -> time of the latest event seen for it; written by the observer thread
        self.pending: dict[Path, float] = {}
        self._lock = threading.Lock()

    def _is_relevant(self, path: str) -> bool:
        p = Path(path)
        try:
            parts = p.relative_to(self.content_path).parts
        except ValueError:
            parts = p.parts

        if any(part.startswith(".") for part in parts):
            return False
        return p.suffix.lower() in self.extensions

    def _mark(self, path: str) -> None:
        if self._is_relevant(path):
            with self._lock:
                self.pending[Path(path)] = time.time()

    def flush_pending(self, now: float | None = None) -> set[Path]:
        """Report pending changes once no new event arrived for the debounce window.

        Returns the reported paths (empty if the batch is still settling).
        Events marked while the batch is reported stay pending for the next flush.
        """
        with self._lock:
            snapshot = dict(self.pending)
        if not snapshot:
            return set()

        now = time.time() if now is None else now
        if now - max(snapshot.values()) < self.DEBOUNCE_SECONDS:
            return set()

        with self._lock:
            for path, marked_at in snapshot.items():
                if self.pending.get(path) == marked_at:
                    del self.pending[path]

        changed = set(snapshot)
        self.on_change(changed)
        return changed

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._mark(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._mark(event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._mark(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._mark(event.src_path)
            self._mark(event.dest_path)


def watch_content(
    content_path: Path,
    on_change: Callable[[set[Path]], None],
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> tuple[Observer, ContentEventHandler]:
    """
    Start watching a content directory.

    Returns:
        Tuple of (observer, handler) - caller should call observer.stop() to stop watching
    """
    handler = ContentEventHandler(content_path, on_change, extensions=extensions)

    observer = Observer()
    observer.schedule(handler, str(content_path), recursive=True)
    observer.start()

    return observer, handler


def run_watch_loop(
    content_path: Path,
    on_change: Callable[[set[Path]], None],
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> None:
    """
    Run the watch loop until interrupted.

    This is a blocking function that flushes settled change batches
    periodically.
    """
    observer, handler = watch_content(content_path, on_change, extensions=extensions)
    logger.debug("Watching %s", content_path)

    try:
        while True:
            time.sleep(0.5)
            handler.flush_pending()
    except KeyboardInterrupt:
        pass
    finally:
        observer.stop()
        observer.join()
