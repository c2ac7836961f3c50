"""File system watcher for auto-refresh of the page list."""

import logging
import threading
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class PageEventHandler(FileSystemEventHandler):
    """Handler for page file changes with debouncing."""

    def __init__(
        self,
        extension: str,
        on_change: Callable[[list[Path]], None],
        debounce_seconds: float = 0.5,
    ):
        super().__init__()
        self.suffix = "." + extension.lstrip(".")
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self._pending_paths: set[str] = set()
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def _is_page(self, path: str) -> bool:
        return path.endswith(self.suffix)

    def _schedule_update(self, path: str) -> None:
        """Schedule a debounced update for the given path."""
        logger.debug("Page change detected: %s", path)
        with self._lock:
            self._pending_paths.add(path)

            if self._timer:
                self._timer.cancel()

            self._timer = threading.Timer(
                self.debounce_seconds,
                self._process_pending,
            )
            self._timer.daemon = True
            self._timer.start()

    def _process_pending(self) -> None:
        """Report all pending page changes at once."""
        with self._lock:
            paths = sorted(self._pending_paths)
            self._pending_paths.clear()
            self._timer = None

        if not paths:
            return

        logger.info("Processing %d page change(s)", len(paths))
        self.on_change([Path(p) for p in paths])

    def cancel(self) -> None:
        """Drop pending changes and stop the debounce timer."""
        with self._lock:
            if self._timer:
                self._timer.cancel()
                self._timer = None
            self._pending_paths.clear()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_page(event.src_path):
            self._schedule_update(event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_page(event.src_path):
            self._schedule_update(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        if self._is_page(event.src_path):
            self._schedule_update(event.src_path)
        dest_path = getattr(event, "dest_path", "")
        if dest_path and self._is_page(dest_path):
            self._schedule_update(dest_path)


class PageWatcher:
    """Watches a wiki root for pages being added, removed or renamed."""

    def __init__(
        self,
        root: Path,
        extension: str,
        on_change: Callable[[list[Path]], None],
    ):
        self.root = root
        self.extension = extension
        self.on_change = on_change
        self._observer: Observer | None = None
        self._handler: PageEventHandler | None = None

    def start(self) -> None:
        """Start watching the root."""
        if self._observer is not None:
            return  # Already running

        self._handler = PageEventHandler(self.extension, self.on_change)
        self._observer = Observer()
        self._observer.schedule(self._handler, str(self.root), recursive=True)
        self._observer.daemon = True
        self._observer.start()
        logger.info("Page watcher started: %s", self.root)

    def stop(self) -> None:
        """Stop watching."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=1.0)
            self._observer = None
        if self._handler is not None:
            self._handler.cancel()
            self._handler = None

    def __enter__(self) -> "PageWatcher":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()
