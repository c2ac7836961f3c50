"""Host operations for WikiApp: opening, closing and prompting."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from ..pages import find_pages
from ..paths import resolve_path, wiki_path_of
from ..watcher import PageWatcher
from ..widgets import Banner, PageList, PickerModal, Preview

logger = logging.getLogger(__name__)


class PageActionsMixin:
    """Mixin implementing the Host protocol on top of the Textual app."""

    def open_file(self, path: Path, read_only: bool = True) -> None:
        """Show a page in the preview, and in the editor when writable."""
        if path not in self._open_pages:
            self._open_pages.append(path)
        self._current_page = path
        if not read_only:
            self._edit_file(path)
        self.call_later(self._show_page, path)

    def current_document(self) -> Path | None:
        return self._current_page

    def close_pages(self) -> None:
        """Forget all open pages and clear the preview."""
        self._open_pages.clear()
        self._current_page = None
        preview = self.query_one("#preview", Preview)
        self.call_later(preview.show_page, None)

    async def prompt_user(self, title: str, candidates: list[str]) -> str | None:
        return await self.push_screen_wait(PickerModal(title, candidates))

    async def _show_page(self, path: Path) -> None:
        if path != self._current_page:
            return  # superseded by a later open

        root = self.session.active_root
        title = path.name
        if root is not None:
            title = wiki_path_of(path, root, self.config.extension)

        preview = self.query_one("#preview", Preview)
        await preview.show_page(path, title, self._is_broken_link)
        self.query_one("#page-list", PageList).highlight(path)

    def _is_broken_link(self, target: str) -> bool:
        """Check if a wiki link on the current page points at a missing page."""
        root = self.session.active_root
        if root is None:
            return False
        try:
            page_file = resolve_path(target, self._current_page, root, self.config.extension)
        except ValueError:
            return True
        return not page_file.exists()

    def _edit_file(self, path: Path) -> None:
        """Open a page in the configured editor."""
        editor = self.config.editor
        with self.suspend():
            try:
                subprocess.run([editor, str(path)], check=False)
            except FileNotFoundError:
                self.notify(f"Editor '{editor}' not found", severity="error")
            except OSError as e:
                self.notify(f"Error opening editor: {e}", severity="error")

    def _sync_root(self) -> None:
        """Refresh root-dependent widgets and restart the watcher on root change."""
        root = self.session.active_root
        if root != self._shown_root:
            logger.info("Showing wiki root: %s", root)
            if self._watcher is not None:
                self._watcher.stop()
                self._watcher = None
            if root is not None:
                self._watcher = PageWatcher(root, self.config.extension, self._on_pages_changed)
                self._watcher.start()
            self._shown_root = root

        self.query_one(Banner).update_root(root, self.session.server.url)
        self._refresh_pages()

    def _refresh_pages(self) -> None:
        """Reload the page list from disk."""
        root = self.session.active_root
        pages = []
        if root is not None:
            extension = self.config.extension
            pages = [
                (wiki_path_of(page, root, extension), page)
                for page in find_pages(root, extension)
            ]
        self.query_one("#page-list", PageList).update_pages(pages, self._current_page)

    def _on_pages_changed(self, paths: list[Path]) -> None:
        """Handle page changes (called from watcher thread)."""
        self.call_from_thread(self._refresh_pages)
