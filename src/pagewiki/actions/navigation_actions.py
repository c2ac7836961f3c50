"""Navigation action handlers for WikiApp."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from ..commands import COMMANDS
from ..errors import WikiError
from ..widgets import PageList, Preview

logger = logging.getLogger(__name__)


class NavigationActionsMixin:
    """Mixin running wiki commands and following links and page selections."""

    def action_run_command(self, command_id: str) -> None:
        """Run a registered command in the background."""
        command = COMMANDS[command_id]
        self._run_guarded(
            lambda: command.handler(self.session, self), name=f"command:{command.id}"
        )

    def _run_guarded(self, make: Callable[[], Awaitable[None]], name: str) -> None:
        async def run() -> None:
            try:
                await make()
            except WikiError as e:
                logger.warning("%s: %s", name, e)
                self.notify(str(e), severity="error")
            except OSError as e:
                logger.exception("%s failed", name)
                self.notify(f"{name} failed: {e}", severity="error")
            finally:
                self._sync_root()

        self.run_worker(run(), name=name, group="command", exclusive=True)

    def on_preview_wiki_link_clicked(self, event: Preview.WikiLinkClicked) -> None:
        """Follow a wiki link relative to the displayed page."""
        target = event.target
        displayed = event.current_file

        async def follow() -> None:
            self.session.follow(target, displayed)

        self._run_guarded(follow, name="follow")

    def on_page_list_page_selected(self, event: PageList.PageSelected) -> None:
        """Open a page picked from the page list."""
        page_file = event.page_file

        async def visit() -> None:
            self.session.visit(page_file)

        self._run_guarded(visit, name="visit")

    def action_focus_pages(self) -> None:
        self.query_one("#page-list", PageList).list_view.focus()

    def action_focus_preview(self) -> None:
        self.query_one("#preview", Preview).scroll_view.focus()

    def action_help(self) -> None:
        """Show help information."""
        keys = ", ".join(f"{c.key}={c.title}" for c in COMMANDS.values())
        self.notify(f"{keys}, q=Quit", timeout=8)
