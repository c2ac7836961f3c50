"""Registry of wiki commands.

Each command is an async handler taking the session and the host. The
application builds its key bindings from COMMANDS, and the menu command
lists it by category.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable

from .backup import make_backup
from .export import export_page, export_wiki
from .host import Host
from .pages import (
    append_to_page,
    asset_link,
    insert_asset,
    list_assets,
    list_wiki_paths,
    search_pages,
)
from .session import WikiSession

logger = logging.getLogger(__name__)

Handler = Callable[[WikiSession, Host], Awaitable[None]]


@dataclass(frozen=True)
class Command:
    """A named wiki command."""

    id: str
    title: str
    category: str
    key: str
    handler: Handler

    @property
    def menu_label(self) -> str:
        return f"{self.category}: {self.title}"


def system_open(path: Path) -> None:
    """Open a file or directory with the desktop's default application."""
    opener = "open" if sys.platform == "darwin" else "xdg-open"
    if shutil.which(opener) is None:
        raise FileNotFoundError(f"'{opener}' not found")
    subprocess.Popen(
        [opener, str(path)],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )


async def open_index(session: WikiSession, host: Host) -> None:
    session.open_index()


async def open_page(session: WikiSession, host: Host) -> None:
    """Pick an existing page or type a new wiki path to create it."""
    root = session.require_root()
    choice = await host.prompt_user("Open page", list_wiki_paths(root, session.extension))
    choice = (choice or "").strip()
    if choice:
        session.follow(choice)


async def go_back(session: WikiSession, host: Host) -> None:
    session.go_back()


async def edit_page(session: WikiSession, host: Host) -> None:
    host.open_file(session.current_page(), read_only=False)


async def search(session: WikiSession, host: Host) -> None:
    """Search page names and contents, then open the chosen hit."""
    root = session.require_root()
    query = await host.prompt_user("Search", [])
    if not query:
        return

    hits = search_pages(root, query, session.extension)
    if not hits:
        host.notify(f"No pages match: {query}", severity="warning")
        return

    labels = {}
    for hit in hits:
        labels.setdefault(f"{hit.wiki_path}:{hit.line_number}  {hit.line}", hit)
    choice = await host.prompt_user(f"Results for '{query}'", list(labels))
    if choice in labels:
        session.visit(labels[choice].page_file)


async def open_asset(session: WikiSession, host: Host) -> None:
    """Pick one of the current page's assets and open it externally."""
    page = session.current_page()
    assets = list_assets(page, session.extension)
    if not assets:
        host.notify(f"No assets for {page.name}", severity="warning")
        return

    by_name = {asset.name: asset for asset in assets}
    choice = await host.prompt_user("Open asset", list(by_name))
    if choice not in by_name:
        return
    try:
        system_open(by_name[choice])
    except OSError as e:
        host.notify(f"Cannot open {choice}: {e}", severity="error")


async def insert_asset_link(session: WikiSession, host: Host) -> None:
    """Copy a file into the page's asset directory and link it from the page."""
    page = session.current_page()
    source = await host.prompt_user("File to attach", [])
    if not source:
        return

    try:
        copied = insert_asset(page, Path(source.strip()).expanduser(), session.extension)
    except FileNotFoundError as e:
        host.notify(str(e), severity="warning")
        return

    append_to_page(page, asset_link(page, copied))
    host.open_file(page, read_only=session.config.read_only)
    host.notify(f"Attached {copied.name}")


async def export_current(session: WikiSession, host: Host) -> None:
    root = session.require_root()
    page = session.current_page()
    output = export_page(page, root, session.extension, session.config.export.extensions)
    host.notify(f"Exported to {output.name}")


async def export_all(session: WikiSession, host: Host) -> None:
    root = session.require_root()
    outputs = export_wiki(root, session.extension, session.config.export.extensions)
    host.notify(f"Exported {len(outputs)} page(s)")


async def backup(session: WikiSession, host: Host) -> None:
    root = session.require_root()
    # Blocks until the archiver exits, so it runs off the event loop
    archive = await asyncio.to_thread(
        make_backup,
        root,
        session.config.backup.directory,
        session.config.backup.archiver,
    )
    host.notify(f"Backup written to {archive}")


async def toggle_server(session: WikiSession, host: Host) -> None:
    root = session.require_root()
    server_config = session.config.server
    running = await asyncio.to_thread(
        session.server.toggle, root, server_config.host, server_config.port
    )
    if running:
        host.notify(f"Serving {root} at {session.server.url}")
    else:
        host.notify("Server stopped")


async def switch_root(session: WikiSession, host: Host) -> None:
    """Pick another wiki root and open its index page."""
    candidates = [str(root) for root in session.config.roots]
    choice = await host.prompt_user("Switch wiki root", candidates)
    if not choice:
        return
    session.switch_root(Path(choice.strip()))
    session.open_index()


async def close_pages(session: WikiSession, host: Host) -> None:
    host.close_pages()


async def show_menu(session: WikiSession, host: Host) -> None:
    """List all commands by category and run the chosen one."""
    by_label = {
        command.menu_label: command
        for command in COMMANDS.values()
        if command.id != "menu"
    }
    choice = await host.prompt_user("Wiki menu", list(by_label))
    if choice in by_label:
        await by_label[choice].handler(session, host)


COMMANDS: dict[str, Command] = {
    command.id: command
    for command in [
        Command("index", "Index", "Navigation", "i", open_index),
        Command("open", "Open page", "Navigation", "o", open_page),
        Command("back", "Back", "Navigation", "escape", go_back),
        Command("search", "Search", "Navigation", "s", search),
        Command("edit", "Edit page", "Page", "e", edit_page),
        Command("asset-open", "Open asset", "Assets", "a", open_asset),
        Command("asset-insert", "Attach file", "Assets", "f", insert_asset_link),
        Command("export-page", "Export page", "Export", "x", export_current),
        Command("export-all", "Export wiki", "Export", "w", export_all),
        Command("server", "Toggle server", "Export", "v", toggle_server),
        Command("backup", "Backup", "Wiki", "b", backup),
        Command("switch-root", "Switch root", "Wiki", "r", switch_root),
        Command("close", "Close pages", "Wiki", "c", close_pages),
        Command("menu", "Menu", "Wiki", "m", show_menu),
    ]
}
