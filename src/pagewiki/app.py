"""Main Textual application for pagewiki."""

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer

from .actions import NavigationActionsMixin, PageActionsMixin
from .commands import COMMANDS
from .config import Config
from .session import WikiSession
from .watcher import PageWatcher
from .widgets import Banner, PageList, Preview

# Commands shown in the footer; the rest are reachable from the menu and help
FOOTER_COMMANDS = {"index", "open", "back", "search", "edit", "menu"}


def _command_bindings() -> list[Binding]:
    return [
        Binding(
            command.key,
            f"run_command('{command.id}')",
            command.title,
            show=command.id in FOOTER_COMMANDS,
        )
        for command in COMMANDS.values()
    ]


class WikiApp(NavigationActionsMixin, PageActionsMixin, App):
    """pagewiki - personal markdown wiki."""

    TITLE = "pagewiki"
    SUB_TITLE = "Personal Wiki"

    CSS = """
    #main-container {
        width: 100%;
        height: 1fr;
    }

    #page-list {
        width: 30%;
        height: 100%;
        border: solid $warning;
    }

    #page-list:focus-within {
        border: solid yellow;
    }

    #preview {
        width: 70%;
        height: 100%;
        border: solid $success;
    }

    #preview:focus-within {
        border: solid green;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("?", "help", "Help"),
        Binding("left", "focus_pages", "Pages", show=False),
        Binding("right", "focus_preview", "Page", show=False),
        *_command_bindings(),
    ]

    def __init__(self, config: Config) -> None:
        super().__init__()
        self.config = config
        self.session = WikiSession(config, self)
        self._watcher: PageWatcher | None = None
        self._current_page: Path | None = None
        self._open_pages: list[Path] = []
        self._shown_root: Path | None = None

    def compose(self) -> ComposeResult:
        yield Banner()
        with Horizontal(id="main-container"):
            yield PageList(id="page-list", classes="panel")
            yield Preview(id="preview", classes="panel")
        yield Footer()

    async def on_mount(self) -> None:
        """Open the index page of the active root."""
        self.query_one("#page-list", PageList).list_view.focus()
        self.action_run_command("index")

    async def on_unmount(self) -> None:
        """Clean up when app closes."""
        if self._watcher:
            self._watcher.stop()
        self.session.server.stop()


def run_app(config: Config) -> None:
    """Run the pagewiki application."""
    app = WikiApp(config)
    app.run()
