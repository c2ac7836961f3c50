"""Banner showing the application name and the active wiki root."""

from pathlib import Path

from rich.text import Text

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static


def build_banner(root: Path | None, server_url: str | None = None) -> Text:
    """Build the banner line as a Rich Text object."""
    text = Text()
    text.append("pagewiki", style="bold bright_cyan")
    text.append("  │  ", style="dim")
    if root is None:
        text.append("no wiki root", style="italic yellow")
    else:
        text.append(str(root), style="bright_white")
    if server_url:
        text.append("  │  ", style="dim")
        text.append(f"serving {server_url}", style="italic green")
    return text


class Banner(Vertical):
    """Application banner."""

    DEFAULT_CSS = """
    Banner {
        width: 100%;
        height: 1;
        background: $primary-background;
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static(build_banner(None), id="banner-text")

    def update_root(self, root: Path | None, server_url: str | None = None) -> None:
        self.query_one("#banner-text", Static).update(build_banner(root, server_url))
