"""Page list widget showing every page of the active wiki root."""

from pathlib import Path

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static

# Maximum pages to display before showing "Show more" item
MAX_DISPLAY_PAGES = 500


class PageItem(ListItem):
    """A list item representing a page."""

    def __init__(self, wiki_path: str, page_file: Path) -> None:
        super().__init__()
        self.wiki_path = wiki_path
        self.page_file = page_file

    def compose(self) -> ComposeResult:
        yield Label(self.wiki_path)


class ShowMorePagesItem(ListItem):
    """A list item that expands the truncated page list."""

    DEFAULT_CSS = """
    ShowMorePagesItem {
        color: $text-muted;
        text-style: italic;
    }
    """

    def __init__(self, total_count: int, displayed_count: int) -> None:
        super().__init__()
        self.total_count = total_count
        self.remaining = total_count - displayed_count

    def compose(self) -> ComposeResult:
        yield Label(f"... show {self.remaining} more ({self.total_count} total)")


class PageList(Vertical):
    """Widget listing the pages of the active root."""

    DEFAULT_CSS = """
    PageList {
        width: 1fr;
        height: 1fr;
    }

    PageList > #page-header {
        background: $primary-background;
        color: $accent;
        text-style: bold;
        padding: 0 1;
        height: 1;
    }

    PageList > #page-list-view {
        height: 1fr;
    }

    PageList ListItem {
        padding: 0 1;
    }

    PageList ListItem.--highlight {
        background: $accent;
    }
    """

    class PageSelected(Message):
        """Message emitted when a page is selected."""

        def __init__(self, page_file: Path) -> None:
            super().__init__()
            self.page_file = page_file

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._pages: list[tuple[str, Path]] = []

    def compose(self) -> ComposeResult:
        yield Static("PAGES", id="page-header")
        yield ListView(id="page-list-view")

    @property
    def list_view(self) -> ListView:
        return self.query_one("#page-list-view", ListView)

    def update_pages(self, pages: list[tuple[str, Path]], current: Path | None = None) -> None:
        """Replace the listed pages.

        Args:
            pages: (wiki path, page file) pairs
            current: Page to highlight, if listed
        """
        self._pages = pages
        list_view = self.list_view
        list_view.clear()

        header = self.query_one("#page-header", Static)
        header.update(f"PAGES ({len(pages)})")

        displayed = pages[:MAX_DISPLAY_PAGES]
        for wiki_path, page_file in displayed:
            list_view.append(PageItem(wiki_path, page_file))
        if len(pages) > len(displayed):
            list_view.append(ShowMorePagesItem(len(pages), len(displayed)))

        self.highlight(current)

    def highlight(self, page_file: Path | None) -> None:
        """Move the cursor to a page if it is listed."""
        for index, (_, listed) in enumerate(self._pages[:MAX_DISPLAY_PAGES]):
            if listed == page_file:
                self.list_view.index = index
                return

    def _show_all_pages(self) -> None:
        list_view = self.list_view
        list_view.clear()
        for wiki_path, page_file in self._pages:
            list_view.append(PageItem(wiki_path, page_file))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Handle page selection (click or Enter)."""
        if isinstance(event.item, ShowMorePagesItem):
            self._show_all_pages()
            return
        if isinstance(event.item, PageItem):
            self.post_message(self.PageSelected(event.item.page_file))
