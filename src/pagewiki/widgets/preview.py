"""Markdown preview widget for wiki pages."""

from pathlib import Path
from typing import Callable

from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Markdown, Static

from ..wikilink import extract_wiki_target, is_wiki_link, preprocess_wiki_links


def load_page_content(
    page_file: Path, is_broken: Callable[[str], bool] | None = None
) -> tuple[str | None, str | None]:
    """Load a page for preview, rewriting its wiki links.

    Args:
        page_file: Page to load
        is_broken: Reports whether a link target page is missing

    Returns:
        Tuple of (processed_content, error_message).
        If successful, error_message is None.
        If failed, processed_content is None and error_message contains the error.
    """
    try:
        content = page_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return (None, f"*Error reading page: {e}*")
    return (preprocess_wiki_links(content, is_broken), None)


class Preview(Vertical):
    """Widget displaying the open wiki page."""

    class WikiLinkClicked(Message):
        """Message emitted when a wiki link is clicked."""

        def __init__(self, target: str, current_file: Path | None) -> None:
            super().__init__()
            self.target = target
            self.current_file = current_file

    DEFAULT_CSS = """
    Preview {
        width: 1fr;
        height: 1fr;
    }

    Preview > #preview-header {
        background: $primary-background;
        color: $success;
        text-style: bold;
        padding: 0 1;
        height: 1;
    }

    Preview > VerticalScroll {
        height: 1fr;
    }

    Preview Markdown {
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._current_file: Path | None = None

    def compose(self) -> ComposeResult:
        yield Static("PAGE", id="preview-header")
        with VerticalScroll(id="preview-scroll"):
            yield Markdown(id="preview-content", open_links=False)

    @property
    def scroll_view(self) -> VerticalScroll:
        return self.query_one("#preview-scroll", VerticalScroll)

    @property
    def markdown_widget(self) -> Markdown:
        return self.query_one("#preview-content", Markdown)

    async def show_page(
        self,
        page_file: Path | None,
        title: str = "",
        is_broken: Callable[[str], bool] | None = None,
    ) -> None:
        """Display a page, or clear the preview when page_file is None."""
        self._current_file = page_file

        header = self.query_one("#preview-header", Static)
        markdown = self.markdown_widget

        if page_file is None:
            header.update("PAGE")
            await markdown.update("")
            return

        header.update(f"PAGE - {title or page_file.name}")

        content, error = load_page_content(page_file, is_broken)
        await markdown.update(error or content or "")
        self.scroll_view.scroll_home(animate=False)

    def get_current_file(self) -> Path | None:
        """Get the displayed page file."""
        return self._current_file

    def on_markdown_link_clicked(self, event: Markdown.LinkClicked) -> None:
        """Turn clicks on wiki links into WikiLinkClicked messages."""
        href = event.href

        if is_wiki_link(href):
            target = extract_wiki_target(href)
            self.post_message(self.WikiLinkClicked(target, self._current_file))
            event.prevent_default()
            event.stop()
