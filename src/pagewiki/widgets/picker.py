"""Modal picker: filter a list of candidates or type a new value."""

from rich.text import Text

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

# Maximum candidates shown at once
MAX_OPTIONS = 200


def filter_candidates(candidates: list[str], query: str) -> list[str]:
    """Keep candidates containing every whitespace-separated query word."""
    words = query.lower().split()
    if not words:
        return list(candidates)
    return [c for c in candidates if all(w in c.lower() for w in words)]


class PickerModal(ModalScreen[str | None]):
    """Pick one candidate; Enter on a non-matching query returns the query."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
        Binding("down", "focus_options", "Options", show=False),
    ]

    CSS = """
    PickerModal {
        align: center middle;
    }

    #picker-container {
        width: 80;
        height: auto;
        max-height: 30;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    #picker-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #picker-options {
        height: auto;
        max-height: 20;
        background: $surface-darken-1;
    }
    """

    def __init__(self, title: str, candidates: list[str]) -> None:
        super().__init__()
        self.title_text = title
        self.candidates = candidates
        self._shown: list[str] = []

    def compose(self) -> ComposeResult:
        with Vertical(id="picker-container"):
            yield Static(self.title_text, id="picker-title")
            yield Input(placeholder="Type to filter, Enter to confirm", id="picker-input")
            yield OptionList(id="picker-options")

    def on_mount(self) -> None:
        self._refresh_options("")
        self.query_one("#picker-input", Input).focus()

    def _refresh_options(self, query: str) -> None:
        options = self.query_one("#picker-options", OptionList)
        options.clear_options()
        self._shown = filter_candidates(self.candidates, query)[:MAX_OPTIONS]
        for candidate in self._shown:
            options.add_option(Option(Text(candidate)))
        if options.option_count:
            options.highlighted = 0
        options.display = bool(self.candidates)

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_options(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Return the exact or highlighted match, otherwise the typed text."""
        query = event.value.strip()
        if query in self.candidates:
            self.dismiss(query)
            return

        options = self.query_one("#picker-options", OptionList)
        if options.option_count and options.highlighted is not None:
            self.dismiss(self._shown[options.highlighted])
        else:
            self.dismiss(query or None)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(self._shown[event.option_index])

    def action_focus_options(self) -> None:
        options = self.query_one("#picker-options", OptionList)
        if options.option_count:
            options.focus()

    def action_cancel(self) -> None:
        self.dismiss(None)
