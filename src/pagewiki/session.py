"""Active wiki root, navigation history and page materialization."""

import logging
from datetime import date
from pathlib import Path

from .config import Config
from .errors import NotAWikiBuffer, RootMissing, RootUnconfigured
from .host import Host
from .navigation import NavigationHistory
from .paths import (
    INDEX_PAGE,
    asset_directory,
    is_relative,
    is_under_root,
    page_name,
    resolve_path,
)
from .server import StaticServer

logger = logging.getLogger(__name__)


def render_header(template: str, name: str, today: date) -> str:
    """Fill the page header template.

    %n is replaced by the page name and %d by the date as YYYY-MM-DD.
    """
    return template.replace("%n", name).replace("%d", today.strftime("%Y-%m-%d"))


class WikiSession:
    """State shared by all wiki commands: the active root and its history."""

    def __init__(self, config: Config, host: Host) -> None:
        self.config = config
        self.host = host
        self.history = NavigationHistory()
        self.server = StaticServer()
        self._root: Path | None = None

    @property
    def extension(self) -> str:
        return self.config.extension

    @property
    def active_root(self) -> Path | None:
        """The active root, or None if none has been selected yet."""
        return self._root

    def require_root(self) -> Path:
        """Get the active root, defaulting it from the config if needed.

        Raises:
            RootUnconfigured: No root is active and no candidate is configured
            RootMissing: The defaulted root does not exist on disk
        """
        if self._root is not None:
            return self._root

        if self.config.root is not None:
            candidate = self.config.root
        elif self.config.roots:
            candidate = self.config.roots[0]
        else:
            raise RootUnconfigured()

        candidate = candidate.expanduser()
        if not candidate.is_dir():
            raise RootMissing(candidate)

        logger.info("Using wiki root: %s", candidate)
        self._root = candidate
        self.history.reset()
        return candidate

    def switch_root(self, root: Path) -> Path:
        """Make another directory the active root.

        History is cleared, and open pages are closed when configured to.
        """
        root = root.expanduser()
        if not root.is_dir():
            raise RootMissing(root)

        self.history.reset()
        if self.config.close_on_switch:
            self.host.close_pages()

        self._root = root
        self.config.root = root
        if root not in self.config.roots:
            self.config.roots.append(root)

        logger.info("Switched wiki root: %s", root)
        return root

    def resolve(self, wiki_path: str, current_file: Path | None = None) -> Path:
        """Resolve a wiki path against the active root.

        Raises:
            NotAWikiBuffer: The path is relative and no page is open
        """
        root = self.require_root()
        if current_file is None and is_relative(wiki_path):
            raise NotAWikiBuffer(None)
        return resolve_path(wiki_path, current_file, root, self.extension)

    def open_or_create(
        self, wiki_path: str, current_file: Path | None = None
    ) -> tuple[Path, bool]:
        """Resolve a wiki path and report whether its page must be created."""
        page_file = self.resolve(wiki_path, current_file)
        return page_file, not page_file.exists()

    def ensure_asset_directory(self, page_file: Path) -> Path:
        """Create the page's asset directory if it does not exist yet."""
        assets = asset_directory(page_file, self.extension)
        assets.mkdir(parents=True, exist_ok=True)
        return assets

    def materialize(self, page_file: Path, today: date | None = None) -> None:
        """Create a new page with the templated header and its asset directory."""
        today = today or date.today()
        header = render_header(
            self.config.header_template, page_name(page_file, self.extension), today
        )
        page_file.parent.mkdir(parents=True, exist_ok=True)
        page_file.write_text(header, encoding="utf-8")
        self.ensure_asset_directory(page_file)
        logger.info("Created page: %s", page_file)

    def current_page(self) -> Path:
        """Get the open page, requiring it to belong to the active root.

        Raises:
            NotAWikiBuffer: Nothing is open, or the open file is outside the root
        """
        root = self.require_root()
        current = self.host.current_document()
        if current is None or not is_under_root(current, root):
            raise NotAWikiBuffer(current)
        return current

    def _push_current(self, root: Path) -> None:
        current = self.host.current_document()
        if current is not None and is_under_root(current, root):
            self.history.push(current)

    def follow(self, wiki_path: str, current_file: Path | None = None) -> Path:
        """Open the page a wiki path points to, creating it if absent.

        Relative paths resolve against current_file, or the currently open
        page when it is not given.
        """
        if current_file is None:
            current_file = self.host.current_document()
        page_file, created = self.open_or_create(wiki_path, current_file)
        self._open(page_file, created)
        return page_file

    def visit(self, page_file: Path) -> Path:
        """Open an already resolved page file, creating it if absent."""
        self.require_root()
        self._open(page_file, not page_file.exists())
        return page_file

    def _open(self, page_file: Path, created: bool) -> None:
        # Only reached after resolution succeeded, so history stays intact on errors
        self._push_current(self.require_root())
        if created:
            self.materialize(page_file)
        else:
            self.ensure_asset_directory(page_file)
        self.host.open_file(page_file, read_only=self.config.read_only)

    def index_page(self) -> Path:
        """Get the index page of the active root, creating it if absent."""
        page_file = self.resolve(INDEX_PAGE)
        if not page_file.exists():
            self.materialize(page_file)
        return page_file

    def open_index(self) -> Path:
        """Open the index page of the active root."""
        return self.follow(INDEX_PAGE)

    def go_back(self) -> Path:
        """Open the most recent existing page in history.

        Falls back to the index page once the history is exhausted.
        """
        self.require_root()
        page_file = self.history.pop_existing()
        if page_file is None:
            page_file = self.index_page()
        self.host.open_file(page_file, read_only=self.config.read_only)
        return page_file
