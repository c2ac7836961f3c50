"""Back-navigation history of visited wiki pages."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class NavigationHistory:
    """Stack of previously active page files."""

    def __init__(self) -> None:
        self._stack: list[Path] = []

    def push(self, page_file: Path) -> None:
        """Push a page onto the history. Duplicates are kept."""
        self._stack.append(page_file)

    def pop_existing(self) -> Path | None:
        """Pop entries until one whose file still exists is found.

        Entries for deleted pages are discarded on the way.

        Returns:
            The most recent existing page, or None once the stack is exhausted
        """
        while self._stack:
            page_file = self._stack.pop()
            if page_file.exists():
                return page_file
            logger.debug("Skipping deleted page in history: %s", page_file)
        return None

    def reset(self) -> None:
        """Clear all navigation history."""
        self._stack.clear()

    def is_empty(self) -> bool:
        """Check if the history is empty."""
        return len(self._stack) == 0

    def entries(self) -> list[Path]:
        """Get a copy of the stack, oldest first."""
        return list(self._stack)

    def __len__(self) -> int:
        return len(self._stack)
