"""Capability interface the wiki logic calls into.

The session and the commands never talk to the terminal UI directly; the
application implements this protocol, and tests substitute a fake.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Host(Protocol):
    """Editor-side operations needed by wiki commands."""

    def open_file(self, path: Path, read_only: bool = True) -> None: ...
    def current_document(self) -> Path | None: ...
    def close_pages(self) -> None: ...
    def notify(self, message: str, *, severity: str = "information") -> None: ...

    async def prompt_user(self, title: str, candidates: list[str]) -> str | None:
        """Ask the user to pick a candidate.

        Returns the chosen candidate, the typed text when it matches none,
        or None when the prompt is cancelled.
        """
        ...
