"""Shared fixtures for pagewiki tests."""

from pathlib import Path

import pytest

from pagewiki.config import BackupConfig, Config
from pagewiki.session import WikiSession


class FakeHost:
    """In-memory Host: records opened pages, notifications and prompts."""

    def __init__(self) -> None:
        self.current: Path | None = None
        self.opened: list[tuple[Path, bool]] = []
        self.notifications: list[tuple[str, str]] = []
        self.prompts: list[tuple[str, list[str]]] = []
        self.answers: list[str | None] = []
        self.closed = 0

    def open_file(self, path: Path, read_only: bool = True) -> None:
        self.opened.append((path, read_only))
        self.current = path

    def current_document(self) -> Path | None:
        return self.current

    def close_pages(self) -> None:
        self.closed += 1
        self.current = None

    def notify(self, message: str, *, severity: str = "information") -> None:
        self.notifications.append((severity, message))

    async def prompt_user(self, title: str, candidates: list[str]) -> str | None:
        self.prompts.append((title, list(candidates)))
        if self.answers:
            return self.answers.pop(0)
        return None


@pytest.fixture
def wiki_root(tmp_path):
    """An empty wiki root directory."""
    root = tmp_path / "wiki"
    root.mkdir()
    return root


@pytest.fixture
def sample_wiki(wiki_root):
    """A wiki root with a few pages and an asset directory."""
    (wiki_root / "index.md").write_text("# index\n\n- [[beta]]\n- [[projects/alpha|Alpha]]\n")
    (wiki_root / "beta.md").write_text("# beta\n\nSee [[missing-page]].\n")
    projects = wiki_root / "projects"
    projects.mkdir()
    (projects / "alpha.md").write_text("# alpha\n\nNotes in [[/notes]]. Python rocks.\n")
    (projects / "alpha").mkdir()
    (projects / "alpha" / "notes.md").write_text("# notes\n")
    hidden = wiki_root / ".git"
    hidden.mkdir()
    (hidden / "ignored.md").write_text("ignored\n")
    return wiki_root


@pytest.fixture
def config(tmp_path, wiki_root):
    """A Config pointing at the wiki_root directory."""
    return Config(
        roots=[wiki_root],
        header_template="#+TITLE: %n\n#+DATE: %d",
        data_directory=tmp_path / "data",
        backup=BackupConfig(directory=tmp_path / "backups"),
    )


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def session(config, host):
    return WikiSession(config, host)
