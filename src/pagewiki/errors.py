"""Error types raised by wiki operations."""

from pathlib import Path


class WikiError(Exception):
    """Base class for errors that abort a wiki command."""


class RootUnconfigured(WikiError):
    """No wiki root is active and none can be defaulted from the config."""

    def __init__(self) -> None:
        super().__init__("No wiki root configured. Add one to `roots` in config.toml.")


class RootMissing(WikiError):
    """The selected wiki root does not exist on disk."""

    def __init__(self, root: Path) -> None:
        super().__init__(f"Wiki root does not exist: {root}")
        self.root = root


class NotAWikiBuffer(WikiError):
    """An operation needing a wiki page ran without one open."""

    def __init__(self, path: Path | None) -> None:
        if path is None:
            message = "No wiki page is open"
        else:
            message = f"Not a wiki page: {path}"
        super().__init__(message)
        self.path = path


class ExternalToolFailure(WikiError):
    """An external process (archiver, server) failed."""

    def __init__(self, tool: str, returncode: int | None, detail: str = "") -> None:
        message = f"{tool} failed"
        if returncode is not None:
            message += f" (exit {returncode})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.tool = tool
        self.returncode = returncode
        self.detail = detail
