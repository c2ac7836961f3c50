"""Page discovery, search and per-page assets."""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from .paths import asset_directory, wiki_path_of

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp"}


@dataclass
class SearchHit:
    """A page matching a search query."""

    wiki_path: str
    page_file: Path
    line_number: int  # 0 = matched on the page name
    line: str


def find_pages(root: Path, extension: str = "md") -> list[Path]:
    """Recursively find all page files under a wiki root."""
    if not root.exists():
        return []

    suffix = "." + extension.lstrip(".")
    pages = []
    try:
        for path in root.rglob(f"*{suffix}"):
            relative_parts = path.relative_to(root).parts
            if any(part.startswith(".") for part in relative_parts):
                continue
            if path.is_file():
                pages.append(path)
    except PermissionError:
        pass

    return sorted(pages)


def list_wiki_paths(root: Path, extension: str = "md") -> list[str]:
    """Get the wiki paths of all pages under a root."""
    return [wiki_path_of(page, root, extension) for page in find_pages(root, extension)]


def search_pages(root: Path, query: str, extension: str = "md") -> list[SearchHit]:
    """Search page names and contents by case-insensitive substring.

    Args:
        root: Wiki root
        query: Search query
        extension: Page file extension

    Returns:
        Hits ordered by page, then line; a name match comes first for its page
    """
    if not query.strip():
        return []

    query_lower = query.lower().strip()
    hits: list[SearchHit] = []

    for page_file in find_pages(root, extension):
        wiki_path = wiki_path_of(page_file, root, extension)
        if query_lower in wiki_path.lower():
            hits.append(SearchHit(wiki_path, page_file, 0, wiki_path))

        try:
            content = page_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable page %s: %s", page_file, e)
            continue

        for number, line in enumerate(content.splitlines(), start=1):
            if query_lower in line.lower():
                hits.append(SearchHit(wiki_path, page_file, number, line.strip()))

    return hits


def list_assets(page_file: Path, extension: str = "md") -> list[Path]:
    """List the files in a page's asset directory, creating it if needed."""
    assets = asset_directory(page_file, extension)
    assets.mkdir(parents=True, exist_ok=True)
    return sorted(p for p in assets.iterdir() if p.is_file())


def insert_asset(page_file: Path, source: Path, extension: str = "md") -> Path:
    """Copy a file into a page's asset directory.

    Returns:
        Path of the copy inside the asset directory
    """
    if not source.is_file():
        raise FileNotFoundError(f"Asset not found: {source}")

    assets = asset_directory(page_file, extension)
    assets.mkdir(parents=True, exist_ok=True)
    target = assets / source.name
    if source.resolve() != target.resolve():
        shutil.copy2(source, target)
    logger.info("Inserted asset %s into %s", source.name, assets)
    return target


def asset_link(page_file: Path, asset: Path) -> str:
    """Build a markdown link from a page to one of its assets."""
    relative = Path(os.path.relpath(asset, page_file.parent)).as_posix()
    if asset.suffix.lower() in IMAGE_EXTENSIONS:
        return f"![{asset.name}]({relative})"
    return f"[{asset.name}]({relative})"


def append_to_page(page_file: Path, text: str) -> None:
    """Append a line of text to a page."""
    content = page_file.read_text(encoding="utf-8") if page_file.exists() else ""
    if content and not content.endswith("\n"):
        content += "\n"
    page_file.write_text(content + text + "\n", encoding="utf-8")
