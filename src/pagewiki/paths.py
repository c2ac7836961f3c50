"""Mapping between wiki paths, page files and asset directories.

A wiki path is the extension-less name of a page as written in links:

    beta            -> <root>/beta.md
    projects/alpha  -> <root>/projects/alpha.md
    /notes          -> <current page's asset dir>/notes.md
    ../gamma        -> <current page's asset dir>/../gamma.md

None of these functions touch the file system.
"""

import os
import re
from pathlib import Path

# One or more leading "../" segments: resolved as a sibling of the current page
_PARENT_PREFIX = re.compile(r"^(\.\./)+")

INDEX_PAGE = "index"


def is_relative(wiki_path: str) -> bool:
    """Check if a wiki path resolves against the current page."""
    return bool(_PARENT_PREFIX.match(wiki_path)) or wiki_path.startswith("/")


def _suffix(extension: str) -> str:
    return "." + extension.lstrip(".")


def asset_directory(page_file: Path, extension: str = "md") -> Path:
    """Get the asset directory of a page: the page file without its extension.

    Only the page extension is stripped, so applying this twice is the same
    as applying it once.
    """
    suffix = _suffix(extension)
    name = page_file.name
    if name.endswith(suffix) and len(name) > len(suffix):
        return page_file.with_name(name[: -len(suffix)])
    return page_file


def page_name(page_file: Path, extension: str = "md") -> str:
    """Get the display name of a page (last path component, no extension)."""
    return asset_directory(page_file, extension).name


def resolve_path(
    wiki_path: str,
    current_file: Path | None,
    root: Path,
    extension: str = "md",
) -> Path:
    """Resolve a wiki path to the page file backing it.

    Args:
        wiki_path: Non-empty wiki path, absolute or relative
        current_file: The open page (only needed for relative paths)
        root: Active wiki root
        extension: Page file extension without the dot

    Returns:
        Normalized page file path; the file may not exist
    """
    if not wiki_path:
        raise ValueError("Wiki path must not be empty")

    if is_relative(wiki_path):
        if current_file is None:
            raise ValueError(f"Relative wiki path needs a current page: {wiki_path}")
        base = asset_directory(current_file, extension)
    else:
        base = root

    # String join so a leading "/" stays under base instead of replacing it
    joined = os.path.normpath(f"{base}/{wiki_path}")
    return Path(joined + _suffix(extension))


def wiki_path_of(page_file: Path, root: Path, extension: str = "md") -> str:
    """Get the wiki path of a page file relative to the root."""
    relative = os.path.relpath(asset_directory(page_file, extension), root)
    return Path(relative).as_posix()


def is_under_root(path: Path, root: Path) -> bool:
    """Check if a path lies inside the wiki root."""
    normalized = Path(os.path.normpath(path))
    return normalized.is_relative_to(Path(os.path.normpath(root)))
