"""Wiki link parsing and rewriting."""

import re
from typing import Callable
from urllib.parse import quote, unquote

# Pattern to match wiki links: [[target]] or [[target|display text]]
WIKI_LINK_PATTERN = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")

# Scheme used for wiki links in converted markdown
WIKI_LINK_SCHEME = "wiki:"

BROKEN_LINK_MARKER = " (missing)"


def _split(match: re.Match) -> tuple[str, str]:
    target = match.group(1).strip()
    display = match.group(2)
    return target, display.strip() if display else target


def find_wiki_links(content: str) -> list[str]:
    """Get the targets of all wiki links in content, in order."""
    return [_split(match)[0] for match in WIKI_LINK_PATTERN.finditer(content)]


def preprocess_wiki_links(
    content: str, is_broken: Callable[[str], bool] | None = None
) -> str:
    """Convert wiki links to markdown links with the wiki: scheme.

    Converts:
        [[beta]] -> [beta](wiki:beta)
        [[my page]] -> [my page](wiki:my%20page)
        [[/notes|Notes]] -> [Notes](wiki:%2Fnotes)

    Links whose target is reported broken get a "(missing)" marker.
    """

    def replace_wiki_link(match: re.Match) -> str:
        target, display = _split(match)
        if is_broken is not None and is_broken(target):
            display += BROKEN_LINK_MARKER
        # URL-encode the target to handle spaces and special characters
        encoded_target = quote(target, safe="")
        return f"[{display}]({WIKI_LINK_SCHEME}{encoded_target})"

    return WIKI_LINK_PATTERN.sub(replace_wiki_link, content)


def to_html_links(content: str, href_for: Callable[[str], str]) -> str:
    """Convert wiki links to markdown links pointing at exported pages.

    Args:
        content: Page content
        href_for: Maps a wiki link target to the href of its HTML page
    """

    def replace_wiki_link(match: re.Match) -> str:
        target, display = _split(match)
        return f"[{display}]({quote(href_for(target))})"

    return WIKI_LINK_PATTERN.sub(replace_wiki_link, content)


def is_wiki_link(href: str) -> bool:
    """Check if a href is a wiki link (uses wiki: scheme)."""
    return href.startswith(WIKI_LINK_SCHEME)


def extract_wiki_target(href: str) -> str:
    """Extract the target from a wiki link href.

    Args:
        href: A wiki link href like "wiki:beta" or "wiki:my%20page"

    Returns:
        The target, e.g., "beta" or "my page" (URL-decoded)
    """
    if not is_wiki_link(href):
        return href
    encoded_target = href[len(WIKI_LINK_SCHEME) :]
    return unquote(encoded_target)
