"""Export wiki pages to HTML."""

import html
import logging
import os
import re
from pathlib import Path

import markdown

from .pages import find_pages
from .paths import page_name, resolve_path
from .wikilink import to_html_links

logger = logging.getLogger(__name__)

# Pattern to match dangerous HTML tags (script, iframe, object, embed, etc.)
_DANGEROUS_TAGS_PATTERN = re.compile(
    r"<\s*(script|iframe|object|embed|form|input|button|textarea|select|style|link|meta|base)[^>]*>.*?</\s*\1\s*>|"
    r"<\s*(script|iframe|object|embed|form|input|button|textarea|select|style|link|meta|base)[^>]*/?\s*>",
    re.IGNORECASE | re.DOTALL,
)

# Pattern to match dangerous attributes (onclick, onerror, javascript:, etc.)
_DANGEROUS_ATTRS_PATTERN = re.compile(
    r'\s(on\w+|href\s*=\s*["\']?\s*javascript:|src\s*=\s*["\']?\s*javascript:)[^>]*',
    re.IGNORECASE,
)


def _sanitize_html(html_content: str) -> str:
    """Remove dangerous HTML tags and attributes from rendered pages."""
    result = _DANGEROUS_TAGS_PATTERN.sub("", html_content)
    return _DANGEROUS_ATTRS_PATTERN.sub(" ", result)


# CSS styling for exported pages
EXPORT_CSS = """
body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
    line-height: 1.6;
    max-width: 820px;
    margin: 0 auto;
    padding: 2rem;
    color: #2b2b2b;
}

nav.wiki-nav {
    font-size: 0.9em;
    border-bottom: 1px solid #eee;
    margin-bottom: 1.5em;
}

h1, h2, h3 { font-weight: 600; margin-top: 1.4em; }
h1 { border-bottom: 1px solid #eee; padding-bottom: 0.3em; }

code, pre {
    background-color: #f6f8fa;
    font-family: "SF Mono", Consolas, Menlo, monospace;
    font-size: 0.9em;
}

pre { padding: 1em; border-radius: 6px; overflow-x: auto; }
pre code { background: none; }

a { color: #0366d6; text-decoration: none; }
a:hover { text-decoration: underline; }

table { border-collapse: collapse; margin: 1em 0; }
th, td { border: 1px solid #ddd; padding: 0.4em 0.6em; }

img { max-width: 100%; }
"""


def html_path(page_file: Path) -> Path:
    """Get the output path of an exported page (page file with .html)."""
    return page_file.with_suffix(".html")


def render_page(
    content: str,
    title: str,
    extensions: list[str],
    index_href: str | None = None,
) -> str:
    """Convert page markdown to a complete HTML document.

    Args:
        content: Markdown content with wiki links already rewritten
        title: Document title
        extensions: Markdown extensions to enable
        index_href: Link to the index page shown above the content

    Returns:
        Complete HTML document string
    """
    md = markdown.Markdown(extensions=extensions)
    html_body = _sanitize_html(md.convert(content))

    # Escape title to prevent injection into <title> tag
    safe_title = html.escape(title)

    nav = ""
    if index_href:
        nav = f'<nav class="wiki-nav"><a href="{html.escape(index_href)}">Index</a></nav>\n'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{safe_title}</title>
    <style>
{EXPORT_CSS}
    </style>
</head>
<body>
{nav}{html_body}
</body>
</html>
"""


def _relative_href(target: Path, page_file: Path) -> str:
    return Path(os.path.relpath(target, page_file.parent)).as_posix()


def export_page(
    page_file: Path,
    root: Path,
    extension: str = "md",
    extensions: list[str] | None = None,
) -> Path:
    """Export a single page to HTML next to the page file.

    Args:
        page_file: Page to export
        root: Wiki root (for resolving wiki links)
        extension: Page file extension
        extensions: Markdown extensions to enable

    Returns:
        Path to the exported HTML file
    """
    if extensions is None:
        extensions = []

    def href_for(target: str) -> str:
        if not target:
            return "#"
        linked = resolve_path(target, page_file, root, extension)
        return _relative_href(html_path(linked), page_file)

    content = page_file.read_text(encoding="utf-8")
    content = to_html_links(content, href_for)

    index_file = resolve_path("index", None, root, extension)
    index_href = None
    if index_file != page_file:
        index_href = _relative_href(html_path(index_file), page_file)

    output_path = html_path(page_file)
    document = render_page(content, page_name(page_file, extension), extensions, index_href)
    output_path.write_text(document, encoding="utf-8")
    logger.info("Exported %s", output_path)
    return output_path


def export_wiki(
    root: Path,
    extension: str = "md",
    extensions: list[str] | None = None,
) -> list[Path]:
    """Export every page under a root.

    Returns:
        Paths of the exported HTML files
    """
    return [
        export_page(page_file, root, extension, extensions)
        for page_file in find_pages(root, extension)
    ]
