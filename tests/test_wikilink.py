"""Tests for pagewiki.wikilink module."""

from pagewiki.wikilink import (
    extract_wiki_target,
    find_wiki_links,
    is_wiki_link,
    preprocess_wiki_links,
    to_html_links,
)


class TestFindWikiLinks:
    def test_targets_in_order(self):
        content = "See [[beta]] and [[projects/alpha|Alpha]] and [[ /notes ]]."
        assert find_wiki_links(content) == ["beta", "projects/alpha", "/notes"]

    def test_no_links(self):
        assert find_wiki_links("[regular](link.md)") == []


class TestPreprocessWikiLinks:
    def test_plain_link(self):
        assert preprocess_wiki_links("[[beta]]") == "[beta](wiki:beta)"

    def test_display_text(self):
        assert preprocess_wiki_links("[[beta|The Beta]]") == "[The Beta](wiki:beta)"

    def test_target_is_encoded(self):
        assert preprocess_wiki_links("[[my page]]") == "[my page](wiki:my%20page)"
        assert preprocess_wiki_links("[[/notes]]") == "[/notes](wiki:%2Fnotes)"

    def test_broken_link_marked(self):
        result = preprocess_wiki_links("[[gone]] [[here]]", lambda t: t == "gone")
        assert result == "[gone (missing)](wiki:gone) [here](wiki:here)"


class TestWikiHref:
    def test_round_trip(self):
        href = "wiki:my%20page"
        assert is_wiki_link(href)
        assert extract_wiki_target(href) == "my page"

    def test_other_hrefs_untouched(self):
        assert not is_wiki_link("https://example.com")
        assert extract_wiki_target("https://example.com") == "https://example.com"


class TestToHtmlLinks:
    def test_uses_href_mapping(self):
        result = to_html_links("[[beta|B]] [[x y]]", lambda t: f"../{t}.html")
        assert result == "[B](../beta.html) [x y](../x%20y.html)"
