"""Tests for widget helpers that do not need a running app."""

from pathlib import Path

from pagewiki.widgets.banner import build_banner
from pagewiki.widgets.picker import filter_candidates
from pagewiki.widgets.preview import load_page_content


class TestFilterCandidates:
    def test_empty_query_keeps_all(self):
        assert filter_candidates(["a", "b"], "  ") == ["a", "b"]

    def test_all_words_must_match(self):
        candidates = ["projects/alpha", "projects/beta", "alpha notes"]
        assert filter_candidates(candidates, "proj ALPHA") == ["projects/alpha"]

    def test_no_match(self):
        assert filter_candidates(["beta"], "gamma") == []


class TestLoadPageContent:
    def test_rewrites_links(self, tmp_path):
        page = tmp_path / "p.md"
        page.write_text("[[beta]] [[gone]]")
        content, error = load_page_content(page, lambda target: target == "gone")
        assert error is None
        assert content == "[beta](wiki:beta) [gone (missing)](wiki:gone)"

    def test_unreadable_page(self, tmp_path):
        content, error = load_page_content(tmp_path / "missing.md")
        assert content is None
        assert error.startswith("*Error reading page")


class TestBanner:
    def test_without_root(self):
        assert "no wiki root" in build_banner(None).plain

    def test_with_root_and_server(self):
        text = build_banner(Path("/wiki"), "http://localhost:8000/").plain
        assert "/wiki" in text
        assert "serving http://localhost:8000/" in text
