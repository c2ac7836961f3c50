"""Tests for pagewiki.export module."""

from pagewiki.export import export_page, export_wiki, html_path, render_page


class TestRenderPage:
    def test_complete_document(self):
        document = render_page("# Hello", "hello", [])
        assert document.startswith("<!DOCTYPE html>")
        assert "<title>hello</title>" in document
        assert "<h1>Hello</h1>" in document

    def test_title_escaped(self):
        document = render_page("text", "<b>x</b>", [])
        assert "<title>&lt;b&gt;x&lt;/b&gt;</title>" in document

    def test_script_removed(self):
        document = render_page("<script>alert(1)</script>\n\ntext", "t", [])
        assert "alert(1)" not in document

    def test_extensions_enabled(self):
        table = "| a | b |\n|---|---|\n| 1 | 2 |\n"
        assert "<table>" in render_page(table, "t", ["tables"])
        assert "<table>" not in render_page(table, "t", [])

    def test_index_link(self):
        assert 'href="../index.html"' in render_page("x", "t", [], "../index.html")


class TestExportPage:
    def test_writes_html_next_to_page(self, sample_wiki):
        page = sample_wiki / "beta.md"
        output = export_page(page, sample_wiki)
        assert output == sample_wiki / "beta.html"
        assert output.exists()
        assert "<title>beta</title>" in output.read_text()

    def test_wiki_links_become_relative_html(self, sample_wiki):
        output = export_page(sample_wiki / "index.md", sample_wiki)
        content = output.read_text()
        assert 'href="beta.html"' in content
        assert 'href="projects/alpha.html"' in content
        assert ">Alpha</a>" in content

    def test_child_links_from_nested_page(self, sample_wiki):
        output = export_page(sample_wiki / "projects" / "alpha.md", sample_wiki)
        content = output.read_text()
        assert 'href="alpha/notes.html"' in content
        assert 'href="../index.html"' in content

    def test_html_path(self, sample_wiki):
        assert html_path(sample_wiki / "a" / "b.md") == sample_wiki / "a" / "b.html"


class TestExportWiki:
    def test_exports_every_page(self, sample_wiki):
        outputs = export_wiki(sample_wiki, extensions=["tables"])
        assert len(outputs) == 4
        assert all(p.suffix == ".html" and p.exists() for p in outputs)

    def test_empty_root(self, wiki_root):
        assert export_wiki(wiki_root) == []
