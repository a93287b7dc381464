"""Tests for docfeed.services.extractor."""

from docfeed.models.page import Page
from docfeed.services.extractor import extract


def _page(content: str, name: str = "index.html", url: str = "/intro/") -> Page:
    return Page(url=url, path=f"intro/{name}", name=name, content=content, data={"index": True})


class TestExtractText:
    def test_example_page(self):
        result = extract(_page('<h1>Intro</h1><p>Hello <a href="/x">x</a></p>'))
        assert "Intro Hello x" in result.content
        assert len(result.content.split()) == 3

    def test_content_has_no_newlines(self):
        result = extract(_page("<p>one\ntwo\r\nthree</p><p>four</p>"))
        assert "\n" not in result.content
        assert "\r" not in result.content
        assert result.content.split() == ["one", "two", "three", "four"]

    def test_style_is_not_indexed(self):
        result = extract(_page("<style>.x { color: red }</style><p>Body</p>"))
        assert "color" not in result.content
        assert "Body" in result.content

    def test_script_is_not_indexed(self):
        result = extract(_page("<p>Visible</p><script>var hidden = 1;</script><p>Text</p>"))
        assert "hidden" not in result.content
        assert "var" not in result.content
        assert result.content.split() == ["Visible", "Text"]

    def test_no_break_space_is_kept(self):
        result = extract(_page("<p>a&nbsp;b</p>"))
        assert "a\xa0b" in result.content

    def test_table_cells_do_not_run_together(self):
        result = extract(_page("<table><tr><td>alpha</td><td>beta</td></tr></table>"))
        assert result.content.split() == ["alpha", "beta"]

    def test_shortcodes_are_stripped(self):
        result = extract(_page('<p>{% include note.html content="Hi there" %}</p>'))
        assert result.content.split() == ["Hi", "there"]

    def test_markdown_page(self):
        source = (
            "# Hello\n\n"
            "Some [link](/there) text.\n\n"
            "| A | B |\n|---|---|\n| 1 | 2 |\n"
        )
        result = extract(_page(source, name="index.md"))
        tokens = result.content.split()
        assert tokens[:5] == ["Hello", "Some", "link", "text.", "A"]
        assert "1" in tokens
        assert "2" in tokens


class TestExtractLinks:
    def test_keeps_order_and_duplicates(self):
        html = (
            '<a href="/a">1</a>'
            "<a>2</a>"
            '<a href="">3</a>'
            '<a href="/b">4</a>'
            '<a href="/a">5</a>'
        )
        assert extract(_page(html)).outlinks == ["/a", "/b", "/a"]

    def test_no_links(self):
        assert extract(_page("<p>No links.</p>")).outlinks == []

    def test_links_are_not_resolved(self):
        html = '<a href="../up.html">u</a><a href="https://example.com/">e</a><a href="#frag">f</a>'
        assert extract(_page(html)).outlinks == ["../up.html", "https://example.com/", "#frag"]

    def test_markdown_links(self):
        result = extract(_page("[one](/1) and [two](/2)", name="index.md"))
        assert result.outlinks == ["/1", "/2"]


class TestExtractHeaders:
    def test_levels_one_to_four_in_order(self):
        html = "<h2>Two</h2><h1>One</h1><h5>Five</h5><h3>Three</h3><h4>Four</h4><h6>Six</h6>"
        assert extract(_page(html)).headers == ["Two", "One", "Three", "Four"]

    def test_empty_headers_are_dropped(self):
        html = "<h1></h1><h2>Kept</h2><h3><span></span></h3>"
        assert extract(_page(html)).headers == ["Kept"]

    def test_newlines_in_headers_are_normalized(self):
        html = "<h2>Multi\nline</h2>"
        assert extract(_page(html)).headers == ["Multi line"]

    def test_separators_do_not_leak_into_headers(self):
        html = "<h2>A<br>B</h2>"
        assert extract(_page(html)).headers == ["AB"]

    def test_nested_markup_in_headers(self):
        html = '<h3>Install <code>docfeed</code></h3>'
        assert extract(_page(html)).headers == ["Install docfeed"]
