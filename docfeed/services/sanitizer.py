import markdown
from bs4 import BeautifulSoup, ParserRejectedMarkup

from docfeed.errors import PageParseError
from docfeed.models.page import Page

# Python-Markdown extensions approximating the site's Markdown dialect;
# ``tables`` matters because cells are separated before text extraction.
_MARKDOWN_EXTENSIONS = ["tables", "fenced_code"]

# Table cells get a newline appended so adjacent cells do not run together
_CELL_TAGS = {"th", "td"}

# Block-level elements get the same treatment: "<h1>A</h1><p>B</p>" reads "A B"
_BLOCK_TAGS = {
    "address",
    "blockquote",
    "br",
    "dd",
    "div",
    "dt",
    "figcaption",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "li",
    "p",
    "pre",
    "tr",
}

# Tags whose entire subtree never contributes to indexed text
_REMOVE_TAGS = {"style"}


def markdown_to_html(text: str) -> str:
    """Render Markdown source to an HTML fragment."""
    return markdown.markdown(text, extensions=_MARKDOWN_EXTENSIONS)


def parse_page(page: Page) -> BeautifulSoup:
    """Parse *page* into a BeautifulSoup tree according to its markup dialect.

    Markdown sources are rendered to HTML first; anything else is parsed as
    HTML directly.

    Raises:
        PageParseError: if the parser rejects the markup.
    """
    html = markdown_to_html(page.content) if page.is_markdown else page.content
    try:
        return BeautifulSoup(html, "lxml")
    except ParserRejectedMarkup as exc:
        raise PageParseError(page.path, str(exc)) from exc


def prepare_for_text(soup: BeautifulSoup) -> BeautifulSoup:
    """Mutate *soup* in place so its text nodes read well when concatenated."""
    for tag in soup.find_all(_CELL_TAGS | _BLOCK_TAGS):
        tag.insert_after("\n")

    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()

    return soup
