from typing import List, NamedTuple

from bs4 import BeautifulSoup

from docfeed.models.page import Page
from docfeed.services.cleaner import clean_text, normalize_newlines
from docfeed.services.sanitizer import parse_page, prepare_for_text

_HEADER_TAGS = ["h1", "h2", "h3", "h4"]


class ExtractedPage(NamedTuple):
    content: str
    outlinks: List[str]
    headers: List[str]


def extract_links(soup: BeautifulSoup) -> List[str]:
    """Return every hyperlink target in document order.

    Missing and empty hrefs are dropped; duplicates are kept.
    """
    links: List[str] = []
    for a in soup.find_all("a"):
        href = a.get("href")
        if href:
            links.append(str(href))
    return links


def extract_headers(soup: BeautifulSoup) -> List[str]:
    headers: List[str] = []
    for heading in soup.find_all(_HEADER_TAGS):
        text = normalize_newlines(heading.get_text())
        if text:
            headers.append(text)
    return headers


def extract_text(soup: BeautifulSoup) -> str:
    """Return the cleaned plain text of *soup*.

    Mutates *soup*: separators are inserted and ``<style>`` subtrees removed.
    """
    prepare_for_text(soup)
    return clean_text(soup.get_text())


def extract(page: Page) -> ExtractedPage:
    """Extract text, links and headers from one page.

    Links and headers are read before the tree is prepared for text
    extraction so the inserted separators never leak into them.

    Raises:
        PageParseError: if the page markup cannot be parsed.
    """
    soup = parse_page(page)
    outlinks = extract_links(soup)
    headers = extract_headers(soup)
    content = extract_text(soup)
    return ExtractedPage(content=content, outlinks=outlinks, headers=headers)
