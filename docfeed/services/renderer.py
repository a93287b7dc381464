"""Render search hits into the HTML shown on the search results page.

Hit titles and contents come back from the search backend with match
highlighting (``<hi>...</hi>``) and snippet separators (``<sep />``); these
are turned into ``<mark>`` elements and ellipses respectively.  Each hit
becomes a ``<li class="media">`` entry linking to the page on the site its
namespace belongs to.
"""

from typing import Any, Iterable, Mapping, Union

from bs4 import BeautifulSoup, Tag

from docfeed.models.config import DEFAULT_SOURCES, SearchSource
from docfeed.models.hit import Hit, RenderedResults

NO_HITS_MESSAGE = "No hits found!"
NO_TITLE = "No title"

_SEPARATOR = "<sep />"
_ELLIPSIS = " ... "


def _highlight(text: str) -> str:
    return text.replace("<hi>", "<mark>").replace("</hi>", "</mark>")


def _append_markup(tag: Tag, markup: str) -> None:
    """Parse *markup* as an HTML fragment and append its nodes to *tag*."""
    fragment = BeautifulSoup(markup, "html.parser")
    for node in list(fragment.contents):
        tag.append(node.extract())


def _resolve_source(namespace: str, sources: Mapping[str, SearchSource]) -> SearchSource:
    source = sources.get(namespace)
    if source is None:
        # Unknown namespace: link relative to the current site
        return SearchSource(base_url="", label=namespace)
    return source


def _render_hit(soup: BeautifulSoup, hit: Hit, sources: Mapping[str, SearchSource]) -> Tag:
    fields = hit.fields
    source = _resolve_source(fields.namespace, sources)
    url = source.base_url + fields.path

    content = _highlight(fields.content.replace(_SEPARATOR, _ELLIPSIS))
    if fields.title is None or fields.title == "null":
        title = NO_TITLE
    else:
        title = _highlight(fields.title)

    list_item = soup.new_tag("li", attrs={"class": "media"})

    header = soup.new_tag("h4")
    link = soup.new_tag("a", href=url)
    _append_markup(link, title)
    header.append(link)

    paragraph = soup.new_tag("p")
    _append_markup(paragraph, content)
    paragraph.append(soup.new_tag("br"))
    caption = soup.new_tag("small", attrs={"class": "text-success"})
    caption.string = f"{source.label}: {fields.path}"
    paragraph.append(caption)

    list_item.append(header)
    list_item.append(paragraph)
    return list_item


def render(
    hits: Iterable[Union[Hit, Mapping[str, Any]]],
    sources: Mapping[str, SearchSource] = DEFAULT_SOURCES,
) -> RenderedResults:
    """Render *hits* as a result list.

    Args:
        hits:     Hits in rank order, as :class:`Hit` models or raw dicts
                  shaped like the backend's ``{"fields": {...}}`` entries.
        sources:  Namespace to base URL / label table.

    Returns:
        :class:`RenderedResults` with the hit-count label and the list markup.
        When there are no hits the label reads ``"No hits found!"`` and no list
        is produced.
    """
    parsed = [h if isinstance(h, Hit) else Hit.model_validate(h) for h in hits]
    if not parsed:
        return RenderedResults(hits_label=NO_HITS_MESSAGE, html="")

    soup = BeautifulSoup("", "html.parser")
    unordered_list = soup.new_tag("ul", attrs={"class": "media-list"})
    soup.append(unordered_list)

    for hit in parsed:
        unordered_list.append(_render_hit(soup, hit, sources))

    return RenderedResults(hits_label=f"{len(parsed)} hit(s)", html=str(soup))
