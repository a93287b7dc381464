"""Document feed generation: pages in, one JSON feed file out.

The run is a single pass.  Each page is checked for eligibility, extracted,
and appended to the batch in input order; the whole batch is then written
once.  Any error aborts the run: no partial feed is ever written, and a feed
left over from an earlier run stays untouched.
"""

import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

from docfeed.errors import ConfigurationError
from docfeed.models.document import DocumentFields, FeedOperation
from docfeed.models.page import Page
from docfeed.services.extractor import extract

logger = logging.getLogger(__name__)

# Source paths under these prefixes are site assets, never content
_SKIP_PATH_PREFIXES = ("css/",)

# Generated artifacts the site publishes as pages
_SKIP_URL_PREFIXES = ("/redirects.json",)


def _is_site_infrastructure(page: Page) -> bool:
    return page.path.startswith(_SKIP_PATH_PREFIXES) or page.url.startswith(_SKIP_URL_PREFIXES)


def is_empty(page: Page) -> bool:
    """Return True for pages with neither body content nor a title.

    Client-side redirect stubs generated by the site look like this.
    """
    return page.content == "" and not page.data.get("title")


def is_eligible(page: Page) -> bool:
    if _is_site_infrastructure(page) or is_empty(page):
        return False
    return page.data.get("index") is True


def document_path(url: str) -> str:
    """Rewrite a directory URL to reference its index resource."""
    if url.endswith("/"):
        return url + "index.html"
    return url


def _validate_namespace(namespace: Optional[str]) -> str:
    if not namespace or not namespace.strip():
        raise ConfigurationError("A search namespace is required to build the document feed.")
    return namespace


def build_operation(page: Page, namespace: str, last_updated: int) -> FeedOperation:
    """Extract *page* and wrap the result in an upsert operation."""
    extracted = extract(page)
    path = document_path(page.url)
    fields = DocumentFields(
        path=path,
        namespace=namespace,
        title=page.title,
        content=extracted.content,
        # Any Unicode whitespace, U+00A0 included, separates terms
        term_count=len(extracted.content.split()),
        last_updated=last_updated,
        outlinks=extracted.outlinks,
        headers=extracted.headers,
    )
    return FeedOperation(put=FeedOperation.document_id(namespace, path), fields=fields)


def build_feed(
    pages: Iterable[Page],
    namespace: Optional[str],
    now: Optional[int] = None,
) -> List[FeedOperation]:
    """Build the ordered batch of upsert operations for *pages*.

    Args:
        pages:      Pages in site order.
        namespace:  Run-wide namespace; required.
        now:        Unix timestamp stamped on every document (default: the
                    current time, taken once per run).

    Raises:
        ConfigurationError: if *namespace* is missing, before any page is read.
        PageParseError:     if any page cannot be parsed.
    """
    namespace = _validate_namespace(namespace)
    last_updated = int(time.time()) if now is None else now

    operations: List[FeedOperation] = []
    skipped = 0
    for page in pages:
        if not is_eligible(page):
            logger.debug("Feed: skipping %s", page.url)
            skipped += 1
            continue
        operations.append(build_operation(page, namespace, last_updated))

    logger.info(
        "Feed: %d document(s) built for namespace '%s', %d page(s) skipped",
        len(operations),
        namespace,
        skipped,
    )
    return operations


def feed_filename(namespace: str) -> str:
    return f"{namespace}_index.json"


def serialize_feed(operations: List[FeedOperation]) -> str:
    return json.dumps([op.to_feed_dict() for op in operations], ensure_ascii=False, indent=2)


def write_feed(
    operations: List[FeedOperation],
    namespace: str,
    output_dir: Union[str, Path] = ".",
) -> Path:
    """Serialize *operations* to ``<output_dir>/<namespace>_index.json``.

    The feed is written to a temporary file in *output_dir* and moved into
    place, so the target is either the complete new feed or whatever was
    there before.

    Returns:
        The path of the written feed.
    """
    namespace = _validate_namespace(namespace)
    output_dir = Path(output_dir)
    target = output_dir / feed_filename(namespace)

    payload = serialize_feed(operations)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{namespace}_index.", suffix=".tmp", dir=output_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_name, target)
    except BaseException:
        os.unlink(tmp_name)
        raise

    logger.info("Feed: wrote %d operation(s) to %s", len(operations), target)
    return target


def generate(
    pages: Iterable[Page],
    namespace: Optional[str],
    output_dir: Union[str, Path] = ".",
    now: Optional[int] = None,
) -> Path:
    """Build the feed for *pages* and write it; the whole run in one call."""
    operations = build_feed(pages, namespace, now=now)
    return write_feed(operations, namespace, output_dir)
