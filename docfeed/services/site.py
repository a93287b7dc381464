"""Read a Jekyll-style site checkout: its ``_config.yml`` and its pages.

Only what the feed build needs is reproduced.  A page is any file carrying
a YAML front-matter block; files and directories whose names start with
``_`` or ``.`` are site internals and are not walked, and paths listed
under ``exclude`` in the config are skipped.
"""

import fnmatch
import logging
import re
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from docfeed.errors import ConfigurationError, PageParseError
from docfeed.models.config import SiteConfig
from docfeed.models.page import MARKDOWN_EXTENSIONS, Page

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "_config.yml"

_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?\r?\n)??(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


def load_config(path: Union[str, Path], namespace: Optional[str] = None) -> SiteConfig:
    """Load and validate the site configuration at *path*.

    *namespace*, when given, overrides ``search.namespace`` and allows the
    config file to be absent altogether.

    Raises:
        ConfigurationError: if the file is unreadable or invalid, or no
            namespace is configured.
    """
    path = Path(path)
    raw: Dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Unable to read {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigurationError(f"{path} must contain a mapping at the top level.")
    elif namespace is None:
        raise ConfigurationError(f"Site configuration {path} not found.")

    if namespace is not None:
        search = raw.get("search") or {}
        if not isinstance(search, dict):
            raise ConfigurationError("search must be a mapping.")
        raw = {**raw, "search": {**search, "namespace": namespace}}

    if not raw.get("search"):
        raise ConfigurationError("search.namespace is not configured.")

    try:
        return SiteConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid site configuration: {exc}") from exc


def split_front_matter(text: str) -> Optional[Tuple[Dict[str, Any], str]]:
    """Split *text* into its front matter and body.

    Returns:
        ``(front_matter, body)``, or *None* when *text* has no front matter.

    Raises:
        ValueError: if the front matter is not a YAML mapping.
    """
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return None
    try:
        data = yaml.safe_load(match.group(1) or "") or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid front matter: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("front matter must be a mapping")
    return data, text[match.end():]


def page_url(rel_path: str, data: Dict[str, Any]) -> str:
    """Return the URL a page at *rel_path* is served from."""
    permalink = data.get("permalink")
    if permalink:
        permalink = str(permalink)
        return permalink if permalink.startswith("/") else "/" + permalink

    path = PurePosixPath(rel_path)
    parent = "" if str(path.parent) == "." else f"{path.parent}/"
    if path.stem == "index":
        return f"/{parent}"
    suffix = path.suffix
    if suffix.lstrip(".").lower() in MARKDOWN_EXTENSIONS:
        suffix = ".html"
    return f"/{parent}{path.stem}{suffix}"


def _is_excluded(rel_path: str, exclude: Iterable[str]) -> bool:
    for pattern in exclude:
        pattern = pattern.strip("/")
        if rel_path == pattern or rel_path.startswith(pattern + "/"):
            return True
        if fnmatch.fnmatch(rel_path, pattern):
            return True
    return False


def _walk(directory: Path) -> Iterable[Path]:
    for entry in sorted(directory.iterdir()):
        if entry.name.startswith(("_", ".")):
            continue
        if entry.is_dir():
            yield from _walk(entry)
        elif entry.is_file():
            yield entry


def load_page(file_path: Path, rel_path: str) -> Optional[Page]:
    """Load the page at *file_path*, or return *None* if it has no front matter.

    Raises:
        PageParseError: if the file is not UTF-8 or its front matter is invalid.
    """
    with open(file_path, "rb") as f:
        raw = f.read()
    if not raw.startswith(b"---"):
        return None

    try:
        text = raw.decode("utf-8")
        parts = split_front_matter(text)
    except ValueError as exc:
        raise PageParseError(rel_path, str(exc)) from exc
    if parts is None:
        return None

    data, body = parts
    return Page(
        url=page_url(rel_path, data),
        path=rel_path,
        name=file_path.name,
        content=body,
        data=data,
    )


def load_pages(source_dir: Union[str, Path], exclude: Iterable[str] = ()) -> List[Page]:
    """Load every page under *source_dir* in sorted path order."""
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        raise ConfigurationError(f"Site source {source_dir} is not a directory.")

    exclude = list(exclude)
    pages: List[Page] = []
    for file_path in _walk(source_dir):
        rel_path = file_path.relative_to(source_dir).as_posix()
        if _is_excluded(rel_path, exclude):
            logger.debug("Site: excluded %s", rel_path)
            continue
        page = load_page(file_path, rel_path)
        if page is not None:
            pages.append(page)

    logger.info("Site: loaded %d page(s) from %s", len(pages), source_dir)
    return pages
