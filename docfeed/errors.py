class DocfeedError(Exception):
    """Base class for errors that abort a feed build."""


class ConfigurationError(DocfeedError, ValueError):
    """The run configuration is missing or invalid (e.g. no namespace)."""


class PageParseError(DocfeedError, RuntimeError):
    """A page's markup could not be parsed into a document tree."""

    def __init__(self, page_path: str, reason: str) -> None:
        super().__init__(f"Failed to parse {page_path}: {reason}")
        self.page_path = page_path
