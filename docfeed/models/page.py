from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Source file extensions that carry lightweight markup rather than HTML
MARKDOWN_EXTENSIONS = {"md", "markdown"}


class Page(BaseModel):
    """One unit of site content as supplied by the site generator."""

    model_config = ConfigDict(frozen=True)

    url: str  # served URL path, e.g. "/intro/"
    path: str  # source path relative to the site root, e.g. "intro/index.md"
    name: str  # source file name; its extension selects the markup dialect
    content: str = ""  # raw page body (front matter removed)
    data: Dict[str, Any] = Field(default_factory=dict)  # front matter

    @property
    def extension(self) -> str:
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[1].lower()

    @property
    def is_markdown(self) -> bool:
        return self.extension in MARKDOWN_EXTENSIONS

    @property
    def title(self) -> Optional[str]:
        title = self.data.get("title")
        return None if title is None else str(title)
