from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class DocumentFields(BaseModel):
    """Index-ready record derived from one eligible page."""

    path: str
    namespace: str
    title: Optional[str] = None
    content: str
    term_count: int
    last_updated: int  # Unix timestamp of the feed run
    outlinks: List[str] = []
    headers: List[str] = []

    def to_feed_dict(self) -> Dict[str, Any]:
        """Return the fields as emitted in the feed.

        ``outlinks`` is left out entirely when there are none; consumers
        distinguish a missing field from an empty list.
        """
        exclude = None if self.outlinks else {"outlinks"}
        return self.model_dump(exclude=exclude)


class FeedOperation(BaseModel):
    """A single upsert operation in the document feed."""

    put: str
    fields: DocumentFields

    @staticmethod
    def document_id(namespace: str, path: str) -> str:
        return f"id:{namespace}:doc::{namespace}{path}"

    def to_feed_dict(self) -> Dict[str, Any]:
        return {"put": self.put, "fields": self.fields.to_feed_dict()}
