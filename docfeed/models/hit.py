from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class HitFields(BaseModel):
    model_config = ConfigDict(extra="ignore")

    namespace: str
    path: str
    content: str = ""
    title: Optional[str] = None
    summaryfeatures: Optional[Any] = None  # returned by the backend, not rendered


class Hit(BaseModel):
    """One search hit as returned by the search backend."""

    model_config = ConfigDict(extra="ignore")

    fields: HitFields


class RenderedResults(BaseModel):
    hits_label: str  # "3 hit(s)" or "No hits found!"
    html: str  # the result list markup; empty when there are no hits
