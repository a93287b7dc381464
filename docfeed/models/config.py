from types import MappingProxyType
from typing import Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field


class SearchSource(BaseModel):
    """Where hits of one namespace live and how they are labelled."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    label: str


DEFAULT_SOURCES: Mapping[str, SearchSource] = MappingProxyType(
    {
        "open": SearchSource(base_url="http://docs.vespa.ai", label="Documentation"),
        "cloud": SearchSource(base_url="https://cloud.vespa.ai", label="Cloud"),
        "blog": SearchSource(base_url="https://blog.vespa.ai", label="Blog"),
        "vespaai": SearchSource(base_url="https://vespa.ai", label="Vespa.ai"),
        "vespaapps": SearchSource(
            base_url="https://github.com/vespa-engine/sample-apps/tree/master",
            label="Vespa Sample Apps",
        ),
    }
)


class SearchConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    namespace: str = Field(min_length=1, description="Namespace partitioning this site's documents.")
    sources: Dict[str, SearchSource] = Field(
        default_factory=lambda: dict(DEFAULT_SOURCES),
        description="Per-namespace base URL and label used when rendering hits.",
    )

    def source_table(self) -> Mapping[str, SearchSource]:
        return MappingProxyType(dict(self.sources))


class SiteConfig(BaseModel):
    """The subset of the site's ``_config.yml`` that the feed build reads."""

    model_config = ConfigDict(extra="ignore")

    search: SearchConfig
    exclude: List[str] = []
