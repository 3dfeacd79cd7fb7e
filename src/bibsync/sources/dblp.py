"""dblp search API client.

Search: ``GET https://dblp.org/search/publ/api?format=json&q={query}``
BibTeX: ``GET https://dblp.org/rec/{key}.bib?param=1``
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from bibsync.config.settings import Settings
from bibsync.core.constants import RETRYABLE_STATUSES
from bibsync.core.exceptions import ParseError
from bibsync.core.models import SearchHit
from bibsync.infrastructure.http import HTTPClient

logger = logging.getLogger(__name__)


def _as_list(value: Any) -> list:
    """dblp collapses single-element lists into bare objects."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class _Author(BaseModel):
    text: str


class _Authors(BaseModel):
    author: list[_Author] = Field(default_factory=list)

    @field_validator("author", mode="before")
    @classmethod
    def coerce_list(cls, value: Any) -> list:
        return _as_list(value)


class _Info(BaseModel):
    key: str
    title: str
    authors: _Authors = Field(default_factory=_Authors)
    venue: str | None = None
    year: str | None = None
    doi: str | None = None

    @field_validator("venue", mode="before")
    @classmethod
    def join_venues(cls, value: Any) -> Any:
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return value

    @field_validator("year", mode="before")
    @classmethod
    def year_as_str(cls, value: Any) -> Any:
        return str(value) if value is not None else None


class _Hit(BaseModel):
    info: _Info


class _Hits(BaseModel):
    hit: list[_Hit] = Field(default_factory=list)

    @field_validator("hit", mode="before")
    @classmethod
    def coerce_list(cls, value: Any) -> list:
        return _as_list(value)


class _Result(BaseModel):
    hits: _Hits = Field(default_factory=_Hits)


class SearchResponse(BaseModel):
    """Subset of the dblp publication search response."""

    result: _Result

    def to_hits(self) -> list[SearchHit]:
        return [
            SearchHit(
                key=hit.info.key,
                title=hit.info.title,
                authors=[author.text for author in hit.info.authors.author],
                venue=hit.info.venue,
                year=hit.info.year,
                doi=hit.info.doi,
            )
            for hit in self.result.hits.hit
        ]


class DblpClient:
    """dblp publication search client."""

    def __init__(self, settings: Settings, http: HTTPClient | None = None):
        self.config = settings.sources.dblp
        self._owns_http = http is None
        self.http = http or HTTPClient(
            timeout=settings.http.timeout,
            max_retries=self.config.max_retries,
            retryable_statuses=RETRYABLE_STATUSES,
        )

    def __enter__(self) -> "DblpClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def search(self, query: str) -> list[SearchHit]:
        """Search publications matching a free-text query."""
        logger.debug("Searching dblp for %r", query)
        resp = self.http.get(self.config.search_url, params={"format": "json", "q": query})
        try:
            payload = resp.json()
        except ValueError as exc:
            raise ParseError(f"dblp returned invalid JSON: {exc}") from exc
        try:
            hits = SearchResponse.model_validate(payload).to_hits()
        except ValidationError as exc:
            raise ParseError(f"Unexpected dblp response: {exc}") from exc
        logger.info("dblp returned %d hits for %r", len(hits), query)
        return hits

    def fetch_bibtex(self, key: str) -> str:
        """Download the BibTeX record for a dblp key."""
        url = self.config.bib_url_template.format(key=key)
        logger.debug("Downloading BibTeX from %s", url)
        return self.http.get_text(url)


__all__ = ["DblpClient", "SearchResponse"]
