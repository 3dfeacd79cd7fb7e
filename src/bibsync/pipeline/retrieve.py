"""Document retrieval pipeline."""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from bibsync.config.settings import Settings
from bibsync.core.exceptions import BibsyncError, MissingIdentifierError
from bibsync.core.models import BibliographyEntry, FetchOutcome, FetchStatus, RetrievalReport
from bibsync.infrastructure.http import HTTPClient
from bibsync.infrastructure.storage import PdfCache
from bibsync.sources.base import BaseSource, get_enabled_sources

logger = logging.getLogger(__name__)


class RetrievalRouter:
    """Routes entries to the first source that handles their identifier.

    Sources are consulted in order, so a catch-all source belongs last.
    ``http``, when given, is the client the router owns and closes.
    """

    def __init__(self, cache: PdfCache, sources: Iterable[BaseSource], http: HTTPClient | None = None):
        self.cache = cache
        self.sources = list(sources)
        self.http = http

    def __enter__(self) -> "RetrievalRouter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client owned by this router, if any."""
        if self.http is not None:
            self.http.close()

    def select_source(self, identifier: str) -> BaseSource | None:
        for source in self.sources:
            if source.handles(identifier):
                return source
        return None

    def resolve_and_fetch(self, entry: BibliographyEntry) -> FetchOutcome:
        """Fetch the document for one entry unless it is already cached.

        Source failures are returned as a failed outcome, never raised.
        Filesystem errors while writing the cache propagate.
        """
        title = entry.display_title
        identifier = entry.identifier
        if not identifier:
            error = MissingIdentifierError(f"Entry '{entry.key}' has no DOI")
            logger.warning("Failed to extract DOI for %s: %s", title, error)
            return FetchOutcome(entry.key, title, FetchStatus.FAILED, error=error)

        if self.cache.contains(identifier):
            path = self.cache.path_for(identifier)
            logger.debug("Skipping %s, already exists", path)
            return FetchOutcome(entry.key, title, FetchStatus.CACHED, identifier=identifier, path=path)

        source = self.select_source(identifier)
        if source is None:
            error = BibsyncError(f"No enabled source handles {identifier}")
            logger.warning("Failed to download PDF for %s (%s): %s", title, identifier, error)
            return FetchOutcome(entry.key, title, FetchStatus.FAILED, identifier=identifier, error=error)

        try:
            content = source.fetch_pdf(identifier)
        except BibsyncError as exc:
            logger.warning("Failed to download PDF for %s (%s) from %s: %s", title, identifier, source.name, exc)
            return FetchOutcome(
                entry.key,
                title,
                FetchStatus.FAILED,
                identifier=identifier,
                source=source.name,
                error=exc,
            )

        path = self.cache.store(identifier, content)
        logger.info("Downloaded PDF %s", path)
        return FetchOutcome(
            entry.key,
            title,
            FetchStatus.DOWNLOADED,
            identifier=identifier,
            path=path,
            source=source.name,
        )

    def fetch_all(
        self,
        entries: Iterable[BibliographyEntry],
        *,
        on_progress: Callable[[FetchOutcome], None] | None = None,
    ) -> RetrievalReport:
        """Resolve every entry in turn; one entry's failure never stops the batch."""
        report = RetrievalReport()
        for entry in entries:
            outcome = self.resolve_and_fetch(entry)
            report.add(outcome)
            if on_progress:
                on_progress(outcome)

        logger.info(
            "Retrieval finished: %d downloaded, %d cached, %d failed",
            report.downloaded,
            report.cached,
            report.failed,
        )
        return report


def build_router(settings: Settings, pdf_dir: Path | str, http: HTTPClient | None = None) -> RetrievalRouter:
    """Create a router over the enabled sources in routing order.

    All sources share one HTTP client. When ``http`` is not given the router
    creates it and closes it in ``close``.
    """
    owned = None
    if http is None:
        http = owned = HTTPClient(
            headers={"User-Agent": settings.http.user_agent},
            timeout=settings.http.timeout,
        )
    sources = get_enabled_sources(settings, http=http)
    if not sources:
        logger.warning("No enabled document sources found")
    return RetrievalRouter(PdfCache(pdf_dir), sources, http=owned)


__all__ = ["RetrievalRouter", "build_router"]
