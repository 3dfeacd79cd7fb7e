"""Sci-Hub scrape-then-fetch source."""

import logging
from urllib.parse import urljoin

from bibsync.config.settings import Settings
from bibsync.core.exceptions import ParseError
from bibsync.infrastructure.http import HTTPClient

from .base import BaseSource, SourceRegistry

logger = logging.getLogger(__name__)

EMBED_MARKER = 'embed type="application/pdf" src="'
SRC_TOKEN = 'src="'


def extract_embedded_pdf_url(page: str) -> str | None:
    """Return the ``src`` of the first embedded PDF viewer tag in ``page``, if any.

    The page is scanned line by line; only the first line carrying the
    marker is considered.
    """
    for line in page.splitlines():
        if EMBED_MARKER not in line:
            continue
        _, _, rest = line.partition(SRC_TOKEN)
        url, _, _ = rest.partition('"')
        return url or None
    return None


def resolve_document_url(url: str, origin: str) -> str:
    """Resolve a relative document URL against ``origin``; absolute URLs pass through."""
    if url.startswith("/"):
        return urljoin(origin.rstrip("/") + "/", url)
    return url


@SourceRegistry.register(priority=100)
class SciHubSource(BaseSource):
    """Fallback source: scrapes the landing page for the embedded PDF."""

    def __init__(self, settings: Settings, http: HTTPClient | None = None):
        super().__init__(settings, http=http)
        self.config = settings.sources.scihub

    @property
    def name(self) -> str:
        return "scihub"

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def handles(self, identifier: str) -> bool:
        return True

    def landing_url(self, identifier: str) -> str:
        return f"{self.config.origin}/{identifier}"

    def find_pdf_url(self, identifier: str) -> str:
        page = self.http.get_text(self.landing_url(identifier))
        pdf_url = extract_embedded_pdf_url(page)
        if pdf_url is None:
            raise ParseError(f"Could not locate embedded document reference for {identifier}")
        logger.debug("PDF url found: %s", pdf_url)
        return resolve_document_url(pdf_url, self.config.origin)

    def fetch_pdf(self, identifier: str) -> bytes:
        pdf_url = self.find_pdf_url(identifier)
        logger.debug("Fetching PDF from %s", pdf_url)
        return self.http.get_bytes(pdf_url)


__all__ = ["SciHubSource", "extract_embedded_pdf_url", "resolve_document_url"]
