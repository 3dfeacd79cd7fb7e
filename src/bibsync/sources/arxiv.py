"""arXiv direct-fetch source."""

import logging

from bibsync.config.settings import Settings
from bibsync.core.exceptions import ParseError
from bibsync.infrastructure.http import HTTPClient

from .base import BaseSource, SourceRegistry

logger = logging.getLogger(__name__)

ARXIV_DOI_MARKER = "/ARXIV."


def is_arxiv(identifier: str) -> bool:
    """Whether a DOI names an arXiv record (e.g. ``10.48550/ARXIV.2207.02820``)."""
    return ARXIV_DOI_MARKER in identifier


def arxiv_id_from_doi(identifier: str) -> str:
    """Strip the DOI prefix up to and including ``/ARXIV.``."""
    _, sep, arxiv_id = identifier.partition(ARXIV_DOI_MARKER)
    if not sep or not arxiv_id:
        raise ParseError(f"Invalid arXiv DOI: {identifier}")
    return arxiv_id


@SourceRegistry.register(priority=10)
class ArxivSource(BaseSource):
    """Fetches PDFs straight from arxiv.org for arXiv DOIs."""

    def __init__(self, settings: Settings, http: HTTPClient | None = None):
        super().__init__(settings, http=http)
        self.config = settings.sources.arxiv

    @property
    def name(self) -> str:
        return "arxiv"

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def handles(self, identifier: str) -> bool:
        return is_arxiv(identifier)

    def pdf_url(self, identifier: str) -> str:
        return self.config.pdf_url_template.format(id=arxiv_id_from_doi(identifier))

    def fetch_pdf(self, identifier: str) -> bytes:
        url = self.pdf_url(identifier)
        logger.debug("Fetching arXiv PDF from %s", url)
        return self.http.get_bytes(url)


__all__ = ["ArxivSource", "is_arxiv", "arxiv_id_from_doi"]
