"""Document and metadata sources."""

from .arxiv import ArxivSource, is_arxiv
from .base import BaseSource, SourceRegistry, get_enabled_sources
from .dblp import DblpClient
from .scihub import SciHubSource, extract_embedded_pdf_url, resolve_document_url

__all__ = [
    "BaseSource",
    "SourceRegistry",
    "get_enabled_sources",
    "ArxivSource",
    "SciHubSource",
    "DblpClient",
    "is_arxiv",
    "extract_embedded_pdf_url",
    "resolve_document_url",
]
