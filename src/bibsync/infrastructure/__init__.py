"""Infrastructure adapters: git, HTTP and local storage."""

from .http import HTTPClient
from .storage import BibliographyStore, PdfCache, sanitize_identifier
from .vcs import GitAdapter

__all__ = ["GitAdapter", "HTTPClient", "BibliographyStore", "PdfCache", "sanitize_identifier"]
