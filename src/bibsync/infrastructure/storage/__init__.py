"""Local storage backends."""

from .bibliography import BibliographyStore, parse_bibtex
from .cache import PdfCache, sanitize_identifier

__all__ = ["BibliographyStore", "parse_bibtex", "PdfCache", "sanitize_identifier"]
