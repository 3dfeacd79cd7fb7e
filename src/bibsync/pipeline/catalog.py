"""Bibliography edits: adding search results and removing entries."""

import logging

from bibsync.core.exceptions import NotFoundError
from bibsync.core.models import BibliographyEntry, SearchHit
from bibsync.infrastructure.storage import BibliographyStore
from bibsync.sources.dblp import DblpClient

logger = logging.getLogger(__name__)


def add_search_hit(store: BibliographyStore, client: DblpClient, hit: SearchHit) -> BibliographyEntry:
    """Download the BibTeX record for ``hit``, add it to ``store`` and save."""
    bibtex = client.fetch_bibtex(hit.key)
    entry = store.add_bibtex(bibtex)
    store.save()
    logger.info("Added %s", entry.key)
    return entry


def find_entries(store: BibliographyStore, query: str) -> list[BibliographyEntry]:
    """Entries matching ``query`` by DOI or title.

    Raises:
        NotFoundError: If nothing matches.
    """
    matches = store.find(query)
    if not matches:
        raise NotFoundError(f"No entry found with DOI or title: {query}")
    return matches


def remove_entry(store: BibliographyStore, key: str) -> BibliographyEntry:
    """Remove an entry by key and save."""
    removed = store.remove(key)
    store.save()
    logger.info("Removed %s", key)
    return removed


__all__ = ["add_search_hit", "find_entries", "remove_entry"]
