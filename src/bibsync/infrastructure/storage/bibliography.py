"""BibTeX bibliography store backed by pybtex."""

import logging
from collections.abc import Iterator
from pathlib import Path

from pybtex.database import BibliographyData, Entry, parse_string
from pybtex.exceptions import PybtexError

from bibsync.core.exceptions import NotFoundError, ParseError
from bibsync.core.models import BibliographyEntry

logger = logging.getLogger(__name__)


def _to_entry(key: str, entry: Entry) -> BibliographyEntry:
    """Convert a pybtex entry to a read-only domain entry."""
    doi = (entry.fields.get("doi") or "").strip() or None
    return BibliographyEntry(
        key=key,
        title=entry.fields.get("title", ""),
        authors=[str(person) for person in entry.persons.get("author", [])],
        identifier=doi,
    )


def parse_bibtex(text: str) -> BibliographyData:
    """Parse a BibTeX payload.

    Raises:
        ParseError: If the payload is not valid BibTeX.
    """
    try:
        return parse_string(text, "bibtex")
    except PybtexError as exc:
        raise ParseError(f"Failed to parse bibliography: {exc}") from exc


class BibliographyStore:
    """Keyed record store over a single ``.bib`` file."""

    def __init__(self, path: Path | str, data: BibliographyData | None = None):
        self.path = Path(path)
        self._data = data if data is not None else BibliographyData()

    @classmethod
    def load(cls, path: Path | str) -> "BibliographyStore":
        """Load the bibliography, creating an empty file if missing."""
        path = Path(path)
        if not path.exists():
            logger.debug("Creating empty bibliography file %s", path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")
        text = path.read_text(encoding="utf-8")
        try:
            data = parse_bibtex(text)
        except ParseError as exc:
            raise ParseError(f"Failed to parse {path}: {exc}") from exc
        return cls(path, data)

    def __len__(self) -> int:
        return len(self._data.entries)

    def __contains__(self, key: str) -> bool:
        return key in self._data.entries

    def __iter__(self) -> Iterator[BibliographyEntry]:
        return iter(self.entries())

    def entries(self) -> list[BibliographyEntry]:
        return [_to_entry(key, entry) for key, entry in self._data.entries.items()]

    def get(self, key: str) -> BibliographyEntry:
        try:
            entry = self._data.entries[key]
        except KeyError:
            raise NotFoundError(f"No entry with key '{key}'") from None
        return _to_entry(key, entry)

    def add_bibtex(self, text: str) -> BibliographyEntry:
        """Insert the first entry of a BibTeX payload, replacing any entry with the same key."""
        parsed = parse_bibtex(text)
        if not parsed.entries:
            raise ParseError("Bibliography payload does not contain an entry")
        key, entry = next(iter(parsed.entries.items()))
        if key in self._data.entries:
            logger.info("Replacing existing entry %s", key)
            del self._data.entries[key]
        self._data.entries[key] = entry
        return _to_entry(key, entry)

    def find(self, query: str) -> list[BibliographyEntry]:
        """Entries whose DOI equals ``query`` or whose title contains it (case-insensitive)."""
        needle = query.lower()
        matches = []
        for entry in self.entries():
            if entry.identifier == query or needle in entry.display_title.lower():
                matches.append(entry)
        return matches

    def remove(self, key: str) -> BibliographyEntry:
        removed = self.get(key)
        del self._data.entries[key]
        return removed

    def to_string(self) -> str:
        if not self._data.entries:
            return ""
        return self._data.to_string("bibtex")

    def save(self) -> None:
        logger.debug("Writing bibliography to %s", self.path)
        self.path.write_text(self.to_string(), encoding="utf-8")


__all__ = ["BibliographyStore", "parse_bibtex"]
