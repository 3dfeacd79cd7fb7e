"""Core domain models for bibsync."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from .constants import BIBLIOGRAPHY_FILENAME, CONFIG_FILENAME, GITIGNORE_FILENAME, PDF_DIRNAME


@dataclass(frozen=True)
class Repository:
    """A bibliography store root and its optional bound remote."""

    root: Path
    remote: str | None = None

    @property
    def config_file(self) -> Path:
        return self.root / CONFIG_FILENAME

    @property
    def bib_path(self) -> Path:
        return self.root / BIBLIOGRAPHY_FILENAME

    @property
    def pdf_dir(self) -> Path:
        return self.root / PDF_DIRNAME

    @property
    def gitignore_path(self) -> Path:
        return self.root / GITIGNORE_FILENAME

    @property
    def has_remote(self) -> bool:
        return bool(self.remote)


class BibliographyEntry(BaseModel):
    """Read-only view of one bibliography record."""

    key: str
    title: str = ""
    authors: list[str] = Field(default_factory=list)
    identifier: str | None = None  # DOI

    @property
    def display_title(self) -> str:
        """Title without BibTeX grouping braces."""
        text = self.title.replace("{", "").replace("}", "")
        return " ".join(text.split()) or self.key


class SearchHit(BaseModel):
    """A single bibliographic search result."""

    key: str
    title: str
    authors: list[str] = Field(default_factory=list)
    venue: str | None = None
    year: str | None = None
    doi: str | None = None


class FetchStatus(str, Enum):
    """Result of resolving one entry to a document."""

    DOWNLOADED = "downloaded"
    CACHED = "cached"
    FAILED = "failed"


@dataclass
class FetchOutcome:
    """Per-entry retrieval result."""

    entry_key: str
    title: str
    status: FetchStatus
    identifier: str | None = None
    path: Path | None = None
    source: str | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is not FetchStatus.FAILED


@dataclass
class RetrievalReport:
    """Outcomes of a batch retrieval run."""

    outcomes: list[FetchOutcome] = field(default_factory=list)

    def add(self, outcome: FetchOutcome) -> None:
        self.outcomes.append(outcome)

    def _count(self, status: FetchStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def downloaded(self) -> int:
        return self._count(FetchStatus.DOWNLOADED)

    @property
    def cached(self) -> int:
        return self._count(FetchStatus.CACHED)

    @property
    def failed(self) -> int:
        return self._count(FetchStatus.FAILED)

    @property
    def failures(self) -> list[FetchOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is FetchStatus.FAILED]


@dataclass
class SyncResult:
    """What a single synchronization run did."""

    skipped: bool = False
    committed: bool = False
    pulled: bool = False
    pushed: bool = False


__all__ = [
    "Repository",
    "BibliographyEntry",
    "SearchHit",
    "FetchStatus",
    "FetchOutcome",
    "RetrievalReport",
    "SyncResult",
]
