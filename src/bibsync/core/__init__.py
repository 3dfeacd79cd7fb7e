"""Core domain models and interfaces."""

from .exceptions import (
    BibsyncError,
    ConfigError,
    MissingIdentifierError,
    NetworkError,
    NotBoundError,
    NotFoundError,
    ParseError,
    VcsError,
)
from .models import (
    BibliographyEntry,
    FetchOutcome,
    FetchStatus,
    Repository,
    RetrievalReport,
    SearchHit,
    SyncResult,
)
from .protocols import VersionControl

__all__ = [
    # Models
    "Repository",
    "BibliographyEntry",
    "SearchHit",
    "FetchStatus",
    "FetchOutcome",
    "RetrievalReport",
    "SyncResult",
    # Protocols
    "VersionControl",
    # Exceptions
    "BibsyncError",
    "ConfigError",
    "VcsError",
    "NotBoundError",
    "NetworkError",
    "ParseError",
    "MissingIdentifierError",
    "NotFoundError",
]
