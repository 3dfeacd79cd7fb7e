"""On-disk PDF cache keyed by sanitized identifier."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def sanitize_identifier(identifier: str) -> str:
    """Make an identifier usable as a file name by replacing ``/`` with ``--``.

    The transform is one-way: identifiers that already contain ``--`` may
    collide with sanitized ones.
    """
    return identifier.replace("/", "--")


class PdfCache:
    """Directory of downloaded documents, one file per sanitized identifier."""

    suffix = ".pdf"

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, identifier: str) -> Path:
        return self.directory / f"{sanitize_identifier(identifier)}{self.suffix}"

    def contains(self, identifier: str) -> bool:
        return self.path_for(identifier).exists()

    def store(self, identifier: str, content: bytes) -> Path:
        """Persist document bytes, creating the cache directory if needed."""
        path = self.path_for(identifier)
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Writing %d bytes to %s", len(content), path)
        path.write_bytes(content)
        return path


__all__ = ["PdfCache", "sanitize_identifier"]
