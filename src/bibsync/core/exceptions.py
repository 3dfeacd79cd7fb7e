"""Exception hierarchy for bibsync."""


class BibsyncError(Exception):
    """Base exception for all bibsync errors."""


class ConfigError(BibsyncError):
    """A required directory or configuration file cannot be determined or read."""


class VcsError(BibsyncError):
    """An external version-control operation failed.

    Attributes:
        operation: Name of the failed operation (e.g. ``"commit"``).
        diagnostic: Error output reported by the tool.
        returncode: Exit status of the tool, if it ran at all.
    """

    def __init__(self, operation: str, diagnostic: str = "", returncode: int | None = None):
        self.operation = operation
        self.diagnostic = diagnostic.strip()
        self.returncode = returncode
        message = f"git {operation} failed"
        if returncode is not None:
            message += f" (exit {returncode})"
        if self.diagnostic:
            message += f": {self.diagnostic}"
        super().__init__(message)


class NotBoundError(VcsError):
    """No remote is configured for the working tree."""


class NetworkError(BibsyncError):
    """HTTP transport failure or non-success status."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(BibsyncError):
    """Malformed or unexpected response body."""


class MissingIdentifierError(BibsyncError):
    """An entry lacks the identifier needed for an operation."""


class NotFoundError(BibsyncError):
    """No entry matches a lookup query."""


__all__ = [
    "BibsyncError",
    "ConfigError",
    "VcsError",
    "NotBoundError",
    "NetworkError",
    "ParseError",
    "MissingIdentifierError",
    "NotFoundError",
]
