"""Core constants for bibsync."""

# Store layout
MARKER_DIR = ".bibsync"
CONFIG_FILENAME = "config.yaml"
BIBLIOGRAPHY_FILENAME = "references.bib"
PDF_DIRNAME = "pdfs"
GITIGNORE_FILENAME = ".gitignore"

GITIGNORE_CONTENT = """pdfs/
.DS_Store
"""

# Git defaults
DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"
DEFAULT_COMMIT_MESSAGE = "bibsync: auto commit"

# Document servers reject default client identifiers
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 11_3_1 like Mac OS X) AppleWebKit/603.1.30 "
    "(KHTML, like Gecko) Version/10.0 Mobile/14E304 Safari/602.1"
)

# Retryable HTTP status codes for metadata APIs
RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})

__all__ = [
    "MARKER_DIR",
    "CONFIG_FILENAME",
    "BIBLIOGRAPHY_FILENAME",
    "PDF_DIRNAME",
    "GITIGNORE_FILENAME",
    "GITIGNORE_CONTENT",
    "DEFAULT_REMOTE",
    "DEFAULT_BRANCH",
    "DEFAULT_COMMIT_MESSAGE",
    "BROWSER_USER_AGENT",
    "RETRYABLE_STATUSES",
]
