"""bibsync - bibliography and PDF cache kept in sync with a git remote."""

__version__ = "0.1.0"
