"""Logging configuration."""

import logging

LOG_FORMAT = "%(levelname)-7s %(message)s"
DEBUG_LOG_FORMAT = "%(levelname)-7s %(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI use.

    Args:
        verbose: Enable DEBUG level and include logger names.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=DEBUG_LOG_FORMAT if verbose else LOG_FORMAT,
        force=True,
    )
    # Keep connection pool logs out of -v output
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger."""
    return logging.getLogger(name)


__all__ = ["setup_logging", "get_logger"]
