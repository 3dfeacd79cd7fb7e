"""Configuration management."""

from .loader import ConfigLoader
from .locator import DefaultDirectory, RepositoryLocator
from .settings import Settings, load_settings, write_default_settings

__all__ = [
    "Settings",
    "load_settings",
    "write_default_settings",
    "ConfigLoader",
    "DefaultDirectory",
    "RepositoryLocator",
]
