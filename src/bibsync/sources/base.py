"""Base document source definitions and registry."""

import logging
from abc import ABC, abstractmethod

from bibsync.config.settings import Settings
from bibsync.infrastructure.http import HTTPClient

logger = logging.getLogger(__name__)


class BaseSource(ABC):
    """Abstract base class for document sources.

    A source turns an identifier into the raw bytes of the document it names.
    """

    def __init__(self, settings: Settings, http: HTTPClient | None = None):
        self.settings = settings
        self.http = http or HTTPClient(
            headers={"User-Agent": settings.http.user_agent},
            timeout=settings.http.timeout,
        )

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique source identifier."""
        ...

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Whether this source is enabled in config."""
        ...

    @abstractmethod
    def handles(self, identifier: str) -> bool:
        """Whether this source is responsible for ``identifier``."""
        ...

    @abstractmethod
    def fetch_pdf(self, identifier: str) -> bytes:
        """Download the document for ``identifier``.

        Raises:
            NetworkError: On transport failure or non-success status.
            ParseError: If the identifier or a response cannot be interpreted.
        """
        ...


class SourceRegistry:
    """Registry of document sources in routing order.

    Sources register with a priority; lower values are consulted first, so a
    catch-all fallback should register with the highest priority.
    """

    _sources: dict[str, tuple[int, type[BaseSource]]] = {}

    @classmethod
    def register(cls, priority: int):
        """Decorator to register a source class."""

        def decorator(source_class: type[BaseSource]) -> type[BaseSource]:
            name = source_class.__name__.lower().replace("source", "")
            cls._sources[name] = (priority, source_class)
            return source_class

        return decorator

    @classmethod
    def get_source(cls, name: str) -> type[BaseSource] | None:
        entry = cls._sources.get(name.lower())
        return entry[1] if entry else None

    @classmethod
    def get_enabled_sources(cls, settings: Settings, http: HTTPClient | None = None) -> list[BaseSource]:
        """Return instantiated enabled sources in routing order."""
        ordered = sorted(cls._sources.values(), key=lambda item: item[0])
        enabled = []
        for _, source_class in ordered:
            source = source_class(settings, http=http)
            if source.enabled:
                enabled.append(source)
            else:
                logger.debug("Source %s disabled in config", source.name)
        return enabled

    @classmethod
    def all_sources(cls) -> dict[str, type[BaseSource]]:
        return {name: source_class for name, (_, source_class) in cls._sources.items()}


def get_enabled_sources(settings: Settings, http: HTTPClient | None = None) -> list[BaseSource]:
    """Convenience function to get enabled sources."""
    return SourceRegistry.get_enabled_sources(settings, http=http)


__all__ = ["BaseSource", "SourceRegistry", "get_enabled_sources"]
