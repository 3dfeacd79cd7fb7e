"""Configuration settings models."""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from bibsync.core.constants import (
    BROWSER_USER_AGENT,
    CONFIG_FILENAME,
    DEFAULT_BRANCH,
    DEFAULT_COMMIT_MESSAGE,
)
from bibsync.core.exceptions import ConfigError

from .loader import ConfigLoader


# Sync Configuration
class SyncConfig(BaseModel):
    """Git synchronization configuration."""

    branch: str = DEFAULT_BRANCH
    commit_message: str = DEFAULT_COMMIT_MESSAGE

    @field_validator("branch", "commit_message")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


# HTTP Configuration
class HttpConfig(BaseModel):
    """HTTP client configuration."""

    user_agent: str = BROWSER_USER_AGENT
    timeout: float | None = None  # None: no timeout, block until the server answers


# Source Configuration
class ArxivConfig(BaseModel):
    """arXiv direct-fetch source configuration."""

    enabled: bool = True
    pdf_url_template: str = "https://arxiv.org/pdf/{id}.pdf"

    @field_validator("pdf_url_template")
    @classmethod
    def validate_template(cls, value: str) -> str:
        if "{id}" not in value:
            raise ValueError("pdf_url_template must contain '{id}'")
        return value


class SciHubConfig(BaseModel):
    """Sci-Hub scrape source configuration."""

    enabled: bool = True
    origin: str = "https://sci-hub.ru"

    @field_validator("origin")
    @classmethod
    def validate_origin(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"origin must be an http(s) URL, got '{value}'")
        return value.rstrip("/")


class DblpConfig(BaseModel):
    """dblp search API configuration."""

    search_url: str = "https://dblp.org/search/publ/api"
    bib_url_template: str = "https://dblp.org/rec/{key}.bib?param=1"
    max_retries: int = 2


class SourcesConfig(BaseModel):
    """Document and metadata sources configuration."""

    arxiv: ArxivConfig = Field(default_factory=ArxivConfig)
    scihub: SciHubConfig = Field(default_factory=SciHubConfig)
    dblp: DblpConfig = Field(default_factory=DblpConfig)


# Main Settings
class Settings(BaseModel):
    """Main configuration settings."""

    sync: SyncConfig = Field(default_factory=SyncConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)


def load_settings(root: Path | str) -> Settings:
    """Load settings from the store's config file, falling back to defaults."""
    config_path = Path(root) / CONFIG_FILENAME
    config = ConfigLoader(config_path).load()
    try:
        return Settings(**config)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {config_path}:\n{exc}") from exc


def write_default_settings(path: Path | str) -> Settings:
    """Write a config file populated with default settings."""
    settings = Settings()
    ConfigLoader(path).write(settings.model_dump())
    return settings


__all__ = [
    "Settings",
    "load_settings",
    "write_default_settings",
    "SyncConfig",
    "HttpConfig",
    "SourcesConfig",
    "ArxivConfig",
    "SciHubConfig",
    "DblpConfig",
]
