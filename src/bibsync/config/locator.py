"""Store root discovery."""

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path

from bibsync.core.constants import MARKER_DIR
from bibsync.core.exceptions import ConfigError, NotBoundError
from bibsync.core.models import Repository
from bibsync.core.protocols import VersionControl
from bibsync.infrastructure.vcs import GitAdapter

logger = logging.getLogger(__name__)

APP_NAME = "bibsync"
HOME_ENV_VAR = "BIBSYNC_HOME"


class DefaultDirectory:
    """Provides the process-wide default store directory.

    Resolution order: ``$BIBSYNC_HOME``, ``$XDG_CONFIG_HOME/bibsync``,
    ``~/.config/bibsync``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None, home: Path | None = None):
        self.environ = os.environ if environ is None else environ
        self.home = home

    def resolve(self) -> Path:
        override = self.environ.get(HOME_ENV_VAR)
        if override:
            return Path(override).expanduser()

        xdg = self.environ.get("XDG_CONFIG_HOME")
        if xdg:
            return Path(xdg) / APP_NAME

        home = self.home
        if home is None:
            try:
                home = Path.home()
            except (RuntimeError, KeyError) as exc:
                raise ConfigError("Could not determine configuration directory") from exc
        return home / ".config" / APP_NAME


class RepositoryLocator:
    """Finds the store root for a working directory."""

    def __init__(
        self,
        default_dir: DefaultDirectory | None = None,
        vcs_factory: Callable[[Path], VersionControl] = GitAdapter,
    ):
        self.default_dir = default_dir or DefaultDirectory()
        self.vcs_factory = vcs_factory

    def find_root(self, start: Path | str) -> Path:
        """Return the marker directory in ``start`` or its nearest ancestor, else the default directory.

        Nothing is created.
        """
        current = Path(start).resolve()
        for candidate in (current, *current.parents):
            marker = candidate / MARKER_DIR
            if marker.is_dir():
                logger.debug("Found store directory %s", marker)
                return marker
        logger.debug("No %s directory found, using default directory", MARKER_DIR)
        return self.default_dir.resolve()

    def open(self, start: Path | str) -> Repository:
        """Locate the store and detect its bound remote."""
        return self.establish(self.find_root(start))

    def establish(self, root: Path | str, remote: str | None = None) -> Repository:
        """Build a Repository for ``root``.

        If ``root`` is already a working tree with a bound remote, that remote
        wins over ``remote``.
        """
        root = Path(root)
        vcs = self.vcs_factory(root)
        if not vcs.is_repository():
            return Repository(root=root, remote=remote)

        try:
            found = vcs.current_remote_url()
        except NotBoundError:
            logger.debug("Working tree at %s has no remote bound", root)
            return Repository(root=root, remote=remote)

        if remote and remote != found:
            logger.warning(
                "Ignoring requested remote %s, using existing remote %s",
                remote,
                found,
            )
        return Repository(root=root, remote=found)


__all__ = ["DefaultDirectory", "RepositoryLocator", "HOME_ENV_VAR"]
