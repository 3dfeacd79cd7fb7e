"""Git synchronization of the bibliography store."""

import logging
from collections.abc import Callable
from pathlib import Path

from bibsync.config.settings import Settings, load_settings, write_default_settings
from bibsync.core.constants import DEFAULT_BRANCH, DEFAULT_COMMIT_MESSAGE, GITIGNORE_CONTENT
from bibsync.core.exceptions import VcsError
from bibsync.core.models import Repository, SyncResult
from bibsync.core.protocols import VersionControl
from bibsync.infrastructure.vcs import GitAdapter

logger = logging.getLogger(__name__)


class SyncEngine:
    """Reconciles the local store with its remote.

    Ordering:
        1. no remote bound: nothing happens
        2. read dirtiness once
        3. dirty: stage everything and commit
        4. always pull with rebase
        5. dirty at step 2: push

    Every git failure propagates; there is no retry, rebase abort or locking.
    """

    def __init__(
        self,
        vcs: VersionControl,
        branch: str = DEFAULT_BRANCH,
        commit_message: str = DEFAULT_COMMIT_MESSAGE,
    ):
        self.vcs = vcs
        self.branch = branch
        self.commit_message = commit_message

    @classmethod
    def from_settings(cls, vcs: VersionControl, settings: Settings) -> "SyncEngine":
        return cls(vcs, branch=settings.sync.branch, commit_message=settings.sync.commit_message)

    def synchronize(self, repository: Repository) -> SyncResult:
        result = SyncResult()
        if not repository.has_remote:
            logger.debug("No remote bound for %s, skipping sync", repository.root)
            result.skipped = True
            return result

        was_dirty = self.vcs.status()

        if was_dirty:
            logger.info("Committing changes")
            self.vcs.stage_all()
            self.vcs.commit(self.commit_message)
            result.committed = True

        logger.debug("Pulling %s with rebase", self.branch)
        self.vcs.pull_rebase(self.branch)
        result.pulled = True

        # Remote commits brought in by the rebase are never pushed back
        if was_dirty:
            logger.info("Pushing changes to %s", repository.remote)
            self.vcs.push(self.branch)
            result.pushed = True

        return result


def synchronize(
    repository: Repository,
    settings: Settings | None = None,
    vcs: VersionControl | None = None,
) -> SyncResult:
    """Synchronize ``repository`` using git in its root."""
    settings = settings or Settings()
    engine = SyncEngine.from_settings(vcs or GitAdapter(repository.root), settings)
    return engine.synchronize(repository)


def initialize_store(
    repository: Repository,
    vcs: VersionControl | None = None,
    settings: Settings | None = None,
    *,
    on_progress: Callable[[str, str], None] | None = None,
) -> SyncResult:
    """First-time setup of a store, safe to re-run.

    Unlike ``synchronize``, binding the remote and the first pull are allowed
    to fail: a freshly created remote may be empty or lack the branch.

    Args:
        repository: Store to set up; its ``remote`` selects whether git is used.
        vcs: Version control for the root (defaults to git).
        settings: Settings used for the final sync; loaded defaults if None.
        on_progress: Optional callback, called with (stage, message).

    Returns:
        SyncResult of the final synchronization.
    """

    def progress(stage: str, message: str) -> None:
        if on_progress:
            on_progress(stage, message)
        else:
            logger.info(message)

    root = Path(repository.root)
    progress("init", f"Initializing store at {root}")
    root.mkdir(parents=True, exist_ok=True)
    vcs = vcs or GitAdapter(root)

    if settings is None and repository.config_file.exists():
        settings = load_settings(root)

    if repository.has_remote:
        branch = settings.sync.branch if settings else DEFAULT_BRANCH
        if (root / ".git").exists():
            logger.debug("Git repository already exists")
        else:
            progress("git", f"Creating git repository on branch {branch}")
            vcs.initialize(branch)

        vcs.bind_remote(repository.remote)

        try:
            vcs.pull_fast_forward(branch)
            logger.debug("Pulled from remote")
        except VcsError as exc:
            logger.debug("Failed to pull from remote, ignoring: %s", exc)
    else:
        logger.debug("No git remote specified")

    if repository.config_file.exists():
        progress("config", f"Using existing config file {repository.config_file}")
    else:
        progress("config", f"Creating config file {repository.config_file}")
        write_default_settings(repository.config_file)

    if repository.bib_path.exists():
        progress("bib", f"Using existing bibliography file {repository.bib_path}")
    else:
        progress("bib", f"Creating bibliography file {repository.bib_path}")
        repository.bib_path.write_text("", encoding="utf-8")

    if not repository.gitignore_path.exists():
        progress("gitignore", f"Creating {repository.gitignore_path}")
        repository.gitignore_path.write_text(GITIGNORE_CONTENT, encoding="utf-8")

    if settings is None:
        settings = load_settings(root)
    return SyncEngine.from_settings(vcs, settings).synchronize(repository)


__all__ = ["SyncEngine", "synchronize", "initialize_store"]
