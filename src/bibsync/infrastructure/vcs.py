"""Git adapter for the bibliography store.

Each method maps to exactly one ``git`` invocation run with the store root as
working directory, so callers can decide per step whether a failure is fatal.
"""

import logging
import subprocess
from pathlib import Path

from bibsync.core.constants import DEFAULT_BRANCH, DEFAULT_REMOTE
from bibsync.core.exceptions import NotBoundError, VcsError

logger = logging.getLogger(__name__)


class GitAdapter:
    """``VersionControl`` implementation that shells out to ``git``."""

    def __init__(self, root: Path | str, remote: str = DEFAULT_REMOTE, executable: str = "git"):
        self.root = Path(root)
        self.remote = remote
        self.executable = executable

    def _run(self, operation: str, args: list[str]) -> str:
        """Run a git command and return stdout.

        Raises:
            VcsError: If git exits non-zero or cannot be started.
        """
        cmd = [self.executable, *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.root)
        try:
            result = subprocess.run(
                cmd,
                cwd=self.root,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise VcsError(operation, str(exc)) from exc

        if result.returncode != 0:
            raise VcsError(operation, result.stderr or result.stdout, result.returncode)
        return result.stdout

    def is_repository(self) -> bool:
        if not self.root.is_dir():
            return False
        try:
            output = self._run("rev-parse", ["rev-parse", "--is-inside-work-tree"])
        except VcsError:
            return False
        return output.strip() == "true"

    def current_remote_url(self) -> str:
        try:
            output = self._run("remote get-url", ["remote", "get-url", self.remote])
        except VcsError as exc:
            raise NotBoundError("remote get-url", exc.diagnostic, exc.returncode) from exc
        url = output.strip()
        if not url:
            raise NotBoundError("remote get-url", f"remote '{self.remote}' has no URL")
        return url

    def initialize(self, branch: str = DEFAULT_BRANCH) -> None:
        self._run("init", ["init"])
        # HEAD must name the sync branch before the first commit
        self._run("symbolic-ref", ["symbolic-ref", "HEAD", f"refs/heads/{branch}"])

    def bind_remote(self, url: str) -> None:
        try:
            self._run("remote add", ["remote", "add", self.remote, url])
        except VcsError as exc:
            # Re-running init against a store that already has the remote
            logger.debug("Could not bind remote %s, ignoring: %s", url, exc)

    def pull_fast_forward(self, branch: str) -> None:
        self._run("pull", ["pull", self.remote, branch])

    def status(self) -> bool:
        output = self._run("status", ["status", "--porcelain"])
        return bool(output.strip())

    def stage_all(self) -> None:
        self._run("add", ["add", "."])

    def commit(self, message: str) -> None:
        self._run("commit", ["commit", "-m", message])

    def pull_rebase(self, branch: str) -> None:
        self._run("pull --rebase", ["pull", self.remote, branch, "--rebase"])

    def push(self, branch: str) -> None:
        self._run("push", ["push", self.remote, branch])


__all__ = ["GitAdapter"]
