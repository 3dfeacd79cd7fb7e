"""Protocol definitions for pluggable collaborators."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class VersionControl(Protocol):
    """Version-control operations scoped to a single store root.

    Every operation except ``is_repository`` and ``bind_remote`` raises
    ``VcsError`` when the underlying tool reports failure.
    """

    def is_repository(self) -> bool:
        """Return True if the root is inside a working tree."""
        ...

    def current_remote_url(self) -> str:
        """Return the bound remote URL, raising NotBoundError if none is configured."""
        ...

    def initialize(self, branch: str) -> None:
        """Create a new working tree at the root with HEAD on ``branch``."""
        ...

    def bind_remote(self, url: str) -> None:
        """Bind the remote; failures are swallowed."""
        ...

    def pull_fast_forward(self, branch: str) -> None:
        """Plain pull of ``branch`` from the remote."""
        ...

    def status(self) -> bool:
        """Return True if the working tree has uncommitted changes."""
        ...

    def stage_all(self) -> None: ...

    def commit(self, message: str) -> None: ...

    def pull_rebase(self, branch: str) -> None: ...

    def push(self, branch: str) -> None: ...


__all__ = ["VersionControl"]
