"""Repository collaborator interface consumed by the walker.

The walker only needs four capabilities: open a repository rooted at a path,
discover an enclosing repository, list per-path status, and read aggregate
diff statistics. ``GitBackend`` provides them through the git CLI; tests plug
in in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .classify import StatusFlag


@dataclass(frozen=True)
class Repository:
    """Handle for an opened repository work tree."""

    root: Path


@dataclass(frozen=True)
class StatusEntry:
    """One status record; ``path`` is ``None`` when ``raw_path`` is not decodable."""

    path: str | None
    flags: StatusFlag
    raw_path: bytes = b""


@dataclass(frozen=True)
class DiffStat:
    """Aggregate HEAD-to-worktree change counts for one repository."""

    branch: str
    files_changed: int
    insertions: int
    deletions: int

    @property
    def has_changes(self) -> bool:
        return self.insertions > 0 or self.deletions > 0


class RepositoryBackend(Protocol):
    def open(self, path: Path) -> Repository | None:
        """Return a handle when ``path`` is itself a repository root."""
        ...

    def discover(self, path: Path) -> Repository:
        """Return the repository enclosing ``path``.

        Raises ``RepositoryNotFoundError`` when no ancestor is a repository.
        """
        ...

    def statuses(self, repo: Repository) -> list[StatusEntry]:
        ...

    def diff_stats(self, repo: Repository) -> DiffStat:
        """Raises ``UnresolvableHeadError`` when HEAD has no commit."""
        ...


__all__ = [
    "Repository",
    "StatusEntry",
    "DiffStat",
    "RepositoryBackend",
]
