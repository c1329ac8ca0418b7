"""Depth-bounded search for repositories and status-tree assembly.

Repository roots become full status trees or one-line summaries. Plain
directories are descended while the depth budget allows, and the nested
results are merged into one tree. Failures below the starting path only
shrink the tree; failures at the starting path propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import RepositoryNotFoundError, StatusTreeError
from .fs import list_directory_children
from .repository import Repository, RepositoryBackend
from .tree_model import Branch, Node, Summary, build_status_tree

logger = logging.getLogger(__name__)

DEPTH_HINT = "try increasing --depth to search subdirectories"


@dataclass(frozen=True)
class WalkOptions:
    """User-selected walk behavior."""

    include_ignored: bool = False
    depth: int = 0
    summary: bool = False
    only_show_changes: bool = False


def display_name(path: Path) -> str:
    """Return the label for ``path``: its final component, else the path text."""
    return path.name or str(path)


class RepositoryWalker:
    """Build a composite status tree for a starting path."""

    def __init__(self, backend: RepositoryBackend, options: WalkOptions | None = None) -> None:
        self.backend = backend
        self.options = options or WalkOptions()
        self.suppressed_repositories = 0

    def repository_node(self, repo: Repository, name: str) -> Node | None:
        """Render ``repo`` per the active mode under label ``name``.

        Returns ``None`` only for a suppressed summary without line changes.
        """
        if self.options.summary:
            stats = self.backend.diff_stats(repo)
            if self.options.only_show_changes and not stats.has_changes:
                logger.debug("suppressing unchanged repository %s", repo.root)
                self.suppressed_repositories += 1
                return None
            return Summary(name, stats)
        return build_status_tree(name, self.backend.statuses(repo), self.options.include_ignored)

    def walk_directory(self, path: Path, depth: int) -> Branch | None:
        """Collect nested results for a plain directory; ``None`` when nothing was found."""
        children, scan_error = list_directory_children(path)
        if scan_error is not None:
            raise scan_error

        tree = Branch(display_name(path))
        for child in children:
            if not child.is_dir:
                continue
            try:
                node = self.walk_path(child.path, depth - 1)
            except (StatusTreeError, OSError) as exc:
                logger.debug("skipping %s: %s", child.path, exc)
                continue
            if node is None:
                continue
            tree.children[child.name] = node

        if not tree.children:
            return None
        return tree

    def walk_path(self, path: Path, depth: int) -> Node | None:
        """Walk ``path`` with ``depth`` levels of plain-directory descent left."""
        repo = self.backend.open(path)
        if repo is not None:
            return self.repository_node(repo, display_name(path))
        if depth > 0 and path.is_dir():
            return self.walk_directory(path, depth)
        return None

    def fallback(self, path: Path) -> Node | None:
        """Render the repository enclosing ``path`` under the label of ``path``."""
        try:
            repo = self.backend.discover(path)
        except RepositoryNotFoundError as exc:
            raise exc.with_hint(DEPTH_HINT) from exc
        logger.debug("discovered enclosing repository %s for %s", repo.root, path)
        return self.repository_node(repo, display_name(path))

    def run(self, path: Path) -> Node | None:
        """Walk from ``path``, falling back to ancestor discovery when nothing is found."""
        self.suppressed_repositories = 0
        node = self.walk_path(path, self.options.depth)
        if node is not None:
            return node
        # Every repository found was suppressed as unchanged.
        if self.suppressed_repositories:
            return None
        return self.fallback(path)


__all__ = [
    "DEPTH_HINT",
    "WalkOptions",
    "RepositoryWalker",
    "display_name",
]
