"""Exception hierarchy for status-tree walking and rendering.

Top-level failures surface to the CLI as a single line of text.
Failures met while descending nested directories are dropped by the walker.
"""

from __future__ import annotations

from pathlib import Path


class StatusTreeError(Exception):
    """Base class for every user-facing statustree failure."""


class RepositoryNotFoundError(StatusTreeError):
    """No repository exists at ``path`` or on any of its ancestors."""

    def __init__(self, path: Path, hint: str | None = None) -> None:
        self.path = path
        self.hint = hint
        message = f"no git repository found at {str(path)!r}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)

    def with_hint(self, hint: str) -> RepositoryNotFoundError:
        return RepositoryNotFoundError(self.path, hint)


class UnresolvableHeadError(StatusTreeError):
    """HEAD does not resolve to a commit, so diff statistics have no base."""

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(f"HEAD is not a direct reference in {str(root)!r}")


class UnresolvablePathError(StatusTreeError):
    """A status record's path cannot be decoded into a usable name."""

    def __init__(self, raw_path: bytes) -> None:
        self.raw_path = raw_path
        super().__init__(f"{raw_path!r} cannot be resolved to a path")


class UnsupportedPathComponentError(StatusTreeError):
    """A status path contains a root, ``.`` or ``..`` component."""

    def __init__(self, path: str, component: str) -> None:
        self.path = path
        self.component = component
        super().__init__(f"unsupported path component {component!r} in {path!r}")


class GitCommandError(StatusTreeError):
    """A git invocation could not run or exited with a failure status."""

    def __init__(self, args: list[str], detail: str) -> None:
        self.args_list = list(args)
        self.detail = detail
        command = " ".join(["git", *args])
        super().__init__(f"{command}: {detail}" if detail else f"{command} failed")


__all__ = [
    "StatusTreeError",
    "RepositoryNotFoundError",
    "UnresolvableHeadError",
    "UnresolvablePathError",
    "UnsupportedPathComponentError",
    "GitCommandError",
]
