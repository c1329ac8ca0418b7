"""Git-backed repository collaborator.

Drives the ``git`` executable through ``subprocess`` to open and discover
repositories, read porcelain status records, and compute HEAD-to-worktree
diff statistics.
"""

from __future__ import annotations

import errno
import logging
import os
import subprocess
from pathlib import Path

from .classify import flags_from_porcelain
from .errors import GitCommandError, RepositoryNotFoundError, UnresolvableHeadError
from .repository import DiffStat, Repository, StatusEntry

logger = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"
# git's exit status and (C locale) message when no work tree encloses cwd.
NOT_A_REPOSITORY_EXIT = 128
NOT_A_REPOSITORY_MESSAGE = "not a git repository"


def _run_git(
    cwd: Path,
    args: list[str],
    timeout_seconds: float | None,
) -> subprocess.CompletedProcess[bytes]:
    """Run ``git -C cwd *args`` and capture raw output.

    Raises ``GitCommandError`` when git cannot be started or times out;
    non-zero exit statuses are left for the caller to interpret.
    """
    logger.debug("running git %s in %s", " ".join(args), cwd)
    try:
        return subprocess.run(
            [GIT_EXECUTABLE, "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            timeout=timeout_seconds,
            env={**os.environ, "LC_ALL": "C"},
        )
    except subprocess.TimeoutExpired as exc:
        raise GitCommandError(args, f"timed out after {exc.timeout}s") from exc
    except OSError as exc:
        raise GitCommandError(args, str(exc)) from exc


def _decode(output: bytes) -> str:
    return output.decode("utf-8", errors="replace")


def _check(proc: subprocess.CompletedProcess[bytes], args: list[str]) -> str:
    if proc.returncode != 0:
        raise GitCommandError(args, _decode(proc.stderr).strip())
    return _decode(proc.stdout)


def _decode_path(raw_path: bytes) -> str | None:
    try:
        return raw_path.decode("utf-8")
    except UnicodeDecodeError:
        return None


def parse_porcelain_status(output: bytes) -> list[StatusEntry]:
    """Parse ``git status --porcelain=v1 -z`` output into status entries."""
    entries: list[StatusEntry] = []
    tokens = output.split(b"\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if len(token) < 4 or token[2:3] != b" ":
            continue

        code = token[:2].decode("ascii", errors="replace")
        raw_path = token[3:]
        entries.append(StatusEntry(path=_decode_path(raw_path), flags=flags_from_porcelain(code), raw_path=raw_path))

        # Renamed/copied records carry the source path as an extra token.
        if "R" in code or "C" in code:
            index += 1

    return entries


def parse_numstat(output: str) -> tuple[int, int, int]:
    """Return ``(files_changed, insertions, deletions)`` from ``--numstat`` text.

    Binary files report ``-`` counts; they count as changed with no lines.
    """
    files_changed = 0
    insertions = 0
    deletions = 0
    for line in output.splitlines():
        parts = line.split("\t", 2)
        if len(parts) < 3:
            continue
        added, removed, _path = parts
        files_changed += 1
        if added.isdigit():
            insertions += int(added)
        if removed.isdigit():
            deletions += int(removed)
    return files_changed, insertions, deletions


class GitBackend:
    """``RepositoryBackend`` implementation on top of the git CLI."""

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self.timeout_seconds = timeout_seconds

    def _toplevel(self, path: Path) -> Path | None:
        """Return the work tree enclosing ``path``, or ``None`` outside any.

        Every other git failure (dubious ownership, broken repository
        metadata, permissions) raises ``GitCommandError``.
        """
        args = ["rev-parse", "--show-toplevel"]
        proc = _run_git(path, args, self.timeout_seconds)
        if proc.returncode != 0:
            stderr = _decode(proc.stderr).strip()
            if proc.returncode == NOT_A_REPOSITORY_EXIT and NOT_A_REPOSITORY_MESSAGE in stderr.lower():
                return None
            raise GitCommandError(args, stderr)
        lines = [line.strip() for line in _decode(proc.stdout).splitlines() if line.strip()]
        if not lines:
            return None
        return Path(lines[0]).resolve()

    def open(self, path: Path) -> Repository | None:
        if not path.is_dir():
            return None
        resolved = path.resolve()
        toplevel = self._toplevel(resolved)
        if toplevel is None or toplevel != resolved:
            return None
        return Repository(root=resolved)

    def discover(self, path: Path) -> Repository:
        if not path.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
        start = path if path.is_dir() else path.parent
        toplevel = self._toplevel(start.resolve())
        if toplevel is None:
            raise RepositoryNotFoundError(path)
        return Repository(root=toplevel)

    def statuses(self, repo: Repository) -> list[StatusEntry]:
        args = ["status", "--porcelain=v1", "-z", "--untracked-files=all", "--ignored"]
        proc = _run_git(repo.root, args, self.timeout_seconds)
        if proc.returncode != 0:
            raise GitCommandError(args, _decode(proc.stderr).strip())
        return parse_porcelain_status(proc.stdout)

    def diff_stats(self, repo: Repository) -> DiffStat:
        verify = _run_git(repo.root, ["rev-parse", "--verify", "-q", "HEAD^{commit}"], self.timeout_seconds)
        if verify.returncode != 0:
            raise UnresolvableHeadError(repo.root)

        branch_args = ["rev-parse", "--abbrev-ref", "HEAD"]
        branch = _check(_run_git(repo.root, branch_args, self.timeout_seconds), branch_args).strip()

        diff_args = ["diff", "--numstat", "HEAD", "--"]
        numstat = _check(_run_git(repo.root, diff_args, self.timeout_seconds), diff_args)
        files_changed, insertions, deletions = parse_numstat(numstat)
        return DiffStat(
            branch=branch,
            files_changed=files_changed,
            insertions=insertions,
            deletions=deletions,
        )


__all__ = [
    "GitBackend",
    "parse_porcelain_status",
    "parse_numstat",
]
