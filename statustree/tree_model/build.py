"""Status-tree construction from flat status records."""

from __future__ import annotations

from collections.abc import Iterable

from ..classify import Category, Classification, classify
from ..errors import UnresolvablePathError, UnsupportedPathComponentError
from ..repository import StatusEntry
from .types import Branch, Leaf

_SPECIAL_COMPONENTS = frozenset({".", ".."})


def split_path_components(relative_path: str) -> list[str]:
    """Split a repository-relative path into plain name components.

    A single trailing slash (git's marker for a directory record) is allowed.
    Absolute paths, ``.``/``..`` components and empty paths are rejected.
    """
    if relative_path.startswith("/"):
        raise UnsupportedPathComponentError(relative_path, "/")
    trimmed = relative_path[:-1] if relative_path.endswith("/") else relative_path
    if not trimmed:
        raise UnsupportedPathComponentError(relative_path, relative_path)

    components = trimmed.split("/")
    for component in components:
        if not component or component in _SPECIAL_COMPONENTS:
            raise UnsupportedPathComponentError(relative_path, component)
    return components


def insert(root: Branch, relative_path: str, classification: Classification) -> Leaf:
    """Store a classified leaf at ``relative_path`` below ``root``.

    Missing parent directories are created as branches. An existing entry
    with the same final name is replaced, and a leaf sitting where a parent
    directory is needed is replaced by a branch.
    """
    *parents, file_name = split_path_components(relative_path)

    current = root
    for component in parents:
        child = current.children.get(component)
        if not isinstance(child, Branch):
            child = Branch(component)
            current.children[component] = child
        current = child

    leaf = Leaf(file_name, classification)
    current.children[file_name] = leaf
    return leaf


def build_status_tree(name: str, entries: Iterable[StatusEntry], include_ignored: bool = False) -> Branch:
    """Build a repository tree labelled ``name`` from status records.

    Ignored records are dropped unless ``include_ignored`` is set. A record
    whose path could not be decoded aborts the build.
    """
    root = Branch(name)
    for entry in entries:
        classification = classify(entry.flags)
        if classification.category is Category.IGNORED and not include_ignored:
            continue
        if entry.path is None:
            raise UnresolvablePathError(entry.raw_path)
        insert(root, entry.path, classification)
    return root


__all__ = [
    "split_path_components",
    "insert",
    "build_status_tree",
]
