"""Directory listing used while searching for nested repositories."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryChild:
    """One directory child with the metadata the walker needs."""

    name: str
    path: Path
    is_dir: bool


def list_directory_children(directory: Path) -> tuple[list[DirectoryChild], OSError | None]:
    """List children of ``directory`` sorted by name.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory itself cannot be scanned; individual entries whose type cannot
    be read are skipped.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                try:
                    is_dir = child.is_dir()
                except OSError as exc:
                    logger.debug("skipping unreadable entry %s: %s", child.path, exc)
                    continue
                children.append(DirectoryChild(name=child.name, path=Path(child.path), is_dir=is_dir))
    except OSError as exc:
        return [], exc

    children.sort(key=lambda item: item.name)
    return children, None


__all__ = [
    "DirectoryChild",
    "list_directory_children",
]
