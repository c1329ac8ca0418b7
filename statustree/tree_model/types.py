"""Status-tree node datatypes shared by builders and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..classify import Classification
from ..repository import DiffStat


@dataclass
class Branch:
    """Directory or repository node owning its children by component name."""

    name: str
    children: dict[str, "Node"] = field(default_factory=dict)


@dataclass(frozen=True)
class Leaf:
    """One changed path, already classified."""

    name: str
    classification: Classification


@dataclass(frozen=True)
class Summary:
    """A whole repository collapsed into aggregate diff counts."""

    name: str
    stats: DiffStat


Node = Branch | Leaf | Summary


__all__ = [
    "Branch",
    "Leaf",
    "Summary",
    "Node",
]
