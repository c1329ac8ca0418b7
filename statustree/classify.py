"""Raw git status flags and their display classification.

Porcelain status codes become ``StatusFlag`` sets at the collaborator edge.
``classify`` turns a flag set into a closed ``Category`` plus render hints,
so precedence rules live here and nowhere else.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class StatusFlag(enum.IntFlag):
    """Raw per-path change flags reported by the status source."""

    NONE = 0
    INDEX_NEW = enum.auto()
    INDEX_MODIFIED = enum.auto()
    INDEX_DELETED = enum.auto()
    INDEX_RENAMED = enum.auto()
    INDEX_TYPECHANGE = enum.auto()
    WT_NEW = enum.auto()
    WT_MODIFIED = enum.auto()
    WT_DELETED = enum.auto()
    WT_TYPECHANGE = enum.auto()
    WT_RENAMED = enum.auto()
    IGNORED = enum.auto()
    CONFLICTED = enum.auto()


class Category(enum.IntEnum):
    """Display category; lower values win when several flags are set."""

    WORKTREE_MODIFIED = 1
    INDEX_MODIFIED = 2
    WORKTREE_NEW = 3
    INDEX_NEW = 4
    IGNORED = 5
    DEFAULT = 6


class Style(enum.Enum):
    """Semantic style names resolved to colors by ``UITheme``."""

    MODIFIED = "modified"
    MODIFIED_STAGED = "modified_staged"
    NEW = "new"
    NEW_STAGED = "new_staged"
    IGNORED = "ignored"
    DEFAULT = "default"


_CATEGORY_PRECEDENCE: tuple[tuple[StatusFlag, Category], ...] = (
    (StatusFlag.WT_MODIFIED, Category.WORKTREE_MODIFIED),
    (StatusFlag.INDEX_MODIFIED, Category.INDEX_MODIFIED),
    (StatusFlag.WT_NEW, Category.WORKTREE_NEW),
    (StatusFlag.INDEX_NEW, Category.INDEX_NEW),
    (StatusFlag.IGNORED, Category.IGNORED),
)

_CATEGORY_STYLES: dict[Category, Style] = {
    Category.WORKTREE_MODIFIED: Style.MODIFIED,
    Category.INDEX_MODIFIED: Style.MODIFIED_STAGED,
    Category.WORKTREE_NEW: Style.NEW,
    Category.INDEX_NEW: Style.NEW_STAGED,
    Category.IGNORED: Style.IGNORED,
    Category.DEFAULT: Style.DEFAULT,
}

_UNMERGED_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})

_INDEX_CODE_FLAGS: dict[str, StatusFlag] = {
    "A": StatusFlag.INDEX_NEW,
    "C": StatusFlag.INDEX_NEW,
    "M": StatusFlag.INDEX_MODIFIED,
    "D": StatusFlag.INDEX_DELETED,
    "R": StatusFlag.INDEX_RENAMED,
    "T": StatusFlag.INDEX_TYPECHANGE,
}

_WORKTREE_CODE_FLAGS: dict[str, StatusFlag] = {
    "M": StatusFlag.WT_MODIFIED,
    "D": StatusFlag.WT_DELETED,
    "T": StatusFlag.WT_TYPECHANGE,
    "R": StatusFlag.WT_RENAMED,
    "A": StatusFlag.WT_NEW,
}


@dataclass(frozen=True)
class Classification:
    """Category plus the style and modifier glyphs used when rendering a leaf."""

    category: Category
    style: Style
    index_glyph: str
    worktree_glyph: str

    @property
    def modifiers(self) -> str:
        return self.index_glyph + self.worktree_glyph


def category_for(flags: StatusFlag) -> Category:
    """Return the highest-precedence category present in ``flags``."""
    for flag, category in _CATEGORY_PRECEDENCE:
        if flags & flag:
            return category
    return Category.DEFAULT


def index_glyph_for(flags: StatusFlag) -> str:
    if flags & StatusFlag.INDEX_MODIFIED:
        return "M"
    if flags & StatusFlag.INDEX_NEW:
        return "N"
    return "-"


def worktree_glyph_for(flags: StatusFlag) -> str:
    if flags & StatusFlag.WT_MODIFIED:
        return "M"
    if flags & StatusFlag.WT_NEW:
        return "N"
    if flags & StatusFlag.WT_DELETED:
        return "D"
    return "-"


def classify(flags: StatusFlag) -> Classification:
    """Classify one path's raw flags.

    The category and style follow the precedence order
    worktree-modified, index-modified, worktree-new, index-new, ignored.
    The two modifier columns are derived independently of that order, so a
    staged-new file with worktree edits shows ``N`` then ``M``.
    """
    category = category_for(flags)
    return Classification(
        category=category,
        style=_CATEGORY_STYLES[category],
        index_glyph=index_glyph_for(flags),
        worktree_glyph=worktree_glyph_for(flags),
    )


def flags_from_porcelain(code: str) -> StatusFlag:
    """Convert a porcelain v1 ``XY`` status code into ``StatusFlag``."""
    if code == "??":
        return StatusFlag.WT_NEW
    if code == "!!":
        return StatusFlag.IGNORED
    if code in _UNMERGED_CODES:
        return StatusFlag.CONFLICTED

    padded = code.ljust(2)
    flags = StatusFlag.NONE
    flags |= _INDEX_CODE_FLAGS.get(padded[0], StatusFlag.NONE)
    flags |= _WORKTREE_CODE_FLAGS.get(padded[1], StatusFlag.NONE)
    return flags


__all__ = [
    "StatusFlag",
    "Category",
    "Style",
    "Classification",
    "category_for",
    "index_glyph_for",
    "worktree_glyph_for",
    "classify",
    "flags_from_porcelain",
]
