"""Box-drawn text rendering for status trees.

Each node renders to a list of lines. A branch prefixes its children's
lines: the first line of a child gets a connector, every following line gets
a continuation that keeps ancestor bars aligned.
"""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme, paint
from .types import Branch, Leaf, Node, Summary

CONNECTOR = "├── "
CONTINUATION = "│   "
LAST_CONNECTOR = "└── "
LAST_CONTINUATION = "    "


def format_leaf(leaf: Leaf, theme: UITheme | None = None) -> str:
    """Render ``"{index}{worktree} {name}"`` for one changed path."""
    active_theme = theme or DEFAULT_THEME
    classification = leaf.classification
    return (
        f"{paint(active_theme.modifier, classification.index_glyph)}"
        f"{paint(active_theme.modifier, classification.worktree_glyph)} "
        f"{paint(active_theme.attr_for(classification.style), leaf.name)}"
    )


def format_summary(summary: Summary, theme: UITheme | None = None) -> str:
    """Render ``"{name} [{branch}] +{ins} -{del} ({files})"`` for one repository."""
    active_theme = theme or DEFAULT_THEME
    stats = summary.stats
    return (
        f"{summary.name} "
        f"{paint(active_theme.summary_branch, f'[{stats.branch}]')} "
        f"+{paint(active_theme.summary_insertions, str(stats.insertions))} "
        f"-{paint(active_theme.summary_deletions, str(stats.deletions))} "
        f"({paint(active_theme.summary_files_changed, str(stats.files_changed))})"
    )


def prefix_first_and_rest(lines: list[str], first: str, rest: str) -> list[str]:
    if not lines:
        return []
    return [first + lines[0], *(rest + line for line in lines[1:])]


def render_lines(node: Node, theme: UITheme | None = None) -> list[str]:
    """Render ``node`` depth-first, children in lexicographic name order."""
    match node:
        case Leaf():
            return [format_leaf(node, theme)]
        case Summary():
            return [format_summary(node, theme)]
        case Branch():
            lines = [node.name]
            names = sorted(node.children)
            for index, name in enumerate(names):
                child_lines = render_lines(node.children[name], theme)
                if index == len(names) - 1:
                    lines.extend(prefix_first_and_rest(child_lines, LAST_CONNECTOR, LAST_CONTINUATION))
                else:
                    lines.extend(prefix_first_and_rest(child_lines, CONNECTOR, CONTINUATION))
            return lines
    raise TypeError(f"cannot render {type(node).__name__}")


def render_text(node: Node, theme: UITheme | None = None) -> str:
    """Render ``node`` as newline-terminated text."""
    return "".join(f"{line}\n" for line in render_lines(node, theme))


__all__ = [
    "CONNECTOR",
    "CONTINUATION",
    "LAST_CONNECTOR",
    "LAST_CONTINUATION",
    "format_leaf",
    "format_summary",
    "prefix_first_and_rest",
    "render_lines",
    "render_text",
]
