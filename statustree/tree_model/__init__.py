"""Status-tree model: node types, construction, and text rendering.

Flat status records are inserted into nested ``Branch`` nodes keyed by path
component, then rendered as box-drawn lines.
"""

from __future__ import annotations

from .build import build_status_tree, insert, split_path_components
from .rendering import format_leaf, format_summary, render_lines, render_text
from .types import Branch, Leaf, Node, Summary

__all__ = [
    "Branch",
    "Leaf",
    "Summary",
    "Node",
    "split_path_components",
    "insert",
    "build_status_tree",
    "format_leaf",
    "format_summary",
    "render_lines",
    "render_text",
]
