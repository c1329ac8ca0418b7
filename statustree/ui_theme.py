"""UI theme definitions and selection helpers.

Themes map semantic styles to ``pygments.console`` attribute strings
(``"red"``, ``"*red*"`` for bold, ``""`` for unstyled). Renderers only pick
the semantic slot; ``paint`` turns it into escape sequences.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.console import ansiformat

from .classify import Style


@dataclass(frozen=True)
class UITheme:
    """Semantic color palette used by tree renderers."""

    name: str
    modified: str
    modified_staged: str
    new: str
    new_staged: str
    ignored: str
    default: str
    modifier: str
    summary_branch: str
    summary_insertions: str
    summary_deletions: str
    summary_files_changed: str

    def attr_for(self, style: Style) -> str:
        """Return the attribute string configured for ``style``."""
        return getattr(self, style.value)


DEFAULT_THEME = UITheme(
    name="default",
    modified="red",
    modified_staged="*red*",
    new="green",
    new_staged="*green*",
    ignored="blue",
    default="gray",
    modifier="brightblack",
    summary_branch="brightblack",
    summary_insertions="green",
    summary_deletions="red",
    summary_files_changed="yellow",
)

OCEAN_THEME = UITheme(
    name="ocean",
    modified="brightmagenta",
    modified_staged="*brightmagenta*",
    new="brightcyan",
    new_staged="*brightcyan*",
    ignored="brightblue",
    default="gray",
    modifier="blue",
    summary_branch="blue",
    summary_insertions="brightcyan",
    summary_deletions="brightmagenta",
    summary_files_changed="brightyellow",
)

PLAIN_THEME = UITheme(
    name="plain",
    modified="",
    modified_staged="",
    new="",
    new_staged="",
    ignored="",
    default="",
    modifier="",
    summary_branch="",
    summary_insertions="",
    summary_deletions="",
    summary_files_changed="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def paint(attr: str, text: str) -> str:
    """Wrap ``text`` in the escape sequences for ``attr``; empty attr is a no-op."""
    if not attr:
        return text
    return ansiformat(attr, text)


def available_theme_names() -> tuple[str, ...]:
    """Return every selectable theme name, ``plain`` included."""
    return tuple(_THEMES)


def normalize_theme_name(name: str | None) -> str:
    """Return the lower-cased known theme name, or ``default`` for anything else."""
    candidate = (name or "").strip().lower()
    return candidate if candidate in _THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return the theme for ``name``; ``no_color`` forces the escape-free one."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "paint",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
