"""Command-line front door for statustree.

Parses CLI options, walks the starting path for repositories, and prints
the rendered status tree. Failures are reported as one line of text.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import load_default_depth, load_include_ignored, load_theme_name, save_theme_name
from .errors import StatusTreeError
from .git_status import GitBackend
from .repository import RepositoryBackend
from .tree_model import render_text
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme
from .walker import RepositoryWalker, WalkOptions

DESCRIPTION = "tree + git status: displays git status info in a tree"
EPILOG = (
    "statustree searches for a git repository the same way git does and "
    "displays a tree showing untracked and modified files. The tree's root is "
    "the starting directory. Items are colored by status (green: new, red: "
    "modified, blue: ignored); changes already in the index are shown in bold. "
    "The two columns in front of each name show index and worktree changes "
    "(M: modified, N: new, D: deleted)."
)


def _non_negative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="statustree", description=DESCRIPTION, epilog=EPILOG)
    parser.add_argument("path", nargs="?", default=".", help="Starting path. Defaults to the current directory.")
    parser.add_argument("-a", "--all", action="store_true", default=None, help="Include ignored files.")
    parser.add_argument(
        "--depth",
        type=_non_negative_int,
        default=None,
        help="Recursively search for repositories up to DEPTH directory levels deep (default: 0).",
    )
    parser.add_argument(
        "-s",
        "--summary",
        action="store_true",
        help="Show only a summary containing the number of additions, deletions, and changed files.",
    )
    parser.add_argument(
        "--only-show-changes",
        action="store_true",
        help="With --summary, omit repositories without added or deleted lines.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument(
        "--save-theme",
        action="store_true",
        help="Remember --theme as the default for later runs.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log walk details to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )


def options_from_args(args: argparse.Namespace) -> WalkOptions:
    """Merge parsed CLI flags with persisted defaults."""
    return WalkOptions(
        include_ignored=bool(args.all) if args.all is not None else load_include_ignored(),
        depth=args.depth if args.depth is not None else load_default_depth(),
        summary=args.summary,
        only_show_changes=args.only_show_changes,
    )


def main(argv: list[str] | None = None, backend: RepositoryBackend | None = None) -> None:
    """Parse CLI arguments, walk for repositories, and print the status tree.

    ``backend`` is primarily for tests; the git CLI backend is used when it
    is omitted.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.save_theme and args.theme:
        save_theme_name(normalize_theme_name(args.theme))

    path = Path(args.path)
    if not path.exists():
        sys.stdout.write(f"Path not found: {path}\n")
        raise SystemExit(1)

    options = options_from_args(args)
    no_color = args.no_color or not sys.stdout.isatty()
    theme = resolve_theme(args.theme or load_theme_name(), no_color=no_color)
    walker = RepositoryWalker(backend or GitBackend(), options)

    try:
        root = walker.run(path)
    except (StatusTreeError, OSError) as exc:
        sys.stdout.write(f"{exc}\n")
        raise SystemExit(1) from exc

    if root is not None:
        sys.stdout.write(render_text(root, theme))


if __name__ == "__main__":
    main()
