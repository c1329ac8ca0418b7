"""Tests for depth-bounded repository walking against an in-memory backend."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from statustree.classify import StatusFlag
from statustree.errors import RepositoryNotFoundError, UnresolvableHeadError
from statustree.repository import DiffStat, Repository, StatusEntry
from statustree.tree_model import Branch, Leaf, Summary
from statustree.walker import DEPTH_HINT, RepositoryWalker, WalkOptions, display_name


class FakeBackend:
    """In-memory ``RepositoryBackend`` keyed by resolved repository root."""

    def __init__(self) -> None:
        self.statuses_by_root: dict[Path, list[StatusEntry]] = {}
        self.stats_by_root: dict[Path, DiffStat | Exception] = {}

    def add(
        self,
        root: Path,
        statuses: list[StatusEntry] | None = None,
        stats: DiffStat | Exception | None = None,
    ) -> None:
        resolved = root.resolve()
        self.statuses_by_root[resolved] = statuses or []
        self.stats_by_root[resolved] = stats or DiffStat("main", 0, 0, 0)

    def open(self, path: Path) -> Repository | None:
        resolved = path.resolve()
        if resolved in self.statuses_by_root:
            return Repository(resolved)
        return None

    def discover(self, path: Path) -> Repository:
        resolved = path.resolve()
        for candidate in (resolved, *resolved.parents):
            if candidate in self.statuses_by_root:
                return Repository(candidate)
        raise RepositoryNotFoundError(path)

    def statuses(self, repo: Repository) -> list[StatusEntry]:
        return self.statuses_by_root[repo.root]

    def diff_stats(self, repo: Repository) -> DiffStat:
        stats = self.stats_by_root[repo.root]
        if isinstance(stats, Exception):
            raise stats
        return stats


class RepositoryWalkerTests(unittest.TestCase):
    def test_repository_root_produces_full_status_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            backend = FakeBackend()
            backend.add(root, [StatusEntry("src/a.py", StatusFlag.WT_MODIFIED)])

            node = RepositoryWalker(backend).run(root)

            self.assertIsInstance(node, Branch)
            self.assertEqual(node.name, root.name)
            self.assertIsInstance(node.children["src"].children["a.py"], Leaf)

    def test_depth_zero_does_not_descend_but_depth_one_finds_nested_repo(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            nested = root / "project"
            nested.mkdir()
            backend = FakeBackend()
            backend.add(nested, [StatusEntry("x.txt", StatusFlag.WT_NEW)])

            walker = RepositoryWalker(backend)
            self.assertIsNone(walker.walk_path(root, 0))

            node = walker.walk_path(root, 1)
            self.assertIsInstance(node, Branch)
            self.assertEqual(list(node.children), ["project"])
            self.assertIn("x.txt", node.children["project"].children)

    def test_depth_budget_limits_plain_directory_levels(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            deep = root / "a" / "b"
            deep.mkdir(parents=True)
            backend = FakeBackend()
            backend.add(deep, [StatusEntry("f", StatusFlag.WT_NEW)])

            walker = RepositoryWalker(backend)
            self.assertIsNone(walker.walk_path(root, 1))
            node = walker.walk_path(root, 2)
            self.assertIn("b", node.children["a"].children)

    def test_plain_directories_without_repositories_are_omitted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "empty").mkdir()
            (root / "repo").mkdir()
            (root / "notes.txt").write_text("x\n", encoding="utf-8")
            backend = FakeBackend()
            backend.add(root / "repo")

            node = RepositoryWalker(backend).walk_path(root, 2)

            self.assertEqual(list(node.children), ["repo"])
            self.assertEqual(node.children["repo"].children, {})

    def test_nested_failures_are_swallowed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("broken", "ok"):
                (root / name).mkdir()
            backend = FakeBackend()
            backend.add(root / "broken", stats=UnresolvableHeadError(root / "broken"))
            backend.add(root / "ok", stats=DiffStat("main", 1, 2, 3))

            node = RepositoryWalker(backend, WalkOptions(summary=True)).walk_path(root, 1)

            self.assertEqual(list(node.children), ["ok"])
            self.assertIsInstance(node.children["ok"], Summary)

    def test_unreadable_nested_directory_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "locked").mkdir()
            (root / "repo").mkdir()
            backend = FakeBackend()
            backend.add(root / "repo")
            walker = RepositoryWalker(backend)
            original = walker.walk_directory

            def fake_walk_directory(path: Path, depth: int):
                if path.name == "locked":
                    raise PermissionError("denied")
                return original(path, depth)

            with mock.patch.object(walker, "walk_directory", side_effect=fake_walk_directory):
                node = walker.walk_path(root, 2)

            self.assertEqual(list(node.children), ["repo"])

    def test_top_level_head_failure_propagates_in_summary_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            backend = FakeBackend()
            backend.add(root, stats=UnresolvableHeadError(root))

            with self.assertRaises(UnresolvableHeadError):
                RepositoryWalker(backend, WalkOptions(summary=True)).run(root)
            self.assertIsInstance(RepositoryWalker(backend).run(root), Branch)

    def test_only_show_changes_suppresses_zero_line_summaries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("clean", "dirty"):
                (root / name).mkdir()
            backend = FakeBackend()
            backend.add(root / "clean", stats=DiffStat("main", files_changed=4, insertions=0, deletions=0))
            backend.add(root / "dirty", stats=DiffStat("dev", files_changed=1, insertions=0, deletions=5))
            options = WalkOptions(summary=True, only_show_changes=True, depth=1)

            node = RepositoryWalker(backend, options).run(root)

            self.assertEqual(list(node.children), ["dirty"])
            self.assertEqual(node.children["dirty"].stats.deletions, 5)

    def test_all_repositories_suppressed_returns_nothing_without_discovery(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "clean").mkdir()
            backend = FakeBackend()
            backend.add(root / "clean")
            options = WalkOptions(summary=True, only_show_changes=True, depth=1)

            self.assertIsNone(RepositoryWalker(backend, options).run(root))

    def test_unchanged_starting_repository_is_suppressed_without_discovery(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            backend = FakeBackend()
            backend.add(root, stats=DiffStat("main", files_changed=3, insertions=0, deletions=0))
            options = WalkOptions(summary=True, only_show_changes=True)

            with mock.patch.object(
                backend, "discover", side_effect=RepositoryNotFoundError(root)
            ) as discover:
                self.assertIsNone(RepositoryWalker(backend, options).run(root))
            discover.assert_not_called()

    def test_include_ignored_option(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            backend = FakeBackend()
            backend.add(root, [StatusEntry("dist/", StatusFlag.IGNORED)])

            self.assertEqual(RepositoryWalker(backend).run(root).children, {})
            node = RepositoryWalker(backend, WalkOptions(include_ignored=True)).run(root)
            self.assertIn("dist", node.children)

    def test_fallback_discovers_enclosing_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            sub = root / "pkg" / "module"
            sub.mkdir(parents=True)
            backend = FakeBackend()
            backend.add(root, [StatusEntry("pkg/module/a.py", StatusFlag.WT_MODIFIED)])

            node = RepositoryWalker(backend).run(sub)

            self.assertIsInstance(node, Branch)
            self.assertEqual(node.name, "module")
            self.assertIn("pkg", node.children)

    def test_missing_repository_reports_depth_hint(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            with self.assertRaises(RepositoryNotFoundError) as ctx:
                RepositoryWalker(FakeBackend()).run(root)
            self.assertEqual(ctx.exception.hint, DEPTH_HINT)
            self.assertIn("--depth", str(ctx.exception))

    def test_other_discovery_errors_propagate_unchanged(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            backend = FakeBackend()
            with mock.patch.object(backend, "discover", side_effect=PermissionError("nope")):
                with self.assertRaises(PermissionError):
                    RepositoryWalker(backend).run(root)

    def test_display_name_keeps_dot_label(self) -> None:
        self.assertEqual(display_name(Path(".")), ".")
        self.assertEqual(display_name(Path("/tmp/project")), "project")


if __name__ == "__main__":
    unittest.main()
