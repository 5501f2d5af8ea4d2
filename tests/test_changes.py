"""Tests for status parsing, grouping and scoped change detection."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from syncgit.changes import ScopedChangeDetector, group_entries, group_key, parse_status_line
from syncgit.git import Git
from syncgit.models import ROOT_GROUP
from syncgit.runner import SubprocessRunner

from .support import HAS_GIT, git, make_repo, write


class ParseStatusLineTests(unittest.TestCase):
    def test_modified_in_worktree(self) -> None:
        entry = parse_status_line(" M src/app.py")
        self.assertEqual(entry.code, " M")
        self.assertEqual(entry.path, "src/app.py")
        self.assertEqual(entry.line, " M src/app.py")

    def test_rename_uses_new_path(self) -> None:
        entry = parse_status_line("R  old/name.py -> new/name.py")
        self.assertEqual(entry.code, "R ")
        self.assertEqual(entry.path, "new/name.py")

    def test_quoted_path_is_unquoted(self) -> None:
        entry = parse_status_line('?? "docs/with space.md"')
        self.assertEqual(entry.path, "docs/with space.md")

    def test_short_or_blank_lines_are_ignored(self) -> None:
        self.assertIsNone(parse_status_line(""))
        self.assertIsNone(parse_status_line("M"))


class GroupingTests(unittest.TestCase):
    def test_group_key_is_first_segment_below_pathspec(self) -> None:
        self.assertEqual(group_key("src/app.py", "."), "src")
        self.assertEqual(group_key("README.md", "."), ROOT_GROUP)
        self.assertEqual(group_key("src/pkg/mod.py", "src"), "pkg")
        self.assertEqual(group_key("src/main.py", "src"), ROOT_GROUP)
        self.assertEqual(group_key("src/", "src"), ROOT_GROUP)
        self.assertEqual(group_key("src/new/", "src"), "new")

    def test_groups_are_sorted_by_key(self) -> None:
        lines = ["?? zeta/a.txt", " M README.md", " M alpha/b.txt", "A  alpha/c.txt"]
        entries = [parse_status_line(line) for line in lines]

        groups = group_entries(entries, ".")

        self.assertEqual([group.key for group in groups], [ROOT_GROUP, "alpha", "zeta"])
        self.assertEqual(groups[1].lines, (" M alpha/b.txt", "A  alpha/c.txt"))
        self.assertEqual(groups[0].display_name, "(root)")


@unittest.skipUnless(HAS_GIT, "git is required")
class ScopedChangeDetectorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = make_repo(Path(self._tmp.name).resolve() / "repo")
        self.detector = ScopedChangeDetector(Git(SubprocessRunner(), self.root))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_detects_each_kind_of_change_within_scope(self) -> None:
        write(self.root, "src/tracked.txt", "one\n")
        git(self.root, "add", "src/tracked.txt")
        git(self.root, "commit", "-q", "-m", "add tracked")

        self.assertFalse(self.detector.detect("src").any)

        write(self.root, "src/tracked.txt", "two\n")
        changes = self.detector.detect("src")
        self.assertTrue(changes.unstaged)
        self.assertFalse(changes.staged)

        git(self.root, "add", "src/tracked.txt")
        self.assertTrue(self.detector.detect("src").staged)

        write(self.root, "src/new.txt")
        self.assertTrue(self.detector.detect("src").untracked)

    def test_changes_outside_scope_are_invisible_to_scoped_checks(self) -> None:
        write(self.root, "docs/guide.md")

        self.assertTrue(self.detector.has_changes())
        self.assertTrue(self.detector.has_changes("docs"))
        self.assertFalse(self.detector.has_changes("src"))
        self.assertFalse(self.detector.detect("src").any)

    def test_grouped_status_is_deterministic(self) -> None:
        write(self.root, "src/keep.txt")
        git(self.root, "add", "src/keep.txt")
        git(self.root, "commit", "-q", "-m", "track src")
        write(self.root, "src/b/one.py")
        write(self.root, "src/a/two.py")
        write(self.root, "src/top.py")
        write(self.root, "docs/ignored.md")

        first = self.detector.grouped_status("src")
        second = self.detector.grouped_status("src")

        self.assertEqual(first, second)
        self.assertEqual([group.key for group in first], [ROOT_GROUP, "a", "b"])
        self.assertEqual(first[0].lines, ("?? src/top.py",))


if __name__ == "__main__":
    unittest.main()
