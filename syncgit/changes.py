"""Change discovery restricted to a pathspec."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .git import Git
from .models import ROOT_GROUP, ChangeSet, StatusEntry, StatusGroup

logger = logging.getLogger(__name__)

RENAME_ARROW = " -> "


def _unquote(path: str) -> str:
    """Undo git's C-style quoting of unusual paths."""

    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    inner = path[1:-1]
    try:
        return inner.encode("latin-1").decode("unicode_escape").encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return inner


def parse_status_line(line: str) -> StatusEntry | None:
    """Split a `--porcelain=v1` line into its status code and path.

    Renames (`R  old -> new`) resolve to the new path.
    """

    line = line.rstrip("\r\n")
    if len(line) < 4:
        return None
    code = line[:2]
    rest = line[3:]
    if RENAME_ARROW in rest:
        rest = rest.split(RENAME_ARROW, 1)[1]
    path = _unquote(rest.strip())
    if not path:
        return None
    return StatusEntry(code=code, path=path, line=line)


def group_key(path: str, pathspec: str) -> str:
    """Top-level folder of `path` below `pathspec`, or the root sentinel."""

    relative = path
    if pathspec not in ("", "."):
        prefix = pathspec.rstrip("/") + "/"
        if path.startswith(prefix):
            relative = path[len(prefix):]
        elif path.rstrip("/") == pathspec.rstrip("/"):
            relative = ""
    head, sep, _ = relative.partition("/")
    if not sep or not head:
        return ROOT_GROUP
    return head


def group_entries(entries: Iterable[StatusEntry], pathspec: str) -> list[StatusGroup]:
    buckets: dict[str, list[str]] = {}
    for entry in entries:
        buckets.setdefault(group_key(entry.path, pathspec), []).append(entry.line)
    return [StatusGroup(key=key, lines=tuple(buckets[key])) for key in sorted(buckets)]


@dataclass
class ScopedChangeDetector:
    git: Git

    def has_changes(self, pathspec: str | None = None) -> bool:
        """Whether `git status` reports anything, repository-wide when no pathspec."""

        return bool(self.git.status_porcelain(pathspec).strip())

    def detect(self, pathspec: str) -> ChangeSet:
        changes = ChangeSet(
            unstaged=self.git.has_diff(pathspec),
            staged=self.git.has_diff(pathspec, cached=True),
            untracked=bool(self.git.untracked_files(pathspec)),
        )
        logger.debug("Changes in %s: %s", pathspec, changes)
        return changes

    def entries(self, pathspec: str | None = None) -> list[StatusEntry]:
        raw = self.git.status_porcelain(pathspec)
        parsed = (parse_status_line(line) for line in raw.splitlines())
        return [entry for entry in parsed if entry is not None]

    def grouped_status(self, pathspec: str) -> list[StatusGroup]:
        return group_entries(self.entries(pathspec), pathspec)

    def repository_groups(self) -> list[StatusGroup]:
        """Repository-wide groups, keyed by top-level folder."""

        return group_entries(self.entries(None), ".")
