"""Repository discovery and naming."""

from __future__ import annotations

import logging
from pathlib import Path

from .divergence import DivergenceTracker
from .git import METADATA_DIR, Git, normalize_pathspec
from .models import ChildRepository, Repository
from .runner import CommandRunner

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "unknown"


def find_root(start: Path) -> Path | None:
    """Return the first of `start` and its ancestors holding git metadata."""

    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / METADATA_DIR).exists():
            return candidate
    return None


def parse_repo_name(url: str) -> str | None:
    """Extract `repo` from `https://host/owner/repo.git` or `git@host:owner/repo.git`."""

    trimmed = url.strip().rstrip("/")
    if trimmed.endswith(".git"):
        trimmed = trimmed[: -len(".git")]
    for sep in ("/", ":"):
        if sep in trimmed:
            name = trimmed.rsplit(sep, 1)[1]
            return name or None
    return None


def derive_name(root: Path, runner: CommandRunner, remote: str = "origin") -> str:
    url = Git(runner, root, remote).remote_url()
    if url:
        name = parse_repo_name(url)
        if name:
            return name
        logger.debug("Could not parse repository name from %s", url)
    return root.name or UNKNOWN_NAME


def locate(start: Path, runner: CommandRunner, remote: str = "origin") -> Repository | None:
    root = find_root(start)
    if root is None:
        return None
    return Repository(root=root, name=derive_name(root, runner, remote))


def compute_pathspec(root: Path, current: Path) -> str:
    """Pathspec of `current` relative to `root`; `.` for the root itself."""

    try:
        relative = current.resolve().relative_to(root.resolve())
    except ValueError:
        return "."
    raw = relative.as_posix()
    if raw in ("", "."):
        return "."
    return normalize_pathspec(raw)


def list_child_repos(base: Path, runner: CommandRunner) -> list[ChildRepository]:
    """Describe immediate child directories that are repositories."""

    found: list[ChildRepository] = []
    if not base.is_dir():
        return found
    for child in sorted(base.iterdir()):
        if not child.is_dir() or not (child / METADATA_DIR).exists():
            continue
        git = Git(runner, child)
        found.append(
            ChildRepository(
                path=child,
                branch=git.current_branch() or "",
                dirty=bool(git.run("status", "--porcelain", check=False).stdout.strip()),
                divergence=DivergenceTracker(git).count(),
            )
        )
    return found
