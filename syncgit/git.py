"""Thin wrappers around git CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .exceptions import CommandFailedError
from .models import CommandOutcome
from .runner import CommandRunner

METADATA_DIR = ".git"
ESCAPED_METADATA_DIR = "GIT_ESCAPED"
# Folder names are paths, never glob patterns or pathspec magic.
LITERAL_PATHSPECS = "--literal-pathspecs"


def normalize_pathspec(path: str) -> str:
    """Return a pathspec safe to pass as a single argument after `--`."""

    clean = path.replace("\\", "/").replace("\r", "").replace("\n", "")
    parts = [ESCAPED_METADATA_DIR if part == METADATA_DIR else part for part in clean.split("/")]
    return "/".join(parts) or "."


@dataclass(frozen=True)
class GitAuth:
    """Per-invocation credential wiring; nothing here is written to config."""

    config_args: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        return bool(self.config_args)


NO_AUTH = GitAuth()


@dataclass
class Git:
    runner: CommandRunner
    root: Path
    remote: str = "origin"

    def run(
        self,
        *args: str,
        check: bool = True,
        auth: GitAuth = NO_AUTH,
        stream: bool = False,
    ) -> CommandOutcome:
        cmd = ["git", LITERAL_PATHSPECS, *auth.config_args, *args]
        outcome = self.runner.run(cmd, cwd=self.root, env=dict(auth.env) or None, stream=stream)
        if check and not outcome.success:
            # Report the argv without the credential helper arguments.
            raise CommandFailedError(
                ["git", *args],
                outcome.returncode,
                stdout=outcome.text,
                stderr=outcome.error_text,
            )
        return outcome

    def _stdout(self, *args: str) -> str | None:
        outcome = self.run(*args, check=False)
        if not outcome.success:
            return None
        return outcome.text.strip() or None

    def init(self) -> None:
        self.run("init")

    def remote_url(self) -> str | None:
        return self._stdout("config", "--get", f"remote.{self.remote}.url")

    def set_remote_url(self, url: str) -> None:
        self.run("remote", "set-url", self.remote, url)

    def add_remote(self, url: str) -> None:
        self.run("remote", "add", self.remote, url)

    def current_branch(self) -> str | None:
        return self._stdout("symbolic-ref", "--short", "HEAD")

    def upstream(self) -> str | None:
        return self._stdout("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}")

    def left_right_count(self, left: str, right: str) -> tuple[int, int] | None:
        raw = self._stdout("rev-list", "--left-right", "--count", f"{left}...{right}")
        if raw is None:
            return None
        parts = raw.split()
        if len(parts) != 2:
            return None
        try:
            return int(parts[0]), int(parts[1])
        except ValueError:
            return None

    def status_porcelain(self, pathspec: str | None = None) -> str:
        args = ["status", "--porcelain=v1"]
        if pathspec is not None:
            args.extend(["--", pathspec])
        return self.run(*args).text

    def status_short_branch(self) -> str:
        return self.run("status", "-sb").text

    def has_diff(self, pathspec: str, *, cached: bool = False) -> bool:
        args = ["diff", "--quiet"]
        if cached:
            args.append("--cached")
        args.extend(["--", pathspec])
        outcome = self.run(*args, check=False)
        if outcome.returncode not in (0, 1):
            raise CommandFailedError(["git", *args], outcome.returncode, stderr=outcome.error_text)
        return outcome.returncode == 1

    def untracked_files(self, pathspec: str) -> list[str]:
        outcome = self.run("ls-files", "--others", "--exclude-standard", "--", pathspec)
        return [line for line in outcome.text.splitlines() if line.strip()]

    def unmerged_files(self) -> list[str]:
        outcome = self.run("diff", "--name-only", "--diff-filter=U")
        return [line for line in outcome.text.splitlines() if line.strip()]

    def git_path(self, name: str) -> Path:
        raw = self._stdout("rev-parse", "--git-path", name)
        if raw is None:
            return self.root / METADATA_DIR / name
        path = Path(raw)
        return path if path.is_absolute() else self.root / path

    def stash_list(self) -> list[str]:
        outcome = self.run("stash", "list")
        return [line for line in outcome.text.splitlines() if line.strip()]

    def add(self, pathspec: str) -> None:
        self.run("add", "--", pathspec)

    def diff_cached_stat(self, pathspec: str) -> str:
        return self.run("diff", "--cached", "--stat", "--", pathspec).text

    def commit(self, message: str, pathspec: str) -> CommandOutcome:
        return self.run("commit", "-m", message, "--", pathspec)

    def log_oneline(self, revision_range: str, limit: int = 5) -> str:
        outcome = self.run("log", "--oneline", f"-n{limit}", revision_range, "--", check=False)
        return outcome.text if outcome.success else ""

    def remote_branch_exists(self, branch: str) -> bool:
        outcome = self.run(
            "rev-parse", "--verify", "--quiet", f"refs/remotes/{self.remote}/{branch}", check=False
        )
        return outcome.success

    def set_upstream(self, branch: str) -> CommandOutcome:
        return self.run("branch", f"--set-upstream-to={self.remote}/{branch}", branch, check=False)

    def push(self, auth: GitAuth = NO_AUTH, *, set_upstream_branch: str | None = None) -> CommandOutcome:
        if set_upstream_branch:
            return self.run(
                "push", "--set-upstream", self.remote, set_upstream_branch, check=False, auth=auth, stream=True
            )
        return self.run("push", check=False, auth=auth, stream=True)

    def fetch(self, auth: GitAuth = NO_AUTH) -> CommandOutcome:
        return self.run("fetch", self.remote, check=False, auth=auth, stream=True)

    def pull(self, auth: GitAuth = NO_AUTH, *, rebase: bool = False) -> None:
        args = ["pull"]
        if rebase:
            args.extend(["--rebase", "--autostash"])
        self.run(*args, auth=auth, stream=True)
