"""Test doubles and helpers shared by the test modules."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence

from syncgit.config import TokenSource
from syncgit.exceptions import RepositoryExistsError, UserAbort
from syncgit.git import LITERAL_PATHSPECS
from syncgit.models import CommandOutcome, HostedRepository

HAS_GIT = shutil.which("git") is not None

OK = CommandOutcome(success=True, returncode=0)
FAIL = CommandOutcome(success=False, stderr=b"rejected", returncode=1)


def ok(stdout: str = "") -> CommandOutcome:
    return CommandOutcome(success=True, stdout=stdout.encode(), returncode=0)


def fail(stderr: str = "failed", returncode: int = 1) -> CommandOutcome:
    return CommandOutcome(success=False, stderr=stderr.encode(), returncode=returncode)


@dataclass
class ScriptedPrompter:
    """Prompter that replays canned answers in order."""

    confirms: list[bool] = field(default_factory=list)
    lines: list[str] = field(default_factory=list)
    asked: list[str] = field(default_factory=list)

    def confirm(self, question: str, default: bool = False) -> bool:
        self.asked.append(question)
        if not self.confirms:
            raise UserAbort(f"No scripted answer for: {question}")
        return self.confirms.pop(0)

    def read_line(self, prompt: str, default: str | None = None) -> str:
        self.asked.append(prompt)
        if not self.lines:
            raise UserAbort(f"No scripted answer for: {prompt}")
        return self.lines.pop(0)


@dataclass
class FakeRunner:
    """Runner returning scripted outcomes keyed by the git subcommand argv.

    `responses` maps a tuple prefix of the argv (after the global options) to
    an outcome or a list of outcomes consumed in order. Unmatched commands
    succeed with empty output.
    """

    responses: dict[tuple[str, ...], CommandOutcome | list[CommandOutcome]] = field(default_factory=dict)
    calls: list[list[str]] = field(default_factory=list)
    raw_calls: list[list[str]] = field(default_factory=list)
    envs: list[Mapping[str, str] | None] = field(default_factory=list)

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        input_bytes: bytes | None = None,
        stream: bool = False,
    ) -> CommandOutcome:
        self.raw_calls.append(list(args))
        argv = strip_config_args(list(args))
        self.calls.append(argv)
        self.envs.append(env)
        best: tuple[str, ...] | None = None
        for prefix in self.responses:
            if tuple(argv[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        if best is None:
            return OK
        response = self.responses[best]
        if isinstance(response, list):
            return response.pop(0) if len(response) > 1 else response[0]
        return response

    def called(self, *prefix: str) -> list[list[str]]:
        return [call for call in self.calls if tuple(call[: len(prefix)]) == prefix]


def strip_config_args(argv: list[str]) -> list[str]:
    """Drop the global options (`--literal-pathspecs`, `-c key=value`) after the program name."""

    if not argv:
        return argv
    rest = argv[1:]
    while rest:
        if rest[0] == LITERAL_PATHSPECS:
            rest = rest[1:]
        elif rest[0] == "-c" and len(rest) >= 2:
            rest = rest[2:]
        else:
            break
    return [argv[0], *rest]


def token_source(token: str | None) -> TokenSource:
    env = {"GITHUB_TOKEN": token} if token else {}
    return TokenSource(environ=env)


@dataclass
class FakeHosting:
    existing: set[str] = field(default_factory=set)
    login: str = "octo"
    created: list[tuple[str, str | None, bool]] = field(default_factory=list)

    def create_repository(self, name: str, *, description: str | None = None, private: bool = False) -> HostedRepository:
        if name in self.existing:
            raise RepositoryExistsError(422, "Repository creation failed.; name already exists on this account")
        self.created.append((name, description, private))
        return HostedRepository(
            name=name,
            html_url=f"https://github.com/{self.login}/{name}",
            clone_url=f"https://github.com/{self.login}/{name}.git",
            private=private,
        )

    def authenticated_login(self) -> str:
        return self.login


def git(cwd: Path, *args: str) -> str:
    proc = subprocess.run(["git", *args], cwd=str(cwd), capture_output=True, text=True, check=True)
    return proc.stdout


def make_repo(root: Path) -> Path:
    """Create a repository with one commit and local identity settings."""

    root.mkdir(parents=True, exist_ok=True)
    git(root, "init", "-q")
    git(root, "config", "user.email", "tests@example.com")
    git(root, "config", "user.name", "Tests")
    git(root, "config", "commit.gpgsign", "false")
    (root / "README.md").write_text("hello\n")
    git(root, "add", "README.md")
    git(root, "commit", "-q", "-m", "initial")
    return root


def write(root: Path, relative: str, content: str = "data\n") -> Path:
    target = root / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content)
    return target


@dataclass
class StubProbe:
    online: bool = True
    calls: int = 0

    def __call__(self) -> bool:
        self.calls += 1
        return self.online
