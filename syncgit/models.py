"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


ROOT_GROUP = "."


@dataclass(frozen=True)
class Repository:
    """A working tree discovered at startup."""

    root: Path
    name: str


@dataclass(frozen=True)
class CommandOutcome:
    """Immutable result of one external invocation."""

    success: bool
    stdout: bytes = b""
    stderr: bytes = b""
    returncode: int | None = None

    @property
    def text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def error_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class DivergenceCount:
    """Commits only present locally (ahead) and only upstream (behind)."""

    ahead: int = 0
    behind: int = 0

    @property
    def in_sync(self) -> bool:
        return self.ahead == 0 and self.behind == 0


@dataclass(frozen=True)
class ChangeSet:
    unstaged: bool = False
    staged: bool = False
    untracked: bool = False

    @property
    def any(self) -> bool:
        return self.unstaged or self.staged or self.untracked


@dataclass(frozen=True)
class StatusEntry:
    """One porcelain status line split into its code and display path."""

    code: str
    path: str
    line: str


@dataclass(frozen=True)
class StatusGroup:
    key: str
    lines: tuple[str, ...] = field(default_factory=tuple)

    @property
    def display_name(self) -> str:
        return "(root)" if self.key == ROOT_GROUP else self.key


class PreflightStatus(str, Enum):
    OK = "ok"
    BLOCKED = "blocked"
    NEEDS_CONFIRMATION = "needs_confirmation"


@dataclass(frozen=True)
class PreflightResult:
    status: PreflightStatus
    reason: str = ""

    @classmethod
    def ok(cls) -> "PreflightResult":
        return cls(PreflightStatus.OK)


class PublishStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    OFFLINE = "offline"
    FAILED = "failed"


@dataclass(frozen=True)
class HostedRepository:
    """Repository metadata returned by the hosting API."""

    name: str
    html_url: str
    clone_url: str
    private: bool = False


@dataclass(frozen=True)
class ChildRepository:
    """A repository found directly below a non-repository directory."""

    path: Path
    branch: str
    dirty: bool
    divergence: DivergenceCount

    @property
    def marker(self) -> str:
        parts = []
        if self.dirty:
            parts.append("dirty")
        if self.divergence.ahead:
            parts.append(f"ahead {self.divergence.ahead}")
        if self.divergence.behind:
            parts.append(f"behind {self.divergence.behind}")
        return ", ".join(parts) or "clean"
