"""Gate that refuses to continue from a conflicted or mid-merge state."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import PreflightBlockedError
from .git import Git
from .interactive import Prompter
from .models import PreflightResult, PreflightStatus


@dataclass
class PreflightGuard:
    git: Git

    def check(self) -> PreflightResult:
        unmerged = self.git.unmerged_files()
        if unmerged:
            return PreflightResult(
                PreflightStatus.BLOCKED,
                f"You have unresolved conflicts in {len(unmerged)} file(s): {', '.join(unmerged)}. "
                "Resolve them before continuing.",
            )
        if self.git.git_path("MERGE_HEAD").exists():
            return PreflightResult(
                PreflightStatus.BLOCKED,
                "A merge is in progress. Complete or abort it before continuing.",
            )
        stashes = self.git.stash_list()
        if stashes:
            return PreflightResult(
                PreflightStatus.NEEDS_CONFIRMATION,
                f"You have {len(stashes)} stashed change set(s).",
            )
        return PreflightResult.ok()

    def gate(self, prompter: Prompter) -> PreflightResult:
        """Run `check` and turn anything but OK into an exception or a question."""

        result = self.check()
        if result.status is PreflightStatus.BLOCKED:
            raise PreflightBlockedError(result.reason)
        if result.status is PreflightStatus.NEEDS_CONFIRMATION:
            if not prompter.confirm(f"{result.reason} Continue anyway?", default=False):
                raise PreflightBlockedError(f"{result.reason} Apply or drop them before continuing.")
        return result
