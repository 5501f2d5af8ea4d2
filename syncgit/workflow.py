"""Interactive stage-then-commit pipeline for one pathspec."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from . import render
from .changes import ScopedChangeDetector
from .exceptions import NoChangesError, NoCommitMessageError, UserAbort
from .git import Git
from .interactive import Prompter

logger = logging.getLogger(__name__)


class WorkflowState(str, Enum):
    IDLE = "idle"
    STAGED = "staged"
    STAGED_VERIFIED = "staged_verified"
    MESSAGE_COLLECTED = "message_collected"
    COMMITTED = "committed"


@dataclass
class StageCommitWorkflow:
    """Stage exactly `pathspec`, verify it, collect a message and commit.

    Every step is a single external call; nothing is retried or rolled back.
    A failure after staging leaves the index as it was after `git add`.
    """

    git: Git
    prompter: Prompter
    pathspec: str
    state: WorkflowState = field(default=WorkflowState.IDLE, init=False)
    message: str | None = field(default=None, init=False)

    def run(self) -> str:
        """Drive the workflow to `COMMITTED` and return the commit message."""

        self.stage()
        self.verify()
        self.collect_message()
        self.commit()
        return self.message or ""

    def stage(self) -> None:
        detector = ScopedChangeDetector(self.git)
        render.heading("📄 Changes to be staged:")
        render.show_groups(detector.grouped_status(self.pathspec))
        if not detector.detect(self.pathspec).any:
            raise NoChangesError("No changes to add in the current folder")
        if not self.prompter.confirm(f"Stage these changes in {self.pathspec}?", default=True):
            raise UserAbort("Staging cancelled")
        self.git.add(self.pathspec)
        self.state = WorkflowState.STAGED
        render.success("Changes added")

    def verify(self) -> None:
        self._require(WorkflowState.STAGED)
        if not self.git.has_diff(self.pathspec, cached=True):
            raise NoChangesError("There's nothing to commit; staged changes cancel out")
        self.state = WorkflowState.STAGED_VERIFIED
        render.separator()
        render.heading("📝 Staged changes to be committed:")
        render.show_command_output(self.git.diff_cached_stat(self.pathspec))

    def collect_message(self) -> None:
        self._require(WorkflowState.STAGED_VERIFIED)
        if not self.prompter.confirm("Commit these changes?", default=True):
            raise UserAbort("Commit cancelled")
        message = self.prompter.read_line("Commit message (leave empty to cancel)")
        if not message.strip():
            raise NoCommitMessageError()
        self.message = message
        self.state = WorkflowState.MESSAGE_COLLECTED

    def commit(self) -> None:
        self._require(WorkflowState.MESSAGE_COLLECTED)
        outcome = self.git.commit(self.message or "", self.pathspec)
        render.show_command_output(outcome.text)
        self.state = WorkflowState.COMMITTED
        logger.debug("Committed %s", self.pathspec)

    def _require(self, expected: WorkflowState) -> None:
        if self.state is not expected:
            raise RuntimeError(f"Workflow is {self.state.value}, expected {expected.value}")
