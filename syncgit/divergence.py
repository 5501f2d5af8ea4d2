"""Ahead/behind measurement against the configured upstream."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .git import Git
from .models import DivergenceCount

logger = logging.getLogger(__name__)


@dataclass
class DivergenceTracker:
    git: Git

    def has_upstream(self) -> bool:
        return self.git.upstream() is not None

    def count(self) -> DivergenceCount:
        """Compute a fresh count; `(0, 0)` when there is nothing to compare."""

        upstream = self.git.upstream()
        if upstream is None:
            return DivergenceCount()
        branch = self.git.current_branch()
        if branch is None:
            logger.debug("Detached HEAD; treating as no branch")
            return DivergenceCount()
        counts = self.git.left_right_count(branch, upstream)
        if counts is None:
            return DivergenceCount()
        ahead, behind = counts
        return DivergenceCount(ahead=ahead, behind=behind)
