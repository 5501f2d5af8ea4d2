"""Main application orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from . import render
from .changes import ScopedChangeDetector
from .config import Settings, TokenSource
from .divergence import DivergenceTracker
from .exceptions import (
    NoChangesError,
    NoCommitMessageError,
    NoInternetError,
    NoTokenError,
    PreflightBlockedError,
    SyncGitError,
    UserAbort,
)
from .fs import write_default_gitignore
from .git import Git
from .interactive import Prompter
from .locator import compute_pathspec, list_child_repos, locate
from .models import PublishStatus, Repository
from .network import ConnectivityProbe
from .preflight import PreflightGuard
from .publish import HostingClient, PublishOrchestrator
from .runner import CommandRunner
from .workflow import StageCommitWorkflow

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 130
RECENT_COMMITS = 5


@dataclass
class SyncApp:
    """Wire the components together for one invocation.

    Every collaborator with side effects outside the repository (prompts,
    token lookup, network probe, hosting API) is injected.
    """

    runner: CommandRunner
    prompter: Prompter
    token_source: TokenSource
    probe: ConnectivityProbe
    settings: Settings = field(default_factory=Settings)
    hosting_factory: Callable[[str], HostingClient] | None = None

    def run(self, start_dir: Path) -> int:
        try:
            return self._run(start_dir)
        except UserAbort as exc:
            render.warning(f"Cancelled: {exc}")
            return EXIT_CANCELLED
        except KeyboardInterrupt:
            render.warning("Aborted by user")
            return EXIT_CANCELLED
        except NoChangesError as exc:
            render.info(str(exc))
            return EXIT_OK
        except NoCommitMessageError as exc:
            render.error(f"Commit cancelled: {exc}")
            return EXIT_FAILURE
        except NoTokenError as exc:
            render.error(f"Cannot push: {exc}")
            return EXIT_FAILURE
        except NoInternetError as exc:
            render.error(f"{exc}. Please resolve this before making new commits.")
            return EXIT_FAILURE
        except PreflightBlockedError as exc:
            render.error(f"Verification error: {exc}")
            return EXIT_FAILURE
        except SyncGitError as exc:
            render.error(str(exc))
            return EXIT_FAILURE

    def _run(self, start_dir: Path) -> int:
        start_dir = start_dir.resolve()
        repo = locate(start_dir, self.runner, self.settings.remote)
        if repo is None:
            repo = self._handle_missing_repo(start_dir)
            if repo is None:
                return EXIT_FAILURE

        git = Git(self.runner, repo.root, self.settings.remote)
        pathspec = compute_pathspec(repo.root, start_dir)
        self._show_header(git, repo, pathspec)

        PreflightGuard(git).gate(self.prompter)

        publisher = PublishOrchestrator(
            git=git,
            repo=repo,
            prompter=self.prompter,
            token_source=self.token_source,
            probe=self.probe,
            settings=self.settings,
            hosting_factory=self.hosting_factory,
        )
        tracker = DivergenceTracker(git)
        render.heading("🔍 Checking for pending pushes...")
        if publisher.publish_existing(tracker.count()) is PublishStatus.FAILED:
            return EXIT_FAILURE
        render.separator()

        self._pull(git, publisher, tracker)

        render.heading("📦 Checking local changes...")
        detector = ScopedChangeDetector(git)
        if detector.has_changes() and not detector.has_changes(pathspec):
            self._report_changes_elsewhere(detector)
            return EXIT_OK

        StageCommitWorkflow(git, self.prompter, pathspec).run()
        render.success("Commit created")
        render.separator()

        status = publisher.publish()
        return EXIT_FAILURE if status is PublishStatus.FAILED else EXIT_OK

    def _handle_missing_repo(self, start_dir: Path) -> Repository | None:
        children = list_child_repos(start_dir, self.runner)
        if children:
            render.info("Not inside a git repository. Repositories in subfolders:")
            render.show_child_repos(children)
            return None
        render.error("You are not inside a git repository nor are there repositories in child directories.")
        if not self.prompter.confirm(f"Initialize a new git repository in {start_dir}?", default=False):
            return None
        Git(self.runner, start_dir, self.settings.remote).init()
        if write_default_gitignore(start_dir):
            render.success("Wrote default .gitignore")
        render.success(f"Initialized repository in {start_dir}")
        return Repository(root=start_dir, name=start_dir.name or "unknown")

    def _show_header(self, git: Git, repo: Repository, pathspec: str) -> None:
        render.separator()
        render.heading(f"📁 Repository root: {repo.name}")
        subpath = ". (repo root)" if pathspec == "." else pathspec
        render.heading(f"🧭 Subpath: {subpath}")
        render.separator()
        render.heading("🔍 Repository status:")
        render.show_command_output(git.status_short_branch())
        render.separator()

    def _pull(self, git: Git, publisher: PublishOrchestrator, tracker: DivergenceTracker) -> None:
        if not tracker.has_upstream():
            logger.debug("No upstream configured; skipping pull")
            return
        if not self.probe():
            render.info("No internet connection. Working with the local version for now.")
            return
        divergence = tracker.count()
        if divergence.behind:
            render.warning(f"Your branch is {divergence.behind} commit(s) behind the remote.")
            render.heading("Latest changes to sync:")
            render.show_command_output(git.log_oneline("HEAD..@{u}", limit=RECENT_COMMITS))
            if not self.prompter.confirm("Pull these changes now?", default=True):
                render.info("Sync skipped. Working with the local version for now.")
                return
        render.heading("⬇️  Pulling changes...")
        git.pull(publisher.configure_credentials(), rebase=self.settings.pull_rebase)
        render.separator()

    def _report_changes_elsewhere(self, detector: ScopedChangeDetector) -> None:
        render.info("No changes detected in the current folder.")
        groups = detector.repository_groups()
        elsewhere = ", ".join(
            group.display_name if group.display_name == "(root)" else f"{group.key}/" for group in groups
        )
        render.info(f"However, there are pending changes elsewhere in the repository: {elsewhere}")
        render.info("Tip: run this tool from the repo root or the folder with changes.")
