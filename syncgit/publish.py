"""Pushing local commits, with recovery and a repository-creation fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol
from urllib.parse import urlsplit, urlunsplit

from . import render
from .config import Settings, TokenSource
from .exceptions import NoInternetError, NoTokenError, RepositoryExistsError, ValidationError
from .fs import suggest_repo_name, validate_repo_name
from .git import NO_AUTH, Git, GitAuth
from .hosting import GitHubClient
from .interactive import Prompter
from .models import DivergenceCount, HostedRepository, PublishStatus, Repository
from .network import ConnectivityProbe

logger = logging.getLogger(__name__)

TOKEN_CHILD_ENV = "SYNCGIT_AUTH_TOKEN"
CREDENTIAL_HELPER = (
    '!f() { test "$1" = get && echo username=x-access-token && '
    f'echo "password=${{{TOKEN_CHILD_ENV}}}"; }}; f'
)
MAX_NAME_ATTEMPTS = 3


class HostingClient(Protocol):
    def create_repository(
        self, name: str, *, description: str | None = None, private: bool = False
    ) -> HostedRepository: ...

    def authenticated_login(self) -> str: ...


def is_ssh_url(url: str) -> bool:
    return url.startswith("git@") or url.startswith("ssh://")


def strip_userinfo(url: str) -> str:
    """Remove `user:secret@` from an HTTP(S) URL."""

    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or "@" not in parts.netloc:
        return url
    host = parts.netloc.rsplit("@", 1)[1]
    return urlunsplit((parts.scheme, host, parts.path, parts.query, parts.fragment))


@dataclass
class PublishOrchestrator:
    git: Git
    repo: Repository
    prompter: Prompter
    token_source: TokenSource
    probe: ConnectivityProbe
    settings: Settings = field(default_factory=Settings)
    hosting_factory: Callable[[str], HostingClient] | None = None

    def configure_credentials(self) -> GitAuth:
        """Prepare credentials for the next authenticated git call.

        The token only ever reaches git through the child environment; any
        credentials embedded in the remote URL are removed. Safe to call
        repeatedly.
        """
        url = self.git.remote_url()
        if url is None:
            return NO_AUTH
        if is_ssh_url(url):
            logger.debug("SSH remote; no token needed")
            return NO_AUTH
        clean = strip_userinfo(url)
        if clean != url:
            self.git.set_remote_url(clean)
            render.info("Removed credentials embedded in the remote URL")
        token = self.token_source.resolve()
        if not token or not clean.startswith("https://"):
            return NO_AUTH
        return GitAuth(
            config_args=("-c", "credential.helper=", "-c", f"credential.helper={CREDENTIAL_HELPER}"),
            env={TOKEN_CHILD_ENV: token},
        )

    def publish_existing(self, divergence: DivergenceCount) -> PublishStatus:
        """Offer to push commits that were already ahead before this run."""

        if divergence.ahead == 0:
            render.success("No pending commits to push")
            return PublishStatus.SKIPPED
        render.warning(f"You have {divergence.ahead} commit(s) ahead of the remote repository.")
        render.warning("Committing on top of them could lead to duplicate or conflicting history.")
        if not self.prompter.confirm("Push the existing commits first?", default=True):
            render.warning("Continuing with the new commit without pushing...")
            return PublishStatus.SKIPPED
        self._require_token(ssh_exempt=False)
        if not self.probe():
            render.warning("No internet connection. Cannot push existing commits.")
            raise NoInternetError()
        render.info("Pushing existing commits...")
        return self._push_with_recovery(self.configure_credentials())

    def publish(self) -> PublishStatus:
        if self.git.remote_url() is None:
            return self.create_remote_and_publish()
        render.info("Pushing changes...")
        if not self.probe():
            render.warning("No internet connection. Changes have been saved locally but not pushed.")
            render.show_manual_commands(["git push"])
            return PublishStatus.OFFLINE
        self._require_token()
        return self._push_with_recovery(self.configure_credentials())

    def create_remote_and_publish(self) -> PublishStatus:
        render.info(f"No remote named '{self.git.remote}' is configured.")
        if not self.prompter.confirm("Create a repository on GitHub and publish to it?", default=True):
            render.info("Changes stay local.")
            return PublishStatus.SKIPPED
        token = self.token_source.resolve()
        if not token:
            raise NoTokenError(self.token_source.names)
        if not self.probe():
            raise NoInternetError()
        name = self._prompt_repo_name()
        description = self.prompter.read_line("Description (optional)")
        private = self.prompter.confirm("Make the repository private?", default=True)
        client = self._hosting_client(token)
        try:
            hosted = client.create_repository(name, description=description or None, private=private)
            render.success(f"Created {hosted.html_url}")
            clone_url = hosted.clone_url
        except RepositoryExistsError:
            render.warning(f"A repository named '{name}' already exists on your account.")
            if not self.prompter.confirm("Use the existing repository?", default=True):
                raise
            owner = client.authenticated_login()
            clone_url = f"{self.settings.web_url}/{owner}/{name}.git"
            render.info(f"Using existing repository {owner}/{name}")
        self._point_remote(clone_url)
        branch = self.git.current_branch()
        return self._push_with_recovery(self.configure_credentials(), set_upstream_branch=branch)

    def _push_with_recovery(self, auth: GitAuth, *, set_upstream_branch: str | None = None) -> PublishStatus:
        outcome = self.git.push(auth, set_upstream_branch=set_upstream_branch)
        if outcome.success:
            render.success("Pushed successfully")
            return PublishStatus.OK

        render.warning("Push failed; fetching from the remote before retrying.")
        render.show_command_output(outcome.error_text)
        fetched = self.git.fetch(auth)
        if not fetched.success:
            render.warning("Fetch failed.")
        branch = self.git.current_branch()
        retry_upstream = None
        if branch:
            if self.git.remote_branch_exists(branch):
                tracked = self.git.set_upstream(branch)
                if not tracked.success:
                    render.warning(f"Could not track {self.git.remote}/{branch}.")
            else:
                retry_upstream = branch

        if self.prompter.confirm("Retry the push?", default=True):
            outcome = self.git.push(auth, set_upstream_branch=retry_upstream)
            if outcome.success:
                render.success("Pushed successfully")
                return PublishStatus.OK
            render.show_command_output(outcome.error_text)

        render.error("Push did not succeed. Your commits are saved locally.")
        render.show_manual_commands(self._manual_commands(branch))
        return PublishStatus.FAILED

    def _manual_commands(self, branch: str | None) -> list[str]:
        remote = self.git.remote
        target = branch or "<branch>"
        return [
            f"git fetch {remote}",
            f"git pull --rebase {remote} {target}",
            f"git push --set-upstream {remote} {target}",
        ]

    def _require_token(self, *, ssh_exempt: bool = True) -> None:
        url = self.git.remote_url()
        if ssh_exempt and url is not None and is_ssh_url(url):
            return
        if not self.token_source.resolve():
            render.warning("Set GITHUB_TOKEN to a personal access token with 'repo' scope.")
            raise NoTokenError(self.token_source.names)

    def _prompt_repo_name(self) -> str:
        default = suggest_repo_name(self.repo.name)
        for _ in range(MAX_NAME_ATTEMPTS):
            candidate = self.prompter.read_line("Repository name", default=default) or default
            try:
                return validate_repo_name(candidate)
            except ValidationError as exc:
                render.error(str(exc))
        raise ValidationError("No valid repository name provided.")

    def _hosting_client(self, token: str) -> HostingClient:
        if self.hosting_factory is not None:
            return self.hosting_factory(token)
        return GitHubClient(token, self.settings.api_url)

    def _point_remote(self, url: str) -> None:
        if self.git.remote_url() is None:
            self.git.add_remote(url)
        else:
            self.git.set_remote_url(url)
