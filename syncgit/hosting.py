"""GitHub REST client for repository creation."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .exceptions import (
    HostingAuthError,
    HostingError,
    HostingScopeError,
    RepositoryExistsError,
)
from .models import HostedRepository

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class GitHubClient:
    """Minimal client for the two calls the publish fallback needs."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def create_repository(
        self,
        name: str,
        *,
        description: str | None = None,
        private: bool = False,
    ) -> HostedRepository:
        """Create a repository owned by the authenticated user.

        Raises:
            RepositoryExistsError: If a repository with this name already exists
            HostingAuthError: If the token is rejected
            HostingScopeError: If the token lacks the `repo` scope
            HostingError: For any other failure status
        """
        payload: dict[str, Any] = {"name": name, "private": private}
        if description:
            payload["description"] = description
        logger.debug("Creating repository %s (private=%s)", name, private)
        data = self._request("POST", "/user/repos", json=payload)
        return HostedRepository(
            name=data.get("name", name),
            html_url=data["html_url"],
            clone_url=data["clone_url"],
            private=bool(data.get("private", private)),
        )

    def authenticated_login(self) -> str:
        """Return the login of the user owning the token."""
        data = self._request("GET", "/user")
        login = data.get("login")
        if not login:
            raise HostingError(200, "Response did not include a login")
        return login

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self.session.request(method, f"{self.api_url}{path}", timeout=DEFAULT_TIMEOUT, **kwargs)
        except requests.RequestException as exc:
            raise HostingError(0, f"Request to hosting API failed: {exc}") from exc
        if response.ok:
            return response.json()
        raise _error_for(response)


def _error_for(response: requests.Response) -> HostingError:
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = body.get("message") or response.reason or "Unknown error"
    details = [err.get("message", "") for err in body.get("errors", []) if isinstance(err, dict)]
    full = "; ".join([message, *[d for d in details if d]])
    if status == 401:
        return HostingAuthError(status, f"Bad credentials: {full}")
    if status == 403:
        return HostingScopeError(status, f"Token lacks the required scope: {full}")
    if status == 422 and "already exists" in full.lower():
        return RepositoryExistsError(status, full)
    return HostingError(status, full)
