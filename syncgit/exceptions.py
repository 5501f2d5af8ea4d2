"""Custom error hierarchy for syncgit."""

from __future__ import annotations

from typing import Sequence


class SyncGitError(RuntimeError):
    """Base error for the CLI."""


class NoChangesError(SyncGitError):
    """Raised when the current pathspec has nothing to stage or commit."""

    def __init__(self, message: str = "No changes to commit"):
        super().__init__(message)


class NoCommitMessageError(SyncGitError):
    """Raised when the operator provides an empty commit message."""

    def __init__(self, message: str = "No commit message provided"):
        super().__init__(message)


class NoTokenError(SyncGitError):
    """Raised when an authenticated operation has no access token."""

    def __init__(self, tried: Sequence[str] = ()):
        self.tried = tuple(tried)
        message = "No GitHub token found"
        if self.tried:
            message = f"{message} (tried: {', '.join(self.tried)})"
        super().__init__(message)


class NoInternetError(SyncGitError):
    """Raised when the reachability probe fails before a network operation."""

    def __init__(self, message: str = "No internet connection"):
        super().__init__(message)


class CommandFailedError(SyncGitError):
    """Raised when an external command exits unsuccessfully."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        message = f"Command failed (exit {returncode}): {' '.join(self.command)}"
        details = self.stderr.strip() or self.stdout.strip()
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


class OtherError(SyncGitError):
    """Raised for failures that do not fit a more specific kind."""


class ConfigError(OtherError):
    """Raised when environment configuration is invalid."""


class ValidationError(OtherError):
    """Raised when user input fails validation."""


class PreflightBlockedError(SyncGitError):
    """Raised when the repository is in a state that must be fixed by hand."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class HostingError(OtherError):
    """Raised when the hosting API rejects a request."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"Hosting API error ({status}): {message}")


class HostingAuthError(HostingError):
    """Raised on 401: the token was rejected."""


class HostingScopeError(HostingError):
    """Raised on 403: the token lacks the required scope."""


class RepositoryExistsError(HostingError):
    """Raised on 422 when a repository with the same name already exists."""


class UserAbort(SyncGitError):
    """Raised when the user cancels an interactive flow."""


__all__ = [
    "SyncGitError",
    "NoChangesError",
    "NoCommitMessageError",
    "NoTokenError",
    "NoInternetError",
    "CommandFailedError",
    "OtherError",
    "ConfigError",
    "ValidationError",
    "PreflightBlockedError",
    "HostingError",
    "HostingAuthError",
    "HostingScopeError",
    "RepositoryExistsError",
    "UserAbort",
]
