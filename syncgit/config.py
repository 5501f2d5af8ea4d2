"""Configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .exceptions import ConfigError

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN", "GIT_TOKEN")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    """Application configuration."""

    remote: str = "origin"
    api_url: str = "https://api.github.com"
    web_url: str = "https://github.com"
    probe_host: str = "8.8.8.8"
    probe_port: int = 53
    probe_timeout: float = 3.0
    pull_rebase: bool = False
    token_env_vars: tuple[str, ...] = TOKEN_ENV_VARS


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from `SYNCGIT_*` environment variables."""
    env = os.environ if environ is None else environ
    defaults = Settings()
    host, port = _parse_address(env.get("SYNCGIT_PROBE_ADDRESS"), defaults.probe_host, defaults.probe_port)
    return Settings(
        remote=env.get("SYNCGIT_REMOTE") or defaults.remote,
        api_url=(env.get("SYNCGIT_API_URL") or defaults.api_url).rstrip("/"),
        web_url=(env.get("SYNCGIT_WEB_URL") or defaults.web_url).rstrip("/"),
        probe_host=host,
        probe_port=port,
        probe_timeout=_parse_timeout(env.get("SYNCGIT_PROBE_TIMEOUT"), defaults.probe_timeout),
        pull_rebase=_parse_flag("SYNCGIT_PULL_REBASE", env.get("SYNCGIT_PULL_REBASE")),
    )


def _parse_address(raw: str | None, default_host: str, default_port: int) -> tuple[str, int]:
    if not raw:
        return default_host, default_port
    host, sep, port = raw.rpartition(":")
    if not sep or not host:
        raise ConfigError(f"SYNCGIT_PROBE_ADDRESS must look like host:port, got {raw!r}")
    try:
        return host, int(port)
    except ValueError as exc:
        raise ConfigError(f"Invalid port in SYNCGIT_PROBE_ADDRESS: {port!r}") from exc


def _parse_timeout(raw: str | None, default: float) -> float:
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"SYNCGIT_PROBE_TIMEOUT must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError("SYNCGIT_PROBE_TIMEOUT must be positive")
    return value


def _parse_flag(name: str, raw: str | None) -> bool:
    value = (raw or "").strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


class TokenSource:
    """Resolve the access token from the first non-empty variable.

    The lookup happens on first use and is memoized, so the environment is
    read at most once per process.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        names: tuple[str, ...] = TOKEN_ENV_VARS,
    ) -> None:
        self._environ = environ
        self.names = names
        self._resolved = False
        self._token: str | None = None

    def resolve(self) -> str | None:
        if not self._resolved:
            env = os.environ if self._environ is None else self._environ
            self._token = next(
                (env[name].strip() for name in self.names if env.get(name, "").strip()),
                None,
            )
            self._resolved = True
        return self._token

    def __repr__(self) -> str:
        return f"TokenSource(names={self.names!r})"
