"""Typer-based CLI for syncgit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from . import __version__, render
from .app import SyncApp
from .config import TokenSource, load_settings
from .exceptions import ConfigError
from .interactive import InquirerPrompter
from .network import SocketProbe
from .runner import SubprocessRunner

app = typer.Typer(
    help="Stage, commit and publish the changes under the current folder",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"syncgit {__version__}")
        raise typer.Exit()


@app.command()
def main(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-C",
        help="Run as if started in this directory (defaults to the current directory).",
        exists=True,
        dir_okay=True,
        file_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the syncgit version and exit.",
    ),
) -> None:
    """Sync the repository and publish one commit scoped to the current folder.

    Only paths under the starting directory are staged and committed. Pending
    pushes are offered first, the branch is pulled, and after committing the
    result is pushed, creating the GitHub repository when no remote exists.

    The access token is read from GITHUB_TOKEN, GH_TOKEN or GIT_TOKEN.
    """
    _ = version  # handled via callback
    configure_logging(verbose)
    try:
        settings = load_settings()
    except ConfigError as exc:
        render.error(str(exc))
        raise typer.Exit(1) from exc

    sync = SyncApp(
        runner=SubprocessRunner(),
        prompter=InquirerPrompter(),
        token_source=TokenSource(names=settings.token_env_vars),
        probe=SocketProbe.from_settings(settings),
        settings=settings,
    )
    code = sync.run(path or Path.cwd())
    if code:
        raise typer.Exit(code)


if __name__ == "__main__":
    app()
