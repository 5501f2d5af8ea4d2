"""Rich UI helpers for terminal output."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from .models import ChildRepository, StatusGroup


console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {escape(message)}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]✗[/red] {escape(message)}", style="red")


def heading(message: str) -> None:
    console.print(f"[bold cyan]{escape(message)}[/bold cyan]")


def separator() -> None:
    console.print(Rule(style="dim"))


def show_command_output(text: str) -> None:
    """Echo captured command output verbatim."""
    stripped = text.rstrip()
    if stripped:
        console.print(escape(stripped))


def show_groups(groups: Sequence[StatusGroup]) -> None:
    """Show status lines grouped by top-level folder."""
    if not groups:
        info("No changes in current subpath")
        return
    for group in groups:
        console.print(f"[bold]📁 {escape(group.display_name)}[/bold]")
        for line in group.lines:
            console.print(f"  {escape(line)}")
    separator()


def show_child_repos(repos: Iterable[ChildRepository]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Repository")
    table.add_column("Branch")
    table.add_column("Status")
    for repo in repos:
        table.add_row(repo.path.name, repo.branch or "(no branch)", repo.marker)
    console.print(table)


def show_manual_commands(commands: Sequence[str]) -> None:
    """List commands the operator can run by hand."""
    console.print("\n[bold]Run these commands manually when ready:[/bold]")
    for command in commands:
        console.print(f"  [cyan]{escape(command)}[/cyan]")
    console.print()
