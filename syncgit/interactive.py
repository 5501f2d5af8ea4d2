"""Interactive prompt helpers built on InquirerPy."""

from __future__ import annotations

import sys
from typing import Protocol

from InquirerPy import inquirer

from .exceptions import UserAbort


class Prompter(Protocol):
    """Blocking line-oriented questions asked of the operator."""

    def confirm(self, question: str, default: bool = False) -> bool:
        """Ask a yes/no question.

        Raises:
            UserAbort: If the answer cannot be read (Ctrl+C, EOF, no TTY)
        """
        ...

    def read_line(self, prompt: str, default: str | None = None) -> str:
        """Read one line of free text.

        Raises:
            UserAbort: If the answer cannot be read (Ctrl+C, EOF, no TTY)
        """
        ...


def _ensure_tty() -> None:
    if not sys.stdin.isatty():
        raise UserAbort("Interactive mode requires a TTY.")


class InquirerPrompter:
    """Prompter used by the CLI."""

    def confirm(self, question: str, default: bool = False) -> bool:
        _ensure_tty()
        try:
            return bool(inquirer.confirm(message=question, default=default).execute())
        except (KeyboardInterrupt, EOFError) as exc:
            raise UserAbort("User cancelled the prompt.") from exc

    def read_line(self, prompt: str, default: str | None = None) -> str:
        _ensure_tty()
        try:
            answer = inquirer.text(message=prompt, default=default or "").execute()
        except (KeyboardInterrupt, EOFError) as exc:
            raise UserAbort("User cancelled the prompt.") from exc
        return (answer or "").strip()


__all__ = ["Prompter", "InquirerPrompter"]
