"""Process execution behind a single interface returning `CommandOutcome`."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping, Protocol, Sequence

from .models import CommandOutcome

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Protocol for anything able to run an external command."""

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        input_bytes: bytes | None = None,
        stream: bool = False,
    ) -> CommandOutcome:
        """Run `args` inside `cwd` and report the outcome.

        Args:
            args: Full argument vector, program first
            cwd: Working directory for the child; never the ambient cwd
            env: Extra variables layered over the current environment for
                this invocation only
            input_bytes: Data written to the child's stdin
            stream: Let the child write straight to the terminal instead of
                capturing its output

        Returns:
            The outcome; `success` is true iff the exit status is zero
        """
        ...


class SubprocessRunner:
    """Default runner backed by `subprocess.run`."""

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        input_bytes: bytes | None = None,
        stream: bool = False,
    ) -> CommandOutcome:
        cmd = list(args)
        logger.debug("Running command: %s (cwd=%s)", " ".join(cmd), cwd)
        child_env = None
        if env:
            child_env = dict(os.environ)
            child_env.update(env)
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(cwd),
                env=child_env,
                input=input_bytes,
                stdin=subprocess.DEVNULL if input_bytes is None else None,
                stdout=None if stream else subprocess.PIPE,
                stderr=None if stream else subprocess.PIPE,
                check=False,
            )
        except OSError as exc:
            logger.debug("Failed to spawn %s: %s", cmd[0], exc)
            return CommandOutcome(success=False, stderr=str(exc).encode())
        outcome = CommandOutcome(
            success=proc.returncode == 0,
            stdout=proc.stdout or b"",
            stderr=proc.stderr or b"",
            returncode=proc.returncode,
        )
        logger.debug("Command exited with %s", proc.returncode)
        return outcome
