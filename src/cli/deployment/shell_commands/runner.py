"""Subprocess execution for the docker and helm wrappers.

Every external tool call of the preview flows goes through
:class:`CommandRunner`, which captures output and reports the exit code
instead of raising.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from .types import CommandResult

# Flags whose following argument is a credential
SECRET_FLAGS = frozenset({"--password", "--token"})


def redact(cmd: Sequence[str]) -> str:
    """Render argv for logging with credential values masked."""
    parts: list[str] = []
    hide_next = False
    for arg in cmd:
        parts.append("****" if hide_next else arg)
        hide_next = arg in SECRET_FLAGS
    return " ".join(parts)


class CommandRunner:
    """Runs tools in the checked-out workspace and captures their output.

    A non-zero exit code is reported through the returned CommandResult;
    deciding whether that is fatal is left to the flow. A missing
    executable still raises FileNotFoundError.
    """

    def __init__(self, workspace: Path) -> None:
        """Initialize the runner.

        Args:
            workspace: Default working directory of every command
        """
        self.workspace = workspace

    def run(
        self,
        cmd: Sequence[str],
        *,
        input: str | None = None,
    ) -> CommandResult:
        """Run a command to completion.

        Args:
            cmd: Executable and arguments
            input: Text written to the command's stdin, e.g. a registry password

        Returns:
            CommandResult with exit status and captured output
        """
        logger.debug(f"$ {redact(cmd)}")
        completed = subprocess.run(
            list(cmd),
            cwd=self.workspace,
            capture_output=True,
            text=True,
            input=input,
            check=False,
        )
        logger.debug(f"exit {completed.returncode}: {cmd[0]}")
        return CommandResult(
            success=completed.returncode == 0,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )
