"""GitHub Actions run context.

Reads the variables GitHub Actions exports to every step, loads the
triggering event payload and writes step outputs.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class GitHubContext:
    """Information about the current workflow run.

    Attributes:
        run_number: Sequential number of this workflow run
        repository: "owner/repo" of the repository running the workflow
        sha: Commit SHA that triggered the workflow
        event_name: Name of the triggering event (pull_request, push, ...)
        event_path: Path to the JSON event payload
        api_url: Base URL of the GitHub REST API
        workspace: Checked-out workspace directory
        output_path: File receiving step outputs, if any
    """

    run_number: str = "0"
    repository: str = ""
    sha: str = ""
    event_name: str = ""
    event_path: Path | None = None
    api_url: str = DEFAULT_API_URL
    workspace: Path = field(default_factory=lambda: Path("."))
    output_path: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GitHubContext:
        """Build the context from Actions environment variables."""
        env = os.environ if environ is None else environ
        event_path = env.get("GITHUB_EVENT_PATH")
        output_path = env.get("GITHUB_OUTPUT")
        return cls(
            run_number=env.get("GITHUB_RUN_NUMBER", "0"),
            repository=env.get("GITHUB_REPOSITORY", ""),
            sha=env.get("GITHUB_SHA", ""),
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            event_path=Path(event_path) if event_path else None,
            api_url=env.get("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/"),
            workspace=Path(env.get("GITHUB_WORKSPACE") or "."),
            output_path=Path(output_path) if output_path else None,
        )

    def load_event(self) -> dict[str, Any]:
        """Load the triggering event payload.

        Returns:
            The payload, or an empty dict when no payload file is available
        """
        if self.event_path is None or not self.event_path.exists():
            logger.debug("No GitHub event payload available")
            return {}
        try:
            payload = json.loads(self.event_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"Could not parse event payload {self.event_path}: {e}")
            return {}
        return payload if isinstance(payload, dict) else {}


def write_step_outputs(context: GitHubContext, outputs: Mapping[str, object]) -> bool:
    """Append step outputs to the file named by GITHUB_OUTPUT.

    Args:
        context: Current run context
        outputs: Output names and values; values are converted with str()
            and booleans are written lowercase

    Returns:
        True if outputs were written, False when not running in Actions
    """
    if context.output_path is None:
        return False

    with open(context.output_path, "a", encoding="utf-8") as f:
        for name, value in outputs.items():
            text = str(value).lower() if isinstance(value, bool) else str(value)
            f.write(f"{name}={text}\n")

    logger.debug(f"Wrote {len(outputs)} step output(s) to {context.output_path}")
    return True
