"""Data types for shell command results.

This module contains all dataclasses and type definitions used across
the shell command modules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = [
    "CommandResult",
    "HelmRelease",
]


@dataclass
class CommandResult:
    """Result of a command execution.

    Attributes:
        success: Whether the command exited with code 0
        stdout: Captured standard output
        stderr: Captured standard error
        returncode: Process exit code
    """

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr text."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


@dataclass
class HelmRelease:
    """Information about a Helm release.

    Attributes:
        name: Release name
        namespace: Kubernetes namespace
        revision: Release revision number
        status: Release status (deployed, failed, pending, uninstalling)
        chart: Chart name and version (e.g., "foo-1.7-preview.42.a1b2c3d")
        app_version: Application version recorded in the chart
    """

    name: str
    namespace: str = ""
    revision: str = ""
    status: str = ""
    chart: str = ""
    app_version: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> HelmRelease:
        """Build a release from one entry of `helm list --output json`."""
        return cls(
            name=data.get("name", ""),
            namespace=data.get("namespace", ""),
            revision=str(data.get("revision", "")),
            status=data.get("status", ""),
            chart=data.get("chart", ""),
            app_version=data.get("app_version", ""),
        )
