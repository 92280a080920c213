"""Helm command abstractions.

This module provides commands for Helm release management and chart
publishing, including plugin installation, packaging, repository
registration, deployment, uninstallation, and release listing.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult, HelmRelease

if TYPE_CHECKING:
    from .runner import CommandRunner


class HelmCommands:
    """Helm-related shell commands.

    Provides operations for:
    - Plugin management
    - Chart packaging and publishing (pack, repo add/update, push)
    - Release management (upgrade --install, uninstall)
    - Status queries (list releases)
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Helm commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    # =========================================================================
    # Plugins
    # =========================================================================

    def plugin_install(self, plugin_url: str) -> CommandResult:
        """Install a Helm plugin from a git URL.

        Args:
            plugin_url: Plugin repository URL

        Returns:
            CommandResult with install status. Helm exits non-zero when the
            plugin is already installed.
        """
        return self._runner.run(["helm", "plugin", "install", plugin_url])

    # =========================================================================
    # Chart Packaging and Publishing
    # =========================================================================

    def pack(
        self,
        chart_path: Path | str,
        version: str,
        app_version: str,
        *,
        set_values: str | None = None,
    ) -> CommandResult:
        """Package a chart with the helm-pack plugin.

        Unlike `helm package`, helm-pack accepts `--set` so values can be
        baked into the packaged archive.

        Args:
            chart_path: Path to the chart directory
            version: Chart version to stamp on the archive
            app_version: App version to stamp on the archive
            set_values: Optional comma-joined key=value overrides

        Returns:
            CommandResult with packaging status
        """
        cmd = [
            "helm",
            "pack",
            str(chart_path),
            "--version",
            version,
            "--app-version",
            app_version,
        ]
        if set_values:
            cmd.extend(["--set", set_values])
        return self._runner.run(cmd)

    def repo_add(
        self,
        name: str,
        url: str,
        *,
        username: str | None = None,
        password: str | None = None,
    ) -> CommandResult:
        """Register a chart repository.

        Args:
            name: Local alias for the repository
            url: Repository URL
            username: Optional basic-auth username
            password: Optional basic-auth password

        Returns:
            CommandResult with registration status
        """
        cmd = ["helm", "repo", "add", name, url]
        if username:
            cmd.extend(["--username", username])
        if password:
            cmd.extend(["--password", password])
        return self._runner.run(cmd)

    def repo_update(self) -> CommandResult:
        """Refresh local metadata for all registered repositories."""
        return self._runner.run(["helm", "repo", "update"])

    def push(
        self,
        chart_archive: str,
        repo_name: str,
        *,
        username: str | None = None,
        password: str | None = None,
    ) -> CommandResult:
        """Push a packaged chart with the helm-push (ChartMuseum) plugin.

        Args:
            chart_archive: Path to the packaged .tgz archive
            repo_name: Alias of a repository registered with repo_add
            username: Optional basic-auth username
            password: Optional basic-auth password

        Returns:
            CommandResult with push status
        """
        cmd = ["helm", "push", chart_archive, repo_name]
        if username:
            cmd.extend(["--username", username])
        if password:
            cmd.extend(["--password", password])
        return self._runner.run(cmd)

    # =========================================================================
    # Release Management
    # =========================================================================

    def upgrade_install(
        self,
        release_name: str,
        chart: Path | str,
        namespace: str,
        *,
        set_values: str | None = None,
    ) -> CommandResult:
        """Deploy or upgrade a Helm release.

        Uses `helm upgrade --install` to idempotently deploy a chart.
        If the release doesn't exist, it will be installed. If it exists,
        it will be upgraded.

        Args:
            release_name: Name for the Helm release
                (e.g., "preview-foo-42-1a2b3c4d")
            chart: Chart directory or packaged chart archive
            namespace: Kubernetes namespace for deployment
            set_values: Optional comma-joined key=value overrides

        Returns:
            CommandResult with deployment status

        Example:
            >>> helm.upgrade_install(
            ...     "preview-foo-42-1a2b3c4d",
            ...     "foo-1.12-preview.42.a1b2c3d.tgz",
            ...     "previews",
            ...     set_values="image=example.com/org/foo:1.12-preview.42.a1b2c3d",
            ... )
        """
        cmd = [
            "helm",
            "upgrade",
            release_name,
            str(chart),
            "--install",
            "--namespace",
            namespace,
        ]

        if set_values:
            cmd.extend(["--set", set_values])

        return self._runner.run(cmd)

    def uninstall(self, release_name: str, namespace: str) -> CommandResult:
        """Uninstall a Helm release.

        Args:
            release_name: Name of the release to uninstall
            namespace: Kubernetes namespace

        Returns:
            CommandResult with uninstall status
        """
        return self._runner.run(
            ["helm", "uninstall", release_name, "--namespace", namespace]
        )

    # =========================================================================
    # Status Queries
    # =========================================================================

    def list_releases_raw(
        self, namespace: str, *, name_filter: str | None = None
    ) -> CommandResult:
        """Run `helm list` with JSON output and return the raw result.

        Args:
            namespace: Kubernetes namespace to query
            name_filter: Optional regular expression matched against release names

        Returns:
            CommandResult whose stdout holds the JSON release array
        """
        cmd = ["helm", "list", "--namespace", namespace]
        if name_filter:
            cmd.extend(["--filter", name_filter])
        cmd.extend(["--output", "json"])
        return self._runner.run(cmd)


def parse_release_list(result: CommandResult) -> list[HelmRelease]:
    """Parse the stdout of `helm list --output json`.

    Args:
        result: Result of a helm list invocation

    Returns:
        List of HelmRelease objects, or an empty list when the command
        failed or printed something that is not a JSON array
    """
    if not result.success or not result.stdout.strip():
        return []

    try:
        releases_data = json.loads(result.stdout)
    except json.JSONDecodeError:
        return []

    if not isinstance(releases_data, list):
        return []
    return [HelmRelease.from_json(r) for r in releases_data if isinstance(r, dict)]
