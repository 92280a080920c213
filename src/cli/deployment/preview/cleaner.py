"""Preview teardown.

Removes every preview release of the current pull request and, when
enabled, deletes the chart versions published for it. A failing
uninstall is logged and skipped; the flow always reports success.
Chart repository errors are not caught and end the flow.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..shell_commands import parse_release_list
from .naming import release_filter, version_pattern

if TYPE_CHECKING:
    from src.cli.config import Options
    from src.cli.shared.console import CLIConsole
    from src.infra.chart_repo import ChartRepositoryClient, ChartVersion
    from src.infra.github import GitHubClient

    from ..shell_commands import HelmRelease, ShellCommands

ChartRepositoryFactory = Callable[["Options"], "ChartRepositoryClient"]


@dataclass
class ClearResult:
    """Outcome of a preview teardown.

    Attributes:
        success: Always True; per-release failures are only logged
        removed_releases: Releases uninstalled successfully
        failed_releases: Releases whose uninstall failed
        deleted_charts: Chart versions deleted from the repository
    """

    success: bool = True
    removed_releases: list[str] = field(default_factory=list)
    failed_releases: list[str] = field(default_factory=list)
    deleted_charts: list[str] = field(default_factory=list)

    def step_outputs(self) -> dict[str, object]:
        """Return the values published as step outputs."""
        return {"success": self.success}


def default_chart_repository(options: Options) -> ChartRepositoryClient:
    """Create a chart repository client from the action inputs."""
    from src.infra.chart_repo import ChartRepositoryClient

    return ChartRepositoryClient(
        options.helm_repo_url or "",
        options.helm_repo_username or None,
        options.helm_repo_password or None,
    )


class PreviewCleaner:
    """Removes the preview environments of a pull request.

    Attributes:
        commands: Shell command executor
        console: CLI console for output
        github: GitHub API client
        chart_repository_factory: Builds the chart repository client on demand
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        github: GitHubClient,
        chart_repository_factory: ChartRepositoryFactory = default_chart_repository,
    ) -> None:
        """Initialize the cleaner.

        Args:
            commands: Shell command executor
            console: CLI console for output
            github: GitHub API client
            chart_repository_factory: Builds the chart repository client;
                only called when chart removal is enabled
        """
        self.commands = commands
        self.console = console
        self.github = github
        self.chart_repository_factory = chart_repository_factory

    def clear(self, options: Options) -> ClearResult:
        """Run the complete clear flow.

        Args:
            options: Action inputs

        Returns:
            ClearResult with success=True
        """
        pull_request_id = self.github.get_current_pull_request_id()
        should_remove_charts = options.remove_preview_charts
        result = ClearResult()

        self.console.info(f"Removing previews for pull request {pull_request_id}...")
        for release in self.find_releases(options, pull_request_id):
            self.uninstall_release(release, options.helm_namespace, result)

        if should_remove_charts:
            self.remove_charts(options, pull_request_id, result)
        else:
            self.console.info("Skip removing charts..")

        self.console.ok(f"All previews for app {options.app_name} deleted successfully!")
        return result

    def find_releases(self, options: Options, pull_request_id: str) -> list[HelmRelease]:
        """List the preview releases of a pull request."""
        listing = self.commands.helm.list_releases_raw(
            options.helm_namespace,
            name_filter=release_filter(options.app_name, pull_request_id),
        )
        self.console.info(f"Helm list result: {listing.returncode}")
        self.console.output(listing.output)
        return parse_release_list(listing)

    def uninstall_release(
        self, release: HelmRelease, namespace: str, result: ClearResult
    ) -> None:
        """Uninstall one release, recording the outcome without raising."""
        self.console.info(
            f"Removing release {release.name} ({release.app_version}) from Kubernetes"
        )
        removal = self.commands.helm.uninstall(release.name, namespace)
        if removal.success:
            self.console.output(removal.output)
            result.removed_releases.append(release.name)
        else:
            self.console.error(f"Failed to remove release {release.name}")
            self.console.output(removal.output)
            result.failed_releases.append(release.name)

    def remove_charts(
        self, options: Options, pull_request_id: str, result: ClearResult
    ) -> None:
        """Delete the chart versions published for a pull request."""
        self.console.info("Removing charts..")
        repository = self.chart_repository_factory(options)

        all_charts = repository.list_chart_versions(options.app_name)
        self.console.info(f"Found {len(all_charts)} chart version(s) for {options.app_name}")

        to_delete = select_pull_request_charts(all_charts, options.app_name, pull_request_id)
        self.console.info(
            "Chart versions to delete: "
            + (", ".join(chart.version for chart in to_delete) or "none")
        )

        for chart in to_delete:
            self.console.info(f"Deleting chart {chart.version}")
            repository.delete_chart_version(chart.name, chart.version)
            result.deleted_charts.append(f"{chart.name}-{chart.version}")

        self.console.ok("Done deleting helm charts")


def select_pull_request_charts(
    charts: list[ChartVersion], app_name: str, pull_request_id: str
) -> list[ChartVersion]:
    """Keep the chart versions of app_name that were tagged for a pull request."""
    pattern = version_pattern(pull_request_id)
    return [c for c in charts if c.name == app_name and pattern.search(c.version)]
