"""Preview deployment.

This module builds and pushes the preview image, packages (and optionally
publishes) the chart, and installs or upgrades the preview release:

1. Log in to the container registry
2. Resolve pull request, commit and run number
3. Build and push the image
4. Package the chart with matching version tags
5. Publish the chart when a chart repository is configured
6. Install or upgrade the namespaced release

Only registry login failures stop the sequence. Exit codes of the build,
push, packaging and publishing steps are logged, and the result's
success flag reflects the final install/upgrade alone.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from src.infra.errors import DeploymentError

from .constants import PreviewConstants
from .naming import PreviewNames, PreviewVersions, chart_archive_name, tag_postfix

if TYPE_CHECKING:
    from src.cli.config import Options
    from src.cli.shared.console import CLIConsole
    from src.infra.github import GitHubClient, GitHubContext

    from ..shell_commands import CommandResult, ShellCommands

DEPLOY_REQUIRED_INPUTS = (
    "docker_registry",
    "docker_organization",
    "docker_image_name",
    "docker_username",
    "docker_password",
    "helm_chart_file_path",
    "base_url",
)


@dataclass(frozen=True)
class DeployResult:
    """Outcome of a preview deployment.

    Attributes:
        preview_url: Host name the preview is served on
        helm_release_name: Name of the installed release
        docker_image_version: Fully qualified image reference
        chart_version: Version of the packaged chart
        success: Whether the final install/upgrade succeeded
    """

    preview_url: str
    helm_release_name: str
    docker_image_version: str
    chart_version: str
    success: bool

    def step_outputs(self) -> dict[str, object]:
        """Return the values published as step outputs."""
        return {
            "preview-url": self.preview_url,
            "helm-release-name": self.helm_release_name,
            "docker-image-version": self.docker_image_version,
            "chart-version": self.chart_version,
            "success": self.success,
        }

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)


class PreviewDeployer:
    """Deploys the preview environment of a pull request.

    Attributes:
        commands: Shell command executor
        console: CLI console for output
        github: GitHub API client
        context: Current run context
        constants: Preview constants
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        github: GitHubClient,
        context: GitHubContext,
        constants: PreviewConstants | None = None,
    ) -> None:
        """Initialize the deployer.

        Args:
            commands: Shell command executor
            console: CLI console for output
            github: GitHub API client
            context: Current run context
            constants: Optional preview constants
        """
        self.commands = commands
        self.console = console
        self.github = github
        self.context = context
        self.constants = constants or PreviewConstants()

    def deploy(self, options: Options) -> DeployResult:
        """Run the complete deploy flow.

        Args:
            options: Action inputs

        Returns:
            DeployResult whose success reflects the install/upgrade step

        Raises:
            ConfigError: If deploy inputs are missing
            DeploymentError: If the registry login fails
            GitHubError: If the pull request cannot be resolved
        """
        options.require(*DEPLOY_REQUIRED_INPUTS)
        if options.helm_repo_url:
            # Repository alias for helm repo add and helm push
            options.require("helm_organization")
        self.console.info("Starting deploy preview...")

        self.login_registry(options)

        pull_request_id = self.github.get_current_pull_request_id()
        sha7 = self.github.get_latest_commit_short_sha(pull_request_id)
        run_number = self.context.run_number
        versions = PreviewVersions(
            image_name=(
                f"{options.docker_registry}/{options.docker_organization}"
                f"/{options.docker_image_name}"
            ),
            docker_tag_major=options.docker_tag_major,
            helm_tag_major=options.helm_tag_major,
            run_number=run_number,
            postfix=tag_postfix(pull_request_id, sha7),
        )

        self.build_and_push_image(options, versions)
        chart_archive = self.package_chart(options, versions)

        if options.helm_repo_url:
            self.publish_chart(options, chart_archive)
        else:
            self.console.info("helm-repo-url was not set, skipping publish helm chart")

        names = PreviewNames.for_pull_request(
            options.app_name, pull_request_id, options.hash_salt
        )
        final = self.install_release(options, names, versions, chart_archive)

        result = DeployResult(
            preview_url=names.preview_url(options.base_url),
            helm_release_name=names.release_name,
            docker_image_version=versions.image_version,
            chart_version=versions.chart_version,
            success=final.success,
        )
        self.console.info("All done! Printing returned result..")
        self.console.print_json(result.to_json())
        return result

    # =========================================================================
    # Steps
    # =========================================================================

    def login_registry(self, options: Options) -> None:
        """Log in to the container registry.

        Raises:
            DeploymentError: If docker login exits non-zero
        """
        self.console.info(f"Logging in to container registry {options.docker_registry}")
        result = self.commands.docker.login(
            options.docker_registry, options.docker_username, options.docker_password
        )
        if not result.success:
            raise DeploymentError(
                f"Login to container registry {options.docker_registry} failed",
                details=result.output or f"docker login exited with {result.returncode}",
            )
        self.console.ok("Logged in to container registry")

    def build_and_push_image(self, options: Options, versions: PreviewVersions) -> None:
        """Build the preview image and push it to the registry."""
        self.console.info(f"Building docker image: {versions.image_version}")
        build = self.commands.docker.build_image(
            self.context.workspace, versions.image_version, options.docker_file
        )
        self.console.step_result("Build docker image", build)

        self.console.info("Push docker image...")
        push = self.commands.docker.push_image(versions.image_version)
        self.console.step_result("Push docker image", push)

    def package_chart(self, options: Options, versions: PreviewVersions) -> str:
        """Package the chart with preview version tags.

        Returns:
            File name of the packaged chart archive
        """
        self.console.info("Installing helm-pack plugin...")
        plugin = self.commands.helm.plugin_install(self.constants.HELM_PACK_PLUGIN_URL)
        self.console.step_result("Install helm-pack plugin", plugin)

        self.console.info(f"Packaging helm chart {versions.chart_version}")
        pack = self.commands.helm.pack(
            options.helm_chart_file_path,
            versions.chart_version,
            versions.app_version,
            set_values=f"{self.constants.PACK_IMAGE_KEY}={versions.chart_version}",
        )
        self.console.step_result("Package helm chart", pack)
        return chart_archive_name(options.helm_chart_file_path, versions.chart_version)

    def publish_chart(self, options: Options, chart_archive: str) -> None:
        """Push the packaged chart to the configured chart repository."""
        self.console.info("Publishing helm chart..")

        plugin = self.commands.helm.plugin_install(self.constants.HELM_PUSH_PLUGIN_URL)
        self.console.step_result("Install helm-push plugin", plugin)

        add = self.commands.helm.repo_add(
            options.helm_organization,
            options.helm_repo_url or "",
            username=options.helm_repo_username,
            password=options.helm_repo_password,
        )
        self.console.step_result("Add helm repository", add)

        update = self.commands.helm.repo_update()
        self.console.step_result("Update helm repositories", update)

        push = self.commands.helm.push(
            chart_archive,
            options.helm_organization,
            username=options.helm_repo_username,
            password=options.helm_repo_password,
        )
        self.console.step_result("Push helm chart", push)

    def install_release(
        self,
        options: Options,
        names: PreviewNames,
        versions: PreviewVersions,
        chart_archive: str,
    ) -> CommandResult:
        """Install or upgrade the preview release."""
        self.console.info(f"Deploying {names.release_name} to {options.helm_namespace}...")
        result = self.commands.helm.upgrade_install(
            names.release_name,
            chart_archive,
            options.helm_namespace,
            set_values=self.build_overrides(options, names, versions),
        )
        self.console.step_result("Install preview release", result)
        return result

    def build_overrides(
        self, options: Options, names: PreviewNames, versions: PreviewVersions
    ) -> str:
        """Build the comma-joined `--set` string for the preview release."""
        overrides = [
            f"{options.helm_key_image}={versions.image_version}",
            f"{options.helm_key_namespace}={options.helm_namespace}",
            f"{options.helm_key_pull_secret}={options.docker_pull_secret}",
            f"{options.helm_key_url}={names.preview_url(options.base_url)}",
            f"{options.helm_key_app_name}={names.identifier}",
            f"{options.helm_key_container_suffix}={versions.run_number}",
        ]
        return ",".join(overrides)
