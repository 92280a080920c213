"""Docker command abstractions.

This module provides commands for Docker registry and image operations:
logging in to a registry, building an image and pushing it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class DockerCommands:
    """Docker-related shell commands.

    Provides operations for:
    - Registry authentication
    - Image management (build, push)
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Docker commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    # =========================================================================
    # Registry
    # =========================================================================

    def login(self, registry: str, username: str, password: str) -> CommandResult:
        """Log in to a container registry.

        The password is passed on stdin so it never shows up in the
        process list.

        Args:
            registry: Registry host (e.g., "myregistry.azurecr.io")
            username: Registry username
            password: Registry password or token

        Returns:
            CommandResult with login status
        """
        return self._runner.run(
            ["docker", "login", registry, "--username", username, "--password-stdin"],
            input=password,
        )

    # =========================================================================
    # Image Management
    # =========================================================================

    def build_image(
        self, context_dir: Path | str, image_tag: str, dockerfile: str
    ) -> CommandResult:
        """Build a Docker image.

        Args:
            context_dir: Build context directory
            image_tag: Full image tag to apply
                      (e.g., "registry.example.com/org/app:1.12-preview.42.a1b2c3d")
            dockerfile: Path to the Dockerfile

        Returns:
            CommandResult with build status

        Example:
            >>> docker.build_image(".", "example.com/org/app:1.5", "Dockerfile")
        """
        return self._runner.run(
            ["docker", "build", str(context_dir), "-t", image_tag, "-f", dockerfile]
        )

    def push_image(self, image_tag: str) -> CommandResult:
        """Push a Docker image to a remote registry.

        Args:
            image_tag: Full image tag including registry
                      (e.g., "registry.example.com/app:v1")

        Returns:
            CommandResult with push status
        """
        return self._runner.run(["docker", "push", image_tag])
