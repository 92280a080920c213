"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
import typer

from src.cli.config import Options
from src.cli.deployment.preview import PreviewCleaner, PreviewDeployer
from src.cli.deployment.shell_commands import ShellCommands
from src.cli.shared.console import CLIConsole, console
from src.infra.github import GitHubClient, GitHubContext


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    workspace: Path
    commands: ShellCommands
    github_context: GitHubContext
    github: GitHubClient

    def deployer(self) -> PreviewDeployer:
        return PreviewDeployer(
            commands=self.commands,
            console=self.console,
            github=self.github,
            context=self.github_context,
        )

    def cleaner(self) -> PreviewCleaner:
        return PreviewCleaner(
            commands=self.commands,
            console=self.console,
            github=self.github,
        )


def build_cli_context(options: Options) -> CLIContext:
    """Build a fresh CLIContext for one invocation."""
    github_context = GitHubContext.from_env()
    workspace = github_context.workspace

    return CLIContext(
        console=console,
        workspace=workspace,
        commands=ShellCommands(workspace),
        github_context=github_context,
        github=GitHubClient(options.github_token, github_context),
    )


def get_cli_context(options: Options, ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context(options)
