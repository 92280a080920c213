"""Preview environment commands.

This module provides the commands the CI step invokes: deploy a preview
for the current pull request, clear its previews, or run whichever of
the two the ``command`` input selects.
"""

from pathlib import Path
from typing import Annotated

import typer

from src.cli.config import Options, load_options
from src.cli.context import CLIContext, get_cli_context
from src.cli.shared.console import console, with_error_handling
from src.infra.github import write_step_outputs

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file with default inputs under a top-level 'config:' key",
        exists=True,
        dir_okay=False,
    ),
]


# ---------------------------------------------------------------------------
# Flow runners
# ---------------------------------------------------------------------------


def run_deploy(cli: CLIContext, options: Options) -> None:
    """Deploy the preview and publish step outputs.

    Raises:
        typer.Exit: With code 1 when the release could not be installed
    """
    console.print_header(f"🚀 Deploy preview: {options.app_name}")

    result = cli.deployer().deploy(options)
    write_step_outputs(cli.github_context, result.step_outputs())

    if not result.success:
        console.handle_error(
            "Preview deployment failed",
            details=(
                f"helm upgrade --install of {result.helm_release_name} failed.\n"
                "See the install output above for the cause."
            ),
        )
    console.ok(f"Preview available at {result.preview_url}")


def run_clear(cli: CLIContext, options: Options) -> None:
    """Remove the previews of the current pull request and publish step outputs."""
    console.print_header(f"🧹 Clear previews: {options.app_name}", style="yellow")

    result = cli.cleaner().clear(options)
    write_step_outputs(cli.github_context, result.step_outputs())

    if result.failed_releases:
        console.warn(
            f"{len(result.failed_releases)} release(s) could not be removed: "
            + ", ".join(result.failed_releases)
        )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@with_error_handling
def deploy_command(ctx: typer.Context, config: ConfigOption = None) -> None:
    """Build, publish and deploy the preview of the current pull request."""
    options = load_options(config)
    run_deploy(get_cli_context(options, ctx), options)


@with_error_handling
def clear_command(ctx: typer.Context, config: ConfigOption = None) -> None:
    """Uninstall the previews of the current pull request."""
    options = load_options(config)
    run_clear(get_cli_context(options, ctx), options)


@with_error_handling
def run_command(ctx: typer.Context, config: ConfigOption = None) -> None:
    """Run the flow selected by the 'command' input (deploy or clear)."""
    options = load_options(config)
    cli = get_cli_context(options, ctx)
    if options.command == "clear":
        run_clear(cli, options)
    else:
        run_deploy(cli, options)
