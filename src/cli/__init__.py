"""Main CLI application module.

This module provides the main entry point for the preview action. The CI
step calls ``run``; ``deploy`` and ``clear`` run one flow explicitly.

Commands:
- deploy: Build image, package/publish chart, install preview release
- clear: Uninstall preview releases and delete preview chart versions
- run: Pick deploy or clear from the 'command' input
"""

import typer

from .commands import clear_command, deploy_command, run_command

# Create the main CLI application
app = typer.Typer(
    help="🔭 Preview Action - Pull request preview environments on Kubernetes",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("deploy")(deploy_command)
app.command("clear")(clear_command)
app.command("run")(run_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
