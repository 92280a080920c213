"""Console output of the preview flows.

Progress lines, raw tool output and step results are printed through
:class:`CLIConsole`. :func:`with_error_handling` turns flow failures into
an error panel and a non-zero exit code for the CI step.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import TYPE_CHECKING

import requests
import typer
from rich.console import Console, ConsoleRenderable
from rich.panel import Panel

if TYPE_CHECKING:
    from src.cli.deployment.shell_commands import CommandResult


class CLIConsole:
    """Rich console for CI logs."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        self.console.print(msg)

    def info(self, msg: str) -> None:
        self.console.print(f"[cyan]ℹ[/cyan]  {msg}")

    def ok(self, msg: str) -> None:
        self.console.print(f"[green]✅[/green] {msg}")

    def error(self, msg: str) -> None:
        self.console.print(f"[red]❌[/red] {msg}")

    def warn(self, msg: str) -> None:
        self.console.print(f"[yellow]⚠️[/yellow]  {msg}")

    def output(self, text: str) -> None:
        """Print raw tool output verbatim.

        Markup and highlighting are off: docker and helm output regularly
        contains square brackets.
        """
        if text:
            self.console.print(text, markup=False, highlight=False)

    def step_result(self, step: str, result: CommandResult) -> None:
        """Report the exit code of an external step followed by its output."""
        message = f"{step} result code: {result.returncode}"
        if result.success:
            self.ok(message)
        else:
            self.error(message)
        self.output(result.output)

    def print_json(self, data: str) -> None:
        self.console.print_json(data)

    def handle_error(
        self, message: str, details: str | None = None, exit_code: int = 1
    ) -> None:
        """Print an error panel and fail the step.

        Args:
            message: One-line summary
            details: Optional body of the panel
            exit_code: Process exit code

        Raises:
            typer.Exit: Always
        """
        self.error(f"\n[bold red]{message}[/bold red]\n")
        if details:
            self.console.print(Panel(details, title="Details", border_style="red"))
        raise typer.Exit(exit_code)

    def print_header(self, title: str, style: str = "blue") -> None:
        self.console.print(
            Panel.fit(f"[bold {style}]{title}[/bold {style}]", border_style=style)
        )


def with_error_handling(func: Callable[..., None]) -> Callable[..., None]:
    """Wrap a command so flow failures exit the step cleanly.

    DeploymentError (including ConfigError and GitHubError) and HTTP
    errors exit with code 1, Ctrl-C with 130. Anything else propagates
    with its traceback.
    """
    from src.infra.errors import DeploymentError

    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> None:
        try:
            func(*args, **kwargs)
        except DeploymentError as e:
            console.handle_error(e.message, e.details)
        except requests.RequestException as e:
            url = e.request.url if e.request is not None else None
            console.handle_error(
                "HTTP request failed",
                details=f"{e}\nURL: {url}" if url else str(e),
            )
        except KeyboardInterrupt:
            console.print("\n[dim]Operation cancelled by user.[/dim]")
            raise typer.Exit(130) from None

    return wrapper


# Shared console instance for consistent output
console = CLIConsole()
