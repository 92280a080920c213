"""Wrappers around the docker and helm CLIs.

Each wrapper method assembles one argv and hands it to the shared
:class:`CommandRunner`:

- docker: registry login, image build and push
- helm: plugins, chart pack/publish, upgrade/uninstall/list of releases

Wrappers never interpret exit codes. They return a CommandResult and the
preview flows decide which failures abort.

Usage:
    from src.cli.deployment.shell_commands import ShellCommands

    commands = ShellCommands(workspace=Path("."))
    result = commands.helm.uninstall("preview-foo-42-1a2b3c4d", "previews")
    if not result.success:
        print(result.output)
"""

from pathlib import Path

from .docker import DockerCommands
from .helm import HelmCommands, parse_release_list
from .runner import CommandRunner, redact
from .types import CommandResult, HelmRelease


class ShellCommands:
    """The docker and helm wrappers bound to one workspace.

    Attributes:
        docker: Registry and image commands
        helm: Chart and release commands
    """

    def __init__(self, workspace: Path) -> None:
        """Bind the wrappers to a workspace.

        Args:
            workspace: Checked-out repository; docker builds use it as the
                build context and every command runs inside it
        """
        self.workspace = Path(workspace)
        runner = CommandRunner(self.workspace)

        self.docker = DockerCommands(runner)
        self.helm = HelmCommands(runner)


__all__ = [
    "ShellCommands",
    "CommandResult",
    "HelmRelease",
    "parse_release_list",
    "redact",
    "DockerCommands",
    "HelmCommands",
    "CommandRunner",
]
