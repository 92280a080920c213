"""CLI command modules.

Commands:
- deploy: Build, publish and deploy the preview of a pull request
- clear: Remove the previews of a pull request
- run: Dispatch on the 'command' action input
"""

from .preview import clear_command, deploy_command, run_command

__all__ = [
    "deploy_command",
    "clear_command",
    "run_command",
]
