"""Deployment module for pull request preview environments.

The package is organized into subpackages for modularity:
- shell_commands: Abstractions for shell command execution
- preview: Deploy and teardown flows for preview releases
"""

from src.infra.errors import DeploymentError

from .preview import PreviewCleaner, PreviewDeployer

__all__ = ["PreviewDeployer", "PreviewCleaner", "DeploymentError"]
