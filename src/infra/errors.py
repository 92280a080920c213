"""Exceptions raised by the preview deployment flows and their collaborators."""

from __future__ import annotations


class DeploymentError(Exception):
    """Raised when a deployment operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigError(DeploymentError):
    """Raised when the action inputs are missing or invalid."""


class GitHubError(DeploymentError):
    """Raised when pull request metadata cannot be resolved."""
