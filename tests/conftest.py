"""Shared fixtures for the preview action tests."""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.cli.config import Options
from src.cli.deployment.shell_commands import CommandResult
from src.infra.github import GitHubContext


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove action inputs and Actions variables leaking in from the host CI."""
    for var in list(os.environ):
        if var.startswith(("INPUT_", "GITHUB_")):
            monkeypatch.delenv(var, raising=False)


@pytest.fixture
def ok() -> CommandResult:
    """A successful command result."""
    return CommandResult(success=True, stdout="ok", stderr="", returncode=0)


@pytest.fixture
def options() -> Options:
    """Options with every deploy input set and no chart repository."""
    return Options(
        app_name="foo",
        github_token="ghp_test",
        helm_namespace="previews",
        docker_registry="registry.example.com",
        docker_organization="acme",
        docker_image_name="foo-web",
        docker_username="robot",
        docker_password="s3cret",
        docker_pull_secret="regcred",
        docker_tag_major="1",
        helm_chart_file_path="charts/foo",
        helm_tag_major="2",
        helm_organization="acme",
        hash_salt="pepper",
        base_url="preview.example.com",
    )


@pytest.fixture
def github_context(tmp_path: Path) -> GitHubContext:
    """A run context for run 12 of acme/foo."""
    return GitHubContext(
        run_number="12",
        repository="acme/foo",
        sha="0123456789abcdef0123456789abcdef01234567",
        event_name="pull_request",
        workspace=tmp_path,
    )


@pytest.fixture
def mock_github() -> MagicMock:
    """A GitHub client resolving PR 42 at commit a1b2c3d."""
    github = MagicMock()
    github.get_current_pull_request_id.return_value = "42"
    github.get_latest_commit_short_sha.return_value = "a1b2c3d"
    return github
