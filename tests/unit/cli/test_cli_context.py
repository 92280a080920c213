"""Tests for CLI context dependency injection."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import typer

from src.cli.context import CLIContext, build_cli_context, get_cli_context
from src.cli.deployment.preview import PreviewCleaner, PreviewDeployer


def _context() -> CLIContext:
    return CLIContext(
        console=Mock(),
        workspace=Path("/test"),
        commands=Mock(),
        github_context=Mock(),
        github=Mock(),
    )


def test_cli_context_is_immutable():
    """Test that CLIContext is frozen/immutable."""
    ctx = _context()

    with pytest.raises(AttributeError):
        ctx.console = Mock()  # type: ignore[misc]


def test_build_cli_context_uses_actions_workspace(options, monkeypatch):
    """Test that build_cli_context reads the run context from the environment."""
    monkeypatch.setenv("GITHUB_WORKSPACE", "/test/project")
    monkeypatch.setenv("GITHUB_RUN_NUMBER", "7")

    ctx = build_cli_context(options)

    assert ctx.workspace == Path("/test/project")
    assert ctx.github_context.run_number == "7"
    assert ctx.github.context is ctx.github_context
    assert ctx.console is not None


@patch("src.cli.context.ShellCommands")
def test_shell_commands_initialized_with_workspace(
    mock_shell_commands, options, monkeypatch
):
    """Test that ShellCommands runs in the checked-out workspace."""
    monkeypatch.setenv("GITHUB_WORKSPACE", "/test/project")

    build_cli_context(options)

    mock_shell_commands.assert_called_once_with(Path("/test/project"))


@patch("src.cli.context.GitHubClient")
def test_github_client_receives_token(mock_client, options):
    """Test that the GitHub client is built from the github-token input."""
    ctx = build_cli_context(options)

    mock_client.assert_called_once_with("ghp_test", ctx.github_context)


def test_flow_factories_share_dependencies():
    """Test that deployer and cleaner are wired to the context's dependencies."""
    ctx = _context()

    deployer = ctx.deployer()
    cleaner = ctx.cleaner()

    assert isinstance(deployer, PreviewDeployer)
    assert isinstance(cleaner, PreviewCleaner)
    assert deployer.commands is ctx.commands
    assert deployer.context is ctx.github_context
    assert cleaner.github is ctx.github


def test_get_cli_context_from_typer_context(options):
    """Test that get_cli_context retrieves from Typer context."""
    mock_ctx_obj = _context()
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = mock_ctx_obj

    result = get_cli_context(options, typer_ctx)

    assert result is mock_ctx_obj


def test_get_cli_context_with_none_falls_back(options):
    """Test that get_cli_context creates new context when ctx is None."""
    with patch("src.cli.context.build_cli_context") as mock_build:
        mock_build.return_value = Mock(spec=CLIContext)

        get_cli_context(options, None)

        mock_build.assert_called_once_with(options)


def test_get_cli_context_with_invalid_obj_falls_back(options):
    """Test that get_cli_context falls back when ctx.obj is not CLIContext."""
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = "invalid"

    with patch("src.cli.context.build_cli_context") as mock_build:
        mock_build.return_value = Mock(spec=CLIContext)

        get_cli_context(options, typer_ctx)

        mock_build.assert_called_once_with(options)


@patch("click.get_current_context")
def test_get_cli_context_uses_click_context_as_fallback(mock_get_click_ctx, options):
    """Test that get_cli_context uses click context when typer ctx is None."""
    mock_ctx_obj = _context()
    mock_click_context = Mock()
    mock_click_context.obj = mock_ctx_obj
    mock_get_click_ctx.return_value = mock_click_context

    result = get_cli_context(options, None)

    assert result is mock_ctx_obj
    mock_get_click_ctx.assert_called_once_with(silent=True)
