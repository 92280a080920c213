"""Unit tests for the preview cleaner."""

import json
from unittest.mock import MagicMock

import pytest

from src.cli.config import Options
from src.cli.deployment.preview.cleaner import (
    ClearResult,
    PreviewCleaner,
    default_chart_repository,
    select_pull_request_charts,
)
from src.cli.deployment.shell_commands import CommandResult
from src.infra.chart_repo import ChartRepositoryClient, ChartVersion
from src.infra.errors import GitHubError


def _listing(*names: str) -> CommandResult:
    releases = [
        {
            "name": name,
            "namespace": "previews",
            "revision": "1",
            "status": "deployed",
            "chart": "foo-2.12-preview.42.a1b2c3d",
            "app_version": "1.12-preview.42.a1b2c3d",
        }
        for name in names
    ]
    return CommandResult(success=True, stdout=json.dumps(releases), returncode=0)


class TestPreviewCleaner:
    """Tests for the PreviewCleaner class."""

    @pytest.fixture
    def mock_commands(self, ok: CommandResult) -> MagicMock:
        commands = MagicMock()
        commands.helm.list_releases_raw.return_value = _listing(
            "preview-foo-42-aaaa1111", "preview-foo-42-bbbb2222"
        )
        commands.helm.uninstall.return_value = ok
        return commands

    @pytest.fixture
    def mock_repository(self) -> MagicMock:
        repository = MagicMock()
        repository.list_chart_versions.return_value = [
            ChartVersion(name="foo", version="2.11-preview.42.0a1b2c3"),
            ChartVersion(name="foo", version="2.12-preview.42.a1b2c3d"),
            ChartVersion(name="foo", version="2.13-preview.420.ffffff0"),
            ChartVersion(name="foo", version="2.0.0"),
        ]
        repository.delete_chart_version.return_value = 200
        return repository

    @pytest.fixture
    def factory(self, mock_repository: MagicMock) -> MagicMock:
        return MagicMock(return_value=mock_repository)

    @pytest.fixture
    def cleaner(
        self, mock_commands: MagicMock, mock_github: MagicMock, factory: MagicMock
    ) -> PreviewCleaner:
        return PreviewCleaner(
            commands=mock_commands,
            console=MagicMock(),
            github=mock_github,
            chart_repository_factory=factory,
        )

    @pytest.fixture
    def chart_options(self, options: Options) -> Options:
        """Options with chart removal enabled against a repository."""
        return options.model_copy(
            update={
                "helm_repo_url": "https://charts.example.com",
                "helm_remove_preview_charts": "true",
            }
        )

    def test_lists_releases_of_the_pull_request(
        self, cleaner: PreviewCleaner, mock_commands: MagicMock, options: Options
    ) -> None:
        cleaner.clear(options)

        mock_commands.helm.list_releases_raw.assert_called_once_with(
            "previews", name_filter="^preview-foo-42-"
        )

    def test_uninstalls_every_listed_release(
        self, cleaner: PreviewCleaner, mock_commands: MagicMock, options: Options
    ) -> None:
        result = cleaner.clear(options)

        uninstalled = [c.args for c in mock_commands.helm.uninstall.call_args_list]
        assert uninstalled == [
            ("preview-foo-42-aaaa1111", "previews"),
            ("preview-foo-42-bbbb2222", "previews"),
        ]
        assert result.removed_releases == [
            "preview-foo-42-aaaa1111",
            "preview-foo-42-bbbb2222",
        ]
        assert result.success

    def test_failed_uninstall_continues(
        self,
        cleaner: PreviewCleaner,
        mock_commands: MagicMock,
        ok: CommandResult,
        options: Options,
    ) -> None:
        """One failing uninstall must not stop the rest or fail the flow."""
        mock_commands.helm.uninstall.side_effect = [
            CommandResult(success=False, stderr="not found", returncode=1),
            ok,
        ]

        result = cleaner.clear(options)

        assert mock_commands.helm.uninstall.call_count == 2
        assert result.failed_releases == ["preview-foo-42-aaaa1111"]
        assert result.removed_releases == ["preview-foo-42-bbbb2222"]
        assert result.success is True

    def test_failed_listing_means_nothing_to_remove(
        self, cleaner: PreviewCleaner, mock_commands: MagicMock, options: Options
    ) -> None:
        mock_commands.helm.list_releases_raw.return_value = CommandResult(
            success=False, stderr="cluster unreachable", returncode=1
        )

        result = cleaner.clear(options)

        mock_commands.helm.uninstall.assert_not_called()
        assert result == ClearResult()

    def test_charts_kept_when_removal_disabled(
        self, cleaner: PreviewCleaner, factory: MagicMock, options: Options
    ) -> None:
        """The chart repository is never contacted unless removal is enabled."""
        with_repo = options.model_copy(
            update={"helm_repo_url": "https://charts.example.com"}
        )

        result = cleaner.clear(with_repo)

        factory.assert_not_called()
        assert result.deleted_charts == []

    def test_charts_kept_without_repository(
        self, cleaner: PreviewCleaner, factory: MagicMock, options: Options
    ) -> None:
        enabled = options.model_copy(update={"helm_remove_preview_charts": "true"})

        cleaner.clear(enabled)

        factory.assert_not_called()

    def test_removes_only_pull_request_charts(
        self,
        cleaner: PreviewCleaner,
        factory: MagicMock,
        mock_repository: MagicMock,
        chart_options: Options,
    ) -> None:
        result = cleaner.clear(chart_options)

        factory.assert_called_once_with(chart_options)
        mock_repository.list_chart_versions.assert_called_once_with("foo")
        deleted = [c.args for c in mock_repository.delete_chart_version.call_args_list]
        assert deleted == [
            ("foo", "2.11-preview.42.0a1b2c3"),
            ("foo", "2.12-preview.42.a1b2c3d"),
        ]
        assert result.deleted_charts == [
            "foo-2.11-preview.42.0a1b2c3",
            "foo-2.12-preview.42.a1b2c3d",
        ]

    def test_releases_removed_before_charts(
        self,
        cleaner: PreviewCleaner,
        mock_commands: MagicMock,
        mock_repository: MagicMock,
        chart_options: Options,
    ) -> None:
        order = MagicMock()
        order.attach_mock(mock_commands.helm.uninstall, "uninstall")
        order.attach_mock(mock_repository.delete_chart_version, "delete")

        cleaner.clear(chart_options)

        names = [name for name, _, _ in order.mock_calls]
        assert names == ["uninstall", "uninstall", "delete", "delete"]

    def test_chart_repository_errors_propagate(
        self,
        cleaner: PreviewCleaner,
        mock_repository: MagicMock,
        chart_options: Options,
    ) -> None:
        mock_repository.list_chart_versions.side_effect = RuntimeError("503")

        with pytest.raises(RuntimeError):
            cleaner.clear(chart_options)

    def test_pull_request_lookup_failure_propagates(
        self,
        cleaner: PreviewCleaner,
        mock_commands: MagicMock,
        mock_github: MagicMock,
        options: Options,
    ) -> None:
        mock_github.get_current_pull_request_id.side_effect = GitHubError("no PR")

        with pytest.raises(GitHubError):
            cleaner.clear(options)

        mock_commands.helm.list_releases_raw.assert_not_called()


class TestSelectPullRequestCharts:
    """Tests for chart version selection."""

    def test_filters_by_name_and_pull_request(self) -> None:
        charts = [
            ChartVersion(name="foo", version="1.3-preview.7.abcdef0"),
            ChartVersion(name="bar", version="1.3-preview.7.abcdef0"),
            ChartVersion(name="foo", version="1.3-preview.70.abcdef0"),
            ChartVersion(name="foo", version="1.3-preview.8.abcdef0"),
        ]

        selected = select_pull_request_charts(charts, "foo", "7")

        assert selected == [charts[0]]

    def test_empty_listing(self) -> None:
        assert select_pull_request_charts([], "foo", "7") == []


class TestDefaultChartRepository:
    """Tests for building the chart repository client from inputs."""

    def test_uses_repository_inputs(self, options: Options) -> None:
        configured = options.model_copy(
            update={
                "helm_repo_url": "https://charts.example.com",
                "helm_repo_username": "bot",
                "helm_repo_password": "pw",
            }
        )

        client = default_chart_repository(configured)

        assert isinstance(client, ChartRepositoryClient)
        assert client.base_url == "https://charts.example.com"
        assert client.chart_url("foo") == "https://charts.example.com/api/charts/foo"

    def test_anonymous_without_username(self, options: Options) -> None:
        configured = options.model_copy(
            update={"helm_repo_url": "https://charts.example.com"}
        )

        client = default_chart_repository(configured)

        assert client._auth is None
