"""Tests for the GitHub API client."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from src.infra.errors import GitHubError
from src.infra.github import GitHubClient, GitHubContext


def _response(payload: object, status: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return response


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.headers = {}
    return session


def _context(tmp_path: Path, event: dict | None = None) -> GitHubContext:
    event_path = None
    if event is not None:
        event_path = tmp_path / "event.json"
        event_path.write_text(json.dumps(event))
    return GitHubContext(
        repository="acme/foo",
        sha="0123456789abcdef",
        event_name="pull_request",
        event_path=event_path,
        api_url="https://api.github.com",
        workspace=tmp_path,
    )


class TestPullRequestResolution:
    """Tests for get_current_pull_request_id."""

    def test_sets_auth_headers(self, tmp_path: Path, session: MagicMock) -> None:
        GitHubClient("ghp_test", _context(tmp_path), session=session)

        assert session.headers["Authorization"] == "Bearer ghp_test"
        assert session.headers["Accept"] == "application/vnd.github+json"

    def test_from_pull_request_event(self, tmp_path: Path, session: MagicMock) -> None:
        context = _context(tmp_path, {"pull_request": {"number": 42}})
        client = GitHubClient("t", context, session=session)

        assert client.get_current_pull_request_id() == "42"
        session.get.assert_not_called()

    def test_from_pull_request_comment(self, tmp_path: Path, session: MagicMock) -> None:
        context = _context(
            tmp_path, {"issue": {"number": 7, "pull_request": {"url": "..."}}}
        )
        client = GitHubClient("t", context, session=session)

        assert client.get_current_pull_request_id() == "7"

    def test_plain_issue_falls_back_to_commit_lookup(
        self, tmp_path: Path, session: MagicMock
    ) -> None:
        context = _context(tmp_path, {"issue": {"number": 7}})
        session.get.return_value = _response([{"number": 9}])
        client = GitHubClient("t", context, session=session)

        assert client.get_current_pull_request_id() == "9"
        url = session.get.call_args[0][0]
        assert url == "https://api.github.com/repos/acme/foo/commits/0123456789abcdef/pulls"
        assert session.get.call_args.kwargs["timeout"] == 60.0

    def test_no_pull_request_raises(self, tmp_path: Path, session: MagicMock) -> None:
        session.get.return_value = _response([])
        client = GitHubClient("t", _context(tmp_path), session=session)

        with pytest.raises(GitHubError, match="Could not determine"):
            client.get_current_pull_request_id()

    def test_http_errors_propagate(self, tmp_path: Path, session: MagicMock) -> None:
        session.get.return_value = _response({}, status=403)
        client = GitHubClient("t", _context(tmp_path), session=session)

        with pytest.raises(requests.HTTPError):
            client.get_current_pull_request_id()


class TestLatestCommit:
    """Tests for get_latest_commit_short_sha."""

    def test_returns_seven_characters_of_head(
        self, tmp_path: Path, session: MagicMock
    ) -> None:
        session.get.return_value = _response(
            {"head": {"sha": "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678"}}
        )
        client = GitHubClient("t", _context(tmp_path), session=session)

        assert client.get_latest_commit_short_sha("42") == "a1b2c3d"
        assert session.get.call_args[0][0] == (
            "https://api.github.com/repos/acme/foo/pulls/42"
        )

    def test_resolves_pull_request_when_omitted(
        self, tmp_path: Path, session: MagicMock
    ) -> None:
        context = _context(tmp_path, {"pull_request": {"number": 5}})
        session.get.return_value = _response({"head": {"sha": "ffffffffffff"}})
        client = GitHubClient("t", context, session=session)

        assert client.get_latest_commit_short_sha() == "fffffff"
        assert session.get.call_args[0][0].endswith("/pulls/5")
