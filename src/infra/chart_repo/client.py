"""ChartMuseum chart repository API client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests
from loguru import logger
from requests.auth import HTTPBasicAuth


@dataclass(frozen=True)
class ChartVersion:
    """One chart version as listed by the repository.

    Attributes:
        name: Chart name
        version: Chart version (e.g., "1.12-preview.42.a1b2c3d")
        app_version: Application version recorded in Chart.yaml
        digest: Archive digest reported by the repository
    """

    name: str
    version: str
    app_version: str = ""
    digest: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ChartVersion:
        """Build a chart version from one entry of the listing endpoint."""
        return cls(
            name=data.get("name", ""),
            version=str(data.get("version", "")),
            app_version=str(data.get("appVersion", "")),
            digest=data.get("digest", ""),
        )


class ChartRepositoryClient:
    """Client for the ChartMuseum HTTP API.

    Only the two calls teardown needs are implemented: listing the
    versions of one chart and deleting a single version. HTTP errors are
    raised via raise_for_status and propagate to the caller.
    """

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        *,
        session: requests.Session | None = None,
        timeout: float = 60.0,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Repository URL (e.g., "https://charts.example.com")
            username: Basic-auth username
            password: Basic-auth password
            session: Optional requests session (a new one is created if omitted)
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._auth = HTTPBasicAuth(username, password) if username else None
        self._session = session or requests.Session()

    def chart_url(self, name: str, version: str | None = None) -> str:
        """Return the API URL of a chart or of one of its versions."""
        url = f"{self.base_url}/api/charts/{name}"
        if version is not None:
            url = f"{url}/{version}"
        return url

    def list_chart_versions(self, name: str) -> list[ChartVersion]:
        """List all versions of a chart.

        Args:
            name: Chart name

        Returns:
            Chart versions in the order the repository returns them
        """
        url = self.chart_url(name)
        response = self._session.get(url, auth=self._auth, timeout=self.timeout)
        logger.info(f"Fetch list of charts: {response.status_code} - {response.reason}")
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, list):
            logger.warning(f"Unexpected chart listing from {url}: {type(data).__name__}")
            return []
        return [ChartVersion.from_json(entry) for entry in data if isinstance(entry, dict)]

    def delete_chart_version(self, name: str, version: str) -> int:
        """Delete one chart version.

        Args:
            name: Chart name
            version: Version to delete

        Returns:
            HTTP status code of the delete call
        """
        response = self._session.delete(
            self.chart_url(name, version), auth=self._auth, timeout=self.timeout
        )
        logger.info(f"Delete result: {response.status_code} {response.reason}")
        response.raise_for_status()
        return response.status_code
