"""Naming conventions for preview releases, versions and URLs.

Deploy and clear both derive their names from this module:

- release name:  preview-<app>-<pr>-<hash>
- preview URL:   <app>-<pr>-<hash>.<base-url>
- tag suffix:    -preview.<pr>.<sha7>

Changing one of these formats here changes it for both flows.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from pathlib import PurePath

from .constants import PreviewConstants

_CONSTANTS = PreviewConstants()


def generate_hash(
    pull_request_id: str | int, salt: str, length: int = _CONSTANTS.HASH_LENGTH
) -> str:
    """Generate a short deterministic token for a pull request.

    The token only disambiguates preview URLs; it is not a secret. The
    output is lowercase hex, so it is safe inside a DNS label.

    Args:
        pull_request_id: Pull request number
        salt: Salt mixed into the digest so URLs are not guessable from the PR id
        length: Number of hex characters to keep

    Returns:
        Lowercase hex string of the requested length

    Example:
        >>> generate_hash("42", "pepper") == generate_hash(42, "pepper")
        True
    """
    digest = hashlib.sha256(f"{pull_request_id}{salt}".encode()).hexdigest()
    return digest[:length]


def tag_postfix(pull_request_id: str | int, short_sha: str) -> str:
    """Return the version suffix shared by image and chart tags."""
    return f"{_CONSTANTS.PREVIEW_TAG_PREFIX}.{pull_request_id}.{short_sha}"


def version_pattern(pull_request_id: str | int) -> re.Pattern[str]:
    """Build the regular expression matching versions tagged for a pull request.

    Matches "1.7-preview.42.a1b2c3d" for PR 42, but neither
    "1.7-preview.43.a1b2c3d" nor "1.7-preview.420.a1b2c3d".
    """
    prefix = re.escape(_CONSTANTS.PREVIEW_TAG_PREFIX)
    pr = re.escape(str(pull_request_id))
    return re.compile(rf"\b{prefix}\.{pr}\.\b")


def release_filter(app_name: str, pull_request_id: str | int) -> str:
    """Return the `helm list --filter` expression for a pull request's releases.

    Anchored and terminated by the dash before the hash, so PR 4 does not
    pick up the releases of PR 42. The app name is escaped: "foo.web" must
    not match "fooxweb".
    """
    app = re.escape(app_name)
    return f"^{_CONSTANTS.RELEASE_NAME_PREFIX}-{app}-{pull_request_id}-"


def chart_archive_name(chart_path: str, chart_version: str) -> str:
    """Return the file name helm-pack writes for a chart.

    Args:
        chart_path: Chart directory, with or without leading folders
        chart_version: Version stamped on the archive

    Example:
        >>> chart_archive_name("charts/foo", "1.12-preview.42.a1b2c3d")
        'foo-1.12-preview.42.a1b2c3d.tgz'
    """
    chart_name = PurePath(chart_path.replace("\\", "/").rstrip("/")).name
    return f"{chart_name}-{chart_version}.tgz"


@dataclass(frozen=True)
class PreviewNames:
    """Names derived from an app, a pull request and the URL hash.

    Attributes:
        app_name: Application name
        pull_request_id: Pull request number
        hash: Token from generate_hash
    """

    app_name: str
    pull_request_id: str
    hash: str

    @classmethod
    def for_pull_request(
        cls, app_name: str, pull_request_id: str | int, hash_salt: str
    ) -> PreviewNames:
        """Compute the names for a pull request using the salted hash."""
        return cls(
            app_name=app_name,
            pull_request_id=str(pull_request_id),
            hash=generate_hash(pull_request_id, hash_salt),
        )

    @property
    def identifier(self) -> str:
        """URL label and chart appName value: <app>-<pr>-<hash>."""
        return f"{self.app_name}-{self.pull_request_id}-{self.hash}"

    @property
    def release_name(self) -> str:
        """Helm release name: preview-<app>-<pr>-<hash>."""
        return f"{_CONSTANTS.RELEASE_NAME_PREFIX}-{self.identifier}"

    def preview_url(self, base_url: str) -> str:
        """Return the preview host name under base_url."""
        return f"{self.identifier}.{base_url}"


@dataclass(frozen=True)
class PreviewVersions:
    """Version strings stamped on the image and chart of one deploy.

    Attributes:
        image_name: Registry path without tag (<registry>/<org>/<image>)
        docker_tag_major: Major version for the image tag
        helm_tag_major: Major version for the chart
        run_number: CI run number
        postfix: Result of tag_postfix
    """

    image_name: str
    docker_tag_major: str
    helm_tag_major: str
    run_number: str
    postfix: str

    @property
    def app_version(self) -> str:
        """<dockerTagMajor>.<run><postfix>, also the image tag."""
        return f"{self.docker_tag_major}.{self.run_number}{self.postfix}"

    @property
    def image_version(self) -> str:
        """Fully qualified image reference including tag."""
        return f"{self.image_name}:{self.app_version}"

    @property
    def chart_version(self) -> str:
        """<helmTagMajor>.<run><postfix>."""
        return f"{self.helm_tag_major}.{self.run_number}{self.postfix}"
