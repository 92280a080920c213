"""Preview deployment constants.

This module centralizes the magic strings shared by the deploy and clear
flows. The tag prefix in particular must stay identical in both: deploy
stamps it on image and chart versions, clear matches on it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PreviewConstants:
    """Constants for preview deployments.

    All attributes are class-level and immutable.
    """

    # Version tag suffix: "<major>.<run>-preview.<pr>.<sha7>"
    PREVIEW_TAG_PREFIX: str = "-preview"

    # Release names: "preview-<app>-<pr>-<hash>"
    RELEASE_NAME_PREFIX: str = "preview"

    # Length of the URL hash
    HASH_LENGTH: int = 8

    # Helm plugins
    HELM_PACK_PLUGIN_URL: str = "https://github.com/thynquest/helm-pack.git"
    HELM_PUSH_PLUGIN_URL: str = "https://github.com/chartmuseum/helm-push.git"

    # Chart value baked into the packaged archive by helm-pack
    PACK_IMAGE_KEY: str = "image"
