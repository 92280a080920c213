"""Action inputs for the preview flows."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.infra.errors import ConfigError


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class Options(BaseModel):
    """All inputs of one invocation.

    Field aliases are the kebab-case input names of the action
    (e.g. ``helm-repo-url``); fields can also be populated by their Python
    names. The model is frozen: nothing changes an invocation's inputs
    once they are loaded.
    """

    model_config = ConfigDict(
        alias_generator=_kebab,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    command: Literal["deploy", "clear"] = "deploy"

    # Required by both flows
    app_name: str
    github_token: str = Field(repr=False)
    helm_namespace: str

    # Container image
    docker_registry: str = ""
    docker_organization: str = ""
    docker_image_name: str = ""
    docker_username: str = ""
    docker_password: str = Field(default="", repr=False)
    docker_pull_secret: str = ""
    docker_file: str = "Dockerfile"
    docker_tag_major: str = "1"

    # Chart packaging and publishing
    helm_chart_file_path: str = ""
    helm_tag_major: str = "1"
    helm_organization: str = ""
    helm_repo_url: str | None = None
    helm_repo_username: str = ""
    helm_repo_password: str = Field(default="", repr=False)
    helm_remove_preview_charts: str = "false"

    # Chart value keys receiving the deploy overrides
    helm_key_image: str = "image"
    helm_key_namespace: str = "namespace"
    helm_key_pull_secret: str = "imagePullSecret"
    helm_key_url: str = "url"
    helm_key_app_name: str = "appName"
    helm_key_container_suffix: str = "containerSuffix"

    # Preview URL
    hash_salt: str = Field(default="", repr=False)
    base_url: str = ""

    @field_validator("helm_repo_url", mode="before")
    @classmethod
    def _empty_url_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    @field_validator("command", mode="before")
    @classmethod
    def _normalize_command(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().lower()
            # "remove" is accepted as an alias for clearing previews
            return "clear" if value == "remove" else value
        return value

    @property
    def remove_preview_charts(self) -> bool:
        """Whether teardown should also delete this PR's chart versions."""
        return (
            self.helm_remove_preview_charts.lower() == "true"
            and self.helm_repo_url is not None
        )

    def require(self, *fields: str) -> None:
        """Ensure the given fields are non-empty.

        Args:
            fields: Python field names

        Raises:
            ConfigError: Listing every missing input by its action name
        """
        missing = [name for name in fields if not getattr(self, name)]
        if missing:
            raise ConfigError(
                "Missing required inputs",
                details="Set the following action inputs:\n"
                + "\n".join(f"  • {_kebab(name)}" for name in missing),
            )
