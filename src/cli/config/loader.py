"""Loading of action inputs.

Inputs arrive the way GitHub Actions passes them to a step: one
``INPUT_<NAME>`` environment variable per input, with the input name
upper-cased and hyphens kept (``INPUT_HELM-REPO-URL``). An optional YAML
file can supply defaults under a top-level ``config:`` key; it supports
environment variable placeholders:

- ${VAR_NAME} - required variable (raises error if missing)
- ${VAR_NAME:-default} - optional with default value
- ${VAR_NAME:?error_message} - required with custom error message

Non-empty action inputs win over values from the file.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from src.infra.errors import ConfigError

from .options import Options

INPUT_PREFIX = "INPUT_"

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(text: str, environ: Mapping[str, str] | None = None) -> str:
    """Substitute environment variable placeholders in text.

    Raises:
        ValueError: If a required variable is not set
    """
    env = os.environ if environ is None else environ

    def replacer(match: re.Match[str]) -> str:
        var_expr = match.group(1)

        # Handle default values: ${VAR:-default}
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return env.get(var_name, default)

        # Handle error messages: ${VAR:?message}
        if ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = env.get(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        value = env.get(var_expr)
        if value is None:
            raise ValueError(f"Required environment variable {var_expr} not set")
        return value

    return _PLACEHOLDER.sub(replacer, text)


def read_action_inputs(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect the non-empty ``INPUT_*`` variables.

    Returns:
        Mapping of lower-cased kebab-case input name to value
    """
    env = os.environ if environ is None else environ
    inputs: dict[str, str] = {}
    for var, value in env.items():
        if not var.startswith(INPUT_PREFIX) or not value.strip():
            continue
        name = var[len(INPUT_PREFIX) :].lower().replace(" ", "_").replace("_", "-")
        inputs[name] = value
    return inputs


def read_config_file(
    file_path: Path, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Read option values from a YAML file.

    Scalars are read as written (``1.10`` stays ``"1.10"``, ``0123`` stays
    ``"0123"``); every option is a string.

    Raises:
        ConfigError: If the file is missing, unparseable, has no ``config`` key
            or holds a list or mapping as an option value
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {file_path}", details=str(e)) from e

    try:
        content = substitute_env_vars(content, environ)
        loaded = yaml.load(content, Loader=yaml.BaseLoader)
    except ValueError as e:
        raise ConfigError(f"Invalid config file {file_path}", details=str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML in {file_path}", details=str(e)) from e

    if not isinstance(loaded, dict) or not isinstance(loaded.get("config"), dict):
        raise ConfigError(f"Invalid YAML structure in {file_path}: missing 'config' key")

    values: dict[str, Any] = {}
    for key, value in loaded["config"].items():
        if not isinstance(value, str):
            raise ConfigError(
                f"Invalid value for '{key}' in {file_path}",
                details="Option values must be plain scalars, not lists or mappings",
            )
        values[key.replace("_", "-")] = value
    logger.info(f"Loaded {len(values)} option(s) from {file_path}")
    return values


def load_options(
    config_file: Path | None = None, environ: Mapping[str, str] | None = None
) -> Options:
    """Load and validate the options of this invocation.

    Args:
        config_file: Optional YAML file with default values
        environ: Environment to read (defaults to os.environ)

    Returns:
        Validated, immutable Options

    Raises:
        ConfigError: If inputs are missing or invalid
    """
    values: dict[str, Any] = {}
    if config_file is not None:
        values.update(read_config_file(config_file, environ))

    inputs = read_action_inputs(environ)
    logger.info(f"Applying {len(inputs)} action input(s)")
    logger.debug(f"Input keys: {sorted(inputs)}")  # Log keys only
    values.update(inputs)

    try:
        return Options.model_validate(values)
    except ValidationError as e:
        problems = "\n".join(
            f"  • {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError("Invalid action inputs", details=problems) from e
