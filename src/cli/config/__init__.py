"""Configuration for the preview action."""

from .loader import load_options, read_action_inputs, substitute_env_vars
from .options import Options

__all__ = [
    "Options",
    "load_options",
    "read_action_inputs",
    "substitute_env_vars",
]
