"""Chart repository (ChartMuseum) HTTP API access."""

from .client import ChartRepositoryClient, ChartVersion

__all__ = [
    "ChartRepositoryClient",
    "ChartVersion",
]
