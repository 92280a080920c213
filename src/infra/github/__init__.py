"""GitHub Actions integration.

Example:
    from src.infra.github import GitHubClient, GitHubContext

    context = GitHubContext.from_env()
    client = GitHubClient(token, context)
    pr = client.get_current_pull_request_id()
"""

from .client import GitHubClient
from .context import GitHubContext, write_step_outputs

__all__ = [
    "GitHubClient",
    "GitHubContext",
    "write_step_outputs",
]
