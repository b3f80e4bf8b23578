from .api_client import GitHubClient
from .provider import GitHubStateProvider, parse_run_id, split_repository

__all__ = ["GitHubClient", "GitHubStateProvider", "parse_run_id", "split_repository"]
