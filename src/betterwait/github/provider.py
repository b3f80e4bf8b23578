# github/provider.py
from __future__ import annotations

from typing import List, Tuple

from betterwait.conditions import LocalStateProvider
from betterwait.errors import ConfigError
from betterwait.model import Artifact, JobRecord

from .api_client import GitHubClient


def split_repository(repository: str) -> Tuple[str, str]:
    """'owner/repo' -> ('owner', 'repo')"""
    parts = repository.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigError(f"repository must look like 'owner/repo', got: {repository!r}")
    return parts[0], parts[1]


def parse_run_id(run_id: str | int) -> int:
    try:
        value = int(str(run_id).strip())
    except ValueError:
        raise ConfigError(f"run-id must be numeric, got: {run_id!r}")
    if value <= 0:
        raise ConfigError(f"run-id must be positive, got: {run_id!r}")
    return value


class GitHubStateProvider(LocalStateProvider):
    """State of one workflow run, fetched fresh on every call."""

    def __init__(self, client: GitHubClient, repository: str, run_id: str | int):
        self.client = client
        self.owner, self.repo = split_repository(repository)
        self.run_id = parse_run_id(run_id)

    def list_artifacts(self) -> List[Artifact]:
        return self.client.list_run_artifacts(self.owner, self.repo, self.run_id)

    def list_jobs(self) -> List[JobRecord]:
        return self.client.list_run_jobs(self.owner, self.repo, self.run_id)
