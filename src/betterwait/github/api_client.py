# github/api_client.py
from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import urlencode, urljoin

from betterwait.errors import APIError
from betterwait.model import Artifact, JobRecord

T = TypeVar("T")

API_VERSION = "2022-11-28"
DEFAULT_API_URL = "https://api.github.com"


class GitHubClient:
    """Minimal GitHub REST client for reading workflow run state."""

    def __init__(
        self,
        token: str = "",
        api_url: str = DEFAULT_API_URL,
        per_page: int = 100,
        timeout: float = 30.0,
    ):
        """
        Initialize API client.

        Args:
            token: GitHub token (may be empty for public repositories)
            api_url: Base URL of the REST API (GHES installs differ)
            per_page: Page size used for list endpoints (max 100)
            timeout: Socket timeout per request, in seconds
        """
        self.base_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self.token = token
        self.per_page = per_page
        self.timeout = timeout

    def _request(self, method: str, path: str, params: Optional[dict] = None) -> dict:
        """
        Make an HTTP request to the API.

        Returns:
            Parsed JSON response as dictionary

        Raises:
            APIError: If the request fails
        """
        url = urljoin(self.base_url + "/", path.lstrip("/"))
        if params:
            url = f"{url}?{urlencode(params)}"

        req_headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": "betterwait",
        }
        if self.token:
            req_headers["Authorization"] = f"Bearer {self.token}"

        req = urllib.request.Request(url, headers=req_headers, method=method)

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                response_data = response.read().decode("utf-8")
                if response_data:
                    return json.loads(response_data)
                return {}
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8") if e.fp else ""
            raise APIError(f"API request failed: {e.code} {e.reason}. {error_body}".strip(), status=e.code)
        except urllib.error.URLError as e:
            raise APIError(f"Network error: {e.reason}")
        except json.JSONDecodeError as e:
            raise APIError(f"Invalid JSON response: {e}")

    def _paginate(self, path: str, key: str, parse: Callable[[Dict[str, Any]], T]) -> List[T]:
        """
        Collect every item of a list endpoint shaped like
        {"total_count": N, "<key>": [...]}.
        """
        items: List[T] = []
        page = 1
        while True:
            data = self._request("GET", path, params={"per_page": self.per_page, "page": page})
            batch = data.get(key)
            if not isinstance(batch, list):
                raise APIError(f"Unexpected response shape: missing '{key}' list")

            items.extend(parse(entry) for entry in batch)

            total = data.get("total_count")
            if len(batch) < self.per_page:
                break
            if isinstance(total, int) and len(items) >= total:
                break
            page += 1
        return items

    def list_run_artifacts(self, owner: str, repo: str, run_id: int) -> List[Artifact]:
        """List every artifact uploaded by a workflow run."""
        return self._paginate(
            f"/repos/{owner}/{repo}/actions/runs/{run_id}/artifacts",
            "artifacts",
            Artifact.from_dict,
        )

    def list_run_jobs(self, owner: str, repo: str, run_id: int) -> List[JobRecord]:
        """List every job of a workflow run (latest attempt)."""
        return self._paginate(
            f"/repos/{owner}/{repo}/actions/runs/{run_id}/jobs",
            "jobs",
            JobRecord.from_dict,
        )
