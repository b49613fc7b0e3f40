"""
GitHub REST client for listing pull requests

Wraps the single endpoint the tool needs:

    GET {base_url}/repos/{owner}/{repo}/pulls

Pull requests are always requested newest-first by creation date so the
fetch loop can stop at the first one older than the requested window.
Works against github.com and GitHub Enterprise (base URL of the form
https://[hostname]/api/v3).

Nothing is retried and there is no rate-limit wait: any failure,
including a timeout, is raised as FetchError and ends the run.
"""

from typing import Any, Dict, List, Optional

import requests

from gh_pr_stats import PROJECT_NAME, __version__
from gh_pr_stats.config import DEFAULT_API_URL, DEFAULT_TIMEOUT


class FetchError(Exception):
    """A page of pull requests could not be retrieved"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubPRFetcher:
    """
    Fetches pages of pull requests from the GitHub REST API

    One requests.Session is kept for the lifetime of the fetcher so the
    connection is reused across pages. Use it as a context manager, or
    call close() when done.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_API_URL,
                 timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        """
        Initialize the fetcher with GitHub authentication

        Args:
            token: GitHub Personal Access Token
            base_url: API root, e.g. https://api.github.com or https://ghe.example.com/api/v3
            timeout: Per-request timeout in seconds
            session: Optional pre-built session (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "User-Agent": f"{PROJECT_NAME}/{__version__}",
        })

    def __enter__(self) -> "GitHubPRFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def list_page(self, owner: str, repo: str, page: int, per_page: int,
                  base: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Fetch one page of pull requests, newest first

        Args:
            owner: Repository owner or organization
            repo: Repository name
            page: 1-based page number
            per_page: Page size (GitHub caps this at 100)
            base: Optional base-branch filter

        Returns:
            List of pull request objects as returned by the API (may be empty)

        Raises:
            FetchError: On network errors, timeouts, non-200 responses or
                an unexpected response body
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/pulls"
        params: Dict[str, Any] = {
            "state": "all",
            "sort": "created",
            "direction": "desc",
            "page": page,
            "per_page": per_page,
        }
        if base:
            params["base"] = base

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            raise FetchError(f"Timed out after {self.timeout}s fetching page {page}: {e}") from e
        except requests.RequestException as e:
            raise FetchError(f"Request for page {page} failed: {e}") from e

        if response.status_code != 200:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("message", response.text) if isinstance(body, dict) else response.text
            raise FetchError(
                f"GitHub returned HTTP {response.status_code} for {owner}/{repo} page {page}: {detail}",
                status_code=response.status_code,
            )

        try:
            items = response.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON in response for page {page}: {e}") from e

        if not isinstance(items, list):
            raise FetchError(f"Unexpected response body for page {page}: expected a list")

        return items
