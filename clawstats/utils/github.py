"""GitHub REST API utilities."""

import logging
import re
import subprocess
from typing import Any, Dict, List, Optional

import requests

from .. import __version__

API_URL = "https://api.github.com"

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when the GitHub API cannot be reached or returns an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def build_headers(token: Optional[str]) -> Dict[str, str]:
    """Build request headers, authenticating only when a token is available."""
    headers = {
        "User-Agent": f"claw-stats/{__version__}",
        "Accept": "application/vnd.github.v3+json",
    }
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def fetch_json(url: str, token: Optional[str], params: Optional[Dict[str, Any]] = None, timeout: float = 30) -> Any:
    """GET a GitHub API URL and decode the JSON body.

    No retries: any non-200 status, connection failure or undecodable body
    raises GitHubAPIError with the details the user needs to see.
    """
    logger.debug("GET %s params=%s", url, params)
    try:
        response = requests.get(url, headers=build_headers(token), params=params, timeout=timeout)
    except requests.RequestException as e:
        raise GitHubAPIError(f"Request to {url} failed: {e}") from e

    if response.status_code != 200:
        raise GitHubAPIError(
            f"GitHub API error: {response.status_code} - {response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    try:
        return response.json()
    except ValueError as e:
        raise GitHubAPIError(f"JSON parse error: {e}", status_code=response.status_code, body=response.text) from e


def fetch_user_repos(user: str, token: Optional[str], timeout: float = 30) -> List[Dict[str, Any]]:
    """Fetch the (first 100, most recently updated) repositories of a user or organization."""
    url = f"{API_URL}/users/{user}/repos"
    data = fetch_json(url, token, params={"per_page": 100, "sort": "updated"}, timeout=timeout)
    return _as_repo_list(data)


def fetch_repo(user: str, repo: str, token: Optional[str], timeout: float = 30) -> List[Dict[str, Any]]:
    """Fetch a single repository, returned as a one-element list."""
    url = f"{API_URL}/repos/{user}/{repo}"
    data = fetch_json(url, token, timeout=timeout)
    return _as_repo_list(data)


def _as_repo_list(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise GitHubAPIError(f"Unexpected response from GitHub API: expected repository objects, got {type(data).__name__}")
    return data


def detect_user_from_git_remote() -> Optional[str]:
    """Guess the account from the current directory's 'origin' remote, if it is on GitHub."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Could not run git to detect account: %s", e)
        return None

    if result.returncode != 0:
        return None

    match = re.search(r"github\.com[:/]([^/]+)", result.stdout)
    if match:
        return match.group(1)
    return None
