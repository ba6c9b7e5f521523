# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""Thin GitHub REST/GraphQL client used by all bots."""

import os
import sys
from urllib.parse import quote

import requests

DEFAULT_API_URL = "https://api.github.com"
REQUEST_TIMEOUT = 30


class GitHubAPIError(Exception):
    """An HTTP error response from the GitHub API."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def get_github_token() -> str:
    """Get the GitHub token from environment."""
    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        print("ERROR: GITHUB_TOKEN not set", file=sys.stderr)
        sys.exit(1)
    return token


class GitHubClient:
    """
    Minimal client over a :class:`requests.Session`.

    Every method raises :class:`GitHubAPIError` on a 4xx/5xx response;
    callers decide whether that is fatal.
    """

    def __init__(self, token: str, api_url: str = DEFAULT_API_URL,
                 session: requests.Session | None = None):
        self.api_url = api_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })

    @classmethod
    def from_env(cls) -> "GitHubClient":
        return cls(get_github_token(), os.environ.get("GITHUB_API_URL", DEFAULT_API_URL))

    def request(self, method: str, path: str, data: dict | None = None,
                params: dict | None = None):
        """Make a GitHub API request and return the decoded JSON body (or {})."""
        url = f"{self.api_url}/{path.lstrip('/')}"
        response = self.session.request(method, url, json=data, params=params,
                                        timeout=REQUEST_TIMEOUT)

        if response.status_code >= 400:
            raise GitHubAPIError(response.status_code, _error_message(response))

        if response.content:
            return response.json()
        return {}

    # --------------------------------------------------------------------------
    # Issues
    # --------------------------------------------------------------------------

    def add_labels(self, owner: str, repo: str, number: int, labels: list[str]):
        return self.request("POST", f"repos/{owner}/{repo}/issues/{number}/labels",
                            {"labels": labels})

    def remove_label(self, owner: str, repo: str, number: int, name: str):
        return self.request(
            "DELETE", f"repos/{owner}/{repo}/issues/{number}/labels/{quote(name, safe='')}"
        )

    def add_assignees(self, owner: str, repo: str, number: int, assignees: list[str]):
        return self.request("POST", f"repos/{owner}/{repo}/issues/{number}/assignees",
                            {"assignees": assignees})

    def create_comment(self, owner: str, repo: str, number: int, body: str):
        return self.request("POST", f"repos/{owner}/{repo}/issues/{number}/comments",
                            {"body": body})

    def create_comment_reaction(self, owner: str, repo: str, comment_id: int, content: str):
        return self.request("POST", f"repos/{owner}/{repo}/issues/comments/{comment_id}/reactions",
                            {"content": content})

    # --------------------------------------------------------------------------
    # Pull requests & checks
    # --------------------------------------------------------------------------

    def get_pull(self, owner: str, repo: str, number: int) -> dict:
        return self.request("GET", f"repos/{owner}/{repo}/pulls/{number}")

    def list_pull_commits(self, owner: str, repo: str, number: int,
                          per_page: int = 100, page: int = 1) -> list[dict]:
        return self.request("GET", f"repos/{owner}/{repo}/pulls/{number}/commits",
                            params={"per_page": per_page, "page": page})

    def create_check_run(self, owner: str, repo: str, **check_run):
        return self.request("POST", f"repos/{owner}/{repo}/check-runs", check_run)

    # --------------------------------------------------------------------------
    # GraphQL
    # --------------------------------------------------------------------------

    def graphql(self, query: str, variables: dict | None = None) -> dict:
        """Run a GraphQL query and return its ``data`` member."""
        result = self.request("POST", "graphql", {"query": query, "variables": variables or {}})
        if not isinstance(result, dict):
            raise GitHubAPIError(200, "GraphQL error: unexpected response")
        errors = result.get("errors")
        if errors:
            message = "; ".join(
                str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors
            )
            raise GitHubAPIError(200, f"GraphQL error: {message}")
        return result.get("data") or {}


def _error_message(response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return f"{payload['message']} ({response.status_code})"
    return f"GitHub API error: {response.status_code} - {response.text}"
