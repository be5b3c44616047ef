"""GitHub API operations: list every repository of the authenticated user."""

from __future__ import annotations

from typing import Any

from .api import request_json
from .constants import GITHUB_API_ACCEPT, GITHUB_API_BASE
from .types import RepoRef


class GitHubClient:
    def __init__(self, token: str | None = None) -> None:
        self.token = token

    # ---------- low-level HTTP ----------
    def _request_json(self, url: str) -> Any:
        return request_json(url, token=self.token, headers={"Accept": GITHUB_API_ACCEPT})

    # ---------- public API ----------
    def list_repos(self) -> list[RepoRef]:
        """Page through /user/repos from page 1 until a page comes back empty."""
        repos: list[RepoRef] = []
        page, per_page = 1, 100
        while True:
            data = self._request_json(f"{GITHUB_API_BASE}/user/repos?per_page={per_page}&page={page}")
            if not data:
                break
            repos.extend(RepoRef(r["name"], r["ssh_url"]) for r in data)
            page += 1
        return repos
