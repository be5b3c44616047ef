"""Bitbucket API operations: list the repositories of every team the user belongs to."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable
from urllib.parse import quote

from .api import request_json
from .constants import BITBUCKET_API_BASE
from .errors import ApiError
from .types import RepoRef


def ssh_clone_href(repo: dict[str, Any]) -> str | None:
    links = repo.get("links", {}).get("clone", [])
    return next((link.get("href") for link in links if link.get("name") == "ssh"), None)


class BitbucketClient:
    """Bearer-authenticated Bitbucket 2.0 client.

    A 401 clears the cached token, marks the stored one expired through
    ``invalidate``, calls ``refresh`` once and retries the request once with
    the new token. Requests that fail together share a single refresh.
    """

    def __init__(
        self,
        token: str | None,
        refresh: Callable[[], str] | None = None,
        invalidate: Callable[[], None] | None = None,
    ) -> None:
        self.token = token
        self._refresh = refresh
        self._invalidate = invalidate
        self._refresh_lock = threading.Lock()

    # ---------- low-level HTTP ----------
    def _expire_stored(self) -> None:
        if self._invalidate is not None:
            self._invalidate()

    def _get(self, url: str) -> Any:
        sent_with = self.token
        try:
            return request_json(url, token=sent_with)
        except ApiError as e:
            if e.status != 401 or self._refresh is None:
                raise

        with self._refresh_lock:
            if self.token == sent_with:
                self.token = None
                self._expire_stored()
                self.token = self._refresh()
        try:
            return request_json(url, token=self.token)
        except ApiError as e:
            if e.status == 401:
                self._expire_stored()
            raise

    # ---------- public API ----------
    def list_teams(self) -> list[str]:
        data = self._get(f"{BITBUCKET_API_BASE}/teams?role=member") or {}
        return [team["username"] for team in data.get("values", [])]

    def list_team_repos(self, team: str) -> list[RepoRef]:
        """Follow ``next`` links through the team's repositories, keeping SSH clone links."""
        repos: list[RepoRef] = []
        url: str | None = f"{BITBUCKET_API_BASE}/teams/{quote(team)}/repositories"
        while url:
            page = self._get(url) or {}
            for repo in page.get("values", []):
                href = ssh_clone_href(repo)
                if href:
                    repos.append(RepoRef(repo["name"], href))
            url = page.get("next")
        return repos

    def list_repos(self) -> list[RepoRef]:
        teams = self.list_teams()
        if not teams:
            return []
        with ThreadPoolExecutor(max_workers=len(teams)) as pool:
            per_team = list(pool.map(self.list_team_repos, teams))
        return [repo for repos in per_team for repo in repos]
