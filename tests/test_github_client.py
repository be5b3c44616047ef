"""Tests for GitHub repository listing."""

from unittest.mock import patch

import pytest

from cloneall.core.errors import ApiError
from cloneall.core.github_client import GitHubClient
from cloneall.core.types import RepoRef


def repo(name):
    return {"name": name, "ssh_url": f"git@github.com:me/{name}.git", "clone_url": "ignored"}


class TestListRepos:
    def test_pages_until_empty(self):
        pages = [[repo("a"), repo("b")], [repo("c")], []]
        with patch("cloneall.core.github_client.request_json", side_effect=pages) as req:
            repos = GitHubClient("tok").list_repos()

        assert repos == [
            RepoRef("a", "git@github.com:me/a.git"),
            RepoRef("b", "git@github.com:me/b.git"),
            RepoRef("c", "git@github.com:me/c.git"),
        ]
        assert req.call_count == 3
        urls = [c.args[0] for c in req.call_args_list]
        assert urls == [f"https://api.github.com/user/repos?per_page=100&page={n}" for n in (1, 2, 3)]

    def test_sends_token_and_github_accept(self):
        with patch("cloneall.core.github_client.request_json", return_value=[]) as req:
            assert GitHubClient("tok").list_repos() == []

        kwargs = req.call_args.kwargs
        assert kwargs["token"] == "tok"
        assert kwargs["headers"] == {"Accept": "application/vnd.github+json"}

    def test_unauthorized_is_not_retried(self):
        err = ApiError("https://api.github.com/user/repos?page=1", 401, "Bad credentials")
        with patch("cloneall.core.github_client.request_json", side_effect=err) as req:
            with pytest.raises(ApiError):
                GitHubClient("tok").list_repos()
        assert req.call_count == 1
