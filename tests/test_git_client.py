"""Tests for the composite clone command."""

import os
import shlex
from unittest.mock import patch

import pytest

from cloneall.core.errors import CloneError
from cloneall.core.git_client import GitClient
from cloneall.core.types import RepoRef

REPOS = [RepoRef("a", "u1"), RepoRef("b", "u2")]


class TestBuildCloneCommand:
    def test_clones_chained_in_order_with_and(self):
        command = GitClient().build_clone_command("/x", REPOS)
        first, second = command.split(" && ")

        assert shlex.split(first)[-2:] == ["u1", "/x/a"]
        assert shlex.split(second)[-2:] == ["u2", "/x/b"]
        assert shlex.split(first)[:4] == ["git", "-c", "credential.helper=", "clone"]

    def test_quotes_awkward_names(self):
        command = GitClient().build_clone_command("/x", [RepoRef("my repo; rm -rf", "git@h:o/r.git")])
        assert shlex.split(command)[-1] == "/x/my repo; rm -rf"

    def test_expands_home(self):
        command = GitClient().build_clone_command("~/Projects", [RepoRef("a", "u1")])
        assert shlex.split(command)[-1] == os.path.join(os.path.expanduser("~"), "Projects", "a")


class TestCloneAll:
    def test_runs_one_shell_process(self):
        git = GitClient()
        with patch.object(GitClient, "_run_shell", return_value=(0, "", "")) as run:
            git.clone_all("/x", REPOS)

        run.assert_called_once_with(git.build_clone_command("/x", REPOS))

    def test_empty_list_runs_nothing(self):
        with patch.object(GitClient, "_run_shell") as run:
            assert GitClient().clone_all("/x", []) == ""
        run.assert_not_called()

    def test_nonzero_exit_raises(self):
        with patch.object(GitClient, "_run_shell", return_value=(128, "", "fatal: repository not found\n")):
            with pytest.raises(CloneError) as exc:
                GitClient().clone_all("/x", REPOS)
        assert exc.value.returncode == 128
        assert "repository not found" in str(exc.value)

    def test_stderr_output_raises_even_on_success(self):
        with patch.object(GitClient, "_run_shell", return_value=(0, "", "warning: something odd")):
            with pytest.raises(CloneError):
                GitClient().clone_all("/x", REPOS)

    def test_chain_stops_at_first_failure(self, tmp_path):
        marker = tmp_path / "second-ran"
        git = GitClient()
        with patch.object(GitClient, "clone_command", side_effect=["false", f"touch {marker}"]):
            with pytest.raises(CloneError):
                git.clone_all(str(tmp_path), REPOS)
        assert not marker.exists()
