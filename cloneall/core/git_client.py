"""Build and run the composite `git clone` command for a batch of repositories."""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Sequence

from .errors import CloneError
from .types import RepoRef


class GitClient:
    # ---------- process helpers ----------
    @staticmethod
    def _run_shell(command: str) -> tuple[int, str, str]:
        proc = subprocess.run(command, shell=True, capture_output=True, text=True)
        return proc.returncode, proc.stdout, proc.stderr

    # ---------- clone ----------
    @staticmethod
    def clone_command(uri: str, target: str) -> str:
        # credential.helper= keeps git from prompting; --quiet leaves stderr for real failures
        cmd = ["git", "-c", "credential.helper=", "clone", "--quiet", uri, target]
        return " ".join(shlex.quote(c) for c in cmd)

    def build_clone_command(self, dest: str, repos: Sequence[RepoRef]) -> str:
        base = os.path.expanduser(dest)
        return " && ".join(self.clone_command(r.uri, os.path.join(base, r.name)) for r in repos)

    def clone_all(self, dest: str, repos: Sequence[RepoRef]) -> str:
        """Clone every repo into dest/<name> as one `a && b && ...` shell chain.

        The chain stops at the first failing clone. A non-zero exit or any
        stderr output raises CloneError; finished clones are left in place.
        """
        if not repos:
            return ""
        code, out, err = self._run_shell(self.build_clone_command(dest, repos))
        if code != 0 or err.strip():
            raise CloneError(code, err)
        return out
