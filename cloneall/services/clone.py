"""Services for the clone command: authorize, list and clone, one provider after another."""

from __future__ import annotations

import os
import time
from collections.abc import Sequence

from ..config.settings import Settings
from ..core.bitbucket_client import BitbucketClient
from ..core.credentials import CredentialStore
from ..core.git_client import GitClient
from ..core.github_client import GitHubClient
from ..core.oauth import OAuthClient
from ..core.types import Provider, RepoRef


def list_provider_repos(provider: Provider, oauth: OAuthClient) -> list[RepoRef]:
    token = oauth.authorize()
    if provider == Provider.bitbucket:
        return BitbucketClient(token, refresh=oauth.refresh, invalidate=oauth.invalidate).list_repos()
    return GitHubClient(token).list_repos()


def clone_provider(
    provider: Provider,
    oauth: OAuthClient,
    dest: str,
    git: GitClient | None = None,
    dry_run: bool = False,
) -> int:
    """Run one provider's pipeline; returns the number of repositories handled."""
    git = git or GitClient()
    repos = list_provider_repos(provider, oauth)
    if not repos:
        print(f"[{provider.value}] No repositories found (check account / permissions).")
        return 0

    if dry_run:
        print(f"[{provider.value}] {len(repos)} repositories, would run:")
        print(git.build_clone_command(dest, repos))
        return len(repos)

    print(f"[{provider.value}] Found {len(repos)} repositories. Cloning to '{dest}'...")
    start = time.time()
    git.clone_all(dest, repos)
    print(f"[{provider.value}] Done. {len(repos)} cloned in {time.time() - start:.1f}s.")
    return len(repos)


def clone_all(
    settings: Settings,
    store: CredentialStore,
    dest: str,
    providers: Sequence[Provider] = (Provider.github, Provider.bitbucket),
    dry_run: bool = False,
) -> dict[Provider, int]:
    """Clone every accessible repository of each provider, strictly in order.

    The first error aborts the remaining providers and propagates.
    """
    configs = [settings.provider_config(p) for p in providers]
    if not dry_run:
        os.makedirs(os.path.expanduser(dest), exist_ok=True)

    git = GitClient()
    results: dict[Provider, int] = {}
    for config in configs:
        oauth = OAuthClient(
            config,
            store,
            port=settings.callback_port,
            timeout=settings.callback_timeout,
        )
        results[config.provider] = clone_provider(config.provider, oauth, dest, git=git, dry_run=dry_run)
    return results
