from datetime import datetime, timedelta, timezone

import pytest

from cloneall.config.settings import Settings
from cloneall.core.credentials import CredentialStore
from cloneall.core.types import Credentials, Provider


@pytest.fixture
def store(tmp_path):
    return CredentialStore(tmp_path / "cfg" / "credentials.json")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        github_client_id="gh-id",
        github_client_secret="gh-secret",
        bitbucket_client_id="bb-id",
        bitbucket_client_secret="bb-secret",
        credentials_path=str(tmp_path / "cfg" / "credentials.json"),
    )


@pytest.fixture
def make_creds():
    def _factory(provider=Provider.bitbucket, expires_in=3600, refresh_token="refresh-1", access_token="access-1"):
        return Credentials(
            provider=provider,
            access_token=access_token,
            refresh_token=refresh_token,
            expiry=datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        )

    return _factory
