"""Small types and Enums used by cloneall."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel


class Provider(str, Enum):
    """Supported code-hosting providers, in the order they run by default."""

    github = "github"
    bitbucket = "bitbucket"


class RepoRef(NamedTuple):
    name: str
    uri: str


class Credentials(BaseModel):
    """OAuth tokens for one provider."""

    provider: Provider
    access_token: str
    refresh_token: str | None = None
    expiry: datetime | None = None  # None: the provider issued a non-expiring token

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expiry is None:
            return False
        now = now or datetime.now(timezone.utc)
        expiry = self.expiry
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return now >= expiry
