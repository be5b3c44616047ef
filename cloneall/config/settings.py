from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import (
    BITBUCKET_AUTHORIZE_URL,
    BITBUCKET_TOKEN_URL,
    CALLBACK_PORT,
    CALLBACK_TIMEOUT_SEC,
    DEFAULT_DEST,
    GITHUB_AUTHORIZE_URL,
    GITHUB_SCOPES,
    GITHUB_TOKEN_URL,
)
from ..core.errors import ConfigError
from ..core.oauth import ProviderConfig
from ..core.types import Provider

# Load .env once, early
load_dotenv()


class Settings(BaseSettings):
    """Application config (CLONE_ALL_* env vars or .env)."""

    model_config = SettingsConfigDict(env_prefix="CLONE_ALL_", env_file=None, extra="ignore")

    github_client_id: str | None = None
    github_client_secret: str | None = None
    bitbucket_client_id: str | None = None
    bitbucket_client_secret: str | None = None

    default_dest: str = Field(default=DEFAULT_DEST)
    credentials_path: str | None = None
    callback_port: int = Field(default=CALLBACK_PORT, ge=1, le=65535)
    callback_timeout: float = Field(default=CALLBACK_TIMEOUT_SEC, gt=0)

    def provider_config(self, provider: Provider) -> ProviderConfig:
        client_id = getattr(self, f"{provider.value}_client_id")
        client_secret = getattr(self, f"{provider.value}_client_secret")
        if not client_id or not client_secret:
            prefix = f"CLONE_ALL_{provider.value.upper()}"
            raise ConfigError(f"Missing {provider.value} OAuth app secrets: set {prefix}_CLIENT_ID and {prefix}_CLIENT_SECRET")

        if provider == Provider.github:
            return ProviderConfig(
                provider=provider,
                authorize_url=GITHUB_AUTHORIZE_URL,
                token_url=GITHUB_TOKEN_URL,
                client_id=client_id,
                client_secret=client_secret,
                scopes=GITHUB_SCOPES,
                use_state=True,
                send_redirect_uri=True,
            )
        return ProviderConfig(
            provider=provider,
            authorize_url=BITBUCKET_AUTHORIZE_URL,
            token_url=BITBUCKET_TOKEN_URL,
            client_id=client_id,
            client_secret=client_secret,
            basic_auth=True,
        )


def get_settings() -> Settings:
    return Settings()
