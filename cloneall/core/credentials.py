"""Per-provider OAuth credentials persisted as a JSON file in the user's config dir."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import ValidationError

from .constants import APP_NAME
from .errors import ConfigError
from .types import Credentials, Provider


def default_credentials_path() -> Path:
    base = os.getenv("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return Path(base) / APP_NAME / "credentials.json"


class CredentialStore:
    """File layout::

        {"github": {"access_token": "...", "refresh_token": "...", "expiry": "2026-01-01T00:00:00+00:00"}}
    """

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = Path(path) if path else default_credentials_path()

    def _read(self) -> dict[str, dict]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read credentials file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Credentials file {self.path} is not a JSON object")
        return data

    def _write(self, data: dict[str, dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.chmod(self.path, 0o600)
        except OSError as e:
            raise ConfigError(f"Cannot write credentials file {self.path}: {e}") from e

    def load(self, provider: Provider) -> Credentials | None:
        record = self._read().get(provider.value)
        if not record or not record.get("access_token"):
            return None
        try:
            return Credentials(provider=provider, **record)
        except (TypeError, ValidationError) as e:
            raise ConfigError(f"Corrupt {provider.value} entry in {self.path}: {e}") from e

    def save(self, creds: Credentials) -> None:
        data = self._read()
        data[creds.provider.value] = creds.model_dump(mode="json", exclude={"provider"})
        self._write(data)

    def clear(self, provider: Provider) -> bool:
        data = self._read()
        if data.pop(provider.value, None) is None:
            return False
        self._write(data)
        return True
