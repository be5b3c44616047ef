"""OAuth2 authorization-code flow with a one-shot localhost callback listener."""

from __future__ import annotations

import json
import secrets
import sys
import time
import webbrowser
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Callable
from urllib.parse import parse_qs, urlencode, urlsplit

from .api import basic_auth, request_json
from .constants import (
    AUTHORIZED_PAGE,
    CALLBACK_HOST,
    CALLBACK_PORT,
    CALLBACK_TIMEOUT_SEC,
    DEFAULT_TOKEN_LIFETIME_SEC,
    FAILED_PAGE,
)
from .credentials import CredentialStore
from .errors import ApiError, AuthorizationError, CloneAllError
from .types import Credentials, Provider


@dataclass(frozen=True)
class ProviderConfig:
    provider: Provider
    authorize_url: str
    token_url: str
    client_id: str
    client_secret: str
    scopes: tuple[str, ...] = ()
    use_state: bool = False  # send and verify an anti-forgery `state`
    basic_auth: bool = False  # client credentials as HTTP basic auth instead of form fields
    send_redirect_uri: bool = False


class _CallbackServer(HTTPServer):
    """Serves requests until one callback produces an outcome."""

    def __init__(
        self,
        address: tuple[str, int],
        provider_name: str,
        on_callback: Callable[[dict[str, list[str]]], Credentials],
    ):
        super().__init__(address, _CallbackHandler)
        self.provider_name = provider_name
        self.on_callback = on_callback
        self.outcome: Credentials | CloneAllError | None = None


class _CallbackHandler(BaseHTTPRequestHandler):
    server: _CallbackServer

    def do_GET(self) -> None:  # noqa: N802
        parts = urlsplit(self.path)
        segments = parts.path.split("/")
        params = parse_qs(parts.query)
        if len(segments) != 2 or not segments[1].startswith("code") or not ("code" in params or "error" in params):
            self.send_error(404)
            return

        try:
            self.server.outcome = self.server.on_callback(params)
            status, body = 200, AUTHORIZED_PAGE
        except CloneAllError as e:
            self.server.outcome = e
            status, body = 400, FAILED_PAGE
        except Exception as e:
            outcome = AuthorizationError(f"{self.server.provider_name} authorization failed: {e!r}")
            outcome.__cause__ = e
            self.server.outcome = outcome
            status, body = 400, FAILED_PAGE

        self.send_response(status)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        pass


class OAuthClient:
    """Acquire, persist and refresh the access token of one provider.

    ``authorize()`` returns a usable access token:
      - a stored token that has not expired is returned as is;
      - an expired one is refreshed, falling back to the browser flow if the refresh fails;
      - with nothing stored, the user authorizes in the browser and the
        provider redirects to ``http://localhost:<port>/code?code=...``.
    """

    def __init__(
        self,
        config: ProviderConfig,
        store: CredentialStore,
        *,
        port: int = CALLBACK_PORT,
        timeout: float = CALLBACK_TIMEOUT_SEC,
        open_browser: Callable[[str], object] = webbrowser.open,
    ) -> None:
        self.config = config
        self.store = store
        self.port = port
        self.timeout = timeout
        self.open_browser = open_browser

    @property
    def provider(self) -> Provider:
        return self.config.provider

    @property
    def redirect_uri(self) -> str:
        return f"http://localhost:{self.port}/code"

    # ---------- public API ----------
    def authorize(self) -> str:
        creds = self.store.load(self.provider)
        if creds is None:
            return self.authorize_in_browser()
        if not creds.is_expired():
            return creds.access_token
        try:
            return self.refresh(creds)
        except AuthorizationError as e:
            print(f"[{self.provider.value}] token refresh failed ({e}); re-authorizing in the browser.", file=sys.stderr)
            return self.authorize_in_browser()

    def refresh(self, creds: Credentials | None = None) -> str:
        creds = creds or self.store.load(self.provider)
        if creds is None or not creds.refresh_token:
            raise AuthorizationError(f"No {self.provider.value} refresh token stored; authorization required")
        payload = self._token_request({"grant_type": "refresh_token", "refresh_token": creds.refresh_token})
        return self._persist(payload, previous_refresh=creds.refresh_token).access_token

    def invalidate(self) -> None:
        """Mark the stored access token as expired after the provider rejected it."""
        creds = self.store.load(self.provider)
        if creds is not None:
            self.store.save(creds.model_copy(update={"expiry": datetime.now(timezone.utc)}))

    def authorization_url(self, state: str | None = None) -> str:
        params = {"client_id": self.config.client_id, "response_type": "code"}
        if self.config.send_redirect_uri:
            params["redirect_uri"] = self.redirect_uri
        if self.config.scopes:
            params["scope"] = " ".join(self.config.scopes)
        if state:
            params["state"] = state
        return f"{self.config.authorize_url}?{urlencode(params)}"

    def authorize_in_browser(self) -> str:
        state = secrets.token_urlsafe(32) if self.config.use_state else None
        url = self.authorization_url(state)

        try:
            server = _CallbackServer(
                (CALLBACK_HOST, self.port),
                self.provider.value,
                lambda params: self._handle_callback(params, state),
            )
        except OSError as e:
            raise AuthorizationError(f"Cannot listen for the OAuth callback on port {self.port}: {e}") from e

        with server:
            print(f"Authorize {self.provider.value} in your browser (opening {url})")
            self.open_browser(url)
            deadline = time.monotonic() + self.timeout
            while server.outcome is None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise AuthorizationError(
                        f"Timed out after {self.timeout:.0f}s waiting for the {self.provider.value} authorization callback"
                    )
                server.timeout = remaining
                server.handle_request()

        if isinstance(server.outcome, CloneAllError):
            raise server.outcome
        return server.outcome.access_token

    # ---------- internals ----------
    def _handle_callback(self, params: dict[str, list[str]], state: str | None) -> Credentials:
        if "error" in params:
            raise AuthorizationError(f"{self.provider.value} authorization denied: {params['error'][0]}")
        if state is not None and params.get("state", [None])[0] != state:
            raise AuthorizationError(f"{self.provider.value} authorization callback carried an unexpected state")

        form = {"grant_type": "authorization_code", "code": params["code"][0]}
        if self.config.send_redirect_uri:
            form["redirect_uri"] = self.redirect_uri
        return self._persist(self._token_request(form))

    def _token_request(self, form: dict[str, str]) -> dict:
        headers: dict[str, str] = {}
        if self.config.basic_auth:
            headers["Authorization"] = basic_auth(self.config.client_id, self.config.client_secret)
        else:
            form = {**form, "client_id": self.config.client_id, "client_secret": self.config.client_secret}

        try:
            payload = request_json(self.config.token_url, headers=headers, form=form)
        except ApiError as e:
            raise AuthorizationError(f"{self.provider.value} token request failed: {e.body or e}") from e

        if not isinstance(payload, dict) or payload.get("error") or not payload.get("access_token"):
            raise AuthorizationError(f"{self.provider.value} token request failed: {json.dumps(payload)}")
        return payload

    def _persist(self, payload: dict, previous_refresh: str | None = None) -> Credentials:
        refresh_token = payload.get("refresh_token") or previous_refresh
        lifetime = payload.get("expires_in")
        if lifetime:
            expiry = datetime.now(timezone.utc) + timedelta(seconds=int(lifetime))
        elif refresh_token:
            expiry = datetime.now(timezone.utc) + timedelta(seconds=DEFAULT_TOKEN_LIFETIME_SEC)
        else:
            # non-expiring token (GitHub OAuth apps): valid until revoked
            expiry = None
        creds = Credentials(
            provider=self.provider,
            access_token=payload["access_token"],
            refresh_token=refresh_token,
            expiry=expiry,
        )
        self.store.save(creds)
        return creds
