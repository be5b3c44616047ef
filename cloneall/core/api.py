"""Minimal JSON-over-HTTP helper shared by the provider clients."""

from __future__ import annotations

import base64
import http.client
import json
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import urlencode

from .constants import HTTP_TIMEOUT_SEC, USER_AGENT
from .errors import ApiError


def basic_auth(user: str, password: str) -> str:
    raw = f"{user}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def request_json(
    url: str,
    *,
    token: str | None = None,
    headers: dict[str, str] | None = None,
    form: dict[str, str] | None = None,
) -> Any:
    """GET ``url`` (or POST ``form`` url-encoded) and decode the JSON reply.

    Non-2xx replies and transport failures raise ApiError.
    """
    data = urlencode(form).encode("utf-8") if form is not None else None
    req = urllib.request.Request(url, data=data, method="POST" if data is not None else "GET")
    req.add_header("Accept", "application/json")
    req.add_header("User-Agent", USER_AGENT)
    if token:
        req.add_header("Authorization", f"Bearer {token}")
    for k, v in (headers or {}).items():
        req.add_header(k, v)

    try:
        with urllib.request.urlopen(req, timeout=HTTP_TIMEOUT_SEC) as resp:
            body = resp.read().decode("utf-8")
    except urllib.error.HTTPError as e:
        raise ApiError(url, e.code, e.read().decode("utf-8", "ignore")) from e
    except urllib.error.URLError as e:
        raise ApiError(url, None, str(e.reason)) from e
    except (OSError, http.client.HTTPException) as e:
        raise ApiError(url, None, str(e) or type(e).__name__) from e

    try:
        return json.loads(body) if body else None
    except json.JSONDecodeError as e:
        raise ApiError(url, None, f"invalid JSON: {body[:200]}") from e
