"""Exception hierarchy shared by every cloneall component."""

from __future__ import annotations


class CloneAllError(RuntimeError):
    pass


class ConfigError(CloneAllError):
    pass


class AuthorizationError(CloneAllError):
    pass


class ApiError(CloneAllError):
    def __init__(self, url: str, status: int | None, body: str = "") -> None:
        self.url = url
        self.status = status
        self.body = body
        where = f"HTTP {status}" if status is not None else "request failed"
        super().__init__(f"{where} for {url}: {body}".rstrip(": "))


class CloneError(CloneAllError):
    def __init__(self, returncode: int, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"git clone failed (exit {returncode}): {stderr.strip()}".rstrip(": "))
