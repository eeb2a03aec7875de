"""Credential sources for the request executor."""

from typing import Protocol, runtime_checkable

from .settings import get_settings


@runtime_checkable
class TokenProvider(Protocol):
    def get_token(self) -> str | None: ...


class StaticTokenProvider:
    """Always returns the same token (or none)."""

    def __init__(self, token: str | None):
        self._token = token or None

    def get_token(self) -> str | None:
        return self._token


class SettingsTokenProvider:
    """Reads GITHUB_TOKEN through the application settings on every call."""

    def get_token(self) -> str | None:
        return get_settings().github_token or None


def auth_headers(token: str | None) -> dict[str, str]:
    """Authorization header for ``token``; empty when there is no token."""
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}
