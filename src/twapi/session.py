"""
Authentication sessions.

A session is an ``httpx.Auth`` flow that also knows which server the requests
go to. The engine builds each request against ``session.server`` and then lets
httpx run the session's auth flow on it.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from typing import Generator, Optional

import httpx

from .errors import MissingBearerTokenError

COOKIE_NAME = "tw-auth"


def _normalize_server(server: str) -> str:
    return (server or "").rstrip("/")


class BasicAuth(httpx.BasicAuth):
    def __init__(self, username: str, password: str, server: str):
        super().__init__(username, password)
        self.server = _normalize_server(server)


class BearerToken(httpx.Auth):
    def __init__(self, token: str, server: str):
        self.token = token
        self.server = _normalize_server(server)

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


class Cookie(httpx.Auth):
    """Session authenticated through the ``tw-auth`` cookie."""

    def __init__(self, value: str, server: str):
        self.value = value
        self.server = _normalize_server(server)

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        cookie = f"{COOKIE_NAME}={self.value}"
        existing = request.headers.get("Cookie")
        request.headers["Cookie"] = f"{existing}; {cookie}" if existing else cookie
        yield request


_bearer_token_var: ContextVar[Optional[BearerToken]] = ContextVar(
    "twapi_bearer_token", default=None
)


def use_bearer_token(token: BearerToken) -> Token:
    """Bind ``token`` to the current context; returns the token for reset."""
    return _bearer_token_var.set(token)


def reset_bearer_token(token: Token) -> None:
    _bearer_token_var.reset(token)


def current_bearer_token() -> Optional[BearerToken]:
    return _bearer_token_var.get()


class BearerTokenContext(httpx.Auth):
    """
    Session whose token and server are bound per task through a ContextVar.

    Lets one engine serve many callers (e.g. a multi-tenant server) where each
    request carries its own credentials.
    """

    @property
    def server(self) -> str:
        return self._require_token().server

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        token = self._require_token()
        request.headers["Authorization"] = f"Bearer {token.token}"
        yield request

    @staticmethod
    def _require_token() -> BearerToken:
        token = _bearer_token_var.get()
        if token is None:
            raise MissingBearerTokenError("missing bearer token")
        return token


Session = httpx.Auth

__all__ = [
    "BasicAuth",
    "BearerToken",
    "Cookie",
    "BearerTokenContext",
    "Session",
    "use_bearer_token",
    "reset_bearer_token",
    "current_bearer_token",
    "COOKIE_NAME",
]
