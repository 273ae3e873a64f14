from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .client import Engine
from .session import BasicAuth, BearerToken, Session

SERVER_ENV = "TWAPI_SERVER"
BEARER_TOKEN_ENV = "TWAPI_BEARER_TOKEN"
USERNAME_ENV = "TWAPI_USERNAME"
PASSWORD_ENV = "TWAPI_PASSWORD"
TIMEOUT_ENV = "TWAPI_TIMEOUT_SECONDS"
LOG_LEVEL_ENV = "TWAPI_LOG_LEVEL"
ALLOW_DELETE_ENV = "TWAPI_MCP_ALLOW_DELETE"

_TRUTHY = {"1", "true", "yes", "on"}


class MissingServerError(ValueError):
    """Raised when the Teamwork server URL is required but missing."""


class MissingCredentialsError(ValueError):
    """Raised when neither a bearer token nor basic credentials are configured."""


@dataclass(frozen=True)
class EnvConfig:
    server: str
    bearer_token: str = ""
    username: str = ""
    password: str = ""
    timeout_seconds: float = 30.0
    log_level: str = "INFO"
    allow_delete: bool = False


def load_env_config(*, use_dotenv: bool = True) -> EnvConfig:
    """Load Teamwork settings from the environment (optionally a .env file)."""
    if use_dotenv:
        load_dotenv()
    timeout_raw = os.getenv(TIMEOUT_ENV, "").strip()
    try:
        timeout = float(timeout_raw) if timeout_raw else 30.0
    except ValueError as exc:
        raise ValueError(f"{TIMEOUT_ENV} must be a number, got {timeout_raw!r}") from exc
    return EnvConfig(
        server=os.getenv(SERVER_ENV, "").strip().rstrip("/"),
        bearer_token=os.getenv(BEARER_TOKEN_ENV, "").strip(),
        username=os.getenv(USERNAME_ENV, "").strip(),
        password=os.getenv(PASSWORD_ENV, ""),
        timeout_seconds=timeout,
        log_level=os.getenv(LOG_LEVEL_ENV, "INFO").strip() or "INFO",
        allow_delete=os.getenv(ALLOW_DELETE_ENV, "").strip().lower() in _TRUTHY,
    )


def create_session_from_env(config: Optional[EnvConfig] = None) -> Session:
    """A bearer token wins over basic credentials when both are present."""
    cfg = config or load_env_config()
    if not cfg.server:
        raise MissingServerError(f"{SERVER_ENV} not set")
    if cfg.bearer_token:
        return BearerToken(cfg.bearer_token, cfg.server)
    if cfg.username and cfg.password:
        return BasicAuth(cfg.username, cfg.password, cfg.server)
    raise MissingCredentialsError(
        f"Set {BEARER_TOKEN_ENV} or both {USERNAME_ENV} and {PASSWORD_ENV}."
    )


def create_engine_from_env(config: Optional[EnvConfig] = None, **kwargs) -> Engine:
    cfg = config or load_env_config()
    kwargs.setdefault("timeout_seconds", cfg.timeout_seconds)
    return Engine(create_session_from_env(cfg), **kwargs)


__all__ = [
    "EnvConfig",
    "MissingServerError",
    "MissingCredentialsError",
    "load_env_config",
    "create_session_from_env",
    "create_engine_from_env",
    "SERVER_ENV",
    "BEARER_TOKEN_ENV",
    "USERNAME_ENV",
    "PASSWORD_ENV",
    "TIMEOUT_ENV",
    "LOG_LEVEL_ENV",
    "ALLOW_DELETE_ENV",
]
