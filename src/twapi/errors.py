from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx


class TwapiError(Exception):
    """Base error for SDK failures."""


class EncodingError(TwapiError):
    """A request body could not be serialized."""


class RequestBuildError(TwapiError):
    """A request could not be turned into an HTTP request (e.g. no parent path)."""


class TransportError(TwapiError):
    """The HTTP exchange itself failed; the original exception is chained."""


class DecodeError(TwapiError):
    """A response body was not the JSON document the operation expects."""


class MissingIdentifierError(TwapiError):
    """A create response decoded fine but carried no usable identifier."""


class MissingBearerTokenError(TwapiError):
    """A context-bound session found no bearer token in the current context."""


class HTTPError(TwapiError):
    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        details: str,
        method: str = "",
        url: str = "",
        headers: Optional[Dict[str, str]] = None,
        response_json: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"{message} ({status_code}): {details}")
        self.status_code = status_code
        self.message = message
        self.details = details
        self.method = method
        self.url = url
        self.headers = headers or {}
        self.response_json = response_json

    @classmethod
    def from_response(cls, resp: httpx.Response, message: str) -> "HTTPError":
        text = resp.text if resp.content else ""
        details = text or "no response body"

        response_json: Optional[Dict[str, Any]] = None
        if text:
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
            if isinstance(parsed, dict):
                response_json = parsed

        method = url = ""
        try:
            method = resp.request.method
            url = str(resp.request.url)
        except RuntimeError:
            # Response built without a request (tests, custom transports).
            pass

        return cls(
            status_code=resp.status_code,
            message=message,
            details=details,
            method=method,
            url=url,
            headers=dict(resp.headers),
            response_json=response_json,
        )


__all__ = [
    "TwapiError",
    "EncodingError",
    "RequestBuildError",
    "TransportError",
    "DecodeError",
    "MissingIdentifierError",
    "MissingBearerTokenError",
    "HTTPError",
]
