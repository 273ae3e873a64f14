from __future__ import annotations

import logging
import time
from typing import AsyncIterator, Optional, TypeVar

import httpx

from .contract import ListResponse, Request, Response
from .errors import TransportError
from .session import Session

USER_AGENT = "twapi-python"

R = TypeVar("R", bound=Response)
L = TypeVar("L", bound=ListResponse)


class Engine:
    """
    Executes requests against a Teamwork server.

    - Builds each request against ``session.server`` and authenticates it
      through the session's auth flow
    - Checks the status code and decodes the body through the request's
      response class
    - No retries: failures surface to the caller as typed errors
    """

    def __init__(
        self,
        session: Session,
        *,
        http: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
    ):
        if session is None:
            raise ValueError("session must be provided.")

        self.session = session
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("twapi.engine")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            headers={
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "Engine":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def execute(self, request: Request) -> Response:
        """
        Run one request/response exchange.

        Raises EncodingError or RequestBuildError before anything is sent,
        TransportError when the exchange fails, HTTPError on an unexpected
        status code and DecodeError/MissingIdentifierError on a bad body.
        Cancellation propagates unchanged.
        """
        http_request = request.http_request(self.session.server, self.http)
        method = http_request.method
        url = str(http_request.url)

        start = time.perf_counter()
        try:
            resp = await self.http.send(http_request, auth=self.session)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"failed to execute {request.operation} request {method} {url}: {exc}"
            ) from exc

        try:
            duration_ms = int((time.perf_counter() - start) * 1000)
            self.log.debug(
                "tw.request",
                extra={
                    "operation": request.operation,
                    "method": method,
                    "url": url,
                    "status": resp.status_code,
                    "duration_ms": duration_ms,
                },
            )
            result = request.response_class.handle_http_response(resp)
        finally:
            await resp.aclose()

        if isinstance(result, ListResponse):
            result.set_request(request)
        return result

    async def iterate(self, request: Request) -> AsyncIterator[ListResponse]:
        """Yield pages starting at ``request`` until the server reports no more."""
        next_request: Optional[Request] = request
        while next_request is not None:
            page = await self.execute(next_request)
            if not isinstance(page, ListResponse):
                raise TypeError(
                    f"{type(request).__name__} does not produce a paginated response"
                )
            yield page
            next_request = page.iterate()


__all__ = ["Engine", "USER_AGENT"]
