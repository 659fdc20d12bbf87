"""
Transport layer: the only place where bytes leave the process.

The executor talks to a Transport (blocking) or an AsyncTransport (asyncio)
through a single method, send(request) -> response. Anything that implements
that method can be plugged in, which is how the tests replace the network.

Two implementations ship with the package:
    RequestsTransport: requests.Session based, for the blocking client.
    AiohttpTransport: aiohttp.ClientSession based, for the asyncio client.
                      The session is created lazily inside the running loop.

Both translate network-level failures (DNS, refused connection, timeout)
into TransportError. HTTP error statuses are NOT errors at this layer; they
are returned as regular responses for the retry policy to classify.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Mapping, Protocol

import aiohttp
import requests

from spotweb.core.exceptions import TransportError


JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class Request:
    """
    An outgoing HTTP request.

    Attributes:
        method: HTTP method ("GET", "POST", "PUT", "DELETE").
        url: Absolute URL including the query string.
        body: Request body, or None for bodiless requests.
        headers: Request headers (Authorization, Content-Type).
    """
    method: str
    url: str
    body: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Response:
    """
    An HTTP response as seen by the executor.

    Attributes:
        status_code: HTTP status code.
        body: Decoded response body ("" when empty).
        headers: Response headers. Use header() for case-insensitive lookup.
    """
    status_code: int
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299

    def header(self, name: str) -> str | None:
        """Return a header value, matching the name case-insensitively."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


class Transport(Protocol):
    """Blocking transport contract."""

    def send(self, request: Request) -> Response:
        ...


class AsyncTransport(Protocol):
    """Asyncio transport contract."""

    async def send(self, request: Request) -> Response:
        ...


class RequestsTransport:
    """
    Blocking transport backed by a requests.Session.

    The session keeps connections alive between calls. Pass your own session
    to control proxies, adapters or certificates.

    Example:
        with RequestsTransport(timeout=10) as transport:
            response = transport.send(Request("GET", "https://api.spotify.com/v1/me"))
    """

    def __init__(self, session: requests.Session | None = None, timeout: float = 30.0) -> None:
        self._session = session or requests.Session()
        self._owns_session = session is None
        self.timeout = timeout

    def send(self, request: Request) -> Response:
        try:
            raw = self._session.request(
                request.method,
                request.url,
                data=request.body.encode("utf-8") if request.body is not None else None,
                headers=dict(request.headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(
                f"{request.method} {request.url} failed: {e}",
                method=request.method,
                url=request.url,
                details={"original_error": str(e)}
            ) from e

        return Response(
            status_code=raw.status_code,
            body=raw.text,
            headers=dict(raw.headers),
        )

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AiohttpTransport:
    """
    Asyncio transport backed by an aiohttp.ClientSession.

    The session is created on first use so that it binds to the loop that is
    actually running the requests. An owned session is replaced when the
    transport is used from a different event loop (e.g. a second
    asyncio.run()); an injected session is the caller's to manage and must
    be used from a single loop.

    Example:
        async with AiohttpTransport() as transport:
            response = await transport.send(Request("GET", url))
    """

    def __init__(self, session: aiohttp.ClientSession | None = None, timeout: float = 30.0) -> None:
        self._session = session
        self._owns_session = session is None
        self._loop: asyncio.AbstractEventLoop | None = None
        self.timeout = timeout

    def _get_session(self) -> aiohttp.ClientSession:
        loop = asyncio.get_running_loop()
        if self._owns_session and self._loop is not loop:
            # A session of a finished loop can neither be reused nor closed
            self._session = None
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
            self._loop = loop
        return self._session

    async def send(self, request: Request) -> Response:
        session = self._get_session()
        try:
            async with session.request(
                request.method,
                request.url,
                data=request.body.encode("utf-8") if request.body is not None else None,
                headers=dict(request.headers),
            ) as raw:
                body = await raw.text()
                return Response(
                    status_code=raw.status,
                    body=body,
                    headers=dict(raw.headers),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(
                f"{request.method} {request.url} failed: {e!r}",
                method=request.method,
                url=request.url,
                details={"original_error": repr(e)}
            ) from e

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
