"""
Request executor: the pipeline every API call goes through.

One logical request runs as a generator (_cycle) that never touches the
network or the clock itself. It yields steps and receives their results:

    yield Request  -> receives the Response for it
    yield Backoff  -> receives None once the wait is over

Two drivers run the same generator:
    execute():       transport.send() and time.sleep()
    execute_async(): await async_transport.send() and await asyncio.sleep()

so the blocking and the asyncio paths cannot drift apart, and the asyncio
path suspends only while sending and while backing off.

Pipeline for one logical request:
    1. Build headers from the current Credentials, snapshot the RetryConfig
    2. Send; TransportError propagates and is never retried
    3. 2xx: deserialize the body into the requested shape
    4. Otherwise ask the RetryPolicy; retry the identical request after the
       back-off, or turn the body into an ErrorResult and return it through
       shape.from_error()
"""

import asyncio
import json
import time
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Awaitable, Callable, Generator, TypeVar

from spotweb.core.exceptions import MalformedResponseError
from spotweb.core.logger import get_logger, log_request_failure
from spotweb.http.retry import RetryConfig, RetryDecision, RetryOutcome, RetryPolicy
from spotweb.http.transport import (
    JSON_CONTENT_TYPE,
    AiohttpTransport,
    AsyncTransport,
    Request,
    RequestsTransport,
    Response,
    Transport,
)
from spotweb.models.base import BasicModel, ErrorResult, Shape


logger = get_logger(__name__)

T = TypeVar("T")

Step = Generator["Request | Backoff", "Response | None", T]


@dataclass
class Credentials:
    """
    Authentication state shared by reference with the executor.

    Mutations are picked up by the next logical request; a request that is
    already running keeps the headers it started with.

    Attributes:
        token_type: Authorization scheme, "Bearer" for Spotify tokens.
        access_token: The token, used as is.
        use_auth: Whether the Authorization header is sent at all.

    Example:
        client.credentials.access_token = new_token
    """
    token_type: str = "Bearer"
    access_token: str = ""
    use_auth: bool = True

    def authorization_header(self) -> str:
        return f"{self.token_type} {self.access_token}"


@dataclass(frozen=True)
class Backoff:
    """A wait requested by the retry loop, in seconds."""
    seconds: float


def encode_body(data: Any) -> str | None:
    """
    Serialize a request body.

    Strings are sent unchanged (already encoded JSON, base64 image data);
    dataclasses, dicts and lists are encoded as JSON.
    """
    if data is None or isinstance(data, str):
        return data
    if is_dataclass(data) and not isinstance(data, type):
        data = asdict(data)
    return json.dumps(data)


def parse_error_body(response: Response) -> ErrorResult:
    """
    Build the ErrorResult of a failed response.

    The status always comes from the response. The message is taken from the
    Spotify error object when the body is a JSON object. A JSON string is
    used as is, and any other body keeps its raw text as the message.
    """
    body = response.body.strip()
    if not body:
        return ErrorResult(response.status_code, "")
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return ErrorResult(response.status_code, body)
    if isinstance(data, str):
        return ErrorResult(response.status_code, data)
    if not isinstance(data, dict):
        return ErrorResult(response.status_code, body)
    parsed = ErrorResult.from_dict(data, response.status_code)
    return ErrorResult(response.status_code, parsed.message)


class RequestExecutor:
    """
    Sends requests with auth headers, retries and deserialization.

    Transports are created lazily: a blocking-only program never creates an
    aiohttp session and vice versa. Pass your own transports to share
    sessions or to replace the network in tests.

    Attributes:
        credentials: Shared Credentials, read at the start of every request.
        retry: Shared RetryConfig, copied at the start of every request.
        timeout: Timeout for the transports created by the executor.

    Example:
        executor = RequestExecutor(credentials=Credentials(access_token=token))
        track = executor.execute("GET", f"{BASE_URL}/tracks/{track_id}", FullTrack)
    """

    def __init__(
        self,
        transport: Transport | None = None,
        async_transport: AsyncTransport | None = None,
        credentials: Credentials | None = None,
        retry: RetryConfig | None = None,
        timeout: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
        async_sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.credentials = credentials if credentials is not None else Credentials()
        self.retry = retry if retry is not None else RetryConfig()
        self.timeout = timeout
        self._transport = transport
        self._async_transport = async_transport
        self._owns_transport = transport is None
        self._owns_async_transport = async_transport is None
        self._sleep = sleep
        self._async_sleep = async_sleep

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = RequestsTransport(timeout=self.timeout)
        return self._transport

    @property
    def async_transport(self) -> AsyncTransport:
        if self._async_transport is None:
            self._async_transport = AiohttpTransport(timeout=self.timeout)
        return self._async_transport

    def build_headers(self, has_body: bool, content_type: str = JSON_CONTENT_TYPE) -> dict[str, str]:
        headers = {"Accept": JSON_CONTENT_TYPE}
        if self.credentials.use_auth:
            headers["Authorization"] = self.credentials.authorization_header()
        if has_body:
            headers["Content-Type"] = content_type
        return headers

    # =========================================================================
    # Drivers
    # =========================================================================

    def execute(
        self,
        method: str,
        url: str,
        shape: Shape[T],
        body: str | None = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> T:
        """
        Run one logical request on the blocking path.

        Args:
            method: HTTP method.
            url: Absolute URL including the query string.
            shape: Deserialization target (model class, ErrorResult or a
                   Page.of(...) witness).
            body: Encoded request body, or None.
            content_type: Content-Type sent with the body.

        Returns:
            The deserialized model on success; shape.from_error(error) when
            the request failed for good.

        Raises:
            TransportError: The network failed before a status was received.
            MalformedResponseError: A 2xx body could not be deserialized.
        """
        cycle = self._cycle(method, url, shape, body, content_type)
        try:
            step = next(cycle)
            while True:
                if isinstance(step, Backoff):
                    self._sleep(step.seconds)
                    step = cycle.send(None)
                else:
                    step = cycle.send(self.transport.send(step))
        except StopIteration as finished:
            return finished.value
        finally:
            cycle.close()

    async def execute_async(
        self,
        method: str,
        url: str,
        shape: Shape[T],
        body: str | None = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> T:
        """
        Run one logical request on the asyncio path.

        Same contract as execute(). Cancellation raises CancelledError from
        the pending send or back-off; a cancelled back-off is not charged
        against the retry budget.
        """
        cycle = self._cycle(method, url, shape, body, content_type)
        try:
            step = next(cycle)
            while True:
                if isinstance(step, Backoff):
                    await self._async_sleep(step.seconds)
                    step = cycle.send(None)
                else:
                    step = cycle.send(await self.async_transport.send(step))
        except StopIteration as finished:
            return finished.value
        finally:
            cycle.close()

    def download(self, url: str, shape: Shape[T]) -> T:
        """GET an arbitrary URL into a shape."""
        return self.execute("GET", url, shape)

    def upload(
        self,
        url: str,
        data: Any,
        shape: Shape[T],
        method: str = "POST",
        content_type: str = JSON_CONTENT_TYPE,
    ) -> T:
        """Send data (encoded with encode_body) to an arbitrary URL."""
        return self.execute(method, url, shape, encode_body(data), content_type)

    async def download_async(self, url: str, shape: Shape[T]) -> T:
        return await self.execute_async("GET", url, shape)

    async def upload_async(
        self,
        url: str,
        data: Any,
        shape: Shape[T],
        method: str = "POST",
        content_type: str = JSON_CONTENT_TYPE,
    ) -> T:
        return await self.execute_async(method, url, shape, encode_body(data), content_type)

    def close(self) -> None:
        """Close the blocking transport if the executor created it."""
        if self._owns_transport and self._transport is not None:
            self._transport.close()
            self._transport = None

    async def aclose(self) -> None:
        """Close both transports if the executor created them."""
        if self._owns_async_transport and self._async_transport is not None:
            await self._async_transport.close()
            self._async_transport = None
        self.close()

    # =========================================================================
    # Request cycle
    # =========================================================================

    def _cycle(
        self,
        method: str,
        url: str,
        shape: Shape[T],
        body: str | None,
        content_type: str,
    ) -> Step:
        request = Request(
            method=method,
            url=url,
            body=body,
            headers=self.build_headers(body is not None, content_type),
        )
        policy = RetryPolicy(self.retry.snapshot())

        while True:
            logger.debug(f"{method} {url} (attempt {policy.attempts + 1})")
            response = yield request
            decision = policy.evaluate(response)

            if decision.outcome is RetryOutcome.SUCCESS:
                return self._parse_success(response, shape)

            if decision.outcome is RetryOutcome.FATAL:
                return self._parse_failure(request, response, shape, policy)

            self._log_retry(request, response, decision, policy)
            yield Backoff(decision.delay_ms / 1000)
            policy.record_retry(decision)

    def _parse_success(self, response: Response, shape: Shape[T]) -> T:
        if shape is ErrorResult:
            return ErrorResult(response.status_code, "")

        body = response.body.strip()
        try:
            data = json.loads(body) if body else {}
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Response is not valid JSON: {e}",
                status_code=response.status_code,
                body=response.body,
                details={"original_error": str(e)}
            ) from e

        try:
            result = shape.from_dict(data)
        except (TypeError, AttributeError, ValueError, KeyError) as e:
            raise MalformedResponseError(
                f"Response does not match the expected shape: {e!r}",
                status_code=response.status_code,
                body=response.body,
                details={"shape": repr(shape), "original_error": repr(e)}
            ) from e

        if isinstance(result, BasicModel):
            result = result.with_response(response.status_code, response.headers)
        return result

    def _parse_failure(
        self,
        request: Request,
        response: Response,
        shape: Shape[T],
        policy: RetryPolicy,
    ) -> T:
        error = parse_error_body(response)
        log_request_failure(
            logger,
            request.method,
            request.url,
            error.status_code,
            error.message,
            attempts=policy.attempts,
        )
        return shape.from_error(error)

    def _log_retry(
        self,
        request: Request,
        response: Response,
        decision: RetryDecision,
        policy: RetryPolicy,
    ) -> None:
        budget = "free" if not decision.consumes_retry else f"{policy.retries_left - 1} left"
        logger.warning(
            f"{request.method} {request.url} returned {response.status_code}, "
            f"retrying in {decision.delay_ms} ms ({budget})"
        )
