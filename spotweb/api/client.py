"""
Spotify Web API clients.

SpotifyWebAPI runs every request on the blocking path, AsyncSpotifyWebAPI
on the asyncio path. Both share the endpoint wrappers of SpotifyEndpoints and
a RequestExecutor holding the Credentials and RetryConfig.

Usage:
    with SpotifyWebAPI(access_token=token) as client:
        album = client.get_album("4aawyAB9vmqN3uQ7FjRGTy").raise_for_error()
        for track in client.iter_items(album.tracks):
            print(track.name)

    async with AsyncSpotifyWebAPI(access_token=token) as client:
        playback = await client.get_playback()

Configuration can be changed at any time; the next request picks it up:
    client.access_token = refreshed_token
    client.use_auto_retry = True
    client.retry_error_codes = [429, 500, 502, 503, 504]
"""

from typing import Any, AsyncIterator, Awaitable, Callable, Iterable, Iterator, TypeVar

from spotweb.api.endpoints import SpotifyEndpoints
from spotweb.core.config import DEFAULT_BASE_URL, Config
from spotweb.core.logger import get_logger
from spotweb.http.executor import Credentials, RequestExecutor, encode_body
from spotweb.http.pagination import AnyPage, Paginator
from spotweb.http.retry import RetryConfig
from spotweb.http.transport import JSON_CONTENT_TYPE, AsyncTransport, Transport
from spotweb.models.base import Page, Shape


logger = get_logger(__name__)

T = TypeVar("T")


class _SpotifyClientBase(SpotifyEndpoints):
    """
    Construction, shared configuration and its convenience properties.

    Args:
        access_token: Token used as is in the Authorization header.
        token_type: Authorization scheme.
        use_auth: Whether to send the Authorization header.
        credentials: A Credentials object to share; overrides the three
                     arguments above.
        retry: A RetryConfig to share; retries are disabled by default.
        base_url: Root of the Web API.
        timeout: Timeout in seconds for the transports created by the client.
        transport: Blocking transport to use instead of requests.
        async_transport: Asyncio transport to use instead of aiohttp.
        sleep: Blocking back-off function (time.sleep).
        async_sleep: Asyncio back-off function (asyncio.sleep).
        executor: A fully built RequestExecutor; overrides all of the above
                  except base_url.
    """

    def __init__(
        self,
        access_token: str = "",
        token_type: str = "Bearer",
        use_auth: bool = True,
        credentials: Credentials | None = None,
        retry: RetryConfig | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Transport | None = None,
        async_transport: AsyncTransport | None = None,
        sleep: Callable[[float], None] | None = None,
        async_sleep: Callable[[float], Awaitable[None]] | None = None,
        executor: RequestExecutor | None = None,
    ) -> None:
        if executor is None:
            options: dict[str, Any] = {}
            if sleep is not None:
                options["sleep"] = sleep
            if async_sleep is not None:
                options["async_sleep"] = async_sleep
            executor = RequestExecutor(
                transport=transport,
                async_transport=async_transport,
                credentials=credentials or Credentials(token_type, access_token, use_auth),
                retry=retry,
                timeout=timeout,
                **options,
            )
        self.base_url = base_url.rstrip("/")
        self.executor = executor
        self.paginator = Paginator(executor)
        logger.debug(f"{type(self).__name__} created for {self.base_url}")

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any):
        """
        Build a client from a loaded configuration.

        Example:
            client = SpotifyWebAPI.from_config(load_config())
        """
        credentials = Credentials(
            token_type=config.auth.token_type,
            access_token=config.auth.access_token,
            use_auth=config.auth.use_auth,
        )
        retry = RetryConfig(
            enabled=config.retry.enabled,
            retry_after_ms=config.retry.retry_after_ms,
            retry_times=config.retry.retry_times,
            retry_error_codes=frozenset(config.retry.retry_error_codes),
            too_many_requests_consumes_a_retry=config.retry.too_many_requests_consumes_a_retry,
            rate_limit_retry_cap=config.retry.rate_limit_retry_cap,
        )
        return cls(
            credentials=credentials,
            retry=retry,
            base_url=config.http.base_url,
            timeout=config.http.timeout,
            **kwargs,
        )

    # =========================================================================
    # Shared configuration
    # =========================================================================

    @property
    def credentials(self) -> Credentials:
        return self.executor.credentials

    @property
    def retry(self) -> RetryConfig:
        return self.executor.retry

    @property
    def token_type(self) -> str:
        return self.credentials.token_type

    @token_type.setter
    def token_type(self, value: str) -> None:
        self.credentials.token_type = value

    @property
    def access_token(self) -> str:
        return self.credentials.access_token

    @access_token.setter
    def access_token(self, value: str) -> None:
        self.credentials.access_token = value

    @property
    def use_auth(self) -> bool:
        return self.credentials.use_auth

    @use_auth.setter
    def use_auth(self, value: bool) -> None:
        self.credentials.use_auth = value

    @property
    def use_auto_retry(self) -> bool:
        return self.retry.enabled

    @use_auto_retry.setter
    def use_auto_retry(self, value: bool) -> None:
        self.retry.enabled = value

    @property
    def retry_times(self) -> int:
        return self.retry.retry_times

    @retry_times.setter
    def retry_times(self, value: int) -> None:
        if value < 0:
            raise ValueError("retry_times must not be negative")
        self.retry.retry_times = value

    @property
    def retry_after(self) -> int:
        """Default wait between attempts, in milliseconds."""
        return self.retry.retry_after_ms

    @retry_after.setter
    def retry_after(self, value: int) -> None:
        if value < 0:
            raise ValueError("retry_after must not be negative")
        self.retry.retry_after_ms = value

    @property
    def retry_error_codes(self) -> frozenset[int]:
        return self.retry.retry_error_codes

    @retry_error_codes.setter
    def retry_error_codes(self, value: Iterable[int]) -> None:
        self.retry.retry_error_codes = frozenset(value)

    @property
    def too_many_requests_consumes_a_retry(self) -> bool:
        return self.retry.too_many_requests_consumes_a_retry

    @too_many_requests_consumes_a_retry.setter
    def too_many_requests_consumes_a_retry(self, value: bool) -> None:
        self.retry.too_many_requests_consumes_a_retry = value


class SpotifyWebAPI(_SpotifyClientBase):
    """Blocking Spotify Web API client."""

    def _get(self, url: str, shape: Shape[T]) -> T:
        return self.executor.execute("GET", url, shape)

    def _send(
        self,
        method: str,
        url: str,
        shape: Shape[T],
        body: Any = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> T:
        return self.executor.execute(method, url, shape, encode_body(body), content_type)

    def download_data(self, url: str, shape: Shape[T]) -> T:
        """
        GET any Web API URL into a shape.

        Example:
            album = client.download_data(album.href, FullAlbum)
        """
        return self.executor.download(url, shape)

    def upload_data(self, url: str, data: Any, shape: Shape[T], method: str = "POST") -> T:
        """Send data (a JSON string, dict, list or dataclass) to any Web API URL."""
        return self.executor.upload(url, data, shape, method)

    def next_page(self, page: AnyPage, into: Shape | None = None) -> Any:
        """
        Fetch the page after `page`, or None when it is the last one.

        Args:
            page: A Page or CursorPage returned by this client.
            into: Optional deserialization target, e.g. Page.of(FullTrack).
        """
        return self.paginator.next_page(page, into)

    def previous_page(self, page: Page, into: Shape | None = None) -> Any:
        """Fetch the page before `page`, or None when it is the first one."""
        return self.paginator.previous_page(page, into)

    def iter_pages(self, page: AnyPage) -> Iterator[AnyPage]:
        return self.paginator.iter_pages(page)

    def iter_items(self, page: AnyPage) -> Iterator[Any]:
        """
        Iterate over the items of `page` and of every following page.

        Raises:
            ServiceError: If a page could not be fetched.
        """
        return self.paginator.iter_items(page)

    def close(self) -> None:
        self.executor.close()

    def __enter__(self) -> "SpotifyWebAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncSpotifyWebAPI(_SpotifyClientBase):
    """
    Asyncio Spotify Web API client.

    Every endpoint wrapper returns an awaitable. Cancelling the awaiting task
    stops the request at its current send or back-off without charging a
    retry.
    """

    def _get(self, url: str, shape: Shape[T]) -> Awaitable[T]:
        return self.executor.execute_async("GET", url, shape)

    def _send(
        self,
        method: str,
        url: str,
        shape: Shape[T],
        body: Any = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> Awaitable[T]:
        return self.executor.execute_async(method, url, shape, encode_body(body), content_type)

    async def download_data(self, url: str, shape: Shape[T]) -> T:
        return await self.executor.download_async(url, shape)

    async def upload_data(self, url: str, data: Any, shape: Shape[T], method: str = "POST") -> T:
        return await self.executor.upload_async(url, data, shape, method)

    async def next_page(self, page: AnyPage, into: Shape | None = None) -> Any:
        return await self.paginator.next_page_async(page, into)

    async def previous_page(self, page: Page, into: Shape | None = None) -> Any:
        return await self.paginator.previous_page_async(page, into)

    def iter_pages(self, page: AnyPage) -> AsyncIterator[AnyPage]:
        """
        Iterate asynchronously over `page` and every following page.

        Example:
            async for page in client.iter_pages(first_page):
                ...
        """
        return self.paginator.iter_pages_async(page)

    def iter_items(self, page: AnyPage) -> AsyncIterator[Any]:
        return self.paginator.iter_items_async(page)

    async def aclose(self) -> None:
        await self.executor.aclose()

    async def __aenter__(self) -> "AsyncSpotifyWebAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
