"""
Pagination over Page and CursorPage results.

A page carries everything needed to fetch its neighbours: the continuation
URLs the service returned (with every query parameter embedded) and the
PageOf witness it was parsed with. Following a link is therefore a plain GET
of the stored URL through the executor, deserialized into the page's own
shape unless the caller overrides it with `into`.

A missing link means there is nothing to fetch: next_page() and
previous_page() return None without touching the network.
"""

from dataclasses import replace
from typing import Any, AsyncIterator, Iterator

from spotweb.core.logger import get_logger
from spotweb.http.executor import RequestExecutor
from spotweb.models.base import CursorPage, Page, PageOf, Shape


logger = get_logger(__name__)

AnyPage = Page | CursorPage


def _previous_url(page: AnyPage) -> str | None:
    if isinstance(page, CursorPage):
        raise TypeError("Cursor pages are forward-only and have no previous page")
    return page.previous


def _target(page: AnyPage, into: Shape | None) -> Shape:
    if into is None:
        return page.continuation_shape()
    # Continuations of an enveloped page are nested under the same key
    if isinstance(into, PageOf) and into.envelope is None and page.envelope is not None:
        return replace(into, envelope=page.envelope)
    return into


class Paginator:
    """
    Follows continuation links of pages.

    Args:
        executor: The executor used for the GET requests.

    Example:
        page = client.get_album_tracks(album_id)
        while page is not None:
            for track in page:
                print(track.name)
            page = client.next_page(page)
    """

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    def next_page(self, page: AnyPage, into: Shape | None = None) -> Any:
        """
        Fetch the page after `page`.

        Args:
            page: A Page or CursorPage previously returned by the client.
            into: Optional deserialization target overriding the page's own
                  shape, e.g. Page.of(FullTrack). A PageOf without an
                  envelope inherits the envelope of `page`.

        Returns:
            The next page (with `error` set if the request failed), or None
            when `page` has no next link.
        """
        if page.next is None:
            logger.debug("No next page to fetch")
            return None
        return self._executor.execute("GET", page.next, _target(page, into))

    def previous_page(self, page: Page, into: Shape | None = None) -> Any:
        """
        Fetch the page before `page`.

        Raises:
            TypeError: If `page` is a CursorPage.
        """
        url = _previous_url(page)
        if url is None:
            logger.debug("No previous page to fetch")
            return None
        return self._executor.execute("GET", url, _target(page, into))

    async def next_page_async(self, page: AnyPage, into: Shape | None = None) -> Any:
        if page.next is None:
            logger.debug("No next page to fetch")
            return None
        return await self._executor.execute_async(
            "GET", page.next, _target(page, into)
        )

    async def previous_page_async(self, page: Page, into: Shape | None = None) -> Any:
        url = _previous_url(page)
        if url is None:
            logger.debug("No previous page to fetch")
            return None
        return await self._executor.execute_async("GET", url, _target(page, into))

    def iter_pages(self, page: AnyPage) -> Iterator[AnyPage]:
        """
        Yield `page` and every page after it.

        Raises:
            ServiceError: If `page` or a followed page carries an error.
        """
        current = page.raise_for_error()
        yield current
        while True:
            current = self.next_page(current)
            if current is None:
                return
            yield current.raise_for_error()

    def iter_items(self, page: AnyPage) -> Iterator[Any]:
        """Yield the items of `page` and of every page after it."""
        for current in self.iter_pages(page):
            yield from current.items

    async def iter_pages_async(self, page: AnyPage) -> AsyncIterator[AnyPage]:
        current = page.raise_for_error()
        yield current
        while True:
            current = await self.next_page_async(current)
            if current is None:
                return
            yield current.raise_for_error()

    async def iter_items_async(self, page: AnyPage) -> AsyncIterator[Any]:
        async for current in self.iter_pages_async(page):
            for item in current.items:
                yield item
