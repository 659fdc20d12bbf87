"""Test page continuation"""

import pytest

from conftest import BASE_URL, PAGED_URL, FakeAsyncTransport, FakeTransport, error_response, json_response, paging_handler
from spotweb.core import ServiceError
from spotweb.http import Paginator, RequestExecutor
from spotweb.models import (
    CursorPage,
    FullArtist,
    FullTrack,
    NewAlbumReleases,
    Page,
    PlayHistory,
    SavedTrack,
    SearchItem,
    SimpleAlbum,
)


@pytest.fixture
def paged_transport():
    return FakeTransport(handler=paging_handler)


@pytest.fixture
def paged_async_transport():
    return FakeAsyncTransport(handler=paging_handler)


@pytest.fixture
def paginator(paged_transport, paged_async_transport):
    executor = RequestExecutor(transport=paged_transport, async_transport=paged_async_transport)
    return Paginator(executor)


@pytest.fixture
def first_page(paginator):
    return paginator._executor.execute("GET", f"{PAGED_URL}?offset=0&limit=20", Page.of(SavedTrack))


class TestOffsetPages:
    """Test next/previous over an offset-paged collection of 45 items"""

    def test_walk_forward(self, paginator, first_page):
        assert first_page.offset == 0
        assert first_page.has_next_page()
        assert not first_page.has_previous_page()

        second = paginator.next_page(first_page)
        assert second.offset == 20
        assert second.has_previous_page()

        third = paginator.next_page(second)
        assert third.offset == 40
        assert len(third.items) == 5
        assert not third.has_next_page()

    def test_item_type_rehydrated(self, paginator, first_page):
        second = paginator.next_page(first_page)

        assert isinstance(second, Page)
        assert isinstance(second.items[0], SavedTrack)
        assert second.items[0].track.id == "t20"
        assert second.item_type is SavedTrack

    def test_next_on_last_page_makes_no_request(self, paginator, paged_transport, first_page):
        last = paginator.next_page(paginator.next_page(first_page))
        sent = len(paged_transport.requests)

        assert paginator.next_page(last) is None
        assert len(paged_transport.requests) == sent

    def test_previous_on_first_page_makes_no_request(self, paginator, paged_transport, first_page):
        sent = len(paged_transport.requests)

        assert paginator.previous_page(first_page) is None
        assert len(paged_transport.requests) == sent

    def test_next_then_previous_returns_to_offset(self, paginator, first_page):
        back = paginator.previous_page(paginator.next_page(first_page))

        assert back.offset == first_page.offset
        assert back.href == first_page.href

    def test_follows_link_verbatim(self, paginator, paged_transport, first_page):
        paginator.next_page(first_page)

        assert paged_transport.requests[-1].url == first_page.next
        assert paged_transport.requests[-1].method == "GET"

    def test_repeated_calls_issue_same_request(self, paginator, paged_transport, first_page):
        paginator.next_page(first_page)
        paginator.next_page(first_page)

        assert paged_transport.requests[-1] == paged_transport.requests[-2]

    def test_into_overrides_target(self, paginator, first_page):
        second = paginator.next_page(first_page, into=Page.of(FullTrack))

        assert isinstance(second.items[0], FullTrack)
        assert second.items[0].id == ""

    def test_failed_continuation_has_error(self):
        transport = FakeTransport([error_response(404, "gone")])
        paginator = Paginator(RequestExecutor(transport=transport))
        page = Page(next=f"{BASE_URL}/x?offset=20", item_type=SavedTrack)

        result = paginator.next_page(page)

        assert isinstance(result, Page)
        assert result.error.status_code == 404
        assert result.item_type is SavedTrack
        assert result.next is None


class TestCursorPages:
    """Test forward-only cursor pages"""

    def test_next(self):
        transport = FakeTransport([json_response(200, {
            'items': [{'track': {'id': 'x'}, 'played_at': '2024-01-01T00:00:00Z'}],
            'next': None,
            'cursors': {'after': '123'},
            'limit': 1,
        })])
        paginator = Paginator(RequestExecutor(transport=transport))
        page = CursorPage(next=f"{BASE_URL}/me/player/recently-played?before=1", item_type=PlayHistory)

        result = paginator.next_page(page)

        assert isinstance(result, CursorPage)
        assert result.items[0].track.id == 'x'
        assert result.cursors.after == '123'

    def test_previous_not_supported(self, paginator):
        with pytest.raises(TypeError):
            paginator.previous_page(CursorPage(next="x"))

    def test_envelope_unwrapped(self):
        transport = FakeTransport([json_response(200, {
            'artists': {'items': [{'id': 'a2', 'name': 'B'}], 'next': None, 'cursors': {}},
        })])
        paginator = Paginator(RequestExecutor(transport=transport))
        page = CursorPage(next=f"{BASE_URL}/me/following?type=artist&after=a1", item_type=FullArtist, envelope='artists')

        result = paginator.next_page(page)

        assert result.items[0].name == 'B'
        assert result.envelope == 'artists'


class TestEnvelopedPages:
    """Test pages nested under a key"""

    def test_new_releases_continuation(self):
        releases = NewAlbumReleases.from_dict({
            'albums': {'items': [{'id': 'a1'}], 'next': f"{BASE_URL}/browse/new-releases?offset=1", 'total': 2},
        })
        transport = FakeTransport([json_response(200, {
            'albums': {'items': [{'id': 'a2'}], 'offset': 1, 'total': 2, 'next': None},
        })])
        paginator = Paginator(RequestExecutor(transport=transport))

        result = paginator.next_page(releases.albums)

        assert isinstance(result.items[0], SimpleAlbum)
        assert result.items[0].id == 'a2'
        assert result.offset == 1

    def test_into_keeps_search_envelope(self):
        results = SearchItem.from_dict({
            'tracks': {'items': [{'id': 'a'}], 'next': f"{BASE_URL}/search?q=abba&type=track&offset=1", 'total': 3},
        })
        transport = FakeTransport([json_response(200, {
            'tracks': {'items': [{'id': 'b', 'popularity': 70}], 'offset': 1, 'total': 3, 'next': None},
        })])
        paginator = Paginator(RequestExecutor(transport=transport))

        result = paginator.next_page(results.tracks, into=Page.of(FullTrack))

        assert result.error is None
        assert result.total == 3
        assert isinstance(result.items[0], FullTrack)
        assert result.items[0].popularity == 70
        assert result.envelope == 'tracks'


class TestIteration:
    """Test iter_pages/iter_items"""

    def test_iter_items_walks_everything(self, paginator, first_page):
        ids = [saved.track.id for saved in paginator.iter_items(first_page)]

        assert ids == [f"t{index}" for index in range(45)]

    def test_iter_pages_count(self, paginator, first_page):
        assert [page.offset for page in paginator.iter_pages(first_page)] == [0, 20, 40]

    def test_iter_raises_on_failed_page(self):
        transport = FakeTransport([error_response(500, "down")])
        paginator = Paginator(RequestExecutor(transport=transport))
        page = Page(items=(1, 2), next=f"{BASE_URL}/x?offset=2")

        iterator = paginator.iter_items(page)
        assert [next(iterator), next(iterator)] == [1, 2]

        with pytest.raises(ServiceError) as exc_info:
            next(iterator)
        assert exc_info.value.status_code == 500


class TestAsyncPagination:
    """Test the asyncio twins"""

    @pytest.mark.asyncio
    async def test_walk_forward_and_back(self, paginator, first_page):
        second = await paginator.next_page_async(first_page)
        back = await paginator.previous_page_async(second)

        assert second.offset == 20
        assert back.offset == 0

    @pytest.mark.asyncio
    async def test_no_more_pages(self, paginator, paged_async_transport, first_page):
        assert await paginator.previous_page_async(first_page) is None
        assert paged_async_transport.requests == []

    @pytest.mark.asyncio
    async def test_iter_items_async(self, paginator, first_page):
        ids = [saved.track.id async for saved in paginator.iter_items_async(first_page)]

        assert len(ids) == 45
        assert ids[-1] == "t44"
