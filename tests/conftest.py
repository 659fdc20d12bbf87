"""Test configuration and fixtures"""

import json
from urllib.parse import parse_qs, urlsplit

import pytest

from spotweb.http import Credentials, RequestExecutor, Response, RetryConfig


BASE_URL = "https://api.test/v1"
PAGED_URL = f"{BASE_URL}/me/tracks"
PAGED_TOTAL = 45


def json_response(status_code=200, body=None, headers=None):
    """Build a Response with a JSON body"""
    return Response(
        status_code=status_code,
        body=json.dumps(body) if body is not None else "",
        headers=headers or {},
    )


def error_response(status_code, message="", headers=None):
    """Build a Response carrying a Spotify error object"""
    return json_response(
        status_code,
        {'error': {'status': status_code, 'message': message}},
        headers,
    )


class FakeTransport:
    """Blocking transport replaying queued responses and recording requests"""

    def __init__(self, responses=None, handler=None):
        self.responses = list(responses or [])
        self.handler = handler
        self.requests = []
        self.closed = False

    def queue(self, *responses):
        self.responses.extend(responses)

    def _respond(self, request):
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def send(self, request):
        return self._respond(request)

    def close(self):
        self.closed = True


class FakeAsyncTransport(FakeTransport):
    """Asyncio twin of FakeTransport"""

    async def send(self, request):
        return self._respond(request)

    async def close(self):
        self.closed = True


class SleepRecorder:
    """Records back-off waits instead of sleeping"""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


class AsyncSleepRecorder(SleepRecorder):

    async def __call__(self, seconds):
        self.calls.append(seconds)


def paging_handler(request):
    """
    Serve an offset-paged collection of PAGED_TOTAL track ids.

    next/previous links are derived from offset, limit and total the way the
    service does it.
    """
    query = parse_qs(urlsplit(request.url).query)
    offset = int(query.get('offset', ['0'])[0])
    limit = int(query.get('limit', ['20'])[0])

    def link(new_offset):
        return f"{PAGED_URL}?offset={new_offset}&limit={limit}"

    items = [
        {'added_at': '2024-01-01T00:00:00Z', 'track': {'id': f"t{index}", 'name': f"Track {index}"}}
        for index in range(offset, min(offset + limit, PAGED_TOTAL))
    ]
    body = {
        'href': link(offset),
        'items': items,
        'limit': limit,
        'offset': offset,
        'total': PAGED_TOTAL,
        'next': link(offset + limit) if offset + limit < PAGED_TOTAL else None,
        'previous': link(max(offset - limit, 0)) if offset > 0 else None,
    }
    return json_response(200, body)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def async_transport():
    return FakeAsyncTransport()


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def async_sleeps():
    return AsyncSleepRecorder()


@pytest.fixture
def credentials():
    return Credentials(access_token="test-token")


@pytest.fixture
def retry():
    return RetryConfig(enabled=True, retry_after_ms=50, retry_times=3)


@pytest.fixture
def executor(transport, async_transport, credentials, retry, sleeps, async_sleeps):
    return RequestExecutor(
        transport=transport,
        async_transport=async_transport,
        credentials=credentials,
        retry=retry,
        sleep=sleeps,
        async_sleep=async_sleeps,
    )


@pytest.fixture
def sample_track_data():
    """Sample full track object"""
    return {
        'id': 'track_123',
        'name': 'Test Song',
        'uri': 'spotify:track:track_123',
        'artists': [{'id': 'artist_123', 'name': 'Test Artist'}],
        'album': {
            'id': 'album_123',
            'name': 'Test Album',
            'album_type': 'album',
            'total_tracks': 12,
            'release_date': '2023-01-01',
            'release_date_precision': 'day',
            'artists': [{'id': 'artist_123', 'name': 'Test Artist'}],
        },
        'duration_ms': 210000,
        'explicit': False,
        'popularity': 75,
        'track_number': 3,
        'some_future_field': {'nested': True},
    }
