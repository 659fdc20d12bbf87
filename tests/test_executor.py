"""Test the request executor on the blocking path"""

import json
import logging

import pytest

from conftest import BASE_URL, error_response, json_response
from spotweb.core import MalformedResponseError, TransportError
from spotweb.http import Credentials, RequestExecutor, Response, encode_body
from spotweb.models import ErrorResult, FullTrack, ListResponse, Page, PlaybackContext


TRACK_URL = f"{BASE_URL}/tracks/track_123"


class TestHeaders:
    """Test authentication header injection"""

    def test_authorization_header(self, executor, transport, sample_track_data):
        transport.queue(json_response(200, sample_track_data))

        executor.execute("GET", TRACK_URL, FullTrack)

        assert transport.requests[0].headers['Authorization'] == "Bearer test-token"

    def test_no_authorization_without_auth(self, executor, transport, sample_track_data):
        executor.credentials.use_auth = False
        transport.queue(json_response(200, sample_track_data))

        executor.execute("GET", TRACK_URL, FullTrack)

        assert 'Authorization' not in transport.requests[0].headers

    def test_credentials_mutation_applies_to_next_request(self, executor, transport):
        transport.queue(json_response(200, {}), json_response(200, {}))

        executor.execute("GET", TRACK_URL, FullTrack)
        executor.credentials.access_token = "rotated"
        executor.credentials.token_type = "Custom"
        executor.execute("GET", TRACK_URL, FullTrack)

        assert transport.requests[0].headers['Authorization'] == "Bearer test-token"
        assert transport.requests[1].headers['Authorization'] == "Custom rotated"

    def test_content_type_only_with_body(self, executor, transport):
        transport.queue(json_response(204), json_response(204))

        executor.execute("PUT", f"{BASE_URL}/me/player/pause", ErrorResult)
        executor.execute("PUT", f"{BASE_URL}/me/player", ErrorResult, '{"play": false}')

        assert 'Content-Type' not in transport.requests[0].headers
        assert transport.requests[1].headers['Content-Type'] == "application/json"
        assert transport.requests[1].body == '{"play": false}'


class TestSuccess:
    """Test deserialization of successful responses"""

    def test_model_with_response_info(self, executor, transport, sample_track_data):
        transport.queue(json_response(200, sample_track_data, {'X-Test': '1'}))

        track = executor.execute("GET", TRACK_URL, FullTrack)

        assert track.name == "Test Song"
        assert track.artists[0].name == "Test Artist"
        assert track.status_code == 200
        assert track.headers['X-Test'] == '1'
        assert not track.has_error()

    def test_empty_body_error_result(self, executor, transport):
        transport.queue(Response(status_code=204))

        result = executor.execute("PUT", f"{BASE_URL}/me/player/pause", ErrorResult)

        assert result == ErrorResult(204, "")
        assert result.ok

    def test_error_result_ignores_body(self, executor, transport):
        transport.queue(json_response(200, {'snapshot_id': 'abc'}))

        result = executor.execute("POST", f"{BASE_URL}/playlists/p/tracks", ErrorResult, "{}")

        assert result == ErrorResult(200, "")

    def test_empty_body_model(self, executor, transport):
        transport.queue(Response(status_code=204))

        playback = executor.execute("GET", f"{BASE_URL}/me/player", PlaybackContext)

        assert playback.item is None
        assert playback.status_code == 204
        assert not playback.has_error()

    def test_list_response(self, executor, transport):
        transport.queue(json_response(200, [True, False]))

        result = executor.execute("GET", f"{BASE_URL}/me/tracks/contains", ListResponse)

        assert list(result) == [True, False]

    def test_invalid_json_raises_malformed(self, executor, transport):
        transport.queue(Response(status_code=200, body="<html>oops</html>"))

        with pytest.raises(MalformedResponseError) as exc_info:
            executor.execute("GET", TRACK_URL, FullTrack)

        assert exc_info.value.status_code == 200
        assert exc_info.value.body.startswith("<html>")

    def test_wrong_shape_raises_malformed(self, executor, transport):
        transport.queue(json_response(200, {'is_following': True}))

        with pytest.raises(MalformedResponseError):
            executor.execute("GET", f"{BASE_URL}/me/tracks/contains", ListResponse)

    def test_missing_envelope_raises_malformed(self, executor, transport):
        transport.queue(json_response(200, {'items': []}))

        with pytest.raises(MalformedResponseError):
            executor.execute("GET", f"{BASE_URL}/browse/new-releases", Page.of(FullTrack, "albums"))


class TestFailure:
    """Test error-to-result mapping"""

    def test_error_result_shape(self, executor, transport):
        transport.queue(error_response(404, "No active device found"))

        result = executor.execute("PUT", f"{BASE_URL}/me/player/pause", ErrorResult)

        assert result == ErrorResult(404, "No active device found")
        assert not result.ok

    def test_model_shape_gets_error(self, executor, transport):
        transport.queue(error_response(400, "invalid id"))

        track = executor.execute("GET", TRACK_URL, FullTrack)

        assert track.has_error()
        assert track.error == ErrorResult(400, "invalid id")
        assert track.status_code == 400
        assert track.name == ""

    def test_oauth_error_body(self, executor, transport):
        transport.queue(json_response(401, {'error': 'invalid_token', 'error_description': 'Token expired'}))

        result = executor.execute("GET", TRACK_URL, ErrorResult)

        assert result == ErrorResult(401, "Token expired")

    def test_plain_text_body_becomes_message(self, executor, transport):
        transport.queue(Response(status_code=502, body="Bad Gateway"))
        executor.retry.enabled = False

        result = executor.execute("GET", TRACK_URL, ErrorResult)

        assert result == ErrorResult(502, "Bad Gateway")

    @pytest.mark.parametrize('body, message', [
        ('"Service unavailable"', "Service unavailable"),
        ('["bad request"]', '["bad request"]'),
        ('42', '42'),
    ])
    def test_json_body_without_error_object(self, executor, transport, body, message):
        transport.queue(Response(status_code=400, body=body))

        result = executor.execute("GET", TRACK_URL, ErrorResult)

        assert result == ErrorResult(400, message)

    def test_status_comes_from_response(self, executor, transport):
        transport.queue(json_response(403, {'error': {'status': 401, 'message': 'nope'}}))

        result = executor.execute("GET", TRACK_URL, ErrorResult)

        assert result.status_code == 403

    def test_failure_is_logged(self, executor, transport, caplog):
        transport.queue(error_response(404, "missing"))

        with caplog.at_level(logging.WARNING, logger="spotweb"):
            executor.execute("GET", TRACK_URL, FullTrack)

        record = next(r for r in caplog.records if hasattr(r, 'failed_request_status'))
        assert record.failed_request_status == 404
        assert record.failed_request_url == TRACK_URL
        assert record.failed_request_attempts == 1


class TestRetry:
    """Test the retry loop"""

    def test_retry_then_success(self, executor, transport, sleeps, sample_track_data):
        transport.queue(error_response(503), error_response(502), json_response(200, sample_track_data))

        track = executor.execute("GET", TRACK_URL, FullTrack)

        assert track.name == "Test Song"
        assert len(transport.requests) == 3
        assert sleeps.calls == [0.05, 0.05]

    @pytest.mark.parametrize('status', [500, 502, 503, 504])
    def test_at_most_n_additional_attempts(self, executor, transport, status):
        executor.retry.retry_times = 3
        transport.queue(*[error_response(status, "down")] * 10)

        result = executor.execute("GET", TRACK_URL, ErrorResult)

        assert len(transport.requests) == 4
        assert result == ErrorResult(status, "down")

    @pytest.mark.parametrize('status', [400, 401, 403, 404, 429])
    def test_non_retryable_single_attempt(self, executor, transport, sleeps, status):
        executor.retry.retry_times = 5
        transport.queue(error_response(status))

        result = executor.execute("GET", TRACK_URL, ErrorResult)

        assert result.status_code == status
        assert len(transport.requests) == 1
        assert sleeps.calls == []

    def test_disabled_single_attempt(self, executor, transport):
        executor.retry.enabled = False
        transport.queue(error_response(503))

        executor.execute("GET", TRACK_URL, ErrorResult)

        assert len(transport.requests) == 1

    def test_retry_resends_identical_request(self, executor, transport):
        transport.queue(error_response(500), json_response(200, {'snapshot_id': 's'}))

        executor.execute("PUT", f"{BASE_URL}/playlists/p/tracks", ErrorResult, '{"range_start": 1}')

        first, second = transport.requests
        assert first == second

    def test_free_429_does_not_use_budget(self, executor, transport):
        executor.retry.retry_times = 1
        executor.retry.retry_error_codes = frozenset({429, 500})
        transport.queue(
            error_response(429), error_response(429), error_response(429),
            error_response(500), error_response(500),
        )

        result = executor.execute("GET", TRACK_URL, ErrorResult)

        # 3 free 429 retries, then one charged 500 retry, then the budget is gone
        assert len(transport.requests) == 5
        assert result.status_code == 500

    def test_consuming_429_uses_budget(self, executor, transport):
        executor.retry.retry_times = 1
        executor.retry.retry_error_codes = frozenset({429, 500})
        executor.retry.too_many_requests_consumes_a_retry = True
        transport.queue(error_response(429), error_response(429), error_response(500))

        result = executor.execute("GET", TRACK_URL, ErrorResult)

        assert len(transport.requests) == 2
        assert result.status_code == 429

    def test_retry_after_header(self, executor, transport, sleeps):
        transport.queue(error_response(503, headers={'Retry-After': '2'}), json_response(204))

        executor.execute("PUT", f"{BASE_URL}/me/player/pause", ErrorResult)

        assert sleeps.calls == [2.0]

    def test_no_retry_after_uses_configured_delay(self, executor, transport, sleeps):
        executor.retry.retry_after_ms = 120
        transport.queue(error_response(503), json_response(204))

        executor.execute("PUT", f"{BASE_URL}/me/player/pause", ErrorResult)

        assert sleeps.calls == [0.12]

    def test_config_snapshot_per_request(self, executor, transport):
        executor.retry.retry_times = 1
        calls = []

        def handler(request):
            calls.append(request)
            # Raising the budget mid-request must not extend this request
            executor.retry.retry_times = 10
            return error_response(500)

        transport.handler = handler

        executor.execute("GET", TRACK_URL, ErrorResult)

        assert len(calls) == 2


class TestTransportFailure:
    """Test network failures"""

    def test_transport_error_propagates_without_retry(self, executor, transport, sleeps):
        transport.queue(TransportError("connection refused", method="GET", url=TRACK_URL))

        with pytest.raises(TransportError):
            executor.execute("GET", TRACK_URL, FullTrack)

        assert len(transport.requests) == 1
        assert sleeps.calls == []

    def test_transport_error_after_retry(self, executor, transport):
        transport.queue(error_response(503), TransportError("reset"))

        with pytest.raises(TransportError):
            executor.execute("GET", TRACK_URL, FullTrack)


class TestGenericEntryPoints:
    """Test download/upload"""

    def test_download(self, executor, transport, sample_track_data):
        transport.queue(json_response(200, sample_track_data))

        track = executor.download(TRACK_URL, FullTrack)

        assert track.id == "track_123"
        assert transport.requests[0].method == "GET"

    def test_upload_encodes_dict(self, executor, transport):
        transport.queue(json_response(201))

        result = executor.upload(f"{BASE_URL}/users/u/playlists", {'name': 'Mix'}, ErrorResult)

        assert result.status_code == 201
        assert json.loads(transport.requests[0].body) == {'name': 'Mix'}
        assert transport.requests[0].method == "POST"

    def test_encode_body(self):
        assert encode_body(None) is None
        assert encode_body('raw') == 'raw'
        assert json.loads(encode_body([1, 2])) == [1, 2]
        assert json.loads(encode_body(Credentials(access_token='x'))) == {
            'token_type': 'Bearer', 'access_token': 'x', 'use_auth': True,
        }


class TestLifecycle:
    """Test transport ownership"""

    def test_lazy_default_transport(self):
        executor = RequestExecutor()

        assert executor._transport is None
        assert executor.transport is executor.transport
        executor.close()

    def test_injected_transport_not_closed(self, executor, transport):
        executor.close()

        assert not transport.closed
