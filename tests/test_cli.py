"""Test the command-line interface"""

import json
from unittest.mock import Mock

import pytest
from click.testing import CliRunner
from spotipy.oauth2 import SpotifyOauthError

from conftest import BASE_URL, error_response, json_response
from spotweb import __version__
from spotweb.api import SpotifyWebAPI
from spotweb.cli import cli
from spotweb.core import TransportError
from spotweb.http import Response


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CliRunner in an empty directory, without touching the root logger"""
    monkeypatch.chdir(tmp_path)
    for name in ('SPOTIFY_ACCESS_TOKEN', 'SPOTIFY_CLIENT_ID', 'SPOTIFY_CLIENT_SECRET', 'SPOTWEB_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr('spotweb.cli.setup_logging', Mock())
    monkeypatch.setattr('spotweb.cli.shutdown_logging', Mock())
    return CliRunner()


@pytest.fixture
def client(transport, monkeypatch):
    """The client the CLI builds, wired to the fake transport"""
    api = SpotifyWebAPI(base_url=BASE_URL, transport=transport)
    monkeypatch.setattr(SpotifyWebAPI, 'from_config', classmethod(lambda cls, config, **kwargs: api))
    return api


def run(runner, *args):
    return runner.invoke(cli, ['--token', 'tok', *args], obj={})


class TestTokenResolution:
    """Test where the access token comes from"""

    def test_token_option(self, runner, client, transport, sample_track_data):
        transport.queue(json_response(200, sample_track_data))

        result = run(runner, 'track', 'track_123')

        assert result.exit_code == 0
        assert transport.requests[0].headers['Authorization'] == 'Bearer tok'

    def test_token_from_environment(self, runner, client, transport, monkeypatch):
        monkeypatch.setenv('SPOTIFY_ACCESS_TOKEN', 'env-token')
        transport.queue(json_response(200, {'id': 'me'}))

        result = runner.invoke(cli, ['me'], obj={})

        assert result.exit_code == 0
        assert client.access_token == 'env-token'

    def test_client_credentials(self, runner, client, transport, monkeypatch):
        monkeypatch.setenv('SPOTIFY_CLIENT_ID', 'cid')
        monkeypatch.setenv('SPOTIFY_CLIENT_SECRET', 'secret')
        credentials_class = Mock()
        credentials_class.return_value.get_access_token.return_value = 'cc-token'
        monkeypatch.setattr('spotweb.cli.SpotifyClientCredentials', credentials_class)
        transport.queue(json_response(200, {'tracks': {'items': [], 'total': 0}}))

        result = runner.invoke(cli, ['search', 'abba'], obj={})

        assert result.exit_code == 0
        credentials_class.assert_called_once_with(client_id='cid', client_secret='secret')
        credentials_class.return_value.get_access_token.assert_called_once_with(as_dict=False)
        assert transport.requests[0].headers['Authorization'] == 'Bearer cc-token'

    def test_client_credentials_failure(self, runner, client, monkeypatch):
        monkeypatch.setenv('SPOTIFY_CLIENT_ID', 'cid')
        monkeypatch.setenv('SPOTIFY_CLIENT_SECRET', 'wrong')
        credentials_class = Mock()
        credentials_class.return_value.get_access_token.side_effect = SpotifyOauthError('invalid_client')
        monkeypatch.setattr('spotweb.cli.SpotifyClientCredentials', credentials_class)

        result = runner.invoke(cli, ['me'], obj={})

        assert result.exit_code == 2
        assert 'client-credentials token' in result.output

    def test_no_token(self, runner, client, transport):
        result = runner.invoke(cli, ['me'], obj={})

        assert result.exit_code == 2
        assert 'No access token' in result.output
        assert transport.requests == []


class TestExitCodes:
    """Test error reporting"""

    def test_service_error(self, runner, client, transport):
        transport.queue(error_response(404, 'No active device found'))

        result = run(runner, 'pause')

        assert result.exit_code == 1
        assert 'Spotify error 404: No active device found' in result.output

    def test_error_shaped_model(self, runner, client, transport):
        transport.queue(error_response(401, 'The access token expired'))

        result = run(runner, 'me')

        assert result.exit_code == 1
        assert 'The access token expired' in result.output

    def test_invalid_config(self, runner, client, tmp_path):
        (tmp_path / 'spotweb.yaml').write_text('retry:\n  retry_times: -1\n', encoding='utf-8')

        result = run(runner, 'me')

        assert result.exit_code == 2
        assert 'Configuration error' in result.output

    def test_network_error(self, runner, client, transport):
        transport.queue(TransportError('connection refused'))

        result = run(runner, 'devices')

        assert result.exit_code == 3
        assert 'Network error: connection refused' in result.output

    def test_malformed_response(self, runner, client, transport):
        transport.queue(Response(status_code=200, body='<html>'))

        result = run(runner, 'devices')

        assert result.exit_code == 4

    def test_volume_out_of_range(self, runner, client, transport):
        result = run(runner, 'volume', '150')

        assert result.exit_code == 2
        assert transport.requests == []

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestCatalogCommands:
    """Test catalog output"""

    def test_track(self, runner, client, transport, sample_track_data):
        transport.queue(json_response(200, sample_track_data))

        result = run(runner, 'track', 'https://open.spotify.com/track/track_123?si=abc')

        assert result.exit_code == 0
        assert transport.requests[0].url == f"{BASE_URL}/tracks/track_123"
        assert 'Test Song - Test Artist (3:30)' in result.output
        assert 'Test Album (2023-01-01)' in result.output

    def test_search_artists(self, runner, client, transport):
        transport.queue(json_response(200, {'artists': {'items': [{'id': 'a1', 'name': 'ABBA'}], 'total': 1}}))

        result = run(runner, 'search', 'abba', '--type', 'artist', '--limit', '3')

        assert result.exit_code == 0
        assert 'ABBA  [a1]' in result.output
        assert 'type=artist' in transport.requests[0].url
        assert 'limit=3' in transport.requests[0].url

    def test_search_no_results(self, runner, client, transport):
        transport.queue(json_response(200, {'tracks': {'items': [], 'total': 0}}))

        result = run(runner, 'search', 'zzzz')

        assert 'No results' in result.output

    def test_album_walks_all_track_pages(self, runner, client, transport):
        transport.queue(
            json_response(200, {
                'id': 'al', 'name': 'Arrival', 'release_date': '1976',
                'artists': [{'name': 'ABBA'}],
                'tracks': {
                    'items': [{'name': 'Knowing Me, Knowing You', 'duration_ms': 180000}],
                    'next': f"{BASE_URL}/albums/al/tracks?offset=1&limit=1",
                },
            }),
            json_response(200, {'items': [{'name': 'Dancing Queen', 'duration_ms': 230000}], 'next': None}),
        )

        result = run(runner, 'album', 'spotify:album:al')

        assert result.exit_code == 0
        assert 'Arrival - ABBA (1976)' in result.output
        assert '  2. Dancing Queen' in result.output
        assert transport.requests[1].url == f"{BASE_URL}/albums/al/tracks?offset=1&limit=1"

    def test_playlist_first_page_only(self, runner, client, transport):
        transport.queue(json_response(200, {
            'items': [{'track': None}, {'track': {'name': 'Song', 'artists': [{'name': 'X'}]}}],
            'total': 5,
            'offset': 0,
            'next': f"{BASE_URL}/playlists/p1/tracks?offset=2",
        }))

        result = run(runner, 'playlist', 'p1')

        assert result.exit_code == 0
        assert '1. <unavailable>' in result.output
        assert '2. Song - X' in result.output
        assert '3 more, use --all' in result.output
        assert len(transport.requests) == 1

    def test_playlist_all(self, runner, client, transport):
        transport.queue(
            json_response(200, {'items': [{'track': {'name': 'One'}}], 'total': 2, 'next': f"{BASE_URL}/p?offset=1"}),
            json_response(200, {'items': [{'track': {'name': 'Two'}}], 'total': 2, 'offset': 1, 'next': None}),
        )

        result = run(runner, 'playlist', 'p1', '--all')

        assert result.exit_code == 0
        assert '2. Two' in result.output
        assert 'use --all' not in result.output


class TestPlayerCommands:
    """Test player commands"""

    def test_play_tracks(self, runner, client, transport):
        transport.queue(json_response(204))

        result = run(runner, 'play', 'abc', 'spotify:track:def', '--device', 'd1')

        assert result.exit_code == 0
        request = transport.requests[0]
        assert request.url == f"{BASE_URL}/me/player/play?device_id=d1"
        assert json.loads(request.body) == {'uris': ['spotify:track:abc', 'spotify:track:def']}

    def test_devices(self, runner, client, transport):
        transport.queue(json_response(200, {'devices': [
            {'id': 'd1', 'name': 'Kitchen', 'type': 'Speaker', 'is_active': True, 'volume_percent': 40},
        ]}))

        result = run(runner, 'devices')

        assert '* Kitchen [Speaker] 40%  d1' in result.output

    def test_now_playing_idle(self, runner, client, transport):
        transport.queue(json_response(204))

        result = run(runner, 'now-playing')

        assert result.exit_code == 0
        assert 'Nothing is playing' in result.output

    def test_save(self, runner, client, transport):
        transport.queue(json_response(200))

        result = run(runner, 'save', 'a', 'spotify:track:b')

        assert result.exit_code == 0
        assert transport.requests[0].url == f"{BASE_URL}/me/tracks?ids=a,b"
        assert 'Saved 2 track(s)' in result.output
