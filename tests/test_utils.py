"""Test utilities and helpers"""

import pytest

from spotweb.utils import extract_spotify_id, format_duration, to_track_uri


class TestHelpers:
    """Test helper functions"""

    @pytest.mark.parametrize('value', [
        'https://open.spotify.com/track/4iV5W9uYEdYUVa79Axb7Rh',
        'https://open.spotify.com/track/4iV5W9uYEdYUVa79Axb7Rh?si=abc123',
        'https://open.spotify.com/intl-de/track/4iV5W9uYEdYUVa79Axb7Rh/',
        'spotify:track:4iV5W9uYEdYUVa79Axb7Rh',
        ' 4iV5W9uYEdYUVa79Axb7Rh ',
    ])
    def test_extract_spotify_id(self, value):
        """Test ID extraction from URLs, URIs and bare IDs"""
        assert extract_spotify_id(value) == '4iV5W9uYEdYUVa79Axb7Rh'

    def test_to_track_uri(self):
        """Test track URI normalization"""
        assert to_track_uri('abc') == 'spotify:track:abc'
        assert to_track_uri('https://open.spotify.com/track/abc?si=x') == 'spotify:track:abc'
        assert to_track_uri('spotify:episode:xyz') == 'spotify:episode:xyz'

    def test_format_duration(self):
        """Test duration formatting"""
        assert format_duration(225000) == "3:45"
        assert format_duration(3750000) == "1:02:30"
        assert format_duration(0) == "0:00"
        assert format_duration(999) == "0:00"
