"""Test response models"""

import pytest

from spotweb.core import ServiceError
from spotweb.models import (
    AlbumType,
    AudioAnalysis,
    CursorPage,
    DeleteTrackUri,
    ErrorResult,
    FeaturedPlaylists,
    FollowedArtists,
    FullAlbum,
    FullPlaylist,
    FullTrack,
    Image,
    ListResponse,
    Page,
    PlaybackContext,
    Recommendations,
    SearchItem,
    SearchType,
    SeveralTracks,
    SimpleTrack,
    TuneableTrack,
)


class TestErrorResult:
    """Test the acknowledgement/failure envelope"""

    @pytest.mark.parametrize('status, ok', [(200, True), (204, True), (299, True), (300, False), (404, False)])
    def test_ok(self, status, ok):
        assert ErrorResult(status).ok is ok
        assert bool(ErrorResult(status)) is ok

    def test_from_regular_error_object(self):
        error = ErrorResult.from_dict({'error': {'status': 404, 'message': 'Not found'}})

        assert error == ErrorResult(404, 'Not found')

    def test_from_auth_error_object(self):
        error = ErrorResult.from_dict({'error': 'invalid_client', 'error_description': 'Invalid client'}, 400)

        assert error == ErrorResult(400, 'Invalid client')

    def test_from_unknown_body(self):
        assert ErrorResult.from_dict(['x'], 500) == ErrorResult(500, '')

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            ErrorResult(200).status_code = 500


class TestBasicModel:
    """Test error state on models"""

    def test_raise_for_error(self):
        track = FullTrack.from_error(ErrorResult(404, 'missing'))

        assert track.has_error()
        with pytest.raises(ServiceError) as exc_info:
            track.raise_for_error()
        assert exc_info.value.status_code == 404
        assert 'missing' in str(exc_info.value)

    def test_raise_for_error_returns_self(self, sample_track_data):
        track = FullTrack.from_dict(sample_track_data)

        assert track.raise_for_error() is track

    def test_response_info_not_compared(self, sample_track_data):
        plain = FullTrack.from_dict(sample_track_data)
        with_info = plain.with_response(200, {'X': '1'})

        assert plain == with_info
        assert with_info.headers == {'X': '1'}


class TestCatalogModels:
    """Test catalog deserialization"""

    def test_full_track(self, sample_track_data):
        track = FullTrack.from_dict(sample_track_data)

        assert track.name == 'Test Song'
        assert track.album.name == 'Test Album'
        assert track.artists[0].id == 'artist_123'
        assert track.duration_ms == 210000
        assert isinstance(track.artists, tuple)

    def test_unknown_and_missing_fields(self):
        track = FullTrack.from_dict({'id': 'x', 'brand_new_field': [1, 2]})

        assert track.id == 'x'
        assert track.name == ''
        assert track.preview_url is None
        assert track.artists == ()

    def test_null_image_url(self):
        image = Image.from_dict({'url': None, 'width': 64, 'height': None})

        assert image.url == ''
        assert image.width == 64

    def test_full_album_nested_page(self):
        album = FullAlbum.from_dict({
            'id': 'al',
            'tracks': {'items': [{'id': 't1', 'name': 'One'}], 'total': 30, 'limit': 1, 'next': 'https://x/next'},
        })

        assert isinstance(album.tracks, Page)
        assert isinstance(album.tracks.items[0], SimpleTrack)
        assert album.tracks.item_type is SimpleTrack
        assert album.tracks.has_next_page()

    def test_batch_with_null_entries(self, sample_track_data):
        several = SeveralTracks.from_dict({'tracks': [sample_track_data, None]})

        assert several.tracks[0].id == 'track_123'
        assert several.tracks[1] is None

    def test_recommendations(self):
        recommendations = Recommendations.from_dict({
            'seeds': [{'id': 'house', 'type': 'GENRE', 'initialPoolSize': 250}],
            'tracks': [{'id': 't1'}],
        })

        assert recommendations.seeds[0].initial_pool_size == 250
        assert recommendations.tracks[0].id == 't1'

    def test_audio_analysis(self):
        analysis = AudioAnalysis.from_dict({
            'bars': [{'start': 0.5, 'duration': 2.1, 'confidence': 0.9}],
            'segments': [{'start': 0, 'pitches': [0.1, 0.2]}],
            'track': {'tempo': 120.0},
        })

        assert analysis.bars[0].duration == 2.1
        assert analysis.segments[0].pitches == (0.1, 0.2)
        assert analysis.track['tempo'] == 120.0


class TestPlaylistModels:
    """Test playlist deserialization"""

    def test_playlist_with_unavailable_track(self):
        playlist = FullPlaylist.from_dict({
            'id': 'p1',
            'name': 'Mix',
            'owner': {'id': 'me', 'display_name': 'Me'},
            'tracks': {'items': [{'track': None, 'is_local': False}], 'total': 1},
        })

        assert playlist.owner.display_name == 'Me'
        assert playlist.tracks.items[0].track is None

    def test_delete_track_uri(self):
        assert DeleteTrackUri('spotify:track:a').to_dict() == {'uri': 'spotify:track:a'}
        assert DeleteTrackUri('spotify:track:a', (1, 4)).to_dict() == {
            'uri': 'spotify:track:a',
            'positions': [1, 4],
        }


class TestEnvelopedModels:
    """Test listings that nest their page under a key"""

    def test_featured_playlists(self):
        featured = FeaturedPlaylists.from_dict({
            'message': 'Hello',
            'playlists': {'items': [{'id': 'p1'}], 'total': 1},
        })

        assert featured.message == 'Hello'
        assert featured.playlists.envelope == 'playlists'
        assert featured.playlists.items[0].id == 'p1'

    def test_followed_artists_cursor_page(self):
        followed = FollowedArtists.from_dict({
            'artists': {'items': [{'id': 'a1', 'name': 'A'}], 'cursors': {'after': 'a1'}, 'next': 'https://x'},
        })

        assert isinstance(followed.artists, CursorPage)
        assert followed.artists.cursors.after == 'a1'
        assert followed.artists.envelope == 'artists'

    def test_search_only_requested_types(self, sample_track_data):
        results = SearchItem.from_dict({'tracks': {'items': [sample_track_data], 'total': 1}})

        assert results.tracks.items[0].name == 'Test Song'
        assert results.tracks.envelope == 'tracks'
        assert results.artists is None


class TestPageShapes:
    """Test the PageOf witness"""

    def test_of_parses_items(self, sample_track_data):
        page = Page.of(FullTrack).from_dict({'items': [sample_track_data], 'total': 1})

        assert isinstance(page.items[0], FullTrack)
        assert list(page) == list(page.items)
        assert len(page) == 1

    def test_of_with_envelope(self):
        page = Page.of(None, 'albums').from_dict({'albums': {'items': [1, 2]}})

        assert page.items == (1, 2)

    def test_from_error_keeps_witness(self):
        page = CursorPage.of(FullTrack, 'artists').from_error(ErrorResult(401, 'expired'))

        assert isinstance(page, CursorPage)
        assert page.item_type is FullTrack
        assert page.envelope == 'artists'
        assert page.error.message == 'expired'

    def test_list_response_requires_array(self):
        assert ListResponse.from_dict([True])[0] is True
        with pytest.raises(TypeError):
            ListResponse.from_dict({'x': 1})


class TestPlayback:
    """Test playback state"""

    def test_episode_item_ignored(self):
        playback = PlaybackContext.from_dict({'is_playing': True, 'item': {'type': 'episode', 'name': 'Pod'}})

        assert playback.is_playing
        assert playback.item is None

    def test_track_item(self, sample_track_data):
        playback = PlaybackContext.from_dict({'item': sample_track_data, 'device': {'id': 'd1', 'name': 'Phone'}})

        assert playback.item.name == 'Test Song'
        assert playback.device.name == 'Phone'


class TestRequestValues:
    """Test request-side value types and enums"""

    def test_tuneable_track_params(self):
        params = TuneableTrack(energy=0.8, tempo=120).to_params('min')

        assert params == {'min_energy': 0.8, 'min_tempo': 120}

    def test_flag_rendering(self):
        assert (SearchType.TRACK | SearchType.ARTIST).api_value == 'artist,track'
        assert SearchType.ALL.api_value == 'artist,album,track,playlist'
        assert AlbumType.ALL.api_value == 'album,single,compilation,appears_on'
        assert AlbumType.APPEARS_ON.api_value == 'appears_on'
