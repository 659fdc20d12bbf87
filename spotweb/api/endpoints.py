"""
Spotify Web API endpoint wrappers.

Every wrapper is defined once, in SpotifyEndpoints, against two primitives:

    _get(url, shape)
    _send(method, url, shape, body=None, content_type=JSON_CONTENT_TYPE)

SpotifyWebAPI implements them on the blocking path, so wrappers return the
result directly. AsyncSpotifyWebAPI implements them on the asyncio path, so
the same wrappers return awaitables:

    track = client.get_track(track_id)               # SpotifyWebAPI
    track = await async_client.get_track(track_id)   # AsyncSpotifyWebAPI

Query strings: None and "" parameters are dropped, lists are comma-joined,
enums render their API value, datetimes become millisecond timestamps, and
everything is URL-encoded.

Return values:
    - Fetch endpoints return the model; on failure the model's `error` field
      is set (call raise_for_error() to turn it into an exception)
    - Mutating endpoints return an ErrorResult (2xx and "" on success)
"""

from datetime import datetime
from enum import Enum, Flag
from typing import Any, Awaitable, Sequence, TypeVar, Union
from urllib.parse import quote, urlencode

from spotweb.http.transport import JSON_CONTENT_TYPE
from spotweb.models.base import CursorPage, ErrorResult, ListResponse, Page, Shape
from spotweb.models.browse import (
    Category,
    CategoryList,
    CategoryPlaylist,
    FeaturedPlaylists,
    FollowedArtists,
    NewAlbumReleases,
    SearchItem,
)
from spotweb.models.enums import AlbumType, FollowType, RepeatState, SearchType, TimeRange
from spotweb.models.music import (
    AudioAnalysis,
    AudioFeatures,
    FullAlbum,
    FullArtist,
    FullTrack,
    PlayHistory,
    RecommendationSeedGenres,
    Recommendations,
    SavedAlbum,
    SavedTrack,
    SeveralAlbums,
    SeveralArtists,
    SeveralAudioFeatures,
    SeveralTracks,
    SimpleAlbum,
    SimpleTrack,
    TuneableTrack,
)
from spotweb.models.player import AvailableDevices, PlaybackContext
from spotweb.models.playlists import (
    DeleteTrackUri,
    FullPlaylist,
    PlaylistTrack,
    SimplePlaylist,
    Snapshot,
)
from spotweb.models.users import PrivateProfile, PublicProfile


T = TypeVar("T")

# A wrapper's result: the value itself on the blocking client, an awaitable
# resolving to it on the asyncio client
Outcome = Union[T, Awaitable[T]]

IMAGE_JPEG_CONTENT_TYPE = "image/jpeg"
FEATURED_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def render_query_value(value: Any) -> str | None:
    """
    Render one query parameter value, or None to drop the parameter.

    Example:
        render_query_value(["a", "b"])                 # "a,b"
        render_query_value(SearchType.TRACK)           # "track"
        render_query_value(True)                       # "true"
        render_query_value("")                         # None
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Enum, Flag)):
        return value.api_value
    if isinstance(value, datetime):
        return str(int(value.timestamp() * 1000))
    if isinstance(value, (list, tuple, set, frozenset)):
        rendered = [render_query_value(item) for item in value]
        joined = ",".join(item for item in rendered if item is not None)
        return joined or None
    text = str(value)
    return text or None


def build_url(base_url: str, path: str, params: dict[str, Any] | None = None) -> str:
    """
    Join base URL, path and rendered query parameters.

    Example:
        build_url("https://api.spotify.com/v1", "albums", {"ids": ["a", "b"], "market": ""})
        # "https://api.spotify.com/v1/albums?ids=a,b"
    """
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    query = []
    for key, value in (params or {}).items():
        rendered = render_query_value(value)
        if rendered is not None:
            query.append((key, rendered))
    if query:
        url = f"{url}?{urlencode(query, safe=',:')}"
    return url


def _as_list(values: str | Sequence[str]) -> list[str]:
    if isinstance(values, str):
        return [values]
    return list(values)


def _segment(value: str) -> str:
    return quote(value, safe="")


class SpotifyEndpoints:
    """
    Endpoint wrappers shared by the blocking and the asyncio client.

    Subclasses provide base_url, _get and _send.
    """

    base_url: str

    def _get(self, url: str, shape: Shape[T]) -> Outcome[T]:
        raise NotImplementedError

    def _send(
        self,
        method: str,
        url: str,
        shape: Shape[T],
        body: Any = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> Outcome[T]:
        raise NotImplementedError

    def _url(self, path: str, **params: Any) -> str:
        return build_url(self.base_url, path, params)

    # =========================================================================
    # Search
    # =========================================================================

    def search_items(
        self,
        q: str,
        type: SearchType,
        limit: int = 20,
        offset: int = 0,
        market: str = "",
    ) -> Outcome[SearchItem]:
        """
        Search the catalog for artists, albums, tracks or playlists.

        Args:
            q: Query keywords and field filters, e.g. "album:arrival artist:abba".
            type: Item types to search across; combine with |.
            limit: Maximum number of items per type (1-50).
            offset: Index of the first result.
            market: ISO 3166-1 alpha-2 country code or "from_token".
        """
        url = self._url("search", q=q, type=type, limit=limit, offset=offset, market=market)
        return self._get(url, SearchItem)

    def search_items_escaped(
        self,
        q: str,
        type: SearchType,
        limit: int = 20,
        offset: int = 0,
        market: str = "",
    ) -> Outcome[SearchItem]:
        """
        Like search_items(), for a query that is already URL-escaped.

        `q` is put into the URL unchanged, e.g. "roadhouse+blues".
        """
        url = self._url("search", type=type, limit=limit, offset=offset, market=market)
        path, _, query = url.partition("?")
        return self._get(f"{path}?q={q}&{query}", SearchItem)

    # =========================================================================
    # Albums
    # =========================================================================

    def get_album(self, id: str, market: str = "") -> Outcome[FullAlbum]:
        return self._get(self._url(f"albums/{_segment(id)}", market=market), FullAlbum)

    def get_album_tracks(
        self,
        id: str,
        limit: int = 20,
        offset: int = 0,
        market: str = "",
    ) -> Outcome[Page[SimpleTrack]]:
        url = self._url(f"albums/{_segment(id)}/tracks", limit=limit, offset=offset, market=market)
        return self._get(url, Page.of(SimpleTrack))

    def get_several_albums(self, ids: Sequence[str], market: str = "") -> Outcome[SeveralAlbums]:
        """Get up to 20 albums in one request."""
        return self._get(self._url("albums", ids=list(ids), market=market), SeveralAlbums)

    # =========================================================================
    # Artists
    # =========================================================================

    def get_artist(self, id: str) -> Outcome[FullArtist]:
        return self._get(self._url(f"artists/{_segment(id)}"), FullArtist)

    def get_related_artists(self, id: str) -> Outcome[SeveralArtists]:
        return self._get(self._url(f"artists/{_segment(id)}/related-artists"), SeveralArtists)

    def get_artists_top_tracks(self, id: str, country: str) -> Outcome[SeveralTracks]:
        """
        Get an artist's top tracks in a country.

        Args:
            id: Spotify artist ID.
            country: ISO 3166-1 alpha-2 country code (required by the API).
        """
        url = self._url(f"artists/{_segment(id)}/top-tracks", country=country)
        return self._get(url, SeveralTracks)

    def get_artists_albums(
        self,
        id: str,
        type: AlbumType = AlbumType.ALL,
        limit: int = 20,
        offset: int = 0,
        market: str = "",
    ) -> Outcome[Page[SimpleAlbum]]:
        url = self._url(
            f"artists/{_segment(id)}/albums",
            include_groups=type,
            limit=limit,
            offset=offset,
            market=market,
        )
        return self._get(url, Page.of(SimpleAlbum))

    def get_several_artists(self, ids: Sequence[str]) -> Outcome[SeveralArtists]:
        return self._get(self._url("artists", ids=list(ids)), SeveralArtists)

    # =========================================================================
    # Browse
    # =========================================================================

    def get_featured_playlists(
        self,
        locale: str = "",
        country: str = "",
        timestamp: datetime | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Outcome[FeaturedPlaylists]:
        """
        Get Spotify's featured playlists.

        Args:
            locale: Language of the message, e.g. "es_MX".
            country: ISO 3166-1 alpha-2 country code.
            timestamp: User's local time, to get playlists for that time of day.
            limit: Maximum number of playlists (1-50).
            offset: Index of the first playlist.
        """
        url = self._url(
            "browse/featured-playlists",
            locale=locale,
            country=country,
            timestamp=timestamp.strftime(FEATURED_TIMESTAMP_FORMAT) if timestamp else None,
            limit=limit,
            offset=offset,
        )
        return self._get(url, FeaturedPlaylists)

    def get_new_album_releases(
        self,
        country: str = "",
        limit: int = 20,
        offset: int = 0,
    ) -> Outcome[NewAlbumReleases]:
        url = self._url("browse/new-releases", country=country, limit=limit, offset=offset)
        return self._get(url, NewAlbumReleases)

    def get_categories(
        self,
        country: str = "",
        locale: str = "",
        limit: int = 20,
        offset: int = 0,
    ) -> Outcome[CategoryList]:
        url = self._url("browse/categories", country=country, locale=locale, limit=limit, offset=offset)
        return self._get(url, CategoryList)

    def get_category(self, category_id: str, country: str = "", locale: str = "") -> Outcome[Category]:
        url = self._url(f"browse/categories/{_segment(category_id)}", country=country, locale=locale)
        return self._get(url, Category)

    def get_category_playlists(
        self,
        category_id: str,
        country: str = "",
        limit: int = 20,
        offset: int = 0,
    ) -> Outcome[CategoryPlaylist]:
        url = self._url(
            f"browse/categories/{_segment(category_id)}/playlists",
            country=country,
            limit=limit,
            offset=offset,
        )
        return self._get(url, CategoryPlaylist)

    def get_recommendations(
        self,
        artist_seed: Sequence[str] | None = None,
        genre_seed: Sequence[str] | None = None,
        track_seed: Sequence[str] | None = None,
        target: TuneableTrack | None = None,
        minimum: TuneableTrack | None = None,
        maximum: TuneableTrack | None = None,
        limit: int = 20,
        market: str = "",
    ) -> Outcome[Recommendations]:
        """
        Get track recommendations from seed artists, genres and tracks.

        Up to 5 seeds in total may be given. target, minimum and maximum add
        "target_*", "min_*" and "max_*" tunable attribute filters.
        """
        params: dict[str, Any] = {
            "limit": limit,
            "market": market,
            "seed_artists": list(artist_seed or ()),
            "seed_genres": list(genre_seed or ()),
            "seed_tracks": list(track_seed or ()),
        }
        for prefix, attributes in (("target", target), ("min", minimum), ("max", maximum)):
            if attributes is not None:
                params.update(attributes.to_params(prefix))
        return self._get(self._url("recommendations", **params), Recommendations)

    def get_recommendation_seeds_genres(self) -> Outcome[RecommendationSeedGenres]:
        return self._get(self._url("recommendations/available-genre-seeds"), RecommendationSeedGenres)

    # =========================================================================
    # Follow
    # =========================================================================

    def get_followed_artists(
        self,
        follow_type: FollowType = FollowType.ARTIST,
        limit: int = 20,
        after: str = "",
    ) -> Outcome[FollowedArtists]:
        """
        Get the current user's followed artists (cursor paged).

        Args:
            follow_type: Only FollowType.ARTIST is supported by the API.
            limit: Maximum number of artists (1-50).
            after: Last artist ID of the previous page.
        """
        url = self._url("me/following", type=follow_type, limit=limit, after=after)
        return self._get(url, FollowedArtists)

    def follow(self, follow_type: FollowType, ids: str | Sequence[str]) -> Outcome[ErrorResult]:
        url = self._url("me/following", type=follow_type, ids=_as_list(ids))
        return self._send("PUT", url, ErrorResult)

    def unfollow(self, follow_type: FollowType, ids: str | Sequence[str]) -> Outcome[ErrorResult]:
        url = self._url("me/following", type=follow_type, ids=_as_list(ids))
        return self._send("DELETE", url, ErrorResult)

    def is_following(
        self,
        follow_type: FollowType,
        ids: str | Sequence[str],
    ) -> Outcome[ListResponse[bool]]:
        """Check whether the current user follows artists or users, in request order."""
        url = self._url("me/following/contains", type=follow_type, ids=_as_list(ids))
        return self._get(url, ListResponse)

    def follow_playlist(self, playlist_id: str, show_public: bool = True) -> Outcome[ErrorResult]:
        """
        Follow a playlist.

        Args:
            playlist_id: Spotify playlist ID.
            show_public: Whether the playlist appears in the user's public
                         playlists.
        """
        url = self._url(f"playlists/{_segment(playlist_id)}/followers")
        return self._send("PUT", url, ErrorResult, {"public": show_public})

    def unfollow_playlist(self, playlist_id: str) -> Outcome[ErrorResult]:
        return self._send("DELETE", self._url(f"playlists/{_segment(playlist_id)}/followers"), ErrorResult)

    def is_following_playlist(
        self,
        playlist_id: str,
        ids: str | Sequence[str],
    ) -> Outcome[ListResponse[bool]]:
        url = self._url(f"playlists/{_segment(playlist_id)}/followers/contains", ids=_as_list(ids))
        return self._get(url, ListResponse)

    # =========================================================================
    # Library
    # =========================================================================

    def save_tracks(self, ids: Sequence[str]) -> Outcome[ErrorResult]:
        return self._send("PUT", self._url("me/tracks", ids=list(ids)), ErrorResult)

    def save_track(self, id: str) -> Outcome[ErrorResult]:
        return self.save_tracks([id])

    def get_saved_tracks(
        self,
        limit: int = 20,
        offset: int = 0,
        market: str = "",
    ) -> Outcome[Page[SavedTrack]]:
        url = self._url("me/tracks", limit=limit, offset=offset, market=market)
        return self._get(url, Page.of(SavedTrack))

    def remove_saved_tracks(self, ids: Sequence[str]) -> Outcome[ErrorResult]:
        return self._send("DELETE", self._url("me/tracks", ids=list(ids)), ErrorResult)

    def check_saved_tracks(self, ids: Sequence[str]) -> Outcome[ListResponse[bool]]:
        return self._get(self._url("me/tracks/contains", ids=list(ids)), ListResponse)

    def save_albums(self, ids: Sequence[str]) -> Outcome[ErrorResult]:
        return self._send("PUT", self._url("me/albums", ids=list(ids)), ErrorResult)

    def save_album(self, id: str) -> Outcome[ErrorResult]:
        return self.save_albums([id])

    def get_saved_albums(
        self,
        limit: int = 20,
        offset: int = 0,
        market: str = "",
    ) -> Outcome[Page[SavedAlbum]]:
        url = self._url("me/albums", limit=limit, offset=offset, market=market)
        return self._get(url, Page.of(SavedAlbum))

    def remove_saved_albums(self, ids: Sequence[str]) -> Outcome[ErrorResult]:
        return self._send("DELETE", self._url("me/albums", ids=list(ids)), ErrorResult)

    def check_saved_albums(self, ids: Sequence[str]) -> Outcome[ListResponse[bool]]:
        return self._get(self._url("me/albums/contains", ids=list(ids)), ListResponse)

    # =========================================================================
    # Personalization
    # =========================================================================

    def get_users_top_tracks(
        self,
        time_range: TimeRange = TimeRange.MEDIUM_TERM,
        limit: int = 20,
        offset: int = 0,
    ) -> Outcome[Page[FullTrack]]:
        url = self._url("me/top/tracks", time_range=time_range, limit=limit, offset=offset)
        return self._get(url, Page.of(FullTrack))

    def get_users_top_artists(
        self,
        time_range: TimeRange = TimeRange.MEDIUM_TERM,
        limit: int = 20,
        offset: int = 0,
    ) -> Outcome[Page[FullArtist]]:
        url = self._url("me/top/artists", time_range=time_range, limit=limit, offset=offset)
        return self._get(url, Page.of(FullArtist))

    def get_users_recently_played_tracks(
        self,
        limit: int = 20,
        after: datetime | int | None = None,
        before: datetime | int | None = None,
    ) -> Outcome[CursorPage[PlayHistory]]:
        """
        Get the current user's recently played tracks.

        Args:
            limit: Maximum number of items (1-50).
            after: Only items played after this moment (datetime or Unix ms).
            before: Only items played before this moment. Mutually exclusive
                    with after.

        Raises:
            ValueError: If both after and before are given.
        """
        if after is not None and before is not None:
            raise ValueError("Only one of 'after' and 'before' may be given")
        url = self._url("me/player/recently-played", limit=limit, after=after, before=before)
        return self._get(url, CursorPage.of(PlayHistory))

    # =========================================================================
    # Playlists
    # =========================================================================

    def get_user_playlists(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0,
    ) -> Outcome[Page[SimplePlaylist]]:
        url = self._url(f"users/{_segment(user_id)}/playlists", limit=limit, offset=offset)
        return self._get(url, Page.of(SimplePlaylist))

    def get_playlist(self, playlist_id: str, fields: str = "", market: str = "") -> Outcome[FullPlaylist]:
        """
        Get a playlist.

        Args:
            playlist_id: Spotify playlist ID.
            fields: Field filter, e.g. "name,tracks.items(track(name))".
                    Filtered-out fields keep their model defaults.
            market: ISO 3166-1 alpha-2 country code or "from_token".
        """
        url = self._url(f"playlists/{_segment(playlist_id)}", fields=fields, market=market)
        return self._get(url, FullPlaylist)

    def get_playlist_tracks(
        self,
        playlist_id: str,
        fields: str = "",
        limit: int = 100,
        offset: int = 0,
        market: str = "",
    ) -> Outcome[Page[PlaylistTrack]]:
        url = self._url(
            f"playlists/{_segment(playlist_id)}/tracks",
            fields=fields,
            limit=limit,
            offset=offset,
            market=market,
        )
        return self._get(url, Page.of(PlaylistTrack))

    def create_playlist(
        self,
        user_id: str,
        name: str,
        public: bool = True,
        collaborative: bool = False,
        description: str = "",
    ) -> Outcome[FullPlaylist]:
        body = {"name": name, "public": public, "collaborative": collaborative}
        if description:
            body["description"] = description
        return self._send("POST", self._url(f"users/{_segment(user_id)}/playlists"), FullPlaylist, body)

    def update_playlist(
        self,
        playlist_id: str,
        name: str | None = None,
        public: bool | None = None,
        collaborative: bool | None = None,
        description: str | None = None,
    ) -> Outcome[ErrorResult]:
        """Change playlist details. Only the arguments that are not None are sent."""
        changes = {
            "name": name,
            "public": public,
            "collaborative": collaborative,
            "description": description,
        }
        body = {key: value for key, value in changes.items() if value is not None}
        return self._send("PUT", self._url(f"playlists/{_segment(playlist_id)}"), ErrorResult, body)

    def upload_playlist_image(self, playlist_id: str, base64_jpeg: str) -> Outcome[ErrorResult]:
        """
        Replace a playlist's cover image.

        Args:
            playlist_id: Spotify playlist ID.
            base64_jpeg: Base64 encoded JPEG, at most 256 KB.
        """
        url = self._url(f"playlists/{_segment(playlist_id)}/images")
        return self._send("PUT", url, ErrorResult, base64_jpeg, IMAGE_JPEG_CONTENT_TYPE)

    def replace_playlist_tracks(self, playlist_id: str, uris: Sequence[str]) -> Outcome[ErrorResult]:
        url = self._url(f"playlists/{_segment(playlist_id)}/tracks")
        return self._send("PUT", url, ErrorResult, {"uris": list(uris)})

    def remove_playlist_tracks(
        self,
        playlist_id: str,
        uris: Sequence[DeleteTrackUri],
    ) -> Outcome[ErrorResult]:
        url = self._url(f"playlists/{_segment(playlist_id)}/tracks")
        return self._send("DELETE", url, ErrorResult, {"tracks": [uri.to_dict() for uri in uris]})

    def remove_playlist_track(self, playlist_id: str, uri: DeleteTrackUri) -> Outcome[ErrorResult]:
        return self.remove_playlist_tracks(playlist_id, [uri])

    def add_playlist_tracks(
        self,
        playlist_id: str,
        uris: Sequence[str],
        position: int | None = None,
    ) -> Outcome[ErrorResult]:
        """
        Add tracks to a playlist.

        Args:
            playlist_id: Spotify playlist ID.
            uris: Spotify track URIs (up to 100).
            position: Zero-based insert position; appended when None.
        """
        body: dict[str, Any] = {"uris": list(uris)}
        if position is not None:
            body["position"] = position
        return self._send("POST", self._url(f"playlists/{_segment(playlist_id)}/tracks"), ErrorResult, body)

    def add_playlist_track(
        self,
        playlist_id: str,
        uri: str,
        position: int | None = None,
    ) -> Outcome[ErrorResult]:
        return self.add_playlist_tracks(playlist_id, [uri], position)

    def reorder_playlist(
        self,
        playlist_id: str,
        range_start: int,
        insert_before: int,
        range_length: int = 1,
        snapshot_id: str = "",
    ) -> Outcome[Snapshot]:
        """Move range_length tracks starting at range_start before insert_before."""
        body: dict[str, Any] = {
            "range_start": range_start,
            "insert_before": insert_before,
            "range_length": range_length,
        }
        if snapshot_id:
            body["snapshot_id"] = snapshot_id
        return self._send("PUT", self._url(f"playlists/{_segment(playlist_id)}/tracks"), Snapshot, body)

    # =========================================================================
    # Profiles
    # =========================================================================

    def get_private_profile(self) -> Outcome[PrivateProfile]:
        return self._get(self._url("me"), PrivateProfile)

    def get_public_profile(self, user_id: str) -> Outcome[PublicProfile]:
        return self._get(self._url(f"users/{_segment(user_id)}"), PublicProfile)

    # =========================================================================
    # Tracks
    # =========================================================================

    def get_several_tracks(self, ids: Sequence[str], market: str = "") -> Outcome[SeveralTracks]:
        return self._get(self._url("tracks", ids=list(ids), market=market), SeveralTracks)

    def get_track(self, id: str, market: str = "") -> Outcome[FullTrack]:
        return self._get(self._url(f"tracks/{_segment(id)}", market=market), FullTrack)

    def get_audio_analysis(self, id: str) -> Outcome[AudioAnalysis]:
        return self._get(self._url(f"audio-analysis/{_segment(id)}"), AudioAnalysis)

    def get_audio_features(self, id: str) -> Outcome[AudioFeatures]:
        return self._get(self._url(f"audio-features/{_segment(id)}"), AudioFeatures)

    def get_several_audio_features(self, ids: Sequence[str]) -> Outcome[SeveralAudioFeatures]:
        return self._get(self._url("audio-features", ids=list(ids)), SeveralAudioFeatures)

    # =========================================================================
    # Player
    # =========================================================================

    def get_devices(self) -> Outcome[AvailableDevices]:
        return self._get(self._url("me/player/devices"), AvailableDevices)

    def get_playback(self, market: str = "") -> Outcome[PlaybackContext]:
        """Get the playback state; an empty PlaybackContext (status 204) when idle."""
        return self._get(self._url("me/player", market=market), PlaybackContext)

    def get_playing_track(self, market: str = "") -> Outcome[PlaybackContext]:
        return self._get(self._url("me/player/currently-playing", market=market), PlaybackContext)

    def transfer_playback(self, device_ids: str | Sequence[str], play: bool = False) -> Outcome[ErrorResult]:
        """
        Move playback to another device.

        Args:
            device_ids: Target device ID. The API accepts exactly one.
            play: Start playing on the new device; otherwise keep the
                  current state.
        """
        body = {"device_ids": _as_list(device_ids), "play": play}
        return self._send("PUT", self._url("me/player"), ErrorResult, body)

    def resume_playback(
        self,
        device_id: str = "",
        context_uri: str = "",
        uris: Sequence[str] | None = None,
        offset: int | str | None = None,
        position_ms: int = 0,
    ) -> Outcome[ErrorResult]:
        """
        Start a new context or resume playback.

        Args:
            device_id: Target device; the active device when empty.
            context_uri: Album, artist or playlist URI to play.
            uris: Track URIs to play instead of a context.
            offset: Where to start in the context: a zero-based position
                    (int) or a track URI (str).
            position_ms: Position to seek the first track to.
        """
        body: dict[str, Any] = {}
        if context_uri:
            body["context_uri"] = context_uri
        if uris:
            body["uris"] = list(uris)
        if isinstance(offset, int):
            body["offset"] = {"position": offset}
        elif offset:
            body["offset"] = {"uri": offset}
        if position_ms:
            body["position_ms"] = position_ms
        url = self._url("me/player/play", device_id=device_id)
        return self._send("PUT", url, ErrorResult, body)

    def pause_playback(self, device_id: str = "") -> Outcome[ErrorResult]:
        return self._send("PUT", self._url("me/player/pause", device_id=device_id), ErrorResult)

    def skip_playback_to_next(self, device_id: str = "") -> Outcome[ErrorResult]:
        return self._send("POST", self._url("me/player/next", device_id=device_id), ErrorResult)

    def skip_playback_to_previous(self, device_id: str = "") -> Outcome[ErrorResult]:
        """Skip to the previous track. This always skips, even mid-track."""
        return self._send("POST", self._url("me/player/previous", device_id=device_id), ErrorResult)

    def seek_playback(self, position_ms: int, device_id: str = "") -> Outcome[ErrorResult]:
        url = self._url("me/player/seek", position_ms=position_ms, device_id=device_id)
        return self._send("PUT", url, ErrorResult)

    def set_repeat_mode(self, state: RepeatState, device_id: str = "") -> Outcome[ErrorResult]:
        url = self._url("me/player/repeat", state=state, device_id=device_id)
        return self._send("PUT", url, ErrorResult)

    def set_volume(self, volume_percent: int, device_id: str = "") -> Outcome[ErrorResult]:
        url = self._url("me/player/volume", volume_percent=volume_percent, device_id=device_id)
        return self._send("PUT", url, ErrorResult)

    def set_shuffle(self, shuffle: bool, device_id: str = "") -> Outcome[ErrorResult]:
        url = self._url("me/player/shuffle", state=shuffle, device_id=device_id)
        return self._send("PUT", url, ErrorResult)

    def add_to_queue(self, uri: str, device_id: str = "") -> Outcome[ErrorResult]:
        url = self._url("me/player/queue", uri=uri, device_id=device_id)
        return self._send("POST", url, ErrorResult)
