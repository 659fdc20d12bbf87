"""
Catalog models: artists, albums, tracks, audio features and analysis,
recommendations and play history.

"Simple" objects are the abbreviated forms embedded in other objects, "Full"
objects are what the single-item endpoints return.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from spotweb.models.base import (
    BasicModel,
    Followers,
    Image,
    Page,
    parse_images,
    parse_items,
    parse_model,
)


@dataclass(frozen=True)
class SimpleArtist(BasicModel):
    id: str = ""
    name: str = ""
    uri: str = ""
    href: str = ""
    type: str = "artist"
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimpleArtist":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            type=data.get("type") or "artist",
            external_urls=data.get("external_urls") or {},
        )


@dataclass(frozen=True)
class FullArtist(BasicModel):
    id: str = ""
    name: str = ""
    uri: str = ""
    href: str = ""
    type: str = "artist"
    external_urls: Mapping[str, str] = field(default_factory=dict)
    genres: tuple[str, ...] = ()
    images: tuple[Image, ...] = ()
    popularity: int = 0
    followers: Followers = field(default_factory=Followers)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FullArtist":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            type=data.get("type") or "artist",
            external_urls=data.get("external_urls") or {},
            genres=tuple(data.get("genres") or ()),
            images=parse_images(data.get("images")),
            popularity=data.get("popularity") or 0,
            followers=Followers.from_dict(data.get("followers") or {}),
        )


@dataclass(frozen=True)
class SimpleAlbum(BasicModel):
    id: str = ""
    name: str = ""
    uri: str = ""
    href: str = ""
    album_type: str = ""
    album_group: str = ""
    artists: tuple[SimpleArtist, ...] = ()
    available_markets: tuple[str, ...] = ()
    images: tuple[Image, ...] = ()
    release_date: str = ""
    release_date_precision: str = ""
    total_tracks: int = 0
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimpleAlbum":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            album_type=data.get("album_type") or "",
            album_group=data.get("album_group") or "",
            artists=parse_items(data.get("artists"), SimpleArtist),
            available_markets=tuple(data.get("available_markets") or ()),
            images=parse_images(data.get("images")),
            release_date=data.get("release_date") or "",
            release_date_precision=data.get("release_date_precision") or "",
            total_tracks=data.get("total_tracks") or 0,
            external_urls=data.get("external_urls") or {},
        )


@dataclass(frozen=True)
class SimpleTrack(BasicModel):
    """
    A track as embedded in album track listings.

    Attributes:
        duration_ms: Track length in milliseconds.
        is_playable: Set when the request was made with a market (track
                     relinking); None otherwise.
        preview_url: 30 second preview, None when unavailable.
    """
    id: str = ""
    name: str = ""
    uri: str = ""
    href: str = ""
    artists: tuple[SimpleArtist, ...] = ()
    available_markets: tuple[str, ...] = ()
    disc_number: int = 0
    track_number: int = 0
    duration_ms: int = 0
    explicit: bool = False
    is_playable: bool | None = None
    preview_url: str | None = None
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimpleTrack":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            artists=parse_items(data.get("artists"), SimpleArtist),
            available_markets=tuple(data.get("available_markets") or ()),
            disc_number=data.get("disc_number") or 0,
            track_number=data.get("track_number") or 0,
            duration_ms=data.get("duration_ms") or 0,
            explicit=bool(data.get("explicit")),
            is_playable=data.get("is_playable"),
            preview_url=data.get("preview_url"),
            external_urls=data.get("external_urls") or {},
        )


@dataclass(frozen=True)
class FullTrack(BasicModel):
    id: str = ""
    name: str = ""
    uri: str = ""
    href: str = ""
    album: SimpleAlbum = field(default_factory=SimpleAlbum)
    artists: tuple[SimpleArtist, ...] = ()
    available_markets: tuple[str, ...] = ()
    disc_number: int = 0
    track_number: int = 0
    duration_ms: int = 0
    explicit: bool = False
    is_playable: bool | None = None
    is_local: bool = False
    popularity: int = 0
    preview_url: str | None = None
    external_ids: Mapping[str, str] = field(default_factory=dict)
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FullTrack":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            album=SimpleAlbum.from_dict(data.get("album") or {}),
            artists=parse_items(data.get("artists"), SimpleArtist),
            available_markets=tuple(data.get("available_markets") or ()),
            disc_number=data.get("disc_number") or 0,
            track_number=data.get("track_number") or 0,
            duration_ms=data.get("duration_ms") or 0,
            explicit=bool(data.get("explicit")),
            is_playable=data.get("is_playable"),
            is_local=bool(data.get("is_local")),
            popularity=data.get("popularity") or 0,
            preview_url=data.get("preview_url"),
            external_ids=data.get("external_ids") or {},
            external_urls=data.get("external_urls") or {},
        )


@dataclass(frozen=True)
class FullAlbum(BasicModel):
    """
    A complete album, including the first page of its tracks.

    Use client.next_page(album.tracks) to continue the track listing.
    """
    id: str = ""
    name: str = ""
    uri: str = ""
    href: str = ""
    album_type: str = ""
    artists: tuple[SimpleArtist, ...] = ()
    available_markets: tuple[str, ...] = ()
    genres: tuple[str, ...] = ()
    images: tuple[Image, ...] = ()
    label: str = ""
    popularity: int = 0
    release_date: str = ""
    release_date_precision: str = ""
    total_tracks: int = 0
    tracks: Page[SimpleTrack] = field(default_factory=lambda: Page(item_type=SimpleTrack))
    external_ids: Mapping[str, str] = field(default_factory=dict)
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FullAlbum":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            album_type=data.get("album_type") or "",
            artists=parse_items(data.get("artists"), SimpleArtist),
            available_markets=tuple(data.get("available_markets") or ()),
            genres=tuple(data.get("genres") or ()),
            images=parse_images(data.get("images")),
            label=data.get("label") or "",
            popularity=data.get("popularity") or 0,
            release_date=data.get("release_date") or "",
            release_date_precision=data.get("release_date_precision") or "",
            total_tracks=data.get("total_tracks") or 0,
            tracks=Page.from_dict(data.get("tracks") or {}, SimpleTrack),
            external_ids=data.get("external_ids") or {},
            external_urls=data.get("external_urls") or {},
        )


@dataclass(frozen=True)
class SavedTrack(BasicModel):
    added_at: str = ""
    track: FullTrack = field(default_factory=FullTrack)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedTrack":
        return cls(
            added_at=data.get("added_at") or "",
            track=FullTrack.from_dict(data.get("track") or {}),
        )


@dataclass(frozen=True)
class SavedAlbum(BasicModel):
    added_at: str = ""
    album: FullAlbum = field(default_factory=FullAlbum)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedAlbum":
        return cls(
            added_at=data.get("added_at") or "",
            album=FullAlbum.from_dict(data.get("album") or {}),
        )


@dataclass(frozen=True)
class SeveralTracks(BasicModel):
    """Batch lookup result. Unknown ids come back as None entries."""
    tracks: tuple[FullTrack | None, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeveralTracks":
        return cls(tracks=parse_items(data.get("tracks"), FullTrack))


@dataclass(frozen=True)
class SeveralArtists(BasicModel):
    artists: tuple[FullArtist | None, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeveralArtists":
        return cls(artists=parse_items(data.get("artists"), FullArtist))


@dataclass(frozen=True)
class SeveralAlbums(BasicModel):
    albums: tuple[FullAlbum | None, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeveralAlbums":
        return cls(albums=parse_items(data.get("albums"), FullAlbum))


@dataclass(frozen=True)
class AudioFeatures(BasicModel):
    id: str = ""
    uri: str = ""
    track_href: str = ""
    analysis_url: str = ""
    acousticness: float = 0.0
    danceability: float = 0.0
    energy: float = 0.0
    instrumentalness: float = 0.0
    liveness: float = 0.0
    loudness: float = 0.0
    speechiness: float = 0.0
    valence: float = 0.0
    tempo: float = 0.0
    key: int = 0
    mode: int = 0
    time_signature: int = 0
    duration_ms: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AudioFeatures":
        return cls(
            id=data.get("id") or "",
            uri=data.get("uri") or "",
            track_href=data.get("track_href") or "",
            analysis_url=data.get("analysis_url") or "",
            acousticness=float(data.get("acousticness") or 0.0),
            danceability=float(data.get("danceability") or 0.0),
            energy=float(data.get("energy") or 0.0),
            instrumentalness=float(data.get("instrumentalness") or 0.0),
            liveness=float(data.get("liveness") or 0.0),
            loudness=float(data.get("loudness") or 0.0),
            speechiness=float(data.get("speechiness") or 0.0),
            valence=float(data.get("valence") or 0.0),
            tempo=float(data.get("tempo") or 0.0),
            key=data.get("key") or 0,
            mode=data.get("mode") or 0,
            time_signature=data.get("time_signature") or 0,
            duration_ms=data.get("duration_ms") or 0,
        )


@dataclass(frozen=True)
class SeveralAudioFeatures(BasicModel):
    audio_features: tuple[AudioFeatures | None, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeveralAudioFeatures":
        return cls(audio_features=parse_items(data.get("audio_features"), AudioFeatures))


@dataclass(frozen=True)
class TimeInterval(BasicModel):
    start: float = 0.0
    duration: float = 0.0
    confidence: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeInterval":
        return cls(
            start=float(data.get("start") or 0.0),
            duration=float(data.get("duration") or 0.0),
            confidence=float(data.get("confidence") or 0.0),
        )


@dataclass(frozen=True)
class AnalysisSection(BasicModel):
    start: float = 0.0
    duration: float = 0.0
    confidence: float = 0.0
    loudness: float = 0.0
    tempo: float = 0.0
    key: int = 0
    mode: int = 0
    time_signature: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisSection":
        return cls(
            start=float(data.get("start") or 0.0),
            duration=float(data.get("duration") or 0.0),
            confidence=float(data.get("confidence") or 0.0),
            loudness=float(data.get("loudness") or 0.0),
            tempo=float(data.get("tempo") or 0.0),
            key=data.get("key") or 0,
            mode=data.get("mode") or 0,
            time_signature=data.get("time_signature") or 0,
        )


@dataclass(frozen=True)
class AnalysisSegment(BasicModel):
    start: float = 0.0
    duration: float = 0.0
    confidence: float = 0.0
    loudness_start: float = 0.0
    loudness_max: float = 0.0
    loudness_max_time: float = 0.0
    pitches: tuple[float, ...] = ()
    timbre: tuple[float, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisSegment":
        return cls(
            start=float(data.get("start") or 0.0),
            duration=float(data.get("duration") or 0.0),
            confidence=float(data.get("confidence") or 0.0),
            loudness_start=float(data.get("loudness_start") or 0.0),
            loudness_max=float(data.get("loudness_max") or 0.0),
            loudness_max_time=float(data.get("loudness_max_time") or 0.0),
            pitches=tuple(data.get("pitches") or ()),
            timbre=tuple(data.get("timbre") or ()),
        )


@dataclass(frozen=True)
class AudioAnalysis(BasicModel):
    """
    Low-level audio analysis of a track.

    The "track" and "meta" objects are kept as raw dictionaries; they carry
    decoder internals (codestrings, synch versions) with no stable schema.
    """
    bars: tuple[TimeInterval, ...] = ()
    beats: tuple[TimeInterval, ...] = ()
    tatums: tuple[TimeInterval, ...] = ()
    sections: tuple[AnalysisSection, ...] = ()
    segments: tuple[AnalysisSegment, ...] = ()
    track: Mapping[str, Any] = field(default_factory=dict)
    meta: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AudioAnalysis":
        return cls(
            bars=parse_items(data.get("bars"), TimeInterval),
            beats=parse_items(data.get("beats"), TimeInterval),
            tatums=parse_items(data.get("tatums"), TimeInterval),
            sections=parse_items(data.get("sections"), AnalysisSection),
            segments=parse_items(data.get("segments"), AnalysisSegment),
            track=data.get("track") or {},
            meta=data.get("meta") or {},
        )


@dataclass(frozen=True)
class RecommendationSeed(BasicModel):
    id: str = ""
    type: str = ""
    href: str | None = None
    initial_pool_size: int = 0
    after_filtering_size: int = 0
    after_relinking_size: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecommendationSeed":
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            href=data.get("href"),
            initial_pool_size=data.get("initialPoolSize") or 0,
            after_filtering_size=data.get("afterFilteringSize") or 0,
            after_relinking_size=data.get("afterRelinkingSize") or 0,
        )


@dataclass(frozen=True)
class Recommendations(BasicModel):
    seeds: tuple[RecommendationSeed, ...] = ()
    tracks: tuple[SimpleTrack, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recommendations":
        return cls(
            seeds=parse_items(data.get("seeds"), RecommendationSeed),
            tracks=parse_items(data.get("tracks"), SimpleTrack),
        )


@dataclass(frozen=True)
class RecommendationSeedGenres(BasicModel):
    genres: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecommendationSeedGenres":
        return cls(genres=tuple(data.get("genres") or ()))


@dataclass(frozen=True)
class Context(BasicModel):
    """The album, artist or playlist a track was played from."""
    type: str = ""
    uri: str = ""
    href: str = ""
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Context":
        return cls(
            type=data.get("type") or "",
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            external_urls=data.get("external_urls") or {},
        )


@dataclass(frozen=True)
class PlayHistory(BasicModel):
    track: SimpleTrack = field(default_factory=SimpleTrack)
    played_at: str = ""
    context: Context | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayHistory":
        return cls(
            track=SimpleTrack.from_dict(data.get("track") or {}),
            played_at=data.get("played_at") or "",
            context=parse_model(data.get("context"), Context),
        )


# Tunable attributes accepted by the recommendations endpoint
TUNEABLE_ATTRIBUTES = (
    "acousticness",
    "danceability",
    "duration_ms",
    "energy",
    "instrumentalness",
    "key",
    "liveness",
    "loudness",
    "mode",
    "popularity",
    "speechiness",
    "tempo",
    "time_signature",
    "valence",
)


@dataclass(frozen=True)
class TuneableTrack:
    """
    Target, minimum or maximum track attributes for recommendations.

    Only the attributes that are set end up in the query string, each
    prefixed with "target_", "min_" or "max_".

    Example:
        client.get_recommendations(
            genre_seed=["house"],
            target=TuneableTrack(energy=0.8),
            maximum=TuneableTrack(tempo=130),
        )
    """
    acousticness: float | None = None
    danceability: float | None = None
    duration_ms: int | None = None
    energy: float | None = None
    instrumentalness: float | None = None
    key: int | None = None
    liveness: float | None = None
    loudness: float | None = None
    mode: int | None = None
    popularity: int | None = None
    speechiness: float | None = None
    tempo: float | None = None
    time_signature: int | None = None
    valence: float | None = None

    def to_params(self, prefix: str) -> dict[str, Any]:
        params = {}
        for name in TUNEABLE_ATTRIBUTES:
            value = getattr(self, name)
            if value is not None:
                params[f"{prefix}_{name}"] = value
        return params
