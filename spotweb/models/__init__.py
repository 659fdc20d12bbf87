"""
Response models and request value types.

    - base: BasicModel, ErrorResult, Page, CursorPage, ListResponse, PageOf
    - music: artists, albums, tracks, audio features, recommendations
    - playlists: playlists, playlist tracks, snapshots
    - users: profiles
    - browse: categories, featured playlists, new releases, search results
    - player: devices and playback state
    - enums: request parameter enumerations
"""

from spotweb.models.base import (
    BasicModel,
    Cursor,
    CursorPage,
    ErrorResult,
    Followers,
    Image,
    ListResponse,
    Page,
    PageOf,
    Shape,
)
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
    AnalysisSection,
    AnalysisSegment,
    AudioAnalysis,
    AudioFeatures,
    Context,
    FullAlbum,
    FullArtist,
    FullTrack,
    PlayHistory,
    RecommendationSeed,
    RecommendationSeedGenres,
    Recommendations,
    SavedAlbum,
    SavedTrack,
    SeveralAlbums,
    SeveralArtists,
    SeveralAudioFeatures,
    SeveralTracks,
    SimpleAlbum,
    SimpleArtist,
    SimpleTrack,
    TimeInterval,
    TuneableTrack,
)
from spotweb.models.player import AvailableDevices, Device, PlaybackContext
from spotweb.models.playlists import (
    DeleteTrackUri,
    FullPlaylist,
    PlaylistTrack,
    PlaylistTracksRef,
    SimplePlaylist,
    Snapshot,
)
from spotweb.models.users import PrivateProfile, PublicProfile

__all__ = [
    # Base
    "BasicModel",
    "ErrorResult",
    "Page",
    "PageOf",
    "CursorPage",
    "Cursor",
    "ListResponse",
    "Shape",
    "Image",
    "Followers",
    # Music
    "SimpleArtist",
    "FullArtist",
    "SimpleAlbum",
    "FullAlbum",
    "SimpleTrack",
    "FullTrack",
    "SavedTrack",
    "SavedAlbum",
    "SeveralTracks",
    "SeveralArtists",
    "SeveralAlbums",
    "AudioFeatures",
    "SeveralAudioFeatures",
    "AudioAnalysis",
    "AnalysisSection",
    "AnalysisSegment",
    "TimeInterval",
    "Recommendations",
    "RecommendationSeed",
    "RecommendationSeedGenres",
    "Context",
    "PlayHistory",
    "TuneableTrack",
    # Playlists
    "SimplePlaylist",
    "FullPlaylist",
    "PlaylistTrack",
    "PlaylistTracksRef",
    "Snapshot",
    "DeleteTrackUri",
    # Users
    "PublicProfile",
    "PrivateProfile",
    # Browse
    "Category",
    "CategoryList",
    "CategoryPlaylist",
    "FeaturedPlaylists",
    "NewAlbumReleases",
    "FollowedArtists",
    "SearchItem",
    # Player
    "Device",
    "AvailableDevices",
    "PlaybackContext",
    # Enums
    "SearchType",
    "AlbumType",
    "FollowType",
    "TimeRange",
    "RepeatState",
]
