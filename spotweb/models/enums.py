"""
Enumerations used in request parameters.

SearchType and AlbumType are flags: combine members with | and they render
as the comma-separated list the API expects.

    SearchType.TRACK | SearchType.ARTIST  ->  "artist,track"
"""

from enum import Enum, Flag


class SearchType(Flag):
    ARTIST = 1
    ALBUM = 2
    TRACK = 4
    PLAYLIST = 8
    ALL = ARTIST | ALBUM | TRACK | PLAYLIST

    @property
    def api_value(self) -> str:
        return _join_flags(self, SEARCH_TYPE_NAMES)


class AlbumType(Flag):
    ALBUM = 1
    SINGLE = 2
    COMPILATION = 4
    APPEARS_ON = 8
    ALL = ALBUM | SINGLE | COMPILATION | APPEARS_ON

    @property
    def api_value(self) -> str:
        return _join_flags(self, ALBUM_TYPE_NAMES)


# Flag member -> API name, in the order the API documents them
SEARCH_TYPE_NAMES = {
    SearchType.ARTIST: "artist",
    SearchType.ALBUM: "album",
    SearchType.TRACK: "track",
    SearchType.PLAYLIST: "playlist",
}

ALBUM_TYPE_NAMES = {
    AlbumType.ALBUM: "album",
    AlbumType.SINGLE: "single",
    AlbumType.COMPILATION: "compilation",
    AlbumType.APPEARS_ON: "appears_on",
}


def _join_flags(value: Flag, names: dict) -> str:
    return ",".join(name for member, name in names.items() if member in value)


class FollowType(Enum):
    ARTIST = "artist"
    USER = "user"

    @property
    def api_value(self) -> str:
        return self.value


class TimeRange(Enum):
    """Time frame of the personalization endpoints."""
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"

    @property
    def api_value(self) -> str:
        return self.value


class RepeatState(Enum):
    TRACK = "track"
    CONTEXT = "context"
    OFF = "off"

    @property
    def api_value(self) -> str:
        return self.value
