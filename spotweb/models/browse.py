"""
Browse, search and follow listing models.

These endpoints wrap their page in an object ({"albums": {...}}). The page
records that key as its envelope, and the continuation URL the service
returns answers with the same wrapping, so client.next_page() on e.g.
releases.albums unwraps it the same way and yields a plain Page again.
"""

from dataclasses import dataclass, field
from typing import Any

from spotweb.models.base import BasicModel, CursorPage, Image, Page, parse_images
from spotweb.models.music import FullArtist, FullTrack, SimpleAlbum
from spotweb.models.playlists import SimplePlaylist


def _enveloped_page(data: dict[str, Any], key: str, item_type: Any) -> Page:
    return Page.from_dict(data.get(key) or {}, item_type, envelope=key)


@dataclass(frozen=True)
class Category(BasicModel):
    id: str = ""
    name: str = ""
    href: str = ""
    icons: tuple[Image, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            href=data.get("href") or "",
            icons=parse_images(data.get("icons")),
        )


@dataclass(frozen=True)
class CategoryList(BasicModel):
    categories: Page[Category] = field(default_factory=lambda: Page(item_type=Category, envelope="categories"))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryList":
        return cls(categories=_enveloped_page(data, "categories", Category))


@dataclass(frozen=True)
class CategoryPlaylist(BasicModel):
    playlists: Page[SimplePlaylist] = field(
        default_factory=lambda: Page(item_type=SimplePlaylist, envelope="playlists")
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryPlaylist":
        return cls(playlists=_enveloped_page(data, "playlists", SimplePlaylist))


@dataclass(frozen=True)
class FeaturedPlaylists(BasicModel):
    """
    Spotify's featured playlists.

    Attributes:
        message: Localized headline, e.g. "Monday morning music, coming right up!".
        playlists: First page of the playlists.
    """
    message: str = ""
    playlists: Page[SimplePlaylist] = field(
        default_factory=lambda: Page(item_type=SimplePlaylist, envelope="playlists")
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeaturedPlaylists":
        return cls(
            message=data.get("message") or "",
            playlists=_enveloped_page(data, "playlists", SimplePlaylist),
        )


@dataclass(frozen=True)
class NewAlbumReleases(BasicModel):
    albums: Page[SimpleAlbum] = field(default_factory=lambda: Page(item_type=SimpleAlbum, envelope="albums"))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NewAlbumReleases":
        return cls(albums=_enveloped_page(data, "albums", SimpleAlbum))


@dataclass(frozen=True)
class FollowedArtists(BasicModel):
    artists: CursorPage[FullArtist] = field(
        default_factory=lambda: CursorPage(item_type=FullArtist, envelope="artists")
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FollowedArtists":
        return cls(
            artists=CursorPage.from_dict(data.get("artists") or {}, FullArtist, envelope="artists")
        )


@dataclass(frozen=True)
class SearchItem(BasicModel):
    """
    Search results, one page per requested type.

    Types that were not part of the search stay None.

    Example:
        results = client.search_items("daft punk", SearchType.ARTIST | SearchType.TRACK)
        for artist in results.artists:
            print(artist.name)
        more_tracks = client.next_page(results.tracks)
    """
    artists: Page[FullArtist] | None = None
    albums: Page[SimpleAlbum] | None = None
    tracks: Page[FullTrack] | None = None
    playlists: Page[SimplePlaylist] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchItem":
        return cls(
            artists=_optional_page(data, "artists", FullArtist),
            albums=_optional_page(data, "albums", SimpleAlbum),
            tracks=_optional_page(data, "tracks", FullTrack),
            playlists=_optional_page(data, "playlists", SimplePlaylist),
        )


def _optional_page(data: dict[str, Any], key: str, item_type: Any) -> Page | None:
    if data.get(key) is None:
        return None
    return _enveloped_page(data, key, item_type)
