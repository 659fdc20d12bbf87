"""
Playlist models.

Playlist track entries hold a FullTrack, or None for entries the service can
no longer resolve (removed from the catalog, unavailable in the market).
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from spotweb.models.base import BasicModel, Followers, Image, Page, parse_images, parse_model
from spotweb.models.music import FullTrack
from spotweb.models.users import PublicProfile


@dataclass(frozen=True)
class PlaylistTracksRef(BasicModel):
    """Link to a playlist's tracks, as embedded in simplified playlists."""
    href: str = ""
    total: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlaylistTracksRef":
        return cls(href=data.get("href") or "", total=data.get("total") or 0)


@dataclass(frozen=True)
class PlaylistTrack(BasicModel):
    added_at: str | None = None
    added_by: PublicProfile | None = None
    is_local: bool = False
    track: FullTrack | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlaylistTrack":
        return cls(
            added_at=data.get("added_at"),
            added_by=parse_model(data.get("added_by"), PublicProfile),
            is_local=bool(data.get("is_local")),
            track=parse_model(data.get("track"), FullTrack),
        )


@dataclass(frozen=True)
class SimplePlaylist(BasicModel):
    id: str = ""
    name: str = ""
    uri: str = ""
    href: str = ""
    description: str = ""
    collaborative: bool = False
    public: bool | None = None
    snapshot_id: str = ""
    images: tuple[Image, ...] = ()
    owner: PublicProfile = field(default_factory=PublicProfile)
    tracks: PlaylistTracksRef = field(default_factory=PlaylistTracksRef)
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimplePlaylist":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            description=data.get("description") or "",
            collaborative=bool(data.get("collaborative")),
            public=data.get("public"),
            snapshot_id=data.get("snapshot_id") or "",
            images=parse_images(data.get("images")),
            owner=PublicProfile.from_dict(data.get("owner") or {}),
            tracks=PlaylistTracksRef.from_dict(data.get("tracks") or {}),
            external_urls=data.get("external_urls") or {},
        )


@dataclass(frozen=True)
class FullPlaylist(BasicModel):
    """
    A complete playlist, including the first page of its tracks.

    Use client.next_page(playlist.tracks) or client.iter_items(playlist.tracks)
    for the rest of the listing.
    """
    id: str = ""
    name: str = ""
    uri: str = ""
    href: str = ""
    description: str = ""
    collaborative: bool = False
    public: bool | None = None
    snapshot_id: str = ""
    images: tuple[Image, ...] = ()
    owner: PublicProfile = field(default_factory=PublicProfile)
    followers: Followers = field(default_factory=Followers)
    tracks: Page[PlaylistTrack] = field(default_factory=lambda: Page(item_type=PlaylistTrack))
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FullPlaylist":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            description=data.get("description") or "",
            collaborative=bool(data.get("collaborative")),
            public=data.get("public"),
            snapshot_id=data.get("snapshot_id") or "",
            images=parse_images(data.get("images")),
            owner=PublicProfile.from_dict(data.get("owner") or {}),
            followers=Followers.from_dict(data.get("followers") or {}),
            tracks=Page.from_dict(data.get("tracks") or {}, PlaylistTrack),
            external_urls=data.get("external_urls") or {},
        )


@dataclass(frozen=True)
class Snapshot(BasicModel):
    """Playlist version identifier returned by reordering."""
    snapshot_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Snapshot":
        return cls(snapshot_id=data.get("snapshot_id") or "")


@dataclass(frozen=True)
class DeleteTrackUri:
    """
    A track to remove from a playlist.

    Without positions every occurrence of the URI is removed; with positions
    only the occurrences at those (zero-based) indices.

    Example:
        DeleteTrackUri("spotify:track:4iV5W9uYEdYUVa79Axb7Rh", positions=(0, 3))
    """
    uri: str
    positions: tuple[int, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        entry: dict[str, Any] = {"uri": self.uri}
        if self.positions:
            entry["positions"] = list(self.positions)
        return entry
