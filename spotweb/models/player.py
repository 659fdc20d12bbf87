"""Playback models: devices and the playback context."""

from dataclasses import dataclass, field
from typing import Any, Mapping

from spotweb.models.base import BasicModel, parse_items, parse_model
from spotweb.models.music import Context, FullTrack


@dataclass(frozen=True)
class Device(BasicModel):
    id: str | None = None
    name: str = ""
    type: str = ""
    is_active: bool = False
    is_private_session: bool = False
    is_restricted: bool = False
    volume_percent: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Device":
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            type=data.get("type") or "",
            is_active=bool(data.get("is_active")),
            is_private_session=bool(data.get("is_private_session")),
            is_restricted=bool(data.get("is_restricted")),
            volume_percent=data.get("volume_percent"),
        )


@dataclass(frozen=True)
class AvailableDevices(BasicModel):
    devices: tuple[Device, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AvailableDevices":
        return cls(devices=parse_items(data.get("devices"), Device))


@dataclass(frozen=True)
class PlaybackContext(BasicModel):
    """
    Current playback state.

    When nothing is playing the service answers 204 with an empty body; the
    result is then an empty PlaybackContext with status_code 204 and
    item None.

    Attributes:
        item: The playing track, None when nothing is playing (or an
              episode is playing).
        progress_ms: Position in the current item.
        repeat_state: "off", "track" or "context".
        actions: Disallowed actions reported by the service.
    """
    device: Device | None = None
    context: Context | None = None
    item: FullTrack | None = None
    is_playing: bool = False
    progress_ms: int | None = None
    timestamp: int = 0
    repeat_state: str = "off"
    shuffle_state: bool = False
    currently_playing_type: str = ""
    actions: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlaybackContext":
        item = data.get("item")
        # Podcast episodes share the "item" key but are not tracks
        if item is not None and item.get("type", "track") != "track":
            item = None
        return cls(
            device=parse_model(data.get("device"), Device),
            context=parse_model(data.get("context"), Context),
            item=parse_model(item, FullTrack),
            is_playing=bool(data.get("is_playing")),
            progress_ms=data.get("progress_ms"),
            timestamp=data.get("timestamp") or 0,
            repeat_state=data.get("repeat_state") or "off",
            shuffle_state=bool(data.get("shuffle_state")),
            currently_playing_type=data.get("currently_playing_type") or "",
            actions=data.get("actions") or {},
        )
