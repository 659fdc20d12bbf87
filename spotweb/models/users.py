"""User profile models."""

from dataclasses import dataclass, field
from typing import Any, Mapping

from spotweb.models.base import BasicModel, Followers, Image, parse_images


@dataclass(frozen=True)
class PublicProfile(BasicModel):
    id: str = ""
    display_name: str | None = None
    uri: str = ""
    href: str = ""
    type: str = "user"
    images: tuple[Image, ...] = ()
    followers: Followers = field(default_factory=Followers)
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PublicProfile":
        return cls(
            id=data.get("id") or "",
            display_name=data.get("display_name"),
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            type=data.get("type") or "user",
            images=parse_images(data.get("images")),
            followers=Followers.from_dict(data.get("followers") or {}),
            external_urls=data.get("external_urls") or {},
        )


@dataclass(frozen=True)
class PrivateProfile(BasicModel):
    """
    The current user's profile.

    country, email and product are only present when the token carries the
    user-read-private / user-read-email scopes.
    """
    id: str = ""
    display_name: str | None = None
    uri: str = ""
    href: str = ""
    type: str = "user"
    country: str = ""
    email: str = ""
    product: str = ""
    birthdate: str = ""
    images: tuple[Image, ...] = ()
    followers: Followers = field(default_factory=Followers)
    external_urls: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PrivateProfile":
        return cls(
            id=data.get("id") or "",
            display_name=data.get("display_name"),
            uri=data.get("uri") or "",
            href=data.get("href") or "",
            type=data.get("type") or "user",
            country=data.get("country") or "",
            email=data.get("email") or "",
            product=data.get("product") or "",
            birthdate=data.get("birthdate") or "",
            images=parse_images(data.get("images")),
            followers=Followers.from_dict(data.get("followers") or {}),
            external_urls=data.get("external_urls") or {},
        )
