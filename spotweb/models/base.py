"""
Base models shared by every endpoint.

Deserialization contract:
    Every model class exposes two classmethods, and the executor only ever
    talks to a model through them:

        from_dict(data)   -> instance built from the decoded JSON body
        from_error(error) -> instance describing a terminal failure

    Anything providing those two callables is a "shape" and can be used as a
    deserialization target: a model class, ErrorResult itself, or a PageOf
    witness such as Page.of(FullTrack), which carries the item type of a
    page explicitly so that a followed pagination URL is parsed into the same
    generic page type.

Design Decisions:
    - All dataclasses are frozen; collections are tuples
    - Every field has a default: unknown JSON keys are ignored and missing
      ones fall back, so a newer service schema never breaks parsing
    - Response info (status code, headers) lives on BasicModel and is filled
      in by the executor
"""

from dataclasses import dataclass, field, replace
from typing import Any, Generic, Iterator, Mapping, Protocol, TypeVar

from spotweb.core.exceptions import ServiceError


T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
M = TypeVar("M", bound="BasicModel")


class Shape(Protocol[T_co]):
    """A deserialization target: a model class or a PageOf witness."""

    def from_dict(self, data: Any) -> T_co:
        ...

    def from_error(self, error: "ErrorResult") -> T_co:
        ...


@dataclass(frozen=True)
class ErrorResult:
    """
    Uniform acknowledgement and failure envelope.

    Mutating endpoints (save, follow, pause, ...) always return an
    ErrorResult: status 2xx with an empty message on success, the service's
    status and message on failure. Callers branch on status_code instead of
    catching exceptions for expected outcomes such as "no active device".

    Attributes:
        status_code: HTTP status of the final response.
        message: Error message from the service ("" on success).

    Example:
        result = client.pause_playback()
        if not result.ok:
            print(f"Pause failed ({result.status_code}): {result.message}")
    """
    status_code: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def from_dict(cls, data: Any, status_code: int = 0) -> "ErrorResult":
        """
        Parse a Spotify error body.

        Two formats exist:
            {"error": {"status": 404, "message": "Non existing id"}}
            {"error": "invalid_client", "error_description": "Invalid client"}

        Args:
            data: The decoded body.
            status_code: Status to use when the body carries none.
        """
        if not isinstance(data, dict):
            return cls(status_code=status_code, message="")

        error = data.get("error")
        if isinstance(error, dict):
            status = error.get("status")
            return cls(
                status_code=status if isinstance(status, int) else status_code,
                message=str(error.get("message") or ""),
            )
        if isinstance(error, str):
            return cls(
                status_code=status_code,
                message=str(data.get("error_description") or error),
            )
        return cls(status_code=status_code, message=str(data.get("message") or ""))

    @classmethod
    def from_error(cls, error: "ErrorResult") -> "ErrorResult":
        return error


@dataclass(frozen=True)
class BasicModel:
    """
    Base class of every response model.

    Attributes:
        error: Set when the request failed; the other fields then hold
               their defaults.
        status_code: HTTP status of the response the model was built from.
        headers: Headers of that response.
    """
    error: ErrorResult | None = field(default=None, kw_only=True)
    status_code: int = field(default=0, kw_only=True, compare=False)
    headers: Mapping[str, str] = field(default_factory=dict, kw_only=True, repr=False, compare=False)

    def has_error(self) -> bool:
        return self.error is not None

    def raise_for_error(self: M) -> M:
        """
        Raise ServiceError if the request failed, otherwise return self.

        Example:
            track = client.get_track(track_id).raise_for_error()
        """
        if self.error is not None:
            raise ServiceError(self.error)
        return self

    def with_response(self: M, status_code: int, headers: Mapping[str, str]) -> M:
        return replace(self, status_code=status_code, headers=dict(headers))

    @classmethod
    def from_dict(cls: type[M], data: Any) -> M:
        raise NotImplementedError(f"{cls.__name__} does not define from_dict()")

    @classmethod
    def from_error(cls: type[M], error: ErrorResult) -> M:
        return cls(error=error, status_code=error.status_code)


def parse_model(data: Any, model_type: Any) -> Any:
    """Parse an optional nested object; None stays None."""
    if data is None:
        return None
    return model_type.from_dict(data)


def parse_items(data: Any, item_type: Any) -> tuple:
    """
    Parse a JSON list into a tuple of models.

    Null entries (Spotify returns them for unknown ids in batch endpoints)
    stay None. Without an item type the raw values are kept.
    """
    if not data:
        return ()
    if item_type is None:
        return tuple(data)
    return tuple(item_type.from_dict(item) if item is not None else None for item in data)


@dataclass(frozen=True)
class Image(BasicModel):
    url: str = ""
    width: int | None = None
    height: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Image":
        return cls(
            url=data.get("url") or "",
            width=data.get("width"),
            height=data.get("height"),
        )


@dataclass(frozen=True)
class Followers(BasicModel):
    href: str | None = None
    total: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Followers":
        return cls(href=data.get("href"), total=data.get("total") or 0)


def parse_images(data: Any) -> tuple[Image, ...]:
    return parse_items(data, Image)


@dataclass(frozen=True)
class PageOf(Generic[T]):
    """
    Deserialization witness for a page of T.

    Page.of(FullTrack) and CursorPage.of(PlayHistory) build these. The
    witness is what makes a followed continuation URL come back as the same
    generic page type, and it is the hook for parsing a continuation into a
    different item type (Page.of(FullTrack) instead of Page.of(SimpleTrack)).

    Attributes:
        page_type: Page or CursorPage.
        item_type: Model class of the items, or None for raw values.
        envelope: Key under which the service nests the page in the body
                  ({"albums": {...}} for new releases), or None.
    """
    page_type: type
    item_type: Any = None
    envelope: str | None = None

    def from_dict(self, data: Any) -> Any:
        if self.envelope is not None:
            data = data[self.envelope]
        return self.page_type.from_dict(data, self.item_type, self.envelope)

    def from_error(self, error: ErrorResult) -> Any:
        return self.page_type(
            item_type=self.item_type,
            envelope=self.envelope,
            error=error,
            status_code=error.status_code,
        )


@dataclass(frozen=True)
class Page(BasicModel, Generic[T]):
    """
    An offset-paged slice of a larger result set.

    Attributes:
        href: URL of this page.
        items: The items of this page.
        limit: Maximum number of items per page.
        offset: Index of the first item of this page.
        total: Total number of items across all pages.
        next: URL of the next page, None on the last page.
        previous: URL of the previous page, None on the first page.
        item_type: Model class the items were parsed into.
        envelope: Key the service nests continuation pages under, if any.

    Pages iterate over their items:
        for track in client.get_album_tracks(album_id):
            print(track.name)
    """
    href: str = ""
    items: tuple[T, ...] = ()
    limit: int = 0
    offset: int = 0
    total: int = 0
    next: str | None = None
    previous: str | None = None
    item_type: Any = field(default=None, repr=False, compare=False)
    envelope: str | None = field(default=None, repr=False, compare=False)

    @classmethod
    def of(cls, item_type: Any = None, envelope: str | None = None) -> PageOf:
        return PageOf(cls, item_type, envelope)

    @classmethod
    def from_dict(cls, data: Any, item_type: Any = None, envelope: str | None = None) -> "Page[T]":
        return cls(
            href=data.get("href") or "",
            items=parse_items(data.get("items"), item_type),
            limit=data.get("limit") or 0,
            offset=data.get("offset") or 0,
            total=data.get("total") or 0,
            next=data.get("next") or None,
            previous=data.get("previous") or None,
            item_type=item_type,
            envelope=envelope,
        )

    def has_next_page(self) -> bool:
        return self.next is not None

    def has_previous_page(self) -> bool:
        return self.previous is not None

    def continuation_shape(self) -> PageOf:
        return PageOf(type(self), self.item_type, self.envelope)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Cursor(BasicModel):
    after: str | None = None
    before: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Cursor":
        return cls(after=data.get("after") or None, before=data.get("before") or None)


@dataclass(frozen=True)
class CursorPage(BasicModel, Generic[T]):
    """
    A forward-only page addressed by an opaque cursor.

    Used by followed artists and recently played tracks. There is no
    previous page.

    Attributes:
        href: URL of this page.
        items: The items of this page.
        limit: Maximum number of items per page.
        total: Total number of items, when the service reports it.
        next: URL of the next page, None on the last page.
        cursors: The cursor the next page starts after.
        item_type: Model class the items were parsed into.
        envelope: Key the service nests continuation pages under, if any.
    """
    href: str = ""
    items: tuple[T, ...] = ()
    limit: int = 0
    total: int = 0
    next: str | None = None
    cursors: Cursor = field(default_factory=Cursor)
    item_type: Any = field(default=None, repr=False, compare=False)
    envelope: str | None = field(default=None, repr=False, compare=False)

    @classmethod
    def of(cls, item_type: Any = None, envelope: str | None = None) -> PageOf:
        return PageOf(cls, item_type, envelope)

    @classmethod
    def from_dict(cls, data: Any, item_type: Any = None, envelope: str | None = None) -> "CursorPage[T]":
        return cls(
            href=data.get("href") or "",
            items=parse_items(data.get("items"), item_type),
            limit=data.get("limit") or 0,
            total=data.get("total") or 0,
            next=data.get("next") or None,
            cursors=Cursor.from_dict(data.get("cursors") or {}),
            item_type=item_type,
            envelope=envelope,
        )

    def has_next_page(self) -> bool:
        return self.next is not None

    def continuation_shape(self) -> PageOf:
        return PageOf(type(self), self.item_type, self.envelope)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class ListResponse(BasicModel, Generic[T]):
    """
    A bare JSON array response, e.g. [true, false] from "is following" checks.

    Attributes:
        items: The array values, in request order.
    """
    items: tuple[T, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "ListResponse[T]":
        if not isinstance(data, list):
            raise TypeError(f"Expected a JSON array, got {type(data).__name__}")
        return cls(items=tuple(data))

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]
