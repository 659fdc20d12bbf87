"""
spotweb: a typed client for the Spotify Web API.

Every endpoint wrapper goes through one request pipeline:

    wrapper -> RequestExecutor -> Transport -> (failure) RetryPolicy loop
            -> model deserialized from the body, or an ErrorResult

The pipeline adds the Authorization header from the shared Credentials,
retries configured statuses with back-off, maps failures onto ErrorResult
values and follows pagination links, identically on the blocking and the
asyncio path.

Modules:
    core/       - Configuration, logging, exceptions
    http/       - Transports, retry policy, executor, paginator
    models/     - Response models and request value types
    api/        - Endpoint wrappers and the two clients
    cli.py      - Command-line interface

Usage:
    from spotweb import SpotifyWebAPI, SearchType

    client = SpotifyWebAPI(access_token=token)
    client.use_auto_retry = True

    results = client.search_items("kind of blue", SearchType.ALBUM)
    for album in client.iter_items(results.albums):
        print(album.name)

    result = client.pause_playback()
    if not result.ok:
        print(result.status_code, result.message)

Dependencies:
    - requests: blocking transport
    - aiohttp: asyncio transport
    - pyyaml, python-dotenv: configuration
    - click, rich-click, tqdm, spotipy: command-line interface
"""

import logging

__version__ = "0.1.0"

from spotweb.api import AsyncSpotifyWebAPI, SpotifyWebAPI
from spotweb.core import (
    Config,
    ConfigError,
    MalformedResponseError,
    ServiceError,
    SpotWebError,
    TransportError,
    get_logger,
    load_config,
    setup_logging,
)
from spotweb.http import Credentials, Paginator, RequestExecutor, RetryConfig
from spotweb.models import (
    AlbumType,
    CursorPage,
    ErrorResult,
    FollowType,
    ListResponse,
    Page,
    RepeatState,
    SearchType,
    TimeRange,
)

# Library code only logs; applications decide where records go
logging.getLogger("spotweb").addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Clients
    "SpotifyWebAPI",
    "AsyncSpotifyWebAPI",
    # Pipeline
    "Credentials",
    "RetryConfig",
    "RequestExecutor",
    "Paginator",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "SpotWebError",
    "ConfigError",
    "TransportError",
    "MalformedResponseError",
    "ServiceError",
    # Models
    "ErrorResult",
    "Page",
    "CursorPage",
    "ListResponse",
    "SearchType",
    "AlbumType",
    "FollowType",
    "TimeRange",
    "RepeatState",
]
