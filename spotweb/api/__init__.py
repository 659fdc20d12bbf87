"""
Spotify Web API clients and endpoint wrappers.
"""

from spotweb.api.client import AsyncSpotifyWebAPI, SpotifyWebAPI
from spotweb.api.endpoints import SpotifyEndpoints, build_url, render_query_value

__all__ = [
    "SpotifyWebAPI",
    "AsyncSpotifyWebAPI",
    "SpotifyEndpoints",
    "build_url",
    "render_query_value",
]
