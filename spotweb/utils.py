"""
Utility functions used by the command-line interface.
"""


def extract_spotify_id(url_or_id: str) -> str:
    """
    Extract a Spotify ID from a URL or URI, or return the ID as is.

    Handles:
        - https://open.spotify.com/track/ID
        - https://open.spotify.com/track/ID?si=xxx
        - spotify:track:ID
        - Just the ID

    Examples:
        extract_spotify_id("https://open.spotify.com/track/abc123?si=xyz")
        # Returns: "abc123"

        extract_spotify_id("spotify:track:abc123")
        # Returns: "abc123"
    """
    value = url_or_id.strip()

    if value.startswith("spotify:"):
        return value.split(":")[-1]

    if "spotify.com" in value:
        value = value.split("?")[0]
        return value.rstrip("/").split("/")[-1]

    return value


def to_track_uri(url_or_id: str) -> str:
    """
    Turn a track URL, URI or ID into a spotify:track: URI.

    Other URIs (albums, playlists, episodes) are returned unchanged.
    """
    value = url_or_id.strip()
    if value.startswith("spotify:"):
        return value
    return f"spotify:track:{extract_spotify_id(value)}"


def format_duration(milliseconds: int) -> str:
    """
    Format a duration in milliseconds.

    Examples:
        format_duration(225000)   # "3:45"
        format_duration(3750000)  # "1:02:30"
    """
    seconds = milliseconds // 1000
    if seconds < 3600:
        return f"{seconds // 60}:{seconds % 60:02d}"
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}:{minutes:02d}:{seconds % 60:02d}"
