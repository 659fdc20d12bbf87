"""
Command-line interface for spotweb.

A thin shell over SpotifyWebAPI, useful for poking at the Web API and for
checking a token. rich-click is used for the help output.

Commands:
    spotweb search <query> [--type track] [--limit 10]
    spotweb track <id-or-url>
    spotweb album <id-or-url>
    spotweb playlist <id-or-url> [--all]
    spotweb me
    spotweb devices
    spotweb now-playing
    spotweb play [<uri>...] [--context <uri>] [--device <id>]
    spotweb pause | next | previous [--device <id>]
    spotweb volume <percent> [--device <id>]
    spotweb save <id-or-url>...

Options:
    --config <path>     Configuration file (default: ./spotweb.yaml if present)
    --token <token>     Access token, overrides config and environment
    --verbose           Debug logging

Token Resolution:
    1. --token
    2. auth.access_token from the config file or SPOTIFY_ACCESS_TOKEN
    3. A client-credentials token from auth.client_id / auth.client_secret
       (or SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET), obtained with spotipy.
       Such tokens cannot access user data (me, player, library).

Exit Codes:
    0    Success
    1    The service answered with an error (status and message printed)
    2    Configuration error
    3    Network failure
    4    Other spotweb error (malformed response, ...)
    130  Interrupted
"""

import functools
import sys
from pathlib import Path
from typing import Any, Callable

import rich_click as click
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError
from tqdm import tqdm

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.MAX_WIDTH = 100
click.rich_click.COMMAND_GROUPS = {
    "spotweb": [
        {
            "name": "Catalog",
            "commands": ["search", "track", "album", "playlist"],
        },
        {
            "name": "User",
            "commands": ["me", "save"],
        },
        {
            "name": "Player",
            "commands": ["devices", "now-playing", "play", "pause", "next", "previous", "volume"],
        },
    ],
}

from spotweb import __version__
from spotweb.api import SpotifyWebAPI
from spotweb.core import (
    Config,
    ConfigError,
    ServiceError,
    SpotWebError,
    TransportError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from spotweb.models import (
    BasicModel,
    ErrorResult,
    FullTrack,
    SearchType,
    SimpleTrack,
)
from spotweb.utils import extract_spotify_id, format_duration, to_track_uri

logger = get_logger(__name__)


SEARCH_TYPES = {
    "track": SearchType.TRACK,
    "album": SearchType.ALBUM,
    "artist": SearchType.ARTIST,
    "playlist": SearchType.PLAYLIST,
}


@click.group()
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    metavar="<spotweb.yaml>",
    help="Configuration file"
)
@click.option(
    "--token",
    type=str,
    default=None,
    metavar="<access-token>",
    help="Access token (overrides config and environment)"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable debug logging"
)
@click.version_option(__version__, prog_name="spotweb")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, token: str | None, verbose: bool) -> None:
    """
    spotweb: a typed Spotify Web API client.

    \b
    EXAMPLES:
        spotweb search "daft punk" --type artist
        spotweb playlist https://open.spotify.com/playlist/... --all
        spotweb --token $TOKEN pause
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["token"] = token
    ctx.obj["verbose"] = verbose


def _handle_errors(command: Callable[..., None]) -> Callable[..., None]:
    """Translate exceptions into messages and exit codes."""

    @functools.wraps(command)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        try:
            command(*args, **kwargs)

        except ServiceError as e:
            _fail(e.error)

        except ConfigError as e:
            click.echo(f"Configuration error: {e.message}", err=True)
            sys.exit(2)

        except TransportError as e:
            click.echo(f"Network error: {e.message}", err=True)
            logger.error(f"Network error: {e.message}", exc_info=True)
            sys.exit(3)

        except SpotWebError as e:
            click.echo(f"Error: {e.message}", err=True)
            logger.error(f"Error: {e.message}", exc_info=True)
            sys.exit(4)

        except KeyboardInterrupt:
            click.echo("\nInterrupted by user", err=True)
            sys.exit(130)

        finally:
            shutdown_logging()

    return wrapper


def _fail(error: ErrorResult) -> None:
    click.echo(f"Spotify error {error.status_code}: {error.message or 'no message'}", err=True)
    sys.exit(1)


def _check(result: Any) -> Any:
    """Exit with code 1 if a result carries a service error."""
    if isinstance(result, ErrorResult):
        if not result.ok:
            _fail(result)
    elif isinstance(result, BasicModel) and result.error is not None:
        _fail(result.error)
    return result


def _resolve_token(config: Config, token: str | None) -> str:
    """
    Pick the access token the client will use as is.

    Raises:
        ConfigError: If no token is configured and none can be obtained.
    """
    if token:
        return token
    if config.auth.access_token:
        return config.auth.access_token

    if config.auth.client_id and config.auth.client_secret:
        logger.debug("Requesting a client-credentials token")
        manager = SpotifyClientCredentials(
            client_id=config.auth.client_id,
            client_secret=config.auth.client_secret,
        )
        try:
            return manager.get_access_token(as_dict=False)
        except SpotifyOauthError as e:
            raise ConfigError(
                f"Could not obtain a client-credentials token: {e}",
                details={"original_error": str(e)}
            ) from e

    raise ConfigError(
        "No access token. Use --token, set SPOTIFY_ACCESS_TOKEN, or configure "
        "auth.client_id and auth.client_secret"
    )


def _open_client(ctx: click.Context) -> SpotifyWebAPI:
    """Load configuration, set up logging and build the client for a command."""
    options = ctx.find_root().obj
    config = load_config(options["config_path"])

    level = "DEBUG" if options["verbose"] else config.logging.level
    setup_logging(level, log_dir=config.logging.directory)

    client = SpotifyWebAPI.from_config(config)
    client.access_token = _resolve_token(config, options["token"])
    ctx.call_on_close(client.close)
    return client


def _artists(track: FullTrack | SimpleTrack) -> str:
    return ", ".join(artist.name for artist in track.artists) or "Unknown artist"


def _echo_track(track: FullTrack | SimpleTrack, prefix: str = "") -> None:
    click.echo(f"{prefix}{track.name} - {_artists(track)} ({format_duration(track.duration_ms)})")


# =============================================================================
# Catalog
# =============================================================================

@cli.command()
@click.argument("query")
@click.option(
    "--type", "search_type",
    type=click.Choice(list(SEARCH_TYPES)),
    default="track",
    show_default=True,
    help="Item type to search for"
)
@click.option("--limit", type=click.IntRange(1, 50), default=10, show_default=True)
@click.pass_context
@_handle_errors
def search(ctx: click.Context, query: str, search_type: str, limit: int) -> None:
    """Search the catalog."""
    client = _open_client(ctx)
    results = _check(client.search_items(query, SEARCH_TYPES[search_type], limit=limit))

    page = getattr(results, f"{search_type}s")
    if page is None or not page.items:
        click.echo("No results")
        return

    for item in page:
        if search_type == "track":
            _echo_track(item)
        else:
            click.echo(f"{item.name}  [{item.id}]")


@cli.command()
@click.argument("track")
@click.pass_context
@_handle_errors
def track(ctx: click.Context, track: str) -> None:
    """Show a track."""
    client = _open_client(ctx)
    result = _check(client.get_track(extract_spotify_id(track)))
    _echo_track(result)
    click.echo(f"Album: {result.album.name} ({result.album.release_date or 'unknown date'})")
    click.echo(f"URI:   {result.uri}")


@cli.command()
@click.argument("album")
@click.pass_context
@_handle_errors
def album(ctx: click.Context, album: str) -> None:
    """Show an album and all of its tracks."""
    client = _open_client(ctx)
    result = _check(client.get_album(extract_spotify_id(album)))
    click.echo(f"{result.name} - {_artists(result)} ({result.release_date})")
    for number, item in enumerate(client.iter_items(result.tracks), start=1):
        _echo_track(item, prefix=f"{number:>3}. ")


@cli.command()
@click.argument("playlist")
@click.option("--all", "fetch_all", is_flag=True, help="Fetch every page, not only the first")
@click.pass_context
@_handle_errors
def playlist(ctx: click.Context, playlist: str, fetch_all: bool) -> None:
    """Show a playlist's tracks."""
    client = _open_client(ctx)
    first = _check(client.get_playlist_tracks(extract_spotify_id(playlist)))

    entries = []
    if fetch_all:
        with tqdm(total=first.total, unit="track", desc="Fetching", leave=False) as progress:
            for page in client.iter_pages(first):
                entries.extend(page.items)
                progress.update(len(page.items))
    else:
        entries.extend(first.items)

    for number, entry in enumerate(entries, start=first.offset + 1):
        if entry.track is None:
            click.echo(f"{number:>4}. <unavailable>")
        else:
            _echo_track(entry.track, prefix=f"{number:>4}. ")

    if not fetch_all and first.has_next_page():
        click.echo(f"... {first.total - len(entries)} more, use --all")


# =============================================================================
# User
# =============================================================================

@cli.command()
@click.pass_context
@_handle_errors
def me(ctx: click.Context) -> None:
    """Show the current user's profile."""
    client = _open_client(ctx)
    profile = _check(client.get_private_profile())
    click.echo(f"{profile.display_name or profile.id} ({profile.id})")
    if profile.product:
        click.echo(f"Product: {profile.product}")
    click.echo(f"Followers: {profile.followers.total}")


@cli.command()
@click.argument("tracks", nargs=-1, required=True)
@click.pass_context
@_handle_errors
def save(ctx: click.Context, tracks: tuple[str, ...]) -> None:
    """Save tracks to the user's library."""
    client = _open_client(ctx)
    _check(client.save_tracks([extract_spotify_id(value) for value in tracks]))
    click.echo(f"Saved {len(tracks)} track(s)")


# =============================================================================
# Player
# =============================================================================

device_option = click.option(
    "--device", "device_id",
    type=str,
    default="",
    metavar="<device-id>",
    help="Target device (default: the active device)"
)


@cli.command()
@click.pass_context
@_handle_errors
def devices(ctx: click.Context) -> None:
    """List the user's devices."""
    client = _open_client(ctx)
    result = _check(client.get_devices())
    if not result.devices:
        click.echo("No devices available")
        return
    for device in result.devices:
        marker = "*" if device.is_active else " "
        volume = f"{device.volume_percent}%" if device.volume_percent is not None else "-"
        click.echo(f"{marker} {device.name} [{device.type}] {volume}  {device.id or ''}")


@cli.command("now-playing")
@click.pass_context
@_handle_errors
def now_playing(ctx: click.Context) -> None:
    """Show the currently playing track."""
    client = _open_client(ctx)
    playback = _check(client.get_playing_track())
    if playback.item is None:
        click.echo("Nothing is playing")
        return
    state = "Playing" if playback.is_playing else "Paused"
    position = format_duration(playback.progress_ms or 0)
    click.echo(f"{state}: {playback.item.name} - {_artists(playback.item)} [{position}]")


@cli.command()
@click.argument("uris", nargs=-1)
@click.option("--context", "context_uri", default="", metavar="<uri>", help="Album or playlist URI to play")
@device_option
@click.pass_context
@_handle_errors
def play(ctx: click.Context, uris: tuple[str, ...], context_uri: str, device_id: str) -> None:
    """Start or resume playback."""
    client = _open_client(ctx)
    _check(client.resume_playback(
        device_id=device_id,
        context_uri=context_uri,
        uris=[to_track_uri(uri) for uri in uris] or None,
    ))
    click.echo("Playing")


@cli.command()
@device_option
@click.pass_context
@_handle_errors
def pause(ctx: click.Context, device_id: str) -> None:
    """Pause playback."""
    client = _open_client(ctx)
    _check(client.pause_playback(device_id))
    click.echo("Paused")


@cli.command("next")
@device_option
@click.pass_context
@_handle_errors
def next_track(ctx: click.Context, device_id: str) -> None:
    """Skip to the next track."""
    client = _open_client(ctx)
    _check(client.skip_playback_to_next(device_id))
    click.echo("Skipped to next track")


@cli.command("previous")
@device_option
@click.pass_context
@_handle_errors
def previous_track(ctx: click.Context, device_id: str) -> None:
    """Skip to the previous track."""
    client = _open_client(ctx)
    _check(client.skip_playback_to_previous(device_id))
    click.echo("Skipped to previous track")


@cli.command()
@click.argument("percent", type=click.IntRange(0, 100))
@device_option
@click.pass_context
@_handle_errors
def volume(ctx: click.Context, percent: int, device_id: str) -> None:
    """Set the playback volume."""
    client = _open_client(ctx)
    _check(client.set_volume(percent, device_id))
    click.echo(f"Volume set to {percent}%")


def main() -> None:
    """Entry point for the console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
