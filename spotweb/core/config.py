"""
Configuration management for spotweb.

This module loads the optional spotweb.yaml file, applies environment
variable overrides (a .env file in the working directory is honored) and
returns a frozen Config object. The runtime objects the client mutates
(Credentials, RetryConfig) are built from it by SpotifyWebAPI.from_config().

Configuration File Location:
    By default spotweb.yaml in the current working directory. The file is
    optional; without it every section takes its defaults.

Example spotweb.yaml:
    auth:
      token_type: "Bearer"
      access_token: ""          # Usually supplied via SPOTIFY_ACCESS_TOKEN
      use_auth: true
      client_id: ""             # Only used by the CLI to obtain a token
      client_secret: ""

    retry:
      enabled: true
      retry_after_ms: 50
      retry_times: 10
      retry_error_codes: [500, 502, 503, 504]
      too_many_requests_consumes_a_retry: false
      rate_limit_retry_cap: 10

    http:
      base_url: "https://api.spotify.com/v1"
      timeout: 30

    logging:
      level: "INFO"
      directory: null           # Log files are only written when set

Environment Overrides:
    SPOTIFY_ACCESS_TOKEN, SPOTIFY_TOKEN_TYPE, SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET, SPOTWEB_LOG_LEVEL
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from spotweb.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "spotweb.yaml"

DEFAULT_BASE_URL = "https://api.spotify.com/v1"
DEFAULT_RETRY_ERROR_CODES = (500, 502, 503, 504)

ENV_OVERRIDES = {
    "SPOTIFY_ACCESS_TOKEN": ("auth", "access_token"),
    "SPOTIFY_TOKEN_TYPE": ("auth", "token_type"),
    "SPOTIFY_CLIENT_ID": ("auth", "client_id"),
    "SPOTIFY_CLIENT_SECRET": ("auth", "client_secret"),
    "SPOTWEB_LOG_LEVEL": ("logging", "level"),
}


@dataclass(frozen=True)
class AuthConfig:
    """
    Authentication settings.

    Attributes:
        token_type: Token type placed before the token in the Authorization
                    header. Spotify issues "Bearer" tokens.
        access_token: The access token, used as is. The client never
                      refreshes it.
        use_auth: Whether to send the Authorization header at all.
        client_id: Spotify application client ID. Only used by the CLI to
                   obtain a client-credentials token when no access token is
                   configured.
        client_secret: Spotify application client secret (CLI only).
    """
    token_type: str = "Bearer"
    access_token: str = ""
    use_auth: bool = True
    client_id: str = ""
    client_secret: str = ""


@dataclass(frozen=True)
class RetrySettings:
    """
    Automatic retry settings, copied into a RetryConfig at client creation.

    Attributes:
        enabled: Retry failed requests whose status is in retry_error_codes.
        retry_after_ms: Default wait between attempts in milliseconds, used
                        when the service sends no usable Retry-After header.
        retry_times: Retry budget: maximum number of additional attempts.
        retry_error_codes: HTTP statuses that trigger a retry. 429 is only
                           retried when listed here.
        too_many_requests_consumes_a_retry: Whether a retried 429 is charged
                                            against retry_times.
        rate_limit_retry_cap: Upper bound for free (uncharged) 429 retries.
    """
    enabled: bool = False
    retry_after_ms: int = 50
    retry_times: int = 10
    retry_error_codes: tuple[int, ...] = DEFAULT_RETRY_ERROR_CODES
    too_many_requests_consumes_a_retry: bool = False
    rate_limit_retry_cap: int = 10


@dataclass(frozen=True)
class HttpConfig:
    """
    Transport settings.

    Attributes:
        base_url: Root of the Web API, without trailing slash.
        timeout: Per-request timeout in seconds.
    """
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings used by the CLI.

    Attributes:
        level: Console log level name.
        directory: Where log files are written, or None for console only.
    """
    level: str = "INFO"
    directory: Path | None = None


@dataclass(frozen=True)
class Config:
    """
    Complete configuration.

    Created by load_config() and treated as immutable.

    Example:
        config = load_config()
        client = SpotifyWebAPI.from_config(config)
    """
    auth: AuthConfig = field(default_factory=AuthConfig)
    retry: RetrySettings = field(default_factory=RetrySettings)
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Path | None = None, use_env: bool = True) -> Config:
    """
    Load and validate configuration.

    Args:
        config_path: Optional explicit path to a config file. If None, looks
                     for spotweb.yaml in the current working directory and
                     falls back to defaults when it doesn't exist.
        use_env: Whether to read .env and apply environment overrides.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is missing, the YAML is
                     invalid, or a value has the wrong type or range.

    Behavior:
        1. Locate and parse the YAML file (if any)
        2. Apply environment overrides on top of the raw sections
        3. Validate and convert every section, applying defaults
    """
    if config_path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        raw_config = _read_yaml(candidate) if candidate.exists() else {}
    else:
        if not config_path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                details={"file_path": str(config_path)}
            )
        raw_config = _read_yaml(config_path)

    if use_env:
        load_dotenv(Path.cwd() / ".env")
        _apply_environment(raw_config)

    return Config(
        auth=_parse_auth_config(_section(raw_config, "auth")),
        retry=_parse_retry_settings(_section(raw_config, "retry")),
        http=_parse_http_config(_section(raw_config, "http")),
        logging=_parse_logging_config(_section(raw_config, "logging")),
    )


def _read_yaml(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file is a valid "all defaults" configuration
    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return raw_config


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _apply_environment(raw_config: dict[str, Any]) -> None:
    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if not value:
            continue
        target = raw_config.get(section)
        if not isinstance(target, dict):
            target = {}
            raw_config[section] = target
        target[key] = value


def _get_str(section: dict[str, Any], key: str, name: str, default: str) -> str:
    value = section.get(key, default)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(
            f"'{name}.{key}' must be a string",
            details={"field": f"{name}.{key}", "value": value}
        )
    return value.strip()


def _get_bool(section: dict[str, Any], key: str, name: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(
            f"'{name}.{key}' must be true or false",
            details={"field": f"{name}.{key}", "value": value}
        )
    return value


def _get_non_negative_int(section: dict[str, Any], key: str, name: str, default: int) -> int:
    value = section.get(key, default)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(
            f"'{name}.{key}' must be a non-negative integer",
            details={"field": f"{name}.{key}", "value": value}
        )
    return value


def _parse_auth_config(section: dict[str, Any]) -> AuthConfig:
    token_type = _get_str(section, "token_type", "auth", "Bearer")
    if not token_type:
        raise ConfigError(
            "'auth.token_type' must be a non-empty string",
            details={"field": "auth.token_type"}
        )

    return AuthConfig(
        token_type=token_type,
        access_token=_get_str(section, "access_token", "auth", ""),
        use_auth=_get_bool(section, "use_auth", "auth", True),
        client_id=_get_str(section, "client_id", "auth", ""),
        client_secret=_get_str(section, "client_secret", "auth", ""),
    )


def _parse_retry_settings(section: dict[str, Any]) -> RetrySettings:
    raw_codes = section.get("retry_error_codes", list(DEFAULT_RETRY_ERROR_CODES))
    if not isinstance(raw_codes, list) or not all(
        isinstance(code, int) and not isinstance(code, bool) and 100 <= code <= 599
        for code in raw_codes
    ):
        raise ConfigError(
            "'retry.retry_error_codes' must be a list of HTTP status codes",
            details={"field": "retry.retry_error_codes", "value": raw_codes}
        )

    return RetrySettings(
        enabled=_get_bool(section, "enabled", "retry", False),
        retry_after_ms=_get_non_negative_int(section, "retry_after_ms", "retry", 50),
        retry_times=_get_non_negative_int(section, "retry_times", "retry", 10),
        retry_error_codes=tuple(sorted(set(raw_codes))),
        too_many_requests_consumes_a_retry=_get_bool(
            section, "too_many_requests_consumes_a_retry", "retry", False
        ),
        rate_limit_retry_cap=_get_non_negative_int(section, "rate_limit_retry_cap", "retry", 10),
    )


def _parse_http_config(section: dict[str, Any]) -> HttpConfig:
    base_url = _get_str(section, "base_url", "http", DEFAULT_BASE_URL)
    if not base_url.startswith(("http://", "https://")):
        raise ConfigError(
            "'http.base_url' must be an http(s) URL",
            details={"field": "http.base_url", "value": base_url}
        )

    timeout = section.get("timeout", 30)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(
            "'http.timeout' must be a positive number of seconds",
            details={"field": "http.timeout", "value": timeout}
        )

    return HttpConfig(base_url=base_url.rstrip("/"), timeout=float(timeout))


def _parse_logging_config(section: dict[str, Any]) -> LoggingConfig:
    level = _get_str(section, "level", "logging", "INFO").upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigError(
            f"'logging.level' must be a log level name, got '{level}'",
            details={"field": "logging.level", "value": level}
        )

    directory = None
    raw_directory = section.get("directory")
    if raw_directory is not None:
        if not isinstance(raw_directory, str) or not raw_directory.strip():
            raise ConfigError(
                "'logging.directory' must be a non-empty string path or null",
                details={"field": "logging.directory"}
            )
        directory = Path(raw_directory.strip()).expanduser().resolve()

    return LoggingConfig(level=level, directory=directory)
