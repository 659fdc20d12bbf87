"""
Core module for spotweb.

This module provides the foundational components used throughout the package:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging setup used by the CLI, and logging helpers

Usage:
    from spotweb.core import (
        Config, load_config,
        setup_logging, get_logger,
        SpotWebError, TransportError, MalformedResponseError
    )
"""

from spotweb.core.config import (
    AuthConfig,
    Config,
    HttpConfig,
    LoggingConfig,
    RetrySettings,
    load_config,
)
from spotweb.core.exceptions import (
    ConfigError,
    MalformedResponseError,
    ServiceError,
    SpotWebError,
    TransportError,
)
from spotweb.core.logger import (
    get_logger,
    log_request_failure,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "AuthConfig",
    "RetrySettings",
    "HttpConfig",
    "LoggingConfig",
    "load_config",
    # Exceptions
    "SpotWebError",
    "ConfigError",
    "TransportError",
    "MalformedResponseError",
    "ServiceError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_request_failure",
    "shutdown_logging",
]
