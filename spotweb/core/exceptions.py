"""
Exception classes for spotweb.

This module defines the exceptions raised by the client. Expected service
failures (404, 403, exhausted retries, ...) are NOT exceptions: they come
back as ErrorResult values so callers can branch on the status code. The
classes below cover the conditions that cannot be expressed as a result.

Exception Hierarchy:
    SpotWebError (base)
        ConfigError - Configuration file or environment issues
        TransportError - Network failure before any HTTP status was received
        MalformedResponseError - Response body could not be deserialized
        ServiceError - An ErrorResult promoted to an exception on request
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spotweb.models.base import ErrorResult


class SpotWebError(Exception):
    """
    Base exception for all spotweb errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (URL, status, ...).

    Example:
        try:
            track = client.get_track("4cOdK2wGLETKBW3PvgPWqT")
        except SpotWebError as e:
            logger.error(f"Request failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': URL of the request involved
                     - 'method': HTTP method of the request
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SpotWebError):
    """
    Raised when the configuration file or environment is invalid.

    Common causes:
        - Explicit config path does not exist
        - Invalid YAML syntax
        - Wrong value types (e.g. negative retry_times)

    Example:
        raise ConfigError(
            "'retry.retry_times' must be a non-negative integer",
            details={'field': 'retry.retry_times', 'value': -1}
        )
    """
    pass


class TransportError(SpotWebError):
    """
    Raised when a request fails before any HTTP status is obtained.

    DNS failures, refused connections, timeouts and dropped sockets end up
    here. The executor never retries these; retries only apply to HTTP
    status outcomes.

    Attributes:
        method: HTTP method of the failed request.
        url: URL of the failed request.
    """

    def __init__(
        self,
        message: str,
        method: str = "",
        url: str = "",
        details: dict | None = None
    ) -> None:
        super().__init__(message, details)
        self.method = method
        self.url = url


class MalformedResponseError(SpotWebError):
    """
    Raised when a successful response body cannot be deserialized.

    Distinct from a service failure: the service answered 2xx, but the body
    was not valid JSON or did not have the expected shape.

    Attributes:
        status_code: HTTP status of the response.
        body: The first 200 characters of the offending body.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        body: str = "",
        details: dict | None = None
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body[:200]


class ServiceError(SpotWebError):
    """
    An ErrorResult raised as an exception.

    Only produced when the caller asks for it, through
    BasicModel.raise_for_error() or the page iteration helpers, which cannot
    return an error value mid-iteration.

    Attributes:
        error: The ErrorResult describing the failure.
        status_code: Shortcut for error.status_code.
    """

    def __init__(self, error: "ErrorResult", details: dict | None = None) -> None:
        super().__init__(
            f"Spotify returned {error.status_code}: {error.message or 'no message'}",
            details
        )
        self.error = error
        self.status_code = error.status_code
