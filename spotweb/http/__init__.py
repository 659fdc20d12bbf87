"""
HTTP layer for spotweb.

    - transport: Request/Response types and the requests/aiohttp transports
    - retry: Retry settings and the per-request retry state machine
    - executor: The request pipeline shared by the blocking and asyncio paths
    - pagination: Continuation of Page and CursorPage results
"""

from spotweb.http.executor import Backoff, Credentials, RequestExecutor, encode_body
from spotweb.http.pagination import Paginator
from spotweb.http.retry import (
    DEFAULT_RETRY_ERROR_CODES,
    RetryConfig,
    RetryDecision,
    RetryOutcome,
    RetryPolicy,
    parse_retry_after,
)
from spotweb.http.transport import (
    JSON_CONTENT_TYPE,
    AiohttpTransport,
    AsyncTransport,
    Request,
    RequestsTransport,
    Response,
    Transport,
)

__all__ = [
    # Transport
    "Request",
    "Response",
    "Transport",
    "AsyncTransport",
    "RequestsTransport",
    "AiohttpTransport",
    "JSON_CONTENT_TYPE",
    # Retry
    "RetryConfig",
    "RetryPolicy",
    "RetryDecision",
    "RetryOutcome",
    "DEFAULT_RETRY_ERROR_CODES",
    "parse_retry_after",
    # Executor
    "Credentials",
    "Backoff",
    "RequestExecutor",
    "encode_body",
    # Pagination
    "Paginator",
]
