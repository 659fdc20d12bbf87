"""
Retry policy for failed HTTP status outcomes.

RetryConfig holds the process-wide settings; the client shares one instance
and callers may mutate it between requests. Each logical request copies it
into a RetryPolicy, a small state machine that classifies every response:

    Attempting(n) --response--> SUCCESS | RETRY | FATAL

    SUCCESS: status in [200, 299]
    RETRY:   retries enabled, status in retry_error_codes, and budget left
    FATAL:   everything else; the response becomes the final ErrorResult

Budget accounting:
    - Every retry is charged against retry_times, except a 429 when
      too_many_requests_consumes_a_retry is False. Those "free" retries are
      bounded by rate_limit_retry_cap instead, so a service that keeps
      answering 429 cannot loop a request forever.
    - The charge happens in record_retry(), called right before the retry is
      sent. A request cancelled while waiting is never charged.

Wait duration:
    A Retry-After header (seconds) on a 429 or 503 response wins over the
    configured retry_after_ms. A zero, negative, missing or malformed header
    falls back to retry_after_ms.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum

from spotweb.http.transport import Response


DEFAULT_RETRY_ERROR_CODES = frozenset({500, 502, 503, 504})
TOO_MANY_REQUESTS = 429

# Statuses whose Retry-After header is honored
RETRY_AFTER_STATUSES = frozenset({TOO_MANY_REQUESTS, 503})


@dataclass
class RetryConfig:
    """
    Automatic retry settings.

    Attributes:
        enabled: Whether failed requests are retried at all.
        retry_after_ms: Default wait between attempts, in milliseconds.
        retry_times: Retry budget: maximum number of charged retries.
        retry_error_codes: Statuses that trigger a retry.
        too_many_requests_consumes_a_retry: Whether a retried 429 is charged.
        rate_limit_retry_cap: Maximum number of free 429 retries.

    Example:
        retry = RetryConfig(enabled=True, retry_times=3)
        retry.retry_error_codes = retry.retry_error_codes | {429}
    """
    enabled: bool = False
    retry_after_ms: int = 50
    retry_times: int = 10
    retry_error_codes: frozenset[int] = field(default_factory=lambda: DEFAULT_RETRY_ERROR_CODES)
    too_many_requests_consumes_a_retry: bool = False
    rate_limit_retry_cap: int = 10

    def __post_init__(self) -> None:
        self.retry_error_codes = frozenset(self.retry_error_codes)
        for name in ("retry_after_ms", "retry_times", "rate_limit_retry_cap"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    def snapshot(self) -> "RetryConfig":
        """Return an independent copy, used as the settings of one request."""
        return replace(self)


class RetryOutcome(Enum):
    SUCCESS = "success"
    RETRY = "retry"
    FATAL = "fatal"


@dataclass(frozen=True)
class RetryDecision:
    """
    Verdict of the retry policy for one response.

    Attributes:
        outcome: SUCCESS, RETRY or FATAL.
        delay_ms: Wait before the next attempt (RETRY only).
        consumes_retry: Whether the retry is charged against retry_times.
    """
    outcome: RetryOutcome
    delay_ms: int = 0
    consumes_retry: bool = False


def parse_retry_after(value: str | None) -> int | None:
    """
    Convert a Retry-After header value (seconds) to milliseconds.

    Returns:
        The wait in milliseconds, or None when the header is missing, zero,
        negative or not a number (HTTP dates are not supported).

    Example:
        parse_retry_after("2")    # 2000
        parse_retry_after("0.5")  # 500
        parse_retry_after("-1")   # None
    """
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds <= 0:
        return None
    return int(seconds * 1000)


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


class RetryPolicy:
    """
    Retry state machine for a single logical request.

    Attributes:
        config: The settings snapshot this request runs with.
        attempts: Responses evaluated so far.
        retries_used: Charged retries performed.
        free_retries_used: Uncharged 429 retries performed.
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config
        self.attempts = 0
        self.retries_used = 0
        self.free_retries_used = 0

    @property
    def retries_left(self) -> int:
        return max(self.config.retry_times - self.retries_used, 0)

    def evaluate(self, response: Response) -> RetryDecision:
        """Classify a response. Does not charge the budget."""
        self.attempts += 1
        status = response.status_code

        if is_success(status):
            return RetryDecision(RetryOutcome.SUCCESS)

        if not self.config.enabled or status not in self.config.retry_error_codes:
            return RetryDecision(RetryOutcome.FATAL)

        consumes = status != TOO_MANY_REQUESTS or self.config.too_many_requests_consumes_a_retry
        if consumes and self.retries_used >= self.config.retry_times:
            return RetryDecision(RetryOutcome.FATAL)
        if not consumes and self.free_retries_used >= self.config.rate_limit_retry_cap:
            return RetryDecision(RetryOutcome.FATAL)

        return RetryDecision(
            RetryOutcome.RETRY,
            delay_ms=self.wait_ms(response),
            consumes_retry=consumes,
        )

    def record_retry(self, decision: RetryDecision) -> None:
        """Charge a RETRY decision, right before the retry is sent."""
        if decision.outcome is not RetryOutcome.RETRY:
            raise ValueError(f"Cannot record a {decision.outcome.value} decision as a retry")
        if decision.consumes_retry:
            self.retries_used += 1
        else:
            self.free_retries_used += 1

    def wait_ms(self, response: Response) -> int:
        if response.status_code in RETRY_AFTER_STATUSES:
            hinted = parse_retry_after(response.header("Retry-After"))
            if hinted is not None:
                return hinted
        return self.config.retry_after_ms
