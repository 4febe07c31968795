"""Rate limit retry handling for Jira REST API calls.

This module provides:
- calculate_backoff_delay: Capped exponential backoff with jitter
- parse_retry_after: Retry-After header parsing (seconds or HTTP-date)
- send_with_retry: Retry loop that re-sends a request on HTTP 429

Only HTTP 429 is retried. Any other response, successful or not, is
handed back to the caller immediately.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import httpx

from jiralookup.config.fetch_config import RetryConfig
from jiralookup.integrations.exceptions import RateLimitExhaustedError

logger = logging.getLogger(__name__)

HTTP_TOO_MANY_REQUESTS = 429

# Type aliases for injectable collaborators (tests pass deterministic versions)
Sleeper = Callable[[float], None]
RandomSource = Callable[[], float]
Clock = Callable[[], datetime]


def calculate_backoff_delay(
    attempt: int,
    config: RetryConfig,
    random_source: RandomSource = random.random,
) -> float:
    """Calculate the delay before a retry using exponential backoff with jitter.

    Args:
        attempt: Zero-indexed retry number
        config: Retry configuration
        random_source: Returns a uniform value in [0, 1)

    Returns:
        Delay in seconds

    Example delays with the default config:
        Attempt 0: 0.8 - 1.2s
        Attempt 1: 1.6 - 2.4s
        Attempt 2: 3.2 - 4.8s
        Attempt 5+: 24.0 - 36.0s (32s capped at 30s)
    """
    exponential_delay = min(config.base_delay_seconds * (2**attempt), config.max_delay_seconds)
    multiplier = 1 - config.jitter_factor + 2 * config.jitter_factor * random_source()
    return exponential_delay * multiplier


def parse_retry_after(header: str | None, now: datetime | None = None) -> float | None:
    """Parse a Retry-After header value.

    Supports both RFC 7231 forms:
    - delay-seconds: an integer number of seconds (e.g., "120")
    - HTTP-date: e.g., "Sun, 26 Jan 2026 12:00:00 GMT"

    Args:
        header: Raw header value, or None when absent
        now: Current time for HTTP-date comparison (defaults to UTC now)

    Returns:
        Delay in seconds, or None when there is no usable hint
        (absent, unparsable, out of range, non-positive, or a date in the past)
    """
    if not header:
        return None
    header = header.strip()

    try:
        seconds = int(header)
    except ValueError:
        pass
    else:
        if seconds <= 0:
            return None
        try:
            return float(seconds)
        except OverflowError:
            logger.debug("Ignoring out-of-range Retry-After header: %r", header)
            return None

    try:
        retry_at = parsedate_to_datetime(header)
    except (TypeError, ValueError):
        logger.debug("Ignoring unparsable Retry-After header: %r", header)
        return None

    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=UTC)
    current = now or datetime.now(UTC)
    delay = (retry_at - current).total_seconds()
    return delay if delay > 0 else None


def send_with_retry(
    send: Callable[[], httpx.Response],
    config: RetryConfig,
    *,
    sleeper: Sleeper = time.sleep,
    random_source: RandomSource = random.random,
    clock: Clock | None = None,
    ticket_id: str | None = None,
) -> httpx.Response:
    """Send a request, retrying while the server answers HTTP 429.

    The body of each 429 response is discarded. The delay before the next
    attempt comes from the Retry-After header when it holds a usable hint,
    capped at max_delay_seconds, otherwise from calculate_backoff_delay.

    Args:
        send: Performs one HTTP request and returns its response
        config: Retry configuration
        sleeper: Blocks for the given number of seconds
        random_source: Jitter source passed to calculate_backoff_delay
        clock: Returns the current UTC time for HTTP-date hints
        ticket_id: Ticket being fetched, for error context

    Returns:
        The first response whose status is not 429

    Raises:
        RateLimitExhaustedError: If every attempt was answered with 429
        httpx.HTTPError: Propagated from send() without retrying
    """
    total_wait_time = 0.0

    for attempt in range(config.max_retries + 1):
        response = send()
        if response.status_code != HTTP_TOO_MANY_REQUESTS:
            return response

        response.close()

        if attempt >= config.max_retries:
            break

        now = clock() if clock is not None else None
        delay = parse_retry_after(response.headers.get("Retry-After"), now=now)
        if delay is None:
            delay = calculate_backoff_delay(attempt, config, random_source)
        else:
            # Server hints are bounded by the same cap as computed backoff
            delay = min(delay, config.max_delay_seconds)

        logger.warning(
            "Rate limited (HTTP 429), retrying in %.1fs (attempt %d/%d)",
            delay,
            attempt + 1,
            config.max_retries,
        )
        total_wait_time += delay
        sleeper(delay)

    raise RateLimitExhaustedError(
        attempts=config.max_retries,
        total_wait_time=total_wait_time,
        ticket_id=ticket_id,
    )


__all__ = [
    "HTTP_TOO_MANY_REQUESTS",
    "calculate_backoff_delay",
    "parse_retry_after",
    "send_with_retry",
]
