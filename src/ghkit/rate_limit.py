"""Adaptive rate limiting for the GitHub REST API.

The client calls ``before_request`` ahead of every round trip and
``update_from_response`` after it. Pacing follows GitHub's documented limits:
- Primary: 5,000 requests/hour (authenticated)
- Secondary: 900 points/minute
- Safety margin: 20% of either budget is held back

Reference: https://docs.github.com/en/rest/using-the-rest-api/rate-limits-for-the-rest-api
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any

import httpx

logger = logging.getLogger("ghkit.rate_limit")

REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"


class RateLimitHandler:
    """Tracks rate-limit headers and delays requests when budgets run low.

    Attributes:
        _rate_limit_remaining: Tracked from X-RateLimit-Remaining header
        _rate_limit_reset: Tracked from X-RateLimit-Reset header (epoch seconds)
        _secondary_points_used: Point cost spent in the current minute window
    """

    PRIMARY_LIMIT = 5000  # requests/hour for tokens
    SECONDARY_LIMIT_POINTS = 900  # points/minute
    SAFETY_MARGIN = 0.20
    MAX_PRIMARY_WAIT = 60.0  # seconds

    def __init__(self, min_delay_ms: int = 0, sleep=time.sleep) -> None:
        self._min_delay_s = min_delay_ms / 1000.0
        self._sleep = sleep

        self._rate_limit_remaining: int | None = None
        self._rate_limit_reset: float | None = None
        self._secondary_points_used: int = 0
        self._secondary_window_start: float = time.monotonic()
        self._last_request_time: float = 0.0

    def before_request(self, point_cost: int = 1) -> None:
        """Enforce both primary and secondary rate limits.

        1. Reset the secondary window every 60 seconds
        2. Wait out the window if the secondary budget would be exceeded
        3. Wait for reset when the primary budget is nearly gone
        4. Enforce the minimum delay between requests

        Args:
            point_cost: Point cost of the upcoming request
        """
        now = time.monotonic()

        if now - self._secondary_window_start >= 60.0:
            self._secondary_points_used = 0
            self._secondary_window_start = now

        effective_secondary = int(
            self.SECONDARY_LIMIT_POINTS * (1 - self.SAFETY_MARGIN)
        )
        if self._secondary_points_used + point_cost > effective_secondary:
            wait_time = 60.0 - (now - self._secondary_window_start)
            if wait_time > 0:
                logger.info(
                    "Secondary rate limit approaching (%d/%d points). Waiting %.1fs",
                    self._secondary_points_used,
                    effective_secondary,
                    wait_time,
                )
                self._sleep(wait_time)
                self._secondary_points_used = 0
                self._secondary_window_start = time.monotonic()

        effective_primary_margin = int(self.PRIMARY_LIMIT * self.SAFETY_MARGIN)
        if (
            self._rate_limit_remaining is not None
            and self._rate_limit_remaining < effective_primary_margin
            and self._rate_limit_reset
        ):
            wait_time = max(0.0, self._rate_limit_reset - time.time())
            if wait_time > 0 and self._rate_limit_remaining < int(
                effective_primary_margin * 0.1
            ):
                logger.warning(
                    "Primary rate limit low (%d remaining). Waiting %.1fs for reset",
                    self._rate_limit_remaining,
                    wait_time,
                )
                self._sleep(min(wait_time, self.MAX_PRIMARY_WAIT))

        elapsed = time.monotonic() - self._last_request_time
        if elapsed < self._min_delay_s:
            self._sleep(self._min_delay_s - elapsed)

        self._last_request_time = time.monotonic()
        self._secondary_points_used += point_cost

    def update_from_response(self, response: httpx.Response) -> None:
        """Update rate limit tracking from response headers.

        Args:
            response: httpx response with rate limit headers
        """
        remaining = response.headers.get(REMAINING_HEADER)
        if remaining is not None:
            try:
                self._rate_limit_remaining = int(remaining)
            except ValueError:
                logger.warning("Non-numeric %s header: %r", REMAINING_HEADER, remaining)

        reset = response.headers.get(RESET_HEADER)
        if reset is not None:
            try:
                self._rate_limit_reset = float(reset)
            except ValueError:
                logger.warning("Non-numeric %s header: %r", RESET_HEADER, reset)

        if (
            self._rate_limit_remaining is not None
            and self._rate_limit_remaining % 500 == 0
        ):
            logger.info(
                "Rate limit status: %d remaining, resets at %s",
                self._rate_limit_remaining,
                (
                    datetime.fromtimestamp(
                        self._rate_limit_reset, tz=timezone.utc
                    ).isoformat()
                    if self._rate_limit_reset
                    else "unknown"
                ),
            )

    def refund(self, point_cost: int = 1) -> None:
        """Give back points charged for a retried attempt."""
        self._secondary_points_used = max(0, self._secondary_points_used - point_cost)

    def status(self) -> dict[str, Any]:
        """Get current rate limit status for metrics/logging.

        Returns:
            Dict with primary_remaining, primary_reset, secondary_points_used
        """
        return {
            "primary_remaining": self._rate_limit_remaining,
            "primary_reset": self._rate_limit_reset,
            "secondary_points_used": self._secondary_points_used,
        }
