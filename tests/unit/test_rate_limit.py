"""Tests for RateLimitHandler pacing and header tracking."""

import time
from unittest.mock import Mock

import httpx

from ghkit import RateLimitHandler


def _response(**headers: str) -> httpx.Response:
    return httpx.Response(200, headers=headers)


class TestHeaderTracking:
    def test_updates_from_headers(self):
        handler = RateLimitHandler()

        handler.update_from_response(
            _response(**{"X-RateLimit-Remaining": "4999", "X-RateLimit-Reset": "1700000000"})
        )

        assert handler.status()["primary_remaining"] == 4999
        assert handler.status()["primary_reset"] == 1700000000.0

    def test_non_numeric_header_ignored(self):
        handler = RateLimitHandler()
        handler.update_from_response(_response(**{"X-RateLimit-Remaining": "lots"}))
        assert handler.status()["primary_remaining"] is None

    def test_missing_headers_leave_state(self):
        handler = RateLimitHandler()
        handler.update_from_response(_response())
        assert handler.status()["primary_remaining"] is None


class TestPacing:
    def test_no_wait_with_budget(self):
        sleep = Mock()
        handler = RateLimitHandler(sleep=sleep)

        handler.before_request()
        handler.before_request()

        sleep.assert_not_called()
        assert handler.status()["secondary_points_used"] == 2

    def test_min_delay_enforced(self):
        sleep = Mock()
        handler = RateLimitHandler(min_delay_ms=1000, sleep=sleep)

        handler.before_request()
        handler.before_request()

        sleep.assert_called_once()
        assert 0 < sleep.call_args[0][0] <= 1.0

    def test_secondary_budget_waits_for_window(self):
        sleep = Mock()
        handler = RateLimitHandler(sleep=sleep)

        handler.before_request(point_cost=720)
        sleep.assert_not_called()
        handler.before_request(point_cost=1)

        sleep.assert_called_once()
        assert handler.status()["secondary_points_used"] == 1

    def test_primary_nearly_exhausted_waits_for_reset(self):
        sleep = Mock()
        handler = RateLimitHandler(sleep=sleep)
        handler.update_from_response(
            _response(
                **{
                    "X-RateLimit-Remaining": "5",
                    "X-RateLimit-Reset": str(int(time.time()) + 3600),
                }
            )
        )

        handler.before_request()

        wait = sleep.call_args[0][0]
        assert wait == RateLimitHandler.MAX_PRIMARY_WAIT

    def test_refund_never_goes_negative(self):
        handler = RateLimitHandler(sleep=Mock())
        handler.before_request()

        handler.refund(5)

        assert handler.status()["secondary_points_used"] == 0
