"""Unit tests for the rate limiter module."""

from __future__ import annotations

from datetime import datetime, timezone

from github_browser.utils.rate_limiter import (
    RateLimitInfo,
    RateLimitTracker,
    parse_rate_limit_headers,
)


class TestRateLimitInfo:
    """Tests for RateLimitInfo dataclass."""

    def test_is_exceeded_when_remaining_zero(self):
        """is_exceeded should be True when remaining is 0."""
        info = RateLimitInfo(limit=60, remaining=0, reset=0, used=60)
        assert info.is_exceeded is True

    def test_is_exceeded_when_remaining_positive(self):
        """is_exceeded should be False when remaining is positive."""
        info = RateLimitInfo(limit=60, remaining=10, reset=0, used=50)
        assert info.is_exceeded is False

    def test_utilization_calculation(self):
        """utilization should calculate correctly."""
        info = RateLimitInfo(limit=100, remaining=75, reset=0, used=25)
        assert info.utilization == 0.25

    def test_utilization_with_zero_limit(self):
        """utilization should be 1.0 when limit is 0."""
        info = RateLimitInfo(limit=0, remaining=0, reset=0, used=0)
        assert info.utilization == 1.0

    def test_reset_at(self):
        """reset_at should be an aware UTC datetime."""
        info = RateLimitInfo(limit=60, remaining=59, reset=1700000000, used=1)
        assert info.reset_at == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


class TestParseHeaders:
    """Tests for parse_rate_limit_headers."""

    def test_full_header_set(self):
        """All four headers should produce a snapshot."""
        info = parse_rate_limit_headers(
            {
                "x-ratelimit-limit": "60",
                "x-ratelimit-remaining": "59",
                "x-ratelimit-reset": "1700000000",
                "x-ratelimit-used": "1",
            }
        )
        assert info == RateLimitInfo(limit=60, remaining=59, reset=1700000000, used=1)

    def test_missing_header(self):
        """A missing header should give None."""
        info = parse_rate_limit_headers(
            {
                "x-ratelimit-limit": "60",
                "x-ratelimit-remaining": "59",
                "x-ratelimit-reset": "1700000000",
            }
        )
        assert info is None

    def test_non_integer_header(self):
        """A malformed value should give None."""
        info = parse_rate_limit_headers(
            {
                "x-ratelimit-limit": "sixty",
                "x-ratelimit-remaining": "59",
                "x-ratelimit-reset": "1700000000",
                "x-ratelimit-used": "1",
            }
        )
        assert info is None


class TestRateLimitTracker:
    """Tests for RateLimitTracker class."""

    def test_starts_empty(self):
        """No snapshot before the first response."""
        assert RateLimitTracker().info is None

    def test_update_replaces_snapshot(self):
        """A complete header set should replace the snapshot."""
        tracker = RateLimitTracker()
        headers = {
            "x-ratelimit-limit": "60",
            "x-ratelimit-remaining": "59",
            "x-ratelimit-reset": "1700000000",
            "x-ratelimit-used": "1",
        }

        assert tracker.update_from_headers(headers) is True
        assert tracker.info == RateLimitInfo(limit=60, remaining=59, reset=1700000000, used=1)

    def test_partial_headers_leave_snapshot(self):
        """Missing x-ratelimit-used should not touch the previous snapshot."""
        tracker = RateLimitTracker()
        tracker.update_from_headers(
            {
                "x-ratelimit-limit": "60",
                "x-ratelimit-remaining": "59",
                "x-ratelimit-reset": "1700000000",
                "x-ratelimit-used": "1",
            }
        )
        before = tracker.info

        changed = tracker.update_from_headers(
            {
                "x-ratelimit-limit": "60",
                "x-ratelimit-remaining": "10",
                "x-ratelimit-reset": "1700000000",
            }
        )

        assert changed is False
        assert tracker.info is before
