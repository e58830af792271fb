"""Rate limit tracking from GitHub's response headers.

The layer only observes the server's quota and reports it; it never
throttles or delays requests on its own.

Headers Used:
    - x-ratelimit-limit: Maximum requests allowed in the window
    - x-ratelimit-remaining: Requests remaining
    - x-ratelimit-reset: Unix timestamp when the window resets
    - x-ratelimit-used: Requests used in the window

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

RATE_LIMIT_HEADERS = (
    "x-ratelimit-limit",
    "x-ratelimit-remaining",
    "x-ratelimit-reset",
    "x-ratelimit-used",
)


@dataclass(frozen=True, slots=True)
class RateLimitInfo:
    """Snapshot of the server's rate-limit budget.

    Attributes:
        limit: Maximum requests allowed in the window.
        remaining: Requests remaining in the current window.
        reset: Unix timestamp when the window resets.
        used: Requests used in the current window.

    """

    limit: int
    remaining: int
    reset: int
    used: int

    @property
    def reset_at(self) -> datetime:
        """Get reset time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.reset, tz=timezone.utc)

    @property
    def is_exceeded(self) -> bool:
        """Check if the quota is used up."""
        return self.remaining <= 0

    @property
    def utilization(self) -> float:
        """Get utilization as a fraction (0.0 to 1.0)."""
        if self.limit == 0:
            return 1.0
        return 1.0 - (self.remaining / self.limit)


def parse_rate_limit_headers(headers: Mapping[str, str]) -> RateLimitInfo | None:
    """Build a snapshot from response headers.

    Args:
        headers: Response headers with lower-cased names.

    Returns:
        RateLimitInfo if all four headers are present and integer-valued,
        None otherwise.

    """
    values = [headers.get(name) for name in RATE_LIMIT_HEADERS]
    if any(value is None or value.strip() == "" for value in values):
        return None

    try:
        limit, remaining, reset, used = (int(value) for value in values)  # type: ignore[arg-type]
    except ValueError:
        logger.warning("Ignoring malformed rate limit headers: %s", values)
        return None

    return RateLimitInfo(limit=limit, remaining=remaining, reset=reset, used=used)


class RateLimitTracker:
    """Holds the latest rate-limit snapshot seen by a client.

    Example:
        >>> tracker = RateLimitTracker()
        >>> tracker.update_from_headers(response_headers)
        >>> tracker.info.remaining
        59

    """

    __slots__ = ("_info",)

    def __init__(self) -> None:
        """Start with no known budget."""
        self._info: RateLimitInfo | None = None

    @property
    def info(self) -> RateLimitInfo | None:
        """The latest complete snapshot, or None before the first one."""
        return self._info

    def update_from_headers(self, headers: Mapping[str, str]) -> bool:
        """Replace the snapshot if the headers carry a complete one.

        Partial or malformed header sets leave the previous snapshot alone.

        Args:
            headers: Response headers with lower-cased names.

        Returns:
            True if the snapshot was replaced.

        """
        info = parse_rate_limit_headers(headers)
        if info is None:
            return False

        self._info = info
        logger.debug(
            "Rate limit: %d/%d remaining (resets at %s)",
            info.remaining,
            info.limit,
            info.reset_at.isoformat(),
        )
        return True

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"RateLimitTracker(info={self._info!r})"
