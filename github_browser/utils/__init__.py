"""Utility modules for the GitHub browser."""

from github_browser.utils.cache import ResponseCache, make_cache_key
from github_browser.utils.debounce import Debouncer
from github_browser.utils.http import HTTPClient, HTTPResponse
from github_browser.utils.logger import configure_logging
from github_browser.utils.rate_limiter import (
    RateLimitInfo,
    RateLimitTracker,
    parse_rate_limit_headers,
)

__all__ = [
    "Debouncer",
    "HTTPClient",
    "HTTPResponse",
    "RateLimitInfo",
    "RateLimitTracker",
    "ResponseCache",
    "configure_logging",
    "make_cache_key",
    "parse_rate_limit_headers",
]
