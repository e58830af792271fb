"""Async HTTP client wrapper for the GitHub API.

This module provides a thin wrapper around httpx that handles:
- Base URL and headers configuration
- Authentication injection from the current session
- Cache-first reads through the response cache
- Rate limit tracking from response headers
- Response parsing and error mapping

Requests are never retried: a failure surfaces to the caller as soon as
it happens.

The HTTPClient is an internal implementation detail and should not be
used directly by library consumers. Use GitHubClient instead.

"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import httpx

from github_browser.exceptions import TransportError, exception_from_response
from github_browser.utils.cache import make_cache_key
from github_browser.utils.rate_limiter import RateLimitTracker

if TYPE_CHECKING:
    from github_browser.auth import AuthStrategy
    from github_browser.config import ClientConfig
    from github_browser.utils.cache import ResponseCache

logger = logging.getLogger(__name__)

AuthSource = Callable[[], Awaitable["AuthStrategy"]]


class HTTPClient:
    """Low-level HTTP client for GitHub API requests.

    Every request runs the same steps: look up the cache, resolve the
    credential, send, record the rate limit, then either raise a typed
    error or decode and cache the body.

    Note:
        This is an internal class. Use GitHubClient for the public API.

    """

    __slots__ = ("_auth_source", "_cache", "_client", "_config", "_rate_limiter")

    # GitHub API headers
    ACCEPT_HEADER = "application/vnd.github+json"
    API_VERSION_HEADER = "2022-11-28"

    def __init__(
        self,
        config: ClientConfig,
        auth_source: AuthSource,
        cache: ResponseCache | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            config: Client configuration.
            auth_source: Coroutine function returning the auth strategy
                for the current credential.
            cache: Response cache, or None to disable caching.

        """
        self._config = config
        self._auth_source = auth_source
        self._cache = cache
        self._client = self._create_client()
        self._rate_limiter = RateLimitTracker()

    @property
    def rate_limiter(self) -> RateLimitTracker:
        """Get the rate limit tracker."""
        return self._rate_limiter

    def _create_client(self) -> httpx.AsyncClient:
        """Create and configure the httpx client.

        Returns:
            Configured httpx.AsyncClient instance.

        """
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=httpx.Timeout(self._config.timeout),
            headers={
                "Accept": self.ACCEPT_HEADER,
                "X-GitHub-Api-Version": self.API_VERSION_HEADER,
                "User-Agent": self._config.user_agent,
            },
            follow_redirects=True,
        )

    async def request(
        self,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        use_cache: bool = True,
        ttl: int | None = None,
        auth: AuthStrategy | None = None,
    ) -> HTTPResponse:
        """Make a GET request to the GitHub API.

        Args:
            endpoint: API endpoint path (e.g., "/users/octocat").
            params: Query parameters.
            headers: Extra request headers, merged over the defaults.
            use_cache: Read from and write to the response cache.
            ttl: Cache time-to-live in seconds (uses the cache default if None).
            auth: Auth strategy to use instead of the session's credential.

        Returns:
            HTTPResponse containing the decoded body.

        Raises:
            ApiError: For non-2xx responses.
            TransportError: If no response was received or its body
                could not be decoded.

        """
        cache_key = make_cache_key(endpoint, params)
        caching = use_cache and self._cache is not None

        if caching:
            cached = await self._cache.get(cache_key)  # type: ignore[union-attr]
            if cached is not None:
                return HTTPResponse(data=cached.data, status_code=200, headers={}, from_cache=True)

        if auth is None:
            auth = await self._auth_source()

        request = self._client.build_request("GET", endpoint, params=params, headers=headers)
        request = auth.apply(request)

        logger.debug("Request: GET %s", request.url)

        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}", original_error=e) from e
        except httpx.ConnectError as e:
            raise TransportError(f"Connection failed: {e}", original_error=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}", original_error=e) from e

        data = self._process_response(response)

        if caching and response.is_success:
            await self._cache.set(cache_key, data, ttl=ttl)  # type: ignore[union-attr]

        return HTTPResponse(
            data=data,
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
        )

    def _process_response(self, response: httpx.Response) -> Any:
        """Process the HTTP response.

        Args:
            response: The httpx response object.

        Returns:
            The decoded JSON body.

        Raises:
            ApiError: If the response indicates an error.
            TransportError: If a success body is not valid JSON.

        """
        headers = {k.lower(): v for k, v in response.headers.items()}

        self._rate_limiter.update_from_headers(headers)

        logger.debug(
            "Response: %d %s (remaining: %s)",
            response.status_code,
            response.reason_phrase,
            headers.get("x-ratelimit-remaining", "N/A"),
        )

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = {}
            error_data = body if isinstance(body, dict) else {}
            raise exception_from_response(
                status_code=response.status_code,
                response_data=error_data,
                headers=headers,
            )

        if response.status_code == 204:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON in response from {response.request.url}", original_error=e
            ) from e

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        *,
        use_cache: bool = True,
        ttl: int | None = None,
    ) -> HTTPResponse:
        """Make a GET request.

        Args:
            endpoint: API endpoint path.
            params: Query parameters.
            use_cache: Read from and write to the response cache.
            ttl: Cache time-to-live in seconds.

        Returns:
            HTTPResponse with the response data.

        """
        return await self.request(endpoint, params=params, use_cache=use_cache, ttl=ttl)

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()


class HTTPResponse:
    """Container for HTTP response data and metadata.

    Attributes:
        data: Parsed JSON response body.
        status_code: HTTP status code (200 for cache hits).
        headers: Response headers with lower-cased names (empty for cache hits).
        from_cache: Whether the data came from the response cache.

    """

    __slots__ = ("data", "from_cache", "headers", "status_code")

    def __init__(
        self,
        data: Any,
        status_code: int,
        headers: dict[str, str],
        from_cache: bool = False,
    ) -> None:
        """Initialize the response container.

        Args:
            data: Parsed response body.
            status_code: HTTP status code.
            headers: Response headers.
            from_cache: Whether the data came from the cache.

        """
        self.data = data
        self.status_code = status_code
        self.headers = headers
        self.from_cache = from_cache

    def __repr__(self) -> str:
        """Return a representation of the response."""
        source = "cache" if self.from_cache else "network"
        return (
            f"HTTPResponse(status={self.status_code}, "
            f"data_type={type(self.data).__name__}, source={source})"
        )
