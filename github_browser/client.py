"""Main GitHub browser client.

This module provides the main entry point for the data-access layer.
The GitHubClient wires together the local store, the login session,
the HTTP client and all endpoint groups, and manages their lifecycle.

Example:
    >>> from github_browser import GitHubClient
    >>>
    >>> async with GitHubClient() as client:
    ...     result = await client.session.login("ghp_xxx")
    ...     repo = await client.repos.get("octocat", "hello-world")

"""

from __future__ import annotations

import logging

from github_browser.auth import AuthSession, AuthStrategy
from github_browser.config import ClientConfig
from github_browser.endpoints.issues import IssuesEndpoint
from github_browser.endpoints.pulls import PullsEndpoint
from github_browser.endpoints.repos import ReposEndpoint
from github_browser.endpoints.search import SearchEndpoint
from github_browser.endpoints.users import UsersEndpoint
from github_browser.exceptions import StorageError
from github_browser.storage import Store
from github_browser.utils.cache import ResponseCache
from github_browser.utils.http import HTTPClient
from github_browser.utils.rate_limiter import RateLimitInfo

logger = logging.getLogger(__name__)


class GitHubClient:
    """GitHub API client with typed endpoints, caching and login.

    Attributes:
        users: User-related API endpoints.
        repos: Repository-related API endpoints.
        issues: Issue listing endpoints.
        pulls: Pull request listing endpoints.
        search: Search API endpoints.
        session: Login session.

    Example:
        >>> client = GitHubClient(db_path="/tmp/browser.db")
        >>> await client.open()
        >>> user = await client.users.get("octocat")
        >>> print(client.rate_limit)
        >>> await client.close()

    Context Manager:
        >>> async with GitHubClient() as client:
        ...     user = await client.users.get("octocat")

    """

    __slots__ = (
        "_cache",
        "_config",
        "_http",
        "_issues",
        "_pulls",
        "_repos",
        "_search",
        "_session",
        "_store",
        "_users",
    )

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        store: Store | None = None,
        base_url: str | None = None,
        db_path: str | None = None,
        cache_enabled: bool | None = None,
        cache_ttl: int | None = None,
        timeout: float | None = None,
        per_page: int | None = None,
    ) -> None:
        """Initialize the client.

        Nothing touches the network or the filesystem until first use.

        Args:
            config: Base configuration (defaults to ``ClientConfig()``).
            store: Store to use instead of one at ``config.db_path``.
            base_url: GitHub API base URL, for GitHub Enterprise.
            db_path: Local database file.
            cache_enabled: Enable response caching. Default True.
            cache_ttl: Cache time-to-live in seconds. Default 300.
            timeout: Request timeout in seconds. Default none.
            per_page: Default items per page for listings. Default 30.

        Example:
            >>> client = GitHubClient(base_url="https://github.example.com/api/v3")
            >>> client = GitHubClient(cache_enabled=False)

        """
        # Build configuration with overrides
        config_kwargs: dict[str, object] = {}
        if base_url is not None:
            config_kwargs["base_url"] = base_url
        if db_path is not None:
            config_kwargs["db_path"] = db_path
        if cache_enabled is not None:
            config_kwargs["cache_enabled"] = cache_enabled
        if cache_ttl is not None:
            config_kwargs["cache_ttl"] = cache_ttl
        if timeout is not None:
            config_kwargs["timeout"] = timeout
        if per_page is not None:
            config_kwargs["per_page"] = per_page

        base = config if config is not None else ClientConfig()
        self._config = base.with_overrides(**config_kwargs) if config_kwargs else base

        self._store = store if store is not None else Store(self._config.db_path)
        self._cache = ResponseCache(self._store, default_ttl=self._config.cache_ttl)

        self._http = HTTPClient(
            self._config,
            auth_source=self._current_auth,
            cache=self._cache if self._config.cache_enabled else None,
        )
        self._session = AuthSession(self._store, self._http)

        self._users = UsersEndpoint(self._http, self._config)
        self._repos = ReposEndpoint(self._http, self._config)
        self._issues = IssuesEndpoint(self._http, self._config)
        self._pulls = PullsEndpoint(self._http, self._config)
        self._search = SearchEndpoint(self._http, self._config)

    async def _current_auth(self) -> AuthStrategy:
        return await self._session.current_auth()

    # =========================================================================
    # Endpoint Properties
    # =========================================================================

    @property
    def users(self) -> UsersEndpoint:
        """Access user-related API endpoints."""
        return self._users

    @property
    def repos(self) -> ReposEndpoint:
        """Access repository-related API endpoints."""
        return self._repos

    @property
    def issues(self) -> IssuesEndpoint:
        """Access issue listing endpoints."""
        return self._issues

    @property
    def pulls(self) -> PullsEndpoint:
        """Access pull request listing endpoints."""
        return self._pulls

    @property
    def search(self) -> SearchEndpoint:
        """Access search API endpoints."""
        return self._search

    # =========================================================================
    # Client Properties
    # =========================================================================

    @property
    def session(self) -> AuthSession:
        """Get the login session.

        Example:
            >>> result = await client.session.login("ghp_xxx")
            >>> await client.session.logout()

        """
        return self._session

    @property
    def config(self) -> ClientConfig:
        """Get the immutable client configuration."""
        return self._config

    @property
    def store(self) -> Store:
        """Get the local store."""
        return self._store

    @property
    def rate_limit(self) -> RateLimitInfo | None:
        """Get the latest rate-limit snapshot.

        Returns:
            The snapshot from the most recent response that carried the
            full set of rate-limit headers, or None before any such response.

        Example:
            >>> info = client.rate_limit
            >>> if info:
            ...     print(f"{info.remaining}/{info.limit} left")

        """
        return self._http.rate_limiter.info

    # =========================================================================
    # Cache Maintenance
    # =========================================================================

    async def clear_cache(self) -> int:
        """Remove every cached response.

        Returns:
            Number of entries removed.

        Raises:
            StorageError: If the store is unavailable.

        """
        removed = await self._cache.clear()
        logger.info("Cleared %d cached responses", removed)
        return removed

    async def sweep_cache(self) -> int:
        """Remove expired cached responses, keeping live ones.

        Returns:
            Number of entries removed.

        Raises:
            StorageError: If the store is unavailable.

        """
        return await self._cache.cleanup_expired()

    async def cache_size(self) -> int:
        """Count stored responses, including expired ones not yet swept.

        Raises:
            StorageError: If the store is unavailable.

        """
        return await self._cache.size()

    # =========================================================================
    # Lifecycle Methods
    # =========================================================================

    async def open(self) -> GitHubClient:
        """Open the local store ahead of first use.

        A store that can't be opened is not fatal: the client keeps
        working without cache or persisted login.

        Returns:
            Self, for chaining.

        """
        try:
            await self._store.open()
        except StorageError as e:
            logger.warning("Running without local storage: %s", e.message)
        return self

    async def close(self) -> None:
        """Close the HTTP client and the store.

        Example:
            >>> client = GitHubClient()
            >>> try:
            ...     user = await client.users.get("octocat")
            ... finally:
            ...     await client.close()

        """
        await self._http.close()
        await self._store.close()

    async def __aenter__(self) -> GitHubClient:
        """Enter context manager, opening the store."""
        return await self.open()

    async def __aexit__(self, *args: object) -> None:
        """Exit context manager and close the client."""
        await self.close()

    def __repr__(self) -> str:
        """Return a string representation of the client."""
        return f"GitHubClient(base_url={self._config.base_url!r}, store={self._store!r})"
