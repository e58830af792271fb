"""GitHub Browser - a data-access layer for browsing GitHub.

This library provides a typed, async interface for browsing GitHub
repositories: token login persisted locally, a TTL response cache in
SQLite, rate-limit tracking, and paginated issue and pull request lists
with debounced search.

Example:
    >>> from github_browser import GitHubClient
    >>> async with GitHubClient() as client:
    ...     repo = await client.repos.get("octocat", "hello-world")
    ...     print(f"{repo.full_name}: {repo.stargazers_count} stars")

"""

from github_browser.auth import AuthSession, CredentialCheck, LoginResult
from github_browser.client import GitHubClient
from github_browser.config import ClientConfig
from github_browser.exceptions import (
    ApiError,
    ConfigurationError,
    GitHubBrowserError,
    NotFoundError,
    RateLimitError,
    RemoteApiError,
    StorageError,
    TransportError,
)
from github_browser.listing import ListState, ListView
from github_browser.storage import Store

__version__ = "1.0.0"
__author__ = "Bhanu Prasanna"

__all__ = [
    "ApiError",
    "AuthSession",
    "ClientConfig",
    "ConfigurationError",
    "CredentialCheck",
    "GitHubBrowserError",
    "GitHubClient",
    "ListState",
    "ListView",
    "LoginResult",
    "NotFoundError",
    "RateLimitError",
    "RemoteApiError",
    "StorageError",
    "Store",
    "TransportError",
]
