"""Configuration management for the GitHub browser.

Configuration Precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (a ``.env`` file is loaded automatically)
    3. Default values

Environment Variables:
    GITHUB_BROWSER_BASE_URL: API base URL (default: https://api.github.com)
    GITHUB_BROWSER_DB_PATH: Local database file
        (default: ~/.github-browser/github-browser.db)
    GITHUB_BROWSER_CACHE_TTL: Cache time-to-live in seconds (default: 300)
    GITHUB_BROWSER_TIMEOUT: Request timeout in seconds (default: no timeout)

Example:
    >>> config = ClientConfig()
    >>> config = ClientConfig(db_path="/tmp/browser.db", cache_ttl=60)

"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv

from github_browser.exceptions import ConfigurationError

# Auto-load .env file if it exists (searches current dir and parents)
_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    load_dotenv()


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable configuration for the GitHub browser client.

    Attributes:
        base_url: GitHub API base URL.
        db_path: Path of the SQLite file holding credentials and cache.
        cache_enabled: Whether cacheable responses are persisted.
        cache_ttl: Default cache time-to-live in seconds.
        user_cache_ttl: Time-to-live for the authenticated user's profile.
        timeout: Request timeout in seconds, or None for no timeout.
        per_page: Default page size for listings.
        search_debounce: Quiet period before a search query is applied.
        user_agent: User-Agent header for requests.

    """

    DEFAULT_BASE_URL: ClassVar[str] = "https://api.github.com"
    DEFAULT_DB_PATH: ClassVar[str] = str(Path.home() / ".github-browser" / "github-browser.db")
    DEFAULT_CACHE_TTL: ClassVar[int] = 300
    DEFAULT_USER_CACHE_TTL: ClassVar[int] = 60
    DEFAULT_PER_PAGE: ClassVar[int] = 30
    MAX_PER_PAGE: ClassVar[int] = 100

    base_url: str = field(
        default_factory=lambda: _get_env("GITHUB_BROWSER_BASE_URL", ClientConfig.DEFAULT_BASE_URL)
    )
    db_path: str = field(
        default_factory=lambda: _get_env("GITHUB_BROWSER_DB_PATH", ClientConfig.DEFAULT_DB_PATH)
    )
    cache_enabled: bool = True
    cache_ttl: int = field(
        default_factory=lambda: _get_env_int(
            "GITHUB_BROWSER_CACHE_TTL", ClientConfig.DEFAULT_CACHE_TTL
        )
    )
    user_cache_ttl: int = DEFAULT_USER_CACHE_TTL
    timeout: float | None = field(default_factory=lambda: _get_env_float("GITHUB_BROWSER_TIMEOUT"))
    per_page: int = DEFAULT_PER_PAGE
    search_debounce: float = 0.5
    user_agent: str = "github-browser/1.0"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate all configuration values.

        Raises:
            ConfigurationError: If any configuration value is invalid.

        """
        if not self.base_url:
            raise ConfigurationError("base_url cannot be empty")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"Invalid base_url: {self.base_url} (must start with http:// or https://)"
            )

        # Remove trailing slash for consistency
        if self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        if not self.db_path:
            raise ConfigurationError("db_path cannot be empty")

        if self.cache_ttl < 0:
            raise ConfigurationError(f"cache_ttl cannot be negative, got {self.cache_ttl}")
        if self.user_cache_ttl < 0:
            raise ConfigurationError(
                f"user_cache_ttl cannot be negative, got {self.user_cache_ttl}"
            )

        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

        if not 1 <= self.per_page <= self.MAX_PER_PAGE:
            raise ConfigurationError(
                f"per_page must be between 1 and {self.MAX_PER_PAGE}, got {self.per_page}"
            )

        if self.search_debounce < 0:
            raise ConfigurationError(
                f"search_debounce cannot be negative, got {self.search_debounce}"
            )

    def with_overrides(self, **kwargs: object) -> ClientConfig:
        """Create a new configuration with specified overrides.

        Args:
            **kwargs: Configuration values to override.

        Returns:
            A new, validated ClientConfig.

        Example:
            >>> test_config = ClientConfig().with_overrides(cache_enabled=False)

        """
        return replace(self, **kwargs)  # type: ignore[arg-type]


def _get_env(key: str, default: str) -> str:
    """Get environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set.

    Returns:
        The environment variable value or default.

    """
    value = os.environ.get(key)
    if value is None or value == "":
        return default
    return value


def _get_env_int(key: str, default: int) -> int:
    """Get an integer environment variable with default.

    Raises:
        ConfigurationError: If the variable is set but not an integer.

    """
    value = _get_env(key, str(default))
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e


def _get_env_float(key: str) -> float | None:
    """Get an optional float environment variable.

    Raises:
        ConfigurationError: If the variable is set but not a number.

    """
    value = os.environ.get(key)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from e
