"""Exception hierarchy for the GitHub browser data layer.

Every failure the layer can produce is one of a small, closed set of
exception types. Callers dispatch on the concrete class rather than
probing attributes of an untyped error object.

Exception Hierarchy:
    GitHubBrowserError (base)
    ├── ConfigurationError     - Invalid client configuration
    ├── ApiError               - The API answered with a non-2xx status
    │   ├── NotFoundError      - 404, resource absent or private
    │   ├── RateLimitError     - 403, quota exhausted or access denied
    │   └── RemoteApiError     - Any other non-2xx status
    ├── TransportError         - No HTTP status was ever received
    └── StorageError           - Local database unavailable

Example:
    >>> try:
    ...     repo = await client.repos.get("octocat", "missing")
    ... except NotFoundError as e:
    ...     print(f"Not found: {e.message}")
    ... except RateLimitError:
    ...     print("Slow down or sign in")

"""

from __future__ import annotations

from typing import Any


class GitHubBrowserError(Exception):
    """Base exception for all errors raised by this library.

    Attributes:
        message: Human-readable error description.

    """

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.

        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return a detailed representation for debugging."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class ConfigurationError(GitHubBrowserError):
    """Raised when client configuration is invalid.

    Example:
        >>> ClientConfig(base_url="not-a-url")
        ConfigurationError: Invalid base_url: not-a-url

    """


class ApiError(GitHubBrowserError):
    """The remote API answered with a non-success HTTP status.

    Attributes:
        status: HTTP status code.
        documentation_url: Link to GitHub's docs for this error, if given.
        response_data: Parsed JSON error body (empty if none).

    """

    def __init__(
        self,
        message: str,
        status: int,
        documentation_url: str | None = None,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the API error.

        Args:
            message: Error message from the body, or a synthesized one.
            status: HTTP status code.
            documentation_url: Documentation link from the error body.
            response_data: Raw error body.

        """
        self.status = status
        self.documentation_url = documentation_url
        self.response_data = response_data or {}
        super().__init__(message)

    def __repr__(self) -> str:
        """Return a detailed representation for debugging."""
        return f"{self.__class__.__name__}(status={self.status}, message={self.message!r})"


class NotFoundError(ApiError):
    """Raised for HTTP 404.

    GitHub answers 404 both for resources that don't exist and for
    private resources the caller can't see.

    """

    def __init__(
        self,
        message: str = "Not Found",
        documentation_url: str | None = None,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not found error."""
        super().__init__(message, 404, documentation_url, response_data)


class RateLimitError(ApiError):
    """Raised for HTTP 403: rate limit exhausted or access denied.

    GitHub uses 403 for both cases, so the two are not told apart here.

    Attributes:
        reset: Unix timestamp when the quota resets, if the headers said so.

    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        documentation_url: str | None = None,
        response_data: dict[str, Any] | None = None,
        reset: int | None = None,
    ) -> None:
        """Initialize rate limit error.

        Args:
            message: Error message from the body.
            documentation_url: Documentation link from the error body.
            response_data: Raw error body.
            reset: Unix timestamp when the quota resets.

        """
        self.reset = reset
        super().__init__(message, 403, documentation_url, response_data)


class RemoteApiError(ApiError):
    """Raised for any non-2xx status other than 403 and 404."""


class TransportError(GitHubBrowserError):
    """Raised when the request failed before an HTTP status existed.

    This covers DNS failures, refused connections, timeouts, and success
    responses whose body could not be decoded as JSON.

    Attributes:
        original_error: The underlying exception.

    """

    def __init__(
        self,
        message: str = "Network error",
        original_error: Exception | None = None,
    ) -> None:
        """Initialize transport error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception.

        """
        self.original_error = original_error
        super().__init__(message)


class StorageError(GitHubBrowserError):
    """Raised when the local database cannot be opened or used.

    Attributes:
        original_error: The underlying exception.

    """

    def __init__(
        self,
        message: str = "Local storage unavailable",
        original_error: Exception | None = None,
    ) -> None:
        """Initialize storage error."""
        self.original_error = original_error
        super().__init__(message)


# =============================================================================
# Exception Factory
# =============================================================================


def exception_from_response(
    status_code: int,
    response_data: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> ApiError:
    """Create the appropriate exception from a non-success HTTP response.

    Args:
        status_code: HTTP status code.
        response_data: Parsed JSON error body (empty dict if none).
        headers: Response headers, used for the quota reset time.

    Returns:
        The matching ApiError subclass.

    """
    headers = headers or {}
    message = response_data.get("message") or f"HTTP {status_code}"
    documentation_url = response_data.get("documentation_url")

    if status_code == 404:
        return NotFoundError(message, documentation_url, response_data)

    if status_code == 403:
        reset_str = headers.get("x-ratelimit-reset")
        reset = int(reset_str) if reset_str and reset_str.isdigit() else None
        return RateLimitError(message, documentation_url, response_data, reset=reset)

    return RemoteApiError(message, status_code, documentation_url, response_data)
