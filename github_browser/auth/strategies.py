"""Request signing for the GitHub API.

A strategy stamps an outgoing request with whatever the current login
calls for. The HTTP layer asks the session for one strategy per request,
so logging in or out takes effect on the next call.

    - TokenAuth: ``Authorization: <Scheme> <token>`` from a stored credential
    - NoAuth: anonymous, on the lower unauthenticated rate limit

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from github_browser.models import Credential


class AuthStrategy(ABC):
    """Signs outgoing requests."""

    @abstractmethod
    def apply(self, request: httpx.Request) -> httpx.Request:
        """Sign ``request`` in place and return it."""


class TokenAuth(AuthStrategy):
    """Send a token in the Authorization header.

    Example:
        >>> TokenAuth("ghp_xxxxxxxxxxxx").apply(request)
        >>> request.headers["Authorization"]
        'Bearer ghp_xxxxxxxxxxxx'

    """

    __slots__ = ("_scheme", "_token")

    def __init__(self, token: str, token_type: str = "bearer") -> None:
        """Initialize from a raw token.

        Args:
            token: Access token; surrounding whitespace is dropped.
            token_type: Authorization scheme, as stored on the credential.

        Raises:
            ValueError: If token is empty or blank.

        """
        token = token.strip() if token else ""
        if not token:
            raise ValueError("Token cannot be empty")
        self._token = token
        self._scheme = token_type.capitalize() if token_type else "Bearer"

    def apply(self, request: httpx.Request) -> httpx.Request:
        """Set the Authorization header."""
        request.headers["Authorization"] = f"{self._scheme} {self._token}"
        return request

    def __repr__(self) -> str:
        """Return a representation that hides all but the token prefix."""
        masked = f"{self._token[:4]}..." if len(self._token) > 4 else "***"
        return f"TokenAuth(scheme={self._scheme!r}, token={masked!r})"


class NoAuth(AuthStrategy):
    """Leave requests anonymous."""

    __slots__ = ()

    def apply(self, request: httpx.Request) -> httpx.Request:
        """Return the request unchanged."""
        return request

    def __repr__(self) -> str:
        """Return a simple representation."""
        return "NoAuth()"


def create_auth(credential: Credential | None) -> AuthStrategy:
    """Pick the strategy for the current login.

    Returns:
        TokenAuth for a credential with a usable token, NoAuth otherwise.

    """
    if credential is None or not credential.access_token.strip():
        return NoAuth()
    return TokenAuth(credential.access_token, credential.token_type)
