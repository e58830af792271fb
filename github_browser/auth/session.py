"""Login session management.

The session owns the single stored credential. It validates a token
against ``GET /user`` before persisting it and hands the HTTP layer the
auth strategy for whatever credential is current.

If the local store can't be used, a successful login is kept in memory
for the rest of the process instead of being persisted.

"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from github_browser.auth.strategies import AuthStrategy, TokenAuth, create_auth
from github_browser.exceptions import ApiError, StorageError, TransportError
from github_browser.models import Credential

if TYPE_CHECKING:
    from github_browser.storage import Store
    from github_browser.utils.http import HTTPClient

logger = logging.getLogger(__name__)

EMPTY_TOKEN_MESSAGE = "Please enter a token"
INVALID_TOKEN_MESSAGE = "Invalid token. Please check and try again."
UNREACHABLE_MESSAGE = "Could not reach GitHub. Check your connection and try again."


class CredentialCheck(Enum):
    """Outcome of probing a token against the API."""

    VALID = "valid"
    REJECTED = "rejected"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True, slots=True)
class LoginResult:
    """Result of a login attempt.

    Attributes:
        success: Whether the credential was accepted and stored.
        error: User-facing reason when ``success`` is False.

    """

    success: bool
    error: str | None = None


class AuthSession:
    """Manages the current credential.

    Example:
        >>> result = await session.login("ghp_xxx")
        >>> if not result.success:
        ...     print(result.error)
        >>> await session.is_logged_in()
        True

    """

    __slots__ = ("_http", "_memory", "_store")

    def __init__(self, store: Store, http: HTTPClient) -> None:
        """Initialize the session.

        Args:
            store: Store holding the auth slot.
            http: HTTP client used to check tokens.

        """
        self._store = store
        self._http = http
        self._memory: Credential | None = None

    async def check_credential(self, token: str) -> CredentialCheck:
        """Check a token with an uncached ``GET /user``.

        Args:
            token: Personal access token to check.

        Returns:
            VALID on a 2xx answer, REJECTED on any error status,
            UNREACHABLE if no answer was received.

        """
        if not token or not token.strip():
            return CredentialCheck.REJECTED

        try:
            await self._http.request("/user", use_cache=False, auth=TokenAuth(token))
        except ApiError as e:
            logger.info("Token rejected (HTTP %d): %s", e.status, e.message)
            return CredentialCheck.REJECTED
        except TransportError as e:
            logger.warning("Token check failed, GitHub unreachable: %s", e.message)
            return CredentialCheck.UNREACHABLE

        return CredentialCheck.VALID

    async def validate_credential(self, token: str) -> bool:
        """Return True if GitHub accepts the token."""
        return await self.check_credential(token) is CredentialCheck.VALID

    async def login(self, token: str) -> LoginResult:
        """Validate and store a token.

        Args:
            token: Personal access token; surrounding whitespace is ignored.

        Returns:
            LoginResult describing the outcome.

        """
        token = token.strip()
        if not token:
            return LoginResult(success=False, error=EMPTY_TOKEN_MESSAGE)

        check = await self.check_credential(token)
        if check is CredentialCheck.REJECTED:
            return LoginResult(success=False, error=INVALID_TOKEN_MESSAGE)
        if check is CredentialCheck.UNREACHABLE:
            return LoginResult(success=False, error=UNREACHABLE_MESSAGE)

        credential = Credential(access_token=token, token_type="bearer", created_at=time.time())
        try:
            await self._store.put_auth(credential)
        except StorageError as e:
            logger.warning("Login kept for this session only, storage unavailable: %s", e.message)
            self._memory = credential
        else:
            self._memory = None

        logger.info("Logged in")
        return LoginResult(success=True)

    async def logout(self) -> None:
        """Forget the current credential. Safe to call when logged out."""
        self._memory = None
        try:
            await self._store.delete_auth()
        except StorageError as e:
            logger.warning("Could not remove stored credential: %s", e.message)
            return
        logger.info("Logged out")

    async def get_credential(self) -> Credential | None:
        """Return the current credential, or None if logged out."""
        if self._memory is not None:
            return self._memory

        try:
            return await self._store.get_auth()
        except StorageError as e:
            logger.warning("Continuing anonymously, storage unavailable: %s", e.message)
            return None

    async def is_logged_in(self) -> bool:
        """Check whether a credential is available."""
        return await self.get_credential() is not None

    async def current_auth(self) -> AuthStrategy:
        """Return the auth strategy for the current credential."""
        return create_auth(await self.get_credential())

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"AuthSession(store={self._store!r})"
