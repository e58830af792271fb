"""Authentication for the GitHub API.

Strategies attach credentials to requests; the session decides which
credential is current and manages login and logout.

Example:
    >>> from github_browser.auth import TokenAuth, NoAuth
    >>> auth = TokenAuth("ghp_xxxxxxxxxxxx")
    >>>
    >>> result = await client.session.login("ghp_xxxxxxxxxxxx")

"""

from github_browser.auth.session import (
    EMPTY_TOKEN_MESSAGE,
    INVALID_TOKEN_MESSAGE,
    UNREACHABLE_MESSAGE,
    AuthSession,
    CredentialCheck,
    LoginResult,
)
from github_browser.auth.strategies import AuthStrategy, NoAuth, TokenAuth, create_auth

__all__ = [
    "EMPTY_TOKEN_MESSAGE",
    "INVALID_TOKEN_MESSAGE",
    "UNREACHABLE_MESSAGE",
    "AuthSession",
    "AuthStrategy",
    "CredentialCheck",
    "LoginResult",
    "NoAuth",
    "TokenAuth",
    "create_auth",
]
