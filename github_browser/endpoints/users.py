"""Users endpoint implementation.

API Reference: https://docs.github.com/en/rest/users

"""

from __future__ import annotations

from github_browser.endpoints.base import BaseEndpoint
from github_browser.models import User


class UsersEndpoint(BaseEndpoint):
    """Endpoint for user-related API calls.

    Example:
        >>> me = await client.users.get_authenticated()
        >>> user = await client.users.get("octocat")
        >>> print(f"{user.login} has {user.public_repos} public repos")

    """

    async def get_authenticated(self) -> User:
        """Get the signed-in user's profile.

        The profile is cached briefly (``user_cache_ttl``) so a changed
        display name or avatar shows up quickly.

        Raises:
            RemoteApiError: If not signed in (GitHub answers 401).
            RateLimitError: If the quota is exhausted.

        """
        response = await self._http.request("/user", ttl=self._config.user_cache_ttl)
        return self._parse_response(response.data, User)

    async def get(self, username: str) -> User:
        """Get a user's public profile.

        Args:
            username: The GitHub username.

        Returns:
            User object with profile information.

        Raises:
            NotFoundError: If the user doesn't exist.

        """
        response = await self._http.get(f"/users/{username}")
        return self._parse_response(response.data, User)
