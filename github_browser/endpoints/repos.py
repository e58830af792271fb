"""Repositories endpoint implementation.

This module provides methods for interacting with GitHub's Repositories API:
- Get repository information
- Languages and contributors
- README, raw or decoded to text

API Reference: https://docs.github.com/en/rest/repos

"""

from __future__ import annotations

import base64
import binascii
import logging

from github_browser.endpoints.base import BaseEndpoint
from github_browser.exceptions import NotFoundError, TransportError
from github_browser.models import Contributor, DecodedReadme, Readme, Repository

logger = logging.getLogger(__name__)


class ReposEndpoint(BaseEndpoint):
    """Endpoint for repository-related API calls.

    Example:
        >>> repo = await client.repos.get("microsoft", "vscode")
        >>> print(f"{repo.full_name}: {repo.stargazers_count} stars")
        >>>
        >>> readme = await client.repos.get_readme_with_content("microsoft", "vscode")
        >>> if readme:
        ...     print(readme.content[:200])

    """

    async def get(self, owner: str, repo: str) -> Repository:
        """Get a repository.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.

        Returns:
            Repository object with full details.

        Raises:
            NotFoundError: If the repository doesn't exist or is private.
            TransportError: If the request fails.

        Example:
            >>> repo = await client.repos.get("python", "cpython")
            >>> print(f"License: {repo.license.name if repo.license else 'None'}")

        """
        response = await self._http.get(f"/repos/{owner}/{repo}")
        return self._parse_response(response.data, Repository)

    async def get_languages(self, owner: str, repo: str) -> dict[str, int]:
        """Get the language breakdown of a repository.

        Returns:
            Mapping of language name to bytes of code.

        Example:
            >>> langs = await client.repos.get_languages("python", "cpython")
            >>> total = sum(langs.values())
            >>> for lang, size in langs.items():
            ...     print(f"{lang}: {size / total:.1%}")

        """
        response = await self._http.get(f"/repos/{owner}/{repo}/languages")
        data = response.data
        return dict(data) if isinstance(data, dict) else {}

    async def list_contributors(
        self,
        owner: str,
        repo: str,
        *,
        limit: int = 10,
    ) -> list[Contributor]:
        """List the top contributors of a repository.

        Args:
            owner: Repository owner.
            repo: Repository name.
            limit: Maximum number of contributors (max 100).

        Returns:
            Contributors ordered by contribution count.

        """
        params = {"per_page": max(1, min(limit, self._config.MAX_PER_PAGE))}
        response = await self._http.get(f"/repos/{owner}/{repo}/contributors", params=params)
        return self._parse_list_response(response.data, Contributor)

    async def get_readme(self, owner: str, repo: str) -> Readme:
        """Get the raw README object (base64 content).

        Raises:
            NotFoundError: If the repository has no README.

        """
        response = await self._http.get(f"/repos/{owner}/{repo}/readme")
        return self._parse_response(response.data, Readme)

    async def get_readme_with_content(self, owner: str, repo: str) -> DecodedReadme | None:
        """Get the README decoded to text.

        A base64 payload is decoded as UTF-8, with invalid byte sequences
        replaced rather than rejected. Any other encoding is returned as is.

        Returns:
            DecodedReadme, or None if the repository has no README.

        Raises:
            TransportError: If a base64 payload can't be decoded.

        Example:
            >>> readme = await client.repos.get_readme_with_content("octocat", "hello-world")
            >>> readme.content if readme else "No README"

        """
        try:
            readme = await self.get_readme(owner, repo)
        except NotFoundError:
            logger.debug("No README for %s/%s", owner, repo)
            return None

        if readme.encoding != "base64":
            return DecodedReadme(name=readme.name, content=readme.content)
        return DecodedReadme(name=readme.name, content=decode_content(readme.content))


def decode_content(content: str) -> str:
    """Decode a base64 ``content`` field as returned by the contents API.

    GitHub wraps the payload at 60 columns; whitespace is ignored.

    Raises:
        TransportError: If the payload is not valid base64.

    """
    try:
        raw = base64.b64decode("".join(content.split()), validate=True)
    except binascii.Error as e:
        raise TransportError(
            f"README content is not valid base64: {e}", original_error=e
        ) from e
    return raw.decode("utf-8", errors="replace")
