"""Search endpoint implementation.

This module provides methods for interacting with GitHub's Search API:
- Search for repositories
- Search a repository's issues or pull requests by free text

API Reference: https://docs.github.com/en/rest/search

Note: Search API has a lower rate limit (30 requests/minute for
authenticated users). Search results are never cached.

"""

from __future__ import annotations

from typing import Any, Literal

from github_browser.endpoints.base import BaseEndpoint
from github_browser.models import (
    IssueSearchResult,
    IssueState,
    PullRequestSearchResult,
    RepositorySearchResult,
)


def build_issue_query(
    owner: str,
    repo: str,
    kind: Literal["issue", "pr"],
    text: str = "",
    state: IssueState = "open",
) -> str:
    """Compose a search query scoped to one repository.

    Args:
        owner: Repository owner.
        repo: Repository name.
        kind: "issue" or "pr".
        text: Free-text terms; blank text adds nothing.
        state: "open", "closed", or "all" (no state qualifier).

    Returns:
        Query string, e.g. ``repo:octocat/hello type:issue state:open crash``.

    Example:
        >>> build_issue_query("o", "r", "issue", "  bug  ", "all")
        'repo:o/r type:issue bug'

    """
    query = f"repo:{owner}/{repo} type:{kind}"
    if state != "all":
        query += f" state:{state}"
    text = text.strip()
    if text:
        query += f" {text}"
    return query


class SearchEndpoint(BaseEndpoint):
    """Endpoint for search-related API calls.

    Example:
        >>> results = await client.search.repos("language:python stars:>10000")
        >>> for repo in results.items[:5]:
        ...     print(f"{repo.full_name}: {repo.stargazers_count} stars")

    Note:
        Search queries use GitHub's query syntax:
        https://docs.github.com/en/search-github/searching-on-github

    """

    async def _search(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        response = await self._http.get(endpoint, params=params, use_cache=False)
        data = response.data
        return data if isinstance(data, dict) else {"total_count": 0, "items": []}

    async def repos(
        self,
        query: str,
        *,
        page: int = 1,
        per_page: int = 10,
    ) -> RepositorySearchResult:
        """Search for repositories.

        Args:
            query: Search query using GitHub search syntax.
            page: Page number.
            per_page: Results per page (max 100).

        Returns:
            RepositorySearchResult with total_count and items.

        Example:
            >>> results = await client.search.repos("topic:web-framework language:python")
            >>> print(f"Found {results.total_count} repositories")

        """
        params = {"q": query, **self._build_pagination_params(page, per_page)}
        data = await self._search("/search/repositories", params)
        return RepositorySearchResult.model_validate(data)

    async def issues(
        self,
        owner: str,
        repo: str,
        text: str = "",
        *,
        state: IssueState = "open",
        page: int = 1,
        per_page: int | None = None,
    ) -> IssueSearchResult:
        """Search a repository's issues.

        Args:
            owner: Repository owner.
            repo: Repository name.
            text: Free-text terms.
            state: Filter by state ("open", "closed", "all").
            page: Page number.
            per_page: Results per page.

        Returns:
            IssueSearchResult with total_count across all pages.

        """
        params = {
            "q": build_issue_query(owner, repo, "issue", text, state),
            **self._build_pagination_params(page, per_page),
        }
        data = await self._search("/search/issues", params)
        return IssueSearchResult.model_validate(data)

    async def pull_requests(
        self,
        owner: str,
        repo: str,
        text: str = "",
        *,
        state: IssueState = "open",
        page: int = 1,
        per_page: int | None = None,
    ) -> PullRequestSearchResult:
        """Search a repository's pull requests.

        Results come back in issue shape, so branch and merge details on
        the returned pull requests are unset.

        Args:
            owner: Repository owner.
            repo: Repository name.
            text: Free-text terms.
            state: Filter by state ("open", "closed", "all").
            page: Page number.
            per_page: Results per page.

        Returns:
            PullRequestSearchResult with total_count across all pages.

        """
        params = {
            "q": build_issue_query(owner, repo, "pr", text, state),
            **self._build_pagination_params(page, per_page),
        }
        data = await self._search("/search/issues", params)
        return PullRequestSearchResult.model_validate(data)
