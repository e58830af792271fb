"""Pull requests endpoint implementation.

API Reference: https://docs.github.com/en/rest/pulls

"""

from __future__ import annotations

from github_browser.endpoints.base import BaseEndpoint
from github_browser.models import IssueState, PullRequest


class PullsEndpoint(BaseEndpoint):
    """Endpoint for pull request API calls.

    Example:
        >>> prs = await client.pulls.list_for_repo("python", "cpython")
        >>> for pr in prs:
        ...     print(f"#{pr.number}: {pr.title} ({pr.head.ref if pr.head else '?'})")

    """

    async def list_for_repo(
        self,
        owner: str,
        repo: str,
        *,
        state: IssueState = "open",
        page: int = 1,
        per_page: int | None = None,
    ) -> list[PullRequest]:
        """List one page of a repository's pull requests.

        Args:
            owner: Repository owner.
            repo: Repository name.
            state: Filter by state ("open", "closed", "all").
            page: Page number.
            per_page: Results per page.

        Returns:
            Pull requests in API order.

        """
        params = {"state": state, **self._build_pagination_params(page, per_page)}
        response = await self._http.get(f"/repos/{owner}/{repo}/pulls", params=params)
        return self._parse_list_response(response.data, PullRequest)
