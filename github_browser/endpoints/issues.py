"""Issues endpoint implementation.

API Reference: https://docs.github.com/en/rest/issues

Note: the repository issues listing also returns pull requests. Callers
that want issues only should drop items where ``is_pull_request`` is set.

"""

from __future__ import annotations

from github_browser.endpoints.base import BaseEndpoint
from github_browser.models import Issue, IssueState


class IssuesEndpoint(BaseEndpoint):
    """Endpoint for issue-related API calls.

    Example:
        >>> issues = await client.issues.list_for_repo("octocat", "hello-world", state="all")
        >>> for issue in issues:
        ...     if not issue.is_pull_request:
        ...         print(f"#{issue.number}: {issue.title}")

    """

    async def list_for_repo(
        self,
        owner: str,
        repo: str,
        *,
        state: IssueState = "open",
        page: int = 1,
        per_page: int | None = None,
    ) -> list[Issue]:
        """List one page of a repository's issues, pull requests included.

        Args:
            owner: Repository owner.
            repo: Repository name.
            state: Filter by state ("open", "closed", "all").
            page: Page number.
            per_page: Results per page.

        Returns:
            Issues as returned by GitHub, in API order.

        """
        params = {"state": state, **self._build_pagination_params(page, per_page)}
        response = await self._http.get(f"/repos/{owner}/{repo}/issues", params=params)
        return self._parse_list_response(response.data, Issue)
