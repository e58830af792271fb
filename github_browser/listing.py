"""Paginated issue and pull request lists with debounced search.

A ``ListView`` holds the items shown for one repository list. With no
search text it pages through the listing endpoint; with search text it
pages through the search endpoint. Each mode is a ``PageSource`` that
knows how to fetch page N and whether more pages follow.

State machine:
    IDLE -> LOADING -> SUCCESS | ERROR

Any change of state filter, applied search text, or a ``load_more()``
re-enters LOADING. Search text is applied after it has been quiet for
``search_debounce`` seconds.

Example:
    >>> view = ListView(client, "octocat", "hello-world", kind="issues")
    >>> await view.reload()
    >>> view.set_query("crash")
    >>> await view.wait_for_query()
    >>> if view.has_more:
    ...     await view.load_more()

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Literal

from github_browser.exceptions import GitHubBrowserError, NotFoundError, RateLimitError
from github_browser.utils.debounce import Debouncer

if TYPE_CHECKING:
    from github_browser.client import GitHubClient
    from github_browser.models import Issue, IssueState

logger = logging.getLogger(__name__)

ListKind = Literal["issues", "pulls"]

INVALID_PATH_MESSAGE = "Invalid repository path"
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later or sign in."

_FALLBACK_MESSAGES: dict[str, tuple[str, str]] = {
    "issues": ("Failed to load issues", "Failed to load more issues"),
    "pulls": ("Failed to load pull requests", "Failed to load more pull requests"),
}


class ListState(Enum):
    """Load status of a list."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Page:
    """One fetched page.

    Attributes:
        items: Items to display from this page.
        has_more: Whether another page should be offered.

    """

    items: list[Issue] = field(default_factory=list)
    has_more: bool = False


# =============================================================================
# Page Sources
# =============================================================================


class PageSource(ABC):
    """Fetches pages of one list in one mode."""

    def __init__(
        self,
        client: GitHubClient,
        kind: ListKind,
        owner: str,
        repo: str,
        state: IssueState,
        per_page: int,
    ) -> None:
        """Bind the source to one repository list and page size."""
        self.client = client
        self.kind = kind
        self.owner = owner
        self.repo = repo
        self.state = state
        self.per_page = per_page

    @abstractmethod
    async def fetch_page(self, page: int) -> Page:
        """Fetch page ``page`` (1-indexed).

        Raises:
            GitHubBrowserError: If the request fails.

        """


class ListingPageSource(PageSource):
    """Pages through ``/repos/{owner}/{repo}/issues`` or ``/pulls``.

    GitHub's issue listing includes pull requests; for issue lists they
    are dropped. A full raw page means more may follow, even if filtering
    left fewer items.

    """

    async def fetch_page(self, page: int) -> Page:
        """Fetch one listing page, dropping pull requests from issue lists."""
        if self.kind == "issues":
            raw: list[Issue] = await self.client.issues.list_for_repo(
                self.owner, self.repo, state=self.state, page=page, per_page=self.per_page
            )
            items = [item for item in raw if not item.is_pull_request]
        else:
            raw = list(
                await self.client.pulls.list_for_repo(
                    self.owner, self.repo, state=self.state, page=page, per_page=self.per_page
                )
            )
            items = raw

        return Page(items=items, has_more=len(raw) == self.per_page)


class SearchPageSource(PageSource):
    """Pages through ``/search/issues`` for one free-text query.

    More pages follow while fewer items have been fetched than the
    search's ``total_count``.

    """

    def __init__(
        self,
        client: GitHubClient,
        kind: ListKind,
        owner: str,
        repo: str,
        state: IssueState,
        per_page: int,
        text: str,
    ) -> None:
        """Bind the source to one repository list and search text."""
        super().__init__(client, kind, owner, repo, state, per_page)
        self.text = text
        self._fetched = 0

    async def fetch_page(self, page: int) -> Page:
        """Fetch one search page and add its items to the running count."""
        if self.kind == "issues":
            result = await self.client.search.issues(
                self.owner, self.repo, self.text,
                state=self.state, page=page, per_page=self.per_page,
            )
        else:
            result = await self.client.search.pull_requests(
                self.owner, self.repo, self.text,
                state=self.state, page=page, per_page=self.per_page,
            )

        if page == 1:
            self._fetched = 0
        self._fetched += len(result.items)

        return Page(items=list(result.items), has_more=self._fetched < result.total_count)


# =============================================================================
# List View
# =============================================================================


class ListView:
    """Issue or pull request list for one repository.

    Attributes:
        owner: Repository owner.
        repo: Repository name.
        kind: "issues" or "pulls".
        items: Items loaded so far, in display order.
        status: Current ListState.
        error: User-facing message while in ERROR.
        has_more: Whether ``load_more()`` would fetch another page.
        page: Last page successfully loaded (0 before the first load).

    """

    def __init__(
        self,
        client: GitHubClient,
        owner: str,
        repo: str,
        kind: ListKind = "issues",
        *,
        state: IssueState = "open",
        per_page: int | None = None,
        debounce: float | None = None,
    ) -> None:
        """Initialize an idle list. Nothing is fetched until ``reload()``.

        Args:
            client: Client used for all requests.
            owner: Repository owner.
            repo: Repository name.
            kind: "issues" or "pulls".
            state: Initial state filter.
            per_page: Page size (config default if None).
            debounce: Search settle time in seconds (config default if None).

        """
        if kind not in _FALLBACK_MESSAGES:
            raise ValueError(f"kind must be 'issues' or 'pulls', got {kind!r}")

        self.client = client
        self.owner = owner
        self.repo = repo
        self.kind: ListKind = kind
        self.per_page = per_page or client.config.per_page

        self.items: list[Issue] = []
        self.status = ListState.IDLE
        self.error: str | None = None
        self.has_more = False
        self.page = 0

        self._state: IssueState = state
        self._query = ""
        self._pending_query = ""
        self._source: PageSource | None = None
        self._generation = 0
        self._debouncer = Debouncer(
            client.config.search_debounce if debounce is None else debounce
        )

    # =========================================================================
    # Filters
    # =========================================================================

    @property
    def state_filter(self) -> IssueState:
        """The state filter in effect."""
        return self._state

    @property
    def query(self) -> str:
        """The search text in effect (not what is still being typed)."""
        return self._query

    @property
    def is_searching(self) -> bool:
        """True when the list is backed by the search endpoint."""
        return bool(self._query.strip())

    async def set_state_filter(self, state: IssueState) -> None:
        """Switch the state filter and reload from page 1."""
        self._state = state
        await self.reload()

    def set_query(self, text: str) -> None:
        """Record typed search text; it is applied once typing pauses.

        Must be called from within a running event loop.

        """
        self._pending_query = text
        self._debouncer.call(self._apply_query)

    async def wait_for_query(self) -> None:
        """Wait until any pending search text has been applied and loaded."""
        await self._debouncer.wait()

    async def clear_query(self) -> None:
        """Drop the search text immediately and reload the plain listing."""
        self._debouncer.cancel()
        self._pending_query = ""
        if self._query:
            self._query = ""
            await self.reload()

    async def _apply_query(self) -> None:
        """Adopt the settled search text and reload if it changed."""
        if self._pending_query == self._query:
            return
        self._query = self._pending_query
        await self.reload()

    # =========================================================================
    # Loading
    # =========================================================================

    def _make_source(self) -> PageSource:
        """Build the page source for the current mode and filters."""
        args = (self.client, self.kind, self.owner, self.repo, self._state, self.per_page)
        if self.is_searching:
            return SearchPageSource(*args, text=self._query)
        return ListingPageSource(*args)

    async def reload(self) -> None:
        """Discard loaded items and fetch page 1 for the current filters."""
        self._generation += 1
        generation = self._generation

        self.items = []
        self.page = 0
        self.has_more = False
        self.error = None

        if not self.owner or not self.repo:
            self._source = None
            self.status = ListState.ERROR
            self.error = INVALID_PATH_MESSAGE
            return

        self._source = self._make_source()
        self.status = ListState.LOADING

        try:
            result = await self._source.fetch_page(1)
        except GitHubBrowserError as e:
            if generation == self._generation:
                self.status = ListState.ERROR
                self.error = self._error_message(e, more=False)
                logger.info("Loading %s for %s/%s failed: %r", self.kind, self.owner, self.repo, e)
            return

        if generation != self._generation:
            logger.debug("Discarding stale page for %s/%s", self.owner, self.repo)
            return

        self.items = list(result.items)
        self.page = 1
        self.has_more = result.has_more
        self.status = ListState.SUCCESS

    async def load_more(self) -> None:
        """Append the next page. Does nothing unless ``has_more`` is set.

        On failure the list goes to ERROR but keeps the items it has.

        """
        if self._source is None or not self.has_more or self.status is ListState.LOADING:
            return

        generation = self._generation
        source = self._source
        next_page = self.page + 1
        self.status = ListState.LOADING
        self.error = None

        try:
            result = await source.fetch_page(next_page)
        except GitHubBrowserError as e:
            if generation == self._generation:
                self.status = ListState.ERROR
                self.error = self._error_message(e, more=True)
                logger.info("Loading page %d of %s failed: %r", next_page, self.kind, e)
            return

        if generation != self._generation:
            return

        self.items.extend(result.items)
        self.page = next_page
        self.has_more = result.has_more
        self.status = ListState.SUCCESS

    def _error_message(self, error: GitHubBrowserError, *, more: bool) -> str:
        """Turn a failure into the message shown with the list."""
        if isinstance(error, NotFoundError):
            return f"Repository {self.owner}/{self.repo} not found."
        if isinstance(error, RateLimitError):
            return RATE_LIMIT_MESSAGE
        first, later = _FALLBACK_MESSAGES[self.kind]
        return error.message or (later if more else first)

    def __repr__(self) -> str:
        """Return a string representation."""
        return (
            f"ListView({self.owner}/{self.repo} {self.kind}, state={self._state!r}, "
            f"status={self.status.name}, items={len(self.items)})"
        )
