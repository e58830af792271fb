"""Pydantic models for GitHub API responses and local records.

API models mirror GitHub's JSON closely enough for browsing views and
ignore any field they don't declare, so new fields added upstream never
break parsing. All models are frozen: once parsed, a value never changes.

Example:
    >>> from github_browser.models import Issue
    >>> issue = Issue.model_validate(api_response)
    >>> issue.is_pull_request
    False

"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

IssueState = Literal["open", "closed", "all"]


class GitHubModel(BaseModel):
    """Base model for all GitHub API responses.

    - Ignores unknown fields (GitHub may add new ones)
    - Immutable after construction

    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


# =============================================================================
# User Models
# =============================================================================


class SimpleUser(GitHubModel):
    """Minimal user representation used inside other resources."""

    id: int
    login: str
    avatar_url: str | None = None
    html_url: str | None = None
    type: str = "User"
    site_admin: bool = False


class User(SimpleUser):
    """GitHub user profile.

    Attributes:
        name: Display name (may be None).
        company: Company affiliation.
        blog: Personal website URL.
        location: Geographic location.
        email: Public email (may be None).
        bio: User's bio/description.
        public_repos: Number of public repositories.
        public_gists: Number of public gists.
        followers: Number of followers.
        following: Number of users being followed.

    """

    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    bio: str | None = None

    public_repos: int | None = None
    public_gists: int | None = None
    followers: int | None = None
    following: int | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return f"User({self.login})"


class Contributor(SimpleUser):
    """Repository contributor with commit count."""

    contributions: int = 0


# =============================================================================
# Repository Models
# =============================================================================


class License(GitHubModel):
    """Repository license information."""

    key: str
    name: str
    spdx_id: str | None = None


class Repository(GitHubModel):
    """GitHub repository.

    Attributes:
        id: Unique identifier.
        name: Repository name (without owner).
        full_name: ``owner/name``.
        owner: Owning user or organization.
        private: Whether the repository is private.
        description: Short description.
        default_branch: Default branch name.
        stargazers_count: Number of stars.
        forks_count: Number of forks.
        open_issues_count: Open issues plus open pull requests.
        topics: Repository topics.

    """

    id: int
    name: str
    full_name: str
    owner: SimpleUser
    private: bool = False
    html_url: str
    description: str | None = None
    fork: bool = False
    homepage: str | None = None
    language: str | None = None
    size: int = 0
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    default_branch: str = "main"
    visibility: str = "public"
    archived: bool = False
    license: License | None = None
    topics: list[str] = Field(default_factory=list)

    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return f"Repository({self.full_name})"


class Readme(GitHubModel):
    """Raw README object as returned by ``/repos/{owner}/{repo}/readme``."""

    name: str
    path: str
    sha: str | None = None
    size: int = 0
    html_url: str | None = None
    download_url: str | None = None
    type: str = "file"
    content: str = ""
    encoding: str = "base64"


class DecodedReadme(GitHubModel):
    """README text ready for rendering."""

    name: str
    content: str


# =============================================================================
# Issue Models
# =============================================================================


class Label(GitHubModel):
    """Issue/PR label."""

    id: int
    name: str
    color: str
    description: str | None = None
    default: bool = False


class Milestone(GitHubModel):
    """Issue/PR milestone."""

    id: int
    number: int
    title: str
    description: str | None = None
    state: str = "open"
    due_on: datetime | None = None


class PullRequestRef(GitHubModel):
    """Link block GitHub attaches to issue-shaped pull requests."""

    url: str | None = None
    html_url: str | None = None
    diff_url: str | None = None
    patch_url: str | None = None
    merged_at: datetime | None = None


class Issue(GitHubModel):
    """GitHub issue.

    The issues listing endpoint also returns pull requests; those carry a
    ``pull_request`` block. Use ``is_pull_request`` to tell them apart.

    """

    id: int
    number: int
    title: str
    state: str
    html_url: str
    url: str | None = None
    body: str | None = None
    user: SimpleUser | None = None
    labels: list[Label] = Field(default_factory=list)
    assignee: SimpleUser | None = None
    assignees: list[SimpleUser] = Field(default_factory=list)
    milestone: Milestone | None = None
    locked: bool = False
    comments: int = 0
    pull_request: PullRequestRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return f"Issue(#{self.number}: {self.title})"

    @property
    def is_pull_request(self) -> bool:
        """True if this item is a pull request masquerading as an issue."""
        return self.pull_request is not None


class BranchRef(GitHubModel):
    """Head or base of a pull request."""

    label: str
    ref: str
    sha: str
    user: SimpleUser | None = None
    repo: Repository | None = None


class PullRequest(Issue):
    """GitHub pull request: an Issue plus merge and branch metadata.

    Search results return pull requests in issue shape, so the branch and
    merge fields are optional.

    """

    head: BranchRef | None = None
    base: BranchRef | None = None
    merged: bool = False
    mergeable: bool | None = None
    mergeable_state: str | None = None
    merged_at: datetime | None = None
    merge_commit_sha: str | None = None
    draft: bool = False

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return f"PullRequest(#{self.number}: {self.title})"


# =============================================================================
# Search Models
# =============================================================================


class SearchResult(GitHubModel):
    """Search result container.

    Attributes:
        total_count: Total number of matching items across all pages.
        incomplete_results: Whether the search timed out server-side.
        items: Matching items on this page.

    """

    total_count: int
    incomplete_results: bool = False
    items: list[Any] = Field(default_factory=list)


class RepositorySearchResult(SearchResult):
    """Search result for repositories."""

    items: list[Repository] = Field(default_factory=list)


class IssueSearchResult(SearchResult):
    """Search result for issues."""

    items: list[Issue] = Field(default_factory=list)


class PullRequestSearchResult(SearchResult):
    """Search result for pull requests."""

    items: list[PullRequest] = Field(default_factory=list)


# =============================================================================
# Local Records
# =============================================================================


class Credential(GitHubModel):
    """The single stored login.

    Attributes:
        access_token: Personal access token.
        token_type: Always "bearer" for tokens stored by login.
        scope: Granted scopes, if known.
        created_at: Unix timestamp of the login.

    """

    access_token: str
    token_type: str = "bearer"
    scope: str = ""
    created_at: float

    def __repr__(self) -> str:
        """Return a safe representation without exposing the token."""
        masked = f"{self.access_token[:4]}..." if len(self.access_token) > 4 else "***"
        return f"Credential(access_token={masked!r}, token_type={self.token_type!r})"


class CacheEntry(GitHubModel):
    """A cached response payload.

    Attributes:
        key: Namespaced logical request identity.
        data: Decoded JSON payload.
        expires_at: Unix timestamp after which the entry is dead.

    """

    key: str
    data: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """Check whether the entry is dead at ``now``."""
        return now > self.expires_at
