"""Test configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from github_browser import ClientConfig, GitHubClient, Store

API_URL = "https://api.github.com"

# =============================================================================
# Sample API Responses
# =============================================================================


@pytest.fixture
def sample_user_response() -> dict[str, Any]:
    """Sample GitHub user API response."""
    return {
        "login": "octocat",
        "id": 1,
        "node_id": "MDQ6VXNlcjE=",
        "avatar_url": "https://github.com/images/error/octocat_happy.gif",
        "url": "https://api.github.com/users/octocat",
        "html_url": "https://github.com/octocat",
        "type": "User",
        "site_admin": False,
        "name": "The Octocat",
        "company": "@github",
        "blog": "https://github.blog",
        "location": "San Francisco",
        "email": "octocat@github.com",
        "hireable": None,
        "bio": "There once was...",
        "public_repos": 8,
        "public_gists": 8,
        "followers": 20,
        "following": 0,
        "created_at": "2008-01-14T04:33:35Z",
        "updated_at": "2008-01-14T04:33:35Z",
    }


@pytest.fixture
def sample_repo_response() -> dict[str, Any]:
    """Sample GitHub repository API response."""
    return {
        "id": 1296269,
        "node_id": "MDEwOlJlcG9zaXRvcnkxMjk2MjY5",
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "private": False,
        "owner": {
            "login": "octocat",
            "id": 1,
            "avatar_url": "https://github.com/images/error/octocat_happy.gif",
            "html_url": "https://github.com/octocat",
            "type": "User",
            "site_admin": False,
        },
        "html_url": "https://github.com/octocat/Hello-World",
        "description": "This your first repo!",
        "fork": False,
        "url": "https://api.github.com/repos/octocat/Hello-World",
        "created_at": "2011-01-26T19:01:12Z",
        "updated_at": "2022-06-10T12:42:47Z",
        "pushed_at": "2022-06-10T12:41:42Z",
        "homepage": "https://github.com",
        "size": 1,
        "stargazers_count": 80000,
        "watchers_count": 80000,
        "language": "Python",
        "forks_count": 9000,
        "archived": False,
        "open_issues_count": 0,
        "license": {
            "key": "mit",
            "name": "MIT License",
            "spdx_id": "MIT",
            "url": "https://api.github.com/licenses/mit",
        },
        "topics": ["octocat", "api", "example"],
        "visibility": "public",
        "default_branch": "main",
    }


@pytest.fixture
def sample_issue_response() -> dict[str, Any]:
    """Sample GitHub issue API response."""
    return {
        "id": 1,
        "node_id": "MDU6SXNzdWUx",
        "url": "https://api.github.com/repos/octocat/Hello-World/issues/1347",
        "html_url": "https://github.com/octocat/Hello-World/issues/1347",
        "number": 1347,
        "state": "open",
        "title": "Found a bug",
        "body": "I'm having a problem with this.",
        "user": {"login": "octocat", "id": 1, "type": "User", "site_admin": False},
        "labels": [
            {
                "id": 208045946,
                "name": "bug",
                "description": "Something isn't working",
                "color": "f29513",
                "default": True,
            }
        ],
        "assignee": None,
        "assignees": [],
        "milestone": None,
        "locked": False,
        "comments": 0,
        "closed_at": None,
        "created_at": "2011-04-22T13:33:48Z",
        "updated_at": "2011-04-22T13:33:48Z",
        "author_association": "COLLABORATOR",
    }


@pytest.fixture
def issue_factory() -> Callable[..., dict[str, Any]]:
    """Build minimal issue payloads; ``pull=True`` marks a pull request."""

    def make(number: int, *, pull: bool = False, state: str = "open") -> dict[str, Any]:
        kind = "pull" if pull else "issues"
        payload: dict[str, Any] = {
            "id": 1000 + number,
            "number": number,
            "title": f"Item {number}",
            "state": state,
            "html_url": f"https://github.com/octocat/Hello-World/{kind}/{number}",
        }
        if pull:
            payload["pull_request"] = {
                "url": f"https://api.github.com/repos/octocat/Hello-World/pulls/{number}",
                "html_url": f"https://github.com/octocat/Hello-World/pull/{number}",
            }
        return payload

    return make


@pytest.fixture
def sample_pull_response() -> dict[str, Any]:
    """Sample GitHub pull request API response."""
    return {
        "id": 1,
        "number": 1347,
        "state": "open",
        "title": "Amazing new feature",
        "html_url": "https://github.com/octocat/Hello-World/pull/1347",
        "user": {"login": "octocat", "id": 1},
        "head": {"label": "octocat:new-topic", "ref": "new-topic", "sha": "6dcb09b"},
        "base": {"label": "octocat:master", "ref": "master", "sha": "6dcb09b"},
        "draft": False,
        "merged_at": None,
        "merge_commit_sha": "e5bd3914e2e596debea16f433f57875b5b90bcd6",
    }


# =============================================================================
# Rate Limit Headers
# =============================================================================


@pytest.fixture
def rate_limit_headers() -> dict[str, str]:
    """Full set of rate limit headers."""
    return {
        "X-RateLimit-Limit": "60",
        "X-RateLimit-Remaining": "59",
        "X-RateLimit-Reset": "1700000000",
        "X-RateLimit-Used": "1",
        "X-RateLimit-Resource": "core",
    }


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Database file inside the test's temp dir."""
    return tmp_path / "browser.db"


@pytest.fixture
def config(db_path: Path) -> ClientConfig:
    """Create a test configuration."""
    return ClientConfig(
        base_url=API_URL,
        db_path=str(db_path),
        cache_ttl=300,
        timeout=5.0,
        search_debounce=0.05,
    )


@pytest_asyncio.fixture
async def store(db_path: Path) -> AsyncIterator[Store]:
    """Open store on a fresh database."""
    async with Store(db_path) as s:
        yield s


@pytest_asyncio.fixture
async def client(config: ClientConfig) -> AsyncIterator[GitHubClient]:
    """Open client on a fresh database."""
    async with GitHubClient(config) as c:
        yield c
