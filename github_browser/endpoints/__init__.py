"""Endpoint modules for the GitHub API.

Each module in this package implements a group of related API endpoints.

Available endpoint groups:
    - users: Signed-in user and public profiles
    - repos: Repositories, languages, contributors, README
    - issues: Repository issue listings
    - pulls: Repository pull request listings
    - search: Repository, issue and pull request search

"""

from github_browser.endpoints.base import BaseEndpoint
from github_browser.endpoints.issues import IssuesEndpoint
from github_browser.endpoints.pulls import PullsEndpoint
from github_browser.endpoints.repos import ReposEndpoint
from github_browser.endpoints.search import SearchEndpoint, build_issue_query
from github_browser.endpoints.users import UsersEndpoint

__all__ = [
    "BaseEndpoint",
    "IssuesEndpoint",
    "PullsEndpoint",
    "ReposEndpoint",
    "SearchEndpoint",
    "UsersEndpoint",
    "build_issue_query",
]
