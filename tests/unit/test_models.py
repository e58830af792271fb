"""Unit tests for the models module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from github_browser.models import (
    CacheEntry,
    Credential,
    Issue,
    IssueSearchResult,
    PullRequest,
    Repository,
    User,
)


class TestUser:
    """Tests for User model."""

    def test_parse_user(self, sample_user_response):
        """Should parse user response correctly."""
        user = User.model_validate(sample_user_response)
        assert user.login == "octocat"
        assert user.public_repos == 8
        assert str(user) == "User(octocat)"

    def test_ignores_unknown_fields(self, sample_user_response):
        """Unknown fields from GitHub should be dropped."""
        sample_user_response["brand_new_field"] = "x"
        user = User.model_validate(sample_user_response)
        assert not hasattr(user, "brand_new_field")

    def test_frozen(self, sample_user_response):
        """Models should be immutable."""
        user = User.model_validate(sample_user_response)
        with pytest.raises(ValidationError):
            user.login = "other"  # type: ignore[misc]


class TestRepository:
    """Tests for Repository model."""

    def test_parse_repo(self, sample_repo_response):
        """Should parse nested owner and license."""
        repo = Repository.model_validate(sample_repo_response)
        assert repo.full_name == "octocat/Hello-World"
        assert repo.owner.login == "octocat"
        assert repo.license is not None
        assert repo.license.spdx_id == "MIT"


class TestIssue:
    """Tests for Issue and PullRequest models."""

    def test_plain_issue(self, sample_issue_response):
        """An issue without a pull_request block is not a PR."""
        issue = Issue.model_validate(sample_issue_response)
        assert issue.is_pull_request is False
        assert issue.labels[0].name == "bug"

    def test_issue_shaped_pull_request(self, issue_factory):
        """An issue carrying a pull_request block is a PR."""
        issue = Issue.model_validate(issue_factory(7, pull=True))
        assert issue.is_pull_request is True

    def test_pull_request_is_issue_superset(self, sample_pull_response):
        """PullRequest should parse branch refs and be an Issue."""
        pr = PullRequest.model_validate(sample_pull_response)
        assert isinstance(pr, Issue)
        assert pr.head is not None
        assert pr.head.ref == "new-topic"
        assert str(pr) == "PullRequest(#1347: Amazing new feature)"

    def test_search_result(self, issue_factory):
        """Search containers should parse their items."""
        result = IssueSearchResult.model_validate(
            {"total_count": 40, "incomplete_results": False, "items": [issue_factory(1)]}
        )
        assert result.total_count == 40
        assert isinstance(result.items[0], Issue)


class TestLocalRecords:
    """Tests for Credential and CacheEntry."""

    def test_credential_repr_masks_token(self):
        """The token should never appear in repr."""
        credential = Credential(access_token="ghp_secret_value", created_at=0.0)
        assert "secret" not in repr(credential)
        assert credential.token_type == "bearer"

    def test_cache_entry_expiry_boundary(self):
        """An entry is live at exactly expires_at and dead after."""
        entry = CacheEntry(key="k", data={}, expires_at=100.0)
        assert entry.is_expired(100.0) is False
        assert entry.is_expired(100.001) is True
