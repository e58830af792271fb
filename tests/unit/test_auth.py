"""Unit tests for auth strategies and the login session."""

from __future__ import annotations

import httpx
import pytest
import respx

from github_browser import GitHubClient
from github_browser.auth import (
    EMPTY_TOKEN_MESSAGE,
    INVALID_TOKEN_MESSAGE,
    UNREACHABLE_MESSAGE,
    CredentialCheck,
    NoAuth,
    TokenAuth,
    create_auth,
)
from github_browser.models import Credential

API_URL = "https://api.github.com"


class TestStrategies:
    """Tests for AuthStrategy implementations."""

    def test_token_auth_sets_bearer(self):
        """TokenAuth should set a Bearer Authorization header."""
        request = httpx.Request("GET", "https://api.github.com/user")
        TokenAuth("  ghp_abc  ").apply(request)
        assert request.headers["Authorization"] == "Bearer ghp_abc"

    def test_token_auth_rejects_blank(self):
        """A blank token is a programming error."""
        with pytest.raises(ValueError):
            TokenAuth("   ")

    def test_token_auth_repr_masks(self):
        """repr should not leak the token."""
        assert "secret" not in repr(TokenAuth("ghp_secret"))

    def test_no_auth_leaves_request(self):
        """NoAuth should add nothing."""
        request = httpx.Request("GET", "https://api.github.com/user")
        NoAuth().apply(request)
        assert "Authorization" not in request.headers

    def test_create_auth(self):
        """create_auth should pick the strategy from the credential."""
        assert isinstance(create_auth(Credential(access_token="ghp_x", created_at=1.0)), TokenAuth)
        assert isinstance(create_auth(None), NoAuth)
        assert isinstance(create_auth(Credential(access_token=" ", created_at=1.0)), NoAuth)

    def test_create_auth_uses_token_type(self):
        """The stored token type becomes the Authorization scheme."""
        credential = Credential(access_token="abc123", token_type="token", created_at=1.0)
        request = httpx.Request("GET", "https://api.github.com/user")
        create_auth(credential).apply(request)
        assert request.headers["Authorization"] == "Token abc123"


class TestCheckCredential:
    """Tests for probing tokens."""

    @pytest.mark.asyncio
    async def test_valid(self, client, sample_user_response):
        """A 200 from /user means valid."""
        with respx.mock(base_url=API_URL) as router:
            route = router.get("/user").mock(
                return_value=httpx.Response(200, json=sample_user_response)
            )
            assert await client.session.check_credential("ghp_good") is CredentialCheck.VALID
            assert await client.session.validate_credential("ghp_good") is True

        assert route.calls.last.request.headers["Authorization"] == "Bearer ghp_good"
        # Token checks are never cached
        assert route.call_count == 2

    @pytest.mark.asyncio
    async def test_rejected(self, client):
        """A 401 means rejected."""
        with respx.mock(base_url=API_URL) as router:
            router.get("/user").mock(
                return_value=httpx.Response(401, json={"message": "Bad credentials"})
            )
            assert await client.session.check_credential("ghp_bad") is CredentialCheck.REJECTED
            assert await client.session.validate_credential("ghp_bad") is False

    @pytest.mark.asyncio
    async def test_unreachable(self, client):
        """No answer means unreachable, and validate says False."""
        with respx.mock(base_url=API_URL) as router:
            router.get("/user").mock(side_effect=httpx.ConnectError("offline"))
            check = await client.session.check_credential("ghp_any")
            assert check is CredentialCheck.UNREACHABLE
            assert await client.session.validate_credential("ghp_any") is False


class TestLogin:
    """Tests for login and logout."""

    @pytest.mark.asyncio
    async def test_empty_token_makes_no_request(self, client):
        """A blank token fails before any network call."""
        with respx.mock(base_url=API_URL, assert_all_called=False) as router:
            route = router.get("/user")
            result = await client.session.login("   ")

        assert result.success is False
        assert result.error == EMPTY_TOKEN_MESSAGE
        assert route.call_count == 0

    @pytest.mark.asyncio
    async def test_successful_login_persists(self, client, sample_user_response):
        """A valid token should be stored and sent afterwards."""
        with respx.mock(base_url=API_URL) as router:
            router.get("/user").mock(return_value=httpx.Response(200, json=sample_user_response))
            route = router.get("/users/octocat").mock(
                return_value=httpx.Response(200, json=sample_user_response)
            )

            result = await client.session.login("  ghp_good \n")
            await client.users.get("octocat")

        assert result.success is True
        assert result.error is None
        assert await client.session.is_logged_in() is True

        credential = await client.store.get_auth()
        assert credential is not None
        assert credential.access_token == "ghp_good"
        assert credential.token_type == "bearer"
        assert route.calls.last.request.headers["Authorization"] == "Bearer ghp_good"

    @pytest.mark.asyncio
    async def test_invalid_token(self, client):
        """A rejected token should not be stored."""
        with respx.mock(base_url=API_URL) as router:
            router.get("/user").mock(
                return_value=httpx.Response(401, json={"message": "Bad credentials"})
            )
            result = await client.session.login("ghp_bad")

        assert result.success is False
        assert result.error == INVALID_TOKEN_MESSAGE
        assert await client.session.is_logged_in() is False

    @pytest.mark.asyncio
    async def test_unreachable_login(self, client):
        """A network failure should say so instead of blaming the token."""
        with respx.mock(base_url=API_URL) as router:
            router.get("/user").mock(side_effect=httpx.ConnectError("offline"))
            result = await client.session.login("ghp_any")

        assert result.success is False
        assert result.error == UNREACHABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_logout_is_idempotent(self, client, sample_user_response):
        """Logging out twice should leave the session logged out."""
        with respx.mock(base_url=API_URL) as router:
            router.get("/user").mock(return_value=httpx.Response(200, json=sample_user_response))
            await client.session.login("ghp_good")

        await client.session.logout()
        await client.session.logout()

        assert await client.session.is_logged_in() is False
        assert await client.session.get_credential() is None

    @pytest.mark.asyncio
    async def test_login_survives_restart(self, config, sample_user_response):
        """A new client on the same database should still be logged in."""
        async with GitHubClient(config) as first:
            with respx.mock(base_url=API_URL) as router:
                router.get("/user").mock(
                    return_value=httpx.Response(200, json=sample_user_response)
                )
                await first.session.login("ghp_good")

        async with GitHubClient(config) as second:
            assert await second.session.is_logged_in() is True

    @pytest.mark.asyncio
    async def test_memory_fallback_without_storage(self, config, tmp_path, sample_user_response):
        """Without a usable store the login lasts for the session only."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file")
        broken = config.with_overrides(db_path=str(blocker / "browser.db"))

        async with GitHubClient(broken) as client:
            with respx.mock(base_url=API_URL) as router:
                router.get("/user").mock(
                    return_value=httpx.Response(200, json=sample_user_response)
                )
                route = router.get("/users/octocat").mock(
                    return_value=httpx.Response(200, json=sample_user_response)
                )
                result = await client.session.login("ghp_mem")
                await client.users.get("octocat")

            assert result.success is True
            assert await client.session.is_logged_in() is True
            assert route.calls.last.request.headers["Authorization"] == "Bearer ghp_mem"

            await client.session.logout()
            assert await client.session.is_logged_in() is False
