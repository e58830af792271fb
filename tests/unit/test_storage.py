"""Unit tests for the persistent store."""

from __future__ import annotations

import asyncio

import aiosqlite
import pytest

from github_browser.exceptions import StorageError
from github_browser.models import CacheEntry, Credential
from github_browser.storage import SCHEMA_VERSION, Store


class TestAuthSlot:
    """Tests for the single credential slot."""

    @pytest.mark.asyncio
    async def test_empty_store_has_no_credential(self, store):
        """A fresh store should be logged out."""
        assert await store.get_auth() is None

    @pytest.mark.asyncio
    async def test_round_trip(self, store):
        """A stored credential should read back unchanged."""
        credential = Credential(access_token="ghp_abc", scope="repo", created_at=1700000000.5)
        await store.put_auth(credential)

        assert await store.get_auth() == credential

    @pytest.mark.asyncio
    async def test_put_replaces(self, store):
        """There is only ever one credential."""
        await store.put_auth(Credential(access_token="first", created_at=1.0))
        await store.put_auth(Credential(access_token="second", created_at=2.0))

        stored = await store.get_auth()
        assert stored is not None
        assert stored.access_token == "second"

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, store):
        """Deleting twice should not fail."""
        await store.put_auth(Credential(access_token="ghp_abc", created_at=1.0))
        await store.delete_auth()
        await store.delete_auth()

        assert await store.get_auth() is None

    @pytest.mark.asyncio
    async def test_survives_reopen(self, db_path):
        """The credential should persist across store instances."""
        async with Store(db_path) as first:
            await first.put_auth(Credential(access_token="ghp_keep", created_at=1.0))

        async with Store(db_path) as second:
            stored = await second.get_auth()

        assert stored is not None
        assert stored.access_token == "ghp_keep"


class TestCache:
    """Tests for the cache table."""

    @pytest.mark.asyncio
    async def test_round_trip(self, store):
        """A live entry should read back with its payload."""
        entry = CacheEntry(key="k", data={"a": [1, 2, "x"]}, expires_at=1000.0)
        await store.put_cache(entry)

        loaded = await store.get_cache("k", now=999.0)
        assert loaded == entry

    @pytest.mark.asyncio
    async def test_missing_key(self, store):
        """An unknown key should be a miss."""
        assert await store.get_cache("nope", now=0.0) is None

    @pytest.mark.asyncio
    async def test_expired_entry_deleted_on_read(self, store):
        """A dead entry should be a miss and be removed."""
        await store.put_cache(CacheEntry(key="k", data=1, expires_at=1000.0))

        assert await store.get_cache("k", now=1000.5) is None
        assert await store.count_cache() == 0

    @pytest.mark.asyncio
    async def test_sweep_removes_only_dead_entries(self, store):
        """sweep_expired should keep live entries."""
        now = 1_000_000.0
        await store.put_cache(CacheEntry(key="old", data="a", expires_at=now - 10))
        await store.put_cache(CacheEntry(key="new", data="b", expires_at=now + 10))

        removed = await store.sweep_expired(now)

        assert removed == 1
        assert await store.get_cache("old", now=now - 20) is None
        live = await store.get_cache("new", now=now)
        assert live is not None
        assert live.data == "b"

    @pytest.mark.asyncio
    async def test_clear_all(self, store):
        """clear_all_cache should remove everything and report the count."""
        for i in range(3):
            await store.put_cache(CacheEntry(key=f"k{i}", data=i, expires_at=1e12))

        assert await store.clear_all_cache() == 3
        assert await store.count_cache() == 0

    @pytest.mark.asyncio
    async def test_delete_single(self, store):
        """delete_cache should remove one entry."""
        await store.put_cache(CacheEntry(key="a", data=1, expires_at=1e12))
        await store.put_cache(CacheEntry(key="b", data=2, expires_at=1e12))

        await store.delete_cache("a")

        assert await store.count_cache() == 1

    @pytest.mark.asyncio
    async def test_unserializable_payload(self, store):
        """A payload that isn't JSON should raise StorageError."""
        with pytest.raises(StorageError):
            await store.put_cache(CacheEntry(key="k", data=object(), expires_at=1e12))

    @pytest.mark.asyncio
    async def test_auth_and_cache_are_independent(self, store):
        """Clearing the cache should not log out."""
        await store.put_auth(Credential(access_token="ghp_abc", created_at=1.0))
        await store.put_cache(CacheEntry(key="k", data=1, expires_at=1e12))

        await store.clear_all_cache()

        assert await store.get_auth() is not None


class TestLifecycle:
    """Tests for opening, migration and failure."""

    @pytest.mark.asyncio
    async def test_schema_version(self, store, db_path):
        """A new database should be at the current schema version."""
        async with aiosqlite.connect(db_path) as db:
            cursor = await db.execute("PRAGMA user_version")
            row = await cursor.fetchone()
        assert row[0] == SCHEMA_VERSION

    @pytest.mark.asyncio
    async def test_migration_drops_pkce(self, db_path):
        """Upgrading a version 1 database should drop the pkce table."""
        async with aiosqlite.connect(db_path) as db:
            await db.execute("CREATE TABLE pkce (key TEXT PRIMARY KEY, verifier TEXT)")
            await db.execute("PRAGMA user_version = 1")
            await db.commit()

        async with Store(db_path) as store:
            await store.put_cache(CacheEntry(key="k", data=1, expires_at=1e12))

        async with aiosqlite.connect(db_path) as db:
            cursor = await db.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            tables = {row[0] for row in await cursor.fetchall()}
            cursor = await db.execute("SELECT name FROM sqlite_master WHERE type = 'index'")
            indexes = {row[0] for row in await cursor.fetchall()}

        assert "pkce" not in tables
        assert {"auth", "cache"} <= tables
        assert "by_expiry" in indexes

    @pytest.mark.asyncio
    async def test_concurrent_open_shares_connection(self, db_path):
        """Callers racing to open should get the same connection."""
        store = Store(db_path)
        try:
            first, second = await asyncio.gather(store.open(), store.open())
            assert first is second
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_unopenable_path_raises_storage_error(self, tmp_path):
        """A path under a regular file can't be opened."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = Store(blocker / "browser.db")

        with pytest.raises(StorageError):
            await store.get_auth()

        # Still failing, not stuck on the first attempt
        with pytest.raises(StorageError):
            await store.get_cache("k")

        await store.close()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, db_path):
        """close() should be safe to call repeatedly."""
        store = Store(db_path)
        await store.open()
        await store.close()
        await store.close()
        assert "closed" in repr(store)
