"""Persistent local storage for credentials and cached responses.

A single SQLite file holds two independent tables:

- ``auth``: at most one row, keyed ``"current"``, holding the login.
- ``cache``: API payloads keyed by logical request, indexed by expiry so
  dead entries can be swept in bulk.

The database is opened lazily on first use. The schema version lives in
``PRAGMA user_version`` and is migrated forward on open.

Example:
    >>> async with Store("browser.db") as store:
    ...     await store.put_cache(CacheEntry(key="k", data={"a": 1}, expires_at=time.time() + 60))
    ...     entry = await store.get_cache("k")

"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from pathlib import Path

import aiosqlite

from github_browser.exceptions import StorageError
from github_browser.models import CacheEntry, Credential

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2
AUTH_SLOT = "current"

# Errors that mean the database can't be used right now
_STORAGE_FAULTS = (aiosqlite.Error, OSError, ValueError)


class Store:
    """Async key-value store backed by one SQLite file.

    One ``Store`` owns one connection. ``open()`` may be awaited by many
    callers at once; they all share the same connection attempt.

    Attributes:
        path: Database file location.

    """

    __slots__ = ("_db", "_opening", "path")

    def __init__(self, path: str | Path) -> None:
        """Initialize the store without touching the filesystem.

        Args:
            path: Path of the SQLite database file.

        """
        self.path = Path(path).expanduser()
        self._db: aiosqlite.Connection | None = None
        self._opening: asyncio.Task[aiosqlite.Connection] | None = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def open(self) -> aiosqlite.Connection:
        """Open the database, migrating the schema if needed.

        Returns:
            The live connection.

        Raises:
            StorageError: If the database can't be opened or migrated.

        """
        if self._db is not None:
            return self._db

        if self._opening is None:
            self._opening = asyncio.create_task(self._connect())

        try:
            self._db = await asyncio.shield(self._opening)
        except StorageError:
            # Let a later call try again
            self._opening = None
            raise
        return self._db

    async def _connect(self) -> aiosqlite.Connection:
        """Connect and bring the schema up to date."""
        db: aiosqlite.Connection | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            db = await aiosqlite.connect(self.path)
            await self._migrate(db)
        except _STORAGE_FAULTS as e:
            if db is not None:
                await db.close()
            raise StorageError(f"Cannot open database {self.path}: {e}", original_error=e) from e

        logger.debug("Opened database %s (schema v%d)", self.path, SCHEMA_VERSION)
        return db

    @staticmethod
    async def _migrate(db: aiosqlite.Connection) -> None:
        """Upgrade the schema to ``SCHEMA_VERSION``."""
        cursor = await db.execute("PRAGMA user_version")
        row = await cursor.fetchone()
        old_version = row[0] if row else 0

        if old_version >= SCHEMA_VERSION:
            return

        await db.execute("""
            CREATE TABLE IF NOT EXISTS auth (
                key TEXT PRIMARY KEY,
                access_token TEXT NOT NULL,
                token_type TEXT NOT NULL,
                scope TEXT NOT NULL DEFAULT '',
                created_at REAL NOT NULL
            )
        """)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS cache (
                key TEXT PRIMARY KEY,
                data TEXT NOT NULL,
                expires_at REAL NOT NULL
            )
        """)
        await db.execute("CREATE INDEX IF NOT EXISTS by_expiry ON cache(expires_at)")

        # v1 stored OAuth PKCE verifiers; token login made them obsolete
        if old_version < 2:
            await db.execute("DROP TABLE IF EXISTS pkce")

        await db.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        await db.commit()

        logger.info("Migrated database schema v%d -> v%d", old_version, SCHEMA_VERSION)

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._opening is not None and self._db is None:
            # An open attempt is still running; wait for it so nothing leaks
            try:
                self._db = await self._opening
            except StorageError:
                pass
        self._opening = None

        if self._db is not None:
            db, self._db = self._db, None
            await db.close()

    async def __aenter__(self) -> Store:
        """Open the store on entering the context."""
        await self.open()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Close the store on leaving the context."""
        await self.close()

    # =========================================================================
    # Auth slot
    # =========================================================================

    async def put_auth(self, credential: Credential) -> None:
        """Store the credential, replacing any existing one."""
        db = await self.open()
        try:
            await db.execute(
                """
                INSERT OR REPLACE INTO auth (key, access_token, token_type, scope, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    AUTH_SLOT,
                    credential.access_token,
                    credential.token_type,
                    credential.scope,
                    credential.created_at,
                ),
            )
            await db.commit()
        except _STORAGE_FAULTS as e:
            raise StorageError(f"Cannot save credential: {e}", original_error=e) from e

    async def get_auth(self) -> Credential | None:
        """Return the stored credential, or None if logged out."""
        db = await self.open()
        try:
            cursor = await db.execute(
                "SELECT access_token, token_type, scope, created_at FROM auth WHERE key = ?",
                (AUTH_SLOT,),
            )
            row = await cursor.fetchone()
        except _STORAGE_FAULTS as e:
            raise StorageError(f"Cannot read credential: {e}", original_error=e) from e

        if row is None:
            return None
        return Credential(
            access_token=row[0],
            token_type=row[1],
            scope=row[2],
            created_at=row[3],
        )

    async def delete_auth(self) -> None:
        """Remove the stored credential if there is one."""
        db = await self.open()
        try:
            await db.execute("DELETE FROM auth WHERE key = ?", (AUTH_SLOT,))
            await db.commit()
        except _STORAGE_FAULTS as e:
            raise StorageError(f"Cannot delete credential: {e}", original_error=e) from e

    # =========================================================================
    # Response cache
    # =========================================================================

    async def put_cache(self, entry: CacheEntry) -> None:
        """Insert or replace a cache entry."""
        db = await self.open()
        try:
            await db.execute(
                "INSERT OR REPLACE INTO cache (key, data, expires_at) VALUES (?, ?, ?)",
                (entry.key, json.dumps(entry.data), entry.expires_at),
            )
            await db.commit()
        except (*_STORAGE_FAULTS, TypeError) as e:
            raise StorageError(f"Cannot write cache entry: {e}", original_error=e) from e

    async def get_cache(self, key: str, now: float | None = None) -> CacheEntry | None:
        """Look up a live cache entry.

        An entry found dead at ``now`` is deleted and reported as a miss.

        Args:
            key: Cache key.
            now: Current Unix time (defaults to the wall clock).

        Returns:
            The entry if present and not expired, None otherwise.

        """
        now = time.time() if now is None else now
        db = await self.open()
        try:
            cursor = await db.execute("SELECT data, expires_at FROM cache WHERE key = ?", (key,))
            row = await cursor.fetchone()
            if row is None:
                return None

            entry = CacheEntry(key=key, data=json.loads(row[0]), expires_at=row[1])
            if entry.is_expired(now):
                await db.execute("DELETE FROM cache WHERE key = ?", (key,))
                await db.commit()
                logger.debug("Cache expired: %s", key[:80])
                return None
        except _STORAGE_FAULTS as e:
            raise StorageError(f"Cannot read cache entry: {e}", original_error=e) from e

        return entry

    async def delete_cache(self, key: str) -> None:
        """Remove a single cache entry."""
        db = await self.open()
        try:
            await db.execute("DELETE FROM cache WHERE key = ?", (key,))
            await db.commit()
        except _STORAGE_FAULTS as e:
            raise StorageError(f"Cannot delete cache entry: {e}", original_error=e) from e

    async def clear_all_cache(self) -> int:
        """Remove every cache entry.

        Returns:
            Number of entries removed.

        """
        db = await self.open()
        try:
            cursor = await db.execute("DELETE FROM cache")
            await db.commit()
        except _STORAGE_FAULTS as e:
            raise StorageError(f"Cannot clear cache: {e}", original_error=e) from e

        logger.debug("Cache cleared: %d entries", cursor.rowcount)
        return cursor.rowcount

    async def sweep_expired(self, now: float | None = None) -> int:
        """Delete every entry with ``expires_at <= now``.

        Live entries are left untouched.

        Args:
            now: Sweep time as Unix timestamp (defaults to the wall clock).

        Returns:
            Number of entries removed.

        """
        now = time.time() if now is None else now
        db = await self.open()
        try:
            cursor = await db.execute("DELETE FROM cache WHERE expires_at <= ?", (now,))
            await db.commit()
        except _STORAGE_FAULTS as e:
            raise StorageError(f"Cannot sweep cache: {e}", original_error=e) from e

        if cursor.rowcount:
            logger.debug("Swept %d expired cache entries", cursor.rowcount)
        return cursor.rowcount

    async def count_cache(self) -> int:
        """Return the number of stored cache entries, live or not."""
        db = await self.open()
        try:
            cursor = await db.execute("SELECT COUNT(*) FROM cache")
            row = await cursor.fetchone()
        except _STORAGE_FAULTS as e:
            raise StorageError(f"Cannot count cache entries: {e}", original_error=e) from e
        return int(row[0]) if row else 0

    def __repr__(self) -> str:
        """Return a string representation."""
        state = "open" if self._db is not None else "closed"
        return f"Store(path={str(self.path)!r}, {state})"
