"""Async SQLite connection provider with pooling and schema bootstrap.

Wraps `aiosqlite` connections, creates the customization tables on first use,
and hands out pooled connections through an async context manager.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

import aiosqlite

from weapon_paints.config import DatabaseSettings

CURRENT_SCHEMA_VERSION = 1
MEMORY_POOL_CAPACITY = 10

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS wp_player_knife (
    steamid TEXT PRIMARY KEY,
    knife TEXT
);

CREATE TABLE IF NOT EXISTS wp_player_gloves (
    steamid TEXT PRIMARY KEY,
    weapon_defindex INTEGER
);

CREATE TABLE IF NOT EXISTS wp_player_skins (
    steamid TEXT NOT NULL,
    weapon_defindex INTEGER NOT NULL,
    weapon_paint_id INTEGER,
    weapon_wear REAL,
    weapon_seed INTEGER,
    PRIMARY KEY (steamid, weapon_defindex)
);
"""


class Database:
    """Pool of aiosqlite connections for one database file."""

    def __init__(self, path: str, *, pool_size: int = 5, pool_timeout: float = 30.0):
        self.path = path
        self.pool_size = pool_size
        self.pool_timeout = pool_timeout
        self._pool: asyncio.Queue[aiosqlite.Connection] | None = None
        self._pool_lock = asyncio.Lock()
        self._pool_initialized = False

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "Database":
        return cls(settings.path, pool_size=settings.pool_size, pool_timeout=settings.pool_timeout)

    @property
    def is_memory(self) -> bool:
        return self.path == ":memory:"

    async def _open_connection(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(
            self.path,
            timeout=self.pool_timeout,
            cached_statements=128,
        )
        conn.row_factory = aiosqlite.Row
        return conn

    async def _apply_schema(self, conn: aiosqlite.Connection) -> None:
        cursor = await conn.execute("PRAGMA user_version;")
        row = await cursor.fetchone()
        current_version = row[0] if row else 0

        if current_version == 0:
            logger.info("Applying customization schema to %s", self.path)
            await conn.executescript(SCHEMA_SQL)
            await conn.execute(f"PRAGMA user_version = {CURRENT_SCHEMA_VERSION};")
            await conn.commit()
            logger.info("Schema applied, version set to %d", CURRENT_SCHEMA_VERSION)
        elif current_version < CURRENT_SCHEMA_VERSION:
            logger.info(
                "Upgrading schema from version %d to %d",
                current_version,
                CURRENT_SCHEMA_VERSION,
            )
            await conn.executescript(SCHEMA_SQL)
            await conn.execute(f"PRAGMA user_version = {CURRENT_SCHEMA_VERSION};")
            await conn.commit()
        else:
            logger.info("Database schema is up-to-date (version %d)", current_version)

    async def _initialize_pool(self) -> None:
        # ":memory:" gives every connection its own empty database, so the
        # pool holds one shared connection handed out repeatedly.
        if self.is_memory:
            conn = await self._open_connection()
            await self._apply_schema(conn)

            self._pool = asyncio.Queue(maxsize=MEMORY_POOL_CAPACITY)
            for _ in range(MEMORY_POOL_CAPACITY):
                await self._pool.put(conn)
            self._pool_initialized = True
            logger.info(
                "Database connection pool initialized with a shared in-memory connection (capacity: %d)",
                MEMORY_POOL_CAPACITY,
            )
            return

        try:
            async with aiosqlite.connect(self.path, timeout=self.pool_timeout) as conn:
                await self._apply_schema(conn)
        except Exception as e:
            logger.debug("Failed to initialize database schema: %s", e)
            raise

        q: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=self.pool_size)
        for i in range(self.pool_size):
            try:
                await q.put(await self._open_connection())
                logger.debug("Opened connection %d/%d", i + 1, self.pool_size)
            except Exception as e:
                logger.debug("Error opening database connection [%d]: %s", i + 1, e)
                raise
        self._pool = q
        self._pool_initialized = True
        logger.info("Database connection pool initialized with size %d", self.pool_size)

    async def initialize(self) -> None:
        """Create the pool and schema if that has not happened yet."""
        if not self._pool_initialized:
            async with self._pool_lock:
                if not self._pool_initialized:
                    logger.info("Initializing database connection pool")
                    await self._initialize_pool()

    @asynccontextmanager
    async def get_connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Acquire a database connection from the pool.

        Usage:
            async with database.get_connection() as conn:
                await conn.execute(...)
                await conn.commit()
        """
        await self.initialize()

        if self._pool is None:
            raise RuntimeError("Connection pool is not initialized")
        pool = self._pool
        try:
            conn = await asyncio.wait_for(pool.get(), timeout=self.pool_timeout)
            logger.debug("Acquired database connection from pool")
        except asyncio.TimeoutError:
            logger.debug("Timed out waiting for database connection")
            raise RuntimeError("Database connection timeout")

        # Recreate connections that went stale (not possible for the shared in-memory one).
        if not self.is_memory:
            try:
                await conn.execute("SELECT 1;")
            except Exception as e:
                logger.warning("Database connection is invalid, recreating new connection: %s", e)
                try:
                    await conn.close()
                except Exception as exc:  # pragma: no cover - cleanup best effort
                    logger.debug("Error closing stale DB connection: %s", exc)
                try:
                    conn = await self._open_connection()
                except Exception:
                    # Keep the pool at full size; the next acquire retries the reconnect.
                    await pool.put(conn)
                    raise

        start_time = time.monotonic()
        try:
            yield conn
        except Exception as e:
            # An uncommitted write must not linger on a pooled connection.
            logger.debug("Rolling back after database operation error: %s", e)
            try:
                await conn.rollback()
            except Exception as exc:
                logger.debug("Rollback failed: %s", exc)
            raise
        finally:
            elapsed = time.monotonic() - start_time
            logger.debug("Database connection held for %.3f seconds", elapsed)
            pool.put_nowait(conn)
            logger.debug("Returned database connection to pool")

    async def close(self) -> None:
        """Close all connections in the pool and reset its state."""
        if self._pool is None:
            return

        closed = set()
        while not self._pool.empty():
            conn = self._pool.get_nowait()
            if id(conn) in closed:
                continue
            closed.add(id(conn))
            try:
                await conn.close()
            except Exception as exc:  # pragma: no cover - cleanup best effort
                logger.warning("Error closing DB connection: %s", exc)

        self._pool = None
        self._pool_initialized = False
        logger.info("Database connection pool closed")
