"""
Base Storage

Shared asyncpg pool handling for the portal tables.
"""
import asyncio
import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, List, Optional

import asyncpg

logger = logging.getLogger("byte.storage")


async def _setup_connection(conn: asyncpg.Connection) -> None:
    # jsonb columns (post attachments) round-trip as Python lists/dicts
    await conn.set_type_codec(
        "jsonb",
        encoder=lambda value: json.dumps(value, ensure_ascii=False),
        decoder=json.loads,
        schema="pg_catalog",
    )


class BaseStorage:
    """
    PostgreSQL storage base.

    Subclasses only write queries; pool lifecycle, retries and
    connection setup live here.
    """

    POOL_MIN_SIZE = 1
    POOL_MAX_SIZE = 5
    COMMAND_TIMEOUT = 30
    CONNECT_ATTEMPTS = 3
    RETRY_DELAY = 1.0

    def __init__(self, postgres_dsn: str):
        self.dsn = postgres_dsn
        self.pool: Optional[asyncpg.Pool] = None

    @property
    def name(self) -> str:
        return type(self).__name__

    async def init(self):
        """Open the pool, retrying while the database comes up"""
        if self.pool is not None:
            return

        started = time.monotonic()
        for attempt in range(1, self.CONNECT_ATTEMPTS + 1):
            try:
                pool = await asyncpg.create_pool(
                    self.dsn,
                    min_size=self.POOL_MIN_SIZE,
                    max_size=self.POOL_MAX_SIZE,
                    command_timeout=self.COMMAND_TIMEOUT,
                    init=_setup_connection,
                )
                await pool.fetchval("SELECT 1")
                self.pool = pool
                elapsed = (time.monotonic() - started) * 1000
                logger.info(f"{self.name} connected in {elapsed:.0f}ms (attempt {attempt})")
                return
            except (OSError, asyncpg.PostgresError) as e:
                logger.warning(f"{self.name} connect attempt {attempt}/{self.CONNECT_ATTEMPTS} failed: {e}")
                if attempt < self.CONNECT_ATTEMPTS:
                    await asyncio.sleep(self.RETRY_DELAY * attempt)

        raise ConnectionError(f"{self.name}: PostgreSQL unreachable after {self.CONNECT_ATTEMPTS} attempts")

    async def close(self):
        """Close the pool"""
        if self.pool is not None:
            await self.pool.close()
            self.pool = None
            logger.info(f"{self.name} closed")

    @asynccontextmanager
    async def connection(self):
        if self.pool is None:
            raise RuntimeError(f"{self.name} used before init()")
        async with self.pool.acquire() as conn:
            yield conn

    async def execute(self, query: str, *args) -> str:
        async with self.connection() as conn:
            return await conn.execute(query, *args)

    async def fetch(self, query: str, *args) -> List[asyncpg.Record]:
        async with self.connection() as conn:
            return await conn.fetch(query, *args)

    async def fetchrow(self, query: str, *args) -> Optional[asyncpg.Record]:
        async with self.connection() as conn:
            return await conn.fetchrow(query, *args)

    async def fetchval(self, query: str, *args) -> Any:
        async with self.connection() as conn:
            return await conn.fetchval(query, *args)
