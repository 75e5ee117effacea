import asyncpg
from pathlib import Path
from typing import Optional

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


class DatabasePool:
    """Owns the asyncpg pool behind the key-value store.

    Created in the FastAPI lifespan when DATABASE_URL is set; without it the
    app runs on the in-memory store and this pool is never opened.
    """

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(
        self,
        dsn: str,
        *,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30.0,
    ) -> None:
        """Open the pool for a postgres:// DSN. Safe to call twice."""
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(
            dsn=dsn,
            min_size=min_size,
            max_size=max_size,
            command_timeout=command_timeout,
        )

    async def initialize_schema(self) -> None:
        """Run `database/schema.sql` (idempotent CREATE ... IF NOT EXISTS)."""
        sql_text = SCHEMA_PATH.read_text(encoding="utf-8")
        async with self.pool.acquire() as conn:
            await conn.execute(sql_text)

    async def close(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database pool is not open; set DATABASE_URL and start the app")
        return self._pool

    async def health_check(self) -> bool:
        """True if the pool can answer SELECT 1."""
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (asyncpg.PostgresError, OSError, RuntimeError):
            return False
        return True


db = DatabasePool()
