"""Key-value stores the repositories persist JSON documents into.

Values are JSON text, one document per key, mirroring the on-device store
the mobile app uses.
"""

import asyncpg
from typing import Dict, Optional, Protocol


class KeyValueStore(Protocol):
    """Interface for the backing store.

    Any class with matching async method signatures satisfies this protocol.
    """

    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Create or overwrite the value at key."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key. Returns True if it existed."""
        ...


class InMemoryKeyValueStore:
    """Dict-backed store. Used in tests and when no DATABASE_URL is set."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class PostgresKeyValueStore:
    """Store backed by the app.kv_store table."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get(self, key: str) -> Optional[str]:
        async with self._pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT value FROM app.kv_store WHERE key = $1", key
            )

    async def set(self, key: str, value: str) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                """INSERT INTO app.kv_store (key, value)
                   VALUES ($1, $2)
                   ON CONFLICT (key) DO UPDATE
                   SET value = EXCLUDED.value, updated_at = now()""",
                key, value,
            )

    async def delete(self, key: str) -> bool:
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM app.kv_store WHERE key = $1", key
            )
            return result == "DELETE 1"
