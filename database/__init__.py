from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.kv_store import KeyValueStore, InMemoryKeyValueStore, PostgresKeyValueStore
from database.repositories import ScoreRepository, VenueContextRepository
from database.exceptions import DatabaseError, NotFoundError

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "PostgresKeyValueStore",
    "ScoreRepository",
    "VenueContextRepository",
    "DatabaseError",
    "NotFoundError",
]
